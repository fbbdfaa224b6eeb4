"""
Transalliance - заявки Transalliance TS Ltd.

Характеристики:
- Блоки LOADING / DELIVERY
- Адрес и компания только после строки REFERENCE
- Референс: явные метки, иначе 7-8 значный токен (приоритет 1xxxxxx)
- Номер груза OT попадает в заметки погрузки
- Комментарий: фиксированный текст про коммерческого отправителя
"""

from .base import FormatExtractor


class TransallianceAssistant(FormatExtractor):
    """Экстрактор формата Transalliance."""

    FORMAT_NAME = "transalliance"
