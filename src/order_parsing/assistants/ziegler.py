"""
Ziegler - букинги Ziegler UK Ltd.

Характеристики:
- Блоки COLLECTION / DELIVERY, компания в строке заголовка
- Адрес до пустой строки, только строки с адресными признаками
- Британские суммы: запятая - разделитель тысяч
- Слоты BOOKED- 09:30 AM и 0800-1200
- Комментарий из условий BIFA / POD
"""

from .base import FormatExtractor


class ZieglerAssistant(FormatExtractor):
    """Экстрактор формата Ziegler."""

    FORMAT_NAME = "ziegler"
