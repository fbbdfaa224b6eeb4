from typing import Optional

from ..formats.format_config import CommentConfig
from .cascade import match_one


class CommentExtractor:
    """
    Общий комментарий заказа.

    Приоритет:
    1. Фиксированные правила (паттерн или ключевое слово -> готовая фраза)
    2. Условия партнёра: каждое найденное ключевое слово добавляет фразу
    3. Метки (Payment terms, Instructions) через " | " - только при признаке
       загрузки (FTL или LDM), если формат этого требует
    """

    def extract(self, text: str, config: CommentConfig, has_load_signal: bool = False) -> str:
        upper = text.upper()

        for rule in config.fixed:
            if rule.pattern is not None and rule.pattern.search(text):
                return rule.text
            if rule.keyword and rule.keyword.upper() in upper:
                return rule.text

        terms = [term.text for term in config.terms if term.keyword.upper() in upper]
        if terms:
            return " ".join(terms)

        if config.labels and (has_load_signal or not config.labels_require_load):
            return self._collect_labels(text, config) or ""

        return ""

    def _collect_labels(self, text: str, config: CommentConfig) -> Optional[str]:
        bits = []
        for label in config.labels:
            value = match_one(text, [label.pattern])
            if value:
                bits.append(f"{label.label}: {value}")
        return " | ".join(bits) if bits else None
