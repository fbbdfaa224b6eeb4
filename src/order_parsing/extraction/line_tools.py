"""Общие проверки строк документа, которые нужны нескольким экстракторам."""

import re
from typing import Iterable, List


def is_header_line(line: str, tokens: Iterable[str]) -> bool:
    """Строка начинается с токена заголовка блока (без учёта регистра)."""
    upper = line.strip().upper()
    return bool(upper) and any(upper.startswith(token) for token in tokens)


def matches_any(line: str, patterns: List[re.Pattern]) -> bool:
    return any(p.search(line) for p in patterns)


def is_mostly_digits(line: str, ratio: float = 0.6) -> bool:
    """Строка-метаданные: цифр не меньше max(3, 60% длины)."""
    digits = len(re.sub(r"\D", "", line))
    return bool(line) and digits >= max(3, int(len(line) * ratio))


def collapse_spaces(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()
