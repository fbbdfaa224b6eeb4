"""
Fallback chain: упорядоченный список стратегий извлечения поля.

Стратегия - чистая функция (text) -> Optional[value].
Первая стратегия, вернувшая не None, выигрывает; остальные не вызываются.
"""

import re
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from loguru import logger

T = TypeVar("T")

Strategy = Callable[[str], Optional[T]]


def first_match(strategies: Sequence[Tuple[str, Strategy]], text: str, component: str = "Cascade") -> Optional[T]:
    """
    Выполняет стратегии по порядку до первого успеха.

    Args:
        strategies: Пары (имя стратегии, функция)
        text: Текст, к которому применяются стратегии
        component: Тег для логов
    """
    for name, strategy in strategies:
        value = strategy(text)
        if value is not None:
            logger.debug(f"[{component}] Стратегия '{name}' -> {value!r}")
            return value
        logger.trace(f"[{component}] Стратегия '{name}' не сработала")
    return None


def group_value(match: re.Match) -> str:
    """Первая группа, если она есть, иначе весь match."""
    value = match.group(1) if match.re.groups else match.group(0)
    return (value or "").strip()


def match_one(text: str, patterns: List[re.Pattern]) -> Optional[str]:
    """Первое непустое совпадение из списка паттернов (по приоритету паттернов)."""
    for pattern in patterns:
        m = pattern.search(text)
        if m:
            value = group_value(m)
            if value:
                return value
    return None


def pattern_strategy(pattern: re.Pattern, convert: Callable[[str], Optional[T]] = None) -> Strategy:
    """Стратегия из regex: первая группа, опционально через конвертер-валидатор."""
    def strategy(text: str):
        m = pattern.search(text)
        if not m:
            return None
        value = group_value(m)
        if not value:
            return None
        return convert(value) if convert else value
    return strategy
