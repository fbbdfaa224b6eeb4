"""
Weight Extractor - вес груза в килограммах.

Два уровня:
- Вес остановки: паттерны формата по тексту блока ("Weight: 12 000", "12000 KGS")
- Вес документа: каскад fallback-стратегий, если ни в одном блоке веса нет

Каскад документа (первая успешная стратегия выигрывает):
a) метка weight в начале строки (нормализованный текст)
b) то же по сырому тексту
c) строка со словом weight и первым числом >= 1000
d) строка сразу после голой метки weight / kgs
e) числа с группами тысяч (25 000, 25.000, 25,000, 25000), с единицей KG приоритетнее
f) тонны (t, tons, tonnes, mt) x 1000
"""

import re
from typing import List, Optional

from loguru import logger

from config.settings import MIN_DOCUMENT_WEIGHT_KG
from .cascade import first_match, group_value
from .money_parser import MoneyParser

# Число с группами тысяч или простое число с дробью
_NUMBER = r"\d{1,3}(?:[ \u00a0\u202f.,]\d{3})+(?:[.,]\d+)?|\d+(?:[.,]\d+)?"


class WeightExtractor:
    """Извлекает вес остановки и вес документа."""

    GROUPED_INT_RE = re.compile(r"^\d{1,3}(?:[.,]\d{3})+$")
    NUMBER_RE = re.compile(rf"(?<![\d.,])({_NUMBER})")

    LINE_LABEL_RE = re.compile(
        rf"^[^\S\n]*(?:total[^\S\n]*)?(?:gross[^\S\n]*)?weight\b[^\d\n]*({_NUMBER})",
        re.IGNORECASE | re.MULTILINE,
    )
    WEIGHT_WORD_RE = re.compile(r"\bweight\b", re.IGNORECASE)
    BARE_LABEL_RE = re.compile(r"^(?:total\s*)?(?:gross\s*)?(?:weight|kgs?)\s*[:.]?\s*$", re.IGNORECASE)
    GROUPED_RE = re.compile(
        r"(?<![\d.,/])(\d{2,3}(?:[ .,]\d{3})+)(?:[.,]\d{2})?(?![\d/])(\s*KGS?\b)?",
        re.IGNORECASE,
    )
    # Число без групп считается весом только с единицей KG (индексы, номера OT)
    PLAIN_KG_RE = re.compile(r"(?<![\d.,/])(\d{4,6})(?:[.,]\d{1,2})?\s*KGS?\b", re.IGNORECASE)
    TONS_RE = re.compile(r"(?<![\d.,])(\d+(?:[.,]\d+)?)\s*(?:tonnes?|tons?|mt|t)\b", re.IGNORECASE)

    def __init__(self, min_document_weight: float = MIN_DOCUMENT_WEIGHT_KG):
        self.min_document_weight = min_document_weight
        self.money_parser = MoneyParser()

    def parse_weight(self, raw: Optional[str]) -> Optional[float]:
        """
        Строка веса -> кг.

        Группы тысяч (25.000, 25,000) - целое число; иначе правила денежного парсера.
        None для пустого или нулевого значения.
        """
        if not raw:
            return None
        v = re.sub(r"\s+", "", raw)
        if self.GROUPED_INT_RE.match(v):
            value = float(re.sub(r"\D", "", v))
        else:
            value = self.money_parser.parse(v)
        return value if value > 0 else None

    def stop_weight(self, block_text: str, patterns: List[re.Pattern]) -> Optional[float]:
        """Вес остановки: первый паттерн формата с валидным числом."""
        for pattern in patterns:
            m = pattern.search(block_text)
            if not m:
                continue
            value = self.parse_weight(group_value(m))
            if value is not None:
                return value
        return None

    def document_weight(
        self, text: str, raw_text: str, cargo_number: Optional[str] = None
    ) -> Optional[float]:
        """
        Вес документа по каскаду a-f; None если ни одна стратегия не сработала.

        cargo_number - номер груза (OT), его цифры не принимаются за вес.
        """
        excluded = re.sub(r"\D", "", cargo_number or "")
        chain = [
            ("line_label", self._line_label),
            ("line_label_raw", lambda _: self._line_label(raw_text)),
            ("weight_line", self._weight_line),
            ("after_label", self._after_label),
            ("grouped_thousands", lambda t: self._grouped_thousands(t, excluded)),
            ("tons", self._tons),
        ]
        weight = first_match(chain, text, component="WeightExtractor")
        if weight is None:
            logger.debug("[WeightExtractor] Вес документа не найден")
        return weight

    def _line_label(self, text: str) -> Optional[float]:
        m = self.LINE_LABEL_RE.search(text or "")
        return self.parse_weight(m.group(1)) if m else None

    def _weight_line(self, text: str) -> Optional[float]:
        for line in text.split("\n"):
            if not self.WEIGHT_WORD_RE.search(line):
                continue
            for m in self.NUMBER_RE.finditer(line):
                value = self.parse_weight(m.group(1))
                if value is not None and value >= self.min_document_weight:
                    return value
        return None

    def _after_label(self, text: str) -> Optional[float]:
        lines = text.split("\n")
        for i, line in enumerate(lines):
            if not self.BARE_LABEL_RE.match(line.strip()):
                continue
            following = next((ln for ln in lines[i + 1:] if ln.strip()), "")
            m = self.NUMBER_RE.search(following)
            if m:
                value = self.parse_weight(m.group(1))
                if value is not None:
                    return value
        return None

    def _grouped_thousands(self, text: str, excluded: str = "") -> Optional[float]:
        with_unit, without_unit = [], []
        for m in self.GROUPED_RE.finditer(text):
            digits = re.sub(r"\D", "", m.group(1))
            if digits == excluded:
                continue
            (with_unit if m.group(2) else without_unit).append(float(digits))
        for m in self.PLAIN_KG_RE.finditer(text):
            if m.group(1) != excluded:
                with_unit.append(float(m.group(1)))

        candidates = with_unit or without_unit
        if not candidates:
            return None
        best = max(candidates)
        if best < self.min_document_weight:
            logger.trace(f"[WeightExtractor] Кандидат {best} меньше минимума")
            return None
        return best

    def _tons(self, text: str) -> Optional[float]:
        for m in self.TONS_RE.finditer(text):
            value = float(m.group(1).replace(",", ".")) * 1000
            if value >= self.min_document_weight:
                return value
        return None
