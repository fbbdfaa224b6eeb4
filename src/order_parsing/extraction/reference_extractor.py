"""
Reference Extractor - номер груза (OT) и референс заказа.

Цепочка референса:
1. Явные метки формата (ORDER REFERENCE, REFERENCE, Ziegler Ref)
2. Эвристика по 7-8 значным токенам (если включена в формате)
3. Имя вложения
4. "unknown"
"""

import re
from typing import List, Optional

from loguru import logger

from config.settings import (
    REFERENCE_CANDIDATE_MIN_DIGITS,
    REFERENCE_TOKEN_MAX_DIGITS,
    REFERENCE_TOKEN_MIN_DIGITS,
    UNKNOWN_REFERENCE,
)
from ..formats.format_config import ReferenceConfig
from .cascade import first_match, match_one, pattern_strategy
from .line_tools import collapse_spaces


class ReferenceExtractor:
    """Извлекает номер груза и референс заказа."""

    TOKEN_RE = re.compile(rf"\b(\d{{{REFERENCE_TOKEN_MIN_DIGITS},{REFERENCE_TOKEN_MAX_DIGITS}}})\b")

    # 20 + 6 цифр или 20YY + месяц + 1-2 цифры дня
    DATE_LIKE_RE = re.compile(r"^(?:20\d{6}|20\d{2}(?:0[1-9]|1[0-2])\d{1,2})$")
    PREFERRED_RE = re.compile(r"^1\d{6}$")

    def cargo_number(self, text: str, patterns: List[re.Pattern]) -> Optional[str]:
        """Номер груза: OT метка, иначе REF + 4 и более цифр."""
        return match_one(text, patterns)

    def extract(
        self,
        text: str,
        config: ReferenceConfig,
        cargo_number: Optional[str] = None,
        attachment_filename: Optional[str] = None,
    ) -> str:
        """
        ЦКП: непустой референс заказа.

        Args:
            text: Нормализованный текст документа
            config: Настройки референса формата
            cargo_number: Уже найденный номер груза (исключается из эвристики)
            attachment_filename: Имя файла-вложения для fallback
        """
        chain = [
            (f"label:{p.pattern}", pattern_strategy(p, convert=self._clean)) for p in config.patterns
        ]
        if config.heuristic:
            chain.append(("heuristic", lambda t: self.heuristic(t, cargo_number)))
        chain.append(("filename", lambda t: attachment_filename or None))

        reference = first_match(chain, text, component="ReferenceExtractor")
        if reference is None:
            logger.warning(f"[ReferenceExtractor] Референс не найден, используется '{UNKNOWN_REFERENCE}'")
            return UNKNOWN_REFERENCE
        return reference

    def heuristic(self, text: str, cargo_number: Optional[str] = None) -> Optional[str]:
        """
        Выбирает референс среди числовых токенов.

        Исключаются номер груза и токены, похожие на даты; остаются 7-8 значные.
        Приоритет у 1xxxxxx, иначе первый по порядку в документе.
        """
        candidates = []
        for token in self.TOKEN_RE.findall(text):
            if token in candidates:
                continue
            if cargo_number and token == cargo_number:
                logger.trace(f"[ReferenceExtractor] {token}: совпадает с номером груза")
                continue
            if self.DATE_LIKE_RE.match(token):
                logger.trace(f"[ReferenceExtractor] {token}: похож на дату")
                continue
            if len(token) < REFERENCE_CANDIDATE_MIN_DIGITS:
                continue
            candidates.append(token)

        if not candidates:
            return None
        for token in candidates:
            if self.PREFERRED_RE.match(token):
                return token
        return candidates[0]

    @staticmethod
    def _clean(value: str) -> Optional[str]:
        value = collapse_spaces(value)
        return value or None
