"""
Notes Extractor - заметки/инструкции остановки.

ЦКП: "REF: <ref>. Instructions: <text>" / "REF: <ref>." / строки-заметки блока.

Фразы-триггеры ищутся по всему документу. Для разорванных переносом
строк предложений (BON D'ECHANGE) предложение собирается обратно из
соседних строк.
"""

import re
from typing import List, Optional

from loguru import logger

from ..domain.models import StopType
from ..formats.format_config import NoteRule, NotesConfig, NoteTrigger
from .cascade import match_one
from .line_tools import collapse_spaces, is_header_line, matches_any


class NotesExtractor:
    """Собирает заметки остановки по правилам формата."""

    MAX_PRECEDING_LINES = 3

    SENTENCE_END_RE = re.compile(r"[.!?]\s*$")
    LEADING_SEPARATORS_RE = re.compile(r"^[\s\-\u2013\u2014:;,.*\u2022>]+")
    LEADING_LABEL_RE = re.compile(r"^(?:instructions?|remarks?|notes?|comments?|observations?)\s*[:\-]\s*", re.IGNORECASE)

    def extract(
        self,
        stop_type: StopType,
        block_lines: List[str],
        document_lines: List[str],
        config: NotesConfig,
        header_tokens: List[str],
        cargo_number: Optional[str] = None,
        order_reference: Optional[str] = None,
    ) -> Optional[str]:
        """
        Args:
            stop_type: Тип остановки (правило выбирается по нему)
            block_lines: Строки блока остановки
            document_lines: Все нормализованные строки документа
            config: Настройки заметок формата
            header_tokens: Токены заголовков (границы предложения)
            cargo_number: Номер груза (OT)
            order_reference: Референс заказа
        """
        parts = []

        rule = self._rule_for(stop_type, config.rules)
        if rule is not None:
            reference = self._reference(rule, block_lines, config, cargo_number, order_reference)
            instruction = self._instruction(rule.triggers, document_lines, header_tokens)
            if instruction:
                prefix = f"REF: {reference}. " if reference else ""
                parts.append(f"{prefix}Instructions: {instruction}")
            elif reference and rule.include_reference_alone:
                parts.append(f"REF: {reference}.")

        block_notes = [ln.strip() for ln in block_lines[1:] if ln.strip() and matches_any(ln, config.line_patterns)]
        if block_notes:
            parts.append("; ".join(block_notes))

        return " ".join(parts) if parts else None

    def reconstruct(self, lines: List[str], index: int, header_tokens: List[str]) -> str:
        """
        Собирает предложение вокруг строки-триггера.

        До 3 предыдущих строк (до пустой строки, конца предложения или заголовка),
        строка-триггер и следующая строка (если триггер не закончил предложение).
        """
        preceding = []
        for i in range(index - 1, max(-1, index - 1 - self.MAX_PRECEDING_LINES), -1):
            line = lines[i].strip()
            if not line or self.SENTENCE_END_RE.search(line) or is_header_line(line, header_tokens):
                break
            preceding.insert(0, line)

        trigger_line = lines[index].strip()
        parts = preceding + [trigger_line]

        if not self.SENTENCE_END_RE.search(trigger_line) and index + 1 < len(lines):
            following = lines[index + 1].strip()
            if following and not is_header_line(following, header_tokens):
                parts.append(following)

        return self._strip_leading(collapse_spaces(" ".join(parts)))

    def _rule_for(self, stop_type: StopType, rules: List[NoteRule]) -> Optional[NoteRule]:
        return next((rule for rule in rules if rule.stop_type == stop_type), None)

    def _reference(
        self,
        rule: NoteRule,
        block_lines: List[str],
        config: NotesConfig,
        cargo_number: Optional[str],
        order_reference: Optional[str],
    ) -> Optional[str]:
        if rule.reference == "cargo_number":
            return cargo_number
        if rule.reference == "cargo_or_order":
            return cargo_number or order_reference
        if rule.reference == "block":
            return match_one("\n".join(block_lines), config.block_reference_patterns)
        return None

    def _instruction(self, triggers: List[NoteTrigger], lines: List[str], header_tokens: List[str]) -> Optional[str]:
        for trigger in triggers:
            phrase = trigger.phrase.upper()
            index = next((i for i, ln in enumerate(lines) if phrase in ln.upper()), None)
            if index is None:
                # Фраза разорвана переносом строки
                if self._compact(phrase) in self._compact("".join(lines).upper()):
                    return trigger.text
                continue
            if not trigger.reconstruct:
                return trigger.text

            sentence = self.reconstruct(lines, index, header_tokens)
            if sentence:
                logger.debug(f"[NotesExtractor] Предложение восстановлено: '{sentence}'")
                return sentence
            return trigger.text
        return None

    def _strip_leading(self, text: str) -> str:
        previous = None
        while text != previous:
            previous = text
            text = self.LEADING_SEPARATORS_RE.sub("", text)
            text = self.LEADING_LABEL_RE.sub("", text)
        return text.strip()

    @staticmethod
    def _compact(text: str) -> str:
        return re.sub(r"\s+", "", text)
