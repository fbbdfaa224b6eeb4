"""
Stage 1: Normalize

ЦКП: Строки документа с единообразными пробелами.

Входные данные: список строк (может содержать None и не-строки)
Выходные данные: NormalizedDocument (нормализованные + сырые строки)

Правила:
- Любая последовательность пробельных символов (NBSP, узкий NBSP, табы, CR/LF
  внутри строки) схлопывается в один пробел
- Zero-width символы (U+200B, U+FEFF) удаляются
- Строка обрезается с краёв
- Количество строк сохраняется (индексы совпадают с сырыми)
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, List

from loguru import logger


@dataclass
class NormalizedDocument:
    """Результат Stage 1."""
    lines: List[str] = field(default_factory=list)
    text: str = ""
    raw_lines: List[str] = field(default_factory=list)
    raw_text: str = ""

    def to_dict(self) -> dict:
        return {
            "lines": self.lines,
            "raw_lines": self.raw_lines,
        }


class NormalizeStage:
    """Stage 1: нормализация строк документа."""

    ZERO_WIDTH_RE = re.compile("[\u200b\ufeff]")
    WHITESPACE_RE = re.compile(r"\s+")

    def process(self, lines: Iterable) -> NormalizedDocument:
        raw_lines = ["" if line is None else str(line) for line in (lines or [])]
        normalized = [self.normalize_line(line) for line in raw_lines]

        logger.debug(f"[Stage 1: Normalize] {len(normalized)} строк")
        return NormalizedDocument(
            lines=normalized,
            text="\n".join(normalized),
            raw_lines=raw_lines,
            raw_text="\n".join(raw_lines),
        )

    def normalize_line(self, line: str) -> str:
        line = self.ZERO_WIDTH_RE.sub("", line)
        return self.WHITESPACE_RE.sub(" ", line).strip()
