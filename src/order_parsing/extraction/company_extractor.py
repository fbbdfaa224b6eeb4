import re
from typing import List, Optional

from ..formats.format_config import CompanyConfig
from .cascade import first_match
from .line_tools import is_header_line, is_mostly_digits, matches_any


class CompanyExtractor:
    """
    Определяет название компании остановки по строкам блока.

    Стратегии (порядок задаётся форматом):
    - header_remainder: текст после токена заголовка ("Collection DP WORLD" -> "DP WORLD")
    - after_reference: первая "похожая на компанию" строка после REFERENCE
      (если маркера нет - с начала блока)
    """

    REFERENCE_RE = re.compile(r"^\s*REFERENCE\b", re.IGNORECASE)
    LETTER_RE = re.compile(r"[A-Za-z]")
    PUNCTUATION_ONLY_RE = re.compile(r"^[\W_]+$")

    def extract(self, block_lines: List[str], header_tokens: List[str], config: CompanyConfig) -> Optional[str]:
        strategies = {
            "header_remainder": lambda text: self._header_remainder(text.split("\n"), header_tokens),
            "after_reference": lambda text: self._after_reference(text.split("\n"), header_tokens, config),
        }
        chain = [(name, strategies[name]) for name in config.strategies]
        return first_match(chain, "\n".join(block_lines), component="CompanyExtractor")

    def looks_like_company(self, line: str) -> bool:
        return bool(self.LETTER_RE.search(line)) and len(line) >= 3 and not self.PUNCTUATION_ONLY_RE.match(line)

    def should_skip(self, line: str, config: CompanyConfig) -> bool:
        """Строка-метаданные: метки, VIREMENT, коды вида XX-CODE, почти одни цифры."""
        return matches_any(line, config.skip_patterns) or is_mostly_digits(line)

    def _header_remainder(self, lines: List[str], header_tokens: List[str]) -> Optional[str]:
        header = lines[0].strip() if lines else ""
        for token in header_tokens:
            if header.upper().startswith(token):
                rest = header[len(token):].strip(" :-")
                return rest if rest and self.looks_like_company(rest) else None
        return None

    def _after_reference(self, lines: List[str], header_tokens: List[str], config: CompanyConfig) -> Optional[str]:
        ref_index = next((i for i, ln in enumerate(lines) if self.REFERENCE_RE.match(ln.strip())), None)

        if ref_index is None:
            # Маркера нет: сканируем с начала блока, пропуская заголовок
            candidates = lines[1:] if lines and is_header_line(lines[0], header_tokens) else lines
        else:
            candidates = lines[ref_index + 1:]

        for raw in candidates:
            text = raw.strip()
            if not text:
                continue
            if is_header_line(text, header_tokens):
                break
            if self.should_skip(text, config):
                continue
            if self.looks_like_company(text):
                return text
        return None
