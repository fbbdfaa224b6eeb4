"""
Time Window Parser - разбор окна погрузки/выгрузки.

ЦКП: пара (start, end) в формате HH:MM или (None, None).

Поддерживаемые нотации (включаются per-format):
- hour_h:  08h00-12h00
- colon:   08:00-12:00
- compact: 0800-1200
- booked:  BOOKED- 09:30 AM (только начало)
"""

import re
from typing import Iterable, Optional, Tuple

from loguru import logger

Window = Tuple[Optional[str], Optional[str]]

NOTATION_PATTERNS = {
    "booked": r"BOOKED\s*-?\s*\d{1,2}:\d{2}(?:\s*[AP]M)?",
    "hour_h": r"\d{1,2}h\d{2}\s*[-–]\s*\d{1,2}h\d{2}",
    "colon": r"\d{1,2}:\d{2}\s*[-–]\s*\d{1,2}:\d{2}",
    "compact": r"\d{4}\s*[-–]\s*\d{4}",
}

EMPTY_WINDOW: Window = (None, None)


class TimeWindowParser:
    """Находит и нормализует слот времени."""

    BOOKED_RE = re.compile(r"^BOOKED\s*-?\s*(\d{1,2}):(\d{2})\s*([AP]M)?$", re.IGNORECASE)
    RANGE_RE = re.compile(r"^(\d{1,2}):(\d{2})-(\d{1,2}):(\d{2})$")
    COMPACT_RE = re.compile(r"^(\d{2})(\d{2})-(\d{2})(\d{2})$")

    def find_slot(self, text: str, notations: Iterable[str]) -> Optional[str]:
        """Первый слот в тексте среди включённых нотаций."""
        alternatives = [NOTATION_PATTERNS[n] for n in notations if n in NOTATION_PATTERNS]
        if not alternatives or not text:
            return None
        m = re.search(r"\b(?:" + "|".join(alternatives) + r")\b", text, re.IGNORECASE)
        return m.group(0) if m else None

    def extract(self, text: str, notations: Iterable[str]) -> Window:
        """Ищет слот в тексте и разбирает его."""
        return self.parse(self.find_slot(text, notations))

    def parse(self, slot: Optional[str]) -> Window:
        """
        Разбирает строку слота.

        Returns:
            (start, end); end = None для BOOKED; (None, None) если формат не распознан
        """
        if not slot:
            return EMPTY_WINDOW

        s = slot.strip()
        m = self.BOOKED_RE.match(s)
        if m:
            start = self._clock(int(m.group(1)), int(m.group(2)), m.group(3))
            return (start, None) if start else EMPTY_WINDOW

        s = re.sub(r"\s+", "", s).replace("–", "-")
        s = re.sub(r"h", ":", s, flags=re.IGNORECASE)

        m = self.RANGE_RE.match(s) or self.COMPACT_RE.match(s)
        if not m:
            logger.trace(f"[TimeWindowParser] Нераспознанный слот: '{slot}'")
            return EMPTY_WINDOW

        h1, m1, h2, m2 = (int(g) for g in m.groups())
        start = self._clock(h1, m1)
        end = self._clock(h2, m2)
        if not start or not end:
            return EMPTY_WINDOW
        return start, end

    def _clock(self, hours: int, minutes: int, meridiem: Optional[str] = None) -> Optional[str]:
        if meridiem:
            if not 1 <= hours <= 12:
                return None
            hours = hours % 12 + (12 if meridiem.upper() == "PM" else 0)
        if hours > 23 or minutes > 59:
            return None
        return f"{hours:02d}:{minutes:02d}"
