import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from loguru import logger


@dataclass
class DateResult:
    """Результат извлечения даты."""
    date: Optional[date]
    text: str = ""


class DateParser:
    """
    Извлекает дату остановки из текста блока.

    Формат документов партнёров: DD/MM/YY или DD/MM/YYYY.
    Двузначный год дополняется префиксом "20".
    """

    DATE_PATTERN = re.compile(r"\b(\d{2})/(\d{2})/(\d{4}|\d{2})\b")

    def parse(self, raw: Optional[str]) -> Optional[date]:
        """
        Парсит одну строку даты.

        Returns:
            date или None для нераспознанной/невозможной даты
        """
        if not raw:
            return None
        m = self.DATE_PATTERN.search(raw)
        if not m:
            return None
        return self._to_date(m)

    def first_date(self, text: str) -> DateResult:
        """
        Первая валидная дата в тексте.

        Невозможные даты (31/02) пропускаются как отсутствующие.
        """
        for m in self.DATE_PATTERN.finditer(text or ""):
            dt = self._to_date(m)
            if dt:
                logger.debug(f"[DateParser] Дата найдена: {dt.isoformat()} ('{m.group(0)}')")
                return DateResult(date=dt, text=m.group(0))
        return DateResult(date=None, text="")

    def _to_date(self, match: re.Match) -> Optional[date]:
        d, m_val, y = match.groups()
        if len(y) == 2:
            y = "20" + y
        try:
            return date(int(y), int(m_val), int(d))
        except (ValueError, TypeError) as e:
            logger.trace(f"[DateParser] Ошибка парсинга даты '{match.group(0)}': {e}")
            return None
