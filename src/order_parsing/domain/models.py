"""
Доменные модели одного прогона извлечения.

Все объекты живут только внутри одного вызова process_lines.
"""

from dataclasses import dataclass, field
import datetime
from enum import Enum
from typing import List, Optional


class StopType(str, Enum):
    """Тип остановки."""
    PICKUP = "pickup"
    DELIVERY = "delivery"


@dataclass
class Block:
    """
    Непрерывный кусок строк, относящийся к одной остановке.

    Первая строка блока - строка-заголовок (LOADING, DELIVERY, ...).
    """
    stop_type: StopType
    lines: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def to_dict(self) -> dict:
        return {
            "stop_type": self.stop_type.value,
            "lines": list(self.lines),
        }


@dataclass
class AddressResult:
    """Результат разбора адреса блока."""
    full: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


@dataclass
class Stop:
    """
    Остановка (погрузка или выгрузка).

    ЦКП: окна времени заданы только вместе с датой.
    """
    stop_type: StopType
    name: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    date: Optional[datetime.date] = None
    window_start: Optional[str] = None
    window_end: Optional[str] = None
    notes: Optional[str] = None
    weight: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "type": self.stop_type.value,
            "name": self.name,
            "address": self.address,
            "postal_code": self.postal_code,
            "city": self.city,
            "country_iso": self.country,
            "date": self.date.isoformat() if self.date else None,
            "window_start": self.window_start,
            "window_end": self.window_end,
            "notes": self.notes,
            "weight": self.weight,
        }
