"""Доменный слой: модели, интерфейсы и исключения."""

from .exceptions import (
    ParsingError,
    FormatConfigurationError,
    FormatNotFoundError,
    UnknownFormatError,
    OrderWriteError,
    OrderFileNotFoundError,
)
from .interfaces import IFormatExtractor, IOrderRepository
from .models import AddressResult, Block, Stop, StopType

__all__ = [
    "ParsingError",
    "FormatConfigurationError",
    "FormatNotFoundError",
    "UnknownFormatError",
    "OrderWriteError",
    "OrderFileNotFoundError",
    "IFormatExtractor",
    "IOrderRepository",
    "AddressResult",
    "Block",
    "Stop",
    "StopType",
]
