"""
Контракты DTO проекта Freight Order Parser.

Все контракты используют Pydantic v2 для валидации.

Контракты:
- Parsing -> Order Management: CanonicalOrder (transport_order_dto.py)
"""

from .transport_order_dto import (
    CanonicalOrder,
    Cargo,
    CompanyAddress,
    Customer,
    CustomerDetails,
    Location,
    TimeRange,
)

__all__ = [
    "CanonicalOrder",
    "Cargo",
    "CompanyAddress",
    "Customer",
    "CustomerDetails",
    "Location",
    "TimeRange",
]
