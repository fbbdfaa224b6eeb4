"""
DTO контракт: Parsing -> Order Management (createOrder)

Канонический транспортный заказ, который принимает внешняя система.
Структура полей 1 в 1 соответствует схеме createOrder.

ВАЖНО: списки локаций и грузов никогда не бывают пустыми.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


CustomerSide = Literal["sender", "receiver"]
PackageType = Literal["pallet", "other"]


class CompanyAddress(BaseModel):
    """Адрес компании в точке погрузки/выгрузки."""

    company: str = Field(..., description="Название компании (или Unknown)")
    street_address: str = Field("", description="Адрес одной строкой")
    city: Optional[str] = Field(None, description="Город")
    postal_code: Optional[str] = Field(None, description="Почтовый индекс")
    country: Optional[str] = Field(None, description="ISO-3166 alpha-2")
    comment: Optional[str] = Field(None, description="Инструкции для водителя")

    model_config = ConfigDict(frozen=True)

    @field_validator("country")
    @classmethod
    def validate_country(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and (len(v) != 2 or not v.isalpha()):
            raise ValueError(f"country должен быть ISO alpha-2, получено: {v}")
        return v.upper() if v else v


class TimeRange(BaseModel):
    """Временное окно в ISO-формате."""

    datetime_from: str = Field(..., description="Начало окна, например 2024-03-05T08:00:00Z")
    datetime_to: Optional[str] = Field(None, description="Конец окна")

    model_config = ConfigDict(frozen=True)


class Location(BaseModel):
    """Точка погрузки или выгрузки."""

    company_address: CompanyAddress
    time: Optional[TimeRange] = None

    model_config = ConfigDict(frozen=True)


class CustomerDetails(BaseModel):
    """Реквизиты заказчика."""

    company: str = Field(..., min_length=1)
    vat_code: Optional[str] = None
    street_address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class Customer(BaseModel):
    side: CustomerSide
    details: CustomerDetails

    model_config = ConfigDict(frozen=True)


class Cargo(BaseModel):
    """Груз заказа."""

    title: str = Field(..., min_length=1)
    package_type: PackageType = "other"
    package_count: Optional[int] = Field(None, gt=0)
    ldm: Optional[float] = Field(None, ge=0, description="Длина загрузки, метры")
    weight: Optional[float] = Field(None, ge=0, description="Вес, кг")
    type: Optional[str] = Field(None, description="Тип отправки (FTL)")
    number: Optional[str] = Field(None, description="Внешний номер груза (OT)")
    palletized: Optional[bool] = None

    model_config = ConfigDict(frozen=True)


class CanonicalOrder(BaseModel):
    """
    Канонический транспортный заказ.

    Это output слоя парсинга. Передается во внешний createOrder.
    Все обязательные поля заполнены даже при неполном документе.
    """

    attachment_filenames: List[str] = Field(default_factory=list)
    customer: Customer
    loading_locations: List[Location] = Field(..., min_length=1)
    destination_locations: List[Location] = Field(..., min_length=1)
    cargos: List[Cargo] = Field(..., min_length=1)
    order_reference: str = Field(..., min_length=1)
    freight_price: float = Field(0.0, ge=0)
    freight_currency: str = Field(..., min_length=3, max_length=3)
    comment: str = ""
    transport_numbers: Optional[str] = None
    incoterms: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> Dict[str, Any]:
        """Словарь для createOrder: опциональные ключи только если заданы."""
        return self.model_dump(exclude_none=True)
