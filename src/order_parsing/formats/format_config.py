"""
DTO для дескриптора формата партнёра.

Содержит все специфичные для партнёра параметры:
- Ключевые слова распознавания формата
- Токены заголовков блоков (LOADING / DELIVERY, COLLECTION / DELIVERY)
- Таблицы regex-паттернов для каждого поля (в порядке приоритета)
- Настройки адресов, компаний, заметок, заказчика и комментария
- Исправления известных адресов

Использует Pydantic для валидации структуры конфигурации.
Все паттерны компилируются при загрузке (по умолчанию IGNORECASE),
поэтому в рантайме сопоставление не может упасть на плохом regex.
"""

import re
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator

from config.settings import DEFAULT_CARGO_TITLE, DEFAULT_CURRENCY
from ..domain.models import StopType


def _compile_pattern(value: Any) -> Any:
    """Строка -> re.Pattern (IGNORECASE). Регистр можно вернуть через (?-i:...)."""
    if isinstance(value, str):
        try:
            return re.compile(value, re.IGNORECASE)
        except re.error as e:
            raise ValueError(f"Некорректный regex '{value}': {e}")
    return value


Pattern = Annotated[re.Pattern, BeforeValidator(_compile_pattern)]

TimeWindowNotation = Literal["hour_h", "colon", "compact", "booked"]
CompanyStrategy = Literal["header_remainder", "after_reference"]
NoteReferenceSource = Literal["cargo_number", "cargo_or_order", "block", "none"]


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class DetectionConfig(_Section):
    """Ключевые слова формата (регистронезависимый поиск подстроки)."""
    keywords: List[str] = Field(..., description="Хотя бы одно слово должно встретиться в документе")

    @field_validator("keywords")
    @classmethod
    def validate_keywords(cls, v):
        if not v:
            raise ValueError("detection.keywords не может быть пустым")
        return [kw.upper() for kw in v]


class HeaderConfig(_Section):
    token: str = Field(..., description="Префикс строки-заголовка блока")
    stop_type: StopType

    @field_validator("token")
    @classmethod
    def validate_token(cls, v):
        v = v.strip().upper()
        if not v:
            raise ValueError("Токен заголовка не может быть пустым")
        return v


class BlocksConfig(_Section):
    headers: List[HeaderConfig]

    @field_validator("headers")
    @classmethod
    def validate_headers(cls, v):
        if not v:
            raise ValueError("blocks.headers не может быть пустым")
        return v


class ReferenceConfig(_Section):
    patterns: List[Pattern] = Field(default_factory=list, description="Явные метки референса")
    heuristic: bool = Field(False, description="Эвристика по 7-8 значным токенам")


class PriceConfig(_Section):
    patterns: List[Pattern] = Field(default_factory=list)
    decimal_separator: Optional[str] = Field(
        None, description='Зафиксированный десятичный разделитель ("," или "."), None - авто'
    )

    @field_validator("decimal_separator")
    @classmethod
    def validate_separator(cls, v):
        if v is not None and v not in [",", "."]:
            raise ValueError(f'decimal_separator должен быть "," или ".", получено: {v}')
        return v


class CurrencyConfig(_Section):
    default: str = DEFAULT_CURRENCY
    codes: List[str] = Field(default_factory=list, description="ISO коды (EUR, GBP, ...)")
    symbols: Dict[str, str] = Field(default_factory=dict, description="Символ -> ISO код")

    @field_validator("default")
    @classmethod
    def validate_default(cls, v):
        if len(v) != 3 or not v.isalpha():
            raise ValueError(f"currency.default должен быть ISO кодом, получено: {v}")
        return v.upper()

    @field_validator("codes")
    @classmethod
    def validate_codes(cls, v):
        return [code.upper() for code in v]


class TransportNumbersConfig(_Section):
    registration_patterns: List[Pattern] = Field(default_factory=list)
    collect_pattern: Optional[Pattern] = Field(None, description="Все вхождения номера (OT)")
    collect_prefix: str = "OT"


class CargoConfig(_Section):
    title_keywords: List[str] = Field(default_factory=list, description="Слово в документе = название груза")
    title_patterns: List[Pattern] = Field(default_factory=list)
    default_title: str = DEFAULT_CARGO_TITLE
    pallet_titles: List[str] = Field(default_factory=list, description="Названия, означающие паллеты")
    pallet_patterns: List[Pattern] = Field(default_factory=list)


class LoadMetersConfig(_Section):
    enabled: bool = True
    labels: List[str] = Field(default_factory=lambda: ["LM", "LDM"])
    standard_trailer_fallback: bool = False


class WeightConfig(_Section):
    stop_patterns: List[Pattern] = Field(default_factory=list)
    document_fallback: bool = True


class CountryRule(_Section):
    """Правило страны: токены в адресе или форма индекса."""
    country: str
    tokens: List[str] = Field(default_factory=list)
    postcode: Optional[Literal["uk", "five_digit"]] = None

    @field_validator("country")
    @classmethod
    def validate_country(cls, v):
        if len(v) != 2 or not v.isalpha():
            raise ValueError(f"country должен быть ISO alpha-2, получено: {v}")
        return v.upper()


class AddressConfig(_Section):
    require_reference_marker: bool = False
    stop_at_blank: bool = False
    terminators: List[Pattern] = Field(default_factory=list)
    skip_patterns: List[Pattern] = Field(default_factory=list)
    line_patterns: List[Pattern] = Field(default_factory=list, description="Если задано - берём только такие строки")
    city_patterns: List[Pattern] = Field(default_factory=list)
    country_rules: List[CountryRule] = Field(default_factory=list)


class AddressOverride(_Section):
    """Исправление известного адреса партнёра."""
    stop_type: StopType
    name_contains: Optional[str] = None
    address_pattern: Optional[Pattern] = None
    address: str
    postal_code: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None

    @model_validator(mode="after")
    def validate_condition(self):
        if not self.name_contains and self.address_pattern is None:
            raise ValueError("address_overrides: нужен name_contains или address_pattern")
        return self


class CompanyConfig(_Section):
    strategies: List[CompanyStrategy] = Field(default_factory=lambda: ["after_reference"])
    skip_patterns: List[Pattern] = Field(default_factory=list)


class NoteTrigger(_Section):
    phrase: str
    text: str
    reconstruct: bool = False


class NoteRule(_Section):
    stop_type: StopType
    reference: NoteReferenceSource = "none"
    include_reference_alone: bool = False
    triggers: List[NoteTrigger] = Field(default_factory=list)


class NotesConfig(_Section):
    rules: List[NoteRule] = Field(default_factory=list)
    block_reference_patterns: List[Pattern] = Field(default_factory=list)
    line_patterns: List[Pattern] = Field(default_factory=list)


class StreetRule(_Section):
    """Правило улицы заказчика: все заданные условия должны выполниться."""
    pattern: Optional[Pattern] = None
    vat_prefix: Optional[str] = None
    keyword: Optional[str] = None
    value: Optional[str] = Field(None, description="Фиксированное значение, иначе найденный текст")

    @model_validator(mode="after")
    def validate_rule(self):
        if self.pattern is None and self.value is None:
            raise ValueError("street_rules: нужен pattern или value")
        return self


class CustomerConfig(_Section):
    side: Literal["sender", "receiver"] = "receiver"
    default_company: str
    company_patterns: List[Pattern] = Field(default_factory=list)
    vat_patterns: List[Pattern] = Field(default_factory=list)
    street_rules: List[StreetRule] = Field(default_factory=list)
    postal_patterns: List[Pattern] = Field(default_factory=list)
    city_keywords: List[str] = Field(default_factory=list)
    country_patterns: Dict[str, Pattern] = Field(default_factory=dict)


class CommentFixedRule(_Section):
    pattern: Optional[Pattern] = None
    keyword: Optional[str] = None
    text: str


class CommentTerm(_Section):
    keyword: str
    text: str


class CommentLabel(_Section):
    label: str
    pattern: Pattern


class CommentConfig(_Section):
    fixed: List[CommentFixedRule] = Field(default_factory=list)
    terms: List[CommentTerm] = Field(default_factory=list)
    labels: List[CommentLabel] = Field(default_factory=list)
    labels_require_load: bool = True


class FormatConfig(BaseModel):
    """
    Полный дескриптор формата партнёра.

    Загружается из YAML файла и используется всеми стадиями пайплайна.
    Валидируется через Pydantic для обеспечения целостности структуры.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Код формата (transalliance, ziegler)")
    priority: int = Field(0, description="Порядок проверки диспетчером (больше - раньше)")

    detection: DetectionConfig
    blocks: BlocksConfig
    cargo_number_patterns: List[Pattern] = Field(default_factory=list)
    reference: ReferenceConfig = Field(default_factory=ReferenceConfig)
    price: PriceConfig = Field(default_factory=PriceConfig)
    currency: CurrencyConfig = Field(default_factory=CurrencyConfig)
    incoterms_patterns: List[Pattern] = Field(default_factory=list)
    transport_numbers: TransportNumbersConfig = Field(default_factory=TransportNumbersConfig)
    cargo: CargoConfig = Field(default_factory=CargoConfig)
    load_meters: LoadMetersConfig = Field(default_factory=LoadMetersConfig)
    weight: WeightConfig = Field(default_factory=WeightConfig)
    time_windows: List[TimeWindowNotation] = Field(default_factory=lambda: ["hour_h", "colon"])
    address: AddressConfig = Field(default_factory=AddressConfig)
    address_overrides: List[AddressOverride] = Field(default_factory=list)
    company: CompanyConfig = Field(default_factory=CompanyConfig)
    notes: NotesConfig = Field(default_factory=NotesConfig)
    customer: CustomerConfig
    comment: CommentConfig = Field(default_factory=CommentConfig)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = v.strip().lower()
        if not v:
            raise ValueError("name не может быть пустым")
        return v

    @property
    def header_tokens(self) -> List[str]:
        return [header.token for header in self.blocks.headers]
