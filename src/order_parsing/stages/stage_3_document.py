"""
Stage 3: Document

ЦКП: Поля уровня документа.

Входные данные: NormalizedDocument, FormatConfig
Выходные данные: DocumentResult

Порядок важен: номер груза извлекается первым, потому что эвристика
референса исключает его из кандидатов.
"""

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from config.settings import DEFAULT_CURRENCY
from contracts.transport_order_dto import Customer
from ..extraction import (
    CargoExtractor,
    CommentExtractor,
    CommercialExtractor,
    CustomerExtractor,
    ReferenceExtractor,
)
from ..formats.format_config import FormatConfig
from .stage_1_normalize import NormalizedDocument


@dataclass
class DocumentResult:
    """Результат Stage 3."""
    order_reference: str
    customer: Customer
    freight_price: float = 0.0
    freight_currency: str = DEFAULT_CURRENCY
    cargo_number: Optional[str] = None
    incoterms: Optional[str] = None
    transport_numbers: Optional[str] = None
    cargo_title: str = ""
    pallets: int = 0
    palletized: bool = False
    ldm: Optional[float] = None
    shipment_type: Optional[str] = None
    comment: str = ""

    @property
    def has_load_signal(self) -> bool:
        return self.shipment_type == "FTL" or self.ldm is not None

    def to_dict(self) -> dict:
        return {
            "order_reference": self.order_reference,
            "customer": self.customer.model_dump(exclude_none=True),
            "freight_price": self.freight_price,
            "freight_currency": self.freight_currency,
            "cargo_number": self.cargo_number,
            "incoterms": self.incoterms,
            "transport_numbers": self.transport_numbers,
            "cargo_title": self.cargo_title,
            "pallets": self.pallets,
            "palletized": self.palletized,
            "ldm": self.ldm,
            "shipment_type": self.shipment_type,
            "comment": self.comment,
        }


class DocumentStage:
    """Stage 3: извлечение полей документа по цепочкам формата."""

    def __init__(
        self,
        reference_extractor: Optional[ReferenceExtractor] = None,
        commercial_extractor: Optional[CommercialExtractor] = None,
        cargo_extractor: Optional[CargoExtractor] = None,
        customer_extractor: Optional[CustomerExtractor] = None,
        comment_extractor: Optional[CommentExtractor] = None,
    ):
        self.reference_extractor = reference_extractor or ReferenceExtractor()
        self.commercial_extractor = commercial_extractor or CommercialExtractor()
        self.cargo_extractor = cargo_extractor or CargoExtractor()
        self.customer_extractor = customer_extractor or CustomerExtractor()
        self.comment_extractor = comment_extractor or CommentExtractor()

    def process(
        self,
        document: NormalizedDocument,
        config: FormatConfig,
        attachment_filename: Optional[str] = None,
    ) -> DocumentResult:
        text = document.text

        cargo_number = self.reference_extractor.cargo_number(text, config.cargo_number_patterns)
        reference = self.reference_extractor.extract(
            text, config.reference, cargo_number=cargo_number, attachment_filename=attachment_filename
        )

        title = self.cargo_extractor.title(text, config.cargo)
        pallets = self.cargo_extractor.pallet_count(text, config.cargo.pallet_patterns)
        ldm = self.cargo_extractor.load_meters(text, config.load_meters)
        shipment_type = self.cargo_extractor.shipment_type(text, ldm)

        result = DocumentResult(
            order_reference=reference,
            customer=self.customer_extractor.extract(text, config.customer),
            freight_price=self.commercial_extractor.freight_price(text, config.price),
            freight_currency=self.commercial_extractor.currency(text, config.currency),
            cargo_number=cargo_number,
            incoterms=self.commercial_extractor.incoterms(text, config.incoterms_patterns),
            transport_numbers=self.commercial_extractor.transport_numbers(text, config.transport_numbers),
            cargo_title=title,
            pallets=pallets,
            palletized=self.cargo_extractor.is_palletized(title, pallets, config.cargo),
            ldm=ldm,
            shipment_type=shipment_type,
        )
        result.comment = self.comment_extractor.extract(text, config.comment, has_load_signal=result.has_load_signal)

        logger.debug(
            f"[Stage 3: Document] ref={result.order_reference}, price={result.freight_price} "
            f"{result.freight_currency}, cargo='{result.cargo_title}', ldm={result.ldm}"
        )
        return result
