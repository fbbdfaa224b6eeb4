"""
Stage 5: Schema

ЦКП: CanonicalOrder, удовлетворяющий схеме createOrder.

Входные данные: StopsResult, DocumentResult, NormalizedDocument, FormatConfig
Выходные данные: CanonicalOrder

Алгоритм:
1. Остановки делятся на погрузки и выгрузки, каждая -> Location
2. Пустой список локаций заменяется одной заглушкой "Unknown"
3. Вес груза: сумма весов остановок (fold), иначе каскад по документу
4. Один груз со всеми полями документа
"""

import operator
from functools import reduce
from typing import List, Optional

from loguru import logger

from config.settings import PLACEHOLDER_COMPANY
from contracts.transport_order_dto import (
    Cargo,
    CanonicalOrder,
    CompanyAddress,
    Location,
    TimeRange,
)
from ..domain.models import Stop, StopType
from ..extraction import WeightExtractor
from ..formats.format_config import FormatConfig
from .stage_1_normalize import NormalizedDocument
from .stage_3_document import DocumentResult
from .stage_4_stops import StopsResult


def placeholder_location() -> Location:
    return Location(company_address=CompanyAddress(company=PLACEHOLDER_COMPANY, street_address=""))


def total_weight(weights: List[float]) -> Optional[float]:
    """Сумма весов остановок; None если ни одного веса нет."""
    if not weights:
        return None
    return reduce(operator.add, weights, 0.0)


class SchemaStage:
    """Stage 5: сборка канонического заказа."""

    def __init__(self, weight_extractor: Optional[WeightExtractor] = None):
        self.weight_extractor = weight_extractor or WeightExtractor()

    def process(
        self,
        stops: StopsResult,
        document_fields: DocumentResult,
        document: NormalizedDocument,
        config: FormatConfig,
        attachment_filename: Optional[str] = None,
    ) -> CanonicalOrder:
        loading = self.build_locations(stops.of_type(StopType.PICKUP), "loading")
        destination = self.build_locations(stops.of_type(StopType.DELIVERY), "destination")

        cargo = self.build_cargo(stops, document_fields, document, config)

        return CanonicalOrder(
            attachment_filenames=[attachment_filename] if attachment_filename else [],
            customer=document_fields.customer,
            loading_locations=loading,
            destination_locations=destination,
            cargos=[cargo],
            order_reference=document_fields.order_reference,
            freight_price=document_fields.freight_price,
            freight_currency=document_fields.freight_currency,
            comment=document_fields.comment,
            transport_numbers=document_fields.transport_numbers,
            incoterms=document_fields.incoterms,
        )

    def build_locations(self, stops: List[Stop], kind: str) -> List[Location]:
        locations = [self.to_location(stop) for stop in stops]
        if not locations:
            logger.warning(f"[Stage 5: Schema] Нет остановок типа {kind}, используется заглушка")
            return [placeholder_location()]
        return locations

    def to_location(self, stop: Stop) -> Location:
        country = stop.country if stop.country and len(stop.country) == 2 and stop.country.isalpha() else None
        company_address = CompanyAddress(
            company=stop.name or PLACEHOLDER_COMPANY,
            street_address=stop.address or "",
            city=stop.city if stop.city and len(stop.city) >= 2 else None,
            postal_code=stop.postal_code or None,
            country=country,
            comment=stop.notes or None,
        )

        time = None
        if stop.date is not None:
            day = stop.date.isoformat()
            time = TimeRange(
                datetime_from=f"{day}T{stop.window_start or '00:00'}:00Z",
                datetime_to=f"{day}T{stop.window_end}:00Z" if stop.window_end else None,
            )
        return Location(company_address=company_address, time=time)

    def build_cargo(
        self,
        stops: StopsResult,
        document_fields: DocumentResult,
        document: NormalizedDocument,
        config: FormatConfig,
    ) -> Cargo:
        weight = total_weight(stops.stop_weights)
        if weight is None and config.weight.document_fallback:
            weight = self.weight_extractor.document_weight(
                document.text, document.raw_text, cargo_number=document_fields.cargo_number
            )

        return Cargo(
            title=document_fields.cargo_title or config.cargo.default_title,
            package_type="pallet" if document_fields.palletized else "other",
            package_count=document_fields.pallets if document_fields.pallets > 0 else None,
            ldm=document_fields.ldm,
            weight=weight,
            type=document_fields.shipment_type,
            number=document_fields.cargo_number,
            palletized=True if document_fields.palletized else None,
        )
