"""
Stage 4: Stops

ЦКП: Одна Stop на каждый блок.

Входные данные: BlocksResult, DocumentResult, NormalizedDocument, FormatConfig
Выходные данные: StopsResult

Для каждого блока:
1. Дата (первая валидная DD/MM/YY(YY))
2. Окно времени - только если дата найдена
3. Компания, адрес (+ исправления известных площадок)
4. Вес остановки
5. Заметки
"""

from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from ..domain.models import Block, Stop, StopType
from ..extraction import (
    AddressExtractor,
    CompanyExtractor,
    DateParser,
    NotesExtractor,
    TimeWindowParser,
    WeightExtractor,
)
from ..formats.format_config import FormatConfig
from .stage_1_normalize import NormalizedDocument
from .stage_2_blocks import BlocksResult
from .stage_3_document import DocumentResult


@dataclass
class StopsResult:
    """Результат Stage 4."""
    stops: List[Stop] = field(default_factory=list)

    def of_type(self, stop_type: StopType) -> List[Stop]:
        return [stop for stop in self.stops if stop.stop_type == stop_type]

    @property
    def stop_weights(self) -> List[float]:
        return [stop.weight for stop in self.stops if stop.weight is not None]

    def to_dict(self) -> dict:
        return {"stops": [stop.to_dict() for stop in self.stops]}


class StopStage:
    """Stage 4: сборка остановок из блоков."""

    def __init__(
        self,
        date_parser: Optional[DateParser] = None,
        time_window_parser: Optional[TimeWindowParser] = None,
        company_extractor: Optional[CompanyExtractor] = None,
        address_extractor: Optional[AddressExtractor] = None,
        weight_extractor: Optional[WeightExtractor] = None,
        notes_extractor: Optional[NotesExtractor] = None,
    ):
        self.date_parser = date_parser or DateParser()
        self.time_window_parser = time_window_parser or TimeWindowParser()
        self.company_extractor = company_extractor or CompanyExtractor()
        self.address_extractor = address_extractor or AddressExtractor()
        self.weight_extractor = weight_extractor or WeightExtractor()
        self.notes_extractor = notes_extractor or NotesExtractor()

    def process(
        self,
        blocks: BlocksResult,
        document_fields: DocumentResult,
        document: NormalizedDocument,
        config: FormatConfig,
    ) -> StopsResult:
        stops = [self.build_stop(block, document_fields, document, config) for block in blocks.blocks]
        logger.debug(f"[Stage 4: Stops] Собрано остановок: {len(stops)}")
        return StopsResult(stops=stops)

    def build_stop(
        self,
        block: Block,
        document_fields: DocumentResult,
        document: NormalizedDocument,
        config: FormatConfig,
    ) -> Stop:
        block_text = block.text
        header_tokens = config.header_tokens

        stop_date = self.date_parser.first_date(block_text).date
        window_start, window_end = None, None
        if stop_date is not None:
            window_start, window_end = self.time_window_parser.extract(block_text, config.time_windows)

        name = self.company_extractor.extract(block.lines, header_tokens, config.company)

        address = self.address_extractor.extract(block.lines, header_tokens, config.address)
        address = self.address_extractor.apply_overrides(block.stop_type, name, address, config.address_overrides)

        notes = self.notes_extractor.extract(
            block.stop_type,
            block.lines,
            document.lines,
            config.notes,
            header_tokens,
            cargo_number=document_fields.cargo_number,
            order_reference=document_fields.order_reference,
        )

        stop = Stop(
            stop_type=block.stop_type,
            name=name,
            address=address.full,
            postal_code=address.postal_code,
            city=address.city,
            country=address.country,
            date=stop_date,
            window_start=window_start,
            window_end=window_end,
            notes=notes,
            weight=self.weight_extractor.stop_weight(block_text, config.weight.stop_patterns),
        )
        logger.trace(f"[Stage 4: Stops] {stop.stop_type.value}: {stop.to_dict()}")
        return stop
