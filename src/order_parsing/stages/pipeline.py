"""
Order Extraction Pipeline - Оркестратор 5 этапов.

Координирует выполнение всех этапов в строгом порядке:
1. Normalize -> 2. Blocks -> 3. Document -> 4. Stops -> 5. Schema

Возвращает CanonicalOrder (контракт Parsing -> createOrder).
"""

import time
from dataclasses import dataclass
from typing import Iterable, Optional

from loguru import logger

from contracts.transport_order_dto import CanonicalOrder
from ..formats.format_config import FormatConfig
from .stage_1_normalize import NormalizeStage, NormalizedDocument
from .stage_2_blocks import BlockStage, BlocksResult
from .stage_3_document import DocumentStage, DocumentResult
from .stage_4_stops import StopStage, StopsResult
from .stage_5_schema import SchemaStage


@dataclass
class PipelineResult:
    """
    Полный результат пайплайна со всеми промежуточными данными.

    Используется для отладки и анализа.
    """
    # Финальный результат
    order: CanonicalOrder

    # Промежуточные результаты этапов
    normalized: Optional[NormalizedDocument] = None
    blocks: Optional[BlocksResult] = None
    document: Optional[DocumentResult] = None
    stops: Optional[StopsResult] = None

    # Метрики
    processing_time_ms: float = 0.0
    stages_completed: int = 0

    def to_dict(self) -> dict:
        return {
            "order": self.order.to_payload() if self.order else None,
            "normalized": self.normalized.to_dict() if self.normalized else None,
            "blocks": self.blocks.to_dict() if self.blocks else None,
            "document": self.document.to_dict() if self.document else None,
            "stops": self.stops.to_dict() if self.stops else None,
            "processing_time_ms": self.processing_time_ms,
            "stages_completed": self.stages_completed,
        }


class OrderExtractionPipeline:
    """
    Пайплайн извлечения заказа для одного формата партнёра.

    ЦКП: CanonicalOrder для любого входа, включая пустой список строк.
    Экземпляр хранит только неизменяемый дескриптор формата и stateless стадии.
    """

    def __init__(
        self,
        config: FormatConfig,
        normalize_stage: Optional[NormalizeStage] = None,
        block_stage: Optional[BlockStage] = None,
        document_stage: Optional[DocumentStage] = None,
        stop_stage: Optional[StopStage] = None,
        schema_stage: Optional[SchemaStage] = None,
    ):
        """
        Args:
            config: Дескриптор формата
            Все этапы опциональны - по умолчанию создаются стандартные.
        """
        self.config = config
        self.normalize_stage = normalize_stage or NormalizeStage()
        self.block_stage = block_stage or BlockStage()
        self.document_stage = document_stage or DocumentStage()
        self.stop_stage = stop_stage or StopStage()
        self.schema_stage = schema_stage or SchemaStage()

        logger.debug(f"[OrderExtractionPipeline] Инициализирован для формата '{config.name}'")

    def process(self, lines: Iterable, attachment_filename: Optional[str] = None) -> PipelineResult:
        """
        Обрабатывает строки документа через все 5 этапов.

        Args:
            lines: Строки документа
            attachment_filename: Имя исходного вложения

        Returns:
            PipelineResult: Полный результат с заказом и промежуточными данными
        """
        start_time = time.time()
        logger.info(f"[OrderExtractionPipeline] Старт обработки ({self.config.name}): {attachment_filename or '-'}")

        stages_completed = 0

        # Stage 1: Normalize
        logger.debug("[OrderExtractionPipeline] Stage 1/5: Normalize")
        normalized = self.normalize_stage.process(lines)
        stages_completed += 1

        # Stage 2: Blocks
        logger.debug("[OrderExtractionPipeline] Stage 2/5: Blocks")
        blocks = self.block_stage.process(normalized, self.config.blocks)
        stages_completed += 1

        # Stage 3: Document
        logger.debug("[OrderExtractionPipeline] Stage 3/5: Document")
        document = self.document_stage.process(normalized, self.config, attachment_filename)
        stages_completed += 1

        # Stage 4: Stops
        logger.debug("[OrderExtractionPipeline] Stage 4/5: Stops")
        stops = self.stop_stage.process(blocks, document, normalized, self.config)
        stages_completed += 1

        # Stage 5: Schema
        logger.debug("[OrderExtractionPipeline] Stage 5/5: Schema")
        order = self.schema_stage.process(stops, document, normalized, self.config, attachment_filename)
        stages_completed += 1

        processing_time_ms = (time.time() - start_time) * 1000

        logger.info(
            f"[OrderExtractionPipeline] Завершено за {processing_time_ms:.1f}ms: "
            f"ref={order.order_reference}, {len(stops.stops)} остановок"
        )

        return PipelineResult(
            order=order,
            normalized=normalized,
            blocks=blocks,
            document=document,
            stops=stops,
            processing_time_ms=processing_time_ms,
            stages_completed=stages_completed,
        )
