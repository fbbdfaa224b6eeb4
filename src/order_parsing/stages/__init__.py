"""
Stages модуль: 5 этапов извлечения заказа.

1. Normalize - нормализация пробелов в строках
2. Blocks - сегментация на блоки остановок
3. Document - поля уровня документа
4. Stops - сборка остановок
5. Schema - канонический заказ
"""

from .stage_1_normalize import NormalizeStage, NormalizedDocument
from .stage_2_blocks import BlockStage, BlocksResult
from .stage_3_document import DocumentStage, DocumentResult
from .stage_4_stops import StopStage, StopsResult
from .stage_5_schema import SchemaStage, placeholder_location, total_weight
from .pipeline import OrderExtractionPipeline, PipelineResult

__all__ = [
    "NormalizeStage",
    "NormalizedDocument",
    "BlockStage",
    "BlocksResult",
    "DocumentStage",
    "DocumentResult",
    "StopStage",
    "StopsResult",
    "SchemaStage",
    "placeholder_location",
    "total_weight",
    "OrderExtractionPipeline",
    "PipelineResult",
]
