"""
Базовый экстрактор формата партнёра.

Каждый формат = YAML-дескриптор + тонкий подкласс с именем формата.
Вся логика извлечения живёт в общем пайплайне, подкласс только
выбирает дескриптор и может переопределить отдельные шаги.
"""

from typing import Iterable, List, Optional

from loguru import logger

from contracts.transport_order_dto import CanonicalOrder
from ..domain.interfaces import IFormatExtractor
from ..formats.config_loader import ConfigLoader
from ..formats.format_config import FormatConfig
from ..stages.pipeline import OrderExtractionPipeline, PipelineResult


class FormatExtractor(IFormatExtractor):
    """
    Экстрактор одного формата партнёра поверх OrderExtractionPipeline.

    ЦКП: validate_format никогда не бросает, process_lines всегда
    возвращает полностью заполненный CanonicalOrder.
    """

    # Код формата (каталог formats/<FORMAT_NAME>/parsing.yaml)
    FORMAT_NAME: str = ""

    def __init__(self, config: Optional[FormatConfig] = None, config_loader: Optional[ConfigLoader] = None):
        """
        Args:
            config: Готовый дескриптор (по умолчанию загружается по FORMAT_NAME)
            config_loader: Загрузчик дескрипторов
        """
        if config is None:
            config = (config_loader or ConfigLoader()).load(self.FORMAT_NAME)
        self.config = config
        self.pipeline = OrderExtractionPipeline(config)

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def priority(self) -> int:
        return self.config.priority

    def validate_format(self, lines: Iterable) -> bool:
        """Регистронезависимый поиск ключевых слов формата."""
        try:
            hay = "\n".join(str(line) for line in (lines or []) if line is not None).upper()
        except TypeError as e:
            logger.warning(f"[{self.__class__.__name__}] Некорректный вход validate_format: {e}")
            return False

        matched = [kw for kw in self.config.detection.keywords if kw in hay]
        if matched:
            logger.debug(f"[{self.__class__.__name__}] Формат распознан по {matched}")
        return bool(matched)

    def process_lines(self, lines: List[str], attachment_filename: Optional[str] = None) -> CanonicalOrder:
        return self.process(lines, attachment_filename).order

    def process(self, lines: List[str], attachment_filename: Optional[str] = None) -> PipelineResult:
        """То же, что process_lines, но с промежуточными результатами стадий."""
        return self.pipeline.process(lines, attachment_filename)
