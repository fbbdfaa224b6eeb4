"""
Format Dispatcher - выбор экстрактора формата для документа.

Экстракторы проверяются по убыванию приоритета; первый, чей
validate_format вернул True, обрабатывает документ.
"""

from typing import Iterable, List, Optional

from loguru import logger

from contracts.transport_order_dto import CanonicalOrder
from .assistants import default_assistants
from .domain.exceptions import UnknownFormatError
from .domain.interfaces import IFormatExtractor, IOrderRepository


class FormatDispatcher:
    """
    Диспетчер форматов.

    Пример:
        dispatcher = FormatDispatcher.from_config()
        order = dispatcher.dispatch(lines, "booking.pdf", repository=JsonOrderRepository())
    """

    def __init__(self, extractors: Iterable[IFormatExtractor]):
        # sorted() стабилен: при равном приоритете сохраняется порядок передачи
        self.extractors: List[IFormatExtractor] = sorted(
            extractors, key=lambda e: getattr(e, "priority", 0), reverse=True
        )
        logger.debug(
            f"[FormatDispatcher] Порядок форматов: "
            f"{[getattr(e, 'name', type(e).__name__) for e in self.extractors]}"
        )

    @classmethod
    def from_config(cls) -> "FormatDispatcher":
        """Диспетчер по всем дескрипторам из каталога форматов."""
        return cls(default_assistants())

    def detect(self, lines: List[str]) -> Optional[IFormatExtractor]:
        """Первый экстрактор, распознавший документ, или None."""
        for extractor in self.extractors:
            if extractor.validate_format(lines):
                return extractor
        return None

    def dispatch(
        self,
        lines: List[str],
        attachment_filename: Optional[str] = None,
        repository: Optional[IOrderRepository] = None,
    ) -> CanonicalOrder:
        """
        Распознаёт формат, извлекает заказ и передаёт его в хранилище.

        Raises:
            UnknownFormatError: Ни один формат не распознал документ
        """
        extractor = self.detect(lines)
        if extractor is None:
            raise UnknownFormatError(
                message=f"Формат документа не распознан: {attachment_filename or '-'}",
                component="FormatDispatcher",
            )

        logger.info(
            f"[FormatDispatcher] {attachment_filename or '-'} -> "
            f"{getattr(extractor, 'name', type(extractor).__name__)}"
        )
        order = extractor.process_lines(lines, attachment_filename)

        if repository is not None:
            repository.create_order(order)
        return order
