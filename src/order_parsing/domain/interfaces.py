"""
Интерфейсы (абстрактные классы) для домена Parsing.

Домен Parsing отвечает за:
1. Распознавание формата партнёра по тексту документа
2. Извлечение канонического транспортного заказа
3. Передачу заказа во внешнее хранилище (createOrder)
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from contracts.transport_order_dto import CanonicalOrder


class IFormatExtractor(ABC):
    """Интерфейс экстрактора одного формата партнёра."""

    @abstractmethod
    def validate_format(self, lines: List[str]) -> bool:
        """
        Проверяет, относится ли документ к этому формату.

        Args:
            lines: Строки документа

        Returns:
            True если формат распознан. Никогда не бросает исключений.
        """
        pass

    @abstractmethod
    def process_lines(self, lines: List[str], attachment_filename: Optional[str] = None) -> CanonicalOrder:
        """
        Извлекает канонический заказ из строк документа.

        Args:
            lines: Строки документа (может быть пустым списком)
            attachment_filename: Имя исходного вложения

        Returns:
            Полностью заполненный CanonicalOrder
        """
        pass


class IOrderRepository(ABC):
    """Интерфейс внешнего хранилища заказов."""

    @abstractmethod
    def create_order(self, order: CanonicalOrder) -> None:
        """Принимает готовый заказ."""
        pass
