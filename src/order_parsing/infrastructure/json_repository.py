from pathlib import Path
from typing import Optional

from loguru import logger

from config.settings import OUTPUT_DIR
from contracts.transport_order_dto import CanonicalOrder
from ..domain.interfaces import IOrderRepository
from .file_manager import OrderFileManager


class JsonOrderRepository(IOrderRepository):
    """
    Хранилище заказов в виде JSON файлов <reference>.json.

    Заменяет внешний createOrder при локальной обработке.
    """

    def __init__(self, output_dir: Optional[Path] = None, file_manager: Optional[OrderFileManager] = None):
        self.output_dir = Path(output_dir) if output_dir else OUTPUT_DIR
        self.file_manager = file_manager or OrderFileManager()
        self.last_path: Optional[Path] = None

    def path_for(self, reference: str) -> Path:
        return self.output_dir / f"{self.file_manager.file_stem(reference)}.json"

    def create_order(self, order: CanonicalOrder) -> None:
        path = self.path_for(order.order_reference)
        self.last_path = self.file_manager.save_json(order.to_payload(), path)
        logger.info(f"[JsonOrderRepository] Заказ {order.order_reference} сохранен: {path}")

    def load_order(self, reference: str) -> CanonicalOrder:
        """Читает ранее сохранённый заказ и валидирует по контракту."""
        return CanonicalOrder.model_validate(self.file_manager.load_json(self.path_for(reference)))
