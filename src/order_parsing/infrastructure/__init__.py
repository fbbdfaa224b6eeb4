"""
Инфраструктурный слой.

Содержит файловый менеджер и JSON-хранилище заказов.
"""

from .file_manager import OrderFileManager
from .json_repository import JsonOrderRepository

__all__ = [
    "OrderFileManager",
    "JsonOrderRepository",
]
