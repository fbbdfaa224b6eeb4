"""
Менеджер файлов заказов.

Реализует файловые операции для JSON-хранилища канонических заказов.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List

from loguru import logger

from ..domain.exceptions import OrderFileNotFoundError, OrderWriteError


class OrderFileManager:
    """Менеджер файлов для сохранённых заказов."""

    UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]+")

    def save_json(self, data: Dict[str, Any], file_path: Path) -> Path:
        """
        Сохраняет данные в JSON файл.

        Args:
            data: Данные для сохранения
            file_path: Путь для сохранения

        Returns:
            Путь к сохраненному файлу

        Raises:
            OrderWriteError: Если не удалось сохранить файл
        """
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)

            with open(file_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)

            logger.debug(f"[OrderFileManager] Файл сохранен: {file_path}")
            return file_path

        except (IOError, OSError, TypeError) as e:
            raise OrderWriteError(
                message=f"Не удалось сохранить JSON файл: {file_path}",
                component="OrderFileManager",
                original_error=e,
            )

    def load_json(self, file_path: Path) -> Dict[str, Any]:
        """
        Загружает данные из JSON файла.

        Raises:
            OrderFileNotFoundError: Если файл не существует
            OrderWriteError: Если файл не читается или не JSON
        """
        if not file_path.exists():
            raise OrderFileNotFoundError(
                message=f"Файл не найден: {file_path}",
                component="OrderFileManager",
            )

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (IOError, OSError, json.JSONDecodeError) as e:
            raise OrderWriteError(
                message=f"Не удалось загрузить JSON файл: {file_path}",
                component="OrderFileManager",
                original_error=e,
            )

        logger.debug(f"[OrderFileManager] Файл загружен: {file_path}")
        return data

    def file_stem(self, reference: str) -> str:
        """Безопасное имя файла из референса ("ZIE/123 45" -> "ZIE_123_45")."""
        stem = self.UNSAFE_CHARS_RE.sub("_", reference).strip("._")
        return stem or "order"

    def list_orders(self, directory_path: Path) -> List[Path]:
        """JSON файлы заказов в директории (отсортированы)."""
        if not directory_path.exists():
            return []
        return sorted(directory_path.glob("*.json"))
