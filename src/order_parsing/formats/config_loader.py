"""
Config Loader для дескрипторов форматов партнёров.

ЦКП: Загрузка валидированной модели FormatConfig для формата.

Архитектурный принцип:
- Новый партнёр = новый каталог formats/<name>/parsing.yaml
- Общие списки (метки метаданных, терминаторы адреса) живут в base.yaml
  и подключаются через $extends
- Результат кешируется: после загрузки дескриптор только читается
"""

from pathlib import Path
from typing import Any, ClassVar, Dict, List, Optional

import yaml
from loguru import logger
from pydantic import ValidationError

from config.settings import FORMATS_DIR
from ..domain.exceptions import FormatConfigurationError, FormatNotFoundError
from .format_config import FormatConfig


CONFIG_FILE_NAME = "parsing.yaml"
BASE_FILE_NAME = "base.yaml"


class ConfigLoader:
    """
    Загрузчик дескрипторов форматов.

    Кеш общий для всех экземпляров одного каталога.
    """

    _cache: ClassVar[Dict[str, FormatConfig]] = {}

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else FORMATS_DIR

    def _cache_key(self, format_name: str) -> str:
        return f"{self.config_dir}::{format_name}"

    def load(self, format_name: str) -> FormatConfig:
        """
        Загружает дескриптор формата из YAML.

        Raises:
            FormatNotFoundError: Нет parsing.yaml для формата
            FormatConfigurationError: YAML или структура некорректны
        """
        key = self._cache_key(format_name)
        if key in self._cache:
            return self._cache[key]

        config = self._load_format_yaml(format_name)
        self._cache[key] = config

        logger.debug(
            f"[ConfigLoader] Загружен FormatConfig для {format_name}: "
            f"{len(config.blocks.headers)} заголовков, "
            f"{len(config.detection.keywords)} ключевых слов"
        )
        return config

    def available_formats(self) -> List[str]:
        """Коды форматов, для которых есть parsing.yaml."""
        if not self.config_dir.exists():
            logger.warning(f"[ConfigLoader] Директория форматов не найдена: {self.config_dir}")
            return []
        return sorted(
            item.name for item in self.config_dir.iterdir()
            if item.is_dir() and not item.name.startswith("_") and (item / CONFIG_FILE_NAME).exists()
        )

    def load_all(self) -> List[FormatConfig]:
        """Все дескрипторы по убыванию приоритета (порядок диспетчера)."""
        configs = [self.load(name) for name in self.available_formats()]
        return sorted(configs, key=lambda c: c.priority, reverse=True)

    @classmethod
    def clear_cache(cls) -> None:
        cls._cache.clear()

    def _read_yaml(self, path: Path) -> dict:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise FormatConfigurationError(
                message=f"Не удалось разобрать YAML: {path}",
                component="ConfigLoader",
                original_error=e,
            )

    def _load_base_config(self) -> dict:
        """Загружает общие списки из base.yaml."""
        base_file = self.config_dir / BASE_FILE_NAME

        if not base_file.exists():
            logger.warning(f"[ConfigLoader] base.yaml не найден: {base_file}")
            return {}

        return self._read_yaml(base_file)

    def _resolve_extends(self, value: Any, base_config: dict) -> Any:
        """
        Рекурсивно подставляет списки из base.yaml.

        Поддерживает форматы элементов списка:
        - Строка: "$extends: key"
        - Словарь: {"$extends": "key"} (YAML без кавычек)
        """
        if isinstance(value, dict):
            return {k: self._resolve_extends(v, base_config) for k, v in value.items()}

        if not isinstance(value, list):
            return value

        result = []
        for item in value:
            extended_key = None

            if isinstance(item, str) and item.startswith("$extends:"):
                extended_key = item.split(":", 1)[1].strip()
            elif isinstance(item, dict) and "$extends" in item:
                extended_key = item["$extends"]

            if extended_key is None:
                result.append(self._resolve_extends(item, base_config))
                continue

            extended = base_config.get(extended_key)
            if not extended:
                raise FormatConfigurationError(
                    message=f"Ключ '{extended_key}' для $extends не найден в base.yaml",
                    component="ConfigLoader",
                )
            logger.trace(f"[ConfigLoader] Inheriting {len(extended)} items for '{extended_key}'")
            result.extend(extended)

        return result

    def _load_format_yaml(self, format_name: str) -> FormatConfig:
        config_file = self.config_dir / format_name / CONFIG_FILE_NAME

        if not config_file.exists():
            raise FormatNotFoundError(
                message=f"Дескриптор для {format_name} не найден: {config_file}",
                component="ConfigLoader",
            )

        base_config = self._load_base_config()
        config_data = self._resolve_extends(self._read_yaml(config_file), base_config)
        config_data.setdefault("name", format_name)

        try:
            return FormatConfig.model_validate(config_data)
        except ValidationError as e:
            raise FormatConfigurationError(
                message=f"Некорректный дескриптор {config_file}",
                component="ConfigLoader",
                original_error=e,
            )
