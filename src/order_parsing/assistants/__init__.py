"""
Assistants: экстракторы форматов партнёров.

Пример:
    assistant = get_assistant("ziegler")
    order = assistant.process_lines(lines, "booking.pdf")
"""

from typing import Dict, List, Optional, Type

from loguru import logger

from ..formats.config_loader import ConfigLoader
from .base import FormatExtractor
from .transalliance import TransallianceAssistant
from .ziegler import ZieglerAssistant

# Маппинг кодов форматов на классы
ASSISTANT_MAP: Dict[str, Type[FormatExtractor]] = {
    "transalliance": TransallianceAssistant,
    "ziegler": ZieglerAssistant,
}


def get_assistant(format_name: str, config_loader: Optional[ConfigLoader] = None) -> FormatExtractor:
    """
    Экстрактор для кода формата.

    Форматы без собственного класса обслуживаются базовым FormatExtractor
    по их parsing.yaml.
    """
    name = format_name.strip().lower()
    loader = config_loader or ConfigLoader()
    assistant_cls = ASSISTANT_MAP.get(name)
    if assistant_cls is None:
        logger.debug(f"[Assistants] Нет класса для '{name}', используется FormatExtractor")
        return FormatExtractor(config=loader.load(name))
    return assistant_cls(config_loader=loader)


def default_assistants(config_loader: Optional[ConfigLoader] = None) -> List[FormatExtractor]:
    """Экстракторы всех форматов из каталога дескрипторов."""
    loader = config_loader or ConfigLoader()
    return [get_assistant(name, loader) for name in loader.available_formats()]


__all__ = [
    "FormatExtractor",
    "TransallianceAssistant",
    "ZieglerAssistant",
    "ASSISTANT_MAP",
    "get_assistant",
    "default_assistants",
]
