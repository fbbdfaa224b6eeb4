"""
Formats: YAML-дескрипторы форматов партнёров и их загрузчик.
"""

from .config_loader import ConfigLoader
from .format_config import FormatConfig

__all__ = [
    "ConfigLoader",
    "FormatConfig",
]
