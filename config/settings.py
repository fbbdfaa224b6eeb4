"""
Настройки проекта Freight Order Parser.

Значения по умолчанию для пайплайна извлечения заказов.
Специфичные для партнёров параметры лежат в YAML-дескрипторах форматов
(src/order_parsing/formats/<format>/parsing.yaml).
"""

import os
import sys
from pathlib import Path

from loguru import logger

# =============================================================================
# ПУТИ ПРОЕКТА
# =============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
OUTPUT_DIR = Path(os.getenv("ORDER_PARSING_OUTPUT_DIR", str(DATA_DIR / "output")))

# Директория с YAML-дескрипторами форматов
FORMATS_DIR = PROJECT_ROOT / "src" / "order_parsing" / "formats"

# =============================================================================
# ЛОГИРОВАНИЕ
# =============================================================================
LOG_LEVEL = os.getenv("ORDER_PARSING_LOG_LEVEL", "INFO")
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | <level>{message}</level>"
)

# =============================================================================
# ДЕФОЛТЫ КАНОНИЧЕСКОГО ЗАКАЗА
# =============================================================================
# Валюта, если формат не задал свою и в документе ничего не найдено
DEFAULT_CURRENCY = os.getenv("ORDER_PARSING_DEFAULT_CURRENCY", "EUR")

# Референс заказа, если нет ни метки, ни имени вложения
UNKNOWN_REFERENCE = "unknown"

# Компания для локации-заглушки
PLACEHOLDER_COMPANY = "Unknown"

# Название груза по умолчанию
DEFAULT_CARGO_TITLE = "General cargo"

# =============================================================================
# ЭВРИСТИКИ ГРУЗА
# =============================================================================
# Длина загрузки (м), начиная с которой груз считается FTL
FTL_MIN_LOAD_METERS = 12.0

# Стандартная длина полуприцепа (м)
STANDARD_TRAILER_LOAD_METERS = 13.6

# Минимальный правдоподобный вес (кг) для fallback-стратегий по документу
MIN_DOCUMENT_WEIGHT_KG = 1000.0

# =============================================================================
# ЭВРИСТИКИ РЕФЕРЕНСА
# =============================================================================
# Кандидаты-референсы: длина цифровых токенов
REFERENCE_TOKEN_MIN_DIGITS = 6
REFERENCE_TOKEN_MAX_DIGITS = 8
# После фильтрации оставляем только такие длины
REFERENCE_CANDIDATE_MIN_DIGITS = 7


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Ставит единственный stderr-sink loguru с нужным уровнем."""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)


def validate_config():
    """Проверяет корректность конфигурации."""
    errors = []

    if not FORMATS_DIR.exists():
        errors.append(f"Директория форматов не найдена: {FORMATS_DIR}")

    if len(DEFAULT_CURRENCY) != 3 or not DEFAULT_CURRENCY.isalpha():
        errors.append(f"DEFAULT_CURRENCY должен быть ISO-кодом из 3 букв, получено: {DEFAULT_CURRENCY}")

    if errors:
        raise ValueError("\n".join(errors))

    return True
