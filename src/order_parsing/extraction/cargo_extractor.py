import re
from typing import List, Optional

from loguru import logger

from config.settings import FTL_MIN_LOAD_METERS, STANDARD_TRAILER_LOAD_METERS
from ..formats.format_config import CargoConfig, LoadMetersConfig
from .cascade import first_match, group_value, match_one


class CargoExtractor:
    """
    Поля груза документа: название, паллеты, погрузочные метры (LDM), тип отправки.
    """

    FTL_RE = re.compile(r"\bFTL\b", re.IGNORECASE)
    STANDARD_TRAILER_RE = re.compile(r"(?<![\d.,])13\s*[.,]\s*6(?![\d.,])")

    def title(self, text: str, config: CargoConfig) -> str:
        """Ключевое слово формата, затем метка товара, иначе название по умолчанию."""
        upper = text.upper()
        for keyword in config.title_keywords:
            if keyword.upper() in upper:
                return keyword
        return match_one(text, config.title_patterns) or config.default_title

    def pallet_count(self, text: str, patterns: List[re.Pattern]) -> int:
        """Количество паллет (только цифры захвата); 0 если не найдено."""
        for pattern in patterns:
            m = pattern.search(text)
            if not m:
                continue
            digits = re.sub(r"\D", "", group_value(m))
            if digits:
                return int(digits)
        return 0

    def is_palletized(self, title: str, pallets: int, config: CargoConfig) -> bool:
        return pallets > 0 or title in config.pallet_titles

    def load_meters(self, text: str, config: LoadMetersConfig) -> Optional[float]:
        """
        Погрузочные метры:
        1. LDM: 13,6 (метка, затем число)
        2. 13.6 LDM (число, затем метка)
        3. голое 13.6 / 13,6 - стандартный трейлер (если включено в формате)
        """
        if not config.enabled or not config.labels:
            return None

        labels = "|".join(re.escape(label) for label in config.labels)
        number = r"(\d+(?:[.,]\d+)?)"
        chain = [
            ("label_value", self._meters_strategy(re.compile(rf"\b(?:{labels})\b\s*[:\-]?\s*{number}", re.IGNORECASE))),
            ("value_label", self._meters_strategy(re.compile(rf"\b{number}\s*(?:{labels})\b", re.IGNORECASE))),
        ]
        if config.standard_trailer_fallback:
            chain.append(
                ("standard_trailer", lambda t: STANDARD_TRAILER_LOAD_METERS if self.STANDARD_TRAILER_RE.search(t) else None)
            )
        return first_match(chain, text, component="CargoExtractor")

    def shipment_type(self, text: str, ldm: Optional[float]) -> Optional[str]:
        """FTL при явном маркере или длине погрузки от 12 м."""
        if self.FTL_RE.search(text) or (ldm is not None and ldm >= FTL_MIN_LOAD_METERS):
            return "FTL"
        return None

    @staticmethod
    def _meters_strategy(pattern: re.Pattern):
        def strategy(text: str) -> Optional[float]:
            m = pattern.search(text)
            if not m:
                return None
            try:
                return float(m.group(1).replace(",", "."))
            except ValueError:
                logger.trace(f"[CargoExtractor] Не число LDM: '{m.group(1)}'")
                return None
        return strategy
