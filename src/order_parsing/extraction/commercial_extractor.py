import re
from typing import List, Optional

from ..formats.format_config import CurrencyConfig, PriceConfig, TransportNumbersConfig
from .cascade import group_value, match_one
from .money_parser import CurrencyDetector, MoneyParser


# Incoterms 2010 / 2020
INCOTERMS = {"EXW", "FCA", "CPT", "CIP", "DAT", "DAP", "DPU", "DDP", "FAS", "FOB", "CFR", "CIF"}


class CommercialExtractor:
    """Коммерческие поля заказа: фрахт, валюта, Incoterms, номера транспорта."""

    def __init__(self):
        self.money_parser = MoneyParser()
        self.currency_detector = CurrencyDetector()

    def freight_price(self, text: str, config: PriceConfig) -> float:
        """Фрахт >= 0; 0.0 если метка не найдена."""
        raw = match_one(text, config.patterns)
        if raw is None:
            return 0.0
        return max(0.0, self.money_parser.parse(raw, config.decimal_separator))

    def currency(self, text: str, config: CurrencyConfig) -> str:
        return self.currency_detector.detect(text, config.codes, config.symbols) or config.default

    def incoterms(self, text: str, patterns: List[re.Pattern]) -> Optional[str]:
        """Код Incoterms из списка 2010/2020, иначе None."""
        for pattern in patterns:
            for m in pattern.finditer(text):
                code = group_value(m).upper()
                if code in INCOTERMS:
                    return code
        return None

    def transport_numbers(self, text: str, config: TransportNumbersConfig) -> Optional[str]:
        """
        Регистрация тягача и все уникальные OT номера.

        Пример: "AB-123-CD; OT 778899, OT 778900"
        """
        parts = []

        registration = match_one(text, config.registration_patterns)
        if registration:
            parts.append(registration)

        if config.collect_pattern is not None:
            ids = []
            for m in config.collect_pattern.finditer(text):
                value = group_value(m)
                if value and value not in ids:
                    ids.append(value)
            if ids:
                prefix = config.collect_prefix
                parts.append(f"{prefix} " + f", {prefix} ".join(ids))

        return "; ".join(parts) if parts else None
