import re
from typing import Dict, List, Optional

from loguru import logger


class MoneyParser:
    """Элемент-функция: нормализует денежную строку в смешанном EU/US формате."""

    WHITESPACE_RE = re.compile(r"\s+")
    NON_NUMERIC_RE = re.compile(r"[^0-9.]")

    def parse(self, raw: Optional[str], decimal_separator: Optional[str] = None) -> float:
        """
        ЦКП: Число (float). 0.0 если строка не число. Никогда не бросает.

        Args:
            raw: Сырая строка суммы ("25.000,50", "25,000.50", "1 250")
            decimal_separator: Зафиксированный разделитель дроби формата.
                None - авто: при обоих разделителях дробный тот, что правее;
                одна запятая считается дробной.
        """
        if not raw:
            return 0.0

        v = self.WHITESPACE_RE.sub("", raw)
        negative = v.startswith("-")

        if decimal_separator == ".":
            v = v.replace(",", "")
        elif decimal_separator == ",":
            v = v.replace(".", "").replace(",", ".")
        elif "," in v and "." in v:
            if v.rfind(",") > v.rfind("."):
                v = v.replace(".", "").replace(",", ".")
            else:
                v = v.replace(",", "")
        elif "," in v:
            v = v.replace(",", ".")

        v = self.NON_NUMERIC_RE.sub("", v)

        # 1.250.000 - несколько точек значит группы тысяч
        if v.count(".") > 1:
            v = v.replace(".", "")

        try:
            value = float(v)
        except ValueError:
            logger.trace(f"[MoneyParser] Не число после очистки: '{raw}' -> '{v}'")
            return 0.0

        return -value if negative else value


class CurrencyDetector:
    """Определяет валюту по первому вхождению ISO кода или символа."""

    def detect(self, text: str, codes: List[str], symbols: Dict[str, str]) -> Optional[str]:
        """
        Returns:
            ISO код самого раннего вхождения в тексте или None
        """
        candidates = []
        for code in codes:
            m = re.search(rf"\b{re.escape(code)}\b", text, re.IGNORECASE)
            if m:
                candidates.append((m.start(), code.upper()))
        for symbol, code in symbols.items():
            idx = text.find(symbol)
            if idx >= 0:
                candidates.append((idx, code.upper()))

        if not candidates:
            return None

        # min() стабилен: при равной позиции побеждает порядок в конфиге
        position, code = min(candidates, key=lambda c: c[0])
        logger.debug(f"[CurrencyDetector] Валюта {code} (позиция {position})")
        return code
