import re
from typing import List, Optional

from loguru import logger

from ..domain.models import AddressResult, StopType
from ..formats.format_config import AddressConfig, AddressOverride
from .cascade import group_value
from .line_tools import is_header_line, matches_any


class AddressExtractor:
    """
    Системный экстрактор адресов остановки.
    Собирает строки адреса блока и раскладывает их на индекс, город и страну.
    """

    # Шаблоны почтовых индексов
    FIVE_DIGIT_RE = re.compile(r"\b\d{5}\b")
    UK_POSTCODE_RE = re.compile(r"\b[A-Z]{1,2}\d[A-Z\d]?\s*\d[A-Z]{2}\b", re.IGNORECASE)

    REFERENCE_MARKER_RE = re.compile(r"^REFERENCE\b", re.IGNORECASE)

    def extract(self, block_lines: List[str], header_tokens: List[str], config: AddressConfig) -> AddressResult:
        """
        Ищет адрес в строках блока.

        Args:
            block_lines: Строки блока (первая - заголовок)
            header_tokens: Токены заголовков формата
            config: Настройки адреса формата
        """
        lines = self.collect_lines(block_lines, header_tokens, config)
        if not lines:
            return AddressResult()
        return self.decompose(", ".join(lines), config)

    def collect_lines(self, block_lines: List[str], header_tokens: List[str], config: AddressConfig) -> List[str]:
        """Строки адреса: после заголовка (и REFERENCE, если требуется) до терминатора."""
        address_lines = []
        in_block = False
        after_reference = not config.require_reference_marker

        for raw in block_lines:
            text = raw.strip()
            if not text:
                if in_block and config.stop_at_blank:
                    break
                continue

            if not in_block:
                if is_header_line(text, header_tokens):
                    in_block = True
                continue

            if is_header_line(text, header_tokens):
                break

            if config.require_reference_marker and self.REFERENCE_MARKER_RE.search(text):
                after_reference = True
                continue
            if not after_reference:
                continue

            if matches_any(text, config.terminators):
                break
            if matches_any(text, config.skip_patterns):
                continue
            if config.line_patterns and not matches_any(text, config.line_patterns):
                continue

            address_lines.append(text)

        return address_lines

    def decompose(self, full: str, config: AddressConfig) -> AddressResult:
        """Раскладывает адрес одной строкой на индекс, город и страну."""
        postal = self._postal_code(full)
        country = self._country(full, config)
        city = self._city(full, config)

        logger.debug(f"[AddressExtractor] '{full}' -> postal={postal}, city={city}, country={country}")
        return AddressResult(full=full, postal_code=postal, city=city, country=country)

    def apply_overrides(
        self,
        stop_type: StopType,
        name: Optional[str],
        address: AddressResult,
        overrides: List[AddressOverride],
    ) -> AddressResult:
        """Заменяет адрес известной площадки партнёра, первое подходящее правило."""
        for rule in overrides:
            if rule.stop_type != stop_type:
                continue
            if rule.name_contains and (not name or rule.name_contains.upper() not in name.upper()):
                continue
            if rule.address_pattern is not None and (not address.full or not rule.address_pattern.search(address.full)):
                continue

            logger.debug(f"[AddressExtractor] Исправление адреса площадки: '{rule.address}'")
            return AddressResult(
                full=rule.address,
                postal_code=rule.postal_code or address.postal_code,
                city=rule.city or address.city,
                country=rule.country or address.country,
            )
        return address

    def _postal_code(self, full: str) -> Optional[str]:
        m = self.FIVE_DIGIT_RE.search(full)
        if m:
            return m.group(0)
        m = self.UK_POSTCODE_RE.search(full)
        if m:
            return re.sub(r"\s+", " ", m.group(0).upper())
        return None

    def _country(self, full: str, config: AddressConfig) -> Optional[str]:
        upper = full.upper()
        for rule in config.country_rules:
            for token in rule.tokens:
                tail = r"\b" if token[-1].isalnum() else ""
                if re.search(r"\b" + re.escape(token.upper()) + tail, upper):
                    return rule.country
            if rule.postcode == "uk" and self.UK_POSTCODE_RE.search(full):
                return rule.country
            if rule.postcode == "five_digit" and self.FIVE_DIGIT_RE.search(full):
                return rule.country
        return None

    def _city(self, full: str, config: AddressConfig) -> Optional[str]:
        for pattern in config.city_patterns:
            m = pattern.search(full)
            if not m:
                continue
            city = group_value(m).upper().strip(" ,-")
            if len(city) >= 2:
                return city
        return None
