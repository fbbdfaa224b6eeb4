from typing import Optional

from loguru import logger

from contracts.transport_order_dto import Customer, CustomerDetails
from ..formats.format_config import CustomerConfig, StreetRule
from .cascade import group_value, match_one


class CustomerExtractor:
    """
    Реквизиты заказчика: компания, VAT, улица, индекс, город, страна.

    Сторона и компания по умолчанию задаются форматом.
    """

    def extract(self, text: str, config: CustomerConfig) -> Customer:
        company = match_one(text, config.company_patterns)
        if not company:
            logger.debug(f"[CustomerExtractor] Компания не найдена, используется '{config.default_company}'")
            company = config.default_company

        vat_code = match_one(text, config.vat_patterns)

        details = CustomerDetails(
            company=company,
            vat_code=vat_code,
            street_address=self._street(text, vat_code, config),
            postal_code=match_one(text, config.postal_patterns),
            city=self._city(text, config),
            country=self._country(text, config),
        )
        return Customer(side=config.side, details=details)

    def _street(self, text: str, vat_code: Optional[str], config: CustomerConfig) -> Optional[str]:
        for rule in config.street_rules:
            value = self._apply_street_rule(rule, text, vat_code)
            if value:
                return value
        return None

    def _apply_street_rule(self, rule: StreetRule, text: str, vat_code: Optional[str]) -> Optional[str]:
        """Все заданные условия правила должны выполниться."""
        if rule.vat_prefix and not (vat_code and vat_code.upper().startswith(rule.vat_prefix.upper())):
            return None
        if rule.keyword and rule.keyword.upper() not in text.upper():
            return None

        if rule.pattern is not None:
            m = rule.pattern.search(text)
            if not m:
                return None
            return rule.value or group_value(m)
        return rule.value

    def _city(self, text: str, config: CustomerConfig) -> Optional[str]:
        upper = text.upper()
        for keyword in config.city_keywords:
            if keyword.upper() in upper:
                return keyword.upper()
        return None

    def _country(self, text: str, config: CustomerConfig) -> Optional[str]:
        for country, pattern in config.country_patterns.items():
            if pattern.search(text):
                return country.upper()
        return None
