"""
Unit-тесты для AddressExtractor.

Сбор строк адреса, разбор на индекс/город/страну и исправления площадок.
"""

import pytest

from src.order_parsing.domain.models import AddressResult, StopType
from src.order_parsing.extraction.address_extractor import AddressExtractor
from src.order_parsing.formats.config_loader import ConfigLoader


@pytest.fixture(scope="module")
def transalliance():
    return ConfigLoader().load("transalliance")


@pytest.fixture(scope="module")
def ziegler():
    return ConfigLoader().load("ziegler")


@pytest.fixture
def extractor():
    return AddressExtractor()


class TestCollectLines:
    def test_lines_after_reference_until_terminator(self, extractor, transalliance):
        block = [
            "LOADING",
            "ACME BEFORE REF",
            "REFERENCE",
            "ACME SA",
            "12 RUE DE LA PAIX",
            "75002 PARIS",
            "05/03/24 08h00-12h00",
            "Weight: 12 000",
            "nature of goods: PAPER",
            "IGNORED",
        ]
        lines = extractor.collect_lines(block, transalliance.header_tokens, transalliance.address)
        assert lines == ["ACME SA", "12 RUE DE LA PAIX", "75002 PARIS"]

    def test_no_reference_marker_gives_nothing(self, extractor, transalliance):
        block = ["LOADING", "ACME SA", "75002 PARIS"]
        assert extractor.collect_lines(block, transalliance.header_tokens, transalliance.address) == []

    def test_blank_line_ends_ziegler_address(self, extractor, ziegler):
        block = ["Collection ACME", "REF: X-1", "1 LONDON ROAD", "DARTFORD, DA1 5PZ", "", "UNIT 9 ROAD"]
        lines = extractor.collect_lines(block, ziegler.header_tokens, ziegler.address)
        assert lines == ["1 LONDON ROAD", "DARTFORD, DA1 5PZ"]


class TestDecompose:
    def test_french_address(self, extractor, transalliance):
        result = extractor.decompose("ACME SA, 12 RUE DE LA PAIX, 75002 PARIS", transalliance.address)
        assert result.postal_code == "75002"
        assert result.city == "PARIS"
        assert result.country == "FR"

    def test_uk_postcode(self, extractor, transalliance):
        result = extractor.decompose("UNIT 4, THAMES ROAD, DA1 5PZ DARTFORD", transalliance.address)
        assert result.postal_code == "DA1 5PZ"
        assert result.country == "GB"
        assert result.city is None

    def test_german_token(self, extractor, transalliance):
        assert extractor.decompose("LAGERSTRASSE 7, DE BERLIN", transalliance.address).country == "DE"

    def test_lithuanian_token(self, extractor, transalliance):
        assert extractor.decompose("ROGIU G. 2, LT VILNIUS", transalliance.address).country == "LT"

    def test_five_digits_win_over_later_rules(self, extractor, transalliance):
        """Порядок правил фиксирован: FR по индексу проверяется раньше DE."""
        assert extractor.decompose("HAUPTSTRASSE 1, DE-12345 BERLIN", transalliance.address).country == "FR"

    def test_unknown_country(self, extractor, transalliance):
        result = extractor.decompose("SOMEWHERE", transalliance.address)
        assert result == AddressResult(full="SOMEWHERE")

    def test_ziegler_extract(self, extractor, ziegler):
        block = ["Collection ACME", "REF: X-1", "1 LONDON ROAD", "DARTFORD, DA1 5PZ"]
        result = extractor.extract(block, ziegler.header_tokens, ziegler.address)
        assert result.full == "1 LONDON ROAD, DARTFORD, DA1 5PZ"
        assert result.city == "DARTFORD"
        assert result.postal_code == "DA1 5PZ"
        assert result.country == "GB"

    def test_empty_block(self, extractor, ziegler):
        assert extractor.extract(["Collection ACME"], ziegler.header_tokens, ziegler.address) == AddressResult()


class TestOverrides:
    def test_by_company_name(self, extractor, transalliance):
        result = extractor.apply_overrides(
            StopType.PICKUP,
            "DP WORLD LONDON GATEWAY PORT",
            AddressResult(full="LONDON GATEWAY LOGISTICS PARK"),
            transalliance.address_overrides,
        )
        assert result == AddressResult(
            full="1 LONDON GATEWAY", postal_code="SS17 9DY", city="CORRINGHAM, STANFORD", country="GB"
        )

    def test_by_address_pattern(self, extractor, transalliance):
        address = AddressResult(full="ZI DISTRIPORT, 2 RUE DE TOKYO, 13230 PORT SAINT LOUIS", postal_code="13230")
        result = extractor.apply_overrides(StopType.DELIVERY, "ACME", address, transalliance.address_overrides)
        assert result.full == "ZI DISTRIPORT 2 RUE DE TOKYO"
        assert result.city == "PORT-SAINT-LOUIS-DU-RHONE"
        assert result.country == "FR"

    def test_stop_type_must_match(self, extractor, transalliance):
        address = AddressResult(full="SOMEWHERE")
        result = extractor.apply_overrides(
            StopType.DELIVERY, "DP WORLD LONDON GATEWAY PORT", address, transalliance.address_overrides
        )
        assert result is address
