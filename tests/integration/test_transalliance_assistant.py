"""
Интеграционные тесты формата Transalliance.

Полный прогон пайплайна по реальному YAML-дескриптору, без моков.
"""

from pathlib import Path

import pytest

from src.order_parsing.assistants import TransallianceAssistant

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

PICKUP_COMMENT = "REF: 778899. Instructions: BAR MUST BE SCANNED."
DELIVERY_COMMENT = (
    "REF: 778899. Instructions: ALL DRIVERS TO ASK FOR THE 'BON D'ECHANGE' FROM ALL SITES OF UNLOADING."
)


@pytest.fixture(scope="module")
def assistant():
    return TransallianceAssistant()


@pytest.fixture(scope="module")
def lines():
    return (FIXTURES_DIR / "transalliance_booking.txt").read_text(encoding="utf-8").splitlines()


@pytest.fixture(scope="module")
def order(assistant, lines):
    return assistant.process_lines(lines, "transalliance.pdf")


def test_detection(assistant, lines):
    assert assistant.validate_format(lines)
    assert not assistant.validate_format(["Ziegler UK Ltd"])
    assert not assistant.validate_format(None)


class TestDocumentFields:
    def test_commercial(self, order):
        assert order.order_reference == "1808432"
        assert order.freight_price == 1250.5
        assert order.freight_currency == "EUR"
        assert order.incoterms == "DAP"
        assert order.transport_numbers == "AB-123-CD; OT 778899"
        assert order.attachment_filenames == ["transalliance.pdf"]

    def test_customer(self, order):
        assert order.customer.side == "receiver"
        assert order.customer.details.company == "Transalliance TS Ltd"
        assert order.customer.details.vat_code is None

    def test_comment(self, order):
        assert order.comment.startswith("Commercial sender (service provider): TRANSALLIANCE TS LTD.")

    def test_cargo(self, order):
        assert len(order.cargos) == 1
        cargo = order.cargos[0]
        assert cargo.title == "PACKAGING"
        assert cargo.package_type == "pallet"
        assert cargo.palletized is True
        assert cargo.package_count is None
        assert cargo.ldm == 13.6
        assert cargo.type == "FTL"
        assert cargo.number == "778899"
        assert cargo.weight == 24000.0


class TestLocations:
    def test_pickup(self, order):
        assert len(order.loading_locations) == 1
        location = order.loading_locations[0]
        address = location.company_address

        assert address.company == "DP WORLD LONDON GATEWAY PORT"
        assert address.street_address == "1 LONDON GATEWAY"
        assert address.postal_code == "SS17 9DY"
        assert address.city == "CORRINGHAM, STANFORD"
        assert address.country == "GB"
        assert address.comment == PICKUP_COMMENT
        assert location.time.datetime_from == "2024-03-05T08:00:00Z"
        assert location.time.datetime_to == "2024-03-05T12:00:00Z"

    def test_delivery(self, order):
        assert len(order.destination_locations) == 1
        location = order.destination_locations[0]
        address = location.company_address

        assert address.company == "ACME LOGISTIQUE"
        assert address.street_address == "ZI DISTRIPORT 2 RUE DE TOKYO"
        assert address.postal_code == "13230"
        assert address.city == "PORT-SAINT-LOUIS-DU-RHONE"
        assert address.country == "FR"
        assert address.comment == DELIVERY_COMMENT
        assert location.time.datetime_from == "2024-03-07T14:00:00Z"
        assert location.time.datetime_to == "2024-03-07T18:00:00Z"


def test_pipeline_result_exposes_stages(assistant, lines):
    result = assistant.process(lines)

    assert result.stages_completed == 5
    assert result.processing_time_ms >= 0
    assert len(result.blocks.blocks) == 2
    assert result.document.cargo_number == "778899"
    assert result.stops.stop_weights == [12000.0, 12000.0]
    assert result.to_dict()["order"]["order_reference"] == "1808432"
