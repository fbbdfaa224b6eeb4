"""
Интеграционные тесты формата Ziegler.

Британский формат цены, BOOKED-время, заметки из строк блока.
"""

from pathlib import Path

import pytest

from src.order_parsing.assistants import ZieglerAssistant

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


@pytest.fixture(scope="module")
def lines():
    return (FIXTURES_DIR / "ziegler_booking.txt").read_text(encoding="utf-8").splitlines()


@pytest.fixture(scope="module")
def order(lines):
    return ZieglerAssistant().process_lines(lines)


def test_detection(lines):
    assistant = ZieglerAssistant()
    assert assistant.validate_format(lines)
    assert assistant.validate_format(["please find below the booking"])
    assert not assistant.validate_format(["TRANSALLIANCE TS LTD"])


def test_document_fields(order):
    assert order.order_reference == "ZIE/2024/0042"
    assert order.freight_price == 1250.0
    assert order.freight_currency == "GBP"
    assert order.incoterms is None
    assert order.transport_numbers is None
    assert order.attachment_filenames == []
    assert order.customer.details.company == "Ziegler UK Ltd"
    assert order.comment == "All business is conducted under BIFA terms. Invoice must include signed POD/CMR."


def test_cargo(order):
    cargo = order.cargos[0]
    assert cargo.title == "General cargo"
    assert cargo.package_type == "pallet"
    assert cargo.package_count == 26
    assert cargo.palletized is True
    assert cargo.weight == 12500.0
    assert cargo.ldm is None
    assert cargo.type is None


def test_collection(order):
    location = order.loading_locations[0]
    address = location.company_address

    assert address.company == "DP WORLD LONDON GATEWAY"
    assert address.street_address == "1 LONDON GATEWAY ROAD, STANFORD-LE-HOPE, SS17 9DY"
    assert address.postal_code == "SS17 9DY"
    assert address.city == "STANFORD-LE-HOPE"
    assert address.country == "GB"
    assert address.comment == "REF: COL-5512. 05/03/2024 BOOKED- 09:30 AM"
    assert location.time.datetime_from == "2024-03-05T09:30:00Z"
    assert location.time.datetime_to is None


def test_delivery(order):
    location = order.destination_locations[0]
    address = location.company_address

    assert address.company == "FRIGO LOGISTIQUE"
    assert address.street_address == "12 RUE DU PORT, MARSEILLE, 13002"
    assert address.postal_code == "13002"
    assert address.city == "MARSEILLE"
    assert address.country == "FR"
    assert address.comment == "REF: DEL-7788. slot will be provided soon"
    assert location.time.datetime_from == "2024-03-06T08:00:00Z"
    assert location.time.datetime_to == "2024-03-06T12:00:00Z"


def test_payload_omits_unset_fields(order):
    payload = order.to_payload()
    assert "incoterms" not in payload
    assert "ldm" not in payload["cargos"][0]
    assert "datetime_to" not in payload["loading_locations"][0]["time"]
