"""
Свойства канонического заказа для любых входов.

ЦКП: process_lines никогда не бросает и всегда возвращает заказ,
проходящий валидацию контракта.
"""

from pathlib import Path

import pytest

from config import settings
from contracts.transport_order_dto import CanonicalOrder
from src.order_parsing.assistants import TransallianceAssistant, ZieglerAssistant

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


@pytest.fixture(scope="module")
def transalliance():
    return TransallianceAssistant()


@pytest.fixture(scope="module")
def ziegler():
    return ZieglerAssistant()


@pytest.mark.parametrize("lines", [[], ["LOADING", "DELIVERY"], [None, "", "   "]])
def test_minimal_documents_get_defaults(transalliance, lines):
    order = transalliance.process_lines(lines)

    assert order.order_reference == "unknown"
    assert order.freight_price == 0.0
    assert order.freight_currency == settings.DEFAULT_CURRENCY
    assert order.comment == ""
    assert order.loading_locations[0].company_address.company == "Unknown"
    assert order.loading_locations[0].company_address.street_address == ""
    assert order.destination_locations[0].company_address.company == "Unknown"
    assert order.cargos[0].title == "General cargo"
    assert order.cargos[0].package_type == "other"
    assert order.cargos[0].weight is None


def test_filename_used_as_reference(ziegler):
    assert ziegler.process_lines(["Collection", "Delivery"], "booking_77.pdf").order_reference == "booking_77.pdf"


def test_heuristic_reference(transalliance):
    lines = ["TRANSALLIANCE", "OT: 778899", "Booking 1808432 created 2024031", "LOADING", "DELIVERY"]
    assert transalliance.process_lines(lines).order_reference == "1808432"


def test_document_weight_fallback(transalliance):
    lines = ["TRANSALLIANCE", "Weight . : 25 000", "LOADING", "DELIVERY"]
    assert transalliance.process_lines(lines).cargos[0].weight == 25000.0


def test_address_numbers_are_not_cargo_measures(transalliance):
    """Номер дома и почтовый индекс не дают ни LDM, ни вес, ни FTL."""
    lines = ["TRANSALLIANCE", "LOADING", "REFERENCE", "ACME SARL", "136 RUE DE LYON", "69003 LYON", "DELIVERY"]
    cargo = transalliance.process_lines(lines).cargos[0]

    assert cargo.ldm is None
    assert cargo.type is None
    assert cargo.weight is None


def test_cargo_number_only_document_has_no_weight(transalliance):
    lines = ["TRANSALLIANCE", "OT: 778899", "LOADING", "DELIVERY"]
    cargo = transalliance.process_lines(lines).cargos[0]

    assert cargo.number == "778899"
    assert cargo.weight is None


def test_postcode_only_document_has_no_weight(ziegler):
    lines = ["Ziegler UK Ltd", "Collection", "ACME", "12 RUE DE TOKYO, 13230 PORT SAINT LOUIS FR", "Delivery"]
    assert ziegler.process_lines(lines).cargos[0].weight is None


def test_multiple_stops_kept_in_order(ziegler):
    lines = ["Collection ALPHA", "Collection BETA", "Delivery GAMMA"]
    order = ziegler.process_lines(lines)
    assert [loc.company_address.company for loc in order.loading_locations] == ["ALPHA", "BETA"]
    assert [loc.company_address.company for loc in order.destination_locations] == ["GAMMA"]


@pytest.mark.parametrize("fixture_name", ["transalliance_booking.txt", "ziegler_booking.txt"])
def test_idempotent_and_schema_valid(transalliance, ziegler, fixture_name):
    lines = (FIXTURES_DIR / fixture_name).read_text(encoding="utf-8").splitlines()
    assistant = transalliance if fixture_name.startswith("transalliance") else ziegler

    first = assistant.process_lines(lines, fixture_name).to_payload()
    second = assistant.process_lines(lines, fixture_name).to_payload()

    assert first == second
    assert CanonicalOrder.model_validate(first).to_payload() == first
    assert first["loading_locations"] and first["destination_locations"] and first["cargos"]
