import datetime

import pytest

from contracts.transport_order_dto import Customer, CustomerDetails
from src.order_parsing.domain.models import Block, StopType
from src.order_parsing.formats.config_loader import ConfigLoader
from src.order_parsing.stages.stage_1_normalize import NormalizeStage
from src.order_parsing.stages.stage_3_document import DocumentResult
from src.order_parsing.stages.stage_4_stops import StopStage


@pytest.fixture(scope="module")
def transalliance():
    return ConfigLoader().load("transalliance")


@pytest.fixture
def document_fields():
    return DocumentResult(
        order_reference="1808432",
        customer=Customer(side="receiver", details=CustomerDetails(company="Transalliance TS Ltd")),
    )


def _build(lines, stop_type, config, document_fields):
    document = NormalizeStage().process(lines)
    return StopStage().build_stop(Block(stop_type=stop_type, lines=document.lines), document_fields, document, config)


def test_stop_fields(transalliance, document_fields):
    lines = ["LOADING", "REFERENCE", "ACME SA", "75002 PARIS", "05/03/24 08h00-12h00", "Weight: 5 000"]
    stop = _build(lines, StopType.PICKUP, transalliance, document_fields)

    assert stop.name == "ACME SA"
    assert stop.address == "ACME SA, 75002 PARIS"
    assert stop.postal_code == "75002"
    assert stop.city == "PARIS"
    assert stop.country == "FR"
    assert stop.date == datetime.date(2024, 3, 5)
    assert (stop.window_start, stop.window_end) == ("08:00", "12:00")
    assert stop.weight == 5000.0
    assert stop.notes is None


def test_window_requires_date(transalliance, document_fields):
    """Окно без даты отбрасывается."""
    stop = _build(["LOADING", "REFERENCE", "ACME SA", "08h00-12h00"], StopType.PICKUP, transalliance, document_fields)
    assert stop.date is None
    assert stop.window_start is None
    assert stop.window_end is None


def test_empty_block(transalliance, document_fields):
    stop = _build(["DELIVERY"], StopType.DELIVERY, transalliance, document_fields)
    assert stop.name is None
    assert stop.address is None
    assert stop.weight is None
