import json

import pytest

from contracts.transport_order_dto import (
    CanonicalOrder,
    Cargo,
    CompanyAddress,
    Customer,
    CustomerDetails,
    Location,
)
from src.order_parsing.domain.exceptions import OrderFileNotFoundError, OrderWriteError
from src.order_parsing.infrastructure import JsonOrderRepository, OrderFileManager


@pytest.fixture
def order():
    unknown = Location(company_address=CompanyAddress(company="Unknown"))
    return CanonicalOrder(
        customer=Customer(side="receiver", details=CustomerDetails(company="Ziegler UK Ltd")),
        loading_locations=[unknown],
        destination_locations=[unknown],
        cargos=[Cargo(title="General cargo")],
        order_reference="ZIE/2024/0042",
        freight_price=1250.0,
        freight_currency="GBP",
    )


def test_file_stem():
    manager = OrderFileManager()
    assert manager.file_stem("ZIE/123 45") == "ZIE_123_45"
    assert manager.file_stem("1808432") == "1808432"
    assert manager.file_stem("///") == "order"


def test_create_and_load_order(tmp_path, order):
    repository = JsonOrderRepository(output_dir=tmp_path)
    repository.create_order(order)

    assert repository.last_path == tmp_path / "ZIE_2024_0042.json"
    payload = json.loads(repository.last_path.read_text(encoding="utf-8"))
    assert payload["order_reference"] == "ZIE/2024/0042"
    assert "incoterms" not in payload

    assert repository.load_order("ZIE/2024/0042") == order


def test_list_orders(tmp_path, order):
    repository = JsonOrderRepository(output_dir=tmp_path)
    repository.create_order(order)
    assert OrderFileManager().list_orders(tmp_path) == [tmp_path / "ZIE_2024_0042.json"]
    assert OrderFileManager().list_orders(tmp_path / "missing") == []


def test_load_missing_order(tmp_path):
    with pytest.raises(OrderFileNotFoundError):
        JsonOrderRepository(output_dir=tmp_path).load_order("nope")


def test_load_corrupted_file(tmp_path):
    (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(OrderWriteError):
        OrderFileManager().load_json(tmp_path / "bad.json")
