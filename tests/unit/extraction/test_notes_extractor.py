"""
Unit-тесты для NotesExtractor.

ЦКП: заметка остановки = референс + инструкция + строки-заметки блока.
"""

import pytest

from src.order_parsing.domain.models import StopType
from src.order_parsing.extraction.notes_extractor import NotesExtractor
from src.order_parsing.formats.config_loader import ConfigLoader


@pytest.fixture(scope="module")
def transalliance():
    return ConfigLoader().load("transalliance")


@pytest.fixture(scope="module")
def ziegler():
    return ConfigLoader().load("ziegler")


@pytest.fixture
def extractor():
    return NotesExtractor()


def _notes(extractor, config, stop_type, block, document, **kwargs):
    return extractor.extract(stop_type, block, document, config.notes, config.header_tokens, **kwargs)


class TestTransallianceNotes:
    def test_pickup_trigger_phrase(self, extractor, transalliance):
        document = ["OT: 778899", "BAR MUST BE SCANNED", "LOADING"]
        notes = _notes(extractor, transalliance, StopType.PICKUP, ["LOADING"], document, cargo_number="778899")
        assert notes == "REF: 778899. Instructions: BAR MUST BE SCANNED."

    def test_pickup_reference_alone(self, extractor, transalliance):
        notes = _notes(extractor, transalliance, StopType.PICKUP, ["LOADING"], ["LOADING"], cargo_number="778899")
        assert notes == "REF: 778899."

    def test_pickup_without_reference(self, extractor, transalliance):
        assert _notes(extractor, transalliance, StopType.PICKUP, ["LOADING"], ["LOADING"]) is None

    def test_delivery_sentence_is_reconstructed(self, extractor, transalliance):
        """Предложение собирается из строк до и после триггера; order reference при отсутствии OT."""
        document = ["Please note.", "ALL DRIVERS TO ASK FOR", "THE 'BON D'ECHANGE'", "AT UNLOADING.", "DELIVERY"]
        notes = _notes(
            extractor, transalliance, StopType.DELIVERY, ["DELIVERY"], document, order_reference="1808432"
        )
        assert notes == "REF: 1808432. Instructions: ALL DRIVERS TO ASK FOR THE 'BON D'ECHANGE' AT UNLOADING."

    def test_phrase_split_across_lines_gives_canned_text(self, extractor, transalliance):
        document = ["ALL DRIVERS: BON D'", "ECHANGE PLEASE"]
        notes = _notes(extractor, transalliance, StopType.DELIVERY, ["DELIVERY"], document, cargo_number="778899")
        assert notes == (
            "REF: 778899. Instructions: ALL DRIVERS TO ASK FOR THE 'BON D'ECHANGE' FROM ALL DELIVERY SITES"
        )

    def test_delivery_without_trigger(self, extractor, transalliance):
        notes = _notes(extractor, transalliance, StopType.DELIVERY, ["DELIVERY"], ["DELIVERY"], cargo_number="1")
        assert notes is None


class TestReconstruct:
    def test_leading_label_and_separators_removed(self, extractor):
        sentence = extractor.reconstruct(["Instructions: - BON D'ECHANGE REQUIRED."], 0, ["DELIVERY"])
        assert sentence == "BON D'ECHANGE REQUIRED."

    def test_header_line_stops_backward_scan(self, extractor):
        assert extractor.reconstruct(["DELIVERY", "BON D'ECHANGE"], 1, ["DELIVERY"]) == "BON D'ECHANGE"

    def test_at_most_three_preceding_lines(self, extractor):
        lines = ["one", "two", "three", "four", "TRIGGER."]
        assert extractor.reconstruct(lines, 4, []) == "two three four TRIGGER."


def test_ziegler_block_reference_and_note_lines(extractor, ziegler):
    block = ["Collection ACME", "REF: COL-5512", "BOOKED- 09:30 AM", "Clearance at Sevington"]
    notes = _notes(extractor, ziegler, StopType.PICKUP, block, block)
    assert notes == "REF: COL-5512. BOOKED- 09:30 AM; Clearance at Sevington"
