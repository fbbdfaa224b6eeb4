import pytest

from src.order_parsing.extraction.money_parser import CurrencyDetector, MoneyParser


@pytest.fixture
def parser():
    return MoneyParser()


@pytest.mark.parametrize("raw", ["25.000,50", "25,000.50", "25000.50", "25 000,50", "25\u00a0000,50"])
def test_mixed_formats_give_same_value(parser, raw):
    assert parser.parse(raw) == 25000.50


def test_single_comma_is_decimal(parser):
    assert parser.parse("1250,5") == 1250.5


def test_pinned_dot_separator_treats_comma_as_thousands(parser):
    # Британский формат: 1,250 = тысяча двести пятьдесят
    assert parser.parse("1,250", decimal_separator=".") == 1250.0
    assert parser.parse("1,250.75", decimal_separator=".") == 1250.75


def test_pinned_comma_separator(parser):
    assert parser.parse("1.250", decimal_separator=",") == 1250.0


def test_multiple_dots_are_thousands(parser):
    assert parser.parse("1.250.000") == 1250000.0


def test_currency_noise_is_stripped(parser):
    assert parser.parse("EUR 1 250,00") == 1250.0


def test_negative_sign_kept(parser):
    assert parser.parse("-15,5") == -15.5


@pytest.mark.parametrize("raw", [None, "", "abc", ".", "-"])
def test_invalid_returns_zero(parser, raw):
    assert parser.parse(raw) == 0.0


class TestCurrencyDetector:
    """Валюта по самому раннему вхождению."""

    def test_earliest_code_wins(self):
        detector = CurrencyDetector()
        text = "Price 100 GBP, insurance 5 EUR"
        assert detector.detect(text, ["EUR", "GBP"], {}) == "GBP"

    def test_symbol_before_code(self):
        detector = CurrencyDetector()
        text = "Rate £ 500\nPaid in EUR"
        assert detector.detect(text, ["EUR"], {"£": "GBP"}) == "GBP"

    def test_code_must_be_word(self):
        detector = CurrencyDetector()
        assert detector.detect("EUROPA LOGISTICS", ["EUR"], {}) is None

    def test_nothing_found(self):
        assert CurrencyDetector().detect("no money here", ["EUR"], {"€": "EUR"}) is None
