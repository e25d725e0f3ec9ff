from __future__ import annotations

import pytest

from exact_money.domain.monetary.currency import Currency


def test_currency_normalizes_code_and_defaults_subunit():
    """Code is stripped and upper-cased; subunit_to_unit defaults to 10 ** exponent."""
    currency = Currency(" usd ", "US Dollar", 2)

    assert currency.code == "USD"
    assert currency.subunit_to_unit == 100
    assert currency.symbol == "USD"
    assert currency.smallest_denomination is None
    assert currency.has_standard_subunit


def test_currency_tolerates_non_standard_subunit():
    """Currencies like MRU (5 khoums per ouguiya) are accepted."""
    currency = Currency("MRU", "Mauritanian Ouguiya", 1, subunit_to_unit=5)

    assert currency.subunit_to_unit == 5
    assert not currency.has_standard_subunit


@pytest.mark.parametrize(
    "kwargs",
    [
        {"code": "", "name": "Empty", "exponent": 2},
        {"code": "XXX", "name": " ", "exponent": 2},
        {"code": "XXX", "name": "Negative", "exponent": -1},
        {"code": "XXX", "name": "Too precise", "exponent": 19},
        {"code": "XXX", "name": "Zero subunit", "exponent": 2, "subunit_to_unit": 0},
        {"code": "XXX", "name": "Zero coin", "exponent": 2, "smallest_denomination": 0},
        {"code": "XXX", "name": "Bool exponent", "exponent": True},
    ],
)
def test_currency_rejects_invalid_fields(kwargs):
    """Invalid field values raise ValueError."""
    with pytest.raises(ValueError):
        Currency(**kwargs)


def test_currency_equality_and_hash_use_code():
    """Two records with the same code are the same currency."""
    first = Currency("EUR", "Euro", 2, symbol="€")
    second = Currency("eur", "Euro (copy)", 2)

    assert first == second
    assert hash(first) == hash(second)
    assert first != Currency("USD", "US Dollar", 2)
    assert first != "EUR"


def test_currency_from_mapping_round_trips_to_dict():
    """External records in mapping form produce the same currency, unknown keys are ignored."""
    record = {
        "code": "CHF",
        "name": "Swiss Franc",
        "exponent": 2,
        "smallest_denomination": 5,
        "iso_numeric": 756,
        "alternate_symbols": ["SFr"],
    }

    currency = Currency.from_mapping(record)

    assert currency.smallest_denomination == 5
    assert currency.iso_numeric == 756
    assert Currency.from_mapping(currency.to_dict()).to_dict() == currency.to_dict()


def test_currency_from_mapping_requires_core_fields():
    """Missing code / name / exponent is reported."""
    with pytest.raises(ValueError, match="exponent"):
        Currency.from_mapping({"code": "ABC", "name": "Alphabet"})
