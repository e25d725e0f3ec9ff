from __future__ import annotations

import pytest

from exact_money.domain.monetary.currency import Currency
from exact_money.domain.monetary.currency_registry import (
    CurrencyRegistry,
    get_default_registry,
    lookup_currency,
    reset_default_registry,
)
from exact_money.domain.monetary.currency_table import BUILTIN_CURRENCIES
from exact_money.exceptions import UnknownCurrencyError
from tests.helpers.helper_currency import create_currency_with_nickel_cash


def test_lookup_is_case_insensitive():
    """Lookup normalizes case and whitespace."""
    registry = CurrencyRegistry.with_builtin_currencies()

    assert registry.lookup("usd") is registry.lookup(" USD ")
    assert registry.lookup("Eur").code == "EUR"


def test_lookup_unknown_currency_raises():
    """Unregistered codes raise UnknownCurrencyError (also a LookupError)."""
    registry = CurrencyRegistry()

    with pytest.raises(UnknownCurrencyError):
        registry.lookup("XYZ")
    with pytest.raises(LookupError):
        registry.lookup("XYZ")


def test_register_overrides_existing_entry():
    """Registering the same code again replaces the entry."""
    registry = CurrencyRegistry([Currency("USD", "US Dollar", 2)])
    registry.register(Currency("USD", "US Dollar", 2, symbol="US$", smallest_denomination=5))

    assert registry.lookup("USD").symbol == "US$"
    assert len(registry) == 1


def test_register_without_overwrite_rejects_duplicate():
    registry = CurrencyRegistry([Currency("USD", "US Dollar", 2)])

    with pytest.raises(ValueError, match="already exists"):
        registry.register(Currency("USD", "US Dollar", 2), overwrite=False)


def test_lookup_by_iso_numeric():
    """The numeric index follows registrations, overrides and removals."""
    registry = CurrencyRegistry()
    registry.register(create_currency_with_nickel_cash())

    assert registry.lookup_by_iso_numeric(991).code == "TSN"
    assert registry.lookup_by_iso_numeric("991").code == "TSN"

    registry.register(Currency("TSN", "Renumbered", 2, iso_numeric=992))
    assert registry.lookup_by_iso_numeric(992).name == "Renumbered"
    with pytest.raises(UnknownCurrencyError):
        registry.lookup_by_iso_numeric(991)

    assert registry.unregister("tsn") is True
    assert registry.unregister("TSN") is False
    with pytest.raises(UnknownCurrencyError):
        registry.lookup_by_iso_numeric(992)


def test_register_rejects_iso_numeric_used_by_other_code():
    """Two codes cannot share one ISO numeric code; the registry stays unchanged."""
    registry = CurrencyRegistry([Currency("AAA", "First", 2, iso_numeric=900)])

    with pytest.raises(ValueError, match="already used by 'AAA'"):
        registry.register(Currency("BBB", "Second", 2, iso_numeric=900))

    assert "BBB" not in registry
    assert registry.lookup_by_iso_numeric(900).code == "AAA"


def test_load_records_and_iteration_order():
    """`load` accepts mappings; iteration is ordered by priority then code."""
    registry = CurrencyRegistry()
    count = registry.load(
        [
            {"code": "ZZZ", "name": "Last", "exponent": 0},
            {"code": "AAA", "name": "First by code", "exponent": 2},
            {"code": "MMM", "name": "Top priority", "exponent": 3, "priority": 1},
        ]
    )

    assert count == 3
    assert [currency.code for currency in registry] == ["MMM", "AAA", "ZZZ"]
    assert "aaa" in registry
    assert 42 not in registry


def test_builtin_table_is_consistent():
    """Built-in records load without conflicts; only MRU has a non-standard subunit."""
    registry = CurrencyRegistry.with_builtin_currencies()

    assert len(registry) == len(BUILTIN_CURRENCIES)
    non_standard = [currency.code for currency in registry if not currency.has_standard_subunit]
    assert non_standard == ["MRU"]
    assert registry.lookup("BTC").smallest_denomination is None
    assert registry.lookup("JPY").exponent == 0


def test_default_registry_is_shared_and_resettable():
    """Custom registrations live until the default registry is reset."""
    get_default_registry().register(create_currency_with_nickel_cash())
    assert lookup_currency("tsn").code == "TSN"

    reset_default_registry()

    with pytest.raises(UnknownCurrencyError):
        lookup_currency("TSN")


def test_resolve_passes_currency_instances_through():
    currency = Currency("QQQ", "Unregistered", 2)

    assert CurrencyRegistry().resolve(currency) is currency
