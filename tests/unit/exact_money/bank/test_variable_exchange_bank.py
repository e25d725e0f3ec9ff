from __future__ import annotations

import json
import math
from decimal import ROUND_CEILING, Decimal

import pytest

from exact_money.bank.rates_store.memory import MemoryRatesStore
from exact_money.bank.variable_exchange import VariableExchangeBank
from exact_money.config import get_default_bank
from exact_money.domain.monetary.currency_registry import CurrencyRegistry
from exact_money.domain.monetary.money import Money
from exact_money.domain.rounding.policy import RoundingScope
from exact_money.domain.rounding.rounding_mode import RoundingMode
from exact_money.exceptions import UnknownCurrencyError, UnknownRateError
from tests.helpers.helper_currency import create_currency_with_nickel_cash


@pytest.fixture
def bank() -> VariableExchangeBank:
    bank = VariableExchangeBank()
    bank.add_rate("USD", "EUR", "0.9")
    bank.add_rate("USD", "JPY", 150)
    bank.add_rate("JPY", "USD", "0.0067")
    bank.add_rate("USD", "GBP", Decimal("0.5"))
    return bank


# region Exchange


def test_exchange_with_rate(bank):
    assert Money(1000, "USD").exchange_to("EUR", bank) == Money(900, "EUR")
    assert bank.exchange(Money(1000, "USD"), "eur") == Money(900, "EUR")


def test_exchange_rescales_between_subunits(bank):
    """Rates are quoted in major units; minor units are rescaled between currencies."""
    assert bank.exchange(Money(1050, "USD"), "JPY") == Money(1575, "JPY")
    assert bank.exchange(Money(1000, "JPY"), "USD") == Money(670, "USD")


def test_exchange_to_same_currency_returns_original(bank):
    money = Money(1000, "USD")

    assert bank.exchange(money, "USD") is money
    assert money.exchange_to("usd", bank) is money


def test_rates_are_directional(bank):
    with pytest.raises(UnknownRateError):
        bank.exchange(Money(900, "EUR"), "USD")


def test_exchange_with_unknown_rate_or_currency(bank):
    with pytest.raises(UnknownRateError):
        bank.exchange(Money(100, "USD"), "CHF")
    with pytest.raises(UnknownRateError):
        bank.exchange(Money(100, "USD"), "XYZ")


def test_exchange_rounds_with_active_mode(bank):
    """Without a strategy the raw result is rounded like any Money construction."""
    money = Money(1, "USD")

    assert bank.exchange(money, "GBP") == Money(0, "GBP")
    with RoundingScope(RoundingMode.HALF_UP):
        assert bank.exchange(money, "GBP") == Money(1, "GBP")


def test_exchange_rounding_strategy_precedence(bank):
    """A strategy passed to the call wins over the bank-wide strategy."""
    money = Money(3, "USD")

    assert bank.exchange(money, "GBP", rounding=lambda raw: int(raw.to_integral_value(rounding=ROUND_CEILING))) == Money(2, "GBP")

    flooring_bank = VariableExchangeBank(store=bank.store, rounding=math.floor)
    assert flooring_bank.exchange(money, "GBP") == Money(1, "GBP")
    assert flooring_bank.exchange(money, "GBP", rounding=math.ceil) == Money(2, "GBP")


def test_exchange_strategy_must_return_int(bank):
    with pytest.raises(TypeError):
        bank.exchange(Money(3, "USD"), "GBP", rounding=lambda raw: raw)


def test_exchange_keeps_infinite_precision(bank):
    result = bank.exchange(Money(1, "USD", infinite_precision=True), "GBP")

    assert result.infinite_precision
    assert result.fractional == Decimal("0.5")


def test_money_exchange_to_uses_default_bank():
    get_default_bank().add_rate("USD", "EUR", "0.9")

    assert Money(1000, "USD").exchange_to("EUR") == Money(900, "EUR")


# endregion

# region Rates


def test_get_rate(bank):
    assert bank.get_rate("usd", "eur") == Decimal("0.9")
    assert bank.get_rate("EUR", "EUR") == Decimal(1)
    assert bank.get_rate("EUR", "USD") is None


def test_set_rate_replaces_rate(bank):
    bank.set_rate("USD", "EUR", "0.95")

    assert bank.get_rate("USD", "EUR") == Decimal("0.95")
    assert Money(100, "USD").exchange_to("EUR", bank) == Money(95, "EUR")


@pytest.mark.parametrize("rate", [0, -1, "abc", "NaN", None])
def test_add_rate_rejects_invalid_rate(rate):
    with pytest.raises(ValueError):
        VariableExchangeBank().add_rate("USD", "EUR", rate)


def test_add_rate_requires_registered_currencies():
    with pytest.raises(UnknownCurrencyError):
        VariableExchangeBank().add_rate("USD", "XYZ", "1.5")


def test_bank_with_own_registry():
    registry = CurrencyRegistry.with_builtin_currencies()
    registry.register(create_currency_with_nickel_cash())
    bank = VariableExchangeBank(registry=registry)

    bank.add_rate("TSN", "USD", 2)

    assert bank.exchange(Money(10, registry.lookup("TSN")), "USD") == Money(20, "USD")


def test_bank_shares_store():
    store = MemoryRatesStore({("USD", "EUR"): "0.9"})
    bank = VariableExchangeBank(store=store)

    assert bank.store is store
    assert bank.get_rate("USD", "EUR") == Decimal("0.9")


# endregion

# region Export & import


def test_export_rates(bank):
    exported = json.loads(bank.export_rates())

    assert exported == {"USD_TO_EUR": "0.9", "USD_TO_JPY": "150", "JPY_TO_USD": "0.0067", "USD_TO_GBP": "0.5"}


def test_import_rates_restores_exported_rates(bank):
    copy = VariableExchangeBank()

    count = copy.import_rates(bank.export_rates())

    assert count == 4
    assert copy.store.rates() == bank.store.rates()


@pytest.mark.parametrize("data", ["not json", "[1, 2]", '{"USDEUR": "0.9"}', '{"USD_TO_EUR": "-1"}', '{"_TO_EUR": "1"}'])
def test_import_rates_rejects_malformed_data(data):
    with pytest.raises(ValueError):
        VariableExchangeBank().import_rates(data)


def test_import_rates_is_all_or_nothing():
    bank = VariableExchangeBank()

    with pytest.raises(UnknownCurrencyError):
        bank.import_rates('{"USD_TO_EUR": "0.9", "USD_TO_XYZ": "2"}')

    assert len(bank.store) == 0


# endregion


def test_exchange_strategy_receives_exact_raw_amount(bank):
    received = []

    def truncate(raw: Decimal) -> int:
        received.append(raw)
        return int(raw)

    result = bank.exchange(Money(10**30 + 1, "USD"), "GBP", rounding=truncate)

    assert received == [Decimal("5" + "0" * 29 + ".5")]
    assert result == Money(5 * 10**29, "GBP")
