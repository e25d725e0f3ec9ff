from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

import pytest

from exact_money.domain.monetary.money import Money
from exact_money.domain.rounding.policy import RoundingScope
from exact_money.domain.rounding.rounding_mode import RoundingMode
from exact_money.exceptions import CurrencyMismatchError


# region Addition & subtraction


def test_add_and_subtract_same_currency():
    assert Money(1, "USD") + Money(2, "USD") == Money(3, "USD")
    assert Money(5, "USD") - Money(7, "USD") == Money(-2, "USD")


@pytest.mark.parametrize("operation", [lambda a, b: a + b, lambda a, b: a - b, lambda a, b: a < b, lambda a, b: a >= b])
def test_mixed_currencies_raise(operation):
    """Money in different currencies is never combined or ordered implicitly."""
    with pytest.raises(CurrencyMismatchError):
        operation(Money(100, "USD"), Money(100, "EUR"))


def test_sum_of_money_starts_from_plain_zero():
    moneys = [Money(100, "USD"), Money(250, "USD"), Money(-50, "USD")]

    assert sum(moneys) == Money(300, "USD")
    assert Money(100, "USD") + 0 == Money(100, "USD")
    assert 0 - Money(100, "USD") == Money(-100, "USD")


def test_add_non_zero_number_is_rejected():
    with pytest.raises(TypeError):
        Money(100, "USD") + 1
    with pytest.raises(TypeError):
        Money(100, "USD") + Decimal("0")


def test_mixed_precision_result_is_infinite():
    """A result is infinite-precision if either operand is."""
    result = Money(1, "USD") + Money(Decimal("0.5"), "USD", infinite_precision=True)

    assert result.infinite_precision
    assert result.fractional == Decimal("1.5")


# endregion

# region Multiplication & division


def test_multiply_by_scalar():
    money = Money(100, "USD")

    assert money * 3 == Money(300, "USD")
    assert 3 * money == Money(300, "USD")
    assert money * Decimal("0.125") == Money(12, "USD")
    assert money * 0.1 == Money(10, "USD")
    assert money * Fraction(1, 3) == Money(33, "USD")


def test_multiply_rounds_with_active_mode():
    with RoundingScope(RoundingMode.HALF_UP):
        assert (Money(100, "USD") * Decimal("0.125")).fractional == 13
    with RoundingScope(RoundingMode.FLOOR):
        assert (Money(-100, "USD") * Decimal("0.125")).fractional == -13


def test_multiply_infinite_precision_keeps_fraction():
    money = Money(100, "USD", infinite_precision=True)

    assert (money * Decimal("0.125")).fractional == Decimal("12.5")
    assert str((money / 3).fractional).startswith("33." + "3" * 28)


def test_multiply_money_by_money_is_rejected():
    with pytest.raises(TypeError):
        Money(100, "USD") * Money(2, "USD")
    with pytest.raises(TypeError):
        Money(100, "USD") * object()


def test_divide():
    assert Money(1000, "USD") / Money(250, "USD") == Decimal(4)
    assert Money(100, "USD") / 3 == Money(33, "USD")
    assert Money(200, "USD") / 3 == Money(67, "USD")


def test_divide_by_zero():
    with pytest.raises(ZeroDivisionError):
        Money(100, "USD") / 0
    with pytest.raises(ZeroDivisionError):
        Money(100, "USD") / Money(0, "USD")


def test_number_divided_by_money_is_rejected():
    with pytest.raises(TypeError):
        3 / Money(100, "USD")


# endregion

# region Division with remainder


def test_divmod_by_money_uses_floor_semantics():
    assert divmod(Money(1000, "USD"), Money(300, "USD")) == (3, Money(100, "USD"))
    assert divmod(Money(-1000, "USD"), Money(300, "USD")) == (-4, Money(200, "USD"))


def test_divmod_by_number():
    assert divmod(Money(1000, "USD"), 3) == (Money(333, "USD"), Money(1, "USD"))
    assert Money(-1000, "USD") % 300 == Money(200, "USD")


def test_remainder_truncates_towards_zero():
    """Unlike `%`, the remainder takes the sign of the dividend."""
    assert Money(-1000, "USD").remainder(300) == Money(-100, "USD")
    assert Money(1000, "USD").remainder(Money(-300, "USD")) == Money(100, "USD")


def test_remainder_rejects_invalid_divisor():
    with pytest.raises(ZeroDivisionError):
        Money(1000, "USD").remainder(0)
    with pytest.raises(TypeError):
        Money(1000, "USD").remainder("abc")
    with pytest.raises(CurrencyMismatchError):
        Money(1000, "USD").remainder(Money(3, "EUR"))


# endregion

# region Comparison & unary


def test_ordering_within_currency():
    moneys = [Money(3, "USD"), Money(-1, "USD"), Money(2, "USD")]

    assert sorted(moneys) == [Money(-1, "USD"), Money(2, "USD"), Money(3, "USD")]
    assert Money(1, "USD") < Money(2, "USD")
    assert Money(2, "USD") >= Money(2, "USD")
    assert Money(1, "USD") > 0
    assert Money(-5, "USD") < 0


def test_unary_operations():
    assert -Money(100, "USD") == Money(-100, "USD")
    assert +Money(100, "USD") == Money(100, "USD")
    assert abs(Money(-100, "USD")) == Money(100, "USD")


def test_money_as_dict_key():
    totals = {Money(100, "USD"): "a", Money(100, "EUR"): "b"}

    assert totals[Money(Decimal("100"), "USD", infinite_precision=True)] == "a"
    assert totals[Money(100, "EUR")] == "b"


# endregion
