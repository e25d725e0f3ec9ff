from __future__ import annotations

from decimal import Decimal, InvalidOperation, localcontext
from fractions import Fraction
from typing import TypeAlias


# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float


def as_decimal(value: DecimalLike) -> Decimal:
    """Convert supported scalar types into Decimal.

    Floats are converted via `str` to avoid binary precision noise, so `0.1`
    becomes `Decimal("0.1")` and not `Decimal("0.1000000000000000055511151231257827")`.

    Args:
        value: Input value as Decimal, string, int or float.

    Returns:
        Value converted to Decimal.

    Raises:
        TypeError: If $value is a bool or not a supported scalar.
        ValueError: If $value is a string that is not a number, or is NaN / infinite.
    """
    # Raise: bool is an int subclass but never a monetary quantity
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, str, float)):
        raise TypeError(f"Cannot call `as_decimal` because $value ({value!r}) is not a Decimal-like scalar")

    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"Cannot call `as_decimal` because $value ({value!r}) is not a number") from e

    # Raise: NaN and infinities have no monetary meaning
    if not result.is_finite():
        raise ValueError(f"Cannot call `as_decimal` because $value ({value!r}) is not finite")

    return result


def as_fraction(value: DecimalLike | Fraction) -> Fraction:
    """Convert a Decimal-like scalar (or Fraction) into an exact Fraction.

    Args:
        value: Input value as Fraction, Decimal, string, int or float.

    Returns:
        Exact rational value. Floats go through `as_decimal` first.
    """
    if isinstance(value, Fraction):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Fraction(value)
    return Fraction(as_decimal(value))


def fraction_to_decimal(value: Fraction) -> Decimal:
    """Convert a Fraction into a Decimal.

    Terminating values (denominator made of the prime factors 2 and 5 only) are converted exactly,
    whatever their number of digits. Other values are divided with the current context precision
    applied to the fractional digits, so the integer part is never rounded.
    """
    denominator = value.denominator
    twos = _count_factor(denominator, 2)
    fives = _count_factor(denominator, 5)

    if denominator == 2**twos * 5**fives:
        # Terminating: scale to a power-of-ten denominator, then place the decimal point
        places = max(twos, fives)
        scaled_numerator = value.numerator * (10**places // denominator)
        return shift_decimal(Decimal(scaled_numerator), -places)

    integer_digits = len(str(abs(value.numerator) // denominator))
    with localcontext() as context:
        context.prec += integer_digits
        return Decimal(value.numerator) / Decimal(denominator)


def shift_decimal(value: Decimal, places: int) -> Decimal:
    """Multiply $value by `10 ** places` exactly by moving its exponent.

    Unlike `Decimal.scaleb`, the coefficient is never rounded to the context precision.
    """
    sign, digits, exponent = value.as_tuple()
    return Decimal((sign, digits, exponent + places))


def _count_factor(number: int, factor: int) -> int:
    count = 0
    while number % factor == 0:
        number //= factor
        count += 1
    return count
