from __future__ import annotations

import math
from decimal import InvalidOperation
from fractions import Fraction
from typing import Sequence

from exact_money.domain.monetary.money import Money, Scalar
from exact_money.exceptions import InvalidAllocationError
from exact_money.utils.decimal_tools import as_fraction


def allocate(money: Money, weights: Sequence[Scalar] | int) -> list[Money]:
    """Split $money into parts proportional to $weights without gaining or losing a minor unit.

    Algorithm (exact rational arithmetic, no floating point):

    1. Each part gets its base share `floor(T * w_i / S)`, where T is the total in minor units and
       S the sum of weights.
    2. The leftover `T - sum(base shares)` is always in `[0, len(weights))`; one extra minor unit
       goes to each of the first `leftover` parts, in input order.

    Earlier positions therefore receive leftover units first:
    `allocate(Money(100, "USD"), [1, 1, 1])` gives `[34, 33, 33]` and
    `allocate(Money(5, "USD"), [3, 7])` gives `[2, 3]`.

    For infinite-precision money with a fractional total, the sub-minor-unit rest of the leftover
    is added to the first part, so the parts still sum exactly to $money.

    Args:
        money: The amount to split.
        weights: Non-negative weights (int, Decimal, Fraction, float or numeric str), one per
            part, or a single positive int N meaning N equal parts.

    Returns:
        List of Money in the currency and precision of $money, same length and order as $weights,
        whose sum equals $money.

    Raises:
        InvalidAllocationError: If $weights is empty, contains a negative weight, sums to zero,
            or is a non-positive part count.
    """
    parsed_weights = _parse_weights(weights)

    total = as_fraction(money.fractional)
    weight_sum = sum(parsed_weights, Fraction(0))

    base_shares = [math.floor(total * weight / weight_sum) for weight in parsed_weights]
    leftover = total - sum(base_shares)
    whole_leftover = math.floor(leftover)
    sub_unit_rest = leftover - whole_leftover

    parts: list[Fraction | int] = [share + (1 if index < whole_leftover else 0) for index, share in enumerate(base_shares)]
    if sub_unit_rest:
        parts[0] = parts[0] + sub_unit_rest

    return [money._with_fractional(part) for part in parts]


def _parse_weights(weights: Sequence[Scalar] | int) -> list[Fraction]:
    """Validate $weights and convert them to exact Fractions."""
    if isinstance(weights, int) and not isinstance(weights, bool):
        # Raise: part count must be positive
        if weights <= 0:
            raise InvalidAllocationError(f"Cannot call `allocate` because number of parts $weights ({weights}) must be > 0")
        return [Fraction(1)] * weights

    # Raise: a bare string is not a sequence of weights
    if isinstance(weights, (str, bytes)):
        raise InvalidAllocationError(f"Cannot call `allocate` because $weights ({weights!r}) is not a sequence of numbers")

    try:
        parsed = [as_fraction(weight) for weight in weights]
    except (TypeError, ValueError, InvalidOperation) as e:
        raise InvalidAllocationError(f"Cannot call `allocate` because $weights ({weights!r}) contains a value that is not a number") from e

    # Raise: need at least one part
    if not parsed:
        raise InvalidAllocationError("Cannot call `allocate` because $weights is empty")

    # Raise: weights must be non-negative
    negative = [weight for weight in parsed if weight < 0]
    if negative:
        raise InvalidAllocationError(f"Cannot call `allocate` because $weights ({weights!r}) contains negative value(s)")

    # Raise: at least one weight must be positive
    if not any(parsed):
        raise InvalidAllocationError(f"Cannot call `allocate` because all $weights ({weights!r}) are zero")

    return parsed
