from __future__ import annotations

from decimal import (
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
)
from enum import Enum


class RoundingMode(Enum):
    """Rules for resolving the fractional part when rounding a quantity.

    - UP: away from zero.
    - DOWN: towards zero (truncation).
    - HALF_UP: nearest, ties away from zero (commercial rounding).
    - HALF_DOWN: nearest, ties towards zero.
    - HALF_EVEN: nearest, ties to the even neighbour (banker's rounding).
    - HALF_ODD: nearest, ties to the odd neighbour.
    - CEILING: towards positive infinity.
    - FLOOR: towards negative infinity.
    """

    UP = "UP"
    DOWN = "DOWN"
    HALF_UP = "HALF_UP"
    HALF_DOWN = "HALF_DOWN"
    HALF_EVEN = "HALF_EVEN"
    HALF_ODD = "HALF_ODD"
    CEILING = "CEILING"
    FLOOR = "FLOOR"

    @property
    def decimal_rounding(self) -> str | None:
        """The `decimal` module constant for this mode, or None for HALF_ODD (no native equivalent)."""
        return _DECIMAL_ROUNDING_BY_MODE.get(self)

    @classmethod
    def from_str(cls, value: str) -> RoundingMode:
        """Parse a mode name such as "half_even", "HALF-EVEN" or "ROUND_HALF_EVEN".

        Raises:
            ValueError: If $value does not name a rounding mode.
        """
        normalized = value.strip().upper().replace("-", "_")
        if normalized.startswith("ROUND_"):
            normalized = normalized[len("ROUND_") :]

        # Raise: unknown mode name
        if normalized not in cls.__members__:
            raise ValueError(f"Cannot call `RoundingMode.from_str` because $value ('{value}') is not one of {list(cls.__members__)}")

        return cls[normalized]


_DECIMAL_ROUNDING_BY_MODE: dict[RoundingMode, str] = {
    RoundingMode.UP: ROUND_UP,
    RoundingMode.DOWN: ROUND_DOWN,
    RoundingMode.HALF_UP: ROUND_HALF_UP,
    RoundingMode.HALF_DOWN: ROUND_HALF_DOWN,
    RoundingMode.HALF_EVEN: ROUND_HALF_EVEN,
    RoundingMode.CEILING: ROUND_CEILING,
    RoundingMode.FLOOR: ROUND_FLOOR,
}
