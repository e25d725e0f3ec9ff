from __future__ import annotations

from contextvars import ContextVar, Token
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP, localcontext
from fractions import Fraction
from typing import Callable, TypeVar

from exact_money.config import get_config
from exact_money.domain.rounding.rounding_mode import RoundingMode
from exact_money.utils.decimal_tools import shift_decimal


T = TypeVar("T")

# Stack of scoped overrides; innermost mode is last. Each thread and asyncio task gets its own copy.
_scoped_rounding_modes: ContextVar[tuple[RoundingMode, ...]] = ContextVar("exact_money_scoped_rounding_modes", default=())


# region Active mode


def current_rounding_mode() -> RoundingMode:
    """Return the rounding mode in effect for the calling thread / task.

    The innermost active `RoundingScope` wins; outside any scope this is
    `MoneyConfig.default_rounding_mode`.
    """
    scoped_modes = _scoped_rounding_modes.get()
    if scoped_modes:
        return scoped_modes[-1]
    return get_config().default_rounding_mode


class RoundingScope:
    """Guard object that overrides the active rounding mode for a dynamic extent.

    Use it as a context manager, or call `enter` / `exit` explicitly when the
    scope does not map onto a single block. Scopes nest; leaving a scope
    restores exactly the modes that were active when it was entered.

    Example:
        ```python
        with RoundingScope(RoundingMode.FLOOR):
            price = Money(1999, "USD") * Decimal("0.15")
        ```
    """

    __slots__ = ("_mode", "_token")

    def __init__(self, mode: RoundingMode) -> None:
        # Raise: only RoundingMode members can be pushed
        if not isinstance(mode, RoundingMode):
            raise TypeError(f"$mode must be a RoundingMode instance, but provided value is: {mode!r}")

        self._mode = mode
        self._token: Token[tuple[RoundingMode, ...]] | None = None

    @property
    def mode(self) -> RoundingMode:
        return self._mode

    @property
    def is_active(self) -> bool:
        return self._token is not None

    def enter(self) -> RoundingMode:
        """Push $mode onto the calling context's stack.

        Raises:
            RuntimeError: If this scope is already entered.
        """
        # Raise: a guard can be held only once at a time
        if self._token is not None:
            raise RuntimeError(f"Cannot call `enter` because RoundingScope({self._mode.name}) is already active")

        self._token = _scoped_rounding_modes.set(_scoped_rounding_modes.get() + (self._mode,))
        return self._mode

    def exit(self) -> None:
        """Restore the stack that was active before `enter`.

        Raises:
            RuntimeError: If this scope was not entered.
        """
        # Raise: nothing to restore
        if self._token is None:
            raise RuntimeError(f"Cannot call `exit` because RoundingScope({self._mode.name}) is not active")

        token, self._token = self._token, None
        _scoped_rounding_modes.reset(token)

    def __enter__(self) -> RoundingMode:
        return self.enter()

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.exit()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._mode.name}, active={self.is_active})"


def with_rounding_mode(mode: RoundingMode, body: Callable[[], T]) -> T:
    """Run $body with $mode as the active rounding mode and return its result.

    The previous mode is restored whether $body returns or raises.
    """
    with RoundingScope(mode):
        return body()


# endregion

# region Rounding kernel


def round_decimal(value: Decimal, mode: RoundingMode | None = None, places: int = 0) -> Decimal:
    """Round $value to $places fractional digits.

    Args:
        value: Value to round.
        mode: Rounding mode; None means `current_rounding_mode()`.
        places: Number of fractional digits to keep (negative rounds to tens, hundreds, ...).

    Returns:
        Rounded Decimal with exponent `-places`.
    """
    if mode is None:
        mode = current_rounding_mode()

    quantum = shift_decimal(Decimal(1), -places)

    # Precision wide enough for every digit of $value and of the result, so nothing is rounded twice
    with localcontext() as context:
        context.prec = max(context.prec, abs(value.adjusted()) + len(value.as_tuple().digits) + abs(places) + 2)

        decimal_rounding = mode.decimal_rounding
        if decimal_rounding is not None:
            return value.quantize(quantum, rounding=decimal_rounding)

        # HALF_ODD: only an exact tie differs from HALF_UP
        floored = value.quantize(quantum, rounding=ROUND_FLOOR)
        if value - floored != quantum / 2:
            return value.quantize(quantum, rounding=ROUND_HALF_UP)
        if int(shift_decimal(floored, places)) % 2 != 0:
            return floored
        return floored + quantum


def round_fraction(value: Fraction, mode: RoundingMode | None = None) -> int:
    """Round the exact rational $value to an int with $mode (or the active mode).

    Works on the exact value, so ties are detected without any precision loss.
    """
    if mode is None:
        mode = current_rounding_mode()

    floor = value.numerator // value.denominator
    remainder = value - floor
    if remainder == 0:
        return floor

    ceiling = floor + 1
    is_positive = value > 0

    if mode is RoundingMode.FLOOR:
        return floor
    if mode is RoundingMode.CEILING:
        return ceiling
    if mode is RoundingMode.UP:
        return ceiling if is_positive else floor
    if mode is RoundingMode.DOWN:
        return floor if is_positive else ceiling

    half = Fraction(1, 2)
    if remainder < half:
        return floor
    if remainder > half:
        return ceiling

    # Exact tie
    if mode is RoundingMode.HALF_UP:
        return ceiling if is_positive else floor
    if mode is RoundingMode.HALF_DOWN:
        return floor if is_positive else ceiling
    if mode is RoundingMode.HALF_EVEN:
        return floor if floor % 2 == 0 else ceiling
    return floor if floor % 2 != 0 else ceiling


def round_to_int(value: Decimal | Fraction | int, mode: RoundingMode | None = None) -> int:
    """Round $value to a whole number with $mode (or the active mode) and return it as int."""
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal):
        value = Fraction(value)
    return round_fraction(value, mode)


# endregion
