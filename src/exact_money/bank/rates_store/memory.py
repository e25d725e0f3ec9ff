from __future__ import annotations

import threading
from decimal import Decimal
from typing import Callable, Iterator, TypeVar

from exact_money.utils.decimal_tools import DecimalLike, as_decimal

T = TypeVar("T")


class MemoryRatesStore:
    """Thread-safe in-memory table of exchange rates.

    Rates are keyed by the upper-case currency code pair `(FROM, TO)` and stored as Decimal. A rate
    R means `1 FROM = R TO` in major units.
    """

    __slots__ = ("_rates", "_lock")

    def __init__(self, rates: dict[tuple[str, str], DecimalLike] | None = None) -> None:
        self._rates: dict[tuple[str, str], Decimal] = {}
        self._lock = threading.RLock()

        for (from_code, to_code), rate in (rates or {}).items():
            self.add_rate(from_code, to_code, rate)

    # region Main

    def add_rate(self, from_code: str, to_code: str, rate: DecimalLike) -> Decimal:
        """Store $rate for the pair and return it as Decimal (replacing an existing rate)."""
        key = _rate_key(from_code, to_code)
        decimal_rate = as_decimal(rate)
        with self._lock:
            self._rates[key] = decimal_rate
        return decimal_rate

    def get_rate(self, from_code: str, to_code: str) -> Decimal | None:
        """Return the stored rate for the pair, or None if unknown."""
        key = _rate_key(from_code, to_code)
        with self._lock:
            return self._rates.get(key)

    def remove_rate(self, from_code: str, to_code: str) -> bool:
        """Delete the rate for the pair. Returns True if a rate was removed."""
        key = _rate_key(from_code, to_code)
        with self._lock:
            return self._rates.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._rates.clear()

    def rates(self) -> dict[tuple[str, str], Decimal]:
        """Return a snapshot copy of all rates."""
        with self._lock:
            return dict(self._rates)

    def transaction(self, body: Callable[[], T]) -> T:
        """Run $body while holding the store lock, so several updates appear atomic to readers."""
        with self._lock:
            return body()

    # endregion

    # region Magic methods

    def __iter__(self) -> Iterator[tuple[str, str, Decimal]]:
        """Iterate `(from_code, to_code, rate)` over a snapshot."""
        return iter([(from_code, to_code, rate) for (from_code, to_code), rate in self.rates().items()])

    def __len__(self) -> int:
        with self._lock:
            return len(self._rates)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self)} rates)"

    # endregion


def _rate_key(from_code: str, to_code: str) -> tuple[str, str]:
    # Raise: codes must be non-empty strings
    if not isinstance(from_code, str) or not from_code.strip():
        raise ValueError(f"$from_code must be a non-empty string, but provided value is: {from_code!r}")
    if not isinstance(to_code, str) or not to_code.strip():
        raise ValueError(f"$to_code must be a non-empty string, but provided value is: {to_code!r}")
    return from_code.strip().upper(), to_code.strip().upper()
