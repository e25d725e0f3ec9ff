from __future__ import annotations

from decimal import Decimal
from typing import Callable, Protocol, TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from exact_money.domain.monetary.currency import Currency
    from exact_money.domain.monetary.money import Money

# Strategy that turns the raw exchanged minor-unit amount into a whole number of minor units
RoundingStrategy: TypeAlias = Callable[[Decimal], int]


# region Interface


class Bank(Protocol):
    """Domain interface for converting Money between currencies.

    A Bank owns its rate source: a fixed table, a live feed, or a policy that refuses every
    conversion. Money only talks to this interface, so rate storage stays outside the value type.

    Implementations that mutate their rates while other threads exchange must synchronize
    internally; callers treat a Bank as already thread-safe.
    """

    def exchange(
        self,
        money: Money,
        target_currency: Currency | str,
        rounding: RoundingStrategy | None = None,
    ) -> Money:
        """Convert $money into $target_currency.

        The raw result in target minor units is `source minor units * rate` (scaled when the two
        currencies have different $subunit_to_unit). It is turned into the final amount by
        $rounding when given, else by the bank's own strategy, else by the active rounding mode.

        Args:
            money: The amount to convert.
            target_currency: Currency (or code) to convert into.
            rounding: Optional strategy mapping the raw Decimal result to an int of minor units.

        Returns:
            Money in $target_currency. Exchanging into the same currency returns $money unchanged.

        Raises:
            UnknownRateError: If no rate is known between the two currencies.
            ConversionDisallowedError: If this bank does not convert between currencies at all.
        """
        ...


# endregion
