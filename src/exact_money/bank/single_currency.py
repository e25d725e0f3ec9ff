from __future__ import annotations

from exact_money.bank.protocol import Bank, RoundingStrategy
from exact_money.domain.monetary.currency import Currency
from exact_money.domain.monetary.money import Money
from exact_money.exceptions import ConversionDisallowedError


class SingleCurrencyBank(Bank):
    """Bank that forbids conversion between different currencies.

    Install it as default bank (see `exact_money.config.disallow_currency_conversion`) in
    applications that must never exchange implicitly.
    """

    def exchange(
        self,
        money: Money,
        target_currency: Currency | str,
        rounding: RoundingStrategy | None = None,
    ) -> Money:
        """Implements: Bank.exchange

        Return $money unchanged when $target_currency is its own currency, otherwise refuse.
        """
        target_code = target_currency.code if isinstance(target_currency, Currency) else str(target_currency).strip().upper()
        if target_code == money.currency_code:
            return money

        raise ConversionDisallowedError(f"Cannot convert '{money.currency_code}' to '{target_code}' because currency conversion is disabled")
