from __future__ import annotations

import json
import logging
from decimal import Decimal

from exact_money.bank.protocol import Bank, RoundingStrategy
from exact_money.bank.rates_store.memory import MemoryRatesStore
from exact_money.domain.monetary.currency import Currency
from exact_money.domain.monetary.currency_registry import CurrencyRegistry, get_default_registry
from exact_money.domain.monetary.money import Money
from exact_money.exceptions import UnknownCurrencyError, UnknownRateError
from exact_money.utils.decimal_tools import DecimalLike, as_decimal, as_fraction, fraction_to_decimal

logger = logging.getLogger(__name__)

RATE_KEY_SEPARATOR = "_TO_"


class VariableExchangeBank(Bank):
    """Bank that converts with rates added at runtime.

    Rates are directional: adding USD -> EUR does not imply EUR -> USD. A rate R means
    `1 FROM = R TO` in major units. Rates live in a `MemoryRatesStore` (or any object with the same
    interface), which does its own locking, so rates can be updated while other threads exchange.

    Example:
        ```python
        bank = VariableExchangeBank()
        bank.add_rate("USD", "EUR", "0.9")
        Money(1000, "USD").exchange_to("EUR", bank)  # Money(900, EUR)
        ```
    """

    # region Init

    def __init__(
        self,
        store: MemoryRatesStore | None = None,
        rounding: RoundingStrategy | None = None,
        registry: CurrencyRegistry | None = None,
    ) -> None:
        """Create a bank.

        Args:
            store: Rate storage. Defaults to a new empty `MemoryRatesStore`.
            rounding: Bank-wide strategy mapping the raw exchanged minor-unit amount to an int.
                A strategy passed to `exchange` takes precedence. None means the active rounding mode.
            registry: Registry used to resolve currency codes. None means the process-wide registry.
        """
        self._store = store if store is not None else MemoryRatesStore()
        self._rounding = rounding
        self._registry = registry

    @property
    def store(self) -> MemoryRatesStore:
        return self._store

    # endregion

    # region Rates

    def add_rate(self, from_currency: Currency | str, to_currency: Currency | str, rate: DecimalLike) -> Decimal:
        """Register the rate for converting $from_currency into $to_currency.

        Raises:
            UnknownCurrencyError: If either currency is not registered.
            ValueError: If $rate is not a positive number.
        """
        source = self._resolve(from_currency)
        target = self._resolve(to_currency)

        decimal_rate = self._store.add_rate(source.code, target.code, _validate_rate(rate))
        logger.debug(f"VariableExchangeBank set rate {source.code} -> {target.code} = {decimal_rate}")
        return decimal_rate

    def set_rate(self, from_currency: Currency | str, to_currency: Currency | str, rate: DecimalLike) -> Decimal:
        """Alias of `add_rate`."""
        return self.add_rate(from_currency, to_currency, rate)

    def get_rate(self, from_currency: Currency | str, to_currency: Currency | str) -> Decimal | None:
        """Return the rate for the pair, or None if unknown. Same-currency rate is always 1."""
        source = self._resolve(from_currency)
        target = self._resolve(to_currency)
        if source == target:
            return Decimal(1)
        return self._store.get_rate(source.code, target.code)

    def export_rates(self) -> str:
        """Serialize all rates to JSON: `{"USD_TO_EUR": "0.9", ...}` (rates as strings, never floats)."""
        payload = {f"{from_code}{RATE_KEY_SEPARATOR}{to_code}": str(rate) for from_code, to_code, rate in sorted(self._store)}
        return json.dumps(payload, sort_keys=True)

    def import_rates(self, data: str) -> int:
        """Load rates from JSON produced by `export_rates`, replacing rates for the same pairs.

        Returns:
            Number of rates imported.

        Raises:
            ValueError: If $data is not valid JSON of the expected shape.
            UnknownCurrencyError: If a pair names an unregistered currency.
        """
        try:
            payload = json.loads(data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Cannot call `import_rates` because $data is not valid JSON: {e}") from e

        # Raise: expect a flat object of pair -> rate
        if not isinstance(payload, dict):
            raise ValueError(f"Cannot call `import_rates` because $data must be a JSON object, but got {type(payload).__name__}")

        parsed: list[tuple[Currency, Currency, Decimal]] = []
        for key, rate in payload.items():
            from_code, separator, to_code = key.partition(RATE_KEY_SEPARATOR)

            # Raise: keys look like 'USD_TO_EUR'
            if not separator or not from_code or not to_code:
                raise ValueError(f"Cannot call `import_rates` because key '{key}' is not in format 'FROM{RATE_KEY_SEPARATOR}TO'")

            parsed.append((self._resolve(from_code), self._resolve(to_code), _validate_rate(rate)))

        def store_all() -> None:
            for source, target, decimal_rate in parsed:
                self._store.add_rate(source.code, target.code, decimal_rate)

        self._store.transaction(store_all)
        logger.info(f"VariableExchangeBank imported {len(parsed)} rate(s)")
        return len(parsed)

    # endregion

    # region Protocol Bank

    def exchange(
        self,
        money: Money,
        target_currency: Currency | str,
        rounding: RoundingStrategy | None = None,
    ) -> Money:
        """Implements: Bank.exchange

        Convert $money into $target_currency using the stored rate.
        """
        source = money.currency
        try:
            target = self._resolve(target_currency)
        except UnknownCurrencyError as e:
            raise UnknownRateError(f"No conversion rate known for '{source.code}' -> '{target_currency}'") from e

        if source == target:
            return money

        rate = self._store.get_rate(source.code, target.code)

        # Raise: rate must be known
        if rate is None:
            raise UnknownRateError(f"No conversion rate known for '{source.code}' -> '{target.code}'")

        # Rate is quoted in major units; rescale minor units when subunits differ (e.g. USD -> JPY)
        raw = as_fraction(money.fractional) * as_fraction(rate) * target.subunit_to_unit / source.subunit_to_unit

        strategy = rounding if rounding is not None else self._rounding
        if strategy is None:
            return Money(raw, target, infinite_precision=money.infinite_precision)

        rounded = strategy(fraction_to_decimal(raw))

        # Raise: strategies must yield whole minor units
        if isinstance(rounded, bool) or not isinstance(rounded, int):
            raise TypeError(f"Rounding strategy must return an int of minor units, but returned: {rounded!r}")

        return Money(rounded, target, infinite_precision=money.infinite_precision)

    # endregion

    # region Utilities

    def _resolve(self, currency: Currency | str) -> Currency:
        registry = self._registry if self._registry is not None else get_default_registry()
        return registry.resolve(currency)

    # endregion

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self._store)} rates)"


def _validate_rate(rate: DecimalLike) -> Decimal:
    try:
        decimal_rate = as_decimal(rate)
    except (TypeError, ValueError) as e:
        raise ValueError(f"$rate must be a number, but provided value is: {rate!r}") from e

    # Raise: rate must be positive
    if decimal_rate <= 0:
        raise ValueError(f"$rate must be a positive number, but provided value is: {rate!r}")

    return decimal_rate
