from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Mapping

from bidict import ValueDuplicationError, bidict

from exact_money.domain.monetary.currency import Currency
from exact_money.domain.monetary.currency_table import BUILTIN_CURRENCIES
from exact_money.exceptions import UnknownCurrencyError

logger = logging.getLogger(__name__)


class CurrencyRegistry:
    """Mapping from currency code to Currency.

    Populate the registry once at start-up (from `BUILTIN_CURRENCIES`, a file, a database, ...)
    and treat it as read-only afterwards; writes are not synchronized. Lookups ignore case and
    surrounding whitespace.

    Besides the code index, the registry keeps a bidirectional code <-> ISO numeric index so
    currencies can be found by either identifier.
    """

    # region Init

    def __init__(self, currencies: Iterable[Currency] = ()) -> None:
        """Create a registry, optionally pre-populated with $currencies."""
        self._currencies_by_code: dict[str, Currency] = {}
        self._iso_numeric_by_code: bidict[str, int] = bidict()

        for currency in currencies:
            self.register(currency)

    @classmethod
    def with_builtin_currencies(cls) -> CurrencyRegistry:
        """Create a registry populated from `BUILTIN_CURRENCIES`."""
        registry = cls()
        registry.load(BUILTIN_CURRENCIES)
        return registry

    # endregion

    # region Main

    def register(self, currency: Currency, overwrite: bool = True) -> None:
        """Add $currency, replacing an existing entry with the same code.

        Args:
            currency: The currency to register.
            overwrite: Whether an existing entry with the same code may be replaced.

        Raises:
            TypeError: If $currency is not a Currency instance.
            ValueError: If the code exists and $overwrite is False, or the ISO numeric code is
                already used by a different currency.
        """
        # Raise: only Currency records can be registered
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency!r}")

        code = currency.code

        # Raise: refuse silent replacement when asked to
        if code in self._currencies_by_code and not overwrite:
            raise ValueError(f"Currency with code '{code}' already exists in registry. Use overwrite=True to replace it.")

        previous_iso_numeric = self._iso_numeric_by_code.pop(code, None)
        if currency.iso_numeric is not None:
            try:
                self._iso_numeric_by_code.put(code, currency.iso_numeric)
            except ValueDuplicationError as e:
                if previous_iso_numeric is not None:
                    self._iso_numeric_by_code[code] = previous_iso_numeric
                owner = self._iso_numeric_by_code.inverse[currency.iso_numeric]
                raise ValueError(f"Cannot call `register` because $iso_numeric ({currency.iso_numeric}) of '{code}' is already used by '{owner}'") from e

        self._currencies_by_code[code] = currency

        if not currency.has_standard_subunit:
            logger.debug(f"Registered currency '{code}' with non-standard subunit_to_unit {currency.subunit_to_unit} (exponent {currency.exponent})")
        else:
            logger.debug(f"Registered currency '{code}'")

    def unregister(self, code: str) -> bool:
        """Remove the currency with $code.

        Returns:
            True if a currency was removed, False if $code was not registered.
        """
        normalized = _normalize_code(code)
        removed = self._currencies_by_code.pop(normalized, None)
        self._iso_numeric_by_code.pop(normalized, None)
        if removed is not None:
            logger.debug(f"Unregistered currency '{normalized}'")
        return removed is not None

    def load(self, records: Iterable[Mapping[str, Any]]) -> int:
        """Register one Currency per mapping in $records (see `Currency.from_mapping`).

        Returns:
            Number of currencies registered.
        """
        count = 0
        for record in records:
            self.register(Currency.from_mapping(record))
            count += 1

        logger.info(f"Loaded {count} currency(ies) into CurrencyRegistry")
        return count

    def lookup(self, code: str) -> Currency:
        """Return the currency registered under $code (case-insensitive).

        Raises:
            UnknownCurrencyError: If no currency is registered under $code.
        """
        normalized = _normalize_code(code)
        currency = self._currencies_by_code.get(normalized)

        # Raise: currency must be registered
        if currency is None:
            raise UnknownCurrencyError(f"Currency with code '{normalized}' not found in registry. Available currencies: {sorted(self._currencies_by_code)}")

        return currency

    def lookup_by_iso_numeric(self, iso_numeric: int | str) -> Currency:
        """Return the currency with ISO 4217 numeric code $iso_numeric (e.g. 840 or "840").

        Raises:
            UnknownCurrencyError: If no registered currency has that numeric code.
        """
        try:
            numeric = int(iso_numeric)
        except (TypeError, ValueError) as e:
            raise UnknownCurrencyError(f"Cannot call `lookup_by_iso_numeric` because $iso_numeric ({iso_numeric!r}) is not an integer") from e

        code = self._iso_numeric_by_code.inverse.get(numeric)

        # Raise: numeric code must be registered
        if code is None:
            raise UnknownCurrencyError(f"Currency with ISO numeric code {numeric} not found in registry")

        return self._currencies_by_code[code]

    def resolve(self, value: Currency | str) -> Currency:
        """Return $value if it is a Currency, otherwise look it up as a code."""
        if isinstance(value, Currency):
            return value
        return self.lookup(value)

    # endregion

    # region Magic methods

    def __contains__(self, code: object) -> bool:
        if isinstance(code, Currency):
            code = code.code
        if not isinstance(code, str):
            return False
        return code.strip().upper() in self._currencies_by_code

    def __len__(self) -> int:
        return len(self._currencies_by_code)

    def __iter__(self) -> Iterator[Currency]:
        """Iterate currencies ordered by (priority, code)."""
        return iter(sorted(self._currencies_by_code.values(), key=lambda c: (c.priority, c.code)))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self)} currencies)"

    # endregion


def _normalize_code(code: str) -> str:
    # Raise: codes are strings
    if not isinstance(code, str):
        raise TypeError(f"$code must be a string, but provided value is: {code!r}")
    return code.strip().upper()


# region Default registry

_default_registry: CurrencyRegistry | None = None


def get_default_registry() -> CurrencyRegistry:
    """Return the process-wide registry, creating it from `BUILTIN_CURRENCIES` on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = CurrencyRegistry.with_builtin_currencies()
    return _default_registry


def reset_default_registry() -> None:
    """Drop the process-wide registry; the next `get_default_registry` call rebuilds it.

    This method is primarily intended for testing purposes to ensure clean state between test runs.
    """
    global _default_registry
    _default_registry = None


def lookup_currency(code: Currency | str) -> Currency:
    """Resolve $code against the process-wide registry."""
    return get_default_registry().resolve(code)


# endregion
