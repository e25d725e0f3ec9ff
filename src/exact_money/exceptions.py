"""Exceptions raised by exact_money.

All errors are local and synchronous. Each one subclasses `MoneyError` plus the
builtin exception that best describes it, so callers can catch either.
"""


class MoneyError(Exception):
    """Base class for all exact_money errors."""

    pass


class CurrencyMismatchError(MoneyError, ValueError):
    """Raised when arithmetic or comparison mixes two different currencies."""

    pass


class UnknownCurrencyError(MoneyError, LookupError):
    """Raised when a currency code is not registered."""

    pass


class NoCurrencyError(MoneyError, ValueError):
    """Raised when Money is created without a currency and no default currency is configured."""

    pass


class UndefinedSmallestDenominationError(MoneyError, ValueError):
    """Raised when cash rounding is requested for a currency without a smallest denomination."""

    pass


class UnknownRateError(MoneyError, LookupError):
    """Raised when a Bank has no rate between two currencies."""

    pass


class ConversionDisallowedError(MoneyError, RuntimeError):
    """Raised when a Bank refuses to convert between currencies."""

    pass


class InvalidAllocationError(MoneyError, ValueError):
    """Raised for empty, negative or all-zero allocation weights."""

    pass
