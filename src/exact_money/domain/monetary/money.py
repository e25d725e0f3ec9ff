from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import TYPE_CHECKING, Callable, Sequence

from exact_money.config import get_config, get_default_bank
from exact_money.domain.monetary.currency import Currency
from exact_money.domain.monetary.currency_registry import lookup_currency
from exact_money.domain.rounding.policy import round_decimal, round_fraction, round_to_int
from exact_money.domain.rounding.rounding_mode import RoundingMode
from exact_money.exceptions import CurrencyMismatchError, NoCurrencyError, UndefinedSmallestDenominationError
from exact_money.utils.decimal_tools import DecimalLike, as_decimal, as_fraction, fraction_to_decimal, shift_decimal

if TYPE_CHECKING:
    from exact_money.bank.protocol import Bank

# Numbers accepted as minor-unit amounts and as scalars in arithmetic
Scalar = DecimalLike | Fraction


class Money:
    """Represents an exact monetary amount in a currency.

    The amount is stored in minor units ($fractional): cents for USD, yen for JPY. Each Money has
    a precision flag chosen at construction:

    - finite (default): $fractional is an `int`. Any computation producing a fractional minor
      unit is rounded with the active rounding mode (see `RoundingScope`).
    - infinite precision: $fractional is a `Decimal` that may keep fractional minor units until
      `round` is called explicitly.

    Money is immutable; every operation returns a new instance. Arithmetic and comparison require
    equal currencies and never convert implicitly; use `exchange_to` for that.
    """

    __slots__ = ("_fractional", "_currency", "_infinite_precision")

    # region Init

    def __init__(
        self,
        fractional: Scalar = 0,
        currency: Currency | str | None = None,
        *,
        infinite_precision: bool | None = None,
    ) -> None:
        """Initialize Money from an amount in minor units.

        Args:
            fractional: Amount in minor units (e.g. 1050 for 10.50 USD). Non-integral values are
                rounded with the active rounding mode unless $infinite_precision is True.
            currency: Currency instance or code. A code is looked up in the process-wide registry;
                an instance is used as given, so currencies kept in a private `CurrencyRegistry`
                work too. None means `MoneyConfig.default_currency`.
            infinite_precision: Keep fractional minor units instead of rounding. None means
                `MoneyConfig.infinite_precision`.

        Raises:
            NoCurrencyError: If $currency is None and no default currency is configured.
            UnknownCurrencyError: If $currency is a code that is not registered.
            ValueError: If $fractional is not a finite number.
        """
        if infinite_precision is None:
            infinite_precision = get_config().infinite_precision

        try:
            value = _as_exact(fractional)
        except (TypeError, ValueError, InvalidOperation) as e:
            raise ValueError(f"Cannot init `Money` because $fractional ({fractional!r}) cannot be converted to a number") from e

        self._currency = _resolve_currency(currency)
        self._infinite_precision = bool(infinite_precision)
        self._fractional = _normalize_fractional(value, self._infinite_precision)

    @classmethod
    def _build(cls, fractional: int | Decimal | Fraction, currency: Currency, infinite_precision: bool) -> Money:
        """Create Money from already-resolved parts (no currency lookup, no config read)."""
        result = cls.__new__(cls)
        result._currency = currency
        result._infinite_precision = infinite_precision
        result._fractional = _normalize_fractional(fractional, infinite_precision)
        return result

    def _with_fractional(self, fractional: int | Decimal | Fraction, infinite_precision: bool | None = None) -> Money:
        if infinite_precision is None:
            infinite_precision = self._infinite_precision
        return self._build(fractional, self._currency, infinite_precision)

    # endregion

    # region Named constructors

    @classmethod
    def from_cents(cls, cents: Scalar, currency: Currency | str | None = None, *, infinite_precision: bool | None = None) -> Money:
        """Create Money from minor units; same as the constructor."""
        return cls(cents, currency, infinite_precision=infinite_precision)

    @classmethod
    def from_amount(cls, amount: Scalar, currency: Currency | str | None = None, *, infinite_precision: bool | None = None) -> Money:
        """Create Money from an amount in major units (e.g. `Money.from_amount("10.50", "USD")`).

        The amount is multiplied by the currency's $subunit_to_unit and, unless infinite precision is
        requested, rounded to whole minor units with the active rounding mode.
        """
        resolved = _resolve_currency(currency)
        try:
            major = _as_exact(amount)
        except (TypeError, ValueError, InvalidOperation) as e:
            raise ValueError(f"Cannot call `from_amount` because $amount ({amount!r}) cannot be converted to a number") from e

        return cls(as_fraction(major) * resolved.subunit_to_unit, resolved, infinite_precision=infinite_precision)

    @classmethod
    def zero(cls, currency: Currency | str | None = None) -> Money:
        """Zero in $currency. Useful as start value for `sum`."""
        return cls(0, currency)

    @classmethod
    def us_dollar(cls, cents: Scalar) -> Money:
        return cls(cents, "USD")

    @classmethod
    def euro(cls, cents: Scalar) -> Money:
        return cls(cents, "EUR")

    @classmethod
    def pound_sterling(cls, pence: Scalar) -> Money:
        return cls(pence, "GBP")

    @classmethod
    def ca_dollar(cls, cents: Scalar) -> Money:
        return cls(cents, "CAD")

    @classmethod
    def from_str(cls, value_str: str) -> Money:
        """Parse Money from a string like '1000.50 USD' or 'USD 1000.50' (amount in major units).

        Args:
            value_str (str): String representation.

        Returns:
            Money: Money object.

        Raises:
            ValueError: If string format is invalid.
            UnknownCurrencyError: If the currency code is not registered.
        """
        value_str = value_str.strip()
        if not value_str:
            raise ValueError("Value string with $value_str = '' cannot be empty")

        # Split by whitespace
        parts = value_str.split()
        if len(parts) != 2:
            raise ValueError(f"Value string with $value_str = '{value_str}' must be in format 'value currency_code'")

        first, second = parts
        value_part, currency_part = (second, first) if first[:1].isalpha() else (first, second)

        try:
            value = Decimal(value_part)
        except (ValueError, TypeError, InvalidOperation) as e:
            raise ValueError(f"Invalid value part '{value_part}' in string '{value_str}'") from e

        return cls.from_amount(value, lookup_currency(currency_part))

    # endregion

    # region Accessors

    @property
    def fractional(self) -> int | Decimal:
        """Amount in minor units: `int` for finite money, `Decimal` under infinite precision."""
        return self._fractional

    @property
    def cents(self) -> int | Decimal:
        """Alias of $fractional."""
        return self._fractional

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def currency_code(self) -> str:
        return self._currency.code

    @property
    def infinite_precision(self) -> bool:
        return self._infinite_precision

    @property
    def amount(self) -> Decimal:
        """Exact amount in major units (`fractional / subunit_to_unit`), never rounded to the decimal context."""
        if self._currency.has_standard_subunit:
            return shift_decimal(Decimal(self._fractional), -self._currency.exponent)
        return fraction_to_decimal(as_fraction(self._fractional) / self._currency.subunit_to_unit)

    def to_decimal(self) -> Decimal:
        """Same as $amount."""
        return self.amount

    def to_int(self) -> int:
        """Major-unit amount truncated towards zero."""
        return int(self.amount)

    def to_float(self) -> float:
        """Approximate major-unit amount.

        Lossy: use for display or interop only, never for further monetary computation.
        """
        return float(self.amount)

    def is_zero(self) -> bool:
        return self._fractional == 0

    def is_nonzero(self) -> bool:
        return self._fractional != 0

    def is_positive(self) -> bool:
        return self._fractional > 0

    def is_negative(self) -> bool:
        return self._fractional < 0

    def with_currency(self, currency: Currency | str) -> Money:
        """Return the same minor-unit amount labelled with $currency (no exchange)."""
        return self._build(self._fractional, _resolve_currency(currency), self._infinite_precision)

    # endregion

    # region Rounding

    def round(self, rounding_mode: RoundingMode | None = None, digits: int = 0) -> Money:
        """Round the minor-unit amount.

        Args:
            rounding_mode: Mode to use; None means the active rounding mode.
            digits: Fractional digits of a minor unit to keep (0 = whole minor units). Only
                meaningful under infinite precision; finite money is already whole.

        Returns:
            New Money with the same precision flag.
        """
        # Finite money already holds whole minor units
        if not self._infinite_precision and digits >= 0:
            return self

        rounded = round_decimal(Decimal(self._fractional), rounding_mode, digits)
        return self._with_fractional(rounded)

    def round_to_nearest_cash_value(self, rounding_mode: RoundingMode | None = None) -> int | Decimal:
        """Round to the nearest multiple of the currency's smallest cash denomination.

        Returns:
            Rounded amount in minor units (`int`, or `Decimal` under infinite precision).

        Raises:
            UndefinedSmallestDenominationError: If the currency has no smallest denomination.
        """
        smallest_denomination = self._currency.smallest_denomination

        # Raise: cash rounding needs a physical denomination
        if smallest_denomination is None:
            raise UndefinedSmallestDenominationError(f"Cannot call `round_to_nearest_cash_value` because currency '{self._currency.code}' has no $smallest_denomination")

        steps = round_fraction(as_fraction(self._fractional) / smallest_denomination, rounding_mode)
        rounded = steps * smallest_denomination
        if self._infinite_precision:
            return Decimal(rounded)
        return rounded

    def to_nearest_cash_value(self, rounding_mode: RoundingMode | None = None) -> Money:
        """Same as `round_to_nearest_cash_value`, wrapped in Money."""
        return self._with_fractional(self.round_to_nearest_cash_value(rounding_mode))

    # endregion

    # region Exchange & allocation

    def exchange_to(
        self,
        currency: Currency | str,
        bank: Bank | None = None,
        rounding: Callable[[Decimal], int] | None = None,
    ) -> Money:
        """Convert to $currency through $bank (default: `get_default_bank()`).

        Args:
            currency: Target currency or code.
            bank: Bank to use; None means the configured default bank.
            rounding: Strategy mapping the raw exchanged minor-unit amount to an int.

        Raises:
            UnknownRateError: If the bank has no rate for the pair.
            ConversionDisallowedError: If the bank refuses conversion.
        """
        target_code = currency.code if isinstance(currency, Currency) else str(currency).strip().upper()
        if target_code == self._currency.code:
            return self
        if bank is None:
            bank = get_default_bank()
        return bank.exchange(self, currency, rounding)

    def allocate(self, weights: Sequence[Scalar] | int) -> list[Money]:
        """Split into parts proportional to $weights without losing a minor unit.

        See `exact_money.domain.allocation.allocator.allocate`.
        """
        from exact_money.domain.allocation.allocator import allocate

        return allocate(self, weights)

    def split(self, parts: int) -> list[Money]:
        """Split into $parts equal parts; earlier parts receive the leftover minor units."""
        return self.allocate(parts)

    # endregion

    # region Comparison

    def _check_same_currency(self, other: Money) -> None:
        """Check if two Money objects have the same currency.

        Raises:
            CurrencyMismatchError: If currencies don't match.
        """
        if self._currency != other._currency:
            raise CurrencyMismatchError(f"Cannot operate on different currencies: {self._currency} and {other._currency}")

    def _comparable_value(self, other) -> int | Decimal | None:
        """Return the value to compare against, or None when $other is not comparable."""
        if isinstance(other, Money):
            self._check_same_currency(other)
            return other._fractional
        # Comparison against plain zero is currency-neutral
        if _is_plain_zero(other):
            return 0
        return None

    def __eq__(self, other) -> bool:
        """Check equality with another Money object (same currency and same value)."""
        if not isinstance(other, Money):
            return False
        if self._currency != other._currency:
            return False
        return self._fractional == other._fractional

    def __hash__(self) -> int:
        """Hash based on value and currency code; int and Decimal of equal value hash alike."""
        return hash((self._fractional, self._currency.code))

    def __lt__(self, other) -> bool:
        value = self._comparable_value(other)
        if value is None:
            return NotImplemented
        return self._fractional < value

    def __le__(self, other) -> bool:
        value = self._comparable_value(other)
        if value is None:
            return NotImplemented
        return self._fractional <= value

    def __gt__(self, other) -> bool:
        value = self._comparable_value(other)
        if value is None:
            return NotImplemented
        return self._fractional > value

    def __ge__(self, other) -> bool:
        value = self._comparable_value(other)
        if value is None:
            return NotImplemented
        return self._fractional >= value

    def __bool__(self) -> bool:
        return self._fractional != 0

    # endregion

    # region Arithmetic

    def __add__(self, other):
        """Add two Money objects (same currency). Adding plain zero returns $self."""
        if isinstance(other, Money):
            self._check_same_currency(other)
            return self._with_fractional(
                as_fraction(self._fractional) + as_fraction(other._fractional),
                self._infinite_precision or other._infinite_precision,
            )
        if _is_plain_zero(other):
            return self
        return NotImplemented

    def __radd__(self, other):
        """Right addition; lets `sum(moneys)` work with its default start value 0."""
        return self.__add__(other)

    def __sub__(self, other):
        """Subtract two Money objects (same currency). Subtracting plain zero returns $self."""
        if isinstance(other, Money):
            self._check_same_currency(other)
            return self._with_fractional(
                as_fraction(self._fractional) - as_fraction(other._fractional),
                self._infinite_precision or other._infinite_precision,
            )
        if _is_plain_zero(other):
            return self
        return NotImplemented

    def __rsub__(self, other):
        """Right subtraction: only `0 - Money` is supported."""
        if _is_plain_zero(other):
            return -self
        return NotImplemented

    def __mul__(self, other):
        """Multiply Money by a number (returns Money)."""
        if isinstance(other, Money):
            return NotImplemented  # Money * Money doesn't make sense
        factor = _as_scalar(other)
        if factor is None:
            return NotImplemented
        return self._with_fractional(as_fraction(self._fractional) * factor)

    def __rmul__(self, other):
        """Right multiplication: number * Money."""
        return self.__mul__(other)

    def __truediv__(self, other):
        """Divide Money by number (returns Money) or Money by Money (returns Decimal)."""
        if isinstance(other, Money):
            self._check_same_currency(other)
            if other._fractional == 0:
                raise ZeroDivisionError("Cannot divide by zero Money")
            return fraction_to_decimal(as_fraction(self._fractional) / as_fraction(other._fractional))

        divisor = _as_scalar(other)
        if divisor is None:
            return NotImplemented
        if divisor == 0:
            raise ZeroDivisionError("Cannot divide Money by zero")
        return self._with_fractional(as_fraction(self._fractional) / divisor)

    def __rtruediv__(self, other):
        """Right division: number / Money (not supported)."""
        return NotImplemented

    def __divmod__(self, other):
        """Floor division with remainder; the remainder takes the sign of the divisor.

        - `divmod(Money, Money)` returns `(int | Decimal quotient, Money remainder)`.
        - `divmod(Money, number)` returns `(Money quotient, Money remainder)`.
        """
        if isinstance(other, Money):
            self._check_same_currency(other)
            if other._fractional == 0:
                raise ZeroDivisionError("Cannot divide by zero Money")
            dividend = as_fraction(self._fractional)
            divisor = as_fraction(other._fractional)
            quotient = math.floor(dividend / divisor)
            infinite_precision = self._infinite_precision or other._infinite_precision
            remainder = self._with_fractional(dividend - quotient * divisor, infinite_precision)
            return (Decimal(quotient) if infinite_precision else quotient), remainder

        divisor = _as_scalar(other)
        if divisor is None:
            return NotImplemented
        if divisor == 0:
            raise ZeroDivisionError("Cannot divide Money by zero")
        dividend = as_fraction(self._fractional)
        quotient = math.floor(dividend / divisor)
        return self._with_fractional(quotient), self._with_fractional(dividend - quotient * divisor)

    def __mod__(self, other):
        """Modulo with floor semantics (same as `divmod(self, other)[1]`)."""
        result = self.__divmod__(other)
        if result is NotImplemented:
            return NotImplemented
        return result[1]

    def remainder(self, other: Money | Scalar) -> Money:
        """Remainder of truncating division; takes the sign of $self.

        Raises:
            CurrencyMismatchError: If $other is Money in a different currency.
            ZeroDivisionError: If $other is zero.
            TypeError: If $other is not Money or a number.
        """
        if isinstance(other, Money):
            self._check_same_currency(other)
            divisor = as_fraction(other._fractional)
            infinite_precision = self._infinite_precision or other._infinite_precision
        else:
            divisor = _as_scalar(other)
            if divisor is None:
                raise TypeError(f"Cannot call `remainder` because $other ({other!r}) is not Money or a number")
            infinite_precision = self._infinite_precision

        if divisor == 0:
            raise ZeroDivisionError("Cannot divide Money by zero")

        dividend = as_fraction(self._fractional)
        quotient = math.trunc(dividend / divisor)
        return self._with_fractional(dividend - quotient * divisor, infinite_precision)

    def __neg__(self) -> Money:
        return self._with_fractional(-as_fraction(self._fractional))

    def __pos__(self) -> Money:
        return self

    def __abs__(self) -> Money:
        return self._with_fractional(abs(as_fraction(self._fractional)))

    def __int__(self) -> int:
        return self.to_int()

    def __float__(self) -> float:
        return self.to_float()

    # endregion

    # region String representations

    def __str__(self) -> str:
        """Return string like '1000.50 USD'."""
        return f"{self.amount} {self._currency.code}"

    def __repr__(self) -> str:
        """Return string like 'Money(100050, USD)' (minor units)."""
        return f"{self.__class__.__name__}({self._fractional}, {self._currency.code})"

    # endregion


# region Helpers


def _resolve_currency(currency: Currency | str | None) -> Currency:
    if currency is None:
        default_currency = get_config().default_currency

        # Raise: no currency given and no default configured
        if default_currency is None:
            raise NoCurrencyError("Cannot create Money without $currency because no default currency is configured")

        currency = default_currency
    return lookup_currency(currency)


def _is_plain_zero(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value == 0


def _as_exact(value: Scalar) -> int | Decimal | Fraction:
    """Convert a number into int, Decimal or Fraction without losing exactness."""
    if isinstance(value, bool):
        raise TypeError(f"$value must be a number, but provided value is: {value!r}")
    if isinstance(value, (int, Fraction)):
        return value
    return as_decimal(value)


def _as_scalar(value) -> Fraction | None:
    """Convert a scalar operand into an exact Fraction, or None if it is not a number."""
    try:
        return as_fraction(_as_exact(value))
    except (TypeError, ValueError, InvalidOperation):
        return None


def _normalize_fractional(value: int | Decimal | Fraction, infinite_precision: bool) -> int | Decimal:
    """Bring a minor-unit value into the representation required by the precision flag."""
    if infinite_precision:
        if isinstance(value, Fraction):
            return fraction_to_decimal(value)
        return Decimal(value)

    return round_to_int(value)


# endregion
