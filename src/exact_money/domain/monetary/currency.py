from __future__ import annotations

from typing import Any, Mapping


class Currency:
    """Immutable description of a currency.

    Attributes:
        code (str): Currency code (e.g., "USD", "BTC"), stored upper-case.
        name (str): Full currency name.
        exponent (int): Number of digits in the minor unit (2 for USD, 0 for JPY).
        subunit_to_unit (int): Minor units per major unit (100 for USD). Usually `10 ** exponent`,
            but currencies such as MRU (5 khoums per ouguiya) are allowed to differ.
        symbol (str): Display symbol (e.g., "$").
        thousands_separator (str): Digit group separator used for display.
        decimal_mark (str): Decimal separator used for display.
        smallest_denomination (int | None): Smallest physical cash amount in minor units, or None
            for currencies without coinage.
        iso_numeric (int | None): ISO 4217 numeric code, or None for non-ISO currencies.
        symbol_first (bool): Whether the symbol is displayed before the amount.
        priority (int): Ordering hint for listings; lower values sort first.
    """

    __slots__ = (
        "_code",
        "_name",
        "_exponent",
        "_subunit_to_unit",
        "_symbol",
        "_thousands_separator",
        "_decimal_mark",
        "_smallest_denomination",
        "_iso_numeric",
        "_symbol_first",
        "_priority",
    )

    def __init__(
        self,
        code: str,
        name: str,
        exponent: int,
        subunit_to_unit: int | None = None,
        symbol: str = "",
        thousands_separator: str = ",",
        decimal_mark: str = ".",
        smallest_denomination: int | None = None,
        iso_numeric: int | None = None,
        symbol_first: bool = True,
        priority: int = 100,
    ) -> None:
        """Initialize a Currency instance.

        Args:
            code: Currency code (e.g., "USD", "BTC"). Surrounding whitespace is stripped and the code
                is upper-cased.
            name: Full currency name.
            exponent: Number of digits in the minor unit (0-18).
            subunit_to_unit: Minor units per major unit. Defaults to `10 ** exponent`.
            symbol: Display symbol. Defaults to $code.
            thousands_separator: Digit group separator for display.
            decimal_mark: Decimal separator for display.
            smallest_denomination: Smallest cash amount in minor units, or None.
            iso_numeric: ISO 4217 numeric code, or None.
            symbol_first: Whether the symbol is displayed before the amount.
            priority: Ordering hint for listings.

        Raises:
            ValueError: If parameters are invalid.
        """
        # Raise: code must be a non-empty string
        if not isinstance(code, str) or not code.strip():
            raise ValueError(f"$code must be a non-empty string, but provided value is: '{code}'")

        # Raise: name must be a non-empty string
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"$name must be a non-empty string, but provided value is: '{name}'")

        # Raise: exponent must be a small non-negative integer
        if not _is_int(exponent) or exponent < 0 or exponent > 18:
            raise ValueError(f"$exponent must be an integer between 0 and 18, but provided value is: {exponent}")

        if subunit_to_unit is None:
            subunit_to_unit = 10**exponent

        # Raise: subunit_to_unit must be a positive integer
        if not _is_int(subunit_to_unit) or subunit_to_unit < 1:
            raise ValueError(f"$subunit_to_unit must be a positive integer, but provided value is: {subunit_to_unit}")

        # Raise: smallest_denomination, when present, must be a positive number of minor units
        if smallest_denomination is not None and (not _is_int(smallest_denomination) or smallest_denomination < 1):
            raise ValueError(f"$smallest_denomination must be a positive integer or None, but provided value is: {smallest_denomination}")

        # Raise: iso_numeric, when present, must be a non-negative integer
        if iso_numeric is not None and (not _is_int(iso_numeric) or iso_numeric < 0):
            raise ValueError(f"$iso_numeric must be a non-negative integer or None, but provided value is: {iso_numeric}")

        self._code = code.strip().upper()
        self._name = name.strip()
        self._exponent = exponent
        self._subunit_to_unit = subunit_to_unit
        self._symbol = symbol or self._code
        self._thousands_separator = thousands_separator
        self._decimal_mark = decimal_mark
        self._smallest_denomination = smallest_denomination
        self._iso_numeric = iso_numeric
        self._symbol_first = bool(symbol_first)
        self._priority = priority

    # region Properties

    @property
    def code(self) -> str:
        """Get the currency code."""
        return self._code

    @property
    def name(self) -> str:
        return self._name

    @property
    def exponent(self) -> int:
        """Get the number of digits in the minor unit."""
        return self._exponent

    @property
    def subunit_to_unit(self) -> int:
        """Get the number of minor units per major unit."""
        return self._subunit_to_unit

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def thousands_separator(self) -> str:
        return self._thousands_separator

    @property
    def decimal_mark(self) -> str:
        return self._decimal_mark

    @property
    def smallest_denomination(self) -> int | None:
        """Get the smallest cash amount in minor units (None if the currency has no coinage)."""
        return self._smallest_denomination

    @property
    def iso_numeric(self) -> int | None:
        return self._iso_numeric

    @property
    def symbol_first(self) -> bool:
        return self._symbol_first

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def has_standard_subunit(self) -> bool:
        """Check whether $subunit_to_unit equals `10 ** exponent`."""
        return self._subunit_to_unit == 10**self._exponent

    # endregion

    # region Conversion

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Currency:
        """Create a Currency from a mapping of field names (as supplied by an external data source).

        Unknown keys are ignored. The mapping must contain at least "code", "name" and "exponent".

        Raises:
            ValueError: If a required key is missing or a value is invalid.
        """
        missing = [key for key in ("code", "name", "exponent") if key not in data]

        # Raise: required fields must be present
        if missing:
            raise ValueError(f"Cannot call `Currency.from_mapping` because $data is missing required key(s) {missing}")

        known = {key: data[key] for key in _FIELD_NAMES if key in data}
        return cls(**known)

    def to_dict(self) -> dict[str, Any]:
        """Return the currency fields as a plain dict (inverse of `from_mapping`)."""
        return {key: getattr(self, key) for key in _FIELD_NAMES}

    # endregion

    # region Magic methods

    def __eq__(self, other) -> bool:
        """Check equality with another Currency."""
        if not isinstance(other, Currency):
            return False
        return self.code == other.code

    def __hash__(self) -> int:
        """Hash based on currency code."""
        return hash(self.code)

    def __str__(self) -> str:
        """Return string representation."""
        return self.code

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"{self.__class__.__name__}('{self.code}', '{self.name}', exponent={self.exponent}, subunit_to_unit={self.subunit_to_unit})"

    # endregion


_FIELD_NAMES = (
    "code",
    "name",
    "exponent",
    "subunit_to_unit",
    "symbol",
    "thousands_separator",
    "decimal_mark",
    "smallest_denomination",
    "iso_numeric",
    "symbol_first",
    "priority",
)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
