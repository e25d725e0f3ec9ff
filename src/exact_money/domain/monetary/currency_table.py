"""Built-in currency records used to seed the default registry.

Applications with their own currency data call `CurrencyRegistry.load` or
`CurrencyRegistry.register` instead of relying on this table.
"""

from __future__ import annotations

from typing import Any

# fmt: off
BUILTIN_CURRENCIES: tuple[dict[str, Any], ...] = (
    # Major fiat currencies
    {"code": "USD", "name": "United States Dollar", "exponent": 2, "symbol": "$", "smallest_denomination": 1, "iso_numeric": 840, "priority": 1},
    {"code": "EUR", "name": "Euro", "exponent": 2, "symbol": "€", "thousands_separator": ".", "decimal_mark": ",", "smallest_denomination": 1, "iso_numeric": 978, "priority": 2},
    {"code": "GBP", "name": "British Pound", "exponent": 2, "symbol": "£", "smallest_denomination": 1, "iso_numeric": 826, "priority": 3},
    {"code": "AUD", "name": "Australian Dollar", "exponent": 2, "symbol": "$", "smallest_denomination": 5, "iso_numeric": 36, "priority": 4},
    {"code": "CAD", "name": "Canadian Dollar", "exponent": 2, "symbol": "$", "smallest_denomination": 5, "iso_numeric": 124, "priority": 5},
    {"code": "JPY", "name": "Japanese Yen", "exponent": 0, "symbol": "¥", "smallest_denomination": 1, "iso_numeric": 392, "priority": 6},
    {"code": "CHF", "name": "Swiss Franc", "exponent": 2, "symbol": "CHF", "smallest_denomination": 5, "iso_numeric": 756},
    {"code": "CNY", "name": "Chinese Renminbi Yuan", "exponent": 2, "symbol": "¥", "smallest_denomination": 1, "iso_numeric": 156},
    {"code": "HKD", "name": "Hong Kong Dollar", "exponent": 2, "symbol": "$", "smallest_denomination": 10, "iso_numeric": 344},
    {"code": "SGD", "name": "Singapore Dollar", "exponent": 2, "symbol": "$", "smallest_denomination": 1, "iso_numeric": 702},
    {"code": "NZD", "name": "New Zealand Dollar", "exponent": 2, "symbol": "$", "smallest_denomination": 10, "iso_numeric": 554},
    {"code": "INR", "name": "Indian Rupee", "exponent": 2, "symbol": "₹", "smallest_denomination": 50, "iso_numeric": 356},
    {"code": "MXN", "name": "Mexican Peso", "exponent": 2, "symbol": "$", "smallest_denomination": 5, "iso_numeric": 484},
    {"code": "BRL", "name": "Brazilian Real", "exponent": 2, "symbol": "R$", "thousands_separator": ".", "decimal_mark": ",", "smallest_denomination": 5, "iso_numeric": 986},
    {"code": "ZAR", "name": "South African Rand", "exponent": 2, "symbol": "R", "thousands_separator": " ", "smallest_denomination": 10, "iso_numeric": 710},
    {"code": "KRW", "name": "South Korean Won", "exponent": 0, "symbol": "₩", "smallest_denomination": 1, "iso_numeric": 410},
    # Nordic and central European currencies (symbol after amount)
    {"code": "SEK", "name": "Swedish Krona", "exponent": 2, "symbol": "kr", "thousands_separator": " ", "decimal_mark": ",", "smallest_denomination": 100, "iso_numeric": 752, "symbol_first": False},
    {"code": "NOK", "name": "Norwegian Krone", "exponent": 2, "symbol": "kr", "thousands_separator": ".", "decimal_mark": ",", "smallest_denomination": 100, "iso_numeric": 578, "symbol_first": False},
    {"code": "DKK", "name": "Danish Krone", "exponent": 2, "symbol": "kr.", "thousands_separator": ".", "decimal_mark": ",", "smallest_denomination": 50, "iso_numeric": 208, "symbol_first": False},
    {"code": "HUF", "name": "Hungarian Forint", "exponent": 2, "symbol": "Ft", "thousands_separator": " ", "decimal_mark": ",", "smallest_denomination": 500, "iso_numeric": 348, "symbol_first": False},
    # Three-digit minor units
    {"code": "KWD", "name": "Kuwaiti Dinar", "exponent": 3, "symbol": "د.ك", "smallest_denomination": 5, "iso_numeric": 414},
    {"code": "BHD", "name": "Bahraini Dinar", "exponent": 3, "symbol": "ب.د", "smallest_denomination": 5, "iso_numeric": 48},
    # Non-decimal minor unit: 1 ouguiya = 5 khoums
    {"code": "MRU", "name": "Mauritanian Ouguiya", "exponent": 1, "subunit_to_unit": 5, "symbol": "UM", "smallest_denomination": 1, "iso_numeric": 929, "symbol_first": False},
    # No physical cash
    {"code": "BTC", "name": "Bitcoin", "exponent": 8, "symbol": "₿"},
    {"code": "ETH", "name": "Ethereum", "exponent": 18, "symbol": "Ξ"},
    {"code": "XAU", "name": "Gold (Troy Ounce)", "exponent": 0, "symbol": "oz t", "iso_numeric": 959, "symbol_first": False},
)
# fmt: on
