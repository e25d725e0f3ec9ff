__version__ = "0.1.0"

from exact_money.config import MoneyConfig, configure, disallow_currency_conversion, get_config, get_default_bank, reset_config, set_config
from exact_money.domain.monetary.currency import Currency
from exact_money.domain.monetary.currency_registry import CurrencyRegistry, get_default_registry, lookup_currency, reset_default_registry
from exact_money.domain.monetary.money import Money
from exact_money.domain.rounding.rounding_mode import RoundingMode
from exact_money.domain.rounding.policy import RoundingScope, current_rounding_mode, with_rounding_mode
from exact_money.domain.allocation.allocator import allocate
from exact_money.bank.protocol import Bank
from exact_money.bank.rates_store.memory import MemoryRatesStore
from exact_money.bank.variable_exchange import VariableExchangeBank
from exact_money.bank.single_currency import SingleCurrencyBank
from exact_money.exceptions import (
    ConversionDisallowedError,
    CurrencyMismatchError,
    InvalidAllocationError,
    MoneyError,
    NoCurrencyError,
    UndefinedSmallestDenominationError,
    UnknownCurrencyError,
    UnknownRateError,
)

__all__ = [
    "Money",
    "Currency",
    "CurrencyRegistry",
    "get_default_registry",
    "reset_default_registry",
    "lookup_currency",
    "RoundingMode",
    "RoundingScope",
    "current_rounding_mode",
    "with_rounding_mode",
    "allocate",
    "Bank",
    "MemoryRatesStore",
    "VariableExchangeBank",
    "SingleCurrencyBank",
    "MoneyConfig",
    "get_config",
    "set_config",
    "configure",
    "reset_config",
    "get_default_bank",
    "disallow_currency_conversion",
    "MoneyError",
    "CurrencyMismatchError",
    "UnknownCurrencyError",
    "NoCurrencyError",
    "UndefinedSmallestDenominationError",
    "UnknownRateError",
    "ConversionDisallowedError",
    "InvalidAllocationError",
]
