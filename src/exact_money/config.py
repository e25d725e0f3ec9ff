"""Process-wide configuration for exact_money.

Lifecycle:

1. At start-up the host application calls `set_config` (or `configure`) once,
   optionally with a `MoneyConfig.from_env()` value.
2. Afterwards the configuration is read-only in practice; it is not
   synchronized, so do not change it while other threads create Money.
3. Tests call `reset_config` to return to the built-in defaults.

The configuration is consulted when Money is constructed without an explicit
currency or precision flag, when no scoped rounding mode is active, and when
`Money.exchange_to` is called without a bank. Arithmetic between existing Money
values never reads it.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from exact_money.domain.rounding.rounding_mode import RoundingMode

if TYPE_CHECKING:
    from exact_money.bank.protocol import Bank

logger = logging.getLogger(__name__)

ENV_DEFAULT_CURRENCY = "MONEY_DEFAULT_CURRENCY"
ENV_ROUNDING_MODE = "MONEY_ROUNDING_MODE"
ENV_INFINITE_PRECISION = "MONEY_INFINITE_PRECISION"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class MoneyConfig:
    """Immutable snapshot of the library defaults.

    Attributes:
        default_currency: Currency code used when Money is created without a currency. None means
            a currency is always required.
        default_rounding_mode: Rounding mode used outside any `RoundingScope`.
        infinite_precision: Precision flag given to Money created without an explicit
            $infinite_precision argument.
        default_bank: Bank used by `Money.exchange_to` when no bank is passed. None means a shared
            `VariableExchangeBank` created on first use.
    """

    default_currency: str | None = None
    default_rounding_mode: RoundingMode = RoundingMode.HALF_EVEN
    infinite_precision: bool = False
    default_bank: Bank | None = None

    def __post_init__(self) -> None:
        # Raise: rounding mode must be an enum member
        if not isinstance(self.default_rounding_mode, RoundingMode):
            raise TypeError(f"$default_rounding_mode must be a RoundingMode instance, but provided value is: {self.default_rounding_mode!r}")

        if self.default_currency is not None:
            # Raise: empty code would never resolve
            if not isinstance(self.default_currency, str) or not self.default_currency.strip():
                raise ValueError(f"$default_currency must be a non-empty string or None, but provided value is: {self.default_currency!r}")
            object.__setattr__(self, "default_currency", self.default_currency.strip().upper())

    def replace(self, **changes) -> MoneyConfig:
        """Return a copy with $changes applied."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_env(cls, dotenv_path: str | os.PathLike | None = None) -> MoneyConfig:
        """Build a config from environment variables (after loading a `.env` file).

        Recognized variables: `MONEY_DEFAULT_CURRENCY`, `MONEY_ROUNDING_MODE` (e.g. "half_even"),
        `MONEY_INFINITE_PRECISION` ("true"/"false"). Missing variables keep the built-in defaults.
        Variables already present in the process environment win over the `.env` file.

        Args:
            dotenv_path: Path to the `.env` file. None lets python-dotenv search for one.

        Raises:
            ValueError: If a variable holds a value that cannot be parsed.
        """
        load_dotenv(dotenv_path=dotenv_path, override=False)

        changes: dict = {}

        default_currency = os.environ.get(ENV_DEFAULT_CURRENCY)
        if default_currency and default_currency.strip():
            changes["default_currency"] = default_currency

        rounding_mode = os.environ.get(ENV_ROUNDING_MODE)
        if rounding_mode and rounding_mode.strip():
            changes["default_rounding_mode"] = RoundingMode.from_str(rounding_mode)

        infinite_precision = os.environ.get(ENV_INFINITE_PRECISION)
        if infinite_precision is not None:
            changes["infinite_precision"] = _parse_bool(ENV_INFINITE_PRECISION, infinite_precision)

        result = cls(**changes)
        logger.debug(f"Loaded MoneyConfig from environment: {result}")
        return result


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Cannot parse ${name} ('{value}') as a boolean; use one of {sorted(_TRUE_VALUES | _FALSE_VALUES)}")


# region Process-wide state

_config: MoneyConfig = MoneyConfig()
_fallback_bank: Bank | None = None


def get_config() -> MoneyConfig:
    """Return the active process-wide configuration."""
    return _config


def set_config(config: MoneyConfig) -> MoneyConfig:
    """Install $config as the process-wide configuration and return the previous one."""
    global _config

    # Raise: only MoneyConfig values can be installed
    if not isinstance(config, MoneyConfig):
        raise TypeError(f"$config must be a MoneyConfig instance, but provided value is: {config!r}")

    previous, _config = _config, config
    logger.debug(f"Installed MoneyConfig: {config}")
    return previous


def configure(**changes) -> MoneyConfig:
    """Apply $changes to the active configuration and return the new configuration."""
    new_config = _config.replace(**changes)
    set_config(new_config)
    return new_config


def reset_config() -> None:
    """Restore the built-in defaults and drop the shared fallback bank."""
    global _config, _fallback_bank
    _config = MoneyConfig()
    _fallback_bank = None
    logger.debug("Reset MoneyConfig to defaults")


def get_default_bank() -> Bank:
    """Return the configured default bank, creating the shared `VariableExchangeBank` if none is set."""
    global _fallback_bank

    if _config.default_bank is not None:
        return _config.default_bank

    if _fallback_bank is None:
        from exact_money.bank.variable_exchange import VariableExchangeBank

        _fallback_bank = VariableExchangeBank()
        logger.debug("Created shared VariableExchangeBank as default bank")
    return _fallback_bank


def disallow_currency_conversion() -> None:
    """Install a `SingleCurrencyBank` as default bank so `exchange_to` refuses any conversion."""
    from exact_money.bank.single_currency import SingleCurrencyBank

    configure(default_bank=SingleCurrencyBank())


# endregion
