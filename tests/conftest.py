from __future__ import annotations

import pytest

from exact_money.config import reset_config
from exact_money.domain.monetary.currency_registry import reset_default_registry


@pytest.fixture(autouse=True)
def clean_money_state():
    """Give every test the built-in configuration and a fresh default registry."""
    reset_config()
    reset_default_registry()
    yield
    reset_config()
    reset_default_registry()
