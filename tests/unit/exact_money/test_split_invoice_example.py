from __future__ import annotations

import logging

from examples.split_invoice import run


def test_split_invoice_example_runs(caplog):
    with caplog.at_level(logging.INFO):
        run()

    messages = [record.getMessage() for record in caplog.records]
    assert "Gross amount: 1072.50 USD (tax 72.50 USD)" in messages
    assert "Share of bob in EUR: 296.49 EUR" in messages
    assert "Share of carol in CHF cash: 189.00 CHF" in messages
