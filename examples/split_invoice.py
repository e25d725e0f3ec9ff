from __future__ import annotations

import logging
from decimal import Decimal

from exact_money.bank.variable_exchange import VariableExchangeBank
from exact_money.domain.monetary.money import Money
from exact_money.domain.rounding.policy import RoundingScope
from exact_money.domain.rounding.rounding_mode import RoundingMode


logger = logging.getLogger(__name__)


def run() -> None:
    # Invoice total: 1,000.00 USD
    total = Money.from_amount("1000.00", "USD")

    # Add 7.25 % sales tax, rounded commercially inside this block only
    with RoundingScope(RoundingMode.HALF_UP):
        tax = total * Decimal("0.0725")
    gross = total + tax
    logger.info(f"Gross amount: {gross} (tax {tax})")

    # Split between three partners 50 / 30 / 20; parts always add up to the gross amount
    shares = gross.allocate([50, 30, 20])
    for partner, share in zip(["alice", "bob", "carol"], shares):
        logger.info(f"Share of {partner}: {share}")

    # Pay the second partner in euros
    bank = VariableExchangeBank()
    bank.add_rate("USD", "EUR", "0.9215")
    logger.info(f"Share of bob in EUR: {shares[1].exchange_to('EUR', bank)}")

    # Pay the third partner in Swiss cash (smallest coin is 5 centimes)
    bank.add_rate("USD", "CHF", "0.8812")
    in_francs = shares[2].exchange_to("CHF", bank)
    logger.info(f"Share of carol in CHF cash: {in_francs.to_nearest_cash_value()}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run()
