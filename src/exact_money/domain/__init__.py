"""Domain model: currencies, money, rounding and allocation."""
