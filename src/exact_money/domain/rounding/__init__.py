"""Rounding modes and the scoped rounding policy."""
