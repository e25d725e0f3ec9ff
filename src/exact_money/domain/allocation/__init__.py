"""Penny-exact allocation of Money into weighted parts."""
