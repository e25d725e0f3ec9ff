"""Monetary domain package.

This package contains the Currency record, the currency registry and the
Money value type with exact minor-unit arithmetic.
"""
