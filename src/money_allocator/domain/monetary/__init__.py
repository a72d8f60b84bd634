"""Monetary domain package.

This package contains classes for handling monetary amounts and currencies,
including Currency definitions and Money calculations with per-currency
minor-unit rounding.
"""

# Importing the registry registers all predefined currencies
from money_allocator.domain.monetary import currency_registry  # noqa: F401
