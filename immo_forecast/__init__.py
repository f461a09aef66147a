"""Cashflow and tax-depreciation forecast for residential property purchases."""

__version__ = "0.1.0"
