"""Orion portfolio valuation backend."""

__version__ = "0.1.0"
