"""Hyperliquid dashboard proxy."""

__version__ = "0.1.0"
