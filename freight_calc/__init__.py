"""Freight cost comparison across FedEx, DHL and UPS."""

__version__ = "0.1.0"
