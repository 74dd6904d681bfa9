"""Weighted multi-criteria career matching engine."""

__version__ = "0.1.0"
