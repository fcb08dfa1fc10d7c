"""Minute-by-minute elevator simulation with configurable logging."""

__version__ = "0.1.0"