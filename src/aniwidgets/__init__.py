"""Animated widget timeline scheduling over a shared file container."""

__version__ = "0.1.0"
