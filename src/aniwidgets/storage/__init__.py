"""Shared container storage and its path layout."""

from . import layout
from .container import SharedContainer

__all__ = [
    "SharedContainer",
    "layout",
]
