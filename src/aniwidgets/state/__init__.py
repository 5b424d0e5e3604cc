"""Persisted widget state: instances, the featured registry and slot identity."""

from .instance import WidgetInstance
from .registry import FeaturedRegistry, FeaturedRegistryStore
from .repository import InstanceRepository
from .slots import InstanceResolver

__all__ = [
    "WidgetInstance",
    "InstanceRepository",
    "FeaturedRegistry",
    "FeaturedRegistryStore",
    "InstanceResolver",
]
