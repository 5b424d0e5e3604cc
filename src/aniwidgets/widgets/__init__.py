"""Featured widget kinds and their host-facing providers."""

from .kinds import (
    WIDGET_KINDS,
    WidgetKindSpec,
    kind_for_slot,
    slot_for_kind,
    slot_name,
    supported_widget_kinds,
)
from .provider import FeaturedWidgetProvider, PlacementContext

__all__ = [
    "WIDGET_KINDS",
    "WidgetKindSpec",
    "kind_for_slot",
    "slot_for_kind",
    "slot_name",
    "supported_widget_kinds",
    "FeaturedWidgetProvider",
    "PlacementContext",
]
