"""The featured widget kinds, one per registry slot."""

from dataclasses import dataclass

from ..constants import SLOT_NAMES


@dataclass(frozen=True)
class WidgetKindSpec:
    kind: str
    slot_index: int
    display_name: str
    description: str


_ORDINALS = ("First", "Second", "Third", "Fourth")

WIDGET_KINDS: tuple[WidgetKindSpec, ...] = tuple(
    WidgetKindSpec(
        kind=f"FeaturedWidgetSlot{name}",
        slot_index=index,
        display_name=f"Featured Design {name}",
        description=f"{_ORDINALS[index]} featured animated design",
    )
    for index, name in enumerate(SLOT_NAMES)
)


def supported_widget_kinds() -> tuple[str, ...]:
    """Return widget kind names in slot order."""
    return tuple(spec.kind for spec in WIDGET_KINDS)


def kind_for_slot(slot_index: int) -> str:
    return _spec_from_slot(slot_index).kind


def slot_for_kind(kind: str) -> int:
    for spec in WIDGET_KINDS:
        if spec.kind == kind:
            return spec.slot_index
    available = ", ".join(supported_widget_kinds())
    raise ValueError(f"Unknown widget kind '{kind}'. Available: {available}")


def slot_name(slot_index: int) -> str:
    _spec_from_slot(slot_index)
    return SLOT_NAMES[slot_index]


def _spec_from_slot(slot_index: int) -> WidgetKindSpec:
    if 0 <= slot_index < len(WIDGET_KINDS):
        return WIDGET_KINDS[slot_index]
    raise ValueError(f"Invalid slot {slot_index}. Slots: 0-{len(WIDGET_KINDS) - 1}")
