"""Console output for the widget CLI."""

from datetime import datetime

from rich.console import Console
from rich.table import Table

from .designs import AnimationDesign
from .services import StorageStats
from .state import FeaturedRegistry, WidgetInstance
from .timeline import Timeline, TimelineEntry
from .widgets import kind_for_slot, slot_name


class WidgetConsolePrinter:
    """Prints designs, registry, timelines and instances as rich tables."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def display_designs(self, designs: list[AnimationDesign], featured: list[str]) -> None:
        if not designs:
            self.console.print("[yellow]No designs found[/yellow]")
            return

        table = Table(title="Designs")
        table.add_column("ID", style="cyan")
        table.add_column("Name")
        table.add_column("Frames", justify="right")
        table.add_column("FPS", justify="right")
        table.add_column("Source")
        table.add_column("Slot", justify="center")
        for design in designs:
            slot = (
                slot_name(featured.index(design.design_id))
                if design.design_id in featured
                else ""
            )
            table.add_row(
                design.design_id,
                design.name,
                str(design.frame_count),
                f"{design.frame_rate:g}",
                design.source,
                slot,
            )
        self.console.print(table)

    def display_registry(self, registry: FeaturedRegistry) -> None:
        table = Table(title=f"Featured designs ({len(registry.designs)}/{registry.max_count})")
        table.add_column("Slot", justify="center")
        table.add_column("Widget kind")
        table.add_column("Design", style="cyan")
        for slot_index in range(registry.max_count):
            design_id = registry.design_at(slot_index)
            table.add_row(
                slot_name(slot_index),
                kind_for_slot(slot_index),
                design_id or "[dim]empty[/dim]",
            )
        self.console.print(table)

    def display_timeline(self, slot_index: int, timeline: Timeline) -> None:
        table = Table(title=f"Slot {slot_name(slot_index)} timeline, refresh {timeline.policy}")
        table.add_column("#", justify="right")
        table.add_column("Date")
        table.add_column("Design", style="cyan")
        table.add_column("Frame", justify="right")
        table.add_column("Animating", justify="center")
        for position, entry in enumerate(timeline.entries, start=1):
            table.add_row(
                str(position),
                _format_time(entry.date),
                entry.design_id or "[dim]placeholder[/dim]",
                str(entry.frame_index),
                "✓" if entry.is_animating else "",
            )
        self.console.print(table)

    def display_entry(self, entry: TimelineEntry) -> None:
        state = "[green]animating[/green]" if entry.is_animating else "[dim]idle[/dim]"
        self.console.print(
            f"{_format_time(entry.date)}  {entry.design_id or 'placeholder'}"
            f"  frame {entry.frame_index:>2}  {state}"
        )

    def display_instances(self, instances: list[WidgetInstance], slots: dict[int, str]) -> None:
        if not instances:
            self.console.print("[yellow]No widget instances[/yellow]")
            return

        slot_of = {instance_id: slot_index for slot_index, instance_id in slots.items()}
        table = Table(title="Widget instances")
        table.add_column("Instance", style="cyan")
        table.add_column("Slot", justify="center")
        table.add_column("Design")
        table.add_column("Frame", justify="right")
        table.add_column("Animating", justify="center")
        table.add_column("Last interaction")
        for instance in instances:
            slot_index = slot_of.get(instance.instance_id)
            table.add_row(
                instance.instance_id,
                slot_name(slot_index) if slot_index is not None else "",
                instance.design_id,
                str(instance.current_frame),
                "✓" if instance.is_animating else "",
                _format_time(instance.last_interaction),
            )
        self.console.print(table)

    def display_stats(self, stats: StorageStats) -> None:
        table = Table(title="Storage", show_header=False)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("Featured designs", f"{stats.featured_count}/{stats.max_featured}")
        table.add_row("Designs available", str(stats.design_count))
        table.add_row("Designs provisioned", str(stats.provisioned_count))
        table.add_row("Widget instances", str(stats.instance_count))
        table.add_row("Animating now", str(stats.animating_count))
        table.add_row("Design storage", _format_bytes(stats.designs_bytes))
        table.add_row("Frame cache", _format_bytes(stats.cache_bytes))
        self.console.print(table)


def _format_time(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]


def _format_bytes(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB"):
        if value < 1024:
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"
