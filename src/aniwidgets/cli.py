"""CLI interface for aniwidgets."""

import logging
import sys
from contextlib import contextmanager
from datetime import timedelta
from pathlib import Path
from typing import Iterator

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress

from .config import Settings, load_settings
from .console_printer import WidgetConsolePrinter
from .constants import SLOT_NAMES
from .designs import ProvisioningError
from .host import HostSimulator
from .services import Services, build_services, collect_stats
from .timeline import supported_strategy_names
from .widgets import PlacementContext, kind_for_slot, slot_name

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(help="Animated widget timelines backed by a shared container.")
featured_app = typer.Typer(help="Manage the featured designs shown by the widget slots.")
app.add_typer(featured_app, name="featured")


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


@app.callback()
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show verbose output."),
    container: Path = typer.Option(
        None, "--container", "-c", help="Shared container directory (ANIWIDGETS_CONTAINER)"
    ),
    cache: Path = typer.Option(None, "--cache", help="Frame cache directory (ANIWIDGETS_CACHE)"),
    bundle: Path = typer.Option(
        None, "--bundle", "-b", help="Read-only bundle directory (ANIWIDGETS_BUNDLE)"
    ),
    strategy: str = typer.Option(
        None,
        "--strategy",
        "-s",
        help=f"Timeline strategy ({', '.join(supported_strategy_names())})",
    ),
    env_file: Path = typer.Option(None, "--env-file", help="Load settings from this .env file"),
) -> None:
    logging.basicConfig(
        level="DEBUG" if verbose else "INFO", format="%(message)s", datefmt="[%X]", handlers=[RichHandler()]
    )
    with _cli_errors():
        try:
            settings = load_settings(str(env_file) if env_file else None)
        except ValueError as e:
            raise CLIError(f"Invalid configuration: {e}")
        ctx.obj = settings.with_overrides(
            container_dir=container, cache_dir=cache, bundle_dir=bundle, strategy=strategy
        )


@app.command()
def designs(ctx: typer.Context) -> None:
    """List designs in the shared container and the bundle."""
    with _cli_errors():
        services = _services(ctx)
        printer = WidgetConsolePrinter(console)
        printer.display_designs(services.catalog.designs(), services.registry.load().designs)


@app.command()
def provision(
    ctx: typer.Context,
    design_id: str = typer.Argument(..., help="Design to provision"),
    name: str = typer.Option(None, "--name", help="Display name"),
    frames: int = typer.Option(None, "--frames", min=1, help="Number of frames"),
    fps: float = typer.Option(None, "--fps", min=0.1, help="Frames per second"),
    feature: bool = typer.Option(False, "--feature", help="Also add the design to the featured slots"),
) -> None:
    """
    Write a design's frames and manifest into the shared container.

    Frames are copied from the bundle when it has them, otherwise placeholder
    frames are generated.
    """
    with _cli_errors():
        services = _services(ctx)
        with Progress(console=console, transient=True) as progress:
            task = progress.add_task(f"Provisioning {design_id}", total=1.0)
            try:
                design = services.provisioner.provision(
                    design_id,
                    name=name,
                    frame_count=frames,
                    frame_rate=fps,
                    progress=lambda done: progress.update(task, completed=done),
                )
            except (ProvisioningError, ValueError) as e:
                raise CLIError(str(e))
        console.print(
            f"[green]✓[/green] Design {design.design_id} provisioned ({design.frame_count} frames)"
        )
        if feature:
            _add_featured(services, design_id)


@featured_app.command("list")
def featured_list(ctx: typer.Context) -> None:
    """Show which design occupies each widget slot."""
    with _cli_errors():
        WidgetConsolePrinter(console).display_registry(_services(ctx).registry.load())


@featured_app.command("add")
def featured_add(
    ctx: typer.Context, design_id: str = typer.Argument(..., help="Design to feature")
) -> None:
    """Append a design to the featured slots."""
    with _cli_errors():
        services = _services(ctx)
        if services.catalog.get(design_id) is None:
            raise CLIError(f"Design '{design_id}' not found. Provision it first.")
        _add_featured(services, design_id)


@featured_app.command("remove")
def featured_remove(
    ctx: typer.Context, design_id: str = typer.Argument(..., help="Design to remove")
) -> None:
    """Remove a design from the featured slots."""
    with _cli_errors():
        if not _services(ctx).registry.remove_design(design_id):
            raise CLIError(f"Design '{design_id}' is not featured")
        console.print(f"[green]✓[/green] Removed {design_id} from featured designs")


@featured_app.command("reorder")
def featured_reorder(
    ctx: typer.Context,
    design_ids: list[str] = typer.Argument(..., help="Featured design ids in their new order"),
) -> None:
    """Replace the featured order; ids not already featured are ignored."""
    with _cli_errors():
        registry = _services(ctx).registry.reorder(design_ids)
        if registry is None:
            raise CLIError("Could not save the new featured order")
        WidgetConsolePrinter(console).display_registry(registry)


@featured_app.command("move")
def featured_move(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Slot to move from"),
    destination: str = typer.Argument(..., help="Slot to move to"),
) -> None:
    """Move the design in one slot to another slot."""
    with _cli_errors():
        services = _services(ctx)
        if not services.registry.move(_parse_slot(source), _parse_slot(destination)):
            raise CLIError(f"Cannot move slot {source} to {destination}")
        WidgetConsolePrinter(console).display_registry(services.registry.load())


@app.command()
def timeline(
    ctx: typer.Context,
    slot: str = typer.Argument(..., help=f"Widget slot ({'/'.join(SLOT_NAMES)} or 0-3)"),
    preview: bool = typer.Option(False, "--preview", help="Ask for a gallery preview"),
) -> None:
    """Compute the timeline a host would get for a slot right now."""
    with _cli_errors():
        slot_index = _parse_slot(slot)
        provider = _services(ctx).provider(slot_index)
        result = provider.get_timeline(PlacementContext(provider.kind, is_preview=preview))
        WidgetConsolePrinter(console).display_timeline(slot_index, result)


@app.command()
def start(
    ctx: typer.Context,
    slot: str = typer.Argument(..., help=f"Widget slot ({'/'.join(SLOT_NAMES)} or 0-3)"),
) -> None:
    """Start the animation of the widget in a slot, as a tap would."""
    with _cli_errors():
        services = _services(ctx)
        _start_slot(services, _parse_slot(slot))


@app.command()
def play(
    ctx: typer.Context,
    slot: str = typer.Argument(..., help=f"Widget slot ({'/'.join(SLOT_NAMES)} or 0-3)"),
    start_first: bool = typer.Option(False, "--start", help="Start the animation before playing"),
    max_passes: int = typer.Option(100, "--max-passes", min=1, help="Maximum timeline requests"),
) -> None:
    """Play a slot in real time, re-polling as the refresh policies ask."""
    with _cli_errors():
        services = _services(ctx)
        slot_index = _parse_slot(slot)
        if start_first:
            _start_slot(services, slot_index)

        printer = WidgetConsolePrinter(console)
        host = HostSimulator(
            services.provider(slot_index),
            services.reload_center,
            max_passes=max_passes,
            on_entry=printer.display_entry,
        )
        shown = host.run()
        console.print(f"\n[bold]{len(shown)} entries in {host.passes} timeline request(s)[/bold]")


@app.command()
def reload(
    ctx: typer.Context,
    slot: str = typer.Argument(None, help="Only reload this slot's widget kind"),
) -> None:
    """Ask hosts to re-poll widget timelines."""
    with _cli_errors():
        services = _services(ctx)
        if slot is None:
            services.reload_center.reload_all_timelines("requested from the command line")
            console.print("[green]✓[/green] Reload requested for all widget kinds")
            return
        kind = kind_for_slot(_parse_slot(slot))
        services.reload_center.reload_timelines(kind, "requested from the command line")
        console.print(f"[green]✓[/green] Reload requested for {kind}")


@app.command()
def instances(ctx: typer.Context) -> None:
    """List persisted widget instances."""
    with _cli_errors():
        services = _services(ctx)
        WidgetConsolePrinter(console).display_instances(
            services.repository.list_all(), services.resolver.mapping()
        )


@app.command()
def cleanup(
    ctx: typer.Context,
    days: int = typer.Option(None, "--days", min=1, help="Retention window in days"),
    designs: bool = typer.Option(
        False, "--designs", help="Also delete provisioned designs that are not featured"
    ),
) -> None:
    """Purge stale widget instances and, optionally, unused designs."""
    with _cli_errors():
        services = _services(ctx)
        retention = timedelta(days=days or services.settings.retention_days)
        purged = services.repository.cleanup_stale(retention)
        console.print(f"[green]✓[/green] Removed {len(purged)} stale instance(s)")
        if designs:
            removed = services.catalog.remove_unused(services.registry.load().designs)
            console.print(f"[green]✓[/green] Removed {len(removed)} unused design(s)")


@app.command()
def stats(ctx: typer.Context) -> None:
    """Show registry, instance and storage figures."""
    with _cli_errors():
        WidgetConsolePrinter(console).display_stats(collect_stats(_services(ctx)))


@app.command()
def frame(
    ctx: typer.Context,
    design_id: str = typer.Argument(..., help="Design to export from"),
    index: int = typer.Argument(..., min=1, help="1-based frame number"),
    out: Path = typer.Argument(..., help="PNG file to write"),
) -> None:
    """Export one frame, or its placeholder when no storage tier has it."""
    with _cli_errors():
        assets = _services(ctx).assets
        data = assets.resolve(design_id, index)
        if data is None:
            console.print(f"[yellow]Warning:[/yellow] frame {index} of {design_id} not found, using placeholder")
            data = assets.resolve_or_placeholder(None, index, label=design_id)
        try:
            out.write_bytes(data)
        except OSError as e:
            raise CLIError(f"Failed to save file '{out}': {e}")
        console.print(f"[green]✓[/green] Frame saved to {out}")


@contextmanager
def _cli_errors() -> Iterator[None]:
    try:
        yield
    except CLIError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)


def _services(ctx: typer.Context) -> Services:
    settings: Settings = ctx.obj
    try:
        return build_services(settings)
    except ValueError as e:
        raise CLIError(str(e))


def _parse_slot(value: str) -> int:
    """Accept a slot letter (A-D) or index (0-3)."""
    normalized = value.strip().upper()
    if normalized in SLOT_NAMES:
        return SLOT_NAMES.index(normalized)
    if normalized.isdigit() and int(normalized) < len(SLOT_NAMES):
        return int(normalized)
    raise CLIError(f"Invalid slot '{value}'. Use {', '.join(SLOT_NAMES)} or 0-{len(SLOT_NAMES) - 1}")


def _add_featured(services: Services, design_id: str) -> None:
    if not services.registry.add_design(design_id):
        raise CLIError(f"Could not feature '{design_id}' (already featured or all slots taken)")
    slot_index = services.registry.load().designs.index(design_id)
    console.print(f"[green]✓[/green] {design_id} featured in slot {slot_name(slot_index)}")


def _start_slot(services: Services, slot_index: int) -> None:
    design_id = services.registry.design_at(slot_index)
    if design_id is None:
        raise CLIError(f"Slot {slot_name(slot_index)} has no featured design")
    instance_id = services.resolver.resolve_instance(slot_index, design_id)
    if instance_id is None:
        raise CLIError(f"Could not read the instance of slot {slot_name(slot_index)}")
    if services.scheduler.start_animation(instance_id):
        console.print(f"[green]✓[/green] Animation started for slot {slot_name(slot_index)}")
        return
    instance = services.repository.load(instance_id)
    if instance is None or not instance.is_animating:
        raise CLIError(f"Could not start the animation of slot {slot_name(slot_index)}")
    console.print(f"[yellow]Slot {slot_name(slot_index)} is already animating[/yellow]")


if __name__ == "__main__":
    app()
