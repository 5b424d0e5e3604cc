"""Explicit per-process service wiring."""

from dataclasses import dataclass

from .clock import Clock, utc_now
from .config import Settings
from .designs import DesignCatalog, DesignProvisioner, FrameAssetResolver
from .signals import ReloadCenter
from .state import FeaturedRegistryStore, InstanceRepository, InstanceResolver
from .storage import SharedContainer, layout
from .timeline import BaseStrategy, TimelineScheduler, create_strategy
from .widgets import FeaturedWidgetProvider, kind_for_slot, supported_widget_kinds


@dataclass
class Services:
    """Every collaborator of one process, built once and passed around."""

    settings: Settings
    container: SharedContainer
    cache: SharedContainer
    bundle: SharedContainer | None
    reload_center: ReloadCenter
    repository: InstanceRepository
    registry: FeaturedRegistryStore
    catalog: DesignCatalog
    resolver: InstanceResolver
    assets: FrameAssetResolver
    provisioner: DesignProvisioner
    strategy: BaseStrategy
    scheduler: TimelineScheduler

    def provider(self, slot_index: int) -> FeaturedWidgetProvider:
        return FeaturedWidgetProvider(slot_index, self.scheduler)


def build_strategy(settings: Settings) -> BaseStrategy:
    """
    Create the configured scheduling strategy.

    Raises:
        ValueError: If the strategy name is unknown
    """
    options: dict[str, object] = {}
    if settings.strategy == "precomputed":
        options["frame_interval"] = settings.frame_interval
    return create_strategy(settings.strategy, **options)


def build_services(settings: Settings, clock: Clock = utc_now) -> Services:
    container = SharedContainer(settings.container_dir)
    cache = SharedContainer(settings.cache_dir)
    bundle = SharedContainer(settings.bundle_dir) if settings.bundle_dir else None

    reload_center = ReloadCenter(container, supported_widget_kinds(), clock=clock)
    repository = InstanceRepository(container, clock=clock)
    registry = FeaturedRegistryStore(container, reload_center)
    catalog = DesignCatalog(container, bundle)
    resolver = InstanceResolver(container, repository, frame_count=catalog.frame_count)
    strategy = build_strategy(settings)
    scheduler = TimelineScheduler(
        repository=repository,
        registry=registry,
        resolver=resolver,
        catalog=catalog,
        strategy=strategy,
        reload_center=reload_center,
        kind_for_slot=kind_for_slot,
        clock=clock,
    )

    return Services(
        settings=settings,
        container=container,
        cache=cache,
        bundle=bundle,
        reload_center=reload_center,
        repository=repository,
        registry=registry,
        catalog=catalog,
        resolver=resolver,
        assets=FrameAssetResolver(container, cache, bundle),
        provisioner=DesignProvisioner(container, catalog, bundle),
        strategy=strategy,
        scheduler=scheduler,
    )


@dataclass(frozen=True)
class StorageStats:
    featured_count: int
    max_featured: int
    design_count: int
    provisioned_count: int
    instance_count: int
    animating_count: int
    designs_bytes: int
    cache_bytes: int


def collect_stats(services: Services) -> StorageStats:
    """Summarize what the shared container and the cache currently hold."""
    registry = services.registry.load()
    designs = services.catalog.designs()
    instances = services.repository.list_all()
    return StorageStats(
        featured_count=len(registry.designs),
        max_featured=registry.max_count,
        design_count=len(designs),
        provisioned_count=sum(1 for design in designs if design.source == "container"),
        instance_count=len(instances),
        animating_count=sum(1 for instance in instances if instance.is_animating),
        designs_bytes=services.container.size(layout.DESIGNS_DIR),
        cache_bytes=services.cache.size(),
    )

