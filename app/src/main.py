"""FastAPI host bridge for aniwidgets timelines and frames."""

from functools import lru_cache

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import Response

from aniwidgets.clock import to_iso
from aniwidgets.config import load_settings
from aniwidgets.services import Services, build_services
from aniwidgets.timeline import Timeline, TimelineEntry
from aniwidgets.widgets import PlacementContext, supported_widget_kinds

load_dotenv()

app = FastAPI(title="aniwidgets")


@lru_cache(maxsize=1)
def get_services() -> Services:
    return build_services(load_settings())


@app.get("/api/featured")
async def featured(services: Services = Depends(get_services)):
    """Return the featured registry."""
    return services.registry.load().to_document()


@app.get("/api/slots/{slot_index}/timeline")
async def slot_timeline(
    slot_index: int,
    family: str = Query("systemSmall", description="Widget family reported by the host"),
    preview: bool = Query(False, description="Gallery preview request"),
    services: Services = Depends(get_services),
):
    """Compute the timeline of one widget slot."""
    try:
        provider = services.provider(slot_index)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    result = provider.get_timeline(PlacementContext(provider.kind, family=family, is_preview=preview))
    return _timeline_payload(result)


@app.post("/api/instances/{instance_id}/start")
async def start_animation(instance_id: str, services: Services = Depends(get_services)):
    """Start an idle instance's animation."""
    instance = services.repository.load(instance_id)
    if instance is None:
        raise HTTPException(status_code=404, detail=f"Unknown instance {instance_id}")
    started = services.scheduler.start_animation(instance_id)
    return {"instanceId": instance_id, "started": started}


@app.get("/api/frames/{design_id}/{frame_index}")
async def frame_image(
    design_id: str,
    frame_index: int,
    services: Services = Depends(get_services),
):
    """Return a frame image, or a placeholder when no tier has it."""
    if frame_index < 1:
        raise HTTPException(status_code=400, detail="Frame index must be at least 1")
    data = services.assets.resolve_or_placeholder(design_id, frame_index)
    return Response(
        content=data,
        media_type="image/png",
        headers={"Content-Disposition": f"inline; filename={design_id}-frame-{frame_index:02d}.png"},
    )


@app.get("/api/signals")
async def signals(services: Services = Depends(get_services)):
    """Widget kinds with a pending reload request."""
    return {
        "kinds": list(supported_widget_kinds()),
        "pending": services.reload_center.pending_kinds(),
    }


def _timeline_payload(timeline: Timeline) -> dict:
    return {
        "policy": {"kind": timeline.policy.kind, "seconds": timeline.policy.seconds},
        "entries": [_entry_payload(entry) for entry in timeline.entries],
    }


def _entry_payload(entry: TimelineEntry) -> dict:
    return {
        "date": to_iso(entry.date),
        "slotIndex": entry.slot_index,
        "designId": entry.design_id,
        "frameIndex": entry.frame_index,
        "instanceId": entry.instance_id,
        "isAnimating": entry.is_animating,
    }
