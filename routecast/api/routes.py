"""FastAPI route definitions."""

import asyncio
import logging
from typing import Annotated, Optional

from fastapi import APIRouter, HTTPException, Depends

from ..errors import (
    DirectionsUnavailable,
    InvalidRoute,
    InvalidTransition,
    RoutecastError,
    WeatherUnavailable,
)
from ..models.features import FeatureCollection
from ..models.requests import AnnotateRequest, EditorEventRequest, EditorEventType
from ..models.route import Waypoint
from ..processing.editor import RouteEditor
from ..processing.pipeline import RoutePipeline
from ..processing.risk import risk_legend
from ..storage.annotations import get_annotation_store

logger = logging.getLogger(__name__)

router = APIRouter()


# Dependency to get pipeline instance (set in main.py)
_pipeline: RoutePipeline = None
_editor: Optional[RouteEditor] = None
_background_runs: set[asyncio.Task] = set()


def get_pipeline() -> RoutePipeline:
    """Get the pipeline instance."""
    if _pipeline is None:
        raise HTTPException(status_code=503, detail="Pipeline not initialized")
    return _pipeline


def set_pipeline(pipeline: RoutePipeline):
    """Set the pipeline instance (called from main.py)."""
    global _pipeline, _editor
    _pipeline = pipeline
    _editor = RouteEditor()
    _editor.on_finalized(_schedule_annotation)


def get_editor() -> RouteEditor:
    """Get the route editor bound to the pipeline."""
    if _editor is None:
        raise HTTPException(status_code=503, detail="Pipeline not initialized")
    return _editor


async def _annotate_in_background(waypoints: list[Waypoint]):
    try:
        await _pipeline.run_finalized(waypoints, get_annotation_store())
    except RoutecastError:
        # Already logged by the pipeline; the previous annotation stays current
        pass
    except Exception:
        logger.exception(f"Background annotation of {len(waypoints)} waypoints failed")


def _schedule_annotation(waypoints: list[Waypoint]):
    """Start a pipeline run for a finalized route without waiting for it."""
    task = asyncio.get_running_loop().create_task(_annotate_in_background(waypoints))
    _background_runs.add(task)
    task.add_done_callback(_background_runs.discard)


def _error_status(error: RoutecastError) -> int:
    if isinstance(error, (InvalidRoute, InvalidTransition)):
        return 400
    if isinstance(error, (DirectionsUnavailable, WeatherUnavailable)):
        return 502
    return 500


@router.get("/health")
async def health_check(pipeline: Annotated[RoutePipeline, Depends(get_pipeline)]):
    """Health check endpoint - does NOT call the providers."""
    return {
        "status": "ok",
        "message": "Pipeline initialized",
    }


@router.get("/risk-tiers")
async def list_risk_tiers():
    """Legend for the risk property of annotated features."""
    return risk_legend()


@router.post("/annotate", response_model=FeatureCollection)
async def annotate_route(
    request: AnnotateRequest,
    pipeline: Annotated[RoutePipeline, Depends(get_pipeline)],
):
    """Annotate a route and return the result without storing it."""
    try:
        return await pipeline.annotate_route(request.waypoints)
    except RoutecastError as e:
        logger.exception("Route annotation failed")
        raise HTTPException(status_code=_error_status(e), detail=str(e))


@router.post("/editor/events")
async def editor_event(
    request: EditorEventRequest,
    editor: Annotated[RouteEditor, Depends(get_editor)],
):
    """
    Feed a drawing UI event to the route editor.

    Entering the finalized state starts an annotation run in the background;
    poll /annotation for the result.
    """
    needs_coordinates = request.event in (EditorEventType.FEATURE_ADDED, EditorEventType.EDITED)
    if needs_coordinates and request.coordinates is None:
        raise HTTPException(
            status_code=422,
            detail=f"Event {request.event.value} requires coordinates",
        )

    try:
        if request.event == EditorEventType.FEATURE_ADDED:
            editor.feature_added(request.coordinates)
        elif request.event == EditorEventType.SELECTED:
            editor.selected()
        elif request.event == EditorEventType.EDITED:
            editor.edited(request.coordinates)
        elif request.event == EditorEventType.DESELECTED:
            editor.deselected()
        else:
            editor.reset()
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))

    return {
        "state": editor.state.value,
        "waypoints": editor.waypoints,
        "annotation_started": request.event
        in (EditorEventType.FEATURE_ADDED, EditorEventType.DESELECTED),
    }


@router.get("/annotation")
async def current_annotation():
    """Newest annotated route, or an explicit unavailable status."""
    snapshot = get_annotation_store().current()
    if snapshot is None:
        return {"status": "unavailable"}
    return {
        "status": "available",
        "run_token": snapshot.run_token,
        "created_at": snapshot.created_at,
        "waypoints": snapshot.waypoints,
        "collection": snapshot.collection,
    }
