"""Search endpoints: run searches and read the current search state."""
from fastapi import APIRouter, Depends, HTTPException, Query

from foodlocator.config.settings import Settings
from foodlocator.core.dependencies import get_app_settings, get_orchestrator
from foodlocator.schemas.base import Envelope
from foodlocator.schemas.map import MapView
from foodlocator.schemas.search import (
    SearchRequest,
    SearchState,
    SearchStateRead,
    SearchStatus,
)
from foodlocator.services.map_renderer import build_map_view
from foodlocator.services.search_orchestrator import SearchOrchestrator

router = APIRouter(prefix="/search", tags=["search"])

_ENVELOPE_STATUS = {
    SearchStatus.SUCCESS: "ok",
    SearchStatus.ERROR: "error",
    SearchStatus.LOADING: "loading",
    SearchStatus.IDLE: "idle",
}


def _state_envelope(state: SearchState) -> Envelope[SearchStateRead]:
    return Envelope[SearchStateRead](
        status=_ENVELOPE_STATUS[state.status],
        data=SearchStateRead.from_state(state),
        error=state.error,
    )


@router.post("", response_model=Envelope[SearchStateRead])
async def run_search(
    request: SearchRequest,
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    """
    Search for healthy food venues near a place name.

    Blank names and unknown places come back as ``status="error"`` with the
    message in ``error``; a call overtaken by a newer search returns the
    newer search's state.
    """
    state = await orchestrator.search(request.place_name)
    return _state_envelope(state)


@router.get("/state", response_model=Envelope[SearchStateRead])
async def get_search_state(orchestrator: SearchOrchestrator = Depends(get_orchestrator)):
    return _state_envelope(orchestrator.state)


@router.get("/map", response_model=Envelope[MapView])
async def get_map_view(
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_app_settings),
):
    view = build_map_view(orchestrator.state, settings.map)
    return Envelope[MapView](status="ok", data=view, error=None)


@router.get("/venues/{venue_id}/photo", response_model=Envelope[str])
async def get_venue_photo(
    venue_id: str,
    width: int = Query(300, ge=1, le=2000),
    height: int = Query(300, ge=1, le=2000),
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    """Return the first photo URL of a venue from the current results at the given size."""
    venue = next((v for v in orchestrator.state.venues if v.id == venue_id), None)
    if venue is None:
        raise HTTPException(status_code=404, detail=f"Venue '{venue_id}' not in current results")
    return Envelope[str](status="ok", data=venue.thumbnail_url(width, height), error=None)
