# path: skate-spot-api/app/api/routes/sessions.py

from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field, field_validator

from app.config import get_settings
from app.models.spot_models import (
    Coordinate,
    Direction,
    DiscoveryView,
    FilterQuery,
    UserLocation,
    Venue,
)
from app.services.discovery import DiscoverySession, VenueNotFoundError
from app.services.ingestion import resolve_accent_colors
from app.services.session_store import (
    SessionNotFoundError,
    SessionStore,
    get_store,
)
from app.utils.geo import miles_to_meters

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _check_unique_ids(venues: List[Venue]) -> List[Venue]:
    seen = set()
    for v in venues:
        if v.id in seen:
            raise ValueError(f"duplicate venue id: {v.id}")
        seen.add(v.id)
    return venues


class VenueBatch(BaseModel):
    venues: List[Venue] = Field(default_factory=list)
    # creator id -> favourite color, standing in for the profile lookup
    creator_colors: Optional[Dict[str, str]] = None

    @field_validator("venues")
    @classmethod
    def validate_unique_ids(cls, venues: List[Venue]) -> List[Venue]:
        return _check_unique_ids(venues)


class CreateSessionRequest(VenueBatch):
    user_location: Optional[UserLocation] = None
    query: Optional[FilterQuery] = None
    # e.g. the signed-in user's display name
    user_label: Optional[str] = None


class LocationUpdate(BaseModel):
    user_location: Optional[UserLocation] = None


class AdvanceRequest(BaseModel):
    direction: Direction


class SelectRequest(BaseModel):
    coordinate: Coordinate


class SessionResponse(BaseModel):
    session_id: str
    view: DiscoveryView


class SelectResponse(BaseModel):
    found: bool
    view: DiscoveryView


def _ingest(batch: VenueBatch) -> List[Venue]:
    if batch.creator_colors is None:
        return batch.venues
    return resolve_accent_colors(
        batch.venues,
        batch.creator_colors.get,
        fallback=get_settings().fallback_accent_color,
    )


def _session(session_id: str, store: SessionStore) -> DiscoverySession:
    try:
        return store.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")


@router.post("", response_model=SessionResponse)
def create_session(body: CreateSessionRequest, store: SessionStore = Depends(get_store)) -> SessionResponse:
    query = body.query
    if query is None:
        settings = get_settings()
        if settings.default_radius_miles:
            query = FilterQuery(radius_m=miles_to_meters(settings.default_radius_miles))
    session = DiscoverySession(
        venues=_ingest(body),
        user_location=body.user_location,
        query=query,
        user_label=body.user_label,
    )
    session_id = store.create(session)
    return SessionResponse(session_id=session_id, view=session.view())


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(session_id: str, store: SessionStore = Depends(get_store)) -> SessionResponse:
    session = _session(session_id, store)
    return SessionResponse(session_id=session_id, view=session.view())


@router.delete("/{session_id}", status_code=204)
def delete_session(session_id: str, store: SessionStore = Depends(get_store)) -> Response:
    try:
        store.delete(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return Response(status_code=204)


@router.put("/{session_id}/venues", response_model=SessionResponse)
def put_venues(session_id: str, body: VenueBatch, store: SessionStore = Depends(get_store)) -> SessionResponse:
    session = _session(session_id, store)
    view = session.set_venues(_ingest(body))
    return SessionResponse(session_id=session_id, view=view)


@router.put("/{session_id}/location", response_model=SessionResponse)
def put_location(session_id: str, body: LocationUpdate, store: SessionStore = Depends(get_store)) -> SessionResponse:
    session = _session(session_id, store)
    view = session.set_user_location(body.user_location)
    return SessionResponse(session_id=session_id, view=view)


@router.put("/{session_id}/query", response_model=SessionResponse)
def put_query(session_id: str, body: FilterQuery, store: SessionStore = Depends(get_store)) -> SessionResponse:
    session = _session(session_id, store)
    view = session.set_filter_query(body)
    return SessionResponse(session_id=session_id, view=view)


@router.post("/{session_id}/advance", response_model=SessionResponse)
def advance(session_id: str, body: AdvanceRequest, store: SessionStore = Depends(get_store)) -> SessionResponse:
    session = _session(session_id, store)
    view = session.advance(body.direction)
    return SessionResponse(session_id=session_id, view=view)


@router.post("/{session_id}/select", response_model=SelectResponse)
def select_by_coordinate(session_id: str, body: SelectRequest, store: SessionStore = Depends(get_store)) -> SelectResponse:
    session = _session(session_id, store)
    found = session.select_by_coordinate(body.coordinate)
    return SelectResponse(found=found, view=session.view())


@router.post("/{session_id}/select/{venue_id}", response_model=SessionResponse)
def select_venue(session_id: str, venue_id: str, store: SessionStore = Depends(get_store)) -> SessionResponse:
    session = _session(session_id, store)
    try:
        view = session.select_venue(venue_id)
    except VenueNotFoundError:
        raise HTTPException(status_code=404, detail=f"Unknown spot: {venue_id}")
    return SessionResponse(session_id=session_id, view=view)
