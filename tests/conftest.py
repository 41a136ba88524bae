"""
Shared pytest fixtures for the skate spot API tests.

Environment defaults are set before any app.* import so the cached
Settings pick them up.
"""

import os
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("SKATE_LOG_LEVEL", "warning")
os.environ.setdefault("SKATE_MAX_SESSIONS", "50")

from app.models.spot_models import Coordinate, UserLocation, Venue  # noqa: E402
from app.services.session_store import SessionStore, get_store  # noqa: E402


def make_venue(vid, lat, lon, **kwargs) -> Venue:
    kwargs.setdefault("name", f"Spot {vid}")
    return Venue(id=vid, coordinate=Coordinate(latitude=lat, longitude=lon), **kwargs)


@pytest.fixture
def downtown():
    """User standing near Vancouver City Hall."""
    return UserLocation(coordinate=Coordinate(latitude=49.2827, longitude=-123.1207))


@pytest.fixture
def spots():
    """Three spots at increasing distance from `downtown`, listed far-to-near."""
    return [
        make_venue(
            "far", 49.3000, -123.1207,
            name="Hastings Park Bowl",
            difficulty="Advanced",
            categories=["bowl", "transition"],
            rating=4.5,
            created_at=datetime(2024, 5, 1),
        ),
        make_venue(
            "mid", 49.2900, -123.1207,
            name="Plaza Ledges",
            description="Marble ledges and a handrail",
            difficulty="Intermediate",
            categories=["ledge", "rail"],
            rating=3.0,
            created_at=datetime(2023, 1, 15),
        ),
        make_venue(
            "near", 49.2830, -123.1207,
            name="Courthouse Steps",
            difficulty="Beginner",
            categories=["ledge", "stairs"],
            rating=3.0,
        ),
    ]


@pytest.fixture
def store():
    return SessionStore(max_sessions=3)


@pytest.fixture
def client(store):
    """FastAPI TestClient with a fresh in-memory session store."""
    from app.main import app

    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
