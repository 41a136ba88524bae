# path: skate-spot-api/app/models/spot_models.py

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


Difficulty = Literal["Beginner", "Intermediate", "Advanced"]
SortField = Literal["distance", "difficulty", "name", "rating", "date"]
SortDirection = Literal["asc", "desc"]
Direction = Literal["next", "prev"]

DIFFICULTIES: tuple[str, ...] = ("Beginner", "Intermediate", "Advanced")
SORT_FIELDS: tuple[str, ...] = ("distance", "difficulty", "name", "rating", "date")
# Suggested tags for pickers; venues may carry any tag.
SPOT_CATEGORIES: tuple[str, ...] = (
    "ledge",
    "rail",
    "stairs",
    "gap",
    "manual pad",
    "bank",
    "bowl",
    "ramp",
    "transition",
    "hubba",
    "flatground",
    "diy",
    "park",
    "street",
)

DEFAULT_ACCENT_COLOR = "#FF4081"


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class Venue(BaseModel):
    """A skate spot as handed over by ingestion. Immutable for the session."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    coordinate: Coordinate
    description: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    categories: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    rating: Optional[float] = None
    rating_samples: List[float] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    created_by: Optional[str] = None
    skated_by: List[str] = Field(default_factory=list)
    accent_color: str = DEFAULT_ACCENT_COLOR


class UserLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate


class PointOfInterest(BaseModel):
    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    label: str
    tint: Optional[str] = None


class FilterQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    search_text: str = ""
    sort_field: SortField = "distance"
    sort_direction: SortDirection = "asc"
    difficulties: List[Difficulty] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    # Only applied once the user location is known.
    radius_m: Optional[float] = Field(default=None, gt=0)


class NavigationState(BaseModel):
    index: int = Field(ge=0)
    length: int = Field(ge=0)


class DisplayedSpot(BaseModel):
    venue: Venue
    distance_m: Optional[float] = None
    distance_mi: Optional[float] = None


class DiscoveryView(BaseModel):
    markers: List[PointOfInterest]
    navigation: NavigationState
    focused_point: PointOfInterest
    can_prev: bool
    can_next: bool
    selected: Optional[Venue] = None
    user_location: Optional[UserLocation] = None
    query: FilterQuery
    spots: List[DisplayedSpot]
