# path: skate-spot-api/app/services/navigation.py

from __future__ import annotations

from typing import List, Optional
import logging

from app.models.spot_models import (
    Coordinate,
    Direction,
    NavigationState,
    PointOfInterest,
    UserLocation,
    Venue,
)
from app.utils.geo import coordinates_match

logger = logging.getLogger(__name__)

NULL_ISLAND = Coordinate(latitude=0.0, longitude=0.0)
FALLBACK_LABEL = "No spots"


def build_markers(
    venues: List[Venue],
    user_location: Optional[UserLocation],
    user_label: str = "You are here",
    user_tint: Optional[str] = "blue",
) -> List[PointOfInterest]:
    """
    Marker list the cursor walks: the user's point (when known) at index 0,
    then one point per venue in collection order. Never filtered or sorted.
    """
    markers: List[PointOfInterest] = []
    if user_location is not None:
        markers.append(PointOfInterest(coordinate=user_location.coordinate, label=user_label, tint=user_tint))
    for v in venues:
        markers.append(PointOfInterest(coordinate=v.coordinate, label=v.name, tint=v.accent_color))
    return markers


class NavigationCursor:
    """
    Clamped index into an ordered marker list.

    Moving past either end leaves the index where it is (no wrap-around);
    callers disable their prev/next controls using can_advance().
    """

    def __init__(
        self,
        points: Optional[List[PointOfInterest]] = None,
        index: int = 0,
        fallback: Coordinate = NULL_ISLAND,
        epsilon: float = 1e-6,
    ):
        self._points: List[PointOfInterest] = list(points or [])
        self._fallback = fallback
        self._epsilon = epsilon
        self._index = self._clamp(index)

    @property
    def points(self) -> List[PointOfInterest]:
        return list(self._points)

    @property
    def index(self) -> int:
        return self._index

    @property
    def length(self) -> int:
        return len(self._points)

    @property
    def state(self) -> NavigationState:
        return NavigationState(index=self._index, length=len(self._points))

    def _clamp(self, index: int) -> int:
        if not self._points:
            return 0
        return max(0, min(index, len(self._points) - 1))

    def replace_points(self, points: List[PointOfInterest]) -> int:
        self._points = list(points)
        self._index = self._clamp(self._index)
        return self._index

    def can_advance(self, direction: Direction) -> bool:
        if not self._points:
            return False
        if direction == "next":
            return self._index < len(self._points) - 1
        return self._index > 0

    def advance(self, direction: Direction) -> int:
        if not self._points:
            return 0
        step = 1 if direction == "next" else -1
        self._index = self._clamp(self._index + step)
        return self._index

    def move_to(self, index: int) -> int:
        self._index = self._clamp(index)
        return self._index

    def focused_point(self) -> PointOfInterest:
        if not self._points:
            return PointOfInterest(coordinate=self._fallback, label=FALLBACK_LABEL)
        return self._points[self._index]

    def find(self, target: Coordinate) -> Optional[int]:
        for i, p in enumerate(self._points):
            if coordinates_match(p.coordinate, target, self._epsilon):
                return i
        return None

    def select_by_coordinate(self, target: Coordinate) -> Optional[int]:
        """Jump to the first point at `target`; None (and no move) on a miss."""
        idx = self.find(target)
        if idx is None:
            logger.warning(
                "No marker at (%.7f, %.7f); cursor stays at %d",
                target.latitude, target.longitude, self._index,
            )
            return None
        self._index = idx
        return idx
