# path: skate-spot-api/app/services/nearest.py

from __future__ import annotations

from typing import List, Optional
import logging

from app.models.spot_models import UserLocation, Venue
from app.utils.geo import distance_meters

logger = logging.getLogger(__name__)


def find_nearest(origin: UserLocation, venues: List[Venue]) -> Optional[Venue]:
    best: Optional[Venue] = None
    best_dist = 0.0
    for v in venues:
        d = distance_meters(origin.coordinate, v.coordinate)
        # Strict < so the first of equally-near spots wins.
        if best is None or d < best_dist:
            best = v
            best_dist = d
    return best


def select_nearest_if_unset(
    current: Optional[Venue],
    origin: Optional[UserLocation],
    venues: List[Venue],
) -> Optional[Venue]:
    """
    One-shot default selection for the first load.

    Returns `current` untouched whenever something is already selected, so a
    user's pick is never replaced. Only with no selection, a known origin and
    at least one venue does it pick the nearest venue.
    """
    if current is not None or origin is None or not venues:
        return current
    nearest = find_nearest(origin, venues)
    if nearest is not None:
        logger.info("Auto-selected nearest spot %s (%s)", nearest.id, nearest.name)
    return nearest
