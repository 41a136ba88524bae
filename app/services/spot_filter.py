# path: skate-spot-api/app/services/spot_filter.py

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple
import logging

from app.models.spot_models import FilterQuery, UserLocation, Venue
from app.utils.geo import distance_meters

logger = logging.getLogger(__name__)


def _epoch_seconds(ts: Optional[datetime]) -> float:
    if ts is None:
        return 0.0
    if ts.tzinfo is None:
        # Naive timestamps are stored as UTC.
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.timestamp()


def filter_by_radius(venues: List[Venue], radius_m: Optional[float], origin: Optional[UserLocation]) -> List[Venue]:
    if radius_m is None or origin is None:
        return venues
    return [v for v in venues if distance_meters(origin.coordinate, v.coordinate) <= radius_m]


def filter_by_search(venues: List[Venue], search_text: str) -> List[Venue]:
    if not search_text:
        return venues
    needle = search_text.lower()
    return [
        v
        for v in venues
        if needle in v.name.lower() or (v.description is not None and needle in v.description.lower())
    ]


def filter_by_difficulty(venues: List[Venue], difficulties: List[str]) -> List[Venue]:
    # Any selected difficulty matches.
    if not difficulties:
        return venues
    wanted = set(difficulties)
    return [v for v in venues if v.difficulty in wanted]


def filter_by_categories(venues: List[Venue], categories: List[str]) -> List[Venue]:
    # Every selected category must be present on the venue.
    if not categories:
        return venues
    wanted = set(categories)
    return [v for v in venues if wanted.issubset(v.categories)]


def sort_key_for(field: str, origin: Optional[UserLocation]) -> Callable[[Venue], object]:
    if field == "distance":
        if origin is None:
            return lambda v: 0.0
        return lambda v: distance_meters(origin.coordinate, v.coordinate)
    if field == "difficulty":
        return lambda v: v.difficulty or ""
    if field == "name":
        return lambda v: v.name or ""
    if field == "rating":
        return lambda v: v.rating if v.rating is not None else 0.0
    if field == "date":
        return lambda v: _epoch_seconds(v.created_at)
    raise ValueError(f"Unsupported sort field: {field}")


def sort_venues(venues: List[Venue], field: str, direction: str, origin: Optional[UserLocation]) -> List[Venue]:
    """
    Stable sort; equal keys keep their input order in both directions
    (sorted() preserves stability with reverse=True).
    """
    key = sort_key_for(field, origin)
    return sorted(venues, key=key, reverse=(direction == "desc"))


def apply_filters(venues: List[Venue], query: FilterQuery, origin: Optional[UserLocation]) -> List[Venue]:
    """
    Run the list pipeline: radius -> search -> difficulty -> categories -> sort.
    Pure; the input list is not mutated.
    """
    out = list(venues)
    out = filter_by_radius(out, query.radius_m, origin)
    out = filter_by_search(out, query.search_text)
    out = filter_by_difficulty(out, query.difficulties)
    out = filter_by_categories(out, query.categories)
    out = sort_venues(out, query.sort_field, query.sort_direction, origin)
    logger.debug(
        "Filtered %d -> %d spots (sort=%s %s)",
        len(venues), len(out), query.sort_field, query.sort_direction,
    )
    return out


def annotate_distances(venues: List[Venue], origin: Optional[UserLocation]) -> List[Tuple[Venue, Optional[float]]]:
    if origin is None:
        return [(v, None) for v in venues]
    return [(v, distance_meters(origin.coordinate, v.coordinate)) for v in venues]
