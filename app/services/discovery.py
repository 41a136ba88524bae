# path: skate-spot-api/app/services/discovery.py

from __future__ import annotations

from typing import List, Optional
import logging

from app.config import Settings, get_settings
from app.models.spot_models import (
    Coordinate,
    DiscoveryView,
    DisplayedSpot,
    Direction,
    FilterQuery,
    UserLocation,
    Venue,
)
from app.services.navigation import NavigationCursor, build_markers
from app.services.nearest import select_nearest_if_unset
from app.services.spot_filter import annotate_distances, apply_filters
from app.utils.geo import meters_to_miles

logger = logging.getLogger(__name__)


class VenueNotFoundError(Exception):
    """A venue id was picked that isn't in the session's collection."""


class DiscoverySession:
    """
    One user's map screen: the venue snapshot, the last known location, the
    list query, the marker cursor and the selected spot.

    Every command re-derives the markers, cursor bounds and default
    selection from the current inputs; nothing derived is cached between
    commands except the cursor position and the selection themselves.
    """

    def __init__(
        self,
        venues: Optional[List[Venue]] = None,
        user_location: Optional[UserLocation] = None,
        query: Optional[FilterQuery] = None,
        settings: Optional[Settings] = None,
        user_label: Optional[str] = None,
    ):
        self.settings = settings or get_settings()
        self.user_label = user_label or self.settings.user_marker_label
        self.venues: List[Venue] = list(venues or [])
        self.user_location = user_location
        self.query = query or FilterQuery()
        self.selected: Optional[Venue] = None
        self.cursor = NavigationCursor(
            fallback=self.settings.fallback_coordinate,
            epsilon=self.settings.coordinate_epsilon_deg,
        )
        self._rederive()

    # -- derivation --------------------------------------------------------

    def _rederive(self) -> None:
        markers = build_markers(
            self.venues,
            self.user_location,
            user_label=self.user_label,
            user_tint=self.settings.user_marker_tint,
        )
        # Index is kept and re-clamped; it is not re-anchored to a marker.
        self.cursor.replace_points(markers)

        # A selection survives only while its venue is still in the snapshot.
        if self.selected is not None:
            self.selected = self._venue_by_id(self.selected.id)
        self.selected = select_nearest_if_unset(self.selected, self.user_location, self.venues)

    def _venue_by_id(self, venue_id: str) -> Optional[Venue]:
        for v in self.venues:
            if v.id == venue_id:
                return v
        return None

    def _marker_offset(self) -> int:
        # Markers are [user point?] + venues, in collection order.
        return 1 if self.user_location is not None else 0

    def _venue_at_marker(self, index: int) -> Optional[Venue]:
        pos = index - self._marker_offset()
        if 0 <= pos < len(self.venues):
            return self.venues[pos]
        return None

    # -- inputs ------------------------------------------------------------

    def set_venues(self, venues: List[Venue]) -> DiscoveryView:
        self.venues = list(venues)
        logger.info("Loaded %d spots", len(self.venues))
        self._rederive()
        return self.view()

    def set_user_location(self, location: Optional[UserLocation]) -> DiscoveryView:
        # None covers both "denied" and "not resolved yet".
        self.user_location = location
        self._rederive()
        return self.view()

    def set_filter_query(self, query: FilterQuery) -> DiscoveryView:
        self.query = query
        return self.view()

    # -- commands ----------------------------------------------------------

    def advance(self, direction: Direction) -> DiscoveryView:
        before = self.cursor.index
        after = self.cursor.advance(direction)
        if after != before:
            # The focused marker drives the card; the user's own point has none.
            self.selected = self._venue_at_marker(after)
        return self.view()

    def select_by_coordinate(self, coordinate: Coordinate) -> bool:
        idx = self.cursor.select_by_coordinate(coordinate)
        if idx is None:
            return False
        venue = self._venue_at_marker(idx)
        if venue is not None:
            self.selected = venue
        return True

    def select_venue(self, venue_id: str) -> DiscoveryView:
        for pos, venue in enumerate(self.venues):
            if venue.id == venue_id:
                break
        else:
            raise VenueNotFoundError(venue_id)
        self.selected = venue
        self.cursor.move_to(pos + self._marker_offset())
        return self.view()

    # -- views -------------------------------------------------------------

    def displayed_spots(self) -> List[DisplayedSpot]:
        ordered = apply_filters(self.venues, self.query, self.user_location)
        out: List[DisplayedSpot] = []
        for venue, dist in annotate_distances(ordered, self.user_location):
            out.append(
                DisplayedSpot(
                    venue=venue,
                    distance_m=dist,
                    distance_mi=None if dist is None else round(meters_to_miles(dist), 2),
                )
            )
        return out

    def view(self) -> DiscoveryView:
        return DiscoveryView(
            markers=self.cursor.points,
            navigation=self.cursor.state,
            focused_point=self.cursor.focused_point(),
            can_prev=self.cursor.can_advance("prev"),
            can_next=self.cursor.can_advance("next"),
            selected=self.selected,
            user_location=self.user_location,
            query=self.query,
            spots=self.displayed_spots(),
        )
