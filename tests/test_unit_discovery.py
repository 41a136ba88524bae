"""
Unit tests for DiscoverySession: re-derivation as inputs arrive in any
order, cursor-driven selection and the displayed list.
"""

import pytest

from app.config import Settings
from app.models.spot_models import Coordinate, FilterQuery, UserLocation, Venue
from app.services.discovery import DiscoverySession, VenueNotFoundError


def make_venue(vid, lat, lon):
    return Venue(id=vid, name=vid, coordinate=Coordinate(latitude=lat, longitude=lon))


@pytest.fixture
def settings():
    return Settings(user_marker_label="You are here", fallback_latitude=0.0, fallback_longitude=0.0)


@pytest.fixture
def session(spots, downtown, settings):
    return DiscoverySession(venues=spots, user_location=downtown, settings=settings)


class TestLoadOrder:

    def test_empty_session(self, settings):
        view = DiscoverySession(settings=settings).view()
        assert view.markers == []
        assert view.navigation.length == 0
        assert view.focused_point.coordinate == Coordinate(latitude=0.0, longitude=0.0)
        assert view.selected is None
        assert view.spots == []
        assert not view.can_prev and not view.can_next

    def test_venues_then_location(self, spots, downtown, settings):
        s = DiscoverySession(settings=settings)
        view = s.set_venues(spots)
        assert view.selected is None
        assert view.navigation.length == 3

        view = s.set_user_location(downtown)
        assert view.selected.id == "near"
        assert view.navigation.length == 4
        assert view.markers[0].label == "You are here"

    def test_location_then_venues(self, spots, downtown, settings):
        s = DiscoverySession(settings=settings)
        assert s.set_user_location(downtown).selected is None
        assert s.set_venues(spots).selected.id == "near"

    def test_location_never_arrives(self, spots, settings):
        s = DiscoverySession(venues=spots, settings=settings)
        view = s.view()
        assert view.selected is None
        assert [d.distance_m for d in view.spots] == [None, None, None]
        assert [d.venue.id for d in view.spots] == ["far", "mid", "near"]

    def test_location_lost_keeps_selection(self, session):
        view = session.set_user_location(None)
        assert view.selected.id == "near"
        assert view.navigation.length == 3


class TestAdvance:

    def test_next_from_user_point_selects_first_spot(self, session):
        view = session.advance("next")
        assert view.navigation.index == 1
        assert view.selected.id == "far"

    def test_back_to_user_point_clears_selection(self, session):
        session.advance("next")
        view = session.advance("prev")
        assert view.navigation.index == 0
        assert view.selected is None

    def test_prev_at_start_is_noop(self, session):
        view = session.advance("prev")
        assert view.navigation.index == 0
        assert view.selected.id == "near"
        assert not view.can_prev

    def test_next_at_end_is_noop(self, session):
        for _ in range(5):
            view = session.advance("next")
        assert view.navigation.index == 3
        assert view.selected.id == "near"
        assert not view.can_next

    def test_default_fires_again_once_selection_cleared(self, session, downtown):
        session.advance("next")
        session.advance("prev")
        view = session.set_user_location(downtown)
        assert view.selected.id == "near"


class TestSelection:

    def test_select_by_coordinate_hit(self, session, spots):
        target = Coordinate(
            latitude=spots[1].coordinate.latitude + 1e-7,
            longitude=spots[1].coordinate.longitude,
        )
        assert session.select_by_coordinate(target) is True
        view = session.view()
        assert view.navigation.index == 2
        assert view.selected.id == "mid"

    def test_select_by_coordinate_miss(self, session, spots):
        session.advance("next")
        target = Coordinate(
            latitude=spots[1].coordinate.latitude + 1e-3,
            longitude=spots[1].coordinate.longitude,
        )
        assert session.select_by_coordinate(target) is False
        view = session.view()
        assert view.navigation.index == 1
        assert view.selected.id == "far"

    def test_tapping_user_point_keeps_selection(self, session, downtown):
        session.advance("next")
        assert session.select_by_coordinate(downtown.coordinate) is True
        view = session.view()
        assert view.navigation.index == 0
        assert view.selected.id == "far"

    def test_select_venue_from_list(self, session):
        view = session.select_venue("mid")
        assert view.selected.id == "mid"
        assert view.navigation.index == 2

    def test_select_unknown_venue(self, session):
        with pytest.raises(VenueNotFoundError):
            session.select_venue("nope")

    def test_user_choice_survives_rederive(self, session, downtown):
        session.select_venue("far")
        view = session.set_user_location(downtown)
        assert view.selected.id == "far"

    def test_selection_dropped_when_venue_disappears(self, session, spots):
        session.select_venue("far")
        view = session.set_venues(spots[1:])
        assert view.selected.id == "near"
        assert view.navigation.index == 1


class TestDisplayedList:

    def test_query_change_rederives_list(self, session):
        view = session.set_filter_query(FilterQuery(categories=["ledge"], sort_field="name"))
        assert [d.venue.id for d in view.spots] == ["near", "mid"]

    def test_list_does_not_touch_markers(self, session):
        view = session.set_filter_query(FilterQuery(search_text="nothing matches"))
        assert view.spots == []
        assert view.navigation.length == 4

    def test_distances_in_miles(self, session):
        view = session.view()
        near = view.spots[0]
        assert near.venue.id == "near"
        assert near.distance_mi == pytest.approx(near.distance_m / 1609.34, abs=0.005)


class TestMarkerIdentity:

    def test_user_standing_on_a_spot(self, settings):
        spot = make_venue("here", 49.2827, -123.1207)
        other = make_venue("other", 49.29, -123.12)
        here = UserLocation(coordinate=spot.coordinate)
        s = DiscoverySession(venues=[spot, other], user_location=here, settings=settings)

        s.advance("next")
        assert s.view().selected.id == "here"
        view = s.advance("prev")
        assert view.navigation.index == 0
        assert view.selected is None

    def test_spots_sharing_a_coordinate(self, settings):
        first = make_venue("first", 49.28, -123.12)
        second = make_venue("second", 49.28, -123.12)
        s = DiscoverySession(venues=[first, second], settings=settings)

        view = s.advance("next")
        assert view.navigation.index == 1
        assert view.selected.id == "second"

        view = s.select_venue("second")
        assert view.navigation.index == 1
        view = s.select_venue("first")
        assert view.navigation.index == 0

    def test_per_session_user_label(self, spots, downtown, settings):
        s = DiscoverySession(venues=spots, user_location=downtown, settings=settings, user_label="Kai")
        assert s.view().markers[0].label == "Kai"
        s.set_user_location(None)
        s.set_user_location(downtown)
        assert s.view().markers[0].label == "Kai"
