"""Tests for map regions and distance labels."""

import pytest

from coffee_note.domain.geo import GeoPin, PinKind
from coffee_note.domain.models import SubscriptionTier
from coffee_note.errors import PreconditionError, PremiumRequiredError
from coffee_note.services.distance import distance_meters, format_distance
from coffee_note.services.geo import MapService, build_pins, fit_region
from coffee_note.services.profiles import ProfileService
from tests.conftest import (
    USER_ID,
    InMemoryProfileRepository,
    InMemoryVisitRepository,
    InMemoryWishlistRepository,
    add_profile,
    make_entry,
    make_visit,
)


def _pin(latitude: float, longitude: float) -> GeoPin:
    return GeoPin(id=f"{latitude},{longitude}", latitude=latitude, longitude=longitude)


def test_fit_region_pads_span() -> None:
    region = fit_region([_pin(1, 1), _pin(3, 3)])

    assert region.center_latitude == 2
    assert region.center_longitude == 2
    assert region.span_latitude == pytest.approx(2.6)
    assert region.span_longitude == pytest.approx(2.6)


def test_fit_region_single_point_has_zero_span() -> None:
    region = fit_region([_pin(37.77, -122.42), _pin(37.77, -122.42)])

    assert region.center_latitude == 37.77
    assert region.span_latitude == 0
    assert region.span_longitude == 0


def test_fit_region_rejects_empty_input() -> None:
    with pytest.raises(PreconditionError):
        fit_region([])


@pytest.mark.parametrize(
    ("meters", "expected"),
    [
        (0, "Nearby"),
        (50, "Nearby"),
        (500, "0.3 mi away"),
        (5000, "3 mi away"),
        (16093.4, "10 mi away"),
    ],
)
def test_format_distance(meters: float, expected: str) -> None:
    assert format_distance(meters) == expected


def test_format_distance_rejects_negative() -> None:
    with pytest.raises(PreconditionError):
        format_distance(-1)


def test_distance_meters() -> None:
    assert distance_meters(10.0, 20.0, 10.0, 20.0) == 0
    # one degree of latitude is about 111.2 km
    assert distance_meters(0.0, 0.0, 1.0, 0.0) == pytest.approx(111_195, rel=1e-3)


def test_build_pins_labels_both_kinds() -> None:
    visit = make_visit(shop_name="Ritual", rating=4.5, price=5.0)
    entry = make_entry(shop_name="Sightglass")

    pins = build_pins([visit], [entry])

    assert [pin.kind for pin in pins] == [PinKind.VISIT, PinKind.WISHLIST]
    assert pins[0].subtitle == "4.5 stars • $5.00"
    assert pins[1].subtitle == "Want to visit"


def _map_service(
    tier: SubscriptionTier,
) -> tuple[MapService, InMemoryVisitRepository, InMemoryWishlistRepository]:
    profiles = InMemoryProfileRepository()
    add_profile(profiles, tier=tier)
    visits = InMemoryVisitRepository()
    wishlist = InMemoryWishlistRepository()
    service = MapService(visits, wishlist, ProfileService(profiles))
    return service, visits, wishlist


def test_map_requires_premium() -> None:
    service, _, _ = _map_service(SubscriptionTier.FREE)

    with pytest.raises(PremiumRequiredError):
        service.get_map(USER_ID)


def test_map_layers_and_region() -> None:
    service, visits, wishlist = _map_service(SubscriptionTier.PREMIUM)
    visits.save_visit(make_visit(latitude=1.0, longitude=1.0))
    wishlist.save_entry(make_entry(latitude=3.0, longitude=3.0))

    both = service.get_map(USER_ID)
    visits_only = service.get_map(USER_ID, show_wishlist=False)
    nothing = service.get_map(USER_ID, show_visits=False, show_wishlist=False)

    assert len(both.pins) == 2
    assert both.region is not None
    assert both.region.center_latitude == 2
    assert [pin.kind for pin in visits_only.pins] == [PinKind.VISIT]
    assert nothing.pins == []
    assert nothing.region is None
    assert nothing.visit_count == 1
    assert nothing.wishlist_count == 1
