"""Map pins and viewport fitting."""

from collections.abc import Sequence
from dataclasses import dataclass

from coffee_note.domain.geo import GeoPin, MapRegion, PinKind
from coffee_note.domain.visits import Visit, WishlistEntry
from coffee_note.errors import PreconditionError
from coffee_note.services.profiles import ProfileService
from coffee_note.services.visits import VisitRepository
from coffee_note.services.wishlist import WishlistRepository

REGION_PADDING = 1.3


@dataclass(frozen=True)
class MapView:
    """Pins to display and the region that encloses them."""

    pins: list[GeoPin]
    region: MapRegion | None
    visit_count: int
    wishlist_count: int


@dataclass
class MapService:
    """Premium map of visits and wishlist entries."""

    visit_repository: VisitRepository
    wishlist_repository: WishlistRepository
    profile_service: ProfileService

    def get_map(
        self, user_id: str, show_visits: bool = True, show_wishlist: bool = True
    ) -> MapView:
        """Return pins for the enabled layers and a region fitted to them."""
        self.profile_service.require_premium(user_id, "Map")
        visits = self.visit_repository.list_visits(user_id)
        wishlist = self.wishlist_repository.list_entries(user_id)
        pins = build_pins(
            visits if show_visits else [], wishlist if show_wishlist else []
        )
        return MapView(
            pins=pins,
            region=fit_region(pins) if pins else None,
            visit_count=len(visits),
            wishlist_count=len(wishlist),
        )


def build_pins(visits: list[Visit], wishlist: list[WishlistEntry]) -> list[GeoPin]:
    """Create map pins, visits first."""
    pins = [
        GeoPin(
            id=visit.id,
            latitude=visit.latitude,
            longitude=visit.longitude,
            title=visit.shop_name,
            subtitle=f"{visit.rating:.1f} stars • ${visit.price:.2f}",
            kind=PinKind.VISIT,
        )
        for visit in visits
    ]
    pins.extend(
        GeoPin(
            id=entry.id,
            latitude=entry.latitude,
            longitude=entry.longitude,
            title=entry.shop_name,
            subtitle="Want to visit",
            kind=PinKind.WISHLIST,
        )
        for entry in wishlist
    )
    return pins


def fit_region(pins: Sequence[GeoPin]) -> MapRegion:
    """Return the padded viewport enclosing all pins.

    Pins sharing one coordinate produce a zero span on that axis.
    """
    if not pins:
        raise PreconditionError("fit_region requires at least one pin")
    min_lat = max_lat = pins[0].latitude
    min_lon = max_lon = pins[0].longitude
    for pin in pins:
        min_lat = min(min_lat, pin.latitude)
        max_lat = max(max_lat, pin.latitude)
        min_lon = min(min_lon, pin.longitude)
        max_lon = max(max_lon, pin.longitude)
    return MapRegion(
        center_latitude=(min_lat + max_lat) / 2,
        center_longitude=(min_lon + max_lon) / 2,
        span_latitude=(max_lat - min_lat) * REGION_PADDING,
        span_longitude=(max_lon - min_lon) * REGION_PADDING,
    )
