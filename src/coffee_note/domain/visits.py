"""Domain models for logged visits and the wishlist."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Visit:
    """A single logged visit to a coffee shop."""

    id: str
    user_id: str
    shop_name: str
    address: str
    latitude: float
    longitude: float
    items_ordered: list[str]
    rating: float
    price: float
    date_visited: datetime
    place_id: str | None = None
    notes: str | None = None
    photo_url: str | None = None


@dataclass(frozen=True)
class WishlistEntry:
    """A coffee shop the user wants to visit."""

    id: str
    user_id: str
    shop_name: str
    address: str
    latitude: float
    longitude: float
    date_added: datetime
    notes: str | None = None


@dataclass(frozen=True)
class VisitDraft:
    """User-entered content for creating or replacing a visit."""

    shop_name: str
    address: str
    latitude: float
    longitude: float
    items_ordered: list[str]
    rating: float
    price: float
    date_visited: datetime | None = None
    place_id: str | None = None
    notes: str | None = None
    photo_url: str | None = None
