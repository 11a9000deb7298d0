"""Pydantic request and response models for the HTTP API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from coffee_note.domain.geo import PinKind
from coffee_note.domain.models import SubscriptionTier
from coffee_note.domain.visits import VisitDraft


class ProfileRequest(BaseModel):
    """Payload for get-or-create of a profile."""

    email: str
    name: str | None = None


class ProfileUpdate(BaseModel):
    """Payload for renaming a profile."""

    name: str = Field(min_length=1)


class ProfileResponse(BaseModel):
    """Profile returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str | None
    display_name: str
    subscription_tier: SubscriptionTier
    is_premium: bool
    date_created: datetime


class VisitRequest(BaseModel):
    """Full visit content for create and replace."""

    shop_name: str
    address: str
    latitude: float
    longitude: float
    items_ordered: list[str]
    rating: float = Field(allow_inf_nan=False)
    price: float = Field(ge=0, allow_inf_nan=False)
    date_visited: datetime | None = None
    place_id: str | None = None
    notes: str | None = None
    photo_url: str | None = None

    def to_draft(self) -> VisitDraft:
        return VisitDraft(**self.model_dump())


class NotesUpdate(BaseModel):
    """Payload for editing notes in place."""

    notes: str | None = None


class VisitResponse(BaseModel):
    """Visit returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    shop_name: str
    address: str
    latitude: float
    longitude: float
    place_id: str | None
    items_ordered: list[str]
    rating: float
    price: float
    notes: str | None
    date_visited: datetime
    photo_url: str | None


class WishlistRequest(BaseModel):
    """Payload for adding a wishlist entry."""

    shop_name: str
    address: str
    latitude: float
    longitude: float
    notes: str | None = None


class WishlistResponse(BaseModel):
    """Wishlist entry returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    shop_name: str
    address: str
    latitude: float
    longitude: float
    notes: str | None
    date_added: datetime
    distance: str | None = None


class ConvertRequest(BaseModel):
    """Visit details supplied when marking a wishlist entry as visited."""

    items_ordered: list[str]
    rating: float = Field(allow_inf_nan=False)
    price: float = Field(ge=0, allow_inf_nan=False)
    notes: str | None = None
    date_visited: datetime | None = None


class ConversionResponse(BaseModel):
    """Result of converting a wishlist entry."""

    visit: VisitResponse
    entry_removed: bool


class StatisticsResponse(BaseModel):
    """Summary metrics for a user."""

    model_config = ConfigDict(from_attributes=True)

    total_visits: int
    total_wishlist_items: int
    average_rating: float
    total_spent: float
    average_price: float
    favorite_item: str | None
    most_visited_shop: str | None
    highest_rated_shop: str | None
    most_expensive_visit: VisitResponse | None
    first_visit_date: datetime | None


class PinResponse(BaseModel):
    """Map pin."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    latitude: float
    longitude: float
    title: str
    subtitle: str
    kind: PinKind


class RegionResponse(BaseModel):
    """Map viewport."""

    model_config = ConfigDict(from_attributes=True)

    center_latitude: float
    center_longitude: float
    span_latitude: float
    span_longitude: float


class MapResponse(BaseModel):
    """Pins and fitted region for the map screen."""

    model_config = ConfigDict(from_attributes=True)

    pins: list[PinResponse]
    region: RegionResponse | None
    visit_count: int
    wishlist_count: int
