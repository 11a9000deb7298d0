"""Wishlist management and conversion of entries into visits."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from coffee_note.domain.visits import Visit, VisitDraft, WishlistEntry
from coffee_note.errors import NotFoundError, ValidationError
from coffee_note.services.distance import distance_meters, format_distance
from coffee_note.services.profiles import ProfileService
from coffee_note.services.subscriptions import ChangeFeed, Subscription
from coffee_note.services.visits import VisitService

WISHLIST_FEATURE = "Wishlist"

logger = logging.getLogger(__name__)


class WishlistRepository(Protocol):
    """Persistence interface for wishlist entries."""

    def list_entries(self, user_id: str) -> list[WishlistEntry]:
        """Return all wishlist entries owned by a user."""

    def get_entry(self, user_id: str, entry_id: str) -> WishlistEntry | None:
        """Return a wishlist entry by id, if present."""

    def save_entry(self, entry: WishlistEntry) -> WishlistEntry:
        """Create or fully replace a wishlist entry and return it."""

    def delete_entry(self, user_id: str, entry_id: str) -> None:
        """Delete a wishlist entry."""


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of turning a wishlist entry into a visit.

    ``entry_removed`` is False when the visit was created but the entry
    could not be deleted; both records then exist for the same shop.
    """

    visit: Visit
    entry_removed: bool


@dataclass
class WishlistService:
    """Application service for the premium wishlist."""

    repository: WishlistRepository
    profile_service: ProfileService
    visit_service: VisitService
    feed: ChangeFeed[list[WishlistEntry]] = field(
        default_factory=lambda: ChangeFeed("wishlist")
    )

    def add_entry(  # noqa: PLR0913
        self,
        user_id: str,
        shop_name: str,
        address: str,
        latitude: float,
        longitude: float,
        notes: str | None = None,
    ) -> WishlistEntry:
        """Add a shop to the user's wishlist."""
        self.profile_service.require_premium(user_id, WISHLIST_FEATURE)
        if not shop_name.strip() or not address.strip():
            raise ValidationError("Please fill in all required fields")
        entry = WishlistEntry(
            id=str(uuid4()),
            user_id=user_id,
            shop_name=shop_name.strip(),
            address=address.strip(),
            latitude=latitude,
            longitude=longitude,
            notes=_clean_notes(notes),
            date_added=datetime.now(tz=UTC),
        )
        created = self.repository.save_entry(entry)
        logger.info("Added to wishlist: %s", created.shop_name)
        self._notify(user_id)
        return created

    def get_entry(self, user_id: str, entry_id: str) -> WishlistEntry:
        """Return a wishlist entry or raise NotFoundError."""
        self.profile_service.require_premium(user_id, WISHLIST_FEATURE)
        return self._require_entry(user_id, entry_id)

    def list_entries(self, user_id: str) -> list[WishlistEntry]:
        """Return the user's wishlist, newest first."""
        self.profile_service.require_premium(user_id, WISHLIST_FEATURE)
        return sorted(
            self.repository.list_entries(user_id),
            key=lambda entry: entry.date_added,
            reverse=True,
        )

    def update_notes(
        self, user_id: str, entry_id: str, notes: str | None
    ) -> WishlistEntry:
        """Replace the notes of an entry; blank notes are cleared."""
        self.profile_service.require_premium(user_id, WISHLIST_FEATURE)
        current = self._require_entry(user_id, entry_id)
        updated = self.repository.save_entry(
            replace(current, notes=_clean_notes(notes))
        )
        self._notify(user_id)
        return updated

    def delete_entry(self, user_id: str, entry_id: str) -> None:
        """Delete an entry from the user's wishlist."""
        self.profile_service.require_premium(user_id, WISHLIST_FEATURE)
        self._require_entry(user_id, entry_id)
        self.repository.delete_entry(user_id, entry_id)
        logger.info("Wishlist item deleted: %s", entry_id)
        self._notify(user_id)

    def convert_to_visit(  # noqa: PLR0913
        self,
        user_id: str,
        entry_id: str,
        items_ordered: list[str],
        rating: float,
        price: float,
        notes: str | None = None,
        date_visited: datetime | None = None,
    ) -> ConversionResult:
        """Log a visit for a wishlist shop, then remove the entry.

        The two steps are not atomic. A failed delete leaves the entry in
        place and is reported through ``ConversionResult.entry_removed``.
        """
        self.profile_service.require_premium(user_id, WISHLIST_FEATURE)
        entry = self._require_entry(user_id, entry_id)
        visit = self.visit_service.create_visit(
            user_id,
            VisitDraft(
                shop_name=entry.shop_name,
                address=entry.address,
                latitude=entry.latitude,
                longitude=entry.longitude,
                items_ordered=items_ordered,
                rating=rating,
                price=price,
                notes=notes,
                date_visited=date_visited,
            ),
        )
        try:
            self.repository.delete_entry(user_id, entry_id)
        except Exception:
            logger.exception(
                "Visit %s created but wishlist entry %s was not removed",
                visit.id,
                entry_id,
            )
            return ConversionResult(visit=visit, entry_removed=False)
        logger.info("Removed from wishlist after visit: %s", entry.shop_name)
        self._notify(user_id)
        return ConversionResult(visit=visit, entry_removed=True)

    def listen(
        self, user_id: str, callback: Callable[[list[WishlistEntry]], None]
    ) -> Subscription:
        """Deliver the user's wishlist now and after every change."""
        self.profile_service.require_premium(user_id, WISHLIST_FEATURE)
        subscription = self.feed.subscribe(user_id, callback)
        callback(self.repository.list_entries(user_id))
        return subscription

    def _require_entry(self, user_id: str, entry_id: str) -> WishlistEntry:
        entry = self.repository.get_entry(user_id, entry_id)
        if entry is None:
            raise NotFoundError(f"Wishlist entry {entry_id} not found")
        return entry

    def _notify(self, user_id: str) -> None:
        if self.feed.has_listeners(user_id):
            self.feed.publish(user_id, self.repository.list_entries(user_id))


def distance_label(
    entry: WishlistEntry, latitude: float | None, longitude: float | None
) -> str | None:
    """Return a distance label from a reference point, if one is known."""
    if latitude is None or longitude is None:
        return None
    meters = distance_meters(latitude, longitude, entry.latitude, entry.longitude)
    return format_distance(meters)


def _clean_notes(notes: str | None) -> str | None:
    cleaned = notes.strip() if notes else None
    return cleaned or None
