"""Visit logging, listing and search."""

import locale
import logging
import math
import unicodedata
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Protocol
from uuid import uuid4

from coffee_note.domain.models import SubscriptionTier
from coffee_note.domain.visits import Visit, VisitDraft
from coffee_note.errors import NotFoundError, ValidationError, VisitLimitReachedError
from coffee_note.services.profiles import ProfileService
from coffee_note.services.subscriptions import ChangeFeed, Subscription

FREE_VISIT_LIMIT = 10
MIN_RATING = 0.5
MAX_RATING = 5.0

logger = logging.getLogger(__name__)


class SortOption(str, Enum):
    """Orderings offered for the visit list."""

    DATE_DESCENDING = "date_desc"
    DATE_ASCENDING = "date_asc"
    RATING_DESCENDING = "rating_desc"
    RATING_ASCENDING = "rating_asc"
    NAME_ASCENDING = "name_asc"
    NAME_DESCENDING = "name_desc"
    PRICE_DESCENDING = "price_desc"
    PRICE_ASCENDING = "price_asc"

    @property
    def label(self) -> str:
        return _SORT_LABELS[self]


_SORT_LABELS = {
    SortOption.DATE_DESCENDING: "Newest First",
    SortOption.DATE_ASCENDING: "Oldest First",
    SortOption.RATING_DESCENDING: "Highest Rated",
    SortOption.RATING_ASCENDING: "Lowest Rated",
    SortOption.NAME_ASCENDING: "Name A-Z",
    SortOption.NAME_DESCENDING: "Name Z-A",
    SortOption.PRICE_DESCENDING: "Most Expensive",
    SortOption.PRICE_ASCENDING: "Least Expensive",
}

_SORT_KEYS: dict[SortOption, tuple[Callable[[Visit], object], bool]] = {
    SortOption.DATE_DESCENDING: (lambda visit: visit.date_visited, True),
    SortOption.DATE_ASCENDING: (lambda visit: visit.date_visited, False),
    SortOption.RATING_DESCENDING: (lambda visit: visit.rating, True),
    SortOption.RATING_ASCENDING: (lambda visit: visit.rating, False),
    SortOption.NAME_ASCENDING: (lambda visit: name_sort_key(visit.shop_name), False),
    SortOption.NAME_DESCENDING: (lambda visit: name_sort_key(visit.shop_name), True),
    SortOption.PRICE_DESCENDING: (lambda visit: visit.price, True),
    SortOption.PRICE_ASCENDING: (lambda visit: visit.price, False),
}


class VisitRepository(Protocol):
    """Persistence interface for visits."""

    def list_visits(self, user_id: str) -> list[Visit]:
        """Return all visits owned by a user."""

    def get_visit(self, user_id: str, visit_id: str) -> Visit | None:
        """Return a visit by id, if present."""

    def save_visit(self, visit: Visit) -> Visit:
        """Create or fully replace a visit and return it."""

    def delete_visit(self, user_id: str, visit_id: str) -> None:
        """Delete a visit."""

    def count_visits(self, user_id: str) -> int:
        """Return the number of visits owned by a user."""


def name_sort_key(name: str) -> tuple[str, str]:
    """Collation key for shop names.

    Accents and case are ignored first, so "Éclair" sorts with the E names;
    they only order names that are otherwise equal. Both levels go through
    the process LC_COLLATE locale.
    """
    folded = name.casefold()
    base = "".join(
        char
        for char in unicodedata.normalize("NFKD", folded)
        if not unicodedata.combining(char)
    )
    return locale.strxfrm(base), locale.strxfrm(folded)


def filter_and_sort(
    visits: list[Visit],
    query: str = "",
    sort_option: SortOption = SortOption.DATE_DESCENDING,
) -> list[Visit]:
    """Filter visits by a case-insensitive query and sort them stably."""
    result = visits
    if query:
        needle = query.casefold()
        result = [visit for visit in visits if _matches(visit, needle)]
    key, reverse = _SORT_KEYS[sort_option]
    return sorted(result, key=key, reverse=reverse)


def _matches(visit: Visit, needle: str) -> bool:
    if needle in visit.shop_name.casefold() or needle in visit.address.casefold():
        return True
    if any(needle in item.casefold() for item in visit.items_ordered):
        return True
    return visit.notes is not None and needle in visit.notes.casefold()


def normalize_draft(draft: VisitDraft) -> VisitDraft:
    """Trim user input and fill defaults."""
    date_visited = draft.date_visited or datetime.now(tz=UTC)
    if date_visited.tzinfo is None:
        date_visited = date_visited.replace(tzinfo=UTC)
    notes = draft.notes.strip() if draft.notes else None
    return replace(
        draft,
        shop_name=draft.shop_name.strip(),
        address=draft.address.strip(),
        items_ordered=[item.strip() for item in draft.items_ordered if item.strip()],
        date_visited=date_visited,
        notes=notes or None,
    )


def validate_visit(draft: VisitDraft, now: datetime | None = None) -> None:
    """Raise ValidationError when the draft cannot be saved."""
    current = now or datetime.now(tz=UTC)
    if draft.date_visited is not None and draft.date_visited > current:
        raise ValidationError("You can't log a visit in the future!")
    if not draft.shop_name.strip():
        raise ValidationError("Shop name is required")
    if not draft.address.strip():
        raise ValidationError("Address is required")
    if not draft.items_ordered:
        raise ValidationError("At least one item ordered is required")
    if not is_valid_rating(draft.rating):
        raise ValidationError("Rating must be between 0.5 and 5.0 in 0.5 steps")
    if not math.isfinite(draft.price) or draft.price < 0:
        raise ValidationError("Price must be a non-negative amount")


def is_valid_rating(rating: float) -> bool:
    """Return True for ratings in {0.5, 1.0, ..., 5.0}."""
    return MIN_RATING <= rating <= MAX_RATING and float(rating * 2).is_integer()


@dataclass
class VisitService:
    """Application service for the visit log."""

    repository: VisitRepository
    profile_service: ProfileService
    free_visit_limit: int = FREE_VISIT_LIMIT
    feed: ChangeFeed[list[Visit]] = field(default_factory=lambda: ChangeFeed("visits"))

    def create_visit(self, user_id: str, draft: VisitDraft) -> Visit:
        """Validate and persist a new visit, enforcing the free-tier cap."""
        normalized = normalize_draft(draft)
        validate_visit(normalized)
        if self.profile_service.tier_for(user_id) is SubscriptionTier.FREE:
            existing = self.repository.count_visits(user_id)
            if existing >= self.free_visit_limit:
                raise VisitLimitReachedError(self.free_visit_limit)
        visit = _build_visit(str(uuid4()), user_id, normalized)
        created = self.repository.save_visit(visit)
        logger.info("Visit created: %s", created.shop_name)
        self._notify(user_id)
        return created

    def get_visit(self, user_id: str, visit_id: str) -> Visit:
        """Return a visit or raise NotFoundError."""
        visit = self.repository.get_visit(user_id, visit_id)
        if visit is None:
            raise NotFoundError(f"Visit {visit_id} not found")
        return visit

    def list_visits(
        self,
        user_id: str,
        query: str = "",
        sort_option: SortOption = SortOption.DATE_DESCENDING,
    ) -> list[Visit]:
        """Return the user's visits filtered and sorted."""
        return filter_and_sort(self.repository.list_visits(user_id), query, sort_option)

    def update_visit(self, user_id: str, visit_id: str, draft: VisitDraft) -> Visit:
        """Fully replace the content of an existing visit."""
        current = self.get_visit(user_id, visit_id)
        normalized = normalize_draft(draft)
        validate_visit(normalized)
        updated = self.repository.save_visit(
            _build_visit(current.id, current.user_id, normalized)
        )
        logger.info("Visit updated: %s", updated.shop_name)
        self._notify(user_id)
        return updated

    def update_notes(self, user_id: str, visit_id: str, notes: str | None) -> Visit:
        """Replace the notes of a visit; blank notes are cleared."""
        current = self.get_visit(user_id, visit_id)
        cleaned = notes.strip() if notes else None
        updated = self.repository.save_visit(replace(current, notes=cleaned or None))
        self._notify(user_id)
        return updated

    def delete_visit(self, user_id: str, visit_id: str) -> None:
        """Delete a visit owned by the user."""
        self.get_visit(user_id, visit_id)
        self.repository.delete_visit(user_id, visit_id)
        logger.info("Visit deleted: %s", visit_id)
        self._notify(user_id)

    def listen(
        self, user_id: str, callback: Callable[[list[Visit]], None]
    ) -> Subscription:
        """Deliver the user's visits now and after every change."""
        subscription = self.feed.subscribe(user_id, callback)
        callback(self.repository.list_visits(user_id))
        return subscription

    def _notify(self, user_id: str) -> None:
        if self.feed.has_listeners(user_id):
            self.feed.publish(user_id, self.repository.list_visits(user_id))


def _build_visit(visit_id: str, user_id: str, draft: VisitDraft) -> Visit:
    return Visit(
        id=visit_id,
        user_id=user_id,
        shop_name=draft.shop_name,
        address=draft.address,
        latitude=draft.latitude,
        longitude=draft.longitude,
        place_id=draft.place_id,
        items_ordered=list(draft.items_ordered),
        rating=draft.rating,
        price=draft.price,
        notes=draft.notes,
        date_visited=draft.date_visited or datetime.now(tz=UTC),
        photo_url=draft.photo_url,
    )
