"""Statistics over a user's visits and wishlist."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeVar

from coffee_note.domain.stats import StatisticsSnapshot
from coffee_note.domain.visits import Visit, WishlistEntry
from coffee_note.services.visits import VisitRepository
from coffee_note.services.wishlist import WishlistRepository

HIGH_RATING_THRESHOLD = 4.5

T = TypeVar("T")


@dataclass
class StatisticsService:
    """Service that loads collections and derives summary metrics."""

    visit_repository: VisitRepository
    wishlist_repository: WishlistRepository

    def get_statistics(self, user_id: str) -> StatisticsSnapshot:
        """Return statistics for the user's current visits and wishlist."""
        visits = self.visit_repository.list_visits(user_id)
        wishlist = self.wishlist_repository.list_entries(user_id)
        return compute_statistics(visits, wishlist)


def compute_statistics(
    visits: list[Visit], wishlist: list[WishlistEntry]
) -> StatisticsSnapshot:
    """Compute summary metrics.

    Max and min scans replace the current best only on strict inequality,
    so among ties the earliest entry in input order wins.
    """
    total_visits = len(visits)
    total_spent = sum(visit.price for visit in visits)
    if total_visits:
        average_rating = sum(visit.rating for visit in visits) / total_visits
        average_price = total_spent / total_visits
    else:
        average_rating = 0.0
        average_price = 0.0

    first_visit = _strict_min(visits, key=lambda visit: visit.date_visited)

    return StatisticsSnapshot(
        total_visits=total_visits,
        total_wishlist_items=len(wishlist),
        average_rating=average_rating,
        total_spent=total_spent,
        average_price=average_price,
        favorite_item=_favorite_item(visits),
        most_visited_shop=_most_visited_shop(visits),
        highest_rated_shop=_highest_rated_shop(visits),
        most_expensive_visit=_strict_max(visits, key=lambda visit: visit.price),
        first_visit_date=first_visit.date_visited if first_visit else None,
    )


def normalize_item(name: str) -> str:
    """Normalize an ordered item name for counting."""
    return name.strip().lower()


def _favorite_item(visits: list[Visit]) -> str | None:
    """Most ordered item, title-cased.

    Names that normalize to an empty string are not counted, so direct input
    with blank items cannot make "" the favorite.
    """
    counts: dict[str, int] = {}
    for visit in visits:
        for item in visit.items_ordered:
            normalized = normalize_item(item)
            if not normalized:
                continue
            counts[normalized] = counts.get(normalized, 0) + 1
    best = _strict_max(counts.items(), key=lambda pair: pair[1])
    if best is None:
        return None
    return _capitalize_words(best[0])


def _most_visited_shop(visits: list[Visit]) -> str | None:
    counts: dict[str, int] = {}
    for visit in visits:
        counts[visit.shop_name] = counts.get(visit.shop_name, 0) + 1
    best = _strict_max(counts.items(), key=lambda pair: pair[1])
    if best is None or best[1] <= 1:
        return None
    return best[0]


def _highest_rated_shop(visits: list[Visit]) -> str | None:
    qualifying = [visit for visit in visits if visit.rating >= HIGH_RATING_THRESHOLD]
    best = _strict_max(qualifying, key=lambda visit: visit.rating)
    return best.shop_name if best else None


def _strict_max(items: Iterable[T], key: Callable[[T], object]) -> T | None:
    best: T | None = None
    best_key = None
    for item in items:
        item_key = key(item)
        if best is None or item_key > best_key:  # type: ignore[operator]
            best, best_key = item, item_key
    return best


def _strict_min(items: Iterable[T], key: Callable[[T], object]) -> T | None:
    best: T | None = None
    best_key = None
    for item in items:
        item_key = key(item)
        if best is None or item_key < best_key:  # type: ignore[operator]
            best, best_key = item, item_key
    return best


def _capitalize_words(text: str) -> str:
    return " ".join(word.capitalize() for word in text.split(" "))
