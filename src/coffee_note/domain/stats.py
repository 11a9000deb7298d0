"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import datetime

from coffee_note.domain.visits import Visit


@dataclass(frozen=True)
class StatisticsSnapshot:
    """Summary metrics derived from a user's visits and wishlist."""

    total_visits: int
    total_wishlist_items: int
    average_rating: float
    total_spent: float
    average_price: float
    favorite_item: str | None
    most_visited_shop: str | None
    highest_rated_shop: str | None
    most_expensive_visit: Visit | None
    first_visit_date: datetime | None
