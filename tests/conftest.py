"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from coffee_note.config import Settings
from coffee_note.containers import AppContainer
from coffee_note.domain.models import SubscriptionTier, UserProfile
from coffee_note.domain.visits import Visit, VisitDraft, WishlistEntry
from coffee_note.services.geo import MapService
from coffee_note.services.profiles import ProfileRepository, ProfileService
from coffee_note.services.statistics import StatisticsService
from coffee_note.services.visits import VisitRepository, VisitService
from coffee_note.services.wishlist import WishlistRepository, WishlistService

USER_ID = "user-1"


@dataclass
class InMemoryVisitRepository(VisitRepository):
    """In-memory visit repository for tests."""

    visits: dict[str, Visit] = field(default_factory=dict)

    def list_visits(self, user_id: str) -> list[Visit]:
        return [visit for visit in self.visits.values() if visit.user_id == user_id]

    def get_visit(self, user_id: str, visit_id: str) -> Visit | None:
        visit = self.visits.get(visit_id)
        if visit is None or visit.user_id != user_id:
            return None
        return visit

    def save_visit(self, visit: Visit) -> Visit:
        self.visits[visit.id] = visit
        return visit

    def delete_visit(self, user_id: str, visit_id: str) -> None:
        self.visits.pop(visit_id, None)

    def count_visits(self, user_id: str) -> int:
        return len(self.list_visits(user_id))


@dataclass
class InMemoryWishlistRepository(WishlistRepository):
    """In-memory wishlist repository for tests."""

    entries: dict[str, WishlistEntry] = field(default_factory=dict)
    fail_deletes: bool = False

    def list_entries(self, user_id: str) -> list[WishlistEntry]:
        return [entry for entry in self.entries.values() if entry.user_id == user_id]

    def get_entry(self, user_id: str, entry_id: str) -> WishlistEntry | None:
        entry = self.entries.get(entry_id)
        if entry is None or entry.user_id != user_id:
            return None
        return entry

    def save_entry(self, entry: WishlistEntry) -> WishlistEntry:
        self.entries[entry.id] = entry
        return entry

    def delete_entry(self, user_id: str, entry_id: str) -> None:
        if self.fail_deletes:
            raise RuntimeError("delete failed")
        self.entries.pop(entry_id, None)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[str, UserProfile] = field(default_factory=dict)

    def get_profile(self, user_id: str) -> UserProfile | None:
        return self.profiles.get(user_id)

    def save_profile(self, profile: UserProfile) -> UserProfile:
        self.profiles[profile.id] = profile
        return profile

    def update_name(self, user_id: str, name: str) -> None:
        current = self.profiles[user_id]
        self.profiles[user_id] = UserProfile(
            id=current.id,
            email=current.email,
            name=name,
            subscription_tier=current.subscription_tier,
            date_created=current.date_created,
        )

    def update_tier(self, user_id: str, tier: SubscriptionTier) -> None:
        current = self.profiles[user_id]
        self.profiles[user_id] = UserProfile(
            id=current.id,
            email=current.email,
            name=current.name,
            subscription_tier=tier,
            date_created=current.date_created,
        )

    def delete_profile(self, user_id: str) -> None:
        self.profiles.pop(user_id, None)


def make_visit(  # noqa: PLR0913
    shop_name: str = "Blue Bottle Coffee",
    price: float = 12.5,
    rating: float = 4.5,
    date_visited: datetime | None = None,
    items: list[str] | None = None,
    address: str = "123 Main St, San Francisco, CA",
    notes: str | None = None,
    latitude: float = 37.7749,
    longitude: float = -122.4194,
    user_id: str = USER_ID,
) -> Visit:
    return Visit(
        id=str(uuid4()),
        user_id=user_id,
        shop_name=shop_name,
        address=address,
        latitude=latitude,
        longitude=longitude,
        items_ordered=items if items is not None else ["Cappuccino"],
        rating=rating,
        price=price,
        notes=notes,
        date_visited=date_visited or datetime(2024, 12, 1, 9, 0, tzinfo=UTC),
    )


def make_entry(
    shop_name: str = "Sightglass Coffee",
    latitude: float = 37.7849,
    longitude: float = -122.4094,
    date_added: datetime | None = None,
    user_id: str = USER_ID,
) -> WishlistEntry:
    return WishlistEntry(
        id=str(uuid4()),
        user_id=user_id,
        shop_name=shop_name,
        address="456 Oak St, San Francisco, CA",
        latitude=latitude,
        longitude=longitude,
        notes="Heard they have amazing pour-over coffee",
        date_added=date_added or datetime(2024, 12, 2, tzinfo=UTC),
    )


def make_draft(**overrides: object) -> VisitDraft:
    values: dict[str, object] = {
        "shop_name": "Blue Bottle Coffee",
        "address": "123 Main St, San Francisco, CA",
        "latitude": 37.7749,
        "longitude": -122.4194,
        "items_ordered": ["Cappuccino", "Croissant"],
        "rating": 4.5,
        "price": 12.5,
        "date_visited": datetime(2024, 12, 1, 9, 0, tzinfo=UTC),
    }
    values.update(overrides)
    return VisitDraft(**values)  # type: ignore[arg-type]


def add_profile(
    repository: InMemoryProfileRepository,
    user_id: str = USER_ID,
    tier: SubscriptionTier = SubscriptionTier.FREE,
) -> UserProfile:
    return repository.save_profile(
        UserProfile(
            id=user_id,
            email="coffee.lover@example.com",
            name="Coffee Lover",
            subscription_tier=tier,
            date_created=datetime(2024, 12, 28, tzinfo=UTC),
        )
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
            ".eyJyb2xlIjoic2VydmljZV9yb2xlIn0"
            ".c2lnbmF0dXJl"
        ),
        api_token="api-token",
    )


@pytest.fixture
def visit_repository() -> InMemoryVisitRepository:
    return InMemoryVisitRepository()


@pytest.fixture
def wishlist_repository() -> InMemoryWishlistRepository:
    return InMemoryWishlistRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def profile_service(profile_repository: InMemoryProfileRepository) -> ProfileService:
    return ProfileService(profile_repository)


@pytest.fixture
def visit_service(
    visit_repository: InMemoryVisitRepository, profile_service: ProfileService
) -> VisitService:
    return VisitService(repository=visit_repository, profile_service=profile_service)


@pytest.fixture
def wishlist_service(
    wishlist_repository: InMemoryWishlistRepository,
    profile_service: ProfileService,
    visit_service: VisitService,
) -> WishlistService:
    return WishlistService(
        repository=wishlist_repository,
        profile_service=profile_service,
        visit_service=visit_service,
    )


@pytest.fixture
def container(
    settings: Settings,
    visit_repository: InMemoryVisitRepository,
    wishlist_repository: InMemoryWishlistRepository,
    profile_service: ProfileService,
    visit_service: VisitService,
    wishlist_service: WishlistService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        visit_service=visit_service,
        wishlist_service=wishlist_service,
        statistics_service=StatisticsService(
            visit_repository=visit_repository,
            wishlist_repository=wishlist_repository,
        ),
        map_service=MapService(
            visit_repository=visit_repository,
            wishlist_repository=wishlist_repository,
            profile_service=profile_service,
        ),
    )
