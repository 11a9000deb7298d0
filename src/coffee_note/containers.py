"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import Client, create_client

from coffee_note.adapters.supabase_profile_repository import SupabaseProfileRepository
from coffee_note.adapters.supabase_visit_repository import SupabaseVisitRepository
from coffee_note.adapters.supabase_wishlist_repository import (
    SupabaseWishlistRepository,
)
from coffee_note.config import Settings
from coffee_note.services.geo import MapService
from coffee_note.services.profiles import ProfileService
from coffee_note.services.statistics import StatisticsService
from coffee_note.services.visit_list import VisitListView
from coffee_note.services.visits import VisitService
from coffee_note.services.wishlist import WishlistService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    visit_service: VisitService
    wishlist_service: WishlistService
    statistics_service: StatisticsService
    map_service: MapService

    def close_resources(self) -> None:
        """Stop delivering live updates to remaining listeners."""
        self.visit_service.feed.close()
        self.wishlist_service.feed.close()

    def new_visit_list(self) -> VisitListView:
        """Create a live visit list using the configured debounce."""
        return VisitListView(debounce_seconds=self.settings.list_debounce_seconds)


def build_container(
    settings: Settings | None = None, client: Client | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = client or create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    visit_repository = SupabaseVisitRepository(supabase_client)
    wishlist_repository = SupabaseWishlistRepository(supabase_client)

    profile_service = ProfileService(profile_repository)
    visit_service = VisitService(
        repository=visit_repository,
        profile_service=profile_service,
        free_visit_limit=resolved_settings.free_visit_limit,
    )
    wishlist_service = WishlistService(
        repository=wishlist_repository,
        profile_service=profile_service,
        visit_service=visit_service,
    )
    statistics_service = StatisticsService(
        visit_repository=visit_repository,
        wishlist_repository=wishlist_repository,
    )
    map_service = MapService(
        visit_repository=visit_repository,
        wishlist_repository=wishlist_repository,
        profile_service=profile_service,
    )
    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        visit_service=visit_service,
        wishlist_service=wishlist_service,
        statistics_service=statistics_service,
        map_service=map_service,
    )
