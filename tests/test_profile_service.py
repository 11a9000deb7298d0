"""Tests for profile service."""

import pytest

from coffee_note.domain.models import SubscriptionTier
from coffee_note.errors import NotFoundError, PremiumRequiredError
from coffee_note.services.profiles import ProfileService
from tests.conftest import InMemoryProfileRepository


def test_get_or_create_creates_free_profile() -> None:
    repository = InMemoryProfileRepository()
    service = ProfileService(repository)

    profile = service.get_or_create_profile("uid-1", email="a@example.com")

    assert profile.subscription_tier is SubscriptionTier.FREE
    assert profile.display_name == "a@example.com"
    assert "uid-1" in repository.profiles


def test_get_or_create_returns_existing_profile() -> None:
    repository = InMemoryProfileRepository()
    service = ProfileService(repository)
    first = service.get_or_create_profile("uid-1", email="a@example.com", name="Ana")

    second = service.get_or_create_profile("uid-1", email="other@example.com")

    assert second == first
    assert second.display_name == "Ana"


def test_upgrade_and_downgrade() -> None:
    service = ProfileService(InMemoryProfileRepository())
    service.get_or_create_profile("uid-1", email="a@example.com")

    upgraded = service.upgrade_to_premium("uid-1")
    assert upgraded.is_premium
    assert service.is_premium("uid-1")

    downgraded = service.downgrade_to_free("uid-1")
    assert not downgraded.is_premium


def test_require_premium() -> None:
    service = ProfileService(InMemoryProfileRepository())
    service.get_or_create_profile("uid-1", email="a@example.com")

    with pytest.raises(PremiumRequiredError, match="Map"):
        service.require_premium("uid-1", "Map")

    service.upgrade_to_premium("uid-1")
    service.require_premium("uid-1", "Map")


def test_missing_profile_is_free_tier() -> None:
    service = ProfileService(InMemoryProfileRepository())

    assert service.tier_for("nobody") is SubscriptionTier.FREE
    with pytest.raises(NotFoundError):
        service.upgrade_to_premium("nobody")


def test_update_display_name_and_delete() -> None:
    repository = InMemoryProfileRepository()
    service = ProfileService(repository)
    service.get_or_create_profile("uid-1", email="a@example.com")

    renamed = service.update_display_name("uid-1", "Barista")
    service.delete_profile("uid-1")

    assert renamed.display_name == "Barista"
    assert service.get_profile("uid-1") is None
