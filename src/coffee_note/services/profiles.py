"""User profile and entitlement logic."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from coffee_note.domain.models import SubscriptionTier, UserProfile
from coffee_note.errors import NotFoundError, PremiumRequiredError

logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the profile for an account, if present."""

    def save_profile(self, profile: UserProfile) -> UserProfile:
        """Create or replace a profile and return it."""

    def update_name(self, user_id: str, name: str) -> None:
        """Update the display name for an account."""

    def update_tier(self, user_id: str, tier: SubscriptionTier) -> None:
        """Update the subscription tier for an account."""

    def delete_profile(self, user_id: str) -> None:
        """Delete the profile for an account."""


@dataclass
class ProfileService:
    """Application service for profiles and subscription tiers."""

    repository: ProfileRepository

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the user's profile, if present."""
        return self.repository.get_profile(user_id)

    def get_or_create_profile(
        self, user_id: str, email: str, name: str | None = None
    ) -> UserProfile:
        """Return the existing profile or create a free-tier one."""
        existing = self.repository.get_profile(user_id)
        if existing:
            return existing
        profile = UserProfile(
            id=user_id,
            email=email,
            name=name,
            subscription_tier=SubscriptionTier.FREE,
            date_created=datetime.now(tz=UTC),
        )
        created = self.repository.save_profile(profile)
        logger.info("Created profile for user %s", user_id)
        return created

    def update_display_name(self, user_id: str, name: str) -> UserProfile:
        """Set the display name and return the refreshed profile."""
        self._require_profile(user_id)
        self.repository.update_name(user_id, name)
        return self._require_profile(user_id)

    def upgrade_to_premium(self, user_id: str) -> UserProfile:
        """Move the account to the premium tier."""
        return self._set_tier(user_id, SubscriptionTier.PREMIUM)

    def downgrade_to_free(self, user_id: str) -> UserProfile:
        """Move the account to the free tier."""
        return self._set_tier(user_id, SubscriptionTier.FREE)

    def tier_for(self, user_id: str) -> SubscriptionTier:
        """Return the account tier; accounts without a profile are free."""
        profile = self.repository.get_profile(user_id)
        return profile.subscription_tier if profile else SubscriptionTier.FREE

    def is_premium(self, user_id: str) -> bool:
        """Return True when the account has premium access."""
        return self.tier_for(user_id) is SubscriptionTier.PREMIUM

    def require_premium(self, user_id: str, feature: str) -> None:
        """Raise PremiumRequiredError unless the account is premium."""
        if not self.is_premium(user_id):
            raise PremiumRequiredError(f"{feature} is a Premium feature")

    def delete_profile(self, user_id: str) -> None:
        """Delete the user's profile."""
        self.repository.delete_profile(user_id)
        logger.info("Deleted profile for user %s", user_id)

    def _set_tier(self, user_id: str, tier: SubscriptionTier) -> UserProfile:
        self._require_profile(user_id)
        self.repository.update_tier(user_id, tier)
        logger.info("Subscription tier for user %s set to %s", user_id, tier.value)
        return self._require_profile(user_id)

    def _require_profile(self, user_id: str) -> UserProfile:
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise NotFoundError(f"Profile {user_id} not found")
        return profile
