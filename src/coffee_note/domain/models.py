"""Domain models for user accounts."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SubscriptionTier(str, Enum):
    """Entitlement level of an account."""

    FREE = "free"
    PREMIUM = "premium"


@dataclass(frozen=True)
class UserProfile:
    """Profile document stored for each account."""

    id: str
    email: str
    subscription_tier: SubscriptionTier
    date_created: datetime
    name: str | None = None

    @property
    def is_premium(self) -> bool:
        return self.subscription_tier is SubscriptionTier.PREMIUM

    @property
    def display_name(self) -> str:
        return self.name or self.email
