"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from coffee_note.domain.models import SubscriptionTier, UserProfile
from coffee_note.services.profiles import ProfileRepository

_TABLE = "user_profiles"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the profile for an account, if present."""
        response = (
            self.client.table(_TABLE)
            .select("id, email, name, subscription_tier, date_created")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def save_profile(self, profile: UserProfile) -> UserProfile:
        """Upsert a profile row and return it."""
        response = (
            self.client.table(_TABLE)
            .upsert(
                {
                    "id": profile.id,
                    "email": profile.email,
                    "name": profile.name,
                    "subscription_tier": profile.subscription_tier.value,
                    "date_created": profile.date_created.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save user profile in Supabase")
        return _parse_profile(response.data[0])

    def update_name(self, user_id: str, name: str) -> None:
        """Update the display name."""
        self.client.table(_TABLE).update({"name": name}).eq("id", user_id).execute()

    def update_tier(self, user_id: str, tier: SubscriptionTier) -> None:
        """Update the subscription tier."""
        self.client.table(_TABLE).update({"subscription_tier": tier.value}).eq(
            "id", user_id
        ).execute()

    def delete_profile(self, user_id: str) -> None:
        """Delete the profile row."""
        self.client.table(_TABLE).delete().eq("id", user_id).execute()


def _parse_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        id=str(row["id"]),
        email=str(row.get("email", "")),
        name=row.get("name"),
        subscription_tier=SubscriptionTier(row.get("subscription_tier") or "free"),
        date_created=datetime.fromisoformat(str(row["date_created"])),
    )
