"""Supabase repository for wishlist entries."""

import logging
from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from coffee_note.domain.visits import WishlistEntry
from coffee_note.services.wishlist import WishlistRepository

_TABLE = "wishlist"

logger = logging.getLogger(__name__)


@dataclass
class SupabaseWishlistRepository(WishlistRepository):
    """Supabase implementation for wishlist persistence."""

    client: Client

    def list_entries(self, user_id: str) -> list[WishlistEntry]:
        """Return wishlist entries for a user."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("date_added", desc=True)
            .execute()
        )
        entries = []
        for row in response.data or []:
            entry = _parse_entry(row)
            if entry is not None:
                entries.append(entry)
        return entries

    def get_entry(self, user_id: str, entry_id: str) -> WishlistEntry | None:
        """Return a wishlist entry by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("id", entry_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def save_entry(self, entry: WishlistEntry) -> WishlistEntry:
        """Upsert the full wishlist row."""
        response = (
            self.client.table(_TABLE)
            .upsert(
                {
                    "id": entry.id,
                    "user_id": entry.user_id,
                    "shop_name": entry.shop_name,
                    "address": entry.address,
                    "latitude": entry.latitude,
                    "longitude": entry.longitude,
                    "notes": entry.notes,
                    "date_added": entry.date_added.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save wishlist entry in Supabase")
        return _parse_entry(response.data[0]) or entry

    def delete_entry(self, user_id: str, entry_id: str) -> None:
        """Delete a wishlist row."""
        self.client.table(_TABLE).delete().eq("user_id", user_id).eq(
            "id", entry_id
        ).execute()


def _parse_entry(row: dict[str, object]) -> WishlistEntry | None:
    try:
        return WishlistEntry(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            shop_name=str(row["shop_name"]),
            address=str(row["address"]),
            latitude=float(row["latitude"]),
            longitude=float(row["longitude"]),
            notes=row.get("notes"),
            date_added=datetime.fromisoformat(str(row["date_added"])),
        )
    except (KeyError, TypeError, ValueError):
        logger.warning("Skipping malformed wishlist row %s", row.get("id"))
        return None
