"""Supabase repository for visits."""

import logging
from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from coffee_note.domain.visits import Visit
from coffee_note.services.visits import VisitRepository

_TABLE = "visits"

logger = logging.getLogger(__name__)


@dataclass
class SupabaseVisitRepository(VisitRepository):
    """Supabase implementation for visit persistence."""

    client: Client

    def list_visits(self, user_id: str) -> list[Visit]:
        """Return all visits for a user."""
        response = (
            self.client.table(_TABLE).select("*").eq("user_id", user_id).execute()
        )
        visits = []
        for row in response.data or []:
            visit = _parse_visit(row)
            if visit is not None:
                visits.append(visit)
        return visits

    def get_visit(self, user_id: str, visit_id: str) -> Visit | None:
        """Return a visit by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("id", visit_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_visit(response.data[0])

    def save_visit(self, visit: Visit) -> Visit:
        """Upsert the full visit row."""
        response = self.client.table(_TABLE).upsert(_serialize_visit(visit)).execute()
        if not response.data:
            raise RuntimeError("Failed to save visit in Supabase")
        saved = _parse_visit(response.data[0])
        return saved or visit

    def delete_visit(self, user_id: str, visit_id: str) -> None:
        """Delete a visit row."""
        self.client.table(_TABLE).delete().eq("user_id", user_id).eq(
            "id", visit_id
        ).execute()

    def count_visits(self, user_id: str) -> int:
        """Return the number of visits for a user."""
        response = (
            self.client.table(_TABLE).select("id").eq("user_id", user_id).execute()
        )
        return len(response.data or [])


def _serialize_visit(visit: Visit) -> dict[str, object]:
    return {
        "id": visit.id,
        "user_id": visit.user_id,
        "shop_name": visit.shop_name,
        "address": visit.address,
        "latitude": visit.latitude,
        "longitude": visit.longitude,
        "place_id": visit.place_id,
        "items_ordered": list(visit.items_ordered),
        "rating": visit.rating,
        "price": visit.price,
        "notes": visit.notes,
        "date_visited": visit.date_visited.isoformat(),
        "photo_url": visit.photo_url,
    }


def _parse_visit(row: dict[str, object]) -> Visit | None:
    try:
        return Visit(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            shop_name=str(row["shop_name"]),
            address=str(row["address"]),
            latitude=float(row["latitude"]),
            longitude=float(row["longitude"]),
            place_id=row.get("place_id"),
            items_ordered=[str(item) for item in row.get("items_ordered") or []],
            rating=float(row["rating"]),
            price=float(row["price"]),
            notes=row.get("notes"),
            date_visited=datetime.fromisoformat(str(row["date_visited"])),
            photo_url=row.get("photo_url"),
        )
    except (KeyError, TypeError, ValueError):
        logger.warning("Skipping malformed visit row %s", row.get("id"))
        return None
