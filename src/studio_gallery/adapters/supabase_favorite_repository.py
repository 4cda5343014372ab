"""Supabase-backed favorites repository."""

from dataclasses import dataclass

from postgrest.exceptions import APIError
from supabase import Client

from studio_gallery.adapters.supabase_gallery_repository import parse_optional_timestamp
from studio_gallery.domain.sessions import FavoriteRecord
from studio_gallery.services.favorites import DuplicateFavoriteError, FavoriteRepository

UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseFavoriteRepository(FavoriteRepository):
    """Supabase implementation for favorite rows."""

    client: Client

    def create_favorite(self, record: FavoriteRecord) -> FavoriteRecord:
        """Insert a favorite row and return it."""
        try:
            response = (
                self.client.table("favorites")
                .insert(
                    {
                        "photo_id": record.photo_id,
                        "gallery_id": record.gallery_id,
                        "session_id": record.session_id,
                        "client_id": record.client_id,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise DuplicateFavoriteError(record.photo_id) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create favorite")
        return _to_record(response.data[0])

    def delete_favorite(self, photo_id: str, session_id: str) -> None:
        """Delete the favorite matching photo and session."""
        self.client.table("favorites").delete().eq("photo_id", photo_id).eq(
            "session_id", session_id
        ).execute()

    def list_favorite_photo_ids(self, gallery_id: str, session_id: str) -> list[str]:
        """Return favorited photo ids for a gallery session partition."""
        response = (
            self.client.table("favorites")
            .select("photo_id")
            .eq("gallery_id", gallery_id)
            .eq("session_id", session_id)
            .execute()
        )
        return [str(row["photo_id"]) for row in response.data or []]

    def find_favorite(self, photo_id: str, session_id: str) -> FavoriteRecord | None:
        """Return the favorite row for a photo and session, if present."""
        response = (
            self.client.table("favorites")
            .select("id, photo_id, gallery_id, session_id, client_id, created_at")
            .eq("photo_id", photo_id)
            .eq("session_id", session_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_record(response.data[0])


def _to_record(row: dict) -> FavoriteRecord:
    return FavoriteRecord(
        id=str(row["id"]) if row.get("id") else None,
        photo_id=str(row["photo_id"]),
        gallery_id=str(row["gallery_id"]),
        session_id=str(row["session_id"]),
        client_id=row.get("client_id"),
        created_at=parse_optional_timestamp(row.get("created_at")),
    )
