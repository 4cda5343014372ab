"""Supabase-backed studio client repository."""

from dataclasses import dataclass

from postgrest.exceptions import APIError
from supabase import Client

from studio_gallery.adapters.supabase_favorite_repository import UNIQUE_VIOLATION
from studio_gallery.adapters.supabase_gallery_repository import parse_timestamp
from studio_gallery.domain.studio_clients import ClientDraft, StudioClient
from studio_gallery.services.studio_clients import (
    DuplicateAccessCodeError,
    StudioClientRepository,
)


@dataclass
class SupabaseStudioClientRepository(StudioClientRepository):
    """Supabase implementation over the `clients` table."""

    client: Client

    def list_clients(self) -> list[StudioClient]:
        response = (
            self.client.table("clients")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [_client_from_row(row) for row in response.data or []]

    def find_by_access_code(self, access_code: str) -> StudioClient | None:
        response = (
            self.client.table("clients")
            .select("*")
            .eq("access_code", access_code)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _client_from_row(response.data[0])

    def create_client(self, draft: ClientDraft, access_code: str) -> StudioClient:
        try:
            response = (
                self.client.table("clients")
                .insert({**_draft_to_row(draft), "access_code": access_code})
                .execute()
            )
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise DuplicateAccessCodeError(access_code) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create client")
        return _client_from_row(response.data[0])

    def update_client(self, client_id: str, draft: ClientDraft) -> StudioClient | None:
        response = (
            self.client.table("clients")
            .update(_draft_to_row(draft))
            .eq("id", client_id)
            .execute()
        )
        if not response.data:
            return None
        return _client_from_row(response.data[0])

    def delete_client(self, client_id: str) -> None:
        self.client.table("clients").delete().eq("id", client_id).execute()


def _draft_to_row(draft: ClientDraft) -> dict[str, object]:
    return {
        "name": draft.name,
        "email": draft.email or None,
        "phone": draft.phone or None,
        "notes": draft.notes or None,
    }


def _client_from_row(row: dict) -> StudioClient:
    return StudioClient(
        id=str(row["id"]),
        name=row["name"],
        access_code=row["access_code"],
        created_at=parse_timestamp(row["created_at"]),
        updated_at=parse_timestamp(row.get("updated_at") or row["created_at"]),
        email=row.get("email"),
        phone=row.get("phone"),
        notes=row.get("notes"),
    )
