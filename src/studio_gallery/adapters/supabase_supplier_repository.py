"""Supabase-backed supplier and photo tag repository."""

from dataclasses import dataclass

from postgrest.exceptions import APIError
from supabase import Client

from studio_gallery.adapters.supabase_favorite_repository import UNIQUE_VIOLATION
from studio_gallery.adapters.supabase_gallery_repository import (
    parse_optional_timestamp,
    parse_timestamp,
    photo_from_row,
)
from studio_gallery.domain.suppliers import (
    PhotoSupplierTag,
    Supplier,
    SupplierDraft,
    SupplierPhoto,
    TaggedGallery,
)
from studio_gallery.services.suppliers import DuplicateTagError, SupplierRepository

_SUPPLIER_PHOTO_COLUMNS = (
    "gallery_id, tagged_at, photos(*), galleries(id, name, client_name)"
)


@dataclass
class SupabaseSupplierRepository(SupplierRepository):
    """Supabase implementation over `suppliers` and `photo_suppliers`."""

    client: Client

    def list_suppliers(self) -> list[Supplier]:
        response = self.client.table("suppliers").select("*").order("name").execute()
        return [_supplier_from_row(row) for row in response.data or []]

    def get_supplier(self, supplier_id: str) -> Supplier | None:
        response = (
            self.client.table("suppliers")
            .select("*")
            .eq("id", supplier_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _supplier_from_row(response.data[0])

    def create_supplier(self, draft: SupplierDraft) -> Supplier:
        response = (
            self.client.table("suppliers").insert(_draft_to_row(draft)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create supplier")
        return _supplier_from_row(response.data[0])

    def update_supplier(
        self, supplier_id: str, draft: SupplierDraft
    ) -> Supplier | None:
        response = (
            self.client.table("suppliers")
            .update(_draft_to_row(draft))
            .eq("id", supplier_id)
            .execute()
        )
        if not response.data:
            return None
        return _supplier_from_row(response.data[0])

    def delete_supplier(self, supplier_id: str) -> None:
        self.client.table("suppliers").delete().eq("id", supplier_id).execute()

    def create_tag(
        self, photo_id: str, supplier_id: str, gallery_id: str
    ) -> PhotoSupplierTag:
        try:
            response = (
                self.client.table("photo_suppliers")
                .insert(
                    {
                        "photo_id": photo_id,
                        "supplier_id": supplier_id,
                        "gallery_id": gallery_id,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise DuplicateTagError(photo_id) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to tag photo")
        row = response.data[0]
        return PhotoSupplierTag(
            id=str(row["id"]),
            photo_id=str(row["photo_id"]),
            supplier_id=str(row["supplier_id"]),
            gallery_id=str(row["gallery_id"]),
            tagged_at=parse_timestamp(row["tagged_at"]),
        )

    def delete_tag(self, photo_id: str, supplier_id: str) -> None:
        self.client.table("photo_suppliers").delete().eq("photo_id", photo_id).eq(
            "supplier_id", supplier_id
        ).execute()

    def list_photo_suppliers(self, photo_id: str) -> list[Supplier]:
        response = (
            self.client.table("photo_suppliers")
            .select("supplier_id, suppliers(*)")
            .eq("photo_id", photo_id)
            .execute()
        )
        return [
            _supplier_from_row(row["suppliers"])
            for row in response.data or []
            if row.get("suppliers")
        ]

    def list_supplier_photos(self, supplier_id: str) -> list[SupplierPhoto]:
        response = (
            self.client.table("photo_suppliers")
            .select(_SUPPLIER_PHOTO_COLUMNS)
            .eq("supplier_id", supplier_id)
            .order("tagged_at", desc=True)
            .execute()
        )
        photos = []
        for row in response.data or []:
            if not row.get("photos"):
                continue
            gallery = row.get("galleries") or {}
            photos.append(
                SupplierPhoto(
                    photo=photo_from_row(row["photos"]),
                    gallery_id=str(row["gallery_id"]),
                    gallery_name=gallery.get("name") or "",
                    client_name=gallery.get("client_name") or "",
                    tagged_at=parse_timestamp(row["tagged_at"]),
                )
            )
        return photos

    def list_tagged_galleries(self, supplier_id: str) -> list[TaggedGallery]:
        response = (
            self.client.table("photo_suppliers")
            .select("gallery_id, galleries(id, name, client_name, created_date)")
            .eq("supplier_id", supplier_id)
            .execute()
        )
        return [
            TaggedGallery(
                gallery_id=str(row["gallery_id"]),
                name=row["galleries"].get("name") or "",
                client_name=row["galleries"].get("client_name") or "",
                created_date=parse_optional_timestamp(
                    row["galleries"].get("created_date")
                ),
            )
            for row in response.data or []
            if row.get("galleries")
        ]


def _draft_to_row(draft: SupplierDraft) -> dict[str, object]:
    return {
        "name": draft.name,
        "email": draft.email,
        "phone": draft.phone,
        "category": draft.category,
    }


def _supplier_from_row(row: dict) -> Supplier:
    return Supplier(
        id=str(row["id"]),
        name=row["name"],
        email=row.get("email") or "",
        category=row.get("category") or "outros",
        created_at=parse_timestamp(row["created_at"]),
        updated_at=parse_timestamp(row.get("updated_at") or row["created_at"]),
        phone=row.get("phone"),
        gallery_id=row.get("gallery_id"),
        access_code=row.get("access_code"),
    )
