"""Supabase-backed gallery repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from studio_gallery.domain.galleries import Gallery, GallerySettings, Photo
from studio_gallery.services.galleries import GalleryRepository

_GALLERY_COLUMNS = (
    "id, name, client_name, description, cover_photo_id, created_date, "
    "expiration_date, password, access_count, download_count, is_active, "
    "event_date, location, client_id, settings"
)
_PHOTO_COLUMNS = (
    "id, url, thumbnail, filename, photo_code, size, upload_date, r2_key, "
    "thumbnail_r2_key, metadata"
)


@dataclass
class SupabaseGalleryRepository(GalleryRepository):
    """Supabase implementation for galleries and photos."""

    client: Client

    def get_gallery(self, gallery_id: str) -> Gallery | None:
        """Return an active gallery row, if present."""
        response = (
            self.client.table("galleries")
            .select(_GALLERY_COLUMNS)
            .eq("id", gallery_id)
            .eq("is_active", True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _gallery_from_row(response.data[0])

    def list_galleries(self) -> list[Gallery]:
        """Return client galleries, newest first."""
        response = (
            self.client.table("galleries")
            .select(_GALLERY_COLUMNS)
            .eq("gallery_type", "client")
            .order("created_date", desc=True)
            .execute()
        )
        return [_gallery_from_row(row) for row in response.data or []]

    def list_photos(self, gallery_id: str) -> list[Photo]:
        """Return photos for a gallery ordered by upload date."""
        response = (
            self.client.table("photos")
            .select(_PHOTO_COLUMNS)
            .eq("gallery_id", gallery_id)
            .order("upload_date")
            .execute()
        )
        return [photo_from_row(row) for row in response.data or []]

    def upsert_gallery(self, gallery: Gallery) -> None:
        """Create or replace a gallery row."""
        self.client.table("galleries").upsert(_gallery_to_row(gallery)).execute()

    def delete_gallery(self, gallery_id: str) -> None:
        """Delete a gallery row."""
        self.client.table("galleries").delete().eq("id", gallery_id).execute()

    def insert_photos(self, gallery_id: str, photos: list[Photo]) -> None:
        """Insert photo rows for a gallery."""
        self.client.table("photos").insert(
            [_photo_to_row(gallery_id, photo) for photo in photos]
        ).execute()

    def delete_photo(self, photo_id: str) -> None:
        """Delete a photo row."""
        self.client.table("photos").delete().eq("id", photo_id).execute()

    def increment_access_count(self, gallery_id: str) -> None:
        """Increment the view counter through a database function."""
        self.client.rpc("increment_access_count", {"gallery_id": gallery_id}).execute()

    def increment_download_count(self, gallery_id: str) -> None:
        """Increment the download counter through a database function."""
        self.client.rpc(
            "increment_download_count", {"gallery_id": gallery_id}
        ).execute()

    def list_client_galleries(self, client_id: str) -> list[Gallery]:
        """Return galleries linked to a studio client, newest first."""
        response = (
            self.client.table("galleries")
            .select(_GALLERY_COLUMNS)
            .eq("client_id", client_id)
            .order("created_date", desc=True)
            .execute()
        )
        return [_gallery_from_row(row) for row in response.data or []]

    def set_gallery_client(self, gallery_id: str, client_id: str | None) -> None:
        """Link a gallery to a studio client, or unlink it with None."""
        self.client.table("galleries").update({"client_id": client_id}).eq(
            "id", gallery_id
        ).execute()

    def gallery_counters(self) -> list[dict[str, object]]:
        """Return per-gallery counters with photo counts."""
        response = (
            self.client.table("galleries")
            .select("id, access_count, download_count, is_active, photos (id)")
            .execute()
        )
        return [
            {
                "id": row["id"],
                "access_count": row.get("access_count") or 0,
                "download_count": row.get("download_count") or 0,
                "is_active": bool(row.get("is_active")),
                "photo_count": len(row.get("photos") or []),
            }
            for row in response.data or []
        ]


def parse_timestamp(value: object) -> datetime:
    parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        # Columns without a time zone hold UTC.
        return parsed.replace(tzinfo=UTC)
    return parsed


def parse_optional_timestamp(value: object) -> datetime | None:
    if not value:
        return None
    return parse_timestamp(value)


def _gallery_from_row(row: dict) -> Gallery:
    settings = row.get("settings") or {}
    return Gallery(
        id=str(row["id"]),
        name=row["name"],
        client_name=row.get("client_name") or "",
        description=row.get("description"),
        cover_photo_id=row.get("cover_photo_id"),
        created_date=parse_timestamp(row["created_date"]),
        expiration_date=parse_optional_timestamp(row.get("expiration_date")),
        password=row.get("password") or None,
        access_count=int(row.get("access_count") or 0),
        download_count=int(row.get("download_count") or 0),
        is_active=bool(row.get("is_active", True)),
        event_date=parse_optional_timestamp(row.get("event_date")),
        location=row.get("location"),
        client_id=row.get("client_id"),
        settings=GallerySettings(
            allow_download=bool(settings.get("allowDownload", True)),
            allow_comments=bool(settings.get("allowComments", False)),
            watermark=bool(settings.get("watermark", False)),
            max_downloads=settings.get("maxDownloads"),
            download_quality=settings.get("downloadQuality", "web"),
        ),
    )


def _gallery_to_row(gallery: Gallery) -> dict[str, object]:
    return {
        "id": gallery.id,
        "name": gallery.name,
        "client_name": gallery.client_name,
        "description": gallery.description,
        "cover_photo_id": gallery.cover_photo_id,
        "created_date": gallery.created_date.isoformat(),
        "expiration_date": (
            gallery.expiration_date.isoformat() if gallery.expiration_date else None
        ),
        "password": gallery.password,
        "access_count": gallery.access_count,
        "download_count": gallery.download_count,
        "is_active": gallery.is_active,
        "event_date": gallery.event_date.isoformat() if gallery.event_date else None,
        "location": gallery.location,
        "client_id": gallery.client_id,
        "gallery_type": "client",
        "settings": {
            "allowDownload": gallery.settings.allow_download,
            "allowComments": gallery.settings.allow_comments,
            "watermark": gallery.settings.watermark,
            "maxDownloads": gallery.settings.max_downloads,
            "downloadQuality": gallery.settings.download_quality,
        },
    }


def photo_from_row(row: dict) -> Photo:
    return Photo(
        id=str(row["id"]),
        url=row["url"],
        thumbnail=row.get("thumbnail") or row["url"],
        filename=row["filename"],
        size=int(row.get("size") or 0),
        upload_date=parse_timestamp(row["upload_date"]),
        photo_code=row.get("photo_code"),
        r2_key=row.get("r2_key"),
        thumbnail_r2_key=row.get("thumbnail_r2_key"),
        metadata=row.get("metadata") or {},
    )


def _photo_to_row(gallery_id: str, photo: Photo) -> dict[str, object]:
    return {
        "id": photo.id,
        "gallery_id": gallery_id,
        "url": photo.url,
        "thumbnail": photo.thumbnail,
        "filename": photo.filename,
        "photo_code": photo.photo_code,
        "size": photo.size,
        "upload_date": photo.upload_date.isoformat(),
        "r2_key": photo.r2_key,
        "thumbnail_r2_key": photo.thumbnail_r2_key,
        "metadata": photo.metadata,
    }
