"""Gallery management and counters."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol

from studio_gallery.domain.galleries import AdminStats, Gallery, Photo

logger = logging.getLogger(__name__)


class GalleryNotFoundError(Exception):
    """Raised when a gallery is missing or inactive."""


class GalleryOperationError(Exception):
    """Raised when an explicit gallery change fails."""


class GalleryRepository(Protocol):
    """Persistence interface for galleries and photos."""

    def get_gallery(self, gallery_id: str) -> Gallery | None:
        """Return an active gallery without photos, if present."""

    def list_galleries(self) -> list[Gallery]:
        """Return client galleries, newest first, without photos."""

    def list_photos(self, gallery_id: str) -> list[Photo]:
        """Return the photos of a gallery ordered by upload date."""

    def upsert_gallery(self, gallery: Gallery) -> None:
        """Create or replace a gallery row."""

    def delete_gallery(self, gallery_id: str) -> None:
        """Delete a gallery row."""

    def insert_photos(self, gallery_id: str, photos: list[Photo]) -> None:
        """Insert photo rows for a gallery."""

    def delete_photo(self, photo_id: str) -> None:
        """Delete a photo row."""

    def increment_access_count(self, gallery_id: str) -> None:
        """Increment the gallery view counter."""

    def increment_download_count(self, gallery_id: str) -> None:
        """Increment the gallery download counter."""

    def gallery_counters(self) -> list[dict[str, object]]:
        """Return per-gallery counters used for admin stats."""

    def list_client_galleries(self, client_id: str) -> list[Gallery]:
        """Return galleries linked to a studio client, newest first."""

    def set_gallery_client(self, gallery_id: str, client_id: str | None) -> None:
        """Link a gallery to a studio client, or unlink it with None."""


@dataclass
class GalleryService:
    """Application service for gallery lifecycle actions."""

    repository: GalleryRepository

    def get_gallery(self, gallery_id: str) -> Gallery | None:
        """Return an active gallery with its photos loaded."""
        try:
            gallery = self.repository.get_gallery(gallery_id)
            if gallery is None:
                logger.info("Gallery not found", extra={"gallery_id": gallery_id})
                return None
            photos = self.repository.list_photos(gallery_id)
        except Exception:
            logger.exception("Failed to load gallery", extra={"gallery_id": gallery_id})
            return None
        return _with_photos(gallery, photos)

    def require_gallery(self, gallery_id: str) -> Gallery:
        """Return an active gallery or raise GalleryNotFoundError."""
        gallery = self.get_gallery(gallery_id)
        if gallery is None or not gallery.is_active:
            raise GalleryNotFoundError(gallery_id)
        return gallery

    def list_galleries(self) -> list[Gallery]:
        """Return all galleries with photos, or an empty list on failure."""
        try:
            galleries = self.repository.list_galleries()
            return [
                _with_photos(gallery, self.repository.list_photos(gallery.id))
                for gallery in galleries
            ]
        except Exception:
            logger.exception("Failed to load galleries")
            return []

    def save_gallery(self, gallery: Gallery) -> None:
        """Create or update a gallery."""
        try:
            self.repository.upsert_gallery(gallery)
        except Exception as exc:
            logger.exception("Failed to save gallery", extra={"gallery_id": gallery.id})
            raise GalleryOperationError("Failed to save gallery") from exc

    def delete_gallery(self, gallery_id: str) -> None:
        """Delete a gallery."""
        try:
            self.repository.delete_gallery(gallery_id)
        except Exception as exc:
            logger.exception(
                "Failed to delete gallery", extra={"gallery_id": gallery_id}
            )
            raise GalleryOperationError("Failed to delete gallery") from exc

    def add_photos(self, gallery_id: str, photos: list[Photo]) -> None:
        """Attach photos to a gallery."""
        if not photos:
            return
        try:
            self.repository.insert_photos(gallery_id, photos)
        except Exception as exc:
            logger.exception("Failed to add photos", extra={"gallery_id": gallery_id})
            raise GalleryOperationError("Failed to add photos") from exc

    def delete_photo(self, photo_id: str) -> None:
        """Delete a photo."""
        try:
            self.repository.delete_photo(photo_id)
        except Exception as exc:
            logger.exception("Failed to delete photo", extra={"photo_id": photo_id})
            raise GalleryOperationError("Failed to delete photo") from exc

    def increment_access_count(self, gallery_id: str) -> None:
        """Best-effort view counter increment."""
        try:
            self.repository.increment_access_count(gallery_id)
        except Exception:
            logger.exception(
                "Failed to increment access count", extra={"gallery_id": gallery_id}
            )

    def increment_download_count(self, gallery_id: str) -> None:
        """Best-effort download counter increment."""
        try:
            self.repository.increment_download_count(gallery_id)
        except Exception:
            logger.exception(
                "Failed to increment download count", extra={"gallery_id": gallery_id}
            )

    def client_galleries(self, client_id: str) -> list[Gallery]:
        """Return a studio client's galleries with photos, or [] on failure."""
        try:
            galleries = self.repository.list_client_galleries(client_id)
            return [
                _with_photos(gallery, self.repository.list_photos(gallery.id))
                for gallery in galleries
            ]
        except Exception:
            logger.exception(
                "Failed to load client galleries", extra={"client_id": client_id}
            )
            return []

    def link_client(self, gallery_id: str, client_id: str | None) -> None:
        """Assign a gallery to a studio client; None removes the link."""
        try:
            self.repository.set_gallery_client(gallery_id, client_id)
        except Exception as exc:
            logger.exception(
                "Failed to link gallery to client",
                extra={"gallery_id": gallery_id, "client_id": client_id},
            )
            raise GalleryOperationError("Failed to link gallery to client") from exc

    def admin_stats(self) -> AdminStats:
        """Return aggregate counters, or zeroed stats when unavailable."""
        try:
            rows = self.repository.gallery_counters()
        except Exception:
            logger.warning("Failed to load gallery counters", exc_info=True)
            return AdminStats()
        return AdminStats(
            total_galleries=len(rows),
            total_photos=sum(int(row.get("photo_count", 0) or 0) for row in rows),
            total_views=sum(int(row.get("access_count", 0) or 0) for row in rows),
            total_downloads=sum(int(row.get("download_count", 0) or 0) for row in rows),
            active_galleries=sum(1 for row in rows if row.get("is_active")),
        )


def _with_photos(gallery: Gallery, photos: list[Photo]) -> Gallery:
    return replace(gallery, photos=tuple(photos))
