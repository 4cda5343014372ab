"""Remote favorites store client."""

import logging
from dataclasses import dataclass
from typing import Protocol

from studio_gallery.domain.sessions import FavoriteRecord

logger = logging.getLogger(__name__)


class DuplicateFavoriteError(Exception):
    """Raised when a favorite already exists for the photo and session."""


class FavoriteRepository(Protocol):
    """Persistence interface for favorite rows."""

    def create_favorite(self, record: FavoriteRecord) -> FavoriteRecord:
        """Insert a favorite row and return it."""

    def delete_favorite(self, photo_id: str, session_id: str) -> None:
        """Delete the favorite matching photo and session, if any."""

    def list_favorite_photo_ids(self, gallery_id: str, session_id: str) -> list[str]:
        """Return favorited photo ids for a gallery session partition."""

    def find_favorite(self, photo_id: str, session_id: str) -> FavoriteRecord | None:
        """Return the favorite row for a photo and session, if present."""


@dataclass
class FavoriteService:
    """Favorite operations that never raise past this boundary."""

    repository: FavoriteRepository

    def add(
        self,
        photo_id: str,
        gallery_id: str,
        session_id: str,
        client_id: str | None = None,
    ) -> bool:
        """Record a favorite; an existing favorite counts as success."""
        record = FavoriteRecord(
            photo_id=photo_id,
            gallery_id=gallery_id,
            session_id=session_id,
            client_id=client_id,
        )
        try:
            self.repository.create_favorite(record)
        except DuplicateFavoriteError:
            logger.info(
                "Photo already favorited",
                extra={"photo_id": photo_id, "session_id": session_id},
            )
            return True
        except Exception:
            logger.exception(
                "Failed to add favorite",
                extra={"photo_id": photo_id, "session_id": session_id},
            )
            return False
        return True

    def remove(self, photo_id: str, session_id: str) -> bool:
        """Delete a favorite; a missing row is not an error."""
        try:
            self.repository.delete_favorite(photo_id, session_id)
        except Exception:
            logger.exception(
                "Failed to remove favorite",
                extra={"photo_id": photo_id, "session_id": session_id},
            )
            return False
        return True

    def list(self, gallery_id: str, session_id: str) -> frozenset[str]:
        """Return favorited photo ids, or an empty set when the fetch fails."""
        try:
            photo_ids = self.repository.list_favorite_photo_ids(gallery_id, session_id)
        except Exception:
            logger.exception(
                "Failed to fetch favorites",
                extra={"gallery_id": gallery_id, "session_id": session_id},
            )
            return frozenset()
        return frozenset(photo_ids)

    def is_favorite(self, photo_id: str, session_id: str) -> bool:
        """Return True when a favorite row exists for the photo."""
        try:
            return self.repository.find_favorite(photo_id, session_id) is not None
        except Exception:
            logger.exception(
                "Failed to check favorite",
                extra={"photo_id": photo_id, "session_id": session_id},
            )
            return False
