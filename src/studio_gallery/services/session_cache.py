"""Local cache for gallery sessions and access grants."""

import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from studio_gallery.domain.sessions import AccessGrant, GallerySession, unique_ids
from studio_gallery.services.storage import KeyValueStore

logger = logging.getLogger(__name__)

SESSION_SCHEMA_VERSION = 2


def session_key(gallery_id: str) -> str:
    return f"gallery_session_{gallery_id}"


def access_key(gallery_id: str) -> str:
    return f"gallery_access_{gallery_id}"


class SessionCacheRecord(BaseModel):
    """Serialized form of a gallery session."""

    model_config = ConfigDict(populate_by_name=True)

    schema_version: int = Field(alias="schemaVersion")
    gallery_id: str = Field(alias="galleryId")
    accessed_at: datetime = Field(alias="accessedAt")
    favorites: list[str] = Field(default_factory=list)
    selected_photos: list[str] = Field(default_factory=list, alias="selectedPhotos")
    print_cart: list[str] = Field(default_factory=list, alias="printCart")
    downloads: int = 0


class AccessGrantRecord(BaseModel):
    """Serialized form of an access grant."""

    timestamp: datetime


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def migrate_session_record(raw: dict[str, object]) -> dict[str, object]:
    """Upgrade an older persisted record to the current schema."""
    migrated = dict(raw)
    version = migrated.get("schemaVersion", 1)
    if version == 1:
        # Version 1 records predate the print cart and download counter.
        migrated.setdefault("printCart", [])
        migrated.setdefault("selectedPhotos", [])
        migrated.setdefault("favorites", [])
        migrated.setdefault("downloads", 0)
        migrated["schemaVersion"] = SESSION_SCHEMA_VERSION
    return migrated


@dataclass
class SessionCache:
    """Reads and writes whole session records in a key-value store."""

    store: KeyValueStore

    def load_session(self, gallery_id: str) -> GallerySession | None:
        """Return the cached session for a gallery, if readable."""
        raw = self.store.get(session_key(gallery_id))
        if raw is None:
            return None
        try:
            payload = json.loads(raw)
            if not isinstance(payload, dict):
                raise ValueError("session record is not an object")
            record = SessionCacheRecord.model_validate(migrate_session_record(payload))
        except (ValueError, ValidationError):
            logger.warning(
                "Discarding unreadable session record",
                extra={"gallery_id": gallery_id},
            )
            return None
        if record.schema_version != SESSION_SCHEMA_VERSION:
            logger.warning(
                "Discarding session record with unknown schema version",
                extra={"gallery_id": gallery_id, "version": record.schema_version},
            )
            return None
        return GallerySession(
            gallery_id=record.gallery_id,
            accessed_at=_as_utc(record.accessed_at),
            favorites=unique_ids(record.favorites),
            selected_photos=unique_ids(record.selected_photos),
            print_cart=unique_ids(record.print_cart),
            downloads=max(record.downloads, 0),
        )

    def save_session(self, session: GallerySession) -> None:
        """Overwrite the cached record for the session's gallery."""
        record = SessionCacheRecord(
            schema_version=SESSION_SCHEMA_VERSION,
            gallery_id=session.gallery_id,
            accessed_at=session.accessed_at,
            favorites=list(session.favorites),
            selected_photos=list(session.selected_photos),
            print_cart=list(session.print_cart),
            downloads=session.downloads,
        )
        self.store.set(
            session_key(session.gallery_id),
            record.model_dump_json(by_alias=True),
        )

    def delete_session(self, gallery_id: str) -> None:
        self.store.delete(session_key(gallery_id))

    def load_access_grant(self, gallery_id: str) -> AccessGrant | None:
        """Return the stored access grant, if readable."""
        raw = self.store.get(access_key(gallery_id))
        if raw is None:
            return None
        try:
            record = AccessGrantRecord.model_validate_json(raw)
        except ValidationError:
            logger.warning(
                "Discarding unreadable access grant",
                extra={"gallery_id": gallery_id},
            )
            return None
        return AccessGrant(
            gallery_id=gallery_id, timestamp=_as_utc(record.timestamp)
        )

    def save_access_grant(self, grant: AccessGrant) -> None:
        record = AccessGrantRecord(timestamp=grant.timestamp)
        self.store.set(access_key(grant.gallery_id), record.model_dump_json())

    def delete_access_grant(self, gallery_id: str) -> None:
        self.store.delete(access_key(gallery_id))
