"""Domain models for galleries and photos."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

DownloadQuality = Literal["web", "print", "original"]


@dataclass(frozen=True)
class GallerySettings:
    """Client-facing options for a gallery."""

    allow_download: bool = True
    allow_comments: bool = False
    watermark: bool = False
    max_downloads: int | None = None
    download_quality: DownloadQuality = "web"


@dataclass(frozen=True)
class Photo:
    """Represents a photo stored in a gallery."""

    id: str
    url: str
    thumbnail: str
    filename: str
    size: int
    upload_date: datetime
    photo_code: str | None = None
    r2_key: str | None = None
    thumbnail_r2_key: str | None = None
    metadata: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class Gallery:
    """A client gallery, optionally password protected and expiring."""

    id: str
    name: str
    client_name: str
    created_date: datetime
    description: str | None = None
    cover_photo_id: str | None = None
    expiration_date: datetime | None = None
    password: str | None = None
    event_date: datetime | None = None
    location: str | None = None
    client_id: str | None = None
    access_count: int = 0
    download_count: int = 0
    is_active: bool = True
    settings: GallerySettings = field(default_factory=GallerySettings)
    photos: tuple[Photo, ...] = ()

    @property
    def requires_password(self) -> bool:
        """Return True when a non-empty password is configured."""
        return bool(self.password)

    def is_expired(self, now: datetime) -> bool:
        """Return True once the expiration date has passed."""
        return self.expiration_date is not None and self.expiration_date < now

    def days_until_expiration(self, now: datetime) -> int | None:
        """Return remaining whole days (rounded up) or None without expiry."""
        if self.expiration_date is None:
            return None
        remaining = (self.expiration_date - now).total_seconds() / 86400
        return math.ceil(remaining)

    def cover_photo(self) -> Photo | None:
        """Return the configured cover photo, falling back to the first."""
        if self.cover_photo_id:
            for photo in self.photos:
                if photo.id == self.cover_photo_id:
                    return photo
        return self.photos[0] if self.photos else None


@dataclass(frozen=True)
class AdminStats:
    """Aggregate counters across all galleries."""

    total_galleries: int = 0
    total_photos: int = 0
    total_views: int = 0
    total_downloads: int = 0
    active_galleries: int = 0
