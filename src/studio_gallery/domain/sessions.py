"""Domain models for client gallery sessions."""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta


@dataclass(frozen=True)
class GallerySession:
    """A client's favorites, selection and print cart for one gallery."""

    gallery_id: str
    accessed_at: datetime
    favorites: tuple[str, ...] = ()
    selected_photos: tuple[str, ...] = ()
    print_cart: tuple[str, ...] = ()
    downloads: int = 0

    def with_favorites(self, favorites: tuple[str, ...]) -> "GallerySession":
        return replace(self, favorites=favorites)

    def with_selected_photos(self, selected: tuple[str, ...]) -> "GallerySession":
        return replace(self, selected_photos=selected)

    def with_print_cart(self, print_cart: tuple[str, ...]) -> "GallerySession":
        return replace(self, print_cart=print_cart)


@dataclass(frozen=True)
class FavoriteRecord:
    """A remote favorite row for a photo within a session partition."""

    photo_id: str
    gallery_id: str
    session_id: str
    client_id: str | None = None
    id: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class AccessGrant:
    """Marks a successful password entry for a gallery."""

    gallery_id: str
    timestamp: datetime

    def is_valid(self, now: datetime, ttl: timedelta) -> bool:
        """Return True while the grant is younger than the ttl."""
        return now - self.timestamp < ttl


def derive_session_id(gallery_id: str, prefix: str = "session_") -> str:
    """Return the deterministic favorites partition id for a gallery."""
    return f"{prefix}{gallery_id}"


def toggle_member(items: tuple[str, ...], item: str) -> tuple[str, ...]:
    """Remove the item when present, otherwise append it."""
    if item in items:
        return tuple(existing for existing in items if existing != item)
    return (*items, item)


def unique_ids(items: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Drop duplicate ids while keeping the first occurrence order."""
    return tuple(dict.fromkeys(items))
