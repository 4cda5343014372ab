"""Domain models for event suppliers and per-photo supplier tags."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from studio_gallery.domain.galleries import Photo

SupplierCategory = Literal[
    "fotografia", "buffet", "decoracao", "musica", "locacao", "outros"
]

CATEGORY_LABELS: dict[str, str] = {
    "fotografia": "Fotografia",
    "buffet": "Buffet",
    "decoracao": "Decoração",
    "musica": "Música",
    "locacao": "Locação",
    "outros": "Outros",
}


def category_label(category: str) -> str:
    """Return the display label for a category, or the raw value."""
    return CATEGORY_LABELS.get(category, category)


@dataclass(frozen=True)
class SupplierDraft:
    """Editable supplier fields for create and update."""

    name: str
    email: str
    category: SupplierCategory
    phone: str | None = None


@dataclass(frozen=True)
class Supplier:
    """A vendor from an event who may be tagged on photos."""

    id: str
    name: str
    email: str
    category: SupplierCategory
    created_at: datetime
    updated_at: datetime
    phone: str | None = None
    gallery_id: str | None = None
    access_code: str | None = None


@dataclass(frozen=True)
class PhotoSupplierTag:
    """Links one photo to one supplier within a gallery."""

    id: str
    photo_id: str
    supplier_id: str
    gallery_id: str
    tagged_at: datetime


@dataclass(frozen=True)
class SupplierPhoto:
    """A photo tagged for a supplier with the gallery it belongs to."""

    photo: Photo
    gallery_id: str
    gallery_name: str
    client_name: str
    tagged_at: datetime


@dataclass(frozen=True)
class TaggedGallery:
    """Gallery reference carried by a single supplier tag."""

    gallery_id: str
    name: str
    client_name: str
    created_date: datetime | None = None


@dataclass(frozen=True)
class SupplierGallery:
    """A gallery with the number of photos tagged for a supplier."""

    gallery_id: str
    name: str
    client_name: str
    photo_count: int
    created_date: datetime | None = None
