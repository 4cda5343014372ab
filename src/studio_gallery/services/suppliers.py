"""Supplier management and per-photo supplier tagging."""

import logging
from dataclasses import dataclass
from typing import Protocol

from studio_gallery.domain.suppliers import (
    PhotoSupplierTag,
    Supplier,
    SupplierDraft,
    SupplierGallery,
    SupplierPhoto,
    TaggedGallery,
)

logger = logging.getLogger(__name__)


class SupplierNotFoundError(Exception):
    """Raised when a supplier does not exist."""


class SupplierOperationError(Exception):
    """Raised when an explicit supplier change fails."""


class DuplicateTagError(Exception):
    """Raised when a photo is already tagged with the supplier."""


class SupplierRepository(Protocol):
    """Persistence interface for suppliers and photo tags."""

    def list_suppliers(self) -> list[Supplier]:
        """Return suppliers ordered by name."""

    def get_supplier(self, supplier_id: str) -> Supplier | None:
        """Return a supplier, if present."""

    def create_supplier(self, draft: SupplierDraft) -> Supplier:
        """Insert a supplier and return it."""

    def update_supplier(
        self, supplier_id: str, draft: SupplierDraft
    ) -> Supplier | None:
        """Update a supplier and return it, or None when it does not exist."""

    def delete_supplier(self, supplier_id: str) -> None:
        """Delete a supplier."""

    def create_tag(
        self, photo_id: str, supplier_id: str, gallery_id: str
    ) -> PhotoSupplierTag:
        """Insert a photo tag; raises DuplicateTagError when it exists."""

    def delete_tag(self, photo_id: str, supplier_id: str) -> None:
        """Delete a photo tag, if present."""

    def list_photo_suppliers(self, photo_id: str) -> list[Supplier]:
        """Return suppliers tagged on a photo."""

    def list_supplier_photos(self, supplier_id: str) -> list[SupplierPhoto]:
        """Return photos tagged for a supplier, newest tag first."""

    def list_tagged_galleries(self, supplier_id: str) -> list[TaggedGallery]:
        """Return one gallery reference per tag of the supplier."""


@dataclass
class SupplierService:
    """Application service for suppliers and their photo tags."""

    repository: SupplierRepository

    def list_suppliers(self) -> list[Supplier]:
        try:
            return self.repository.list_suppliers()
        except Exception:
            logger.exception("Failed to load suppliers")
            return []

    def get_supplier(self, supplier_id: str) -> Supplier | None:
        try:
            return self.repository.get_supplier(supplier_id)
        except Exception:
            logger.exception(
                "Failed to load supplier", extra={"supplier_id": supplier_id}
            )
            return None

    def require_supplier(self, supplier_id: str) -> Supplier:
        supplier = self.get_supplier(supplier_id)
        if supplier is None:
            raise SupplierNotFoundError(supplier_id)
        return supplier

    def create_supplier(self, draft: SupplierDraft) -> Supplier:
        try:
            return self.repository.create_supplier(draft)
        except Exception as exc:
            logger.exception("Failed to create supplier")
            raise SupplierOperationError("Failed to create supplier") from exc

    def update_supplier(self, supplier_id: str, draft: SupplierDraft) -> Supplier:
        try:
            supplier = self.repository.update_supplier(supplier_id, draft)
        except Exception as exc:
            logger.exception(
                "Failed to update supplier", extra={"supplier_id": supplier_id}
            )
            raise SupplierOperationError("Failed to update supplier") from exc
        if supplier is None:
            raise SupplierNotFoundError(supplier_id)
        return supplier

    def delete_supplier(self, supplier_id: str) -> None:
        try:
            self.repository.delete_supplier(supplier_id)
        except Exception as exc:
            logger.exception(
                "Failed to delete supplier", extra={"supplier_id": supplier_id}
            )
            raise SupplierOperationError("Failed to delete supplier") from exc

    def tag_photo(
        self, photo_id: str, supplier_id: str, gallery_id: str
    ) -> PhotoSupplierTag:
        """Tag a photo with a supplier; an existing tag raises DuplicateTagError."""
        try:
            return self.repository.create_tag(photo_id, supplier_id, gallery_id)
        except DuplicateTagError:
            raise
        except Exception as exc:
            logger.exception(
                "Failed to tag photo",
                extra={"photo_id": photo_id, "supplier_id": supplier_id},
            )
            raise SupplierOperationError("Failed to tag photo") from exc

    def untag_photo(self, photo_id: str, supplier_id: str) -> None:
        try:
            self.repository.delete_tag(photo_id, supplier_id)
        except Exception as exc:
            logger.exception(
                "Failed to untag photo",
                extra={"photo_id": photo_id, "supplier_id": supplier_id},
            )
            raise SupplierOperationError("Failed to untag photo") from exc

    def photo_suppliers(self, photo_id: str) -> list[Supplier]:
        try:
            return self.repository.list_photo_suppliers(photo_id)
        except Exception:
            logger.exception(
                "Failed to load photo suppliers", extra={"photo_id": photo_id}
            )
            return []

    def supplier_photos(self, supplier_id: str) -> list[SupplierPhoto]:
        try:
            return self.repository.list_supplier_photos(supplier_id)
        except Exception:
            logger.exception(
                "Failed to load supplier photos", extra={"supplier_id": supplier_id}
            )
            return []

    def supplier_galleries(self, supplier_id: str) -> list[SupplierGallery]:
        """Return galleries with tagged photos, counting tags per gallery."""
        try:
            tags = self.repository.list_tagged_galleries(supplier_id)
        except Exception:
            logger.exception(
                "Failed to load supplier galleries",
                extra={"supplier_id": supplier_id},
            )
            return []
        counts: dict[str, int] = {}
        first_seen: dict[str, TaggedGallery] = {}
        for tag in tags:
            counts[tag.gallery_id] = counts.get(tag.gallery_id, 0) + 1
            first_seen.setdefault(tag.gallery_id, tag)
        return [
            SupplierGallery(
                gallery_id=gallery_id,
                name=tag.name,
                client_name=tag.client_name,
                photo_count=counts[gallery_id],
                created_date=tag.created_date,
            )
            for gallery_id, tag in first_seen.items()
        ]
