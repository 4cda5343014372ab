"""Public portal endpoints for studio clients and suppliers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from studio_gallery.api.client import get_client
from studio_gallery.api.schemas import (
    AccessCodeIn,
    GalleryOut,
    StudioClientOut,
    SupplierGalleryOut,
    SupplierOut,
    SupplierPhotoOut,
)
from studio_gallery.services.client_gallery import ClientGalleryService
from studio_gallery.services.studio_clients import StudioClientOperationError
from studio_gallery.services.suppliers import SupplierNotFoundError

if TYPE_CHECKING:
    from studio_gallery.containers import AppContainer

router = APIRouter(tags=["portals"])


@router.post("/clients/access")
async def client_access(body: AccessCodeIn, request: Request) -> dict[str, object]:
    """Resolve a client access code into the client and their galleries."""
    container: AppContainer = request.app.state.container
    try:
        client = container.studio_client_service.find_by_access_code(body.access_code)
    except StudioClientOperationError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)
        ) from exc
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Unknown access code."
        )
    galleries = container.gallery_service.client_galleries(client.id)
    return {
        "client": StudioClientOut.from_client(client),
        "galleries": [GalleryOut.from_gallery(gallery) for gallery in galleries],
    }


def _enter_supplier_view(
    request: Request, supplier_id: str, client: ClientGalleryService
) -> SupplierOut:
    container: AppContainer = request.app.state.container
    try:
        supplier = container.supplier_service.require_supplier(supplier_id)
    except SupplierNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    client.select_supplier(supplier.id)
    return SupplierOut.from_supplier(supplier)


@router.get("/suppliers/{supplier_id}/galleries")
async def supplier_galleries(
    supplier_id: str,
    request: Request,
    client: ClientGalleryService = Depends(get_client),
) -> dict[str, object]:
    """Return the galleries where a supplier has tagged photos."""
    supplier = _enter_supplier_view(request, supplier_id, client)
    container: AppContainer = request.app.state.container
    galleries = container.supplier_service.supplier_galleries(supplier_id)
    return {
        "supplier": supplier,
        "galleries": [
            SupplierGalleryOut.from_supplier_gallery(item) for item in galleries
        ],
    }


@router.get("/suppliers/{supplier_id}/photos")
async def supplier_photos(
    supplier_id: str,
    request: Request,
    client: ClientGalleryService = Depends(get_client),
) -> dict[str, object]:
    """Return a supplier's tagged photos, newest tag first."""
    supplier = _enter_supplier_view(request, supplier_id, client)
    container: AppContainer = request.app.state.container
    photos = container.supplier_service.supplier_photos(supplier_id)
    return {
        "supplier": supplier,
        "photos": [SupplierPhotoOut.from_supplier_photo(item) for item in photos],
    }
