"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from studio_gallery.api.schemas import (
    AdminStatsOut,
    GalleryClientIn,
    GalleryIn,
    GalleryOut,
    PhotosIn,
    PhotoTagIn,
    PhotoTagOut,
    StudioClientIn,
    StudioClientOut,
    SupplierIn,
    SupplierOut,
)
from studio_gallery.services.galleries import GalleryOperationError
from studio_gallery.services.studio_clients import (
    StudioClientNotFoundError,
    StudioClientOperationError,
)
from studio_gallery.services.suppliers import (
    DuplicateTagError,
    SupplierNotFoundError,
    SupplierOperationError,
)

if TYPE_CHECKING:
    from studio_gallery.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def _operation_failed(
    exc: GalleryOperationError | SupplierOperationError | StudioClientOperationError,
) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/galleries", dependencies=[Depends(require_admin)])
async def list_galleries(request: Request) -> dict[str, object]:
    """Return all galleries with their photos."""
    container: AppContainer = request.app.state.container
    galleries = container.gallery_service.list_galleries()
    return {"galleries": [GalleryOut.from_gallery(gallery) for gallery in galleries]}


@router.put("/galleries/{gallery_id}", dependencies=[Depends(require_admin)])
async def save_gallery(
    gallery_id: str, body: GalleryIn, request: Request
) -> dict[str, str]:
    """Create or update a gallery."""
    if body.id != gallery_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Gallery id does not match the path.",
        )
    container: AppContainer = request.app.state.container
    try:
        container.gallery_service.save_gallery(body.to_gallery())
    except GalleryOperationError as exc:
        raise _operation_failed(exc) from exc
    return {"status": "ok"}


@router.delete("/galleries/{gallery_id}", dependencies=[Depends(require_admin)])
async def delete_gallery(gallery_id: str, request: Request) -> dict[str, str]:
    """Delete a gallery."""
    container: AppContainer = request.app.state.container
    try:
        container.gallery_service.delete_gallery(gallery_id)
    except GalleryOperationError as exc:
        raise _operation_failed(exc) from exc
    return {"status": "ok"}


@router.post("/galleries/{gallery_id}/photos", dependencies=[Depends(require_admin)])
async def add_photos(
    gallery_id: str, body: PhotosIn, request: Request
) -> dict[str, object]:
    """Attach photos to a gallery."""
    container: AppContainer = request.app.state.container
    try:
        container.gallery_service.add_photos(
            gallery_id, [photo.to_photo() for photo in body.photos]
        )
    except GalleryOperationError as exc:
        raise _operation_failed(exc) from exc
    return {"status": "ok", "added": len(body.photos)}


@router.delete("/photos/{photo_id}", dependencies=[Depends(require_admin)])
async def delete_photo(photo_id: str, request: Request) -> dict[str, str]:
    """Delete a photo."""
    container: AppContainer = request.app.state.container
    try:
        container.gallery_service.delete_photo(photo_id)
    except GalleryOperationError as exc:
        raise _operation_failed(exc) from exc
    return {"status": "ok"}


@router.get("/stats", dependencies=[Depends(require_admin)])
async def admin_stats(request: Request) -> AdminStatsOut:
    """Return aggregate gallery counters."""
    container: AppContainer = request.app.state.container
    return AdminStatsOut.from_stats(container.gallery_service.admin_stats())


@router.get("/suppliers", dependencies=[Depends(require_admin)])
async def list_suppliers(request: Request) -> dict[str, object]:
    """Return all suppliers ordered by name."""
    container: AppContainer = request.app.state.container
    suppliers = container.supplier_service.list_suppliers()
    return {"suppliers": [SupplierOut.from_supplier(item) for item in suppliers]}


@router.post(
    "/suppliers",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_201_CREATED,
)
async def create_supplier(body: SupplierIn, request: Request) -> SupplierOut:
    """Register a supplier."""
    container: AppContainer = request.app.state.container
    try:
        supplier = container.supplier_service.create_supplier(body.to_draft())
    except SupplierOperationError as exc:
        raise _operation_failed(exc) from exc
    return SupplierOut.from_supplier(supplier)


@router.put("/suppliers/{supplier_id}", dependencies=[Depends(require_admin)])
async def update_supplier(
    supplier_id: str, body: SupplierIn, request: Request
) -> SupplierOut:
    container: AppContainer = request.app.state.container
    try:
        supplier = container.supplier_service.update_supplier(
            supplier_id, body.to_draft()
        )
    except SupplierNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    except SupplierOperationError as exc:
        raise _operation_failed(exc) from exc
    return SupplierOut.from_supplier(supplier)


@router.delete("/suppliers/{supplier_id}", dependencies=[Depends(require_admin)])
async def delete_supplier(supplier_id: str, request: Request) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    try:
        container.supplier_service.delete_supplier(supplier_id)
    except SupplierOperationError as exc:
        raise _operation_failed(exc) from exc
    return {"status": "ok"}


@router.get("/photos/{photo_id}/suppliers", dependencies=[Depends(require_admin)])
async def list_photo_suppliers(photo_id: str, request: Request) -> dict[str, object]:
    """Return the suppliers tagged on a photo."""
    container: AppContainer = request.app.state.container
    suppliers = container.supplier_service.photo_suppliers(photo_id)
    return {"suppliers": [SupplierOut.from_supplier(item) for item in suppliers]}


@router.post(
    "/photos/{photo_id}/suppliers/{supplier_id}",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_201_CREATED,
)
async def tag_photo(
    photo_id: str, supplier_id: str, body: PhotoTagIn, request: Request
) -> PhotoTagOut:
    """Tag a supplier on a photo."""
    container: AppContainer = request.app.state.container
    try:
        tag = container.supplier_service.tag_photo(
            photo_id, supplier_id, body.gallery_id
        )
    except DuplicateTagError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Supplier is already tagged on this photo.",
        ) from exc
    except SupplierOperationError as exc:
        raise _operation_failed(exc) from exc
    return PhotoTagOut.from_tag(tag)


@router.delete(
    "/photos/{photo_id}/suppliers/{supplier_id}",
    dependencies=[Depends(require_admin)],
)
async def untag_photo(
    photo_id: str, supplier_id: str, request: Request
) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    try:
        container.supplier_service.untag_photo(photo_id, supplier_id)
    except SupplierOperationError as exc:
        raise _operation_failed(exc) from exc
    return {"status": "ok"}


@router.get("/clients", dependencies=[Depends(require_admin)])
async def list_clients(request: Request) -> dict[str, object]:
    """Return studio clients, newest first."""
    container: AppContainer = request.app.state.container
    clients = container.studio_client_service.list_clients()
    return {"clients": [StudioClientOut.from_client(item) for item in clients]}


@router.post(
    "/clients",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_201_CREATED,
)
async def create_client(body: StudioClientIn, request: Request) -> StudioClientOut:
    """Register a studio client with a fresh access code."""
    container: AppContainer = request.app.state.container
    try:
        client = container.studio_client_service.create_client(body.to_draft())
    except StudioClientOperationError as exc:
        raise _operation_failed(exc) from exc
    return StudioClientOut.from_client(client)


@router.put("/clients/{client_id}", dependencies=[Depends(require_admin)])
async def update_client(
    client_id: str, body: StudioClientIn, request: Request
) -> StudioClientOut:
    container: AppContainer = request.app.state.container
    try:
        client = container.studio_client_service.update_client(
            client_id, body.to_draft()
        )
    except StudioClientNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
    except StudioClientOperationError as exc:
        raise _operation_failed(exc) from exc
    return StudioClientOut.from_client(client)


@router.delete("/clients/{client_id}", dependencies=[Depends(require_admin)])
async def delete_client(client_id: str, request: Request) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    try:
        container.studio_client_service.delete_client(client_id)
    except StudioClientOperationError as exc:
        raise _operation_failed(exc) from exc
    return {"status": "ok"}


@router.get("/clients/{client_id}/galleries", dependencies=[Depends(require_admin)])
async def list_client_galleries(client_id: str, request: Request) -> dict[str, object]:
    """Return the galleries linked to a studio client."""
    container: AppContainer = request.app.state.container
    galleries = container.gallery_service.client_galleries(client_id)
    return {"galleries": [GalleryOut.from_gallery(gallery) for gallery in galleries]}


@router.put("/galleries/{gallery_id}/client", dependencies=[Depends(require_admin)])
async def link_gallery_client(
    gallery_id: str, body: GalleryClientIn, request: Request
) -> dict[str, str]:
    """Link a gallery to a studio client."""
    container: AppContainer = request.app.state.container
    try:
        container.gallery_service.link_client(gallery_id, body.client_id)
    except GalleryOperationError as exc:
        raise _operation_failed(exc) from exc
    return {"status": "ok"}


@router.delete(
    "/galleries/{gallery_id}/client", dependencies=[Depends(require_admin)]
)
async def unlink_gallery_client(gallery_id: str, request: Request) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    try:
        container.gallery_service.link_client(gallery_id, None)
    except GalleryOperationError as exc:
        raise _operation_failed(exc) from exc
    return {"status": "ok"}
