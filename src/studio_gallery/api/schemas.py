"""Pydantic request and response models for the HTTP API."""

from datetime import datetime

from pydantic import AwareDatetime, BaseModel, Field

from studio_gallery.domain.galleries import (
    AdminStats,
    DownloadQuality,
    Gallery,
    GallerySettings,
    Photo,
)
from studio_gallery.domain.sessions import GallerySession
from studio_gallery.domain.studio_clients import ClientDraft, StudioClient
from studio_gallery.domain.suppliers import (
    PhotoSupplierTag,
    Supplier,
    SupplierCategory,
    SupplierDraft,
    SupplierGallery,
    SupplierPhoto,
    category_label,
)


class SessionOut(BaseModel):
    """Gallery session payload."""

    gallery_id: str
    accessed_at: datetime
    favorites: list[str]
    selected_photos: list[str]
    print_cart: list[str]
    downloads: int

    @classmethod
    def from_session(cls, session: GallerySession) -> "SessionOut":
        return cls(
            gallery_id=session.gallery_id,
            accessed_at=session.accessed_at,
            favorites=list(session.favorites),
            selected_photos=list(session.selected_photos),
            print_cart=list(session.print_cart),
            downloads=session.downloads,
        )


class AccessOut(BaseModel):
    """Result of opening a gallery."""

    access_granted: bool
    needs_password: bool
    expired: bool
    session: SessionOut | None = None


class PasswordIn(BaseModel):
    password: str = ""


class PhotoModel(BaseModel):
    """Photo payload."""

    id: str
    url: str
    thumbnail: str
    filename: str
    size: int = 0
    upload_date: AwareDatetime
    photo_code: str | None = None
    r2_key: str | None = None
    thumbnail_r2_key: str | None = None
    metadata: dict[str, object] = Field(default_factory=dict)

    @classmethod
    def from_photo(cls, photo: Photo) -> "PhotoModel":
        return cls(
            id=photo.id,
            url=photo.url,
            thumbnail=photo.thumbnail,
            filename=photo.filename,
            size=photo.size,
            upload_date=photo.upload_date,
            photo_code=photo.photo_code,
            r2_key=photo.r2_key,
            thumbnail_r2_key=photo.thumbnail_r2_key,
            metadata=photo.metadata,
        )

    def to_photo(self) -> Photo:
        return Photo(
            id=self.id,
            url=self.url,
            thumbnail=self.thumbnail,
            filename=self.filename,
            size=self.size,
            upload_date=self.upload_date,
            photo_code=self.photo_code,
            r2_key=self.r2_key,
            thumbnail_r2_key=self.thumbnail_r2_key,
            metadata=self.metadata,
        )


class GallerySettingsModel(BaseModel):
    allow_download: bool = True
    allow_comments: bool = False
    watermark: bool = False
    max_downloads: int | None = None
    download_quality: DownloadQuality = "web"


class GalleryIn(BaseModel):
    """Gallery create/update payload."""

    id: str
    name: str
    client_name: str
    created_date: AwareDatetime
    description: str | None = None
    cover_photo_id: str | None = None
    expiration_date: AwareDatetime | None = None
    password: str | None = None
    event_date: AwareDatetime | None = None
    location: str | None = None
    client_id: str | None = None
    is_active: bool = True
    settings: GallerySettingsModel = Field(default_factory=GallerySettingsModel)

    def to_gallery(self) -> Gallery:
        return Gallery(
            id=self.id,
            name=self.name,
            client_name=self.client_name,
            created_date=self.created_date,
            description=self.description,
            cover_photo_id=self.cover_photo_id,
            expiration_date=self.expiration_date,
            password=self.password,
            event_date=self.event_date,
            location=self.location,
            client_id=self.client_id,
            is_active=self.is_active,
            settings=GallerySettings(**self.settings.model_dump()),
        )


class GalleryOut(GalleryIn):
    """Gallery payload with counters and photos."""

    access_count: int = 0
    download_count: int = 0
    photos: list[PhotoModel] = Field(default_factory=list)

    @classmethod
    def from_gallery(cls, gallery: Gallery) -> "GalleryOut":
        return cls(
            id=gallery.id,
            name=gallery.name,
            client_name=gallery.client_name,
            created_date=gallery.created_date,
            description=gallery.description,
            cover_photo_id=gallery.cover_photo_id,
            expiration_date=gallery.expiration_date,
            password=gallery.password,
            event_date=gallery.event_date,
            location=gallery.location,
            client_id=gallery.client_id,
            is_active=gallery.is_active,
            settings=GallerySettingsModel(
                allow_download=gallery.settings.allow_download,
                allow_comments=gallery.settings.allow_comments,
                watermark=gallery.settings.watermark,
                max_downloads=gallery.settings.max_downloads,
                download_quality=gallery.settings.download_quality,
            ),
            access_count=gallery.access_count,
            download_count=gallery.download_count,
            photos=[PhotoModel.from_photo(photo) for photo in gallery.photos],
        )


class PhotosIn(BaseModel):
    photos: list[PhotoModel]


class AdminStatsOut(BaseModel):
    total_galleries: int
    total_photos: int
    total_views: int
    total_downloads: int
    active_galleries: int

    @classmethod
    def from_stats(cls, stats: AdminStats) -> "AdminStatsOut":
        return cls(
            total_galleries=stats.total_galleries,
            total_photos=stats.total_photos,
            total_views=stats.total_views,
            total_downloads=stats.total_downloads,
            active_galleries=stats.active_galleries,
        )


class SupplierIn(BaseModel):
    """Supplier create/update payload."""

    name: str
    email: str
    category: SupplierCategory
    phone: str | None = None

    def to_draft(self) -> SupplierDraft:
        return SupplierDraft(
            name=self.name, email=self.email, category=self.category, phone=self.phone
        )


class SupplierOut(SupplierIn):
    """Supplier payload with its display label."""

    id: str
    category_label: str
    gallery_id: str | None = None
    access_code: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_supplier(cls, supplier: Supplier) -> "SupplierOut":
        return cls(
            id=supplier.id,
            name=supplier.name,
            email=supplier.email,
            category=supplier.category,
            category_label=category_label(supplier.category),
            phone=supplier.phone,
            gallery_id=supplier.gallery_id,
            access_code=supplier.access_code,
            created_at=supplier.created_at,
            updated_at=supplier.updated_at,
        )


class PhotoTagIn(BaseModel):
    gallery_id: str


class PhotoTagOut(BaseModel):
    id: str
    photo_id: str
    supplier_id: str
    gallery_id: str
    tagged_at: datetime

    @classmethod
    def from_tag(cls, tag: PhotoSupplierTag) -> "PhotoTagOut":
        return cls(
            id=tag.id,
            photo_id=tag.photo_id,
            supplier_id=tag.supplier_id,
            gallery_id=tag.gallery_id,
            tagged_at=tag.tagged_at,
        )


class SupplierPhotoOut(BaseModel):
    """A tagged photo as shown in the supplier timeline."""

    photo: PhotoModel
    gallery_id: str
    gallery_name: str
    client_name: str
    tagged_at: datetime

    @classmethod
    def from_supplier_photo(cls, item: SupplierPhoto) -> "SupplierPhotoOut":
        return cls(
            photo=PhotoModel.from_photo(item.photo),
            gallery_id=item.gallery_id,
            gallery_name=item.gallery_name,
            client_name=item.client_name,
            tagged_at=item.tagged_at,
        )


class SupplierGalleryOut(BaseModel):
    gallery_id: str
    name: str
    client_name: str
    photo_count: int
    created_date: datetime | None = None

    @classmethod
    def from_supplier_gallery(cls, item: SupplierGallery) -> "SupplierGalleryOut":
        return cls(
            gallery_id=item.gallery_id,
            name=item.name,
            client_name=item.client_name,
            photo_count=item.photo_count,
            created_date=item.created_date,
        )


class StudioClientIn(BaseModel):
    """Studio client create/update payload."""

    name: str
    email: str | None = None
    phone: str | None = None
    notes: str | None = None

    def to_draft(self) -> ClientDraft:
        return ClientDraft(
            name=self.name, email=self.email, phone=self.phone, notes=self.notes
        )


class StudioClientOut(StudioClientIn):
    id: str
    access_code: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_client(cls, client: StudioClient) -> "StudioClientOut":
        return cls(
            id=client.id,
            name=client.name,
            email=client.email,
            phone=client.phone,
            notes=client.notes,
            access_code=client.access_code,
            created_at=client.created_at,
            updated_at=client.updated_at,
        )


class AccessCodeIn(BaseModel):
    access_code: str


class GalleryClientIn(BaseModel):
    client_id: str
