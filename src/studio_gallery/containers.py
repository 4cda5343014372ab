"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from studio_gallery.adapters.json_file_store import JsonFileKeyValueStore
from studio_gallery.adapters.supabase_favorite_repository import (
    SupabaseFavoriteRepository,
)
from studio_gallery.adapters.supabase_gallery_repository import (
    SupabaseGalleryRepository,
)
from studio_gallery.adapters.supabase_studio_client_repository import (
    SupabaseStudioClientRepository,
)
from studio_gallery.adapters.supabase_supplier_repository import (
    SupabaseSupplierRepository,
)
from studio_gallery.config import Settings
from studio_gallery.services.client_gallery import ClientRegistry
from studio_gallery.services.favorites import FavoriteService
from studio_gallery.services.galleries import GalleryService
from studio_gallery.services.storage import InMemoryKeyValueStore, KeyValueStore
from studio_gallery.services.studio_clients import StudioClientService
from studio_gallery.services.suppliers import SupplierService
from studio_gallery.services.write_queue import KeyedTaskQueue


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    gallery_service: GalleryService
    favorite_service: FavoriteService
    supplier_service: SupplierService
    studio_client_service: StudioClientService
    write_queue: KeyedTaskQueue
    client_registry: ClientRegistry
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    gallery_service = GalleryService(SupabaseGalleryRepository(supabase_client))
    favorite_service = FavoriteService(SupabaseFavoriteRepository(supabase_client))
    supplier_service = SupplierService(SupabaseSupplierRepository(supabase_client))
    studio_client_service = StudioClientService(
        SupabaseStudioClientRepository(supabase_client)
    )
    write_queue = KeyedTaskQueue()
    store: KeyValueStore
    if resolved_settings.session_store_path:
        store = JsonFileKeyValueStore(resolved_settings.session_store_path)
    else:
        store = InMemoryKeyValueStore()
    client_registry = ClientRegistry(
        base_store=store,
        gallery_service=gallery_service,
        favorite_service=favorite_service,
        write_queue=write_queue,
        grant_ttl=timedelta(hours=resolved_settings.access_grant_ttl_hours),
        session_id_prefix=resolved_settings.session_id_prefix,
    )

    async def close_resources() -> None:
        await write_queue.drain()

    return AppContainer(
        settings=resolved_settings,
        gallery_service=gallery_service,
        favorite_service=favorite_service,
        supplier_service=supplier_service,
        studio_client_service=studio_client_service,
        write_queue=write_queue,
        client_registry=client_registry,
        close_resources=close_resources,
    )
