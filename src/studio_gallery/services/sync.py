"""Gallery session initialization and favorites reconciliation."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime

from studio_gallery.domain.sessions import GallerySession, derive_session_id
from studio_gallery.services.access import utc_now
from studio_gallery.services.favorites import FavoriteService
from studio_gallery.services.session_cache import SessionCache

logger = logging.getLogger(__name__)


@dataclass
class SessionSynchronizer:
    """Builds sessions from the local cache and the remote favorites store."""

    cache: SessionCache
    favorite_service: FavoriteService
    clock: Callable[[], datetime] = field(default=utc_now)
    session_id_prefix: str = "session_"

    def session_id(self, gallery_id: str) -> str:
        return derive_session_id(gallery_id, self.session_id_prefix)

    def initialize(self, gallery_id: str) -> GallerySession:
        """Return a persisted session whose favorites come from the remote store."""
        remote = self.favorite_service.list(gallery_id, self.session_id(gallery_id))
        cached = self.cache.load_session(gallery_id)
        if cached is None:
            session = GallerySession(
                gallery_id=gallery_id,
                accessed_at=self.clock(),
                favorites=tuple(sorted(remote)),
            )
        else:
            session = replace(
                cached,
                accessed_at=self.clock(),
                favorites=_merge_order(cached.favorites, remote),
            )
        self.cache.save_session(session)
        return session

    def resync_favorites(self, session: GallerySession) -> GallerySession:
        """Replace local favorites with the remote set when they differ."""
        remote = self.favorite_service.list(
            session.gallery_id, self.session_id(session.gallery_id)
        )
        if set(session.favorites) == remote:
            return session
        logger.info(
            "Local favorites diverged from remote, replacing",
            extra={
                "gallery_id": session.gallery_id,
                "local_count": len(session.favorites),
                "remote_count": len(remote),
            },
        )
        updated = session.with_favorites(_merge_order(session.favorites, remote))
        self.cache.save_session(updated)
        return updated


def _merge_order(local: tuple[str, ...], remote: frozenset[str]) -> tuple[str, ...]:
    """Return the remote set ordered by local position, new ids sorted after."""
    kept = tuple(photo_id for photo_id in local if photo_id in remote)
    added = tuple(sorted(remote.difference(kept)))
    return kept + added
