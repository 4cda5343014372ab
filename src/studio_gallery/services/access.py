"""Password gate for client galleries."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from studio_gallery.domain.galleries import Gallery
from studio_gallery.domain.sessions import AccessGrant
from studio_gallery.services.session_cache import SessionCache

logger = logging.getLogger(__name__)

DEFAULT_GRANT_TTL = timedelta(hours=24)


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of checking whether a client may view a gallery."""

    granted: bool
    needs_password: bool = False
    expired: bool = False


@dataclass
class AccessGate:
    """Convenience gate: plain password comparison with a cached grant.

    This is not an authentication boundary. Passwords are compared as
    plain strings and there is no lockout or rate limiting.
    """

    cache: SessionCache
    grant_ttl: timedelta = DEFAULT_GRANT_TTL
    clock: Callable[[], datetime] = field(default=utc_now)

    def check(self, gallery: Gallery) -> AccessDecision:
        """Decide access without a candidate password.

        Expiry is reported alongside the decision and never withholds access.
        """
        now = self.clock()
        expired = gallery.is_expired(now)
        if not gallery.requires_password:
            return AccessDecision(granted=True, expired=expired)
        grant = self.cache.load_access_grant(gallery.id)
        if grant is not None and grant.is_valid(now, self.grant_ttl):
            return AccessDecision(granted=True, expired=expired)
        return AccessDecision(granted=False, needs_password=True, expired=expired)

    def verify(self, gallery: Gallery, candidate: str) -> bool:
        """Compare a candidate password and record a grant on success."""
        if not gallery.requires_password:
            return True
        if candidate != gallery.password:
            logger.info("Gallery password mismatch", extra={"gallery_id": gallery.id})
            return False
        self.cache.save_access_grant(
            AccessGrant(gallery_id=gallery.id, timestamp=self.clock())
        )
        return True

    def revoke(self, gallery_id: str) -> None:
        """Forget a stored grant so the next visit prompts again."""
        self.cache.delete_access_grant(gallery_id)
