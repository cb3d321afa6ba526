"""Access resolution.

Every permission check goes through :class:`AccessCore`. A check takes a set of
resource ids and succeeds only when each one is justified for the principal,
either by ownership or by an explicit grant (album membership, a partner
relationship, or the scope of a shared link).
"""

import enum
import logging
import uuid
from collections.abc import Iterable

from photoline.auth_utils import AuthContext
from photoline.exceptions import AccessDeniedError, upstream_read
from photoline.logger import logger as event_logger
from photoline.repositories.access_repository import AccessRepository

logger = logging.getLogger(__name__)


class Permission(enum.StrEnum):
    ALBUM_READ = "album.read"
    ASSET_READ = "asset.read"
    ARCHIVE_READ = "archive.read"
    TIMELINE_READ = "timeline.read"


class AccessCore:
    def __init__(self, repository: AccessRepository):
        self.repository = repository

    def require_permission(self, auth: AuthContext, permission: Permission, ids: Iterable[uuid.UUID]) -> None:
        """Raise AccessDeniedError unless ``auth`` holds ``permission`` on every id."""
        requested = set(ids)
        if not requested:
            return

        allowed = self.check_access(auth, permission, requested)
        if allowed != requested:
            event_logger.log_event(
                "access_denied",
                user_id=str(auth.user_id),
                shared_link_id=str(auth.shared_link.id) if auth.shared_link else None,
                permission=str(permission),
                denied=len(requested - allowed),
            )
            raise AccessDeniedError(f"Not found or no {permission} access")

    def check_access(self, auth: AuthContext, permission: Permission, ids: set[uuid.UUID]) -> set[uuid.UUID]:
        """Return the subset of ``ids`` the principal may use under ``permission``."""
        if not ids:
            return set()
        with upstream_read("access grants"):
            if auth.shared_link is not None:
                return self._check_shared_link_access(auth, permission, ids)
            return self._check_account_access(auth, permission, ids)

    def _check_shared_link_access(self, auth: AuthContext, permission: Permission, ids: set[uuid.UUID]) -> set[uuid.UUID]:
        link_id = auth.shared_link.id
        match permission:
            case Permission.ALBUM_READ:
                return self.repository.album_shared_link_access(link_id, ids)
            case Permission.ASSET_READ:
                return self.repository.asset_shared_link_access(link_id, ids)
            case _:
                logger.debug("Shared link %s has no %s grant path", link_id, permission)
                return set()

    def _check_account_access(self, auth: AuthContext, permission: Permission, ids: set[uuid.UUID]) -> set[uuid.UUID]:
        user_id = auth.user_id
        match permission:
            case Permission.ALBUM_READ:
                allowed = self.repository.album_owner_access(user_id, ids)
                return allowed | self.repository.album_member_access(user_id, ids - allowed)

            case Permission.ASSET_READ:
                allowed = self.repository.asset_owner_access(user_id, ids)
                allowed |= self.repository.asset_album_access(user_id, ids - allowed)
                return allowed | self.repository.asset_partner_access(user_id, ids - allowed)

            case Permission.TIMELINE_READ:
                allowed = {user_id} & ids
                return allowed | self.repository.timeline_partner_access(user_id, ids - allowed)

            case Permission.ARCHIVE_READ:
                # Archived assets stay private to their owner, partners included
                return {user_id} & ids

        return set()
