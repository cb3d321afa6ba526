"""Timeline service - chronological, bucketed browsing of one or more libraries.

A request is handled in fixed steps, each feeding the next:

1. validate the request shape (album access, partner filter combination);
2. expand the owner scope with partners sharing into the caller's timeline;
3. authorize every owner in scope other than the caller;
4. read buckets or bucket assets for the authorized scope;
5. project assets for the viewer (full, or stripped for anonymous links).

Nothing is cached between requests: relationships are re-read every time so
a revoked partner disappears from the next page load.
"""

import logging
import uuid
from dataclasses import dataclass

from photoline.auth_utils import AuthContext
from photoline.exceptions import BadRequestError, upstream_read
from photoline.logger import logger as event_logger
from photoline.repositories.asset_repository import AssetRepository, TimeBucketOptions
from photoline.repositories.partner_repository import PartnerRepository, SharingRelationship
from photoline.schemas.asset import AssetResponse, SanitizedAssetResponse, map_asset
from photoline.schemas.timeline import TimeBucketAssetRequest, TimeBucketRequest, TimeBucketResponse
from photoline.services.access import AccessCore, Permission
from photoline.time_buckets import bucket_range

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    message: str | None = None

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, message: str) -> "ValidationResult":
        return cls(ok=False, message=message)


def check_partner_filters(dto: TimeBucketRequest) -> ValidationResult:
    """Partner libraries are only merged into the plain, uncurated timeline.

    Archive-inclusive (``is_archived`` true or unset), any explicit favorite
    filter, and trash views are rejected when ``with_partners`` is set.
    """
    if not dto.with_partners:
        return ValidationResult.success()

    requested_archived = dto.is_archived is None or dto.is_archived is True
    requested_favorite = dto.is_favorite is not None
    requested_trash = dto.is_trashed is True

    if requested_archived or requested_favorite or requested_trash:
        return ValidationResult.failure("with_partners is only supported for non-archived, non-trashed, non-favorited assets")
    return ValidationResult.success()


def timeline_partner_ids(user_id: uuid.UUID, relationships: list[SharingRelationship]) -> list[uuid.UUID]:
    """Owners sharing into ``user_id``'s timeline, in relationship order, without repeats."""
    owner_ids: list[uuid.UUID] = []
    for relationship in relationships:
        if relationship.recipient_id != user_id or not relationship.shares_timeline:
            continue
        if relationship.owner_id != user_id and relationship.owner_id not in owner_ids:
            owner_ids.append(relationship.owner_id)
    return owner_ids


class TimelineService:
    def __init__(self, access: AccessCore, assets: AssetRepository, partners: PartnerRepository):
        self.access = access
        self.assets = assets
        self.partners = partners

    def get_time_buckets(self, auth: AuthContext, dto: TimeBucketRequest) -> list[TimeBucketResponse]:
        options = self._authorized_options(auth, dto)

        with upstream_read("time buckets"):
            buckets = self.assets.get_time_buckets(options)

        return [TimeBucketResponse(time_bucket=bucket.time_bucket, count=bucket.count) for bucket in buckets]

    def get_time_bucket(self, auth: AuthContext, dto: TimeBucketAssetRequest) -> list[AssetResponse] | list[SanitizedAssetResponse]:
        bucket_range(dto.time_bucket, dto.size)
        options = self._authorized_options(auth, dto)

        with upstream_read("time bucket assets"):
            assets = self.assets.get_time_bucket(dto.time_bucket, options)

        event_logger.log_event(
            "timeline_bucket",
            user_id=str(auth.user_id),
            shared_link_id=str(auth.shared_link.id) if auth.shared_link else None,
            time_bucket=dto.time_bucket,
            owners=len(options.owner_ids),
            assets=len(assets),
        )

        if auth.shows_metadata:
            return [map_asset(asset, viewer_id=auth.user_id, with_stack=True) for asset in assets]
        return [map_asset(asset, strip_metadata=True) for asset in assets]

    def validate(self, auth: AuthContext, dto: TimeBucketRequest) -> None:
        if dto.album_id:
            self.access.require_permission(auth, Permission.ALBUM_READ, [dto.album_id])

        result = check_partner_filters(dto)
        if not result.ok:
            raise BadRequestError(result.message)

    def get_owner_ids(self, auth: AuthContext, dto: TimeBucketRequest) -> list[uuid.UUID]:
        """The caller first, then every partner sharing into the caller's timeline."""
        if not dto.with_partners:
            return [auth.user_id]

        with upstream_read("partner relationships"):
            relationships = self.partners.get_all(auth.user_id)
        return [auth.user_id, *timeline_partner_ids(auth.user_id, relationships)]

    def check_permission(self, auth: AuthContext, dto: TimeBucketRequest, owner_ids: list[uuid.UUID]) -> None:
        shared_owners = [owner_id for owner_id in owner_ids if owner_id != auth.user_id]
        if not shared_owners:
            return

        self.access.require_permission(auth, Permission.TIMELINE_READ, shared_owners)
        # Anything but an explicit non-archived view could surface a partner's archive
        if dto.is_archived is not False:
            self.access.require_permission(auth, Permission.ARCHIVE_READ, shared_owners)

    def _authorized_options(self, auth: AuthContext, dto: TimeBucketRequest) -> TimeBucketOptions:
        self.validate(auth, dto)
        owner_ids = self.get_owner_ids(auth, dto)
        self.check_permission(auth, dto, owner_ids)

        logger.debug("Timeline scope for %s: %d owner(s), album=%s", auth.user_id, len(owner_ids), dto.album_id)

        return TimeBucketOptions(
            size=dto.size,
            owner_ids=tuple(owner_ids),
            album_id=dto.album_id,
            shared_link_id=auth.shared_link.id if auth.shared_link else None,
            is_archived=dto.is_archived,
            is_favorite=dto.is_favorite,
            is_trashed=dto.is_trashed,
            with_stacked=dto.with_stacked,
        )
