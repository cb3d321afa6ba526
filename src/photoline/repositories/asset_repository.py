import logging
import time
import uuid
from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy import Select, and_, extract, func, or_, select
from sqlalchemy.orm import selectinload

from photoline.models.album import Album, album_assets, album_users
from photoline.models.asset import Asset, AssetType, Exif, Stack
from photoline.models.sharelink import SharedLink, shared_link_assets
from photoline.repositories.base_repository import BaseRepository
from photoline.time_buckets import TimeBucketSize, bucket_key, bucket_range

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeBucketOptions:
    """Everything a bucket query filters on. ``owner_ids`` must already be authorized."""

    size: TimeBucketSize
    owner_ids: tuple[uuid.UUID, ...] = ()
    album_id: uuid.UUID | None = None
    shared_link_id: uuid.UUID | None = None
    is_archived: bool | None = None
    is_favorite: bool | None = None
    is_trashed: bool | None = None
    with_stacked: bool = False


@dataclass(frozen=True)
class TimeBucketCount:
    time_bucket: str
    count: int


@dataclass(frozen=True)
class MapMarkerOptions:
    """Filters for geotagged assets. ``owner_ids`` must already be authorized."""

    viewer_id: uuid.UUID
    owner_ids: tuple[uuid.UUID, ...] = ()
    with_shared_albums: bool = False
    is_archived: bool | None = None
    is_favorite: bool | None = None
    file_created_after: datetime | None = None
    file_created_before: datetime | None = None


@dataclass(frozen=True)
class MapMarker:
    id: uuid.UUID
    latitude: float
    longitude: float
    city: str | None
    state: str | None
    country: str | None


class AssetRepository(BaseRepository):
    def get_time_buckets(self, options: TimeBucketOptions) -> list[TimeBucketCount]:
        """Bucket keys with asset counts, most recent bucket first."""
        parts = [extract("year", Asset.local_date_time), extract("month", Asset.local_date_time)]
        if options.size == TimeBucketSize.DAY:
            parts.append(extract("day", Asset.local_date_time))

        stmt = select(*parts, func.count(Asset.id)).select_from(Asset).group_by(*parts).order_by(*(part.desc() for part in parts))
        stmt = self._apply_filters(stmt, options)

        start = time.monotonic()
        rows = self.db.execute(stmt).all()
        logger.debug("Time bucket summary for %d owner(s) took %.3fs", len(options.owner_ids), time.monotonic() - start)

        buckets = []
        for row in rows:
            day = int(row[2]) if options.size == TimeBucketSize.DAY else 1
            buckets.append(TimeBucketCount(time_bucket=bucket_key(date(int(row[0]), int(row[1]), day), options.size), count=row[-1]))
        return buckets

    def get_time_bucket(self, time_bucket: str, options: TimeBucketOptions) -> list[Asset]:
        """Assets of one bucket, newest capture first, ties broken by id."""
        start, end = bucket_range(time_bucket, options.size)
        stmt = select(Asset).where(Asset.local_date_time >= start, Asset.local_date_time < end)
        stmt = (
            self._apply_filters(stmt, options)
            .options(selectinload(Asset.exif_info), selectinload(Asset.stack).selectinload(Stack.assets))
            .order_by(Asset.file_created_at.desc(), Asset.id.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_by_id(self, asset_id: uuid.UUID) -> Asset | None:
        stmt = select(Asset).where(Asset.id == asset_id).options(selectinload(Asset.exif_info), selectinload(Asset.stack).selectinload(Stack.assets))
        return self.db.execute(stmt).scalar_one_or_none()

    def get_statistics(
        self,
        owner_id: uuid.UUID,
        is_archived: bool | None = None,
        is_favorite: bool | None = None,
        is_trashed: bool | None = None,
    ) -> dict[AssetType, int]:
        stmt = select(Asset.type, func.count(Asset.id)).where(Asset.owner_id == owner_id, Asset.is_visible.is_(True)).group_by(Asset.type)
        if is_archived is not None:
            stmt = stmt.where(Asset.is_archived == is_archived)
        if is_favorite is not None:
            stmt = stmt.where(Asset.is_favorite == is_favorite)
        stmt = stmt.where(Asset.deleted_at.is_not(None) if is_trashed else Asset.deleted_at.is_(None))
        return {AssetType(asset_type): count for asset_type, count in self.db.execute(stmt).all()}

    def get_map_markers(self, options: MapMarkerOptions) -> list[MapMarker]:
        """Coordinates of geotagged assets, newest capture first."""
        in_scope = Asset.owner_id.in_(options.owner_ids)
        if options.with_shared_albums:
            member_albums = select(album_users.c.album_id).where(album_users.c.user_id == options.viewer_id)
            shared = (
                select(album_assets.c.asset_id)
                .join(Album, Album.id == album_assets.c.album_id)
                .where(or_(Album.owner_id == options.viewer_id, Album.id.in_(member_albums)))
            )
            in_scope = or_(in_scope, Asset.id.in_(shared))

        stmt = (
            select(Asset.id, Exif.latitude, Exif.longitude, Exif.city, Exif.state, Exif.country)
            .join(Exif, Exif.asset_id == Asset.id)
            .where(
                in_scope,
                Exif.latitude.is_not(None),
                Exif.longitude.is_not(None),
                Asset.is_visible.is_(True),
                Asset.deleted_at.is_(None),
                # Archives and favorites stay private to their owner
                or_(Asset.owner_id == options.viewer_id, Asset.is_archived.is_(False)),
            )
            .order_by(Asset.file_created_at.desc(), Asset.id.desc())
        )
        if options.is_archived is not None:
            stmt = stmt.where(Asset.is_archived == options.is_archived)
        if options.is_favorite is not None:
            stmt = stmt.where(and_(Asset.owner_id == options.viewer_id, Asset.is_favorite == options.is_favorite))
        if options.file_created_after is not None:
            stmt = stmt.where(Asset.file_created_at >= options.file_created_after)
        if options.file_created_before is not None:
            stmt = stmt.where(Asset.file_created_at <= options.file_created_before)

        return [MapMarker(*row) for row in self.db.execute(stmt).all()]

    def get_on_this_day(self, owner_ids: tuple[uuid.UUID, ...], month: int, day: int, before_year: int) -> list[Asset]:
        """Assets taken on ``month``/``day`` of any year before ``before_year``, newest year first."""
        stmt = (
            self._browsable(owner_ids)
            .where(
                extract("month", Asset.local_date_time) == month,
                extract("day", Asset.local_date_time) == day,
                extract("year", Asset.local_date_time) < before_year,
            )
            .order_by(Asset.local_date_time.desc(), Asset.id.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_random(self, owner_ids: tuple[uuid.UUID, ...], count: int) -> list[Asset]:
        stmt = self._browsable(owner_ids).order_by(func.random()).limit(count)
        return list(self.db.execute(stmt).scalars().all())

    @staticmethod
    def _browsable(owner_ids: tuple[uuid.UUID, ...]) -> Select:
        """Visible, unarchived, untrashed assets of ``owner_ids`` with EXIF and stack loaded."""
        return (
            select(Asset)
            .where(
                Asset.owner_id.in_(owner_ids),
                Asset.is_visible.is_(True),
                Asset.is_archived.is_(False),
                Asset.deleted_at.is_(None),
            )
            .options(selectinload(Asset.exif_info), selectinload(Asset.stack).selectinload(Stack.assets))
        )

    def _apply_filters(self, stmt: Select, options: TimeBucketOptions) -> Select:
        stmt = stmt.where(Asset.is_visible.is_(True))

        # Albums and links grant every asset they hold, whoever owns it, so the
        # owner filter only bounds plain timelines
        if options.album_id is not None:
            stmt = stmt.where(Asset.id.in_(select(album_assets.c.asset_id).where(album_assets.c.album_id == options.album_id)))
        if options.shared_link_id is not None:
            linked = select(shared_link_assets.c.asset_id).where(shared_link_assets.c.shared_link_id == options.shared_link_id)
            via_album = select(album_assets.c.asset_id).join(SharedLink, SharedLink.album_id == album_assets.c.album_id).where(SharedLink.id == options.shared_link_id)
            stmt = stmt.where(or_(Asset.id.in_(linked), Asset.id.in_(via_album)))
        if options.album_id is None and options.shared_link_id is None:
            stmt = stmt.where(Asset.owner_id.in_(options.owner_ids))

        if options.is_archived is not None:
            stmt = stmt.where(Asset.is_archived == options.is_archived)
        if options.is_favorite is not None:
            stmt = stmt.where(Asset.is_favorite == options.is_favorite)
        stmt = stmt.where(Asset.deleted_at.is_not(None) if options.is_trashed else Asset.deleted_at.is_(None))

        if options.with_stacked:
            stmt = stmt.outerjoin(Stack, Stack.id == Asset.stack_id).where(or_(Asset.stack_id.is_(None), Stack.primary_asset_id == Asset.id))

        return stmt
