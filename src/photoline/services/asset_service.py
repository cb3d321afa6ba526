import uuid
from collections import defaultdict
from datetime import UTC, datetime

from fastapi import HTTPException

from photoline.auth_utils import AuthContext
from photoline.exceptions import upstream_read
from photoline.models.asset import AssetType
from photoline.repositories.asset_repository import AssetRepository, MapMarkerOptions
from photoline.repositories.partner_repository import PartnerRepository
from photoline.schemas.asset import (
    AssetResponse,
    AssetStatsRequest,
    AssetStatsResponse,
    MapMarkerRequest,
    MapMarkerResponse,
    MemoryLaneRequest,
    MemoryLaneResponse,
    SanitizedAssetResponse,
    map_asset,
)
from photoline.services.access import AccessCore, Permission
from photoline.services.timeline_service import timeline_partner_ids


def memory_title(years_ago: int) -> str:
    return "1 year ago" if years_ago == 1 else f"{years_ago} years ago"


class AssetService:
    def __init__(self, access: AccessCore, assets: AssetRepository, partners: PartnerRepository):
        self.access = access
        self.assets = assets
        self.partners = partners

    def get(self, auth: AuthContext, asset_id: uuid.UUID) -> AssetResponse | SanitizedAssetResponse:
        self.access.require_permission(auth, Permission.ASSET_READ, [asset_id])

        with upstream_read("asset"):
            asset = self.assets.get_by_id(asset_id)
        if asset is None:
            # Deleted between the access check and the read
            raise HTTPException(status_code=404, detail="Asset not found")

        if not auth.shows_metadata:
            return map_asset(asset, strip_metadata=True)
        return map_asset(asset, viewer_id=auth.user_id, with_stack=True)

    def get_statistics(self, auth: AuthContext, dto: AssetStatsRequest) -> AssetStatsResponse:
        with upstream_read("asset statistics"):
            counts = self.assets.get_statistics(auth.user_id, is_archived=dto.is_archived, is_favorite=dto.is_favorite, is_trashed=dto.is_trashed)

        return AssetStatsResponse(
            images=counts.get(AssetType.IMAGE, 0),
            videos=counts.get(AssetType.VIDEO, 0),
            total=sum(counts.values()),
        )

    def get_map_markers(self, auth: AuthContext, dto: MapMarkerRequest) -> list[MapMarkerResponse]:
        owner_ids = self._owner_ids(auth, with_partners=dto.with_partners)
        options = MapMarkerOptions(
            viewer_id=auth.user_id,
            owner_ids=owner_ids,
            with_shared_albums=dto.with_shared_albums,
            is_archived=dto.is_archived,
            is_favorite=dto.is_favorite,
            file_created_after=dto.file_created_after,
            file_created_before=dto.file_created_before,
        )

        with upstream_read("map markers"):
            markers = self.assets.get_map_markers(options)

        return [
            MapMarkerResponse(id=m.id, latitude=m.latitude, longitude=m.longitude, city=m.city, state=m.state, country=m.country)
            for m in markers
        ]

    def get_memory_lane(self, auth: AuthContext, dto: MemoryLaneRequest) -> list[MemoryLaneResponse]:
        """Assets from this day in earlier years, grouped by how long ago, most recent year first."""
        owner_ids = self._owner_ids(auth, with_partners=True)
        this_year = datetime.now(UTC).year

        with upstream_read("memory lane"):
            assets = self.assets.get_on_this_day(owner_ids, dto.month, dto.day, before_year=this_year)

        by_year: dict[int, list[AssetResponse]] = defaultdict(list)
        for asset in assets:
            by_year[this_year - asset.local_date_time.year].append(map_asset(asset, viewer_id=auth.user_id, with_stack=True))

        return [MemoryLaneResponse(years_ago=years_ago, title=memory_title(years_ago), assets=by_year[years_ago]) for years_ago in sorted(by_year)]

    def get_random(self, auth: AuthContext, count: int) -> list[AssetResponse]:
        owner_ids = self._owner_ids(auth, with_partners=True)

        with upstream_read("random assets"):
            assets = self.assets.get_random(owner_ids, count)

        return [map_asset(asset, viewer_id=auth.user_id, with_stack=True) for asset in assets]

    def _owner_ids(self, auth: AuthContext, *, with_partners: bool) -> tuple[uuid.UUID, ...]:
        """The caller, plus partners sharing into the caller's timeline once TIMELINE_READ holds for them."""
        if not with_partners:
            return (auth.user_id,)

        with upstream_read("partner relationships"):
            relationships = self.partners.get_all(auth.user_id)
        partner_ids = timeline_partner_ids(auth.user_id, relationships)
        self.access.require_permission(auth, Permission.TIMELINE_READ, partner_ids)
        return (auth.user_id, *partner_ids)
