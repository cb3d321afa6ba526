from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from photoline.models.asset import Asset, AssetType


class ExifResponse(BaseModel):
    make: str | None = None
    model: str | None = None
    lens_model: str | None = None
    exif_image_width: int | None = None
    exif_image_height: int | None = None
    file_size_in_byte: int | None = None
    orientation: str | None = None
    date_time_original: datetime | None = None
    time_zone: str | None = None
    f_number: float | None = None
    focal_length: float | None = None
    iso: int | None = None
    exposure_time: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    description: str = ""

    model_config = ConfigDict(from_attributes=True)


class AssetStackResponse(BaseModel):
    id: UUID
    primary_asset_id: UUID | None
    asset_count: int


class SanitizedAssetResponse(BaseModel):
    """What an anonymous viewer sees when the link hides metadata."""

    id: UUID
    type: AssetType
    thumbhash: str | None = None
    original_mime_type: str | None = None
    local_date_time: datetime
    duration: str | None = None
    has_metadata: bool = False


class AssetResponse(SanitizedAssetResponse):
    owner_id: UUID
    original_file_name: str
    file_created_at: datetime
    updated_at: datetime
    is_favorite: bool
    is_archived: bool
    is_trashed: bool
    exif_info: ExifResponse | None = None
    stack: AssetStackResponse | None = None
    has_metadata: bool = True


class AssetStatsRequest(BaseModel):
    is_archived: bool | None = None
    is_favorite: bool | None = None
    is_trashed: bool | None = None


class AssetStatsResponse(BaseModel):
    images: int = Field(0, description="Number of images")
    videos: int = Field(0, description="Number of videos")
    total: int = Field(0, description="Number of assets of any type")


def map_asset(asset: Asset, *, viewer_id: UUID | None = None, with_stack: bool = False, strip_metadata: bool = False) -> AssetResponse | SanitizedAssetResponse:
    """Project an asset for a viewer.

    ``strip_metadata`` drops everything but what is needed to render a thumbnail.
    Favorites are private to the owner, so other viewers always see ``False``.
    """
    if strip_metadata:
        return SanitizedAssetResponse(
            id=asset.id,
            type=asset.type,
            thumbhash=asset.thumbhash,
            original_mime_type=asset.original_mime_type,
            local_date_time=asset.local_date_time,
            duration=asset.duration,
        )

    stack = None
    if with_stack and asset.stack is not None:
        stack = AssetStackResponse(id=asset.stack.id, primary_asset_id=asset.stack.primary_asset_id, asset_count=len(asset.stack.assets))

    return AssetResponse(
        id=asset.id,
        type=asset.type,
        thumbhash=asset.thumbhash,
        original_mime_type=asset.original_mime_type,
        local_date_time=asset.local_date_time,
        duration=asset.duration,
        owner_id=asset.owner_id,
        original_file_name=asset.original_file_name,
        file_created_at=asset.file_created_at,
        updated_at=asset.updated_at,
        is_favorite=asset.is_favorite if viewer_id == asset.owner_id else False,
        is_archived=asset.is_archived,
        is_trashed=asset.is_trashed,
        exif_info=ExifResponse.model_validate(asset.exif_info) if asset.exif_info is not None else None,
        stack=stack,
    )


class MapMarkerRequest(BaseModel):
    is_archived: bool | None = None
    is_favorite: bool | None = None
    file_created_after: datetime | None = None
    file_created_before: datetime | None = None
    with_partners: bool = Field(False, description="Include libraries partners share into this timeline")
    with_shared_albums: bool = Field(False, description="Include assets of albums the user owns or belongs to")


class MapMarkerResponse(BaseModel):
    id: UUID
    latitude: float
    longitude: float
    city: str | None = None
    state: str | None = None
    country: str | None = None


class MemoryLaneRequest(BaseModel):
    day: int = Field(..., ge=1, le=31)
    month: int = Field(..., ge=1, le=12)


class MemoryLaneResponse(BaseModel):
    years_ago: int
    title: str
    assets: list[AssetResponse]


class RandomAssetsRequest(BaseModel):
    count: int = Field(1, ge=1, le=1000)
