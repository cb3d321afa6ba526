# Repositories package

from .access_repository import AccessRepository
from .asset_repository import AssetRepository, MapMarker, MapMarkerOptions, TimeBucketCount, TimeBucketOptions
from .base_repository import BaseRepository
from .partner_repository import PartnerRepository, SharingRelationship
from .sharelink_repository import SharedLinkRepository
from .user_repository import UserRepository

__all__ = [
    "AccessRepository",
    "AssetRepository",
    "BaseRepository",
    "MapMarker",
    "MapMarkerOptions",
    "PartnerRepository",
    "SharedLinkRepository",
    "SharingRelationship",
    "TimeBucketCount",
    "TimeBucketOptions",
    "UserRepository",
]
