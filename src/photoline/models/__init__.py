from photoline.models.album import Album, album_assets, album_users
from photoline.models.asset import Asset, AssetType, Exif, Stack
from photoline.models.partner import Partner
from photoline.models.sharelink import SharedLink, SharedLinkType, shared_link_assets
from photoline.models.user import User

__all__ = [
    "Album",
    "Asset",
    "AssetType",
    "Exif",
    "Partner",
    "SharedLink",
    "SharedLinkType",
    "Stack",
    "User",
    "album_assets",
    "album_users",
    "shared_link_assets",
]
