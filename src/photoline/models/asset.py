import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime, Enum, Float, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import mapped_column, relationship

from photoline.db import Base
from photoline.models.album import album_assets


class AssetType(enum.StrEnum):
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    AUDIO = "AUDIO"
    OTHER = "OTHER"


class Stack(Base):
    """A group of related assets (bursts, RAW+JPEG) shown through one primary asset."""

    __tablename__ = "asset_stacks"

    id = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    primary_asset_id = mapped_column(Uuid, ForeignKey("assets.id", name="fk_asset_stacks_primary_asset_id", use_alter=True, ondelete="SET NULL"), nullable=True)

    assets = relationship("Asset", back_populates="stack", foreign_keys="Asset.stack_id")


class Asset(Base):
    __tablename__ = "assets"
    __table_args__ = (Index("ix_assets_owner_local_date_time", "owner_id", "local_date_time"),)

    id = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = mapped_column(Enum(AssetType, native_enum=False), nullable=False, default=AssetType.IMAGE)
    original_file_name = mapped_column(String, nullable=False)
    original_mime_type = mapped_column(String(127), nullable=True)
    # Capture time in UTC and the same instant as wall-clock time where it was taken
    file_created_at = mapped_column(DateTime(timezone=True), nullable=False)
    local_date_time = mapped_column(DateTime, nullable=False)
    updated_at = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
    duration = mapped_column(String(32), nullable=True)
    thumbhash = mapped_column(String, nullable=True)
    is_favorite = mapped_column(Boolean, nullable=False, default=False)
    is_archived = mapped_column(Boolean, nullable=False, default=False)
    # False for the hidden video half of a motion photo
    is_visible = mapped_column(Boolean, nullable=False, default=True)
    deleted_at = mapped_column(DateTime(timezone=True), nullable=True)
    stack_id = mapped_column(Uuid, ForeignKey("asset_stacks.id", ondelete="SET NULL"), nullable=True)

    stack = relationship(Stack, back_populates="assets", foreign_keys=[stack_id])
    exif_info = relationship("Exif", back_populates="asset", uselist=False, passive_deletes=True)
    albums = relationship("Album", secondary=album_assets, back_populates="assets")

    @property
    def is_trashed(self) -> bool:
        return self.deleted_at is not None


class Exif(Base):
    __tablename__ = "exif"

    asset_id = mapped_column(Uuid, ForeignKey("assets.id", ondelete="CASCADE"), primary_key=True)
    make = mapped_column(String, nullable=True)
    model = mapped_column(String, nullable=True)
    lens_model = mapped_column(String, nullable=True)
    exif_image_width = mapped_column(Integer, nullable=True)
    exif_image_height = mapped_column(Integer, nullable=True)
    file_size_in_byte = mapped_column(Integer, nullable=True)
    orientation = mapped_column(String(16), nullable=True)
    date_time_original = mapped_column(DateTime(timezone=True), nullable=True)
    time_zone = mapped_column(String(64), nullable=True)
    f_number = mapped_column(Float, nullable=True)
    focal_length = mapped_column(Float, nullable=True)
    iso = mapped_column(Integer, nullable=True)
    exposure_time = mapped_column(String(32), nullable=True)
    latitude = mapped_column(Float, nullable=True)
    longitude = mapped_column(Float, nullable=True)
    city = mapped_column(String, nullable=True)
    state = mapped_column(String, nullable=True)
    country = mapped_column(String, nullable=True)
    description = mapped_column(Text, nullable=False, default="")

    asset = relationship(Asset, back_populates="exif_info")
