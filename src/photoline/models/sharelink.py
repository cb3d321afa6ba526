import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import mapped_column, relationship

from photoline.db import Base

shared_link_assets = Table(
    "shared_link_assets",
    Base.metadata,
    Column("shared_link_id", Uuid, ForeignKey("shared_links.id", ondelete="CASCADE"), primary_key=True),
    Column("asset_id", Uuid, ForeignKey("assets.id", ondelete="CASCADE"), primary_key=True),
)


class SharedLinkType(enum.StrEnum):
    ALBUM = "ALBUM"
    INDIVIDUAL = "INDIVIDUAL"


class SharedLink(Base):
    __tablename__ = "shared_links"

    id = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    key = mapped_column(String(64), unique=True, nullable=False, index=True)
    user_id = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = mapped_column(Enum(SharedLinkType, native_enum=False), nullable=False, default=SharedLinkType.ALBUM)
    album_id = mapped_column(Uuid, ForeignKey("albums.id", ondelete="CASCADE"), nullable=True)
    description = mapped_column(String, nullable=True)
    show_exif = mapped_column(Boolean, nullable=False, default=True)
    allow_download = mapped_column(Boolean, nullable=False, default=True)
    expires_at = mapped_column(DateTime(timezone=True), nullable=True)
    created_at = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    user = relationship("User", lazy="joined")
    album = relationship("Album", back_populates="shared_links")
    assets = relationship("Asset", secondary=shared_link_assets)
