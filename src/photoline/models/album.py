import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import mapped_column, relationship

from photoline.db import Base

album_assets = Table(
    "album_assets",
    Base.metadata,
    Column("album_id", Uuid, ForeignKey("albums.id", ondelete="CASCADE"), primary_key=True),
    Column("asset_id", Uuid, ForeignKey("assets.id", ondelete="CASCADE"), primary_key=True, index=True),
)

album_users = Table(
    "album_users",
    Base.metadata,
    Column("album_id", Uuid, ForeignKey("albums.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True),
)


class Album(Base):
    __tablename__ = "albums"

    id = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = mapped_column(String, nullable=False, default="")
    created_at = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    owner = relationship("User")
    assets = relationship("Asset", secondary=album_assets, back_populates="albums")
    members = relationship("User", secondary=album_users)
    shared_links = relationship("SharedLink", back_populates="album", passive_deletes=True)
