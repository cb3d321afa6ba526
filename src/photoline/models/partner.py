from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import mapped_column, relationship

from photoline.db import Base


class Partner(Base):
    """A user (shared_by) sharing their library with another user (shared_with)."""

    __tablename__ = "partners"

    shared_by_id = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    shared_with_id = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    # Set by the recipient: whether the owner's assets show up in their timeline
    in_timeline = mapped_column(Boolean, nullable=False, default=False)
    created_at = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    shared_by = relationship("User", foreign_keys=[shared_by_id], lazy="joined")
    shared_with = relationship("User", foreign_keys=[shared_with_id], lazy="joined")
