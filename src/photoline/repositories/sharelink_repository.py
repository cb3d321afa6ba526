from datetime import UTC, datetime

from sqlalchemy import select

from photoline.models.sharelink import SharedLink
from photoline.repositories.base_repository import BaseRepository


class SharedLinkRepository(BaseRepository):
    def get_by_key(self, key: str) -> SharedLink | None:
        stmt = select(SharedLink).where(SharedLink.key == key)
        return self.db.execute(stmt).unique().scalar_one_or_none()

    def get_valid_shared_link(self, key: str) -> SharedLink | None:
        shared_link = self.get_by_key(key)
        if not shared_link:
            return None
        if shared_link.expires_at and _as_utc(shared_link.expires_at) < datetime.now(UTC):
            return None
        if not shared_link.user.is_active:
            return None
        return shared_link


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo
    return value if value.tzinfo else value.replace(tzinfo=UTC)
