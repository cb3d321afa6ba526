import uuid

from sqlalchemy import select

from photoline.models.user import User
from photoline.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository):
    def get_user_by_id(self, user_id: uuid.UUID) -> User | None:
        stmt = select(User).where(User.id == user_id, User.deleted_at.is_(None))
        return self.db.execute(stmt).scalar_one_or_none()
