import uuid

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import aliased

from photoline.models.album import Album, album_assets, album_users
from photoline.models.asset import Asset
from photoline.models.partner import Partner
from photoline.models.sharelink import SharedLink, shared_link_assets
from photoline.models.user import User
from photoline.repositories.base_repository import BaseRepository


class AccessRepository(BaseRepository):
    """Grant lookups. Each check returns the subset of ``ids`` that is allowed."""

    def album_owner_access(self, user_id: uuid.UUID, album_ids: set[uuid.UUID]) -> set[uuid.UUID]:
        if not album_ids:
            return set()
        stmt = select(Album.id).where(Album.id.in_(album_ids), Album.owner_id == user_id)
        return set(self.db.execute(stmt).scalars().all())

    def album_member_access(self, user_id: uuid.UUID, album_ids: set[uuid.UUID]) -> set[uuid.UUID]:
        if not album_ids:
            return set()
        stmt = select(album_users.c.album_id).where(album_users.c.album_id.in_(album_ids), album_users.c.user_id == user_id)
        return set(self.db.execute(stmt).scalars().all())

    def album_shared_link_access(self, shared_link_id: uuid.UUID, album_ids: set[uuid.UUID]) -> set[uuid.UUID]:
        if not album_ids:
            return set()
        stmt = select(SharedLink.album_id).where(SharedLink.id == shared_link_id, SharedLink.album_id.in_(album_ids))
        return set(self.db.execute(stmt).scalars().all())

    def timeline_partner_access(self, user_id: uuid.UUID, owner_ids: set[uuid.UUID]) -> set[uuid.UUID]:
        """Owners sharing their library with ``user_id``, both accounts still active."""
        if not owner_ids:
            return set()
        owner = aliased(User)
        recipient = aliased(User)
        stmt = (
            select(Partner.shared_by_id)
            .join(owner, owner.id == Partner.shared_by_id)
            .join(recipient, recipient.id == Partner.shared_with_id)
            .where(
                Partner.shared_with_id == user_id,
                Partner.shared_by_id.in_(owner_ids),
                owner.deleted_at.is_(None),
                recipient.deleted_at.is_(None),
            )
        )
        return set(self.db.execute(stmt).scalars().all())

    def asset_owner_access(self, user_id: uuid.UUID, asset_ids: set[uuid.UUID]) -> set[uuid.UUID]:
        if not asset_ids:
            return set()
        stmt = select(Asset.id).where(Asset.id.in_(asset_ids), Asset.owner_id == user_id)
        return set(self.db.execute(stmt).scalars().all())

    def asset_album_access(self, user_id: uuid.UUID, asset_ids: set[uuid.UUID]) -> set[uuid.UUID]:
        """Assets inside albums the user owns or was added to."""
        if not asset_ids:
            return set()
        member_albums = select(album_users.c.album_id).where(album_users.c.user_id == user_id)
        stmt = (
            select(album_assets.c.asset_id)
            .join(Album, Album.id == album_assets.c.album_id)
            .where(
                album_assets.c.asset_id.in_(asset_ids),
                or_(Album.owner_id == user_id, Album.id.in_(member_albums)),
            )
            .distinct()
        )
        return set(self.db.execute(stmt).scalars().all())

    def asset_partner_access(self, user_id: uuid.UUID, asset_ids: set[uuid.UUID]) -> set[uuid.UUID]:
        if not asset_ids:
            return set()
        owner = aliased(User)
        recipient = aliased(User)
        stmt = (
            select(Asset.id)
            .join(Partner, Partner.shared_by_id == Asset.owner_id)
            .join(owner, owner.id == Partner.shared_by_id)
            .join(recipient, recipient.id == Partner.shared_with_id)
            .where(
                Asset.id.in_(asset_ids),
                Partner.shared_with_id == user_id,
                owner.deleted_at.is_(None),
                recipient.deleted_at.is_(None),
            )
        )
        return set(self.db.execute(stmt).scalars().all())

    def asset_shared_link_access(self, shared_link_id: uuid.UUID, asset_ids: set[uuid.UUID]) -> set[uuid.UUID]:
        """Assets attached to the link directly or through the link's album."""
        if not asset_ids:
            return set()
        direct = select(shared_link_assets.c.asset_id).where(
            shared_link_assets.c.shared_link_id == shared_link_id,
            shared_link_assets.c.asset_id.in_(asset_ids),
        )
        via_album = (
            select(album_assets.c.asset_id)
            .join(SharedLink, and_(SharedLink.album_id == album_assets.c.album_id, SharedLink.id == shared_link_id))
            .where(album_assets.c.asset_id.in_(asset_ids))
        )
        return set(self.db.execute(direct.union(via_album)).scalars().all())
