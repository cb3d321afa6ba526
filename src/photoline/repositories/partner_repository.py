import uuid
from dataclasses import dataclass

from sqlalchemy import or_, select

from photoline.models.partner import Partner
from photoline.repositories.base_repository import BaseRepository


@dataclass(frozen=True)
class SharingRelationship:
    """A partner row resolved into the facts access decisions need.

    Visibility flows from ``owner_id`` to ``recipient_id`` only.
    """

    owner_id: uuid.UUID
    recipient_id: uuid.UUID
    owner_consents: bool
    recipient_consents: bool
    in_timeline: bool

    @property
    def shares_timeline(self) -> bool:
        return self.owner_consents and self.recipient_consents and self.in_timeline


class PartnerRepository(BaseRepository):
    def get_all(self, user_id: uuid.UUID) -> list[SharingRelationship]:
        """Every relationship the user takes part in, as owner or as recipient."""
        stmt = select(Partner).where(or_(Partner.shared_by_id == user_id, Partner.shared_with_id == user_id)).order_by(Partner.created_at.asc())
        partners = self.db.execute(stmt).unique().scalars().all()
        return [self._to_relationship(partner) for partner in partners]

    @staticmethod
    def _to_relationship(partner: Partner) -> SharingRelationship:
        return SharingRelationship(
            owner_id=partner.shared_by_id,
            recipient_id=partner.shared_with_id,
            owner_consents=partner.shared_by is not None and partner.shared_by.is_active,
            recipient_consents=partner.shared_with is not None and partner.shared_with.is_active,
            in_timeline=partner.in_timeline,
        )
