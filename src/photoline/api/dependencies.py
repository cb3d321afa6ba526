from fastapi import Depends
from sqlalchemy.orm import Session

from photoline.db import get_db
from photoline.repositories.access_repository import AccessRepository
from photoline.repositories.asset_repository import AssetRepository
from photoline.repositories.partner_repository import PartnerRepository
from photoline.services.access import AccessCore
from photoline.services.asset_service import AssetService
from photoline.services.timeline_service import TimelineService


def get_access_core(db: Session = Depends(get_db)) -> AccessCore:
    return AccessCore(AccessRepository(db))


def get_timeline_service(db: Session = Depends(get_db), access: AccessCore = Depends(get_access_core)) -> TimelineService:
    return TimelineService(access, AssetRepository(db), PartnerRepository(db))


def get_asset_service(db: Session = Depends(get_db), access: AccessCore = Depends(get_access_core)) -> AssetService:
    return AssetService(access, AssetRepository(db), PartnerRepository(db))
