import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from photoline.api.dependencies import get_asset_service
from photoline.auth_utils import AuthContext, get_auth, require_account
from photoline.schemas.asset import (
    AssetResponse,
    AssetStatsRequest,
    AssetStatsResponse,
    MapMarkerRequest,
    MapMarkerResponse,
    MemoryLaneRequest,
    MemoryLaneResponse,
    RandomAssetsRequest,
    SanitizedAssetResponse,
)
from photoline.services.asset_service import AssetService

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get("/statistics", response_model=AssetStatsResponse)
def get_asset_statistics(
    dto: Annotated[AssetStatsRequest, Query()],
    auth: AuthContext = Depends(require_account),
    service: AssetService = Depends(get_asset_service),
) -> AssetStatsResponse:
    return service.get_statistics(auth, dto)


@router.get("/map-marker", response_model=list[MapMarkerResponse])
def get_map_markers(
    dto: Annotated[MapMarkerRequest, Query()],
    auth: AuthContext = Depends(require_account),
    service: AssetService = Depends(get_asset_service),
) -> list[MapMarkerResponse]:
    return service.get_map_markers(auth, dto)


@router.get("/memory-lane", response_model=list[MemoryLaneResponse])
def get_memory_lane(
    dto: Annotated[MemoryLaneRequest, Query()],
    auth: AuthContext = Depends(require_account),
    service: AssetService = Depends(get_asset_service),
) -> list[MemoryLaneResponse]:
    return service.get_memory_lane(auth, dto)


@router.get("/random", response_model=list[AssetResponse])
def get_random_assets(
    dto: Annotated[RandomAssetsRequest, Query()],
    auth: AuthContext = Depends(require_account),
    service: AssetService = Depends(get_asset_service),
) -> list[AssetResponse]:
    return service.get_random(auth, dto.count)


# Declared last so the fixed paths above are matched first
@router.get("/{asset_id}", response_model=AssetResponse | SanitizedAssetResponse)
def get_asset_info(
    asset_id: uuid.UUID,
    auth: AuthContext = Depends(get_auth),
    service: AssetService = Depends(get_asset_service),
):
    return service.get(auth, asset_id)
