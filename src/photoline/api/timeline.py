from typing import Annotated

from fastapi import APIRouter, Depends, Query

from photoline.api.dependencies import get_timeline_service
from photoline.auth_utils import AuthContext, get_auth
from photoline.schemas.asset import AssetResponse, SanitizedAssetResponse
from photoline.schemas.timeline import TimeBucketAssetRequest, TimeBucketRequest, TimeBucketResponse
from photoline.services.timeline_service import TimelineService

router = APIRouter(prefix="/timeline", tags=["timeline"])


@router.get("/buckets", response_model=list[TimeBucketResponse])
def get_time_buckets(
    dto: Annotated[TimeBucketRequest, Query()],
    auth: AuthContext = Depends(get_auth),
    service: TimelineService = Depends(get_timeline_service),
) -> list[TimeBucketResponse]:
    return service.get_time_buckets(auth, dto)


@router.get("/bucket", response_model=list[AssetResponse | SanitizedAssetResponse])
def get_time_bucket(
    dto: Annotated[TimeBucketAssetRequest, Query()],
    auth: AuthContext = Depends(get_auth),
    service: TimelineService = Depends(get_timeline_service),
):
    """Assets of one bucket. Anonymous viewers of links hiding metadata get the stripped shape."""
    return service.get_time_bucket(auth, dto)
