from fastapi import APIRouter, Depends

from photoline.config import MachineLearningSettings, get_ml_settings
from photoline.schemas.server import ServerFeaturesResponse

router = APIRouter(prefix="/server", tags=["server"])


@router.get("/features", response_model=ServerFeaturesResponse)
def get_server_features(settings: MachineLearningSettings = Depends(get_ml_settings)) -> ServerFeaturesResponse:
    smart_search = settings.is_enabled(settings.clip)
    return ServerFeaturesResponse(
        smart_search=smart_search,
        facial_recognition=settings.is_enabled(settings.facial_recognition),
        duplicate_detection=smart_search,
    )
