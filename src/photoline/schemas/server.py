from pydantic import BaseModel


class ServerFeaturesResponse(BaseModel):
    smart_search: bool
    facial_recognition: bool
    duplicate_detection: bool
