"""Settings read from the environment.

Machine-learning model settings are composed rather than inherited: every
model-specific block embeds a :class:`ModelSettings` value and exposes its
common fields through the :class:`ModelSettingsReader` protocol.
"""

import enum
from functools import lru_cache
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_prefix="PHOTOLINE_", extra="ignore")


class ModelType(enum.StrEnum):
    CLIP = "clip"
    FACIAL_RECOGNITION = "facial-recognition"


class CLIPMode(enum.StrEnum):
    VISION = "vision"
    TEXT = "text"


class ModelSettings(BaseModel):
    enabled: bool = True
    model_name: str = Field(..., min_length=1)
    model_type: ModelType | None = None

    model_config = ConfigDict(protected_namespaces=())


class ModelSettingsReader(Protocol):
    @property
    def enabled(self) -> bool: ...

    @property
    def model_name(self) -> str: ...

    @property
    def model_type(self) -> ModelType | None: ...


class _EmbedsModel:
    """Exposes the embedded ModelSettings fields; mixed into pydantic models with a ``model`` field."""

    @property
    def enabled(self) -> bool:
        return self.model.enabled

    @property
    def model_name(self) -> str:
        return self.model.model_name

    @property
    def model_type(self) -> ModelType | None:
        return self.model.model_type


class ClipSettings(_EmbedsModel, BaseModel):
    model: ModelSettings = Field(default_factory=lambda: ModelSettings(model_name="ViT-B-32__openai", model_type=ModelType.CLIP))
    mode: CLIPMode | None = None
    duplicate_threshold: float = Field(0.01, ge=0.01, le=0.1)


class RecognitionSettings(_EmbedsModel, BaseModel):
    model: ModelSettings = Field(default_factory=lambda: ModelSettings(model_name="buffalo_l", model_type=ModelType.FACIAL_RECOGNITION))
    min_score: float = Field(0.7, ge=0, le=1)
    max_distance: float = Field(0.5, ge=0, le=2)
    min_faces: int = Field(3, ge=1)


class MachineLearningSettings(BaseSettings):
    """Read with the ``ML_`` prefix and ``__`` for nesting.

    e.g. ``ML_FACIAL_RECOGNITION__MIN_FACES=5`` or
    ``ML_CLIP__MODEL='{"enabled": false, "model_name": "ViT-B-32__openai"}'``.
    """

    enabled: bool = True
    clip: ClipSettings = Field(default_factory=ClipSettings)
    facial_recognition: RecognitionSettings = Field(default_factory=RecognitionSettings)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_prefix="ML_", env_nested_delimiter="__", extra="ignore")

    def is_enabled(self, settings: ModelSettingsReader) -> bool:
        return self.enabled and settings.enabled


@lru_cache(maxsize=1)
def get_ml_settings() -> MachineLearningSettings:
    return MachineLearningSettings()
