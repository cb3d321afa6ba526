from uuid import UUID

from pydantic import BaseModel, Field

from photoline.time_buckets import TimeBucketSize


class TimeBucketRequest(BaseModel):
    size: TimeBucketSize = Field(TimeBucketSize.MONTH, description="Bucket granularity")
    album_id: UUID | None = Field(None, description="Restrict the timeline to one album")
    with_partners: bool = Field(False, description="Include libraries partners share into this timeline")
    with_stacked: bool = Field(False, description="Collapse stacks to their primary asset")
    is_archived: bool | None = None
    is_favorite: bool | None = None
    is_trashed: bool | None = None


class TimeBucketAssetRequest(TimeBucketRequest):
    time_bucket: str = Field(..., min_length=7, description="Bucket key, e.g. 2024-03 or 2024-03-15")


class TimeBucketResponse(BaseModel):
    time_bucket: str
    count: int
