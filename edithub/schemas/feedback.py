from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FeedbackCreate(BaseModel):
    timestamp_seconds: int = Field(..., ge=0)
    comment:           str = Field(..., min_length=1, max_length=2000)


class FeedbackOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id:                int
    video_id:          int
    client_code:       str
    timestamp_seconds: int
    comment:           str
    created_at:        datetime
