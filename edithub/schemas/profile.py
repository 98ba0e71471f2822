from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProfileSignUp(BaseModel):
    email:        str = Field(..., min_length=3, max_length=255)
    password:     str = Field(..., min_length=6, max_length=128)
    display_name: str | None = Field(default=None, max_length=120)


class ProfileSignIn(BaseModel):
    email:    str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id:            int
    email:         str
    display_name:  str | None
    created_at:    datetime
    last_login_at: datetime | None = None
