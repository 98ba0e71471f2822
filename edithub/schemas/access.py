from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class SignInIn(BaseModel):
    code: str = Field(..., max_length=120)

    @field_validator("code")
    @classmethod
    def strip_code(cls, v: str) -> str:
        return v.strip()


class IdentityOut(BaseModel):
    role: str
    scope: int | None
    name: str | None
    is_global: bool
    is_admin: bool


class SignInOut(BaseModel):
    success: bool
    identity: IdentityOut | None = None
