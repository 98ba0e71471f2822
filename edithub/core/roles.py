# edithub/core/roles.py
"""
Roles and the guard helpers used by the API routes via Depends.

Roles:
  main_admin — everything, including minting other main_admin codes
  admin      — catalog, clients, groups, access codes
  moderator  — catalog, clients, groups; no access-code management
  client     — sees the videos of one group, may leave feedback
"""
from __future__ import annotations

from enum import Enum

from fastapi import HTTPException, Request


class Role(str, Enum):
    MAIN_ADMIN = "main_admin"
    ADMIN = "admin"
    MODERATOR = "moderator"
    CLIENT = "client"

    @property
    def is_elevated(self) -> bool:
        return _ELEVATED[self]

    @property
    def manages_codes(self) -> bool:
        return _MANAGES_CODES[self]


# Every member must appear in both tables.
_ELEVATED: dict[Role, bool] = {
    Role.MAIN_ADMIN: True,
    Role.ADMIN: True,
    Role.MODERATOR: True,
    Role.CLIENT: False,
}

_MANAGES_CODES: dict[Role, bool] = {
    Role.MAIN_ADMIN: True,
    Role.ADMIN: True,
    Role.MODERATOR: False,
    Role.CLIENT: False,
}


def parse_role(raw: str | None) -> Role | None:
    try:
        return Role(raw)
    except ValueError:
        return None


# ── Guards ────────────────────────────────────────────

def _get_identity(request: Request):
    return getattr(request.state, "identity", None)


def require_identity(request: Request):
    """Any signed-in identity."""
    identity = _get_identity(request)
    if identity is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return identity


def require_elevated(request: Request):
    """main_admin, admin or moderator."""
    identity = require_identity(request)
    if not identity.role.is_elevated:
        raise HTTPException(status_code=403, detail="Admin access required")
    return identity


def require_code_manager(request: Request):
    """main_admin or admin."""
    identity = require_identity(request)
    if not identity.role.manages_codes:
        raise HTTPException(status_code=403, detail="Admin access required")
    return identity


def require_client(request: Request):
    identity = require_identity(request)
    if identity.role is not Role.CLIENT:
        raise HTTPException(status_code=403, detail="Only clients can leave feedback")
    return identity
