# edithub/services/session.py
"""
Holds the identity resolved from an access code for one visit.

The holder wraps any key-value mapping. In the HTTP app that is the signed
session cookie (``request.session``); tests pass a plain dict. Two keys are
written: the resolved role and the resolved identity (code, group scope,
display name). The stored identity is not re-checked against the database.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import MutableMapping, Optional

from edithub.core.roles import Role, parse_role

ROLE_KEY = "access_role"
IDENTITY_KEY = "access_identity"


@dataclass(frozen=True)
class Identity:
    role: Role
    code: str
    # Group id for clients; None means global for elevated roles
    # and "no group assigned" for clients.
    scope: Optional[int] = None
    name: Optional[str] = None

    @property
    def is_global(self) -> bool:
        return self.role.is_elevated

    def to_dict(self) -> dict:
        return {
            "role": self.role.value,
            "code": self.code,
            "scope": self.scope,
            "name": self.name,
            "is_global": self.is_global,
        }


class SessionHolder:
    def __init__(self, store: MutableMapping):
        self._store = store

    def establish(self, identity: Identity) -> Identity:
        self.clear()
        self._store[ROLE_KEY] = identity.role.value
        self._store[IDENTITY_KEY] = {
            "code": identity.code,
            "scope": identity.scope,
            "name": identity.name,
        }
        return identity

    def current(self) -> Identity | None:
        role = parse_role(self._store.get(ROLE_KEY))
        raw = self._store.get(IDENTITY_KEY)
        if role is None or not isinstance(raw, dict) or not raw.get("code"):
            return None

        scope = raw.get("scope")
        return Identity(
            role=role,
            code=str(raw["code"]),
            scope=int(scope) if scope is not None else None,
            name=raw.get("name"),
        )

    def clear(self) -> None:
        self._store.pop(ROLE_KEY, None)
        self._store.pop(IDENTITY_KEY, None)
