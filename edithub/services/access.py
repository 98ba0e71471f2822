# edithub/services/access.py
"""
Resolve a submitted access code into a role and a group scope.

Lookup order, first match wins:
  1. access_codes  — active row → its stored role (global for elevated roles)
  2. clients       — active row → client, scoped to the client's group
  3. groups        — shared group code → client, scoped to that group

Not found, inactive and database failure all produce the same user-facing
reason. Database failure is marked retryable so callers can offer a retry
instead of a rejection.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from edithub.core.errors import INVALID_CODE
from edithub.core.roles import Role, parse_role
from edithub.models.access_code import AccessCode
from edithub.models.client import Client
from edithub.models.group import VideoGroup
from edithub.services.session import Identity

logger = logging.getLogger(__name__)

EMPTY_CODE = "Please enter an access code"


@dataclass(frozen=True)
class AccessResult:
    success: bool
    identity: Optional[Identity] = None
    reason: Optional[str] = None
    retryable: bool = False

    @property
    def role(self) -> Role | None:
        return self.identity.role if self.identity else None

    @property
    def scope(self) -> int | None:
        return self.identity.scope if self.identity else None


def _granted(identity: Identity) -> AccessResult:
    return AccessResult(success=True, identity=identity)


def _denied(retryable: bool = False) -> AccessResult:
    return AccessResult(success=False, reason=INVALID_CODE, retryable=retryable)


def _from_access_codes(db: Session, code: str) -> Identity | None:
    row = db.scalar(select(AccessCode).where(AccessCode.code == code))
    if not row or not row.is_active:
        return None

    role = parse_role(row.role)
    if role is None:
        logger.warning("access_codes row %s has unknown role %r", row.id, row.role)
        return None

    return Identity(role=role, code=code, scope=None, name=row.assigned_to_email)


def _from_clients(db: Session, code: str) -> Identity | None:
    row = db.scalar(select(Client).where(Client.access_code == code))
    if not row or not row.is_active:
        return None
    return Identity(role=Role.CLIENT, code=code, scope=row.group_id, name=row.client_name)


def _from_groups(db: Session, code: str) -> Identity | None:
    row = db.scalar(select(VideoGroup).where(VideoGroup.access_code == code))
    if not row:
        return None
    return Identity(role=Role.CLIENT, code=code, scope=row.id, name=row.name)


LOOKUPS = (_from_access_codes, _from_clients, _from_groups)


def resolve(db: Session, code: str) -> AccessResult:
    if not code or not code.strip():
        return AccessResult(success=False, reason=EMPTY_CODE)

    try:
        for lookup in LOOKUPS:
            identity = lookup(db, code)
            if identity is not None:
                logger.info("Access granted: role=%s scope=%s", identity.role.value, identity.scope)
                return _granted(identity)
    except SQLAlchemyError as e:
        logger.error(f"Access lookup failed: {e}")
        return _denied(retryable=True)

    logger.info("Access denied for submitted code")
    return _denied()
