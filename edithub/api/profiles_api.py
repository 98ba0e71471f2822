# edithub/api/profiles_api.py
from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from edithub.core.database import get_db
from edithub.core.security import hash_password, normalize_email, verify_password
from edithub.models.profile import Profile
from edithub.schemas.profile import ProfileOut, ProfileSignIn, ProfileSignUp

router = APIRouter(prefix="/profiles", tags=["profiles"])

logger = logging.getLogger(__name__)


@router.post("/sign-up", response_model=ProfileOut)
def sign_up(payload: ProfileSignUp, db: Session = Depends(get_db)):
    email = normalize_email(payload.email)
    if "@" not in email:
        raise HTTPException(status_code=400, detail="Invalid email")

    exists = db.query(Profile).filter(Profile.email == email).first()
    if exists:
        raise HTTPException(
            status_code=400,
            detail="This email is already registered. Please try signing in instead.",
        )

    p = Profile(
        email=email,
        display_name=(payload.display_name or "").strip() or None,
        password_hash=hash_password(payload.password),
    )
    db.add(p)
    db.commit()
    db.refresh(p)
    logger.info("Profile %s created", p.id)
    return ProfileOut.model_validate(p)


@router.post("/sign-in", response_model=ProfileOut)
def sign_in(payload: ProfileSignIn, db: Session = Depends(get_db)):
    p = db.query(Profile).filter(Profile.email == normalize_email(payload.email)).first()
    if not p or not verify_password(payload.password, p.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password.")

    p.last_login_at = datetime.utcnow()
    db.commit()
    db.refresh(p)
    return ProfileOut.model_validate(p)
