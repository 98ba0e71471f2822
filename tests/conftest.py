import os

# Keep the app's module-level engine off the filesystem
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SESSION_SECRET", "test-secret")

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from edithub.core.config import settings
from edithub.core.database import Base, get_db
from edithub.models import AccessCode, Client, Video, VideoGroup
from main import app


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def make_http(session_factory):
    """Returns a factory of TestClients; each has its own cookie jar."""
    def override_get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = override_get_db
    yield lambda: TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def http(make_http):
    return make_http()


@pytest.fixture
def streamable_creds(monkeypatch):
    monkeypatch.setattr(settings, "STREAMABLE_USERNAME", "uploader@example.com")
    monkeypatch.setattr(settings, "STREAMABLE_PASSWORD", "s3cret")
    monkeypatch.setattr(settings, "STREAMABLE_API_URL", "https://api.streamable.test")


# ── Row builders ──────────────────────────────────────────

def add_group(db, name="Acme", code="ACME1", description=None):
    g = VideoGroup(name=name, access_code=code, description=description)
    db.add(g)
    db.commit()
    db.refresh(g)
    return g


def add_video(db, group, name, expires_at=None, is_active=True, created_at=None, description=None):
    v = Video(
        video_id=f"VID_{name}",
        name=name,
        description=description,
        link=f"https://player.example.com/{name}",
        group_id=group.id,
        expires_at=expires_at,
        is_active=is_active,
        created_at=created_at or datetime.utcnow(),
    )
    db.add(v)
    db.commit()
    db.refresh(v)
    return v


def add_code(db, code="7016565502", role="admin", is_active=True):
    row = AccessCode(code=code, role=role, is_active=is_active)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def add_client(db, code="CLIENT1", group=None, is_active=True, name="Jane"):
    c = Client(
        client_name=name,
        access_code=code,
        group_id=group.id if group else None,
        is_active=is_active,
    )
    db.add(c)
    db.commit()
    db.refresh(c)
    return c


def yesterday():
    return datetime.utcnow() - timedelta(days=1)


def next_week():
    return datetime.utcnow() + timedelta(days=7)
