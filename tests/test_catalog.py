from datetime import datetime, timedelta

import pytest

from conftest import add_client, add_code, add_group, add_video, next_week, yesterday
from edithub.core.errors import NotFound, ValidationFailed
from edithub.models import Client, Feedback, Video
from edithub.services import catalog


def test_expires_at_from_days():
    now = datetime(2026, 10, 19, 9, 30)

    assert catalog.expires_at_from_days(None, now) is None
    assert catalog.expires_at_from_days(0, now) is None
    assert catalog.expires_at_from_days(7, now) == datetime(2026, 10, 26, 9, 30)
    with pytest.raises(ValidationFailed):
        catalog.expires_at_from_days(-1, now)


def test_create_link_video(db):
    group = add_group(db)

    v = catalog.create_link_video(
        db,
        name=" Intro ",
        link="https://player.example.com/embed/1",
        group_id=group.id,
        description="",
        added_by="7016565502",
    )

    assert v.name == "Intro"
    assert v.description is None
    assert v.video_id.startswith("VID_")
    assert v.is_active
    assert v.expires_at is None


def test_create_link_video_requires_existing_group(db):
    with pytest.raises(ValidationFailed):
        catalog.create_link_video(db, name="X", link="https://x", group_id=None)
    with pytest.raises(NotFound):
        catalog.create_link_video(db, name="X", link="https://x", group_id=42)
    assert db.query(Video).count() == 0


def test_code_in_use_spans_all_tables(db):
    group = add_group(db, code="G-CODE")
    add_client(db, "C-CODE", group=group)
    add_code(db, "A-CODE")

    for code in ("G-CODE", "C-CODE", "A-CODE"):
        assert catalog.code_in_use(db, code)
    assert not catalog.code_in_use(db, "FREE")


def test_create_group_rejects_taken_code(db):
    add_code(db, "7016565502")
    with pytest.raises(ValidationFailed):
        catalog.create_group(db, name="Dup", access_code="7016565502")


def test_cleanup_deactivates_expired(db):
    group = add_group(db)
    old = add_video(db, group, "Old", expires_at=yesterday())
    live = add_video(db, group, "Live", expires_at=next_week())
    forever = add_video(db, group, "Forever")

    assert catalog.cleanup_expired_videos(db) == 1

    db.expire_all()
    assert not db.get(Video, old.id).is_active
    assert db.get(Video, live.id).is_active
    assert db.get(Video, forever.id).is_active
    # second run finds nothing new
    assert catalog.cleanup_expired_videos(db) == 0


def test_cleanup_hard_delete(db):
    group = add_group(db)
    old = add_video(db, group, "Old", expires_at=yesterday())
    db.add(Feedback(video_id=old.id, client_code="ACME1", timestamp_seconds=3, comment="hm"))
    db.commit()
    add_video(db, group, "Live")

    assert catalog.cleanup_expired_videos(db, now=datetime.utcnow() + timedelta(seconds=1), hard_delete=True) == 1

    assert [v.name for v in db.query(Video).all()] == ["Live"]
    assert db.query(Feedback).count() == 0


def test_delete_group_keeps_clients_unassigned(db):
    group = add_group(db)
    add_video(db, group, "Intro")
    client = add_client(db, "JANE", group=group)

    catalog.delete_group(db, group)

    db.expire_all()
    assert db.query(Video).count() == 0
    assert db.get(Client, client.id).group_id is None
