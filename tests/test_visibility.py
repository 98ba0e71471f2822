from datetime import datetime, timedelta

from conftest import add_client, add_code, add_group, add_video, next_week, yesterday
from edithub.core.roles import Role
from edithub.models import Video
from edithub.services.access import resolve
from edithub.services.session import Identity
from edithub.services.visibility import is_expired, list_visible, load_managed, load_visible

NOW = datetime(2026, 10, 19, 12, 0, 0)

ADMIN = Identity(role=Role.ADMIN, code="7016565502")


def video(name, group_id=1, expires_at=None, is_active=True, created_at=NOW, description=None):
    return Video(
        video_id=f"VID_{name}",
        name=name,
        description=description,
        link="https://player.example.com/" + name,
        group_id=group_id,
        expires_at=expires_at,
        is_active=is_active,
        created_at=created_at,
    )


def names(videos):
    return [v.name for v in videos]


def test_acme_scenario(db):
    acme = add_group(db, name="Acme", code="ACME1")
    add_video(db, acme, "Intro")
    add_video(db, acme, "Old", expires_at=yesterday())

    result = resolve(db, "ACME1")

    assert names(load_visible(db, result.identity)) == ["Intro"]


def test_client_without_group_sees_nothing(db):
    acme = add_group(db)
    add_video(db, acme, "Intro")
    add_client(db, "LONER", group=None)

    identity = resolve(db, "LONER").identity

    assert load_visible(db, identity) == []
    assert list_visible([video("Intro", group_id=acme.id)], identity) == []


def test_client_only_sees_own_group(db):
    acme = add_group(db, name="Acme", code="ACME1")
    other = add_group(db, name="Other", code="OTHER1")
    add_video(db, acme, "Mine")
    add_video(db, other, "Theirs")
    add_client(db, "JANE", group=acme)

    identity = resolve(db, "JANE").identity

    assert names(load_visible(db, identity)) == ["Mine"]
    # a client cannot widen the scope with a view filter
    assert names(load_visible(db, identity, group_id=other.id)) == ["Mine"]


def test_admin_sees_all_groups_and_can_narrow(db):
    acme = add_group(db, name="Acme", code="ACME1")
    other = add_group(db, name="Other", code="OTHER1")
    add_video(db, acme, "A", created_at=NOW - timedelta(hours=2))
    add_video(db, other, "B", created_at=NOW - timedelta(hours=1))
    add_code(db, "7016565502", role="admin")

    identity = resolve(db, "7016565502").identity

    assert names(load_visible(db, identity)) == ["B", "A"]
    assert names(load_visible(db, identity, group_id=acme.id)) == ["A"]


def test_expired_hidden_for_every_role():
    catalog = [video("Live", expires_at=NOW + timedelta(days=1)), video("Gone", expires_at=NOW - timedelta(seconds=1))]
    client = Identity(role=Role.CLIENT, code="ACME1", scope=1)

    for identity in (ADMIN, client, Identity(role=Role.MAIN_ADMIN, code="m"), Identity(role=Role.MODERATOR, code="d")):
        assert names(list_visible(catalog, identity, now=NOW, admin_sees_expired=False)) == ["Live"]


def test_expiry_boundary_is_inclusive():
    v = video("Edge", expires_at=NOW)
    assert is_expired(v, NOW)
    assert list_visible([v], ADMIN, now=NOW, admin_sees_expired=False) == []


def test_admin_bypass_toggle_only_affects_elevated_roles():
    catalog = [video("Gone", expires_at=NOW - timedelta(days=1))]
    client = Identity(role=Role.CLIENT, code="ACME1", scope=1)

    assert names(list_visible(catalog, ADMIN, now=NOW, admin_sees_expired=True)) == ["Gone"]
    assert list_visible(catalog, client, now=NOW, admin_sees_expired=True) == []


def test_inactive_hidden():
    catalog = [video("Off", is_active=False), video("On")]
    assert names(list_visible(catalog, ADMIN, now=NOW)) == ["On"]


def test_newest_first_with_stable_ties():
    catalog = [
        video("first-tie", created_at=NOW),
        video("older", created_at=NOW - timedelta(days=3)),
        video("second-tie", created_at=NOW),
        video("newest", created_at=NOW + timedelta(minutes=5)),
    ]

    assert names(list_visible(catalog, ADMIN, now=NOW + timedelta(hours=1))) == [
        "newest", "first-tie", "second-tie", "older",
    ]


def test_search_is_a_post_filter_on_name_and_description():
    catalog = [
        video("Kickoff call", description="Project intro"),
        video("Color grade", description="Final LUT pass"),
        video("Hidden intro", group_id=2),
    ]
    client = Identity(role=Role.CLIENT, code="ACME1", scope=1)

    assert names(list_visible(catalog, client, now=NOW, search="INTRO")) == ["Kickoff call"]
    assert names(list_visible(catalog, client, now=NOW, search="lut")) == ["Color grade"]


def test_no_identity_sees_nothing():
    assert list_visible([video("Intro")], None) == []


def test_future_expiry_still_visible(db):
    acme = add_group(db)
    add_video(db, acme, "Soon", expires_at=next_week())

    identity = resolve(db, "ACME1").identity

    assert names(load_visible(db, identity)) == ["Soon"]


def test_group_is_loaded_with_the_videos(db, session_factory):
    acme = add_group(db, name="Acme")
    add_video(db, acme, "Intro")
    add_video(db, acme, "Outro")

    fresh = session_factory()
    try:
        videos = load_visible(fresh, ADMIN)
    finally:
        fresh.close()

    # detached rows would fail to lazy-load, so the groups came with the query
    assert [v.group.name for v in videos] == ["Acme", "Acme"]


def test_managed_listing_keeps_inactive_and_expired(db):
    acme = add_group(db, name="Acme", code="ACME1")
    other = add_group(db, name="Other", code="OTHER1")
    add_video(db, acme, "Draft", is_active=False, created_at=NOW - timedelta(hours=3))
    add_video(db, acme, "Old", expires_at=yesterday(), created_at=NOW - timedelta(hours=2))
    add_video(db, other, "Live", created_at=NOW - timedelta(hours=1))

    assert names(load_managed(db)) == ["Live", "Old", "Draft"]
    assert names(load_managed(db, group_id=acme.id)) == ["Old", "Draft"]
    assert names(load_managed(db, search="dra")) == ["Draft"]
    # the gallery still hides both
    assert names(load_visible(db, ADMIN)) == ["Live"]
