import base64
import json

import httpx
import pytest

from conftest import add_group
from edithub.core.errors import NotFound, StreamableError, ValidationFailed
from edithub.models import Video
from edithub.services import streamable
from edithub.services.catalog import upload_streamable_video


def mock_client(handler, calls=None):
    def wrapped(request):
        if calls is not None:
            calls.append(request)
        return handler(request)
    return httpx.Client(transport=httpx.MockTransport(wrapped))


def accepted(request):
    return httpx.Response(200, json={
        "shortcode": "abc123",
        "status": 1,
        "url": "streamable.com/abc123",
        "title": "Intro",
        "thumbnail_url": "//cdn.streamable.test/abc123.jpg",
        "duration": 61.6,
    })


def test_import_sends_basic_auth_and_payload(streamable_creds):
    calls = []

    result = streamable.import_video("https://files.example.com/intro.mp4", "Intro", client=mock_client(accepted, calls))

    req = calls[0]
    assert req.method == "POST"
    assert str(req.url) == "https://api.streamable.test/import"
    expected = base64.b64encode(b"uploader@example.com:s3cret").decode()
    assert req.headers["Authorization"] == f"Basic {expected}"
    assert json.loads(req.content) == {"url": "https://files.example.com/intro.mp4", "title": "Intro"}

    assert result.shortcode == "abc123"
    assert result.url == "https://streamable.com/abc123"
    assert result.duration == 62


def test_blank_title_defaults(streamable_creds):
    calls = []
    streamable.import_video("https://files.example.com/x.mp4", "  ", client=mock_client(accepted, calls))
    assert json.loads(calls[0].content)["title"] == streamable.DEFAULT_TITLE


def test_non_2xx_is_an_upload_failure(streamable_creds):
    client = mock_client(lambda r: httpx.Response(401, text="bad credentials"))
    with pytest.raises(StreamableError):
        streamable.import_video("https://files.example.com/x.mp4", "X", client=client)


def test_missing_shortcode_is_an_upload_failure(streamable_creds):
    client = mock_client(lambda r: httpx.Response(200, json={"status": 0}))
    with pytest.raises(StreamableError, match="no shortcode"):
        streamable.import_video("https://files.example.com/x.mp4", "X", client=client)


def test_missing_credentials(monkeypatch):
    monkeypatch.setattr(streamable.settings, "STREAMABLE_USERNAME", None)
    calls = []
    with pytest.raises(StreamableError, match="not configured"):
        streamable.import_video("https://files.example.com/x.mp4", "X", client=mock_client(accepted, calls))
    assert calls == []


def test_upload_stores_row_after_success(db, streamable_creds):
    group = add_group(db)

    v = upload_streamable_video(
        db,
        source_url="https://files.example.com/intro.mp4",
        name="Intro",
        group_id=group.id,
        expires_in_days=7,
        client=mock_client(accepted),
    )

    assert v.video_id == "abc123"
    assert v.link == "https://streamable.com/abc123"
    assert v.thumbnail_url == "//cdn.streamable.test/abc123.jpg"
    assert v.expires_at is not None
    assert db.query(Video).count() == 1


def test_unreachable_service_writes_nothing(db, streamable_creds):
    group = add_group(db)

    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(StreamableError):
        upload_streamable_video(
            db,
            source_url="https://files.example.com/intro.mp4",
            name="Intro",
            group_id=group.id,
            client=mock_client(refuse),
        )

    assert db.query(Video).count() == 0


def test_rejected_upload_writes_nothing(db, streamable_creds):
    group = add_group(db)

    with pytest.raises(StreamableError):
        upload_streamable_video(
            db,
            source_url="https://files.example.com/intro.mp4",
            name="Intro",
            group_id=group.id,
            client=mock_client(lambda r: httpx.Response(500, text="boom")),
        )

    assert db.query(Video).count() == 0


def test_validation_runs_before_network(db, streamable_creds):
    calls = []
    client = mock_client(accepted, calls)

    with pytest.raises(ValidationFailed):
        upload_streamable_video(db, source_url="https://x", name=" ", group_id=1, client=client)
    with pytest.raises(NotFound):
        upload_streamable_video(db, source_url="https://x", name="Intro", group_id=999, client=client)

    assert calls == []
