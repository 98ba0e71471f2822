# edithub/services/streamable.py
"""
Streamable import client.
API: POST https://api.streamable.com/import  (HTTP Basic auth)

Setup in .env:
  STREAMABLE_USERNAME=you@example.com
  STREAMABLE_PASSWORD=secret
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from edithub.core.config import settings
from edithub.core.errors import StreamableError

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Video"


@dataclass(frozen=True)
class StreamableVideo:
    shortcode: str
    url: str
    thumbnail_url: Optional[str] = None
    duration: Optional[int] = None


def _is_configured() -> bool:
    return bool(settings.STREAMABLE_USERNAME and settings.STREAMABLE_PASSWORD)


def _playback_url(shortcode: str, data: dict) -> str:
    url = data.get("url") or f"streamable.com/{shortcode}"
    if not url.startswith("http"):
        url = "https://" + url.lstrip("/")
    return url


def _duration(raw) -> int | None:
    if raw is None:
        return None
    try:
        return int(round(float(raw)))
    except (TypeError, ValueError):
        return None


def import_video(
    source_url: str,
    title: str | None = None,
    client: httpx.Client | None = None,
) -> StreamableVideo:
    """Ask Streamable to import ``source_url``. Raises StreamableError on any failure."""
    if not _is_configured():
        raise StreamableError("Streamable credentials not configured")

    endpoint = f"{settings.STREAMABLE_API_URL.rstrip('/')}/import"
    payload = {"url": source_url, "title": (title or "").strip() or DEFAULT_TITLE}
    auth = (settings.STREAMABLE_USERNAME, settings.STREAMABLE_PASSWORD)

    try:
        if client is None:
            r = httpx.post(endpoint, json=payload, auth=auth, timeout=settings.STREAMABLE_TIMEOUT)
        else:
            r = client.post(endpoint, json=payload, auth=auth, timeout=settings.STREAMABLE_TIMEOUT)
    except httpx.HTTPError as e:
        logger.error(f"Streamable request failed: {e}")
        raise StreamableError("Failed to upload to Streamable") from e

    if not r.is_success:
        logger.error(f"Streamable API error {r.status_code}: {r.text[:500]}")
        raise StreamableError("Failed to upload to Streamable")

    try:
        data = r.json()
    except ValueError as e:
        raise StreamableError("Streamable returned an unreadable response") from e

    shortcode = str(data.get("shortcode") or "").strip()
    if not shortcode:
        raise StreamableError("Upload failed - no shortcode received")

    video = StreamableVideo(
        shortcode=shortcode,
        url=_playback_url(shortcode, data),
        thumbnail_url=data.get("thumbnail_url"),
        duration=_duration(data.get("duration")),
    )
    logger.info("Streamable import accepted: %s", video.shortcode)
    return video
