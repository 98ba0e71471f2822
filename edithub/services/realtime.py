# edithub/services/realtime.py
"""
Catalog change notifications over websockets.

Viewers keep one socket open while the gallery is on screen. Every catalog
write broadcasts ``{"type": "catalog_changed", ...}``; the viewer then
re-fetches its whole visible list. Nothing is patched incrementally.
"""
from __future__ import annotations

import json
import logging
from typing import Set

from starlette.websockets import WebSocket

logger = logging.getLogger(__name__)


class CatalogNotifier:
    def __init__(self):
        self.listeners: Set[WebSocket] = set()

    async def connect(self, ws: WebSocket):
        await ws.accept()
        self.listeners.add(ws)

    async def disconnect(self, ws: WebSocket):
        self.listeners.discard(ws)

    async def broadcast(self, reason: str):
        if not self.listeners:
            return
        # Listeners span tenants, so the message names no group
        data = json.dumps({"type": "catalog_changed", "reason": reason})
        stale = []
        for ws in set(self.listeners):
            try:
                await ws.send_text(data)
            except RuntimeError:
                stale.append(ws)
        for ws in stale:
            self.listeners.discard(ws)
        if stale:
            logger.info("Dropped %d stale catalog listeners", len(stale))


notifier = CatalogNotifier()
