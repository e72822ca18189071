"""
limiter.py — Fixed-window rate limiting
In-memory request counter keyed by client address. Each client gets a window
that opens on its first request; once the window has elapsed the count resets.
"""

import logging
import threading
import time

from fastapi import HTTPException, Request, status

from config import RATE_LIMIT_MAX_REQUESTS, RATE_LIMIT_WINDOW_SECONDS

logger = logging.getLogger(__name__)


class RateLimiter:
    """Fixed-window request counter, usable as a FastAPI dependency."""

    def __init__(self, max_requests: int, window_seconds: int, clock=time.monotonic):
        # client → {started, count}
        self._windows: dict[str, dict] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self.max_requests = max_requests
        self.window_seconds = window_seconds

    # ------------------------------------------------------------------
    def hit(self, client: str) -> bool:
        """Count one request for *client*. Returns False once the window is full."""
        now = self._clock()
        with self._lock:
            entry = self._windows.get(client)
            if entry is None or now - entry["started"] >= self.window_seconds:
                entry = {"started": now, "count": 0}
                self._windows[client] = entry
            entry["count"] += 1
            return entry["count"] <= self.max_requests

    # ------------------------------------------------------------------
    def clear_expired(self):
        """Drop every window that has already elapsed."""
        now = self._clock()
        with self._lock:
            expired = [
                k for k, v in self._windows.items()
                if now - v["started"] >= self.window_seconds
            ]
            for k in expired:
                del self._windows[k]

    def reset(self):
        with self._lock:
            self._windows.clear()

    # ------------------------------------------------------------------
    def __call__(self, request: Request):
        client = request.client.host if request.client else "unknown"
        if len(self._windows) > 10_000:
            self.clear_expired()
        if not self.hit(client):
            logger.warning(f"Rate limit exceeded for {client} on {request.url.path}")
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Has alcanzado el límite de peticiones",
            )


limiter = RateLimiter(RATE_LIMIT_MAX_REQUESTS, RATE_LIMIT_WINDOW_SECONDS)
