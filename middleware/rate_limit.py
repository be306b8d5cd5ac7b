# backend/middleware/rate_limit.py
import math
import time
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict

from fastapi import Request
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("middleware.rate_limit")

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


class RateLimitExceeded(Exception):
    def __init__(self, status: "RateLimitStatus"):
        super().__init__(RATE_LIMIT_MESSAGE)
        self.status = status

    @property
    def retry_after(self) -> int:
        return self.status.reset_in


@dataclass
class _Window:
    started_at: float
    count: int = 0


@dataclass(frozen=True)
class RateLimitStatus:
    limit: int
    remaining: int
    reset_in: int


# ============================================================
# 🔹 Per-client counters (one window per client key)
# ============================================================
class RateLimitStore:
    """
    Counts requests per client key inside a window that starts at the
    client's first request and resets once `window_seconds` have elapsed.
    """

    def __init__(self, max_requests: int = 100, window_seconds: float = 15 * 60,
                 clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._windows: Dict[str, _Window] = {}
        self._lock = threading.Lock()
        self._next_prune = 0.0

    def hit(self, key: str) -> RateLimitStatus:
        """Counts one request for `key`; raises RateLimitExceeded past the limit."""
        with self._lock:
            now = self.clock()
            self._prune(now)

            window = self._windows.get(key)
            if window is None or now - window.started_at >= self.window_seconds:
                window = _Window(started_at=now)
                self._windows[key] = window
            window.count += 1

            status = RateLimitStatus(
                limit=self.max_requests,
                remaining=max(self.max_requests - window.count, 0),
                reset_in=max(math.ceil(window.started_at + self.window_seconds - now), 0),
            )
            over_limit = window.count > self.max_requests

        if over_limit:
            raise RateLimitExceeded(status)
        return status

    def reset(self, key: str = None):
        with self._lock:
            if key is None:
                self._windows.clear()
            else:
                self._windows.pop(key, None)

    def __len__(self) -> int:
        return len(self._windows)

    def _prune(self, now: float):
        # caller holds the lock
        if now < self._next_prune:
            return
        expired = [k for k, w in self._windows.items() if now - w.started_at >= self.window_seconds]
        for k in expired:
            del self._windows[k]
        self._next_prune = now + self.window_seconds


def client_key(request: Request, trust_proxy: bool = False) -> str:
    if trust_proxy:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def _apply_headers(response, status: RateLimitStatus):
    response.headers["X-RateLimit-Limit"] = str(status.limit)
    response.headers["X-RateLimit-Remaining"] = str(status.remaining)
    response.headers["X-RateLimit-Reset"] = str(status.reset_in)


# ============================================================
# 🚦 Middleware (applies to every route, static files included)
# ============================================================
class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, store: RateLimitStore, trust_proxy: bool = False):
        super().__init__(app)
        self.store = store
        self.trust_proxy = trust_proxy

    async def dispatch(self, request: Request, call_next):
        key = client_key(request, self.trust_proxy)
        try:
            status = self.store.hit(key)
        except RateLimitExceeded as e:
            logger.warning(f"🚫 Rate limit exceeded for {key} on {request.url.path}")
            response = PlainTextResponse(RATE_LIMIT_MESSAGE, status_code=429)
            _apply_headers(response, e.status)
            response.headers["Retry-After"] = str(e.retry_after)
            return response

        response = await call_next(request)
        _apply_headers(response, status)
        return response
