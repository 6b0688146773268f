"""Rate limiting middleware for the login endpoint.

Fixed-window counters keyed by method, path and client IP, kept in
process memory. Each worker process counts separately.
"""

import logging
import time
from collections import defaultdict
from dataclasses import dataclass, field

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from eventcare.api.deps import get_client_ip

logger = logging.getLogger(__name__)


@dataclass
class RateLimitConfig:
    """Configuration for a rate limit rule."""

    requests: int  # Number of allowed requests
    window_seconds: int  # Time window in seconds


@dataclass
class RateLimitEntry:
    """Tracking entry for rate limit state."""

    count: int = 0
    window_start: float = field(default_factory=time.time)


# Rate limits by (method, path)
DEFAULT_RATE_LIMITS: dict[tuple[str, str], RateLimitConfig] = {
    ("POST", "/api/v1/auth/login"): RateLimitConfig(requests=5, window_seconds=60),
}


class InMemoryRateLimitStorage:
    """In-memory rate limit storage."""

    def __init__(self, cleanup_interval: int = 300) -> None:
        self._storage: dict[str, RateLimitEntry] = defaultdict(RateLimitEntry)
        self._last_cleanup = time.time()
        self._cleanup_interval = cleanup_interval

    def _cleanup_expired(self, max_window: int = 3600) -> None:
        """Remove expired entries to prevent memory growth."""
        now = time.time()
        if now - self._last_cleanup < self._cleanup_interval:
            return

        expired_keys = [
            key
            for key, entry in self._storage.items()
            if now - entry.window_start > max_window
        ]
        for key in expired_keys:
            del self._storage[key]

        self._last_cleanup = now

    def check_and_increment(
        self, key: str, limit: int, window_seconds: int
    ) -> tuple[bool, int, int]:
        """Check rate limit and increment counter.

        Returns:
            Tuple of (is_allowed, remaining_requests, reset_seconds)
        """
        self._cleanup_expired()

        now = time.time()
        entry = self._storage[key]

        # Window expired: start a new one
        if now - entry.window_start > window_seconds:
            entry.count = 1
            entry.window_start = now
            return True, limit - 1, window_seconds

        if entry.count < limit:
            entry.count += 1
            remaining = limit - entry.count
            reset = int(window_seconds - (now - entry.window_start))
            return True, remaining, reset

        reset = int(window_seconds - (now - entry.window_start))
        return False, 0, reset


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rate limiting middleware for FastAPI.

    Returns 429 Too Many Requests when a client exceeds the limit for a
    configured endpoint.
    """

    def __init__(
        self,
        app,
        rate_limits: dict[tuple[str, str], RateLimitConfig] | None = None,
        storage: InMemoryRateLimitStorage | None = None,
        enabled: bool = True,
    ) -> None:
        super().__init__(app)
        self.rate_limits = rate_limits or DEFAULT_RATE_LIMITS
        self.storage = storage or InMemoryRateLimitStorage()
        self.enabled = enabled

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process request and apply rate limiting."""
        if not self.enabled:
            return await call_next(request)

        method = request.method
        path = request.url.path.rstrip("/")
        config = self.rate_limits.get((method, path))

        if not config:
            return await call_next(request)

        client_ip = get_client_ip(request) or "unknown"
        key = f"{method}:{path}:{client_ip}"

        is_allowed, remaining, reset = self.storage.check_and_increment(
            key, config.requests, config.window_seconds
        )

        if not is_allowed:
            logger.warning(f"Rate limit exceeded: {method} {path} from {client_ip}")
            return JSONResponse(
                status_code=429,
                content={
                    "detail": "Too many requests. Please try again later.",
                    "retry_after": reset,
                },
                headers={
                    "Retry-After": str(reset),
                    "X-RateLimit-Limit": str(config.requests),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(reset),
                },
            )

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(config.requests)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Reset"] = str(reset)

        return response
