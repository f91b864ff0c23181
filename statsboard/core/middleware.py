from collections import defaultdict
from collections import deque
from collections.abc import Awaitable
from collections.abc import Callable
from threading import RLock
from time import monotonic

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


GITHUB_BACKED_PREFIXES = ("/stats/", "/dashboard/")


class GitHubRateLimitMiddleware(BaseHTTPMiddleware):
    """In-memory sliding window limiter for routes that call the GitHub API."""

    def __init__(
        self,
        app,
        requests_per_window: int = 30,
        window_seconds: int = 60,
        path_prefixes: tuple[str, ...] = GITHUB_BACKED_PREFIXES,
    ) -> None:
        super().__init__(app)
        # Guard against invalid config values (0 or negatives).
        self.max_requests = max(1, requests_per_window)
        self.window_seconds = max(1, window_seconds)
        self.path_prefixes = path_prefixes
        # One queue of request timestamps per client key.
        self._ip_buckets: dict[str, deque[float]] = defaultdict(deque)
        self._lock = RLock()
        self._last_sweep = 0.0

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method != "GET" or not request.url.path.startswith(
            self.path_prefixes
        ):
            return await call_next(request)

        retry_after = self._admit(self._client_ip(request), monotonic())
        if retry_after is not None:
            return JSONResponse(
                status_code=429,
                content={"detail": "Too Many Requests"},
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)

    def _admit(self, ip: str, now: float) -> int | None:
        """Record a request and return None, or the Retry-After seconds if over limit."""

        cutoff = now - self.window_seconds
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._drop_idle_buckets(cutoff)
                self._last_sweep = now

            bucket = self._ip_buckets[ip]
            while bucket and bucket[0] <= cutoff:
                bucket.popleft()

            if len(bucket) >= self.max_requests:
                return max(1, int(self.window_seconds - (now - bucket[0])))

            bucket.append(now)
            return None

    def _drop_idle_buckets(self, cutoff: float) -> None:
        for ip in list(self._ip_buckets):
            bucket = self._ip_buckets[ip]
            while bucket and bucket[0] <= cutoff:
                bucket.popleft()
            if not bucket:
                del self._ip_buckets[ip]

    @staticmethod
    def _client_ip(request: Request) -> str:
        # Reverse proxies usually set X-Forwarded-For.
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip() or "unknown"

        if request.client and request.client.host:
            return request.client.host

        return "unknown"
