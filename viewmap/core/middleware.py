from collections import deque
from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Iterable
from threading import RLock
from time import monotonic

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


class SlidingWindowLimiter:
    """Per-client request log over a sliding time window.

    Clients whose log empties are forgotten. A sweep over all clients runs
    at most once per window, and the least recently seen clients are dropped
    when more than `max_clients` are tracked.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        max_clients: int = 10_000,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        self.max_requests = max(1, max_requests)
        self.window_seconds = max(1, window_seconds)
        self.max_clients = max(1, max_clients)
        self._clock = clock
        # Insertion order doubles as recency: a client is re-inserted on each hit.
        self._hits: dict[str, deque[float]] = {}
        self._last_sweep = clock()
        self._lock = RLock()

    def hit(self, client: str) -> int | None:
        """Record a request, or return the seconds to wait if over the limit."""

        now = self._clock()
        with self._lock:
            hits = self._hits.pop(client, None) or deque()
            self._expire(hits, now)

            if len(hits) >= self.max_requests:
                self._hits[client] = hits
                return max(1, int(self.window_seconds - (now - hits[0])))

            hits.append(now)
            self._hits[client] = hits
            self._sweep(now)
            return None

    def tracked_clients(self) -> set[str]:
        with self._lock:
            return set(self._hits)

    def _expire(self, hits: deque[float], now: float) -> None:
        cutoff = now - self.window_seconds
        while hits and hits[0] <= cutoff:
            hits.popleft()

    def _sweep(self, now: float) -> None:
        if now - self._last_sweep >= self.window_seconds:
            self._last_sweep = now
            for client in list(self._hits):
                hits = self._hits[client]
                self._expire(hits, now)
                if not hits:
                    del self._hits[client]

        while len(self._hits) > self.max_clients:
            del self._hits[next(iter(self._hits))]


class HeatmapRateLimitMiddleware(BaseHTTPMiddleware):
    """Rate limit GET routes that fetch from the link service, per client IP."""

    def __init__(
        self,
        app,
        requests_per_window: int = 30,
        window_seconds: int = 60,
        limited_paths: Iterable[str] = ("/heatmap/views",),
        max_clients: int = 10_000,
    ) -> None:
        super().__init__(app)
        self.limited_paths = frozenset(limited_paths)
        self.limiter = SlidingWindowLimiter(
            max_requests=requests_per_window,
            window_seconds=window_seconds,
            max_clients=max_clients,
        )

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method != "GET" or request.url.path not in self.limited_paths:
            return await call_next(request)

        retry_after = self.limiter.hit(self._client_ip(request))
        if retry_after is not None:
            return JSONResponse(
                status_code=429,
                content={"detail": "Too Many Requests"},
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)

    @staticmethod
    def _client_ip(request: Request) -> str:
        # Reverse proxies put the original client first in X-Forwarded-For.
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip() or "unknown"

        if request.client and request.client.host:
            return request.client.host

        return "unknown"
