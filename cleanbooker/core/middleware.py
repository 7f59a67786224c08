"""Custom middleware for the application."""

import logging
import time
from uuid import uuid4

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

import redis.asyncio as redis

from cleanbooker.config import settings
from cleanbooker.core.exceptions import RateLimitExceeded
from cleanbooker.core.responses import error_body

logger = logging.getLogger(__name__)

UNLIMITED_PATHS = ("/health", "/docs", "/redoc", "/openapi.json")


def client_ip(request: Request) -> str:
    """Extract client IP from request."""
    # Check for forwarded headers (behind proxy/load balancer)
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"


async def sliding_window_count(client: redis.Redis, key: str) -> int:
    """Record a hit on ``key`` and return the hits before it in the last minute."""
    current_time = time.time()
    window_start = current_time - 60

    async with client.pipeline(transaction=True) as pipe:
        await pipe.zremrangebyscore(key, 0, window_start)
        await pipe.zcard(key)
        await pipe.zadd(key, {uuid4().hex: current_time})
        await pipe.expire(key, 60)
        results = await pipe.execute()

    return results[1]


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-IP rate limiting using a Redis sliding window."""

    def __init__(
        self,
        app,
        requests_per_minute: int = 100,
        redis_url: str | None = None,
    ):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.redis_url = redis_url or settings.redis_url
        self._redis: redis.Redis | None = None

    async def get_redis(self) -> redis.Redis:
        if self._redis is None:
            self._redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._redis

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.url.path in UNLIMITED_PATHS:
            return await call_next(request)

        try:
            request_count = await sliding_window_count(
                await self.get_redis(), f"rate_limit:{client_ip(request)}"
            )
        except redis.RedisError as e:
            # If Redis is down, allow request through
            logger.warning(f"Rate limiter unavailable: {e}")
            return await call_next(request)

        reset = str(int(time.time()) + 60)
        if request_count >= self.requests_per_minute:
            return JSONResponse(
                status_code=429,
                content=error_body(
                    "Too many requests. Please try again later.",
                    request_id=getattr(request.state, "request_id", None),
                ),
                headers={
                    "Retry-After": "60",
                    "X-RateLimit-Limit": str(self.requests_per_minute),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": reset,
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.requests_per_minute)
        response.headers["X-RateLimit-Remaining"] = str(
            max(0, self.requests_per_minute - request_count - 1)
        )
        response.headers["X-RateLimit-Reset"] = reset
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Assigns a request id and logs each request with its timing."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start_time = time.time()

        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id

        response = await call_next(request)

        duration = time.time() - start_time
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration:.3f}s"

        logger.info(
            f"{request.method} {request.url.path} {response.status_code} "
            f"{duration:.3f}s [{request_id}]"
        )
        if duration > 1.0:
            logger.warning(
                f"SLOW REQUEST: {request.method} {request.url.path} took {duration:.3f}s"
            )

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to responses."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if not settings.debug:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        return response


class RateLimiter:
    """Rate limiter for specific endpoints using dependency injection."""

    def __init__(
        self,
        requests_per_minute: int = 10,
        key_prefix: str = "api",
    ):
        self.requests_per_minute = requests_per_minute
        self.key_prefix = key_prefix
        self._redis: redis.Redis | None = None

    async def get_redis(self) -> redis.Redis:
        if self._redis is None:
            self._redis = redis.from_url(
                settings.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._redis

    async def __call__(self, request: Request) -> None:
        """Check rate limit for request.

        Raises:
            RateLimitExceeded: If rate limit exceeded
        """
        if not settings.rate_limit_enabled:
            return

        key = f"rate:{self.key_prefix}:{client_ip(request)}"
        try:
            request_count = await sliding_window_count(await self.get_redis(), key)
        except redis.RedisError as e:
            # Allow request if Redis is unavailable
            logger.warning(f"Rate limiter unavailable for {self.key_prefix}: {e}")
            return

        if request_count >= self.requests_per_minute:
            logger.warning(f"Rate limit exceeded on {self.key_prefix} by {client_ip(request)}")
            raise RateLimitExceeded()


# Pre-configured rate limiters for the authentication endpoints
login_limiter = RateLimiter(requests_per_minute=5, key_prefix="login")
register_limiter = RateLimiter(requests_per_minute=3, key_prefix="register")
