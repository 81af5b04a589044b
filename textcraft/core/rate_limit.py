import time
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, status
from redis.asyncio import Redis

from textcraft.core.config import Settings, get_settings
from textcraft.core.redis import get_redis


@dataclass
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_seconds: int


async def enforce_sliding_window(
    redis: Redis,
    *,
    key: str,
    limit: int,
    window_seconds: int,
) -> RateLimitResult:
    now_ms = int(time.time() * 1000)
    cutoff = now_ms - window_seconds * 1000

    pipe = redis.pipeline()
    pipe.zremrangebyscore(key, 0, cutoff)
    pipe.zcard(key)
    pipe.zadd(key, {str(now_ms): now_ms})
    pipe.expire(key, window_seconds)
    _, count, _, _ = await pipe.execute()

    used = int(count) + 1
    return RateLimitResult(allowed=used <= limit, remaining=max(0, limit - used), reset_seconds=window_seconds)


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        return forwarded.split(",", 1)[0].strip()
    return request.client.host if request.client else "unknown"


def rate_limited(scope: str, limit_field: str):
    """Route dependency applying the per-IP window for ``scope``; no-op without Redis."""

    async def dependency(request: Request, settings: Settings = Depends(get_settings)) -> None:
        redis = await get_redis()
        if redis is None:
            return
        result = await enforce_sliding_window(
            redis,
            key=f"rl:{scope}:{client_ip(request)}",
            limit=getattr(settings, limit_field),
            window_seconds=settings.rate_limit_window_seconds,
        )
        if not result.allowed:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=f"{scope.capitalize()} rate limit exceeded",
                headers={"Retry-After": str(result.reset_seconds)},
            )

    return dependency
