"""Redis-backed leaky-bucket rate limiter for quiz generation.

Algorithm
---------
Each bucket is a Redis key that stores the number of *tokens* (remaining
requests) and the timestamp of the last refill.  Tokens leak (refill) at a
constant rate of ``RPM / 60`` tokens per second up to a maximum of
``BURST``.  A request is allowed only when at least one token is available;
otherwise a 429 response is returned.

The limiter is built in ``create_app`` and lives on ``app.state``; routes
use the ``require_generate_rate_limit`` dependency.
"""

import logging
import time

import redis
from fastapi import Depends, HTTPException, Request

from quizhub.api.deps import get_current_identity
from quizhub.core.security import Identity

logger = logging.getLogger(__name__)

# Lua script executed atomically inside Redis.
# KEYS[1] = bucket key
# ARGV[1] = max tokens (burst)
# ARGV[2] = refill rate (tokens per second)
# ARGV[3] = current timestamp (float seconds)
# Returns  1 if request allowed, 0 if rejected.
_LUA_SCRIPT = """
local key        = KEYS[1]
local max_tokens = tonumber(ARGV[1])
local refill_rate = tonumber(ARGV[2])
local now        = tonumber(ARGV[3])

local bucket = redis.call('HMGET', key, 'tokens', 'last_refill')
local tokens      = tonumber(bucket[1])
local last_refill = tonumber(bucket[2])

if tokens == nil then
    -- first request: initialise full bucket
    tokens = max_tokens
    last_refill = now
end

-- refill tokens since last check
local elapsed = math.max(0, now - last_refill)
tokens = math.min(max_tokens, tokens + elapsed * refill_rate)

local allowed = 0
if tokens >= 1 then
    tokens = tokens - 1
    allowed = 1
end

redis.call('HMSET', key, 'tokens', tokens, 'last_refill', now)
redis.call('EXPIRE', key, 120)  -- auto-cleanup idle buckets
return allowed
"""


class RateLimiter:
    def __init__(self, redis_url: str, rpm: int, burst: int) -> None:
        self.rpm = rpm
        self.burst = burst
        self._redis_url = redis_url
        self._pool: redis.ConnectionPool | None = None

    def _get_redis(self) -> redis.Redis:
        if self._pool is None:
            self._pool = redis.ConnectionPool.from_url(
                self._redis_url,
                decode_responses=True,
                max_connections=10,
            )
        return redis.Redis(connection_pool=self._pool)

    def allow(self, bucket_key: str) -> bool:
        """Return True if the request should be allowed."""
        if self.rpm <= 0:
            return True  # rate limiting disabled

        refill_rate = self.rpm / 60.0  # tokens per second
        try:
            r = self._get_redis()
            allowed = r.eval(_LUA_SCRIPT, 1, bucket_key, self.burst, refill_rate, time.time())
            return bool(allowed)
        except redis.RedisError as e:
            logger.warning("Rate-limiter Redis error (allowing request): %s", e)
            return True  # fail-open: don't block users if Redis is down


def require_generate_rate_limit(
    request: Request,
    identity: Identity = Depends(get_current_identity),
) -> None:
    """FastAPI dependency that raises 429 if the caller exceeds the limit."""
    limiter: RateLimiter = request.app.state.rate_limiter
    key = f"rl:generate:u:{identity.owner_id}"
    if not limiter.allow(key):
        logger.info("Rate-limited: %s", key)
        raise HTTPException(
            status_code=429,
            detail="Too many requests, please slow down.",
        )
