"""
Shared client instances.

redis.from_url() does not connect until the first command, so importing this
module is safe even when Redis is not running (tests patch the client).
"""
import redis

from creatorfit.config import REDIS_URL

# ── Redis (OAuth state nonces + circuit breaker state) ───────────────────────
redis_client = redis.from_url(REDIS_URL, decode_responses=True)
