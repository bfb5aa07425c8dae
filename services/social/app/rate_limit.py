"""
Global slowapi rate limiter.

Imported by the routers for per-endpoint limits.  Mounted onto app.state in
main.py so slowapi middleware can find it.

Storage: Redis when REDIS_URL is set, otherwise in-memory counters
(local dev and tests).
"""
import os

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=os.getenv("REDIS_URL") or "memory://",
    enabled=os.getenv("RATE_LIMIT_ENABLED", "true").lower() != "false",
)
