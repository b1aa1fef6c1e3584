"""
FinalTake — Rate Limiting
Simple in-memory sliding window per client IP. Fine for a single instance.
"""

import time
from collections import defaultdict
from fastapi import Request, HTTPException
from finaltake.config import get_settings

settings = get_settings()

WINDOW_SECONDS = 3600

# In-memory store: {ip: [timestamps]}
_rate_store: dict[str, list[float]] = defaultdict(list)


def _get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _cleanup_old_entries(entries: list[float], window_seconds: int, now: float) -> list[float]:
    cutoff = now - window_seconds
    return [t for t in entries if t > cutoff]


def reset_rate_limits() -> None:
    _rate_store.clear()


async def limit_profile_writes(request: Request):
    """Dependency for profile-mutating endpoints. Raises 429 when exceeded."""
    limit = settings.PROFILE_WRITES_PER_IP_PER_HOUR
    ip = _get_client_ip(request)
    now = time.time()

    _rate_store[ip] = _cleanup_old_entries(_rate_store[ip], WINDOW_SECONDS, now)
    if len(_rate_store[ip]) >= limit:
        raise HTTPException(
            status_code=429,
            detail=f"Rate limit exceeded. Max {limit} profile updates per hour."
        )

    _rate_store[ip].append(now)
