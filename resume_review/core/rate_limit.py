from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from resume_review.core.config import settings

# No default limits: session, history and health reads stay unlimited.
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def submission_limit(limit: str | None = None):
    """Limit a route that normalizes or analyzes an upload; ``limit`` overrides ``RATE_LIMIT``."""
    if settings.rate_limit_enabled:
        return limiter.limit(limit or settings.rate_limit)

    def decorator(func):
        return func

    return decorator
