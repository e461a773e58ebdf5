from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from resume_tailor.core.config import settings

# A disabled limiter still wraps routes but never counts requests.
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit():
    """Per-client limit applied to every AI route, e.g. ``30/minute``."""
    return limiter.limit(settings.rate_limit)
