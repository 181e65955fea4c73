"""Rate limiter shared by the API routes."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from careerbot.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def per_window(count: int) -> str:
    """Limit string for `count` requests per 15-minute window."""
    return f"{count} per 15 minutes"
