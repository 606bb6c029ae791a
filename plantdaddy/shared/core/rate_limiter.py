"""
Per-client request rate limiting built on slowapi.

Endpoints opt in with ``@limiter.limit("5/minute")`` and must accept a
``request: Request`` argument.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from ..config.settings import get_settings

limiter = Limiter(
    key_func=get_remote_address,
    enabled=get_settings().RATE_LIMIT_ENABLED,
)
