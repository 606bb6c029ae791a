"""
Core cross-cutting components: exceptions, security, request dependencies
and rate limiting.
"""

from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    BusinessRuleViolationError,
    DatabaseError,
    DuplicateResourceError,
    InviteCodeExhaustedError,
    NotFoundError,
    NotScopedError,
    PlantDaddyException,
    UpstreamUnavailableError,
    ValidationError,
)

__all__ = [
    "PlantDaddyException",
    "AuthenticationError",
    "AuthorizationError",
    "NotScopedError",
    "ValidationError",
    "NotFoundError",
    "DuplicateResourceError",
    "BusinessRuleViolationError",
    "InviteCodeExhaustedError",
    "UpstreamUnavailableError",
    "DatabaseError",
]
