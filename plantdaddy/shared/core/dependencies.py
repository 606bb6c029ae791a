"""
Common FastAPI dependencies for PlantDaddy.
Provides the authenticated user and admin guard.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, Request

from .exceptions import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)


class CurrentUser:
    """User information extracted from JWT token."""

    def __init__(
        self,
        user_id: int,
        username: str,
        is_admin: bool = False,
        token_payload: Optional[Dict[str, Any]] = None
    ):
        self.user_id = user_id
        self.username = username
        self.is_admin = is_admin
        self.token_payload = token_payload or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert user info to dictionary."""
        return {
            "user_id": self.user_id,
            "username": self.username,
            "is_admin": self.is_admin,
        }


async def get_current_user(request: Request) -> CurrentUser:
    """
    Get current authenticated user from request state.
    This dependency assumes AuthenticationMiddleware has already validated the token.

    Args:
        request: FastAPI request object

    Returns:
        CurrentUser: Current user information

    Raises:
        AuthenticationError: If user is not authenticated
    """
    user_id = getattr(request.state, "user_id", None)
    if user_id is None:
        logger.warning("User ID not found in request state")
        raise AuthenticationError("User not authenticated")

    return CurrentUser(
        user_id=user_id,
        username=getattr(request.state, "username", ""),
        is_admin=getattr(request.state, "is_admin", False),
        token_payload=getattr(request.state, "token_payload", {}),
    )


async def get_current_admin_user(
    current_user: CurrentUser = Depends(get_current_user)
) -> CurrentUser:
    """
    Get current user with admin privileges.

    Raises:
        AuthorizationError: If user is not an admin
    """
    if not current_user.is_admin:
        logger.warning(f"Non-admin user attempted admin access: {current_user.user_id}")
        raise AuthorizationError(
            "Admin privileges required for this action",
            required_action="admin"
        )

    return current_user
