# 📄 File: plantdaddy/api/middleware/authentication.py
# 🧭 Purpose (Layman Explanation):
# The security guard at the door: checks that every request (apart from signing in,
# signing up and health checks) carries a valid pass before it reaches any plant data.
# 🧪 Purpose (Technical Summary):
# Authentication middleware that validates the bearer JWT, stores the user identity on
# request.state for the get_current_user dependency, and mirrors the user id into the
# logging context. Rejects protected paths without a valid token with a 401 envelope.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, plantdaddy.shared.core.security, logging context vars
# 🔄 Connected Modules / Calls From:
# plantdaddy.main (middleware registration), plantdaddy.shared.core.dependencies.get_current_user

import logging
from typing import Any, Dict, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from plantdaddy.api.middleware.error_handling import error_envelope
from plantdaddy.shared.core.exceptions import AuthenticationError
from plantdaddy.shared.core.security import verify_token
from plantdaddy.shared.utils.logging import user_id_var

logger = logging.getLogger(__name__)

PUBLIC_PATHS = (
    "/",
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/favicon.ico",
    "/api/v1/health",
    "/api/v1/auth/login",
    "/api/v1/auth/register",
)


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    JWT bearer authentication.

    On success the request state carries ``user_id``, ``username``, ``is_admin``
    and ``token_payload``.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.public_paths = PUBLIC_PATHS

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method == "OPTIONS" or self._is_public_path(request.url.path):
            return await call_next(request)

        token = self._extract_token(request)
        if not token:
            return self._authentication_error(request, "No authentication token provided")

        try:
            payload = verify_token(token, "access")
            self._attach_user(request, payload)
        except AuthenticationError as e:
            logger.warning(f"Rejected token for {request.url.path}: {e.message}")
            return self._authentication_error(request, e.message)
        except ValueError:
            return self._authentication_error(request, "Invalid token subject")

        user_token = user_id_var.set(str(request.state.user_id))
        try:
            return await call_next(request)
        finally:
            user_id_var.reset(user_token)

    def _attach_user(self, request: Request, payload: Dict[str, Any]) -> None:
        request.state.user_id = int(payload["sub"])
        request.state.username = payload.get("username", "")
        request.state.is_admin = bool(payload.get("is_admin", False))
        request.state.token_payload = payload

    def _extract_token(self, request: Request) -> Optional[str]:
        """Bearer token from the Authorization header."""
        authorization = request.headers.get("Authorization")
        if not authorization:
            return None
        try:
            scheme, token = authorization.split()
        except ValueError:
            return None
        return token if scheme.lower() == "bearer" else None

    def _is_public_path(self, path: str) -> bool:
        if path in self.public_paths:
            return True
        return any(path.startswith(public + "/") for public in self.public_paths if public != "/")

    def _authentication_error(self, request: Request, message: str) -> JSONResponse:
        return JSONResponse(
            status_code=401,
            content=error_envelope(request, "AUTHENTICATION_ERROR", message, {}),
            headers={"WWW-Authenticate": "Bearer"},
        )
