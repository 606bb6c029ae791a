# 📄 File: plantdaddy/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# The safety net: if something breaks that nobody expected, the app still answers with a
# tidy error message instead of crashing the connection.
# 🧪 Purpose (Technical Summary):
# Last-resort middleware converting unhandled exceptions into the standard JSON error
# envelope (500, or the status of a PlantDaddyException that escaped the handlers).
# Known application errors are normally answered by the handlers registered in main.py.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, plantdaddy.shared.core.exceptions, settings
# 🔄 Connected Modules / Calls From:
# plantdaddy.main (middleware registration)

import logging
import traceback
from typing import Any, Dict

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from plantdaddy.shared.config import get_settings
from plantdaddy.shared.core.exceptions import PlantDaddyException
from plantdaddy.shared.utils.helpers import utcnow

logger = logging.getLogger(__name__)


def error_envelope(
    request: Request,
    code: str,
    message: str,
    details: Dict[str, Any],
) -> Dict[str, Any]:
    """Standard error body shared by middleware and exception handlers."""
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "timestamp": utcnow().isoformat(),
            "request_id": getattr(request.state, "request_id", None),
        }
    }


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Catch-all for exceptions that escaped the route exception handlers."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.settings = get_settings()

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except PlantDaddyException as exc:
            logger.warning(f"{exc.error_code} escaped handlers on {request.url.path}: {exc.message}")
            return JSONResponse(
                status_code=exc.status_code,
                content=error_envelope(request, exc.error_code, exc.message, exc.details),
            )
        except Exception as exc:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}")
            details: Dict[str, Any] = {}
            if self.settings.DEBUG and not self.settings.is_production:
                details = {
                    "exception_type": type(exc).__name__,
                    "traceback": traceback.format_exc().splitlines(),
                }
            return JSONResponse(
                status_code=500,
                content=error_envelope(request, "INTERNAL_SERVER_ERROR", "An internal server error occurred", details),
            )
