# 📄 File: plantdaddy/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Keeps a diary line for every request: what was asked, how it ended and how long it
# took, each tagged with a tracking number.
# 🧪 Purpose (Technical Summary):
# Request logging middleware. Assigns (or honours an incoming) X-Request-ID, stores it on
# request.state and in request_id_var for log correlation, and logs method, path, status
# and duration.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, plantdaddy.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# plantdaddy.main (middleware registration), error envelopes (request_id field)

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from plantdaddy.shared.utils.logging import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Health checks would drown the log
QUIET_PATHS = {"/health", "/api/v1/health", "/favicon.ico"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Request correlation and access logging."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.request_id_header = REQUEST_ID_HEADER

    def _get_or_create_request_id(self, request: Request) -> str:
        request_id = request.headers.get(self.request_id_header) or str(uuid.uuid4())
        request.state.request_id = request_id
        return request_id

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = self._get_or_create_request_id(request)
        token = request_id_var.set(request_id)
        start_time = time.perf_counter()
        quiet = request.url.path in QUIET_PATHS

        try:
            response = await call_next(request)
        except Exception:
            elapsed = (time.perf_counter() - start_time) * 1000
            logger.error(f"{request.method} {request.url.path} failed after {elapsed:.1f}ms")
            raise
        else:
            elapsed = (time.perf_counter() - start_time) * 1000
            if not quiet:
                level = logging.WARNING if response.status_code >= 500 else logging.INFO
                logger.log(
                    level,
                    f"{request.method} {request.url.path} -> {response.status_code} ({elapsed:.1f}ms)",
                )
            response.headers[self.request_id_header] = request_id
            return response
        finally:
            request_id_var.reset(token)
