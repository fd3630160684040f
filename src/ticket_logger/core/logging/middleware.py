"""
Request ID middleware.

Reuses a well-formed incoming `X-Request-ID` or generates a UUID4, stores it in
the request-id contextvar for the duration of the request and echoes it back on
the response. Also logs one access line per request with its duration.
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .filters import is_valid_request_id, reset_request_id, set_request_id

REQUEST_ID_HEADER = "X-Request-ID"

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        incoming = request.headers.get(REQUEST_ID_HEADER)
        rid = incoming if is_valid_request_id(incoming) else str(uuid.uuid4())

        token = set_request_id(rid)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            logger.info(
                "http.request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": int((time.perf_counter() - start) * 1000),
                },
            )
            return response
        finally:
            reset_request_id(token)
