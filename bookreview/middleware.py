"""
Request Body Size Middleware

Rejects requests whose declared Content-Length exceeds
settings.max_body_size (10MB by default) with 413 before the body is read.
Requests without a Content-Length header are passed through.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

BODY_TOO_LARGE_MESSAGE = "Request body too large"


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Answer 413 {"error": ...} when Content-Length is over the limit."""

    def __init__(self, app, max_body_size: int) -> None:
        super().__init__(app)
        self.max_body_size = max_body_size

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        content_length = request.headers.get("content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                return JSONResponse(
                    status_code=400,
                    content={"error": "Invalid Content-Length header"},
                )
            if declared > self.max_body_size:
                logger.warning(
                    f"Rejected {request.method} {request.url.path}: "
                    f"body of {declared} bytes exceeds {self.max_body_size}"
                )
                return JSONResponse(
                    status_code=413,
                    content={"error": BODY_TOO_LARGE_MESSAGE},
                )

        return await call_next(request)
