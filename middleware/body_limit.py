"""
Request Body Size Limit

Rejects requests whose body exceeds the configured limit with HTTP 413 and a
JSON ``{"error": ...}`` body. A declared Content-Length is checked before the
body is read; chunked bodies are buffered and measured.
"""

import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject oversized request bodies."""

    def __init__(self, app, max_body_bytes: int):
        super().__init__(app)
        self.max_body_bytes = max_body_bytes

    async def dispatch(self, request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit():
            size = int(content_length)
        elif "transfer-encoding" in request.headers:
            # Downstream handlers receive the buffered body
            size = len(await request.body())
        else:
            size = 0

        if size > self.max_body_bytes:
            logger.warning(
                f"Request body too large: path={request.url.path}, "
                f"size={size}, max={self.max_body_bytes}"
            )
            return JSONResponse(
                status_code=413,
                content={"error": f"Request body too large. Maximum size: {self.max_body_bytes} bytes"}
            )
        return await call_next(request)
