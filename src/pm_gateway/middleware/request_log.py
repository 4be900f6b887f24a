"""Request logging middleware.

Logs every HTTP request with method, path, status code, latency, caller
account and a short request ID for correlation. The request_id is also
injected into request.state so router handlers can include it in ApiResponse.

Log format:
    INFO [POST] /api/v1/markets/3/buy → 200 (4ms) acct=alice req_a1b2c3d4e5f6
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.pm_gateway.auth.dependencies import ACCOUNT_HEADER

logger = logging.getLogger("pm.request")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.request_id = f"req_{uuid.uuid4().hex[:12]}"

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "[%s] %s → %d (%.0fms) acct=%s %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request.headers.get(ACCOUNT_HEADER, "-"),
            request.state.request_id,
        )
        response.headers["X-Request-Id"] = request.state.request_id
        return response
