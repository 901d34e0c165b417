"""One JSON access-log record per HTTP request.

Fields: ``method``, ``path``, ``status``, ``duration_ms``, ``request_id``.
``request_id`` comes from :data:`storeseed.middleware.request_id.REQUEST_ID_CTX`
and matches the response header when the request-id middleware is outermost.
"""

import json
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from storeseed.middleware.request_id import REQUEST_ID_CTX

logger = logging.getLogger(__name__)


def access_record(request: Request, status_code: int, duration_ms: float) -> str:
    return json.dumps(
        {
            "method": request.method,
            "path": request.url.path,
            "status": status_code,
            "duration_ms": duration_ms,
            "request_id": REQUEST_ID_CTX.get(),
        }
    )


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response: Response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        log = logger.warning if response.status_code >= 500 else logger.info
        log(access_record(request, response.status_code, duration_ms))
        return response
