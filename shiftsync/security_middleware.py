"""
Request screening middleware.
"""

import logging
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .rate_limiter import get_client_ip
from .utils.sanitization import looks_like_sql_injection

logger = logging.getLogger(__name__)


class QueryInjectionMiddleware(BaseHTTPMiddleware):
    """
    Rejects requests whose query string or path looks like an SQL injection attempt.

    Queries are parameterised by SQLAlchemy; this only turns obviously hostile
    filter values into a 400 instead of an empty result.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        values = [value for _, value in request.query_params.multi_items()]
        values.append(request.url.path)

        if looks_like_sql_injection(values):
            logger.warning(f"⚠️ Potential SQL injection attempt from IP: {get_client_ip(request)}")
            return JSONResponse(
                status_code=400,
                content={"success": False, "message": "Invalid input detected"},
            )

        return await call_next(request)
