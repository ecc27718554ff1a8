from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from order_engine.core.metrics import request_metrics
from order_engine.core.request_context import clear_request_context, set_request_context

logger = logging.getLogger(__name__)


class ObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        environment_id = _extract_environment_id(request)
        client_id = request.headers.get("clientId")
        set_request_context(request_id=request_id, environment_id=environment_id, client_id=client_id)

        status_code = 500
        endpoint = request.url.path
        method = request.method

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            request_metrics.observe(
                endpoint=endpoint,
                method=method,
                status_code=status_code,
                duration_ms=duration_ms,
                environment_id=environment_id,
            )

            logger.info(
                "request completed",
                extra={
                    "request_id": request_id,
                    "environment_id": environment_id,
                    "client_id": client_id,
                    "endpoint": endpoint,
                    "method": method,
                    "status_code": status_code,
                    "duration_ms": duration_ms,
                },
            )

            clear_request_context()


def _extract_environment_id(request: Request) -> str | None:
    environment = request.path_params.get("environment_id") or request.query_params.get("environment_id")
    if environment:
        return str(environment)
    header_environment = request.headers.get("environmentId")
    if header_environment:
        return header_environment
    return None
