"""Middlewares del webhook."""

from __future__ import annotations

import time
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from leadbot.core.config import settings
from leadbot.core.logging import get_logger, log_event, resolve_log_level

logger = get_logger("leadbot.request")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Registra inicio, fin y fallas de cada request con un identificador propio."""

    def __init__(self, app, *, skip_prefixes: tuple[str, ...] | None = None) -> None:
        super().__init__(app)
        self._skip_prefixes = (
            settings.request_log_skip_prefixes if skip_prefixes is None else skip_prefixes
        )
        self._level = resolve_log_level(settings.request_log_level)

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path.startswith(self._skip_prefixes):
            return await call_next(request)

        request_id = uuid4().hex
        start = time.perf_counter()
        client_ip = request.client.host if request.client else None

        log_event(
            logger,
            "request.started",
            level=self._level,
            request_id=request_id,
            method=request.method,
            path=path,
            client_ip=client_ip,
        )

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request.failed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": path,
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                },
            )
            raise

        response.headers["x-request-id"] = request_id
        log_event(
            logger,
            "request.completed",
            level=self._level,
            request_id=request_id,
            method=request.method,
            path=path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return response
