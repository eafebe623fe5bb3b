from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from queens_facts.services.audit.audit_models import EndpointAuditRecord
from queens_facts.services.audit.audit_service import AuditService, client_ip

logger = logging.getLogger("queens_facts.request")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-DNS-Prefetch-Control": "off",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log request/response with a request id."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        start = time.perf_counter()
        status = "NA"

        try:
            response = await call_next(request)
            status = response.status_code
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            logger.info(
                "request_id=%s method=%s path=%s status=%s duration_ms=%.2f",
                request_id,
                request.method,
                request.url.path,
                status,
                duration_ms,
            )

        response.headers["x-request-id"] = request_id
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class EndpointAuditMiddleware(BaseHTTPMiddleware):
    """
    One endpoint_audit row per request.
    The write outcome never changes the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        endpoint = request.url.path
        if request.url.query:
            endpoint = f"{endpoint}?{request.url.query}"

        record = EndpointAuditRecord(
            request_type=request.method,
            endpoint_request=endpoint,
            ip_address=client_ip(
                request.headers,
                fallback=request.client.host if request.client else None,
            ),
        )

        try:
            service = AuditService(request.app.state.sb, config=request.app.state.settings)
            await run_in_threadpool(service.record_endpoint, record)
        except Exception:
            logger.exception("endpoint audit middleware error")

        return await call_next(request)
