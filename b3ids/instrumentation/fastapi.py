"""
FastAPI middleware helpers for B3 trace context on HTTP requests.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional

from b3ids.config import PropagationConfig
from b3ids.context import attach_trace_context, detach_trace_context
from b3ids.errors import HeaderParseError
from b3ids.instrumentation.http_server import derive_inbound_context
from b3ids.tracer.span_context import TraceContext

logger = logging.getLogger(__name__)


def install_http_middleware(
    app: Any,
    config: Optional[PropagationConfig] = None,
    *,
    ignore_malformed: bool = False,
) -> None:
    """
    Attach an HTTP middleware that resolves the B3 context of each request.

    - Reads the context from request headers or originates one by path
    - Stores it on `request.state.trace_context` and makes it current
    - Echoes the context headers on the response

    A malformed `b3` header raises HeaderParseError unless `ignore_malformed`
    is set, in which case the request is handled untraced.
    """
    config = config or PropagationConfig()

    @app.middleware("http")
    async def b3_middleware(request, call_next: Callable[[Any], Awaitable[Any]]):  # type: ignore
        headers = dict(request.headers)
        try:
            trace_context, response_headers = derive_inbound_context(headers, request.url.path, config)
        except HeaderParseError as exc:
            if not ignore_malformed:
                raise
            logger.warning("Handling %s untraced: %s", request.url.path, exc)
            trace_context, response_headers = TraceContext(), {}

        if trace_context.is_empty():
            return await call_next(request)

        request.state.trace_context = trace_context
        token = attach_trace_context(trace_context)
        try:
            response = await call_next(request)
        finally:
            detach_trace_context(token)
        for name, value in response_headers.items():
            response.headers[name] = value
        return response

    return None
