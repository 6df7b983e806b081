"""Server, client and framework helpers for B3 context propagation."""

from b3ids.instrumentation.http_client import (
    derive_child_context,
    derive_outbound_context,
    inject_headers,
)
from b3ids.instrumentation.http_server import (
    TraceInitiationPolicy,
    derive_inbound_context,
    extract_trace_context,
)
from b3ids.instrumentation.fastapi import install_http_middleware

__all__ = [
    "TraceInitiationPolicy",
    "extract_trace_context",
    "derive_inbound_context",
    "derive_child_context",
    "derive_outbound_context",
    "inject_headers",
    "install_http_middleware",
]
