"""Context utilities: the active trace context and OpenTelemetry propagation."""

from b3ids.context.context import (
    attach_trace_context,
    detach_trace_context,
    get_current_trace_context,
)
from b3ids.context.propagators import (
    B3Propagator,
    from_otel_span_context,
    to_otel_span_context,
)

__all__ = [
    "get_current_trace_context",
    "attach_trace_context",
    "detach_trace_context",
    "B3Propagator",
    "to_otel_span_context",
    "from_otel_span_context",
]
