"""b3ids: B3 trace context propagation for Python services."""

from b3ids.config import PropagationConfig, load_config
from b3ids.context import (
    B3Propagator,
    attach_trace_context,
    detach_trace_context,
    get_current_trace_context,
)
from b3ids.errors import B3Error, ConfigError, HeaderParseError
from b3ids.instrumentation import (
    TraceInitiationPolicy,
    derive_child_context,
    derive_inbound_context,
    derive_outbound_context,
    inject_headers,
    install_http_middleware,
)
from b3ids.log_correlation import TraceContextLogFilter, correlation_fields
from b3ids.tracer import B3IdGenerator, IdWidth, SamplingFlag, TraceContext, next_id

__version__ = "0.2.0"

__all__ = [
    "__version__",
    "PropagationConfig",
    "load_config",
    "B3Error",
    "ConfigError",
    "HeaderParseError",
    "B3IdGenerator",
    "IdWidth",
    "next_id",
    "SamplingFlag",
    "TraceContext",
    "TraceInitiationPolicy",
    "derive_inbound_context",
    "derive_child_context",
    "derive_outbound_context",
    "inject_headers",
    "install_http_middleware",
    "B3Propagator",
    "get_current_trace_context",
    "attach_trace_context",
    "detach_trace_context",
    "TraceContextLogFilter",
    "correlation_fields",
]
