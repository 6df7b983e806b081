"""Trace identity components: ids, sampling flag and trace context."""

from b3ids.tracer.id_generator import B3IdGenerator, IdWidth, get_id_generator, next_id
from b3ids.tracer.sampling import SamplingFlag
from b3ids.tracer.span_context import (
    ALL_HEADERS,
    B3_HEADER,
    DEBUG_HEADER,
    PARENT_SPAN_ID_HEADER,
    SAMPLED_HEADER,
    SPAN_ID_HEADER,
    TRACE_ID_HEADER,
    TraceContext,
)

__all__ = [
    "B3IdGenerator",
    "IdWidth",
    "get_id_generator",
    "next_id",
    "SamplingFlag",
    "TraceContext",
    "ALL_HEADERS",
    "B3_HEADER",
    "TRACE_ID_HEADER",
    "SPAN_ID_HEADER",
    "PARENT_SPAN_ID_HEADER",
    "SAMPLED_HEADER",
    "DEBUG_HEADER",
]
