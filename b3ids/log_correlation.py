"""Expose trace ids to the standard logging module for log correlation."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from b3ids.context import get_current_trace_context
from b3ids.tracer.span_context import TraceContext

TRACE_ID_KEY = "traceId"
SPAN_ID_KEY = "spanId"
PARENT_SPAN_ID_KEY = "parentSpanId"
B3_ID_KEY = "b3Id"

CORRELATION_KEYS = (TRACE_ID_KEY, SPAN_ID_KEY, PARENT_SPAN_ID_KEY, B3_ID_KEY)


def correlation_fields(trace_context: Optional[TraceContext]) -> Dict[str, Optional[str]]:
    """
    Return the correlation fields of a trace context.

    Every key is present; values are None when there is no context or the
    id is absent. `b3Id` is the combined header form.
    """
    if trace_context is None:
        return dict.fromkeys(CORRELATION_KEYS)
    return {
        TRACE_ID_KEY: trace_context.trace_id,
        SPAN_ID_KEY: trace_context.span_id,
        PARENT_SPAN_ID_KEY: trace_context.parent_span_id,
        B3_ID_KEY: trace_context.encode_combined(),
    }


class TraceContextLogFilter(logging.Filter):
    """
    Adds traceId, spanId, parentSpanId and b3Id attributes to log records.

    Values come from the current trace context, so a format string such as
    "%(traceId)s %(message)s" works for every record passing the filter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in correlation_fields(get_current_trace_context()).items():
            setattr(record, key, value)
        return True
