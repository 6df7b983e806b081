"""Utility functions for b3ids."""

from b3ids.utils.helpers import (
    format_trace_id,
    format_span_id,
    parse_trace_id,
    parse_span_id,
    trace_id_width,
)

__all__ = [
    "format_trace_id",
    "format_span_id",
    "parse_trace_id",
    "parse_span_id",
    "trace_id_width",
]
