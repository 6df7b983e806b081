"""HTTP client helpers for context propagation."""

from __future__ import annotations

import dataclasses
import logging
from typing import Dict, Optional, Tuple

from b3ids.context import get_current_trace_context
from b3ids.tracer.id_generator import B3IdGenerator, IdWidth, get_id_generator
from b3ids.tracer.span_context import TraceContext

logger = logging.getLogger(__name__)


def derive_child_context(
    trace_context: TraceContext,
    id_generator: Optional[B3IdGenerator] = None,
) -> TraceContext:
    """
    Return the context for an outbound call made under `trace_context`.

    - The trace ID, header format and sampling flag are kept.
    - The caller's span ID becomes the parent span ID.
    - A new span ID is generated.
    """
    generator = id_generator or get_id_generator()
    child = dataclasses.replace(
        trace_context,
        span_id=generator.next_id(IdWidth.BITS_64),
        parent_span_id=trace_context.span_id,
    )
    logger.debug("Derived span %s from parent %s", child.span_id, child.parent_span_id)
    return child


def derive_outbound_context(
    trace_context: TraceContext,
    id_generator: Optional[B3IdGenerator] = None,
) -> Tuple[TraceContext, Dict[str, str]]:
    """Return (child_context, request_headers) for an outbound call."""
    child = derive_child_context(trace_context, id_generator)
    return child, child.as_headers()


def inject_headers(
    headers: Dict[str, str],
    trace_context: Optional[TraceContext] = None,
) -> Dict[str, str]:
    """
    Add B3 headers for an outbound call into the provided headers dict.

    Uses `trace_context` if given, else the current one. Nothing is added
    when neither exists.

    Returns the same headers mapping for convenience.
    """
    if trace_context is None:
        trace_context = get_current_trace_context()
    if trace_context is None:
        return headers
    _, request_headers = derive_outbound_context(trace_context)
    headers.update(request_headers)
    return headers
