"""B3 propagation for OpenTelemetry, built on the b3ids header codec."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Set

from opentelemetry.context import Context
from opentelemetry.propagators.textmap import (
    CarrierT,
    Getter,
    Setter,
    TextMapPropagator,
    default_getter,
    default_setter,
)
from opentelemetry.trace import SpanContext as OTelSpanContext, TraceFlags
from opentelemetry.trace import NonRecordingSpan, get_current_span, set_span_in_context

from b3ids.errors import HeaderParseError
from b3ids.tracer.sampling import SamplingFlag
from b3ids.tracer.span_context import ALL_HEADERS, TraceContext
from b3ids.utils.helpers import (
    format_span_id,
    format_trace_id,
    parse_span_id,
    parse_trace_id,
    trace_id_width,
)

logger = logging.getLogger(__name__)

_SAMPLED_FLAGS = (SamplingFlag.ACCEPT, SamplingFlag.DEBUG)


def to_otel_span_context(trace_context: TraceContext) -> Optional[OTelSpanContext]:
    """
    Convert a TraceContext to a remote OTel SpanContext.

    Returns None when the trace or span id is missing or not valid hex.
    ACCEPT and DEBUG map to the sampled trace flag, everything else to not sampled.
    """
    if not trace_context.trace_id or not trace_context.span_id:
        return None
    try:
        trace_id = parse_trace_id(trace_context.trace_id)
        span_id = parse_span_id(trace_context.span_id)
    except ValueError:
        logger.debug("Ignoring non-hex B3 ids %s/%s", trace_context.trace_id, trace_context.span_id)
        return None

    if trace_context.sampling in _SAMPLED_FLAGS:
        trace_flags = TraceFlags(TraceFlags.SAMPLED)
    else:
        trace_flags = TraceFlags(TraceFlags.DEFAULT)

    otel_context = OTelSpanContext(
        trace_id=trace_id,
        span_id=span_id,
        is_remote=True,
        trace_flags=trace_flags,
    )
    return otel_context if otel_context.is_valid else None


def from_otel_span_context(
    otel_context: OTelSpanContext,
    use_combined_header: bool = False,
    parent_span_id: Optional[str] = None,
) -> TraceContext:
    """Convert an OTel SpanContext to a TraceContext (sampled -> ACCEPT, else DENY)."""
    sampling = SamplingFlag.ACCEPT if otel_context.trace_flags.sampled else SamplingFlag.DENY
    return TraceContext(
        use_combined_header=use_combined_header,
        trace_id=format_trace_id(otel_context.trace_id, trace_id_width(otel_context.trace_id)),
        span_id=format_span_id(otel_context.span_id),
        parent_span_id=parent_span_id,
        sampling=sampling,
    )


class B3Propagator(TextMapPropagator):
    """
    OpenTelemetry TextMapPropagator for B3 headers.

    Extraction accepts both the combined and multi-header forms. Injection
    writes the form selected by `use_combined_header`.
    """

    def __init__(self, use_combined_header: bool = False) -> None:
        self.use_combined_header = use_combined_header

    def extract(
        self,
        carrier: CarrierT,
        context: Optional[Context] = None,
        getter: Getter[CarrierT] = default_getter,
    ) -> Context:
        if context is None:
            context = Context()

        headers: Dict[str, str] = {}
        for key in getter.keys(carrier):
            values = getter.get(carrier, key)
            if values:
                headers[key] = values[0]

        try:
            trace_context = TraceContext.decode(headers)
        except HeaderParseError as exc:
            # propagators must not fail the request
            logger.warning("Ignoring malformed B3 header: %s", exc)
            return context

        otel_context = to_otel_span_context(trace_context)
        if otel_context is None:
            return context
        return set_span_in_context(NonRecordingSpan(otel_context), context)

    def inject(
        self,
        carrier: CarrierT,
        context: Optional[Context] = None,
        setter: Setter[CarrierT] = default_setter,
    ) -> None:
        span = get_current_span(context)
        otel_context = span.get_span_context()
        if not otel_context.is_valid:
            return

        parent_span_id = None
        parent = getattr(span, "parent", None)
        if parent is not None and parent.is_valid:
            parent_span_id = format_span_id(parent.span_id)

        trace_context = from_otel_span_context(otel_context, self.use_combined_header, parent_span_id)
        for name, value in trace_context.as_headers().items():
            setter.set(carrier, name, value)

    @property
    def fields(self) -> Set[str]:
        return set(ALL_HEADERS)
