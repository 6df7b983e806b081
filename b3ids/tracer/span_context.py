"""Immutable B3 trace identity and its header codec."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from b3ids.errors import HeaderParseError
from b3ids.tracer.sampling import SamplingFlag

B3_HEADER = "b3"
TRACE_ID_HEADER = "X-B3-TraceId"
SPAN_ID_HEADER = "X-B3-SpanId"
PARENT_SPAN_ID_HEADER = "X-B3-ParentSpanId"
SAMPLED_HEADER = "X-B3-Sampled"
DEBUG_HEADER = "X-B3-Flags"

ALL_HEADERS = (
    B3_HEADER,
    TRACE_ID_HEADER,
    SPAN_ID_HEADER,
    PARENT_SPAN_ID_HEADER,
    SAMPLED_HEADER,
    DEBUG_HEADER,
)


def get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Look up a header by name, ignoring case."""
    value = headers.get(name)
    if value is not None:
        return value
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


@dataclass(frozen=True)
class TraceContext:
    """
    Trace, span and parent span ids plus the sampling flag of one call.

    `use_combined_header` only affects encoding: True writes a single `b3`
    header, False writes the `X-B3-*` family. Any field may be absent.
    """

    use_combined_header: bool = False
    trace_id: Optional[str] = None
    span_id: Optional[str] = None
    parent_span_id: Optional[str] = None
    sampling: SamplingFlag = SamplingFlag.DEFER

    def is_empty(self) -> bool:
        # sampling alone does not make an identity
        return self.trace_id is None and self.span_id is None and self.parent_span_id is None

    @classmethod
    def parse_b3_header(cls, header: str) -> "TraceContext":
        """
        Parse the value of a combined `b3` header.

        Accepted forms are `S`, `T-S` and `T-S-S-P` (sampling code in third
        position). Any other number of dash-separated parts, including
        three, raises HeaderParseError.
        """
        parts = header.split("-")
        if len(parts) == 1:
            return cls(True, sampling=SamplingFlag.parse(parts[0]))
        if len(parts) == 2:
            return cls(True, parts[0], parts[1])
        if len(parts) == 4:
            return cls(True, parts[0], parts[1], parts[3], SamplingFlag.parse(parts[2]))
        raise HeaderParseError(header)

    @classmethod
    def decode(cls, headers: Mapping[str, str]) -> "TraceContext":
        """
        Read a trace context from request or response headers.

        A `b3` header takes precedence over the `X-B3-*` headers. When no
        tracing header is present the result is an empty context.

        Raises:
            HeaderParseError: if the `b3` header is malformed
        """
        b3 = get_header(headers, B3_HEADER)
        if b3 is not None:
            return cls.parse_b3_header(b3)

        if get_header(headers, DEBUG_HEADER) is not None:
            sampling = SamplingFlag.DEBUG
        else:
            sampling = SamplingFlag.parse(get_header(headers, SAMPLED_HEADER))
        return cls(
            False,
            get_header(headers, TRACE_ID_HEADER),
            get_header(headers, SPAN_ID_HEADER),
            get_header(headers, PARENT_SPAN_ID_HEADER),
            sampling,
        )

    def encode_combined(self) -> str:
        """
        Format the value of a combined `b3` header.

        When exactly three of trace id, span id, sampling code and parent
        span id are present only `trace-span` is written, so a sampling flag
        without a parent span id is not sent.
        """
        # TODO: confirm with the B3 format owner whether T-S-{sampling} should be written instead
        candidates = (self.trace_id, self.span_id, self.sampling.as_header_value(), self.parent_span_id)
        parts = [part for part in candidates if part is not None]
        if len(parts) == 3:
            return f"{self.trace_id or ''}-{self.span_id or ''}"
        return "-".join(parts)

    def as_headers(self) -> Dict[str, str]:
        """Return the headers that carry this context."""
        if self.use_combined_header:
            return {B3_HEADER: self.encode_combined()}

        headers: Dict[str, str] = {}
        if self.trace_id is not None:
            headers[TRACE_ID_HEADER] = self.trace_id
        if self.span_id is not None:
            headers[SPAN_ID_HEADER] = self.span_id
        if self.parent_span_id is not None:
            headers[PARENT_SPAN_ID_HEADER] = self.parent_span_id
        if self.sampling in (SamplingFlag.ACCEPT, SamplingFlag.DENY):
            headers[SAMPLED_HEADER] = self.sampling.as_header_value()
        if self.sampling is SamplingFlag.DEBUG:
            headers[DEBUG_HEADER] = "1"
        return headers
