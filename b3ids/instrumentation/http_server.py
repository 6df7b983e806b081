"""HTTP server helpers for reading or originating the trace context of a request."""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Tuple

from b3ids.config import PropagationConfig
from b3ids.tracer.id_generator import B3IdGenerator, IdWidth, get_id_generator
from b3ids.tracer.span_context import TraceContext

logger = logging.getLogger(__name__)


class TraceInitiationPolicy:
    """
    Decides whether an inbound call without trace headers starts a new trace.

    A trace is originated only when the request path starts with one of the
    configured prefixes. An identity that came with the request is always kept.
    """

    def __init__(
        self,
        config: Optional[PropagationConfig] = None,
        id_generator: Optional[B3IdGenerator] = None,
    ) -> None:
        self.config = config or PropagationConfig()
        self._id_generator = id_generator or get_id_generator()

    def matches(self, path: str) -> bool:
        return any(path.startswith(prefix) for prefix in self.config.initiate_trace_path_prefixes)

    def originate(self) -> TraceContext:
        """Return a new root context: fresh trace and span ids, no parent, DEFER."""
        return TraceContext(
            use_combined_header=self.config.use_combined_header,
            trace_id=self._id_generator.next_id(self.config.id_width),
            span_id=self._id_generator.next_id(IdWidth.BITS_64),
        )

    def apply(self, trace_context: TraceContext, path: str) -> TraceContext:
        """
        Return the context to use for a request.

        Args:
            trace_context: context decoded from the request headers, possibly empty
            path: request path

        Returns:
            The decoded context if it is not empty, else a newly originated one
            when the path matches, else the empty context
        """
        if not trace_context.is_empty():
            return trace_context
        if not self.matches(path):
            logger.debug("Path %s matches no trace initiation prefix", path)
            return trace_context
        originated = self.originate()
        logger.debug("Originated trace %s for path %s", originated.trace_id, path)
        return originated


def extract_trace_context(headers: Mapping[str, str]) -> TraceContext:
    """Decode the trace context carried by request headers (possibly empty)."""
    return TraceContext.decode(headers)


def derive_inbound_context(
    headers: Mapping[str, str],
    path: str,
    config: Optional[PropagationConfig] = None,
    id_generator: Optional[B3IdGenerator] = None,
) -> Tuple[TraceContext, Dict[str, str]]:
    """
    Resolve the trace context of an inbound call.

    Returns:
        (context, response_headers). When no identity was received and none
        was originated, the context is empty and no headers are returned.

    Raises:
        HeaderParseError: if the request carries a malformed `b3` header
    """
    policy = TraceInitiationPolicy(config, id_generator)
    trace_context = policy.apply(extract_trace_context(headers), path)
    if trace_context.is_empty():
        return trace_context, {}
    return trace_context, trace_context.as_headers()
