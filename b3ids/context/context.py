"""Holder for the trace context of the in-flight call - using OpenTelemetry context directly."""

from contextvars import Token
from typing import Optional

from opentelemetry import context as context_api

from b3ids.tracer.span_context import TraceContext

_TRACE_CONTEXT_KEY = context_api.create_key("b3ids-trace-context")


def get_current_trace_context() -> Optional[TraceContext]:
    """
    Return the trace context of the current call, if any.

    Uses OpenTelemetry's context API internally.
    """
    return context_api.get_value(_TRACE_CONTEXT_KEY)


def attach_trace_context(trace_context: TraceContext) -> Token:
    """
    Make a trace context current for the rest of the call.

    Returns:
        Token needed to restore the previous state
    """
    ctx = context_api.set_value(_TRACE_CONTEXT_KEY, trace_context)
    return context_api.attach(ctx)


def detach_trace_context(token: Token) -> None:
    """
    Restore the previous trace context using the provided token.

    Args:
        token: Token returned by attach_trace_context()
    """
    context_api.detach(token)
