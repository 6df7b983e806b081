"""Conversions between B3 hex ids and OpenTelemetry integer ids."""

from __future__ import annotations

from b3ids.tracer.id_generator import IdWidth


def format_trace_id(trace_id: int, width: IdWidth = IdWidth.BITS_128) -> str:
    """
    Format an OTel trace_id as a hex string.

    Args:
        trace_id: OTel trace_id as int
        width: BITS_64 writes 16 chars, BITS_128 writes 32 chars

    Returns:
        Zero-padded lowercase hex string
    """
    if width == IdWidth.BITS_64:
        return format(trace_id, '016x')
    return format(trace_id, '032x')


def format_span_id(span_id: int) -> str:
    """Format an OTel span_id as a 16-character hex string."""
    return format(span_id, '016x')


def trace_id_width(trace_id: int) -> IdWidth:
    """Smallest B3 width that holds the given trace_id."""
    return IdWidth.BITS_64 if trace_id < 1 << 64 else IdWidth.BITS_128


def parse_trace_id(hex_string: str) -> int:
    """
    Parse a 16 or 32 character hex trace id.

    Returns 0 (the OTel invalid id) for an empty string.

    Raises:
        ValueError: if the string is not hex
    """
    if not hex_string:
        return 0
    return int(hex_string, 16)


def parse_span_id(hex_string: str) -> int:
    """Parse a 16 character hex span id; 0 for an empty string."""
    if not hex_string:
        return 0
    return int(hex_string, 16)
