"""Sampling flag carried in B3 headers."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class SamplingFlag(Enum):
    """
    Sampling hint propagated with a trace.

    The flag is only carried between services; nothing here decides
    whether a trace is recorded.
    """

    DEFER = "defer"
    DENY = "deny"
    ACCEPT = "accept"
    DEBUG = "debug"

    def as_header_value(self) -> str:
        """Return the B3 code for this flag; DEFER has the empty code."""
        return _HEADER_VALUES[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> "SamplingFlag":
        """Parse a B3 sampling code. Unknown or missing codes give DEFER."""
        if value is None:
            return cls.DEFER
        return _FLAGS_BY_HEADER_VALUE.get(value, cls.DEFER)


_HEADER_VALUES = {
    SamplingFlag.DEFER: "",
    SamplingFlag.DENY: "0",
    SamplingFlag.ACCEPT: "1",
    SamplingFlag.DEBUG: "d",
}

_FLAGS_BY_HEADER_VALUE = {
    "0": SamplingFlag.DENY,
    "1": SamplingFlag.ACCEPT,
    "d": SamplingFlag.DEBUG,
}
