"""Random B3 identifiers from one shared, thread-safe source."""

from __future__ import annotations

import os
import random
import threading
import time
from enum import IntEnum
from typing import Optional

from opentelemetry.sdk.trace.id_generator import IdGenerator
from opentelemetry.trace import INVALID_SPAN_ID, INVALID_TRACE_ID


class IdWidth(IntEnum):
    """Bit width of a generated identifier."""

    BITS_64 = 64
    BITS_128 = 128


class B3IdGenerator(IdGenerator):
    """
    Generates B3 ids as lowercase hex strings.

    Every draw goes through a single `random.Random` guarded by a lock, so
    one instance can be shared by any number of request threads or tasks.
    Also usable as an OpenTelemetry id generator:

        TracerProvider(id_generator=B3IdGenerator())
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        if seed is None:
            seed = int.from_bytes(os.urandom(8), "big") ^ time.time_ns()
        self._random = random.Random(seed)
        self._lock = threading.Lock()

    def _next_64(self) -> int:
        with self._lock:
            return self._random.getrandbits(64)

    def next_id(self, width: IdWidth = IdWidth.BITS_64) -> str:
        """
        Return a new id of the given width.

        A 128-bit id is two independent 64-bit draws, first draw first.

        Args:
            width: IdWidth.BITS_64 (16 hex chars) or IdWidth.BITS_128 (32 hex chars)

        Returns:
            Zero-padded lowercase hex string
        """
        if width == IdWidth.BITS_128:
            return f"{self._next_64():016x}{self._next_64():016x}"
        return f"{self._next_64():016x}"

    def generate_span_id(self) -> int:
        span_id = self._next_64()
        while span_id == INVALID_SPAN_ID:
            span_id = self._next_64()
        return span_id

    def generate_trace_id(self) -> int:
        trace_id = int(self.next_id(IdWidth.BITS_128), 16)
        while trace_id == INVALID_TRACE_ID:
            trace_id = int(self.next_id(IdWidth.BITS_128), 16)
        return trace_id


# Seeded once per process
_generator = B3IdGenerator()


def get_id_generator() -> B3IdGenerator:
    """Return the process-wide generator."""
    return _generator


def next_id(width: IdWidth = IdWidth.BITS_64) -> str:
    """Return a new hex id from the process-wide generator."""
    return _generator.next_id(width)
