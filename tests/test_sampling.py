"""Tests for the B3 sampling flag codec."""

import pytest

from b3ids.tracer import SamplingFlag


@pytest.mark.parametrize(
    "flag, value",
    [
        (SamplingFlag.DENY, "0"),
        (SamplingFlag.ACCEPT, "1"),
        (SamplingFlag.DEBUG, "d"),
        (SamplingFlag.DEFER, ""),
    ],
)
def test_header_value_mapping(flag, value):
    assert flag.as_header_value() == value
    if value:
        assert SamplingFlag.parse(value) is flag


@pytest.mark.parametrize("value", [None, "", "X", "true", "D", " 1"])
def test_unrecognized_values_defer(value):
    assert SamplingFlag.parse(value) is SamplingFlag.DEFER
