"""Tests for log correlation fields and the logging filter."""

import logging
import unittest

from b3ids.context import attach_trace_context, detach_trace_context, get_current_trace_context
from b3ids.log_correlation import TraceContextLogFilter, correlation_fields
from b3ids.tracer import SamplingFlag, TraceContext, next_id


class TestCorrelationFields(unittest.TestCase):

    def test_no_context(self):
        self.assertEqual(
            correlation_fields(None),
            {"traceId": None, "spanId": None, "parentSpanId": None, "b3Id": None},
        )

    def test_full_context(self):
        context = TraceContext(False, next_id(), next_id(), next_id(), SamplingFlag.ACCEPT)
        fields = correlation_fields(context)
        self.assertEqual(fields["traceId"], context.trace_id)
        self.assertEqual(fields["spanId"], context.span_id)
        self.assertEqual(fields["parentSpanId"], context.parent_span_id)
        self.assertEqual(
            fields["b3Id"],
            f"{context.trace_id}-{context.span_id}-1-{context.parent_span_id}",
        )


class TestTraceContextLogFilter(unittest.TestCase):

    def setUp(self):
        self.records = []
        handler = logging.Handler()
        handler.emit = lambda record: self.records.append(record)
        handler.addFilter(TraceContextLogFilter())
        self.handler = handler
        self.logger = logging.getLogger("b3ids.tests.correlation")
        self.logger.addHandler(handler)
        self.logger.setLevel(logging.INFO)

    def tearDown(self):
        self.logger.removeHandler(self.handler)

    def test_record_carries_active_context(self):
        context = TraceContext(True, next_id(), next_id())
        token = attach_trace_context(context)
        try:
            self.logger.info("handling request")
        finally:
            detach_trace_context(token)

        record = self.records[-1]
        self.assertEqual(record.traceId, context.trace_id)
        self.assertEqual(record.spanId, context.span_id)
        self.assertIsNone(record.parentSpanId)
        self.assertEqual(record.b3Id, f"{context.trace_id}-{context.span_id}")

    def test_record_without_context(self):
        self.logger.info("no trace")
        self.assertIsNone(self.records[-1].traceId)

    def test_detach_restores_previous(self):
        self.assertIsNone(get_current_trace_context())
        outer = TraceContext(False, next_id(), next_id())
        inner = TraceContext(False, outer.trace_id, next_id(), outer.span_id)
        outer_token = attach_trace_context(outer)
        inner_token = attach_trace_context(inner)
        self.assertIs(get_current_trace_context(), inner)
        detach_trace_context(inner_token)
        self.assertIs(get_current_trace_context(), outer)
        detach_trace_context(outer_token)
        self.assertIsNone(get_current_trace_context())


if __name__ == "__main__":
    unittest.main()
