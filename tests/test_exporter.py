# Copyright The OpenTelemetry Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for the Datadog span exporter."""

import logging
import os
from unittest.mock import MagicMock, patch

import pytest

from opentelemetry.exporter.datadog import (
    DatadogExporterConfig,
    DatadogSpan,
    DatadogSpanExporter,
)
from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult
from opentelemetry.trace import SpanContext, TraceFlags
from opentelemetry.trace.status import Status, StatusCode


def _finished_span(name="span"):
    return ReadableSpan(
        name=name,
        context=SpanContext(
            0x1, 0x2, is_remote=False, trace_flags=TraceFlags(0x01)
        ),
        start_time=1,
        end_time=2,
    )


class TestDatadogSpanExporter:
    """Tests for DatadogSpanExporter."""

    def test_is_span_exporter(self, exporter):
        assert isinstance(exporter, SpanExporter)

    def test_export_passes_translated_spans_to_writer(self, exporter, writer):
        result = exporter.export([_finished_span("a"), _finished_span("b")])

        assert result == SpanExportResult.SUCCESS
        writer.assert_called_once()
        (datadog_spans,) = writer.call_args.args
        assert [span.name for span in datadog_spans] == ["a", "b"]
        assert all(isinstance(span, DatadogSpan) for span in datadog_spans)
        assert all(span.service == "test-service" for span in datadog_spans)

    def test_export_empty_batch(self, exporter, writer):
        assert exporter.export([]) == SpanExportResult.SUCCESS
        writer.assert_not_called()

    def test_export_writer_failure(self, exporter, writer, caplog):
        writer.side_effect = ConnectionError("agent unreachable")

        with caplog.at_level(logging.ERROR):
            result = exporter.export([_finished_span()])

        assert result == SpanExportResult.FAILURE
        assert "Failed to write 1 spans" in caplog.text

    def test_export_after_shutdown(self, exporter, writer):
        exporter.shutdown()

        assert exporter.export([_finished_span()]) == SpanExportResult.FAILURE
        writer.assert_not_called()

    def test_force_flush(self, exporter):
        assert exporter.force_flush() is True

    def test_end_to_end_with_tracer(self, tracer, writer):
        with tracer.start_as_current_span(
            "GET /users", attributes={"http.method": "GET", "http.route": "/users"}
        ) as root:
            with tracer.start_as_current_span("db.query") as child:
                child.set_status(Status(StatusCode.ERROR))

        assert writer.call_count == 2
        (child_dd,) = writer.call_args_list[0].args[0]
        (root_dd,) = writer.call_args_list[1].args[0]

        root_context = root.get_span_context()
        assert root_dd.trace_id == root_context.trace_id & (2**64 - 1)
        assert root_dd.span_id == root_context.span_id
        assert root_dd.parent_id == 0
        assert root_dd.resource == "GET /users"
        assert root_dd.span_type == "web"
        assert root_dd.tags["version"] == "0.0.1"
        assert root_dd.tags["env"] == "test"
        assert root_dd.metrics["_sample_rate"] == 1

        assert child_dd.trace_id == root_dd.trace_id
        assert child_dd.parent_id == root_dd.span_id
        assert child_dd.resource == "db.query"
        assert child_dd.error == 1
        assert "version" not in child_dd.tags
        assert child_dd.tags["env"] == "test"

    def test_config_from_environment(self, writer):
        with patch.dict(
            os.environ,
            {
                "DD_SERVICE": "env-service",
                "DD_ENV": "staging",
                "DD_TAGS": "team:core",
            },
        ):
            exporter = DatadogSpanExporter(writer)

        assert exporter.config.service == "env-service"
        assert exporter.config.env == "staging"
        assert exporter.config.tags == "team:core"

    def test_overrides_win_over_config(self, writer):
        config = DatadogExporterConfig(service="config-service", env="prod")

        exporter = DatadogSpanExporter(
            writer, config=config, service="override-service", env=None
        )

        assert exporter.config.service == "override-service"
        assert exporter.config.env == "prod"
        assert config.service == "config-service"

    def test_literal_default_tags(self):
        writer = MagicMock()
        exporter = DatadogSpanExporter(
            writer,
            service="svc",
            tags="team:core",
            literal_default_tags=True,
        )

        exporter.export([_finished_span()])

        (datadog_span,) = writer.call_args.args[0]
        assert datadog_span.tags["team"] == "core"

    def test_missing_service(self, writer):
        with pytest.raises(ValueError):
            DatadogSpanExporter(writer)
