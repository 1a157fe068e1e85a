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

import dataclasses
import logging
from typing import Any, Callable, List, Optional, Sequence

from opentelemetry.exporter.datadog.config import DatadogExporterConfig
from opentelemetry.exporter.datadog.span import DatadogSpan
from opentelemetry.exporter.datadog.translator import translate_to_datadog
from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult

logger = logging.getLogger(__name__)

DatadogSpanWriterT = Callable[[List[DatadogSpan]], Any]


class DatadogSpanExporter(SpanExporter):
    """Datadog span exporter for OpenTelemetry.

    Translates each exported batch into Datadog spans and hands them to
    ``writer``, which owns encoding and transport to the agent.

    Args:
        writer: Called with the translated spans of every batch.
        config: Exporter configuration, read from the ``DD_*`` environment
            variables when omitted.
        **overrides: ``DatadogExporterConfig`` fields overriding ``config``.
    """

    def __init__(
        self,
        writer: DatadogSpanWriterT,
        config: Optional[DatadogExporterConfig] = None,
        **overrides,
    ):
        overrides = {
            key: value for key, value in overrides.items() if value is not None
        }
        if config is None:
            config = DatadogExporterConfig(**overrides)
        elif overrides:
            config = dataclasses.replace(config, **overrides)
        self.config = config
        self._writer = writer
        self._shutdown = False

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        if self._shutdown:
            logger.warning("Exporter already shutdown, ignoring batch")
            return SpanExportResult.FAILURE

        if not spans:
            return SpanExportResult.SUCCESS

        datadog_spans = translate_to_datadog(
            spans,
            self.config.service,
            env=self.config.env,
            version=self.config.version,
            tags=self.config.tags,
            literal_default_tags=self.config.literal_default_tags,
        )

        try:
            self._writer(datadog_spans)
        except Exception:  # pylint: disable=broad-except
            logger.exception(
                "Failed to write %d spans to Datadog", len(datadog_spans)
            )
            return SpanExportResult.FAILURE

        logger.debug("Exported %d spans to Datadog", len(datadog_spans))
        return SpanExportResult.SUCCESS

    def shutdown(self) -> None:
        self._shutdown = True

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return True
