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

"""
The **OpenTelemetry Datadog Exporter** translates `OpenTelemetry`_ spans into
the span model of `Datadog`_.

Installation
------------

::

    pip install opentelemetry-exporter-datadog


Usage
-----

The exporter translates every exported batch and passes the resulting
Datadog spans to a writer, which is responsible for encoding and sending
them to the Datadog Agent.

.. code:: python

    from opentelemetry import trace
    from opentelemetry.exporter.datadog import DatadogSpanExporter
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor

    def write(datadog_spans):
        agent_client.send([span.to_dict() for span in datadog_spans])

    trace.set_tracer_provider(TracerProvider())
    exporter = DatadogSpanExporter(
        write, service="my-helloworld-service", env="prod", version="1.2.0"
    )
    trace.get_tracer_provider().add_span_processor(
        BatchSpanProcessor(exporter)
    )

The translation itself is available as a plain function:

.. code:: python

    from opentelemetry.exporter.datadog import translate_to_datadog

    datadog_spans = translate_to_datadog(
        spans, "my-helloworld-service", tags="team:core,tier:web"
    )

Configuration via environment variables:
    - DD_SERVICE: Service name (required when not passed explicitly)
    - DD_ENV: Environment tag
    - DD_VERSION: Version tag, set on root spans
    - DD_TAGS: Default tags, ``key1:value1,key2:value2``
    - OTEL_EXPORTER_DATADOG_LITERAL_TAGS: ``true`` to set the configured
      default tag values instead of re-reading them from span attributes

API
---
.. _Datadog: https://www.datadoghq.com/
.. _OpenTelemetry: https://github.com/open-telemetry/opentelemetry-python/
"""

from opentelemetry.exporter.datadog.config import DatadogExporterConfig
from opentelemetry.exporter.datadog.exporter import DatadogSpanExporter
from opentelemetry.exporter.datadog.span import DatadogSpan
from opentelemetry.exporter.datadog.translator import translate_to_datadog
from opentelemetry.exporter.datadog.version import __version__

__all__ = [
    "DatadogExporterConfig",
    "DatadogSpan",
    "DatadogSpanExporter",
    "translate_to_datadog",
    "__version__",
]
