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

"""Test fixtures for Datadog exporter tests."""

from unittest.mock import MagicMock, patch

import pytest

from opentelemetry.exporter.datadog import DatadogSpanExporter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor


@pytest.fixture(autouse=True)
def clean_environ():
    """Keep DD_* variables of the host out of the tests."""
    with patch.dict("os.environ", {}, clear=True):
        yield


@pytest.fixture
def writer():
    return MagicMock()


@pytest.fixture
def exporter(writer):
    return DatadogSpanExporter(
        writer, service="test-service", env="test", version="0.0.1"
    )


@pytest.fixture
def tracer(exporter):
    tracer_provider = TracerProvider()
    tracer_provider.add_span_processor(SimpleSpanProcessor(exporter))
    return tracer_provider.get_tracer("opentelemetry.instrumentation.flask")
