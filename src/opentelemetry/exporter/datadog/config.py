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

"""Configuration for the Datadog exporter."""

from dataclasses import dataclass, field
from os import environ
from typing import Optional

from opentelemetry.exporter.datadog.constants import (
    DD_ENV,
    DD_SERVICE,
    DD_TAGS,
    DD_VERSION,
    OTEL_EXPORTER_DATADOG_LITERAL_TAGS,
)


def _get_env(key: str) -> Optional[str]:
    return environ.get(key) or None


@dataclass
class DatadogExporterConfig:
    """Configuration for the Datadog exporter.

    Attributes:
        service: Service name set on every span.
        env: Environment tag, set on every span.
        version: Version tag, set on root spans.
        tags: Default tags in ``"key1:value1,key2:value2"`` form.
        literal_default_tags: Set the parsed default tag values on spans
            instead of re-reading each default tag key from the span's
            attributes.
    """

    service: Optional[str] = field(default_factory=lambda: _get_env(DD_SERVICE))
    env: Optional[str] = field(default_factory=lambda: _get_env(DD_ENV))
    version: Optional[str] = field(default_factory=lambda: _get_env(DD_VERSION))
    tags: Optional[str] = field(default_factory=lambda: _get_env(DD_TAGS))
    literal_default_tags: bool = field(
        default_factory=lambda: environ.get(
            OTEL_EXPORTER_DATADOG_LITERAL_TAGS, "false"
        ).lower()
        == "true"
    )

    def __post_init__(self):
        if not self.service:
            raise ValueError(
                f"Datadog service is required, set it or {DD_SERVICE}"
            )
