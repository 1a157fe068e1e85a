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

"""Datadog span model produced by the translator."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

Numeric = Union[int, float]


@dataclass
class DatadogSpan:
    """A span in the shape the Datadog agent expects.

    Attributes:
        trace_id: Lower 64 bits of the trace id.
        span_id: 64-bit span id.
        parent_id: 64-bit parent span id, ``0`` for root spans.
        name: Operation name.
        resource: Resource name used by Datadog for aggregation.
        service: Service name.
        span_type: Coarse span category, ``None`` when unknown.
        start: Start timestamp in nanoseconds since the epoch.
        end: End timestamp in nanoseconds since the epoch.
        error: ``1`` when the span represents an error, else ``0``.
        tags: String tags (``meta`` on the wire).
        metrics: Numeric tags.
    """

    trace_id: int
    span_id: int
    parent_id: int
    name: str
    resource: str
    service: str
    span_type: Optional[str] = None
    start: Optional[int] = None
    end: Optional[int] = None
    error: int = 0
    tags: Dict[str, str] = field(default_factory=dict)
    metrics: Dict[str, Numeric] = field(default_factory=dict)

    @property
    def duration(self) -> Optional[int]:
        if self.start is None or self.end is None:
            return None
        return self.end - self.start

    @property
    def is_root(self) -> bool:
        return self.parent_id == 0

    def set_tag(self, key: str, value: Any) -> None:
        if value is None:
            return
        # Sequence attributes become comma separated tag values
        if isinstance(value, (list, tuple)):
            value = ",".join(str(item) for item in value)
        self.tags[key] = str(value)

    def set_metric(self, key: str, value: Numeric) -> None:
        self.metrics[key] = value

    def to_dict(self) -> Dict[str, Any]:
        """Render the span with the agent's span-JSON field names."""
        span = {
            "trace_id": self.trace_id,
            "span_id": self.span_id,
            "parent_id": self.parent_id,
            "name": self.name,
            "resource": self.resource,
            "service": self.service,
            "error": self.error,
            "meta": dict(self.tags),
            "metrics": dict(self.metrics),
        }
        if self.span_type is not None:
            span["type"] = self.span_type
        if self.start is not None:
            span["start"] = self.start
        if self.duration is not None:
            span["duration"] = self.duration
        return span
