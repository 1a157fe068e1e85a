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

"""Translation of OpenTelemetry spans into Datadog spans.

The per-span helpers return a fallback value instead of raising, so a single
malformed span degrades to partially populated fields and never drops the
rest of the batch.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from opentelemetry.exporter.datadog.constants import (
    AUTO_KEEP,
    AUTO_REJECT,
    DD_ORIGIN,
    DD_ORIGIN_TRACE_STATE_KEY,
    ENV_KEY,
    ERROR_EVENT_NAME,
    ERROR_MSG,
    ERROR_STACK,
    ERROR_TYPE,
    INSTRUMENTATION_SPAN_TYPES,
    SAMPLE_RATE_METRIC_KEY,
    SAMPLING_PRIORITY_KEY,
    VERSION_KEY,
)
from opentelemetry.exporter.datadog.span import DatadogSpan
from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.semconv.trace import SpanAttributes
from opentelemetry.trace import TraceFlags

logger = logging.getLogger(__name__)

_MAX_UINT_64BITS = (1 << 64) - 1

# int() also accepts signs, underscores and surrounding whitespace.
_HEX_ID_PATTERN = re.compile(r"[0-9a-fA-F]+")
_ID_PATTERN = re.compile(r"[0-9a-zA-Z]+")

_ORIGIN_PATTERN = re.compile(r"(?:^|,)\s*_?dd_origin\s*=\s*([^,\s]*)")

# Old semconv keys come first so existing instrumentations keep their names.
_HTTP_METHOD_KEYS = (
    SpanAttributes.HTTP_METHOD,
    SpanAttributes.HTTP_REQUEST_METHOD,
)
_HTTP_ROUTE_KEYS = (
    SpanAttributes.HTTP_ROUTE,
    SpanAttributes.HTTP_TARGET,
    SpanAttributes.URL_PATH,
)


def int64(value: Any, base: int = 16) -> int:
    """Convert an identifier to the unsigned 64-bit integer Datadog uses.

    ``value`` is either an integer id, as stored on SDK span contexts, or a
    string in ``base``. Ids wider than 64 bits keep their low 64 bits.
    ``None`` converts to ``0``.

    Raises:
        ValueError: ``value`` is a string that is not a number in ``base``.
        TypeError: ``value`` is neither an integer nor a string.
    """
    if value is None:
        return 0
    if isinstance(value, int):
        return value & _MAX_UINT_64BITS
    if not isinstance(value, str):
        raise TypeError(f"unsupported id type {type(value).__name__}")
    pattern = _HEX_ID_PATTERN if base == 16 else _ID_PATTERN
    if pattern.fullmatch(value) is None:
        raise ValueError(f"invalid id {value!r} in base {base}")
    return int(value, base) & _MAX_UINT_64BITS


def get_trace_ids(span: ReadableSpan) -> Tuple[int, int, int]:
    """Return ``(trace_id, span_id, parent_id)``, or zeros if any is invalid."""
    try:
        context = span.context
        trace_id = int64(context.trace_id)
        span_id = int64(context.span_id)
        parent = span.parent
        parent_id = int64(parent.span_id) if parent is not None else 0
    except Exception:  # pylint: disable=broad-except
        logger.debug(
            "Error encoding trace ids of span %s", span.name, exc_info=True
        )
        return 0, 0, 0
    return trace_id, span_id, parent_id


def get_span_type(span: ReadableSpan) -> Optional[str]:
    """Get the Datadog span type from the span's instrumentation scope."""
    try:
        scope = span.instrumentation_scope
        if scope is None:
            return None
        span_type = INSTRUMENTATION_SPAN_TYPES.get(scope.name)
    except Exception:  # pylint: disable=broad-except
        logger.debug(
            "Error getting span type of span %s", span.name, exc_info=True
        )
        return None
    if span_type is None:
        return None
    return span_type.value


def _first_attribute(
    attributes: Mapping[str, Any], keys: Sequence[str]
) -> Optional[Any]:
    for key in keys:
        value = attributes.get(key)
        if value:
            return value
    return None


def get_resource(span: ReadableSpan) -> str:
    """Get the resource name, ``"<METHOD> <ROUTE>"`` for HTTP spans.

    Spans without an HTTP method keep their own name as resource.
    """
    # TODO: derive resources for db and messaging spans from db.statement
    # and messaging.destination once the agent side normalization is settled
    try:
        attributes = span.attributes or {}
        method = _first_attribute(attributes, _HTTP_METHOD_KEYS)
        if method is None:
            return span.name
        if not isinstance(method, str):
            raise TypeError(
                f"http method must be a string, got {type(method).__name__}"
            )
        route = _first_attribute(attributes, _HTTP_ROUTE_KEYS)
        if route is None:
            return method
        return method + " " + route
    except Exception:  # pylint: disable=broad-except
        logger.debug(
            "Error getting resource of span %s", span.name, exc_info=True
        )
        return span.name


def get_exc_info(span: ReadableSpan) -> Tuple[str, str, str]:
    """Parse exception type, message and stack from the span's error event."""
    try:
        error_event = next(
            (event for event in span.events if event.name == ERROR_EVENT_NAME),
            None,
        )
        if error_event is None:
            return "", "", ""
        attributes = error_event.attributes or {}
        return (
            str(attributes.get(ERROR_TYPE, "")),
            str(attributes.get(ERROR_MSG, "")),
            str(attributes.get(ERROR_STACK, "")),
        )
    except Exception:  # pylint: disable=broad-except
        logger.debug(
            "Error getting exception info from events of span %s",
            span.name,
            exc_info=True,
        )
        return "", "", ""


def get_sampling_rate(span: ReadableSpan) -> Optional[int]:
    # Only reports the upstream decision, the actual sampling probability
    # is not carried in the span context.
    try:
        trace_flags = getattr(span.context, "trace_flags", None)
        if trace_flags is None:
            return None
        return 1 if TraceFlags(trace_flags).sampled else 0
    except Exception:  # pylint: disable=broad-except
        logger.debug(
            "Error getting sampling rate of span %s", span.name, exc_info=True
        )
        return None


def get_origin(trace_state: Any) -> Optional[str]:
    """Get the Datadog origin from a ``TraceState`` or tracestate header.

    The value is matched with a regular expression on the serialized header
    instead of parsing every list member.
    """
    if trace_state is None:
        return None
    try:
        if isinstance(trace_state, str):
            header = trace_state
        else:
            header = trace_state.to_header()
        if DD_ORIGIN_TRACE_STATE_KEY not in header:
            return None
        match = _ORIGIN_PATTERN.search(header)
    except Exception:  # pylint: disable=broad-except
        logger.debug(
            "Error getting origin from trace state %r",
            trace_state,
            exc_info=True,
        )
        return None
    if match is None or not match.group(1):
        return None
    return match.group(1)


def parse_tags_str(tags_str: Optional[str]) -> Dict[str, str]:
    """Parse a string of tags typically provided via environment variables.

    The expected string is of the form::

        "key1:value1,key2:value2"

    A single malformed pair discards every tag, so a misconfigured variable
    never attaches part of its content to spans.
    """
    if not tags_str:
        return {}

    parsed_tags = {}
    for pair in tags_str.split(","):
        pair = pair.strip()
        if not pair:
            continue
        key, separator, value = pair.partition(":")
        key = key.strip()
        value = value.strip()
        if not separator or not key or not value or value.endswith(":"):
            logger.warning(
                "Malformed tag %r in default tags %r, ignoring default tags",
                pair,
                tags_str,
            )
            return {}
        parsed_tags[key] = value
    return parsed_tags


def _is_error(span: ReadableSpan) -> bool:
    # UNSET counts as OK, matching Status.is_ok
    try:
        return span.status is not None and not span.status.is_ok
    except Exception:  # pylint: disable=broad-except
        logger.debug(
            "Error reading status of span %s", span.name, exc_info=True
        )
        return False


def _set_attribute_tags(
    datadog_span: DatadogSpan, span: ReadableSpan
) -> Mapping[str, Any]:
    try:
        attributes = span.attributes or {}
        for key, value in attributes.items():
            datadog_span.set_tag(key, value)
    except Exception:  # pylint: disable=broad-except
        logger.debug(
            "Error copying attributes of span %s", span.name, exc_info=True
        )
        return {}
    return attributes


def _set_default_tags(
    datadog_span: DatadogSpan,
    attributes: Mapping[str, Any],
    default_tags: Mapping[str, str],
    literal_default_tags: bool,
) -> None:
    if literal_default_tags:
        for key, value in default_tags.items():
            if key not in attributes:
                datadog_span.set_tag(key, value)
        return

    # Default tag keys are looked up in the span's attributes, their parsed
    # values are not used. Keys missing from the attributes are set empty.
    for key in default_tags:
        datadog_span.set_tag(key, attributes.get(key, ""))


def translate_to_datadog(
    spans: Sequence[ReadableSpan],
    service: str,
    env: Optional[str] = None,
    version: Optional[str] = None,
    tags: Optional[str] = None,
    literal_default_tags: bool = False,
) -> List[DatadogSpan]:
    """Translate a batch of OpenTelemetry spans into Datadog spans.

    Args:
        spans: Finished spans, in export order.
        service: Datadog service name set on every span.
        env: Environment tag set on every span.
        version: Version tag set on root spans.
        tags: Default tags in ``"key1:value1,key2:value2"`` form.
        literal_default_tags: Set the parsed default tag values instead of
            re-reading each default tag key from the span's attributes.

    Returns:
        One Datadog span per input span, in the same order.
    """
    default_tags = parse_tags_str(tags)

    datadog_spans = []
    for span in spans:
        trace_id, span_id, parent_id = get_trace_ids(span)

        datadog_span = DatadogSpan(
            trace_id=trace_id,
            span_id=span_id,
            parent_id=parent_id,
            name=span.name,
            resource=get_resource(span),
            service=service,
            span_type=get_span_type(span),
            start=span.start_time,
            end=span.end_time,
        )

        if _is_error(span):
            datadog_span.error = 1
            exc_type, exc_msg, exc_stack = get_exc_info(span)
            datadog_span.set_tag(ERROR_TYPE, exc_type)
            datadog_span.set_tag(ERROR_MSG, exc_msg)
            datadog_span.set_tag(ERROR_STACK, exc_stack)

        attributes = _set_attribute_tags(datadog_span, span)

        _set_default_tags(
            datadog_span, attributes, default_tags, literal_default_tags
        )

        if datadog_span.is_root:
            trace_state = getattr(span.context, "trace_state", None)
            datadog_span.set_tag(DD_ORIGIN, get_origin(trace_state))
            datadog_span.set_tag(VERSION_KEY, version)
        datadog_span.set_tag(ENV_KEY, env)

        sampling_rate = get_sampling_rate(span)
        if sampling_rate is not None:
            datadog_span.set_metric(SAMPLE_RATE_METRIC_KEY, sampling_rate)
            if datadog_span.is_root:
                datadog_span.set_metric(
                    SAMPLING_PRIORITY_KEY,
                    AUTO_KEEP if sampling_rate else AUTO_REJECT,
                )

        datadog_spans.append(datadog_span)

    return datadog_spans
