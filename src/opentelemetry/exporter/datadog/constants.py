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

from enum import Enum, unique
from types import MappingProxyType

ENV_KEY = "env"
VERSION_KEY = "version"

DD_ORIGIN = "_dd_origin"
# W3C tracestate keys must start with a lowercase letter, so propagators
# store the origin without the leading underscore.
DD_ORIGIN_TRACE_STATE_KEY = "dd_origin"

AUTO_REJECT = 0
AUTO_KEEP = 1

SAMPLE_RATE_METRIC_KEY = "_sample_rate"
SAMPLING_PRIORITY_KEY = "_sampling_priority_v1"

ERROR_EVENT_NAME = "error"
ERROR_TYPE = "error.type"
ERROR_MSG = "error.msg"
ERROR_STACK = "error.stack"

OTEL_EXPORTER_DATADOG_LITERAL_TAGS = "OTEL_EXPORTER_DATADOG_LITERAL_TAGS"
DD_SERVICE = "DD_SERVICE"
DD_ENV = "DD_ENV"
DD_VERSION = "DD_VERSION"
DD_TAGS = "DD_TAGS"


@unique
class DatadogSpanTypes(str, Enum):
    CACHE = "cache"
    CASSANDRA = "cassandra"
    ELASTICSEARCH = "elasticsearch"
    GRPC = "grpc"
    HTTP = "http"
    MONGODB = "mongodb"
    REDIS = "redis"
    SQL = "sql"
    TEMPLATE = "template"
    WEB = "web"
    WORKER = "worker"


# Maps the instrumentation scope name of a span to a Datadog span type.
# Outbound HTTP clients are "http", inbound servers are "web".
INSTRUMENTATION_SPAN_TYPES = MappingProxyType(
    {
        "opentelemetry.instrumentation.aiohttp_client": DatadogSpanTypes.HTTP,
        "opentelemetry.instrumentation.aiohttp_server": DatadogSpanTypes.WEB,
        "opentelemetry.instrumentation.aiopg": DatadogSpanTypes.SQL,
        "opentelemetry.instrumentation.asgi": DatadogSpanTypes.WEB,
        "opentelemetry.instrumentation.asyncpg": DatadogSpanTypes.SQL,
        "opentelemetry.instrumentation.cassandra": DatadogSpanTypes.CASSANDRA,
        "opentelemetry.instrumentation.celery": DatadogSpanTypes.WORKER,
        "opentelemetry.instrumentation.dbapi": DatadogSpanTypes.SQL,
        "opentelemetry.instrumentation.django": DatadogSpanTypes.WEB,
        "opentelemetry.instrumentation.elasticsearch": DatadogSpanTypes.ELASTICSEARCH,
        "opentelemetry.instrumentation.falcon": DatadogSpanTypes.WEB,
        "opentelemetry.instrumentation.fastapi": DatadogSpanTypes.WEB,
        "opentelemetry.instrumentation.flask": DatadogSpanTypes.WEB,
        "opentelemetry.instrumentation.grpc": DatadogSpanTypes.GRPC,
        "opentelemetry.instrumentation.httpx": DatadogSpanTypes.HTTP,
        "opentelemetry.instrumentation.jinja2": DatadogSpanTypes.TEMPLATE,
        "opentelemetry.instrumentation.mysql": DatadogSpanTypes.SQL,
        "opentelemetry.instrumentation.psycopg": DatadogSpanTypes.SQL,
        "opentelemetry.instrumentation.psycopg2": DatadogSpanTypes.SQL,
        "opentelemetry.instrumentation.pymemcache": DatadogSpanTypes.CACHE,
        "opentelemetry.instrumentation.pymongo": DatadogSpanTypes.MONGODB,
        "opentelemetry.instrumentation.pymysql": DatadogSpanTypes.SQL,
        "opentelemetry.instrumentation.pyramid": DatadogSpanTypes.WEB,
        "opentelemetry.instrumentation.redis": DatadogSpanTypes.REDIS,
        "opentelemetry.instrumentation.remoulade": DatadogSpanTypes.WORKER,
        "opentelemetry.instrumentation.requests": DatadogSpanTypes.HTTP,
        "opentelemetry.instrumentation.sqlalchemy": DatadogSpanTypes.SQL,
        "opentelemetry.instrumentation.sqlite3": DatadogSpanTypes.SQL,
        "opentelemetry.instrumentation.starlette": DatadogSpanTypes.WEB,
        "opentelemetry.instrumentation.tornado": DatadogSpanTypes.WEB,
        "opentelemetry.instrumentation.urllib": DatadogSpanTypes.HTTP,
        "opentelemetry.instrumentation.urllib3": DatadogSpanTypes.HTTP,
        "opentelemetry.instrumentation.wsgi": DatadogSpanTypes.WEB,
    }
)
