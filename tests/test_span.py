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

import unittest

from opentelemetry.exporter.datadog import DatadogSpan


class TestDatadogSpan(unittest.TestCase):
    def setUp(self):
        self.span = DatadogSpan(
            trace_id=1,
            span_id=2,
            parent_id=0,
            name="flask.request",
            resource="GET /",
            service="web-app",
            span_type="web",
            start=100,
            end=250,
        )

    def test_set_tag_converts_to_string(self):
        self.span.set_tag("http.status_code", 200)
        self.span.set_tag("cached", True)

        self.assertEqual(self.span.tags["http.status_code"], "200")
        self.assertEqual(self.span.tags["cached"], "True")

    def test_set_tag_ignores_none(self):
        self.span.set_tag("version", None)
        self.assertNotIn("version", self.span.tags)

    def test_set_tag_joins_sequences(self):
        self.span.set_tag("hosts", ("a", "b"))
        self.span.set_tag("ports", [80, 443])
        self.assertEqual(self.span.tags["hosts"], "a,b")
        self.assertEqual(self.span.tags["ports"], "80,443")

    def test_is_root(self):
        self.assertTrue(self.span.is_root)
        self.span.parent_id = 7
        self.assertFalse(self.span.is_root)

    def test_to_dict(self):
        self.span.set_tag("env", "prod")
        self.span.set_metric("_sample_rate", 1)

        self.assertEqual(
            self.span.to_dict(),
            {
                "trace_id": 1,
                "span_id": 2,
                "parent_id": 0,
                "name": "flask.request",
                "resource": "GET /",
                "service": "web-app",
                "type": "web",
                "start": 100,
                "duration": 150,
                "error": 0,
                "meta": {"env": "prod"},
                "metrics": {"_sample_rate": 1},
            },
        )

    def test_to_dict_without_optional_fields(self):
        span = DatadogSpan(
            trace_id=1,
            span_id=2,
            parent_id=0,
            name="op",
            resource="op",
            service="svc",
        )
        rendered = span.to_dict()

        self.assertNotIn("type", rendered)
        self.assertNotIn("start", rendered)
        self.assertNotIn("duration", rendered)
        self.assertIsNone(span.duration)
