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

from opencensus.proto.metrics.v1 import metrics_pb2

from opentelemetry.exporter.ocagent import metrics
from opentelemetry.exporter.ocagent.view_data import (
    Aggregation,
    CountAggregation,
    CountData,
    DistributionAggregation,
    DistributionData,
    LastValueAggregation,
    LastValueData,
    Row,
    SumAggregation,
    SumData,
    View,
    ViewData,
)

START_TIME = 1550000000000000000
END_TIME = START_TIME + 17 * 10**9


def _view_data(aggregation, rows, tag_keys=("field", "name")):
    return ViewData(
        view=View(
            name="ocagent.io/latency",
            description="latency of runners for a 100m dash",
            unit="ms",
            aggregation=aggregation,
            tag_keys=tag_keys,
        ),
        start_time=START_TIME,
        end_time=END_TIME,
        rows=rows,
    )


class TestTranslateViewData(unittest.TestCase):
    def test_count(self):
        view_data = _view_data(
            CountAggregation(),
            [Row(tags=[("field", "main-field")], data=CountData(5))],
            tag_keys=("field",),
        )

        metric = metrics.translate_view_data(view_data)

        descriptor = metric.metric_descriptor
        self.assertEqual(descriptor.name, "ocagent.io/latency")
        self.assertEqual(
            descriptor.description, "latency of runners for a 100m dash"
        )
        self.assertEqual(descriptor.unit, "ms")
        self.assertEqual(
            descriptor.type, metrics_pb2.MetricDescriptor.CUMULATIVE_INT64
        )
        (time_series,) = metric.timeseries
        (point,) = time_series.points
        self.assertEqual(point.WhichOneof("value"), "int64_value")
        self.assertEqual(point.int64_value, 5)
        self.assertEqual(point.timestamp.ToNanoseconds(), END_TIME)
        self.assertEqual(
            time_series.start_timestamp.ToNanoseconds(), START_TIME
        )

    def test_sum(self):
        metric = metrics.translate_view_data(
            _view_data(SumAggregation(), [Row(tags=[], data=SumData(2.5))])
        )
        self.assertEqual(
            metric.metric_descriptor.type,
            metrics_pb2.MetricDescriptor.CUMULATIVE_DOUBLE,
        )
        (point,) = metric.timeseries[0].points
        self.assertEqual(point.WhichOneof("value"), "double_value")
        self.assertEqual(point.double_value, 2.5)

    def test_last_value_is_gauge(self):
        metric = metrics.translate_view_data(
            _view_data(
                LastValueAggregation(), [Row(tags=[], data=LastValueData(7.0))]
            )
        )
        self.assertEqual(
            metric.metric_descriptor.type,
            metrics_pb2.MetricDescriptor.GAUGE_DOUBLE,
        )
        self.assertEqual(metric.timeseries[0].points[0].double_value, 7.0)

    def test_distribution(self):
        view_data = _view_data(
            DistributionAggregation([0, 10, 20, 30, 40]),
            [
                Row(
                    tags=[("field", "main-field"), ("name", "sprinter-#10")],
                    data=DistributionData(
                        count=1,
                        min=11.9,
                        max=11.9,
                        mean=11.9,
                        count_per_bucket=[0, 1, 0, 0, 0, 0],
                        sum_of_squared_dev=0,
                    ),
                )
            ],
        )

        metric = metrics.translate_view_data(view_data)

        self.assertEqual(
            metric.metric_descriptor.type,
            metrics_pb2.MetricDescriptor.CUMULATIVE_DISTRIBUTION,
        )
        (point,) = metric.timeseries[0].points
        self.assertEqual(point.WhichOneof("value"), "distribution_value")
        distribution = point.distribution_value
        self.assertEqual(distribution.count, 1)
        self.assertAlmostEqual(distribution.sum, 11.9)
        self.assertEqual(
            list(distribution.bucket_options.explicit.bounds),
            [0, 10, 20, 30, 40],
        )
        self.assertEqual(
            [bucket.count for bucket in distribution.buckets],
            [0, 1, 0, 0, 0, 0],
        )

    def test_label_keys(self):
        metric = metrics.translate_view_data(
            _view_data(CountAggregation(), [])
        )
        self.assertEqual(
            [
                (key.key, key.description)
                for key in metric.metric_descriptor.label_keys
            ],
            [("field", ""), ("name", "")],
        )
        self.assertEqual(len(metric.timeseries), 0)

    def test_label_values_follow_descriptor_order(self):
        metric = metrics.translate_view_data(
            _view_data(
                CountAggregation(),
                [Row(tags=[("field", "main-field")], data=CountData(1))],
            )
        )
        self.assertEqual(
            [
                (value.value, value.has_value)
                for value in metric.timeseries[0].label_values
            ],
            [("main-field", True), ("", False)],
        )

    def test_label_values_reordered_row(self):
        metric = metrics.translate_view_data(
            _view_data(
                CountAggregation(),
                [
                    Row(
                        tags=[("name", "sprinter-#yp"), ("field", "")],
                        data=CountData(1),
                    )
                ],
            )
        )
        self.assertEqual(
            [
                (value.value, value.has_value)
                for value in metric.timeseries[0].label_values
            ],
            [("", True), ("sprinter-#yp", True)],
        )

    def test_rows_keep_order(self):
        rows = [
            Row(tags=[("field", str(index))], data=CountData(index))
            for index in range(3)
        ]
        metric = metrics.translate_view_data(
            _view_data(CountAggregation(), rows)
        )
        self.assertEqual(
            [series.points[0].int64_value for series in metric.timeseries],
            [0, 1, 2],
        )
        for series in metric.timeseries:
            self.assertEqual(
                len(series.label_values),
                len(metric.metric_descriptor.label_keys),
            )

    def test_mismatched_row_is_dropped(self):
        with self.assertLogs(level="WARNING"):
            metric = metrics.translate_view_data(
                _view_data(
                    CountAggregation(),
                    [
                        Row(tags=[], data=SumData(1.0)),
                        Row(tags=[], data=CountData(2)),
                    ],
                )
            )
        (series,) = metric.timeseries
        self.assertEqual(series.points[0].int64_value, 2)

    def test_unsupported_aggregation(self):
        with self.assertLogs(level="WARNING"):
            metric = metrics.translate_view_data(
                _view_data(Aggregation(), [Row(tags=[], data=CountData(1))])
            )
        self.assertEqual(
            metric.metric_descriptor.type,
            metrics_pb2.MetricDescriptor.UNSPECIFIED,
        )
        self.assertEqual(len(metric.timeseries), 0)

    def test_translate_views_request(self):
        views = [
            _view_data(CountAggregation(), [Row(tags=[], data=CountData(1))]),
            _view_data(SumAggregation(), [Row(tags=[], data=SumData(1.0))]),
        ]
        request = metrics.translate_views(views)
        self.assertEqual(
            [m.metric_descriptor.type for m in request.metrics],
            [
                metrics_pb2.MetricDescriptor.CUMULATIVE_INT64,
                metrics_pb2.MetricDescriptor.CUMULATIVE_DOUBLE,
            ],
        )
        self.assertFalse(request.HasField("node"))


class TestDistributionAggregation(unittest.TestCase):
    def test_boundaries_must_increase(self):
        with self.assertRaises(ValueError):
            DistributionAggregation([0, 10, 10])
        with self.assertRaises(ValueError):
            DistributionAggregation([5, 1])

    def test_boundaries(self):
        self.assertEqual(
            DistributionAggregation([0, 10, 20]).boundaries, (0.0, 10.0, 20.0)
        )
