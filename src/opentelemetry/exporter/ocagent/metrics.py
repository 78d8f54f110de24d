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

"""Translation of :class:`~opentelemetry.exporter.ocagent.view_data.ViewData`
into OpenCensus ``metrics_pb2.Metric`` messages.

Every view becomes one metric. Every row of a view becomes one time series
carrying a single point stamped with the end of the view's window.
"""

import logging
from typing import List, Optional, Sequence

from opencensus.proto.agent.metrics.v1 import metrics_service_pb2
from opencensus.proto.metrics.v1 import metrics_pb2

from opentelemetry.exporter.ocagent.distribution import encode_distribution
from opentelemetry.exporter.ocagent.util import proto_timestamp_from_time_ns
from opentelemetry.exporter.ocagent.view_data import (
    AggregationType,
    CountData,
    DistributionData,
    LastValueData,
    Row,
    SumData,
    View,
    ViewData,
)

logger = logging.getLogger(__name__)

_Descriptor = metrics_pb2.MetricDescriptor

# last value is the only gauge, everything else accumulates
_DESCRIPTOR_TYPES = {
    AggregationType.COUNT: _Descriptor.CUMULATIVE_INT64,
    AggregationType.SUM: _Descriptor.CUMULATIVE_DOUBLE,
    AggregationType.LAST_VALUE: _Descriptor.GAUGE_DOUBLE,
    AggregationType.DISTRIBUTION: _Descriptor.CUMULATIVE_DISTRIBUTION,
}

_DATA_TYPES = {
    AggregationType.COUNT: CountData,
    AggregationType.SUM: SumData,
    AggregationType.LAST_VALUE: LastValueData,
    AggregationType.DISTRIBUTION: DistributionData,
}


def get_descriptor_type(view: View) -> int:
    return _DESCRIPTOR_TYPES.get(
        view.aggregation.aggregation_type,
        _Descriptor.UNSPECIFIED,
    )


def translate_view_data(view_data: ViewData) -> metrics_pb2.Metric:
    view = view_data.view
    aggregation_type = view.aggregation.aggregation_type
    descriptor_type = get_descriptor_type(view)
    if descriptor_type == _Descriptor.UNSPECIFIED:
        logger.warning(
            "Unsupported aggregation %s for view %s",
            view.aggregation,
            view.name,
        )

    metric = metrics_pb2.Metric(
        metric_descriptor=metrics_pb2.MetricDescriptor(
            name=view.name,
            description=view.description,
            unit=view.unit,
            type=descriptor_type,
            label_keys=[
                metrics_pb2.LabelKey(key=key, description="")
                for key in view.tag_keys
            ],
        )
    )

    expected_data_type = _DATA_TYPES.get(aggregation_type)
    for row in view_data.rows:
        if expected_data_type is None or not isinstance(
            row.data, expected_data_type
        ):
            logger.warning(
                "Dropping row of view %s: %s data does not match %s",
                view.name,
                type(row.data).__name__,
                view.aggregation,
            )
            continue
        metric.timeseries.append(_translate_row(view_data, row))
    return metric


def translate_to_collector(
    views: Sequence[ViewData],
) -> List[metrics_pb2.Metric]:
    return [translate_view_data(view_data) for view_data in views]


def translate_views(
    views: Sequence[ViewData],
) -> metrics_service_pb2.ExportMetricsServiceRequest:
    """Wraps the translated views in an export request.

    Node and resource are left unset, see
    :mod:`opentelemetry.exporter.ocagent.request`.
    """
    return metrics_service_pb2.ExportMetricsServiceRequest(
        metrics=translate_to_collector(views)
    )


def get_label_values(
    tag_keys: Sequence[str], tags: Sequence
) -> List[metrics_pb2.LabelValue]:
    """Matches a row's tags against the descriptor's key order.

    Keys missing from the row produce a label value with ``has_value``
    unset, which the wire format distinguishes from an empty string.
    """
    row_tags = dict(tags)
    label_values = []
    for key in tag_keys:
        value: Optional[str] = row_tags.get(key)
        if value is None:
            label_values.append(
                metrics_pb2.LabelValue(value="", has_value=False)
            )
        else:
            label_values.append(
                metrics_pb2.LabelValue(value=value, has_value=True)
            )
    return label_values


def _translate_row(view_data: ViewData, row: Row) -> metrics_pb2.TimeSeries:
    point = metrics_pb2.Point(
        timestamp=proto_timestamp_from_time_ns(view_data.end_time)
    )
    data = row.data
    if isinstance(data, CountData):
        point.int64_value = data.value
    elif isinstance(data, (SumData, LastValueData)):
        point.double_value = data.value
    else:
        point.distribution_value.CopyFrom(
            encode_distribution(data, view_data.view.aggregation.boundaries)
        )

    return metrics_pb2.TimeSeries(
        start_timestamp=proto_timestamp_from_time_ns(view_data.start_time),
        label_values=get_label_values(view_data.view.tag_keys, row.tags),
        points=[point],
    )
