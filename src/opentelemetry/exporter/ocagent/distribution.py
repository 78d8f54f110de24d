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

import logging
from typing import Sequence

from opencensus.proto.metrics.v1 import metrics_pb2

from opentelemetry.exporter.ocagent.view_data import DistributionData

logger = logging.getLogger(__name__)


def encode_distribution(
    data: DistributionData, bounds: Sequence[float]
) -> metrics_pb2.DistributionValue:
    """Converts a distribution row into a ``DistributionValue``.

    The row keeps a running mean; the wire value wants the sum of all
    samples, which is ``mean * count``. Bucket bounds belong to the
    aggregation rather than the row and are passed in separately.

    Args:
        data: the aggregated distribution of one row.
        bounds: the strictly increasing bucket boundaries of the view's
            aggregation.

    Returns:
        DistributionValue with explicit bucket options and one bucket per
        entry of ``data.count_per_bucket``. Exemplars are never set.
    """
    if len(data.count_per_bucket) != len(bounds) + 1:
        logger.debug(
            "Distribution has %d bucket counts for %d bounds",
            len(data.count_per_bucket),
            len(bounds),
        )

    distribution = metrics_pb2.DistributionValue(
        count=data.count,
        sum=float(data.mean) * data.count,
        sum_of_squared_deviation=data.sum_of_squared_dev,
    )
    distribution.bucket_options.explicit.bounds.extend(bounds)
    for count in data.count_per_bucket:
        distribution.buckets.add(count=count)
    return distribution
