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

"""Aggregated view records handed to the metrics translator.

A :class:`View` names a measurement, its aggregation and the ordered tag keys
rows are grouped by. :class:`ViewData` carries the rows collected for a view
over the window ``[start_time, end_time)``, in nanoseconds since the epoch.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence, Tuple, Union


class AggregationType(Enum):
    NONE = 0
    COUNT = 1
    SUM = 2
    DISTRIBUTION = 3
    LAST_VALUE = 4


class Aggregation:
    aggregation_type = AggregationType.NONE

    def __repr__(self):
        return f"{type(self).__name__}()"


class CountAggregation(Aggregation):
    aggregation_type = AggregationType.COUNT


class SumAggregation(Aggregation):
    aggregation_type = AggregationType.SUM


class LastValueAggregation(Aggregation):
    aggregation_type = AggregationType.LAST_VALUE


class DistributionAggregation(Aggregation):
    """Histogram aggregation over explicit bucket boundaries.

    Boundaries must be strictly increasing. Rows aggregated with it carry one
    more bucket count than there are boundaries.
    """

    aggregation_type = AggregationType.DISTRIBUTION

    def __init__(self, boundaries: Sequence[float] = ()):
        boundaries = tuple(float(bound) for bound in boundaries)
        for lower, upper in zip(boundaries, boundaries[1:]):
            if lower >= upper:
                raise ValueError(
                    "bucket boundaries must be strictly increasing"
                )
        self._boundaries = boundaries

    @property
    def boundaries(self) -> Tuple[float, ...]:
        return self._boundaries

    def __repr__(self):
        return f"DistributionAggregation({list(self._boundaries)})"


@dataclass(frozen=True)
class View:
    name: str
    description: str
    unit: str
    aggregation: Aggregation
    tag_keys: Sequence[str] = ()


@dataclass(frozen=True)
class CountData:
    value: int = 0


@dataclass(frozen=True)
class SumData:
    value: float = 0.0


@dataclass(frozen=True)
class LastValueData:
    value: float = 0.0


@dataclass(frozen=True)
class DistributionData:
    count: int = 0
    min: float = 0.0
    max: float = 0.0
    mean: float = 0.0
    count_per_bucket: Sequence[int] = ()
    sum_of_squared_dev: float = 0.0


AggregationData = Union[CountData, SumData, LastValueData, DistributionData]


@dataclass(frozen=True)
class Row:
    """One tag-value combination; ``tags`` are ``(key, value)`` pairs."""

    tags: Sequence[Tuple[str, str]]
    data: AggregationData


@dataclass(frozen=True)
class ViewData:
    view: View
    start_time: int
    end_time: int
    rows: Sequence[Row] = field(default_factory=tuple)
