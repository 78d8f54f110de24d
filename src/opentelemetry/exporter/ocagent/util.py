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

from typing import Iterable, List, Optional, Tuple, TypeVar

from google.protobuf.timestamp_pb2 import Timestamp

T = TypeVar("T")


def proto_timestamp_from_time_ns(time_ns: Optional[int]) -> Timestamp:
    """Converts nanoseconds since the epoch to a protobuf Timestamp.

    Args:
        time_ns: nanoseconds since the epoch, or None for an empty timestamp.

    Returns:
        Timestamp message.
    """
    ts = Timestamp()
    if time_ns is not None:
        ts.FromNanoseconds(time_ns)
    return ts


def trace_id_to_bytes(trace_id: int) -> bytes:
    return trace_id.to_bytes(16, "big")


def span_id_to_bytes(span_id: int) -> bytes:
    return span_id.to_bytes(8, "big")


def truncate(items: Iterable[T], limit: Optional[int]) -> Tuple[List[T], int]:
    """Keeps the first ``limit`` items, in iteration order.

    Returns the kept items and the number of items dropped. A ``limit`` of
    None keeps everything.
    """
    items = list(items)
    if limit is None or len(items) <= limit:
        return items, 0
    return items[:limit], len(items) - limit
