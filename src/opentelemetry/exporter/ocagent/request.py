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

"""Attaches node and resource descriptors to translated export requests.

Both setters accept either an ``ExportTraceServiceRequest`` or an
``ExportMetricsServiceRequest``. Calling them again overwrites the previous
value.
"""

from typing import Optional, TypeVar

from opencensus.proto.agent.common.v1 import common_pb2
from opencensus.proto.resource.v1 import resource_pb2

from opentelemetry.exporter.ocagent.util import proto_timestamp_from_time_ns

RequestT = TypeVar("RequestT")


def with_resource(
    request: RequestT, resource: Optional[resource_pb2.Resource]
) -> RequestT:
    if request is None:
        raise ValueError("request required")
    if resource is not None:
        request.resource.CopyFrom(resource)
    return request


def with_node(
    request: RequestT,
    node: Optional[common_pb2.Node],
    start_time: Optional[int] = None,
) -> RequestT:
    """Sets ``request.node``.

    Args:
        request: a trace or metrics export request.
        node: the node descriptor to copy into the request.
        start_time: if given, nanoseconds since the epoch that replace the
            node's process start timestamp in the request copy.
    """
    if request is None:
        raise ValueError("request required")
    if node is None:
        return request
    request.node.CopyFrom(node)
    if start_time is not None:
        request.node.identifier.start_timestamp.CopyFrom(
            proto_timestamp_from_time_ns(start_time)
        )
    return request
