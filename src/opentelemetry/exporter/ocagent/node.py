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

"""Discovery of the node and resource descriptors sent with every export.

This is the only place that reads process or environment state; the
translators receive the resulting messages as plain values.
"""

import os
import socket
import time
from logging import getLogger
from os import environ
from typing import Optional

from opencensus.proto.agent.common.v1 import common_pb2
from opencensus.proto.resource.v1 import resource_pb2

from opentelemetry.exporter.ocagent.environment_variables import (
    OC_RESOURCE_TYPE,
)
from opentelemetry.exporter.ocagent.util import proto_timestamp_from_time_ns
from opentelemetry.exporter.ocagent.version import (
    __version__ as exporter_version,
)
from opentelemetry.sdk.resources import OTELResourceDetector, Resource
from opentelemetry.version import __version__ as api_version

logger = getLogger(__name__)


def get_node(
    service_name: str,
    host_name: Optional[str] = None,
    start_time: Optional[int] = None,
) -> common_pb2.Node:
    """Generates the node descriptor of the current process.

    Args:
        service_name: name of the service emitting telemetry.
        host_name: defaults to ``socket.gethostname()``.
        start_time: process start in nanoseconds since the epoch, defaults to
            now.

    Returns:
        The node descriptor.
    """
    if host_name is None:
        host_name = socket.gethostname()
    if start_time is None:
        start_time = time.time_ns()
    return common_pb2.Node(
        identifier=common_pb2.ProcessIdentifier(
            host_name=host_name,
            pid=os.getpid(),
            start_timestamp=proto_timestamp_from_time_ns(start_time),
        ),
        library_info=common_pb2.LibraryInfo(
            language=common_pb2.LibraryInfo.Language.Value("PYTHON"),
            exporter_version=exporter_version,
            core_library_version=api_version,
        ),
        service_info=common_pb2.ServiceInfo(name=service_name),
    )


def resource_to_proto(
    resource: Resource, resource_type: str = ""
) -> resource_pb2.Resource:
    pb_resource = resource_pb2.Resource(type=resource_type)
    for key, value in resource.attributes.items():
        pb_resource.labels[key] = str(value)
    return pb_resource


def get_resource_from_env() -> Optional[resource_pb2.Resource]:
    """Builds the resource descriptor from ``OTEL_RESOURCE_ATTRIBUTES`` and
    ``OC_RESOURCE_TYPE``, or returns None when neither is set."""
    resource_type = environ.get(OC_RESOURCE_TYPE, "").strip()
    resource = OTELResourceDetector().detect()
    if not resource_type and not resource.attributes:
        return None
    logger.debug("Resource of type %r detected from environment", resource_type)
    return resource_to_proto(resource, resource_type)
