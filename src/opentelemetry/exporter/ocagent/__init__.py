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

"""
OpenCensus agent exporter.

Translates span records and aggregated views into the OpenCensus agent wire
schema and posts them, JSON encoded, to the agent's HTTP receiver.

Usage
-----

.. code:: python

    from opentelemetry import trace
    from opentelemetry.exporter.ocagent import OCAgentSpanExporter
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor

    exporter = OCAgentSpanExporter(
        service_name="my-service",
        endpoint="http://localhost:55678",
    )
    provider = TracerProvider()
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

The translation functions can be used on their own to build requests for a
different transport:

.. code:: python

    from opentelemetry.exporter.ocagent import get_node, trace, with_node

    request = with_node(trace.translate_spans(spans), get_node("my-service"))
"""

from opentelemetry.exporter.ocagent.exporter import (
    OCAgentMetricsExporter,
    OCAgentSpanExporter,
)
from opentelemetry.exporter.ocagent.node import (
    get_node,
    get_resource_from_env,
    resource_to_proto,
)
from opentelemetry.exporter.ocagent.request import with_node, with_resource
from opentelemetry.exporter.ocagent.version import __version__

__all__ = [
    "OCAgentMetricsExporter",
    "OCAgentSpanExporter",
    "get_node",
    "get_resource_from_env",
    "resource_to_proto",
    "with_node",
    "with_resource",
    "__version__",
]
