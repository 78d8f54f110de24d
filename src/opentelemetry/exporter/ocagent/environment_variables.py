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

OTEL_EXPORTER_OCAGENT_ENDPOINT = "OTEL_EXPORTER_OCAGENT_ENDPOINT"
"""
.. envvar:: OTEL_EXPORTER_OCAGENT_ENDPOINT

Base URL of the OpenCensus agent HTTP receiver (default:
``http://localhost:55678``). Spans are posted to ``<endpoint>/v1/trace`` and
metrics to ``<endpoint>/v1/metrics``.
"""

OTEL_EXPORTER_OCAGENT_TIMEOUT = "OTEL_EXPORTER_OCAGENT_TIMEOUT"
"""
.. envvar:: OTEL_EXPORTER_OCAGENT_TIMEOUT

Request timeout in seconds (default: 10).
"""

OC_RESOURCE_TYPE = "OC_RESOURCE_TYPE"
"""
.. envvar:: OC_RESOURCE_TYPE

Type of the resource attached to export requests, e.g. ``k8s.io/container``.
Resource labels are read from ``OTEL_RESOURCE_ATTRIBUTES``.
"""
