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
from os import environ
from typing import Dict, Optional, Sequence

import requests
from google.protobuf import json_format

from opentelemetry.exporter.ocagent.environment_variables import (
    OTEL_EXPORTER_OCAGENT_ENDPOINT,
    OTEL_EXPORTER_OCAGENT_TIMEOUT,
)
from opentelemetry.exporter.ocagent.metrics import translate_views
from opentelemetry.exporter.ocagent.node import get_node, get_resource_from_env
from opentelemetry.exporter.ocagent.request import with_node, with_resource
from opentelemetry.exporter.ocagent.span_data import (
    SpanData,
    from_readable_span,
)
from opentelemetry.exporter.ocagent.trace import translate_spans
from opentelemetry.exporter.ocagent.view_data import ViewData
from opentelemetry.sdk.metrics.export import MetricExportResult
from opentelemetry.sdk.trace import ReadableSpan, SpanLimits
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "http://localhost:55678"
DEFAULT_TIMEOUT = 10

_HEADERS = {"Content-Type": "application/json"}


class _OCAgentHTTPClient:
    """Posts JSON encoded export requests to an OpenCensus agent.

    Args:
        service_name: name of the service, sent in the node descriptor.
        endpoint: agent base url, defaults to
            ``OTEL_EXPORTER_OCAGENT_ENDPOINT`` or ``http://localhost:55678``.
        timeout: request timeout in seconds, defaults to
            ``OTEL_EXPORTER_OCAGENT_TIMEOUT`` or 10.
        headers: additional request headers.
        host_name: host name for the node descriptor.
    """

    def __init__(
        self,
        service_name: str,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        host_name: Optional[str] = None,
    ):
        if endpoint is None:
            endpoint = environ.get(
                OTEL_EXPORTER_OCAGENT_ENDPOINT, DEFAULT_ENDPOINT
            )
        if timeout is None:
            timeout = float(
                environ.get(OTEL_EXPORTER_OCAGENT_TIMEOUT, DEFAULT_TIMEOUT)
            )
        self.endpoint = endpoint
        self.timeout = timeout
        self.headers = headers
        self.node = get_node(service_name, host_name)
        self.resource = get_resource_from_env()
        self._shutdown = False

    @property
    def endpoint(self):
        return self._endpoint

    @endpoint.setter
    def endpoint(self, endpoint: str):
        if not endpoint:
            raise ValueError("endpoint required")
        self._endpoint = endpoint.rstrip("/")

    @property
    def timeout(self):
        return self._timeout

    @timeout.setter
    def timeout(self, timeout: float):
        if timeout <= 0:
            raise ValueError("timeout must be greater than 0")
        self._timeout = timeout

    def _build_headers(self) -> Dict[str, str]:
        headers = dict(_HEADERS)
        if self.headers:
            headers.update(self.headers)
        return headers

    def _post(self, path: str, request) -> bool:
        with_node(request, self.node)
        with_resource(request, self.resource)
        try:
            response = requests.post(
                self.endpoint + path,
                data=json_format.MessageToJson(request),
                headers=self._build_headers(),
                timeout=self.timeout,
            )
            if not response.ok:
                response.raise_for_status()
        except requests.exceptions.RequestException as err:
            logger.error("Export POST request failed with reason: %s", err)
            return False
        return True

    def shutdown(self) -> None:
        if self._shutdown:
            logger.warning("Exporter already shutdown, ignoring call")
            return
        self._shutdown = True


class OCAgentSpanExporter(_OCAgentHTTPClient, SpanExporter):
    """Span exporter posting to the OpenCensus agent's ``/v1/trace``.

    Accepts spans finished by the OpenTelemetry SDK as well as
    :class:`~opentelemetry.exporter.ocagent.span_data.SpanData` records.
    ``span_limits`` bounds attributes, events and links per span; without it
    nothing is truncated.
    """

    def __init__(
        self,
        service_name: str,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        host_name: Optional[str] = None,
        span_limits: Optional[SpanLimits] = None,
    ):
        super().__init__(service_name, endpoint, timeout, headers, host_name)
        self.span_limits = span_limits

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        if self._shutdown:
            logger.warning("Exporter already shutdown, ignoring batch")
            return SpanExportResult.FAILURE
        if not spans:
            return SpanExportResult.SUCCESS

        records = [
            span if isinstance(span, SpanData) else from_readable_span(span)
            for span in spans
        ]
        request = translate_spans(records, self.span_limits)
        if self._post("/v1/trace", request):
            return SpanExportResult.SUCCESS
        return SpanExportResult.FAILURE

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return True


class OCAgentMetricsExporter(_OCAgentHTTPClient):
    """Posts aggregated views to the OpenCensus agent's ``/v1/metrics``."""

    def export(self, views: Sequence[ViewData]) -> MetricExportResult:
        if self._shutdown:
            logger.warning("Exporter already shutdown, ignoring batch")
            return MetricExportResult.FAILURE
        if not views:
            return MetricExportResult.SUCCESS

        request = translate_views(views)
        if self._post("/v1/metrics", request):
            return MetricExportResult.SUCCESS
        return MetricExportResult.FAILURE
