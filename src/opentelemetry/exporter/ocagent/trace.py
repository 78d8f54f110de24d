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

"""Translation of :class:`~opentelemetry.exporter.ocagent.span_data.SpanData`
records into OpenCensus ``trace_pb2.Span`` messages."""

from typing import Optional, Sequence

from google.protobuf.wrappers_pb2 import BoolValue, UInt32Value
from opencensus.proto.agent.trace.v1 import trace_service_pb2
from opencensus.proto.trace.v1 import trace_pb2

from opentelemetry.exporter.ocagent.attributes import (
    get_truncatable_string,
    translate_attributes,
)
from opentelemetry.exporter.ocagent.span_data import (
    LinkType,
    MessageEventType,
    SpanData,
)
from opentelemetry.exporter.ocagent.util import (
    proto_timestamp_from_time_ns,
    span_id_to_bytes,
    trace_id_to_bytes,
    truncate,
)
from opentelemetry.sdk.trace import SpanLimits
from opentelemetry.trace import INVALID_SPAN_ID, SpanKind

_SPAN_KINDS = {
    SpanKind.SERVER: trace_pb2.Span.SpanKind.SERVER,
    SpanKind.CLIENT: trace_pb2.Span.SpanKind.CLIENT,
}

_MessageEventPb = trace_pb2.Span.TimeEvent.MessageEvent

_MESSAGE_EVENT_TYPES = {
    MessageEventType.UNSPECIFIED: _MessageEventPb.Type.TYPE_UNSPECIFIED,
    MessageEventType.SENT: _MessageEventPb.Type.SENT,
    MessageEventType.RECEIVED: _MessageEventPb.Type.RECEIVED,
}

_LINK_TYPES = {
    LinkType.UNSPECIFIED: trace_pb2.Span.Link.Type.TYPE_UNSPECIFIED,
    LinkType.CHILD: trace_pb2.Span.Link.Type.CHILD_LINKED_SPAN,
    LinkType.PARENT: trace_pb2.Span.Link.Type.PARENT_LINKED_SPAN,
}


def _limit(span_limits: Optional[SpanLimits], name: str) -> Optional[int]:
    if span_limits is None:
        return None
    return getattr(span_limits, name)


def translate_to_collector(
    spans: Sequence[SpanData], span_limits: Optional[SpanLimits] = None
):
    """Builds one wire span per input span, preserving order."""
    collector_spans = []
    for span in spans:
        collector_span = trace_pb2.Span(
            name=get_truncatable_string(span.name),
            kind=_SPAN_KINDS.get(
                span.kind, trace_pb2.Span.SpanKind.SPAN_KIND_UNSPECIFIED
            ),
            trace_id=trace_id_to_bytes(span.context.trace_id),
            span_id=span_id_to_bytes(span.context.span_id),
            start_time=proto_timestamp_from_time_ns(span.start_time),
            end_time=proto_timestamp_from_time_ns(span.end_time),
            status=trace_pb2.Status(
                code=span.status.code, message=span.status.message
            ),
            same_process_as_parent_span=BoolValue(
                value=not span.has_remote_parent
            ),
            child_span_count=UInt32Value(value=span.child_span_count),
        )

        if span.parent_span_id != INVALID_SPAN_ID:
            collector_span.parent_span_id = span_id_to_bytes(
                span.parent_span_id
            )

        if span.context.trace_state:
            for key, value in span.context.trace_state.items():
                collector_span.tracestate.entries.add(key=key, value=value)

        translate_attributes(
            span.attributes,
            _limit(span_limits, "max_span_attributes"),
            collector_span.attributes,
            span.dropped_attributes_count,
        )

        _translate_time_events(collector_span.time_events, span, span_limits)
        _translate_links(collector_span.links, span, span_limits)

        collector_spans.append(collector_span)
    return collector_spans


def translate_spans(
    spans: Sequence[SpanData], span_limits: Optional[SpanLimits] = None
) -> trace_service_pb2.ExportTraceServiceRequest:
    """Wraps the translated spans in an export request.

    Node and resource are left unset, see
    :mod:`opentelemetry.exporter.ocagent.request`.
    """
    return trace_service_pb2.ExportTraceServiceRequest(
        spans=translate_to_collector(spans, span_limits)
    )


def _translate_time_events(
    pb_time_events: trace_pb2.Span.TimeEvents,
    span: SpanData,
    span_limits: Optional[SpanLimits],
) -> None:
    max_events = _limit(span_limits, "max_events")
    max_event_attributes = _limit(span_limits, "max_event_attributes")

    kept_annotations, dropped = truncate(span.annotations, max_events)
    pb_time_events.dropped_annotations_count = (
        dropped + span.dropped_annotations_count
    )
    for annotation in kept_annotations:
        pb_event = pb_time_events.time_event.add(
            time=proto_timestamp_from_time_ns(annotation.time)
        )
        pb_event.annotation.description.CopyFrom(
            get_truncatable_string(annotation.message)
        )
        translate_attributes(
            annotation.attributes,
            max_event_attributes,
            pb_event.annotation.attributes,
            annotation.dropped_attributes_count,
        )

    kept_message_events, dropped = truncate(span.message_events, max_events)
    pb_time_events.dropped_message_events_count = (
        dropped + span.dropped_message_events_count
    )
    for message_event in kept_message_events:
        pb_event = pb_time_events.time_event.add(
            time=proto_timestamp_from_time_ns(message_event.time)
        )
        pb_event.message_event.type = _MESSAGE_EVENT_TYPES.get(
            message_event.type,
            _MessageEventPb.Type.TYPE_UNSPECIFIED,
        )
        pb_event.message_event.id = message_event.id
        pb_event.message_event.uncompressed_size = (
            message_event.uncompressed_size
        )
        pb_event.message_event.compressed_size = message_event.compressed_size


def _translate_links(
    pb_links: trace_pb2.Span.Links,
    span: SpanData,
    span_limits: Optional[SpanLimits],
) -> None:
    kept, dropped = truncate(span.links, _limit(span_limits, "max_links"))
    pb_links.dropped_links_count = dropped + span.dropped_links_count
    max_link_attributes = _limit(span_limits, "max_link_attributes")
    for link in kept:
        pb_link = pb_links.link.add(
            trace_id=trace_id_to_bytes(link.trace_id),
            span_id=span_id_to_bytes(link.span_id),
            type=_LINK_TYPES.get(
                link.type, trace_pb2.Span.Link.Type.TYPE_UNSPECIFIED
            ),
        )
        translate_attributes(
            link.attributes,
            max_link_attributes,
            pb_link.attributes,
            link.dropped_attributes_count,
        )
