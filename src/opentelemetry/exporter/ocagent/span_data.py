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

"""Span records handed to the trace translator.

Identifiers and tracestate reuse the OpenTelemetry API types: a span's
``context`` is a :class:`opentelemetry.trace.SpanContext` whose integer
``trace_id`` and ``span_id`` are encoded big-endian into the 16 and 8 byte wire
identifiers. Times are nanoseconds since the epoch.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence

from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.trace import (
    INVALID_SPAN_ID,
    SpanContext,
    SpanKind,
    StatusCode,
)


class MessageEventType(Enum):
    UNSPECIFIED = 0
    SENT = 1
    RECEIVED = 2


class LinkType(Enum):
    UNSPECIFIED = 0
    # The linked span is a child of the current span.
    CHILD = 1
    # The linked span is a parent of the current span.
    PARENT = 2


@dataclass(frozen=True)
class Status:
    """Canonical status code plus an optional developer-facing message."""

    code: int = 0
    message: str = ""


@dataclass(frozen=True)
class Annotation:
    time: int
    message: str
    attributes: Mapping[str, Any] = field(default_factory=dict)
    dropped_attributes_count: int = 0


@dataclass(frozen=True)
class MessageEvent:
    time: int
    type: MessageEventType = MessageEventType.UNSPECIFIED
    id: int = 0
    uncompressed_size: int = 0
    compressed_size: int = 0


@dataclass(frozen=True)
class Link:
    trace_id: int
    span_id: int
    type: LinkType = LinkType.UNSPECIFIED
    attributes: Mapping[str, Any] = field(default_factory=dict)
    dropped_attributes_count: int = 0


@dataclass(frozen=True)
class SpanData:
    """A finished span as recorded by the instrumentation library."""

    context: SpanContext
    name: str
    start_time: int
    end_time: int
    parent_span_id: int = INVALID_SPAN_ID
    kind: SpanKind = SpanKind.INTERNAL
    status: Status = field(default_factory=Status)
    has_remote_parent: bool = False
    attributes: Mapping[str, Any] = field(default_factory=dict)
    annotations: Sequence[Annotation] = ()
    message_events: Sequence[MessageEvent] = ()
    links: Sequence[Link] = ()
    child_span_count: int = 0
    # entries discarded before the record was built, e.g. by the SDK
    dropped_attributes_count: int = 0
    dropped_annotations_count: int = 0
    dropped_message_events_count: int = 0
    dropped_links_count: int = 0


# canonical OpenCensus code for an unspecified error
_STATUS_CODE_UNKNOWN = 2


def _dropped(attributes) -> int:
    # BoundedAttributes counts what its limit discarded
    return getattr(attributes, "dropped", 0)


def from_readable_span(span: ReadableSpan) -> SpanData:
    """Builds a :class:`SpanData` from a span finished by the SDK.

    SDK events become annotations named after the event; links carry no
    parent/child relationship and are left unspecified. Counts of attributes,
    events and links the SDK already dropped are carried over.
    """
    status = Status()
    if span.status.status_code is StatusCode.ERROR:
        status = Status(
            code=_STATUS_CODE_UNKNOWN, message=span.status.description or ""
        )

    parent_span_id = INVALID_SPAN_ID
    has_remote_parent = False
    if span.parent is not None:
        parent_span_id = span.parent.span_id
        has_remote_parent = span.parent.is_remote

    return SpanData(
        context=span.context,
        name=span.name,
        start_time=span.start_time,
        end_time=span.end_time,
        parent_span_id=parent_span_id,
        kind=span.kind,
        status=status,
        has_remote_parent=has_remote_parent,
        attributes=dict(span.attributes or {}),
        annotations=tuple(
            Annotation(
                time=event.timestamp,
                message=event.name,
                attributes=dict(event.attributes or {}),
                dropped_attributes_count=_dropped(event.attributes),
            )
            for event in span.events
        ),
        links=tuple(
            Link(
                trace_id=link.context.trace_id,
                span_id=link.context.span_id,
                attributes=dict(link.attributes or {}),
                dropped_attributes_count=_dropped(link.attributes),
            )
            for link in span.links
        ),
        dropped_attributes_count=span.dropped_attributes,
        dropped_annotations_count=span.dropped_events,
        dropped_links_count=span.dropped_links,
    )
