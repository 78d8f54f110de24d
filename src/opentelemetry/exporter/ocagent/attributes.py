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

"""Maps dynamically typed attribute values onto the closed
``AttributeValue`` union of the OpenCensus wire schema.

Only ``bool``, ``str``, 64-bit integers and floats have a wire kind of their
own; unsigned 64-bit integers wrap into the signed range. Every other value
is rendered with ``str()`` and sent as a string, so normalization never
fails.
"""

import numbers
from typing import Any, Mapping, Optional

from opencensus.proto.trace.v1 import trace_pb2

from opentelemetry.exporter.ocagent.util import truncate

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_MAX = 2**64 - 1


def get_truncatable_string(value: str) -> trace_pb2.TruncatableString:
    return trace_pb2.TruncatableString(value=value, truncated_byte_count=0)


def _is_numpy_bool(value: Any) -> bool:
    value_type = type(value)
    return value_type.__module__ == "numpy" and value_type.__name__ in (
        "bool",
        "bool_",
    )


def to_attribute_value(value: Any) -> trace_pb2.AttributeValue:
    """Converts one attribute value into its wire representation.

    Args:
        value: any Python value.

    Returns:
        AttributeValue with exactly one of ``bool_value``, ``string_value``,
        ``int_value`` or ``double_value`` set.
    """
    # bool is a subclass of int and has to be matched first
    if isinstance(value, bool) or _is_numpy_bool(value):
        return trace_pb2.AttributeValue(bool_value=bool(value))
    if isinstance(value, str):
        return trace_pb2.AttributeValue(
            string_value=get_truncatable_string(value)
        )
    if (
        isinstance(value, numbers.Integral)
        and _INT64_MIN <= int(value) <= _UINT64_MAX
    ):
        int_value = int(value)
        # unsigned 64-bit values wrap around like a two's complement cast
        if int_value > _INT64_MAX:
            int_value -= 2**64
        return trace_pb2.AttributeValue(int_value=int_value)
    if isinstance(value, numbers.Real) and not isinstance(
        value, numbers.Integral
    ):
        return trace_pb2.AttributeValue(double_value=float(value))
    return trace_pb2.AttributeValue(
        string_value=get_truncatable_string(str(value))
    )


def translate_attributes(
    attributes: Optional[Mapping[str, Any]],
    max_count: Optional[int] = None,
    pb_attributes: Optional[trace_pb2.Span.Attributes] = None,
    dropped_count: int = 0,
) -> trace_pb2.Span.Attributes:
    """Fills a ``Span.Attributes`` message from an attribute mapping.

    The first ``max_count`` entries, in the mapping's iteration order, are
    kept and the remainder is recorded in ``dropped_attributes_count``,
    on top of ``dropped_count`` entries discarded before translation.
    """
    if pb_attributes is None:
        pb_attributes = trace_pb2.Span.Attributes()
    if not attributes and not dropped_count:
        return pb_attributes

    kept, dropped = truncate((attributes or {}).items(), max_count)
    for key, value in kept:
        pb_attributes.attribute_map[key].CopyFrom(to_attribute_value(value))
    pb_attributes.dropped_attributes_count = dropped + dropped_count
    return pb_attributes
