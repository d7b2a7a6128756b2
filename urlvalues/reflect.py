"""
Shape inspection: zero values, reference unwrapping and the views the
encoder walks over.
"""

import dataclasses
import datetime
import numbers
import weakref
from collections.abc import Mapping, Sequence, Set
from typing import Any, Dict, List

_TEXT = (str, bytes, bytearray, memoryview)


def indirect(value: Any) -> Any:
    """
    Follow references until reaching a plain value.

    A dead reference yields None, which callers must check for.
    """
    while isinstance(value, weakref.ReferenceType):
        value = value()
    return value


def is_reference(value: Any) -> bool:
    return value is None or isinstance(value, weakref.ReferenceType)


def is_marshaler(value: Any) -> bool:
    if isinstance(value, type):
        return False
    return callable(getattr(value, "encode_values", None))


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    return isinstance(value, (Sequence, Set)) and not isinstance(value, _TEXT)


def is_time(value: Any) -> bool:
    return isinstance(value, datetime.datetime)


def is_record(value: Any) -> bool:
    if is_time(value):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def is_zero(value: Any) -> bool:
    """
    Report whether value is empty: None, a dead reference, an empty
    container or string, False, a numeric zero or the zero datetime.

    Other objects are zero only if they say so through an is_zero() method.
    """
    if value is None:
        return True
    if isinstance(value, weakref.ReferenceType):
        return value() is None
    if isinstance(value, _TEXT) or is_mapping(value) or is_sequence(value):
        return len(value) == 0
    if isinstance(value, bool):
        return not value
    if isinstance(value, numbers.Number):
        return value == 0
    if is_time(value):
        return value.replace(tzinfo=None) == datetime.datetime.min
    zero = getattr(value, "is_zero", None)
    if callable(zero) and not isinstance(value, type):
        return bool(zero())
    return False


def value_string(value: Any) -> str:
    """
    Render a scalar for use as a key or a value. Zero values render empty.
    """
    if is_zero(value):
        return ""
    if isinstance(value, bool):
        return "true"
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", "replace")
    return str(value)


def string_value_map(mapping: Mapping) -> Dict[str, Any]:
    """
    Return the entries of mapping keyed by their rendered keys.

    Entries holding None are dropped. Insertion order is kept.
    """
    out: Dict[str, Any] = {}
    for key, val in mapping.items():
        if val is None:
            continue
        out[value_string(key)] = val
    return out


def slice_values(sequence: Any) -> List[Any]:
    """
    Return the elements of a sequence in order. Sets come back sorted.
    """
    if not isinstance(sequence, Set):
        return list(sequence)
    try:
        return sorted(sequence)
    except TypeError:
        return sorted(sequence, key=value_string)
