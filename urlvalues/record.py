"""
Encode dataclass records into query parameters, driven by field metadata.

The "url" metadata entry of a field names its parameter, optionally
followed by comma separated options:

    @dataclasses.dataclass
    class Search:
        query: str = dataclasses.field(metadata={"url": "q"})
        show_all: bool = dataclasses.field(
            default=False, metadata={"url": "all,int"}
        )
        page: int = dataclasses.field(default=0, metadata={"url": ",omitempty"})
        tags: List[str] = dataclasses.field(
            default_factory=list, metadata={"url": "tag,brackets"}
        )
        token: str = dataclasses.field(default="", metadata={"url": "-"})

    Search(query="foo", show_all=True, tags=["a", "b"])
    # all=1&q=foo&tag[]=a&tag[]=b

A name of "-" skips the field and an empty name keeps the attribute name.
Attributes starting with an underscore are never encoded.

Options:
    omitempty   skip the field when it holds a zero value
    brackets    append "[]" to the name of a sequence
    comma       join sequence values with ","
    space       join sequence values with " "
    semicolon   join sequence values with ";"
    numbered    suffix the name of each sequence value with its index
    int         encode booleans as "1" / "0"
    unix        encode datetimes as seconds since the epoch
    unixmilli   encode datetimes as milliseconds since the epoch
    unixnano    encode datetimes as nanoseconds since the epoch

A "del" metadata entry sets a custom join delimiter for sequences, and a
"layout" entry an strftime layout for datetimes (RFC 3339 otherwise).
Nested records and mappings are encoded as "name[field]".
"""

import dataclasses
from typing import Any, List, Tuple

from . import timeutil
from .errors import RecordEncodeError
from .reflect import (
    indirect,
    is_mapping,
    is_marshaler,
    is_record,
    is_sequence,
    is_time,
    is_zero,
    slice_values,
    string_value_map,
)
from .values import QueryValues, encode_custom


def encode_record(record: Any) -> QueryValues:
    """
    Return the query parameters for a dataclass instance.
    """
    values = QueryValues()
    record = indirect(record)
    if record is None:
        return values
    if not is_record(record) or is_time(record):
        raise RecordEncodeError(
            f"expects dataclass input, got {type(record).__name__}"
        )
    _reflect_record(values, record, "")
    return values


def _parse_tag(tag: str) -> Tuple[str, List[str]]:
    name, *opts = tag.split(",")
    return name, opts


def _reflect_record(values: QueryValues, record: Any, scope: str) -> None:
    for fld in dataclasses.fields(record):
        if fld.name.startswith("_"):
            continue
        tag = fld.metadata.get("url", "")
        if tag == "-":
            continue
        name, opts = _parse_tag(tag)
        if name == "":
            name = fld.name
        if scope != "":
            name = scope + "[" + name + "]"

        val = getattr(record, fld.name)
        if "omitempty" in opts and is_zero(val):
            continue
        _reflect_value(values, val, name, opts, fld)


def _reflect_value(
    values: QueryValues,
    val: Any,
    name: str,
    opts: List[str],
    fld: dataclasses.Field,
) -> None:
    if is_marshaler(val):
        encode_custom(val, name, values)
        return

    val = indirect(val)
    if is_sequence(val):
        _reflect_sequence(values, val, name, opts, fld)
    elif is_time(val):
        values.add(name, _value_string(val, opts, fld))
    elif is_record(val):
        _reflect_record(values, val, name)
    elif is_mapping(val):
        for key, item in string_value_map(val).items():
            _reflect_value(values, item, name + "[" + key + "]", opts, fld)
    else:
        values.add(name, _value_string(val, opts, fld))


def _reflect_sequence(
    values: QueryValues,
    seq: Any,
    name: str,
    opts: List[str],
    fld: dataclasses.Field,
) -> None:
    items = slice_values(seq)
    if not items:
        return

    delim = ""
    if "comma" in opts:
        delim = ","
    elif "space" in opts:
        delim = " "
    elif "semicolon" in opts:
        delim = ";"
    elif "brackets" in opts:
        name += "[]"
    else:
        delim = fld.metadata.get("del", "")

    if delim:
        values.add(
            name, delim.join(_value_string(item, opts, fld) for item in items)
        )
        return

    for i, item in enumerate(items):
        key = name
        if "numbered" in opts:
            key = f"{name}{i}"
        if is_marshaler(item):
            encode_custom(item, key, values)
            continue
        item = indirect(item)
        if is_record(item) and not is_time(item):
            _reflect_record(values, item, key)
        else:
            values.add(key, _value_string(item, opts, fld))


def _value_string(val: Any, opts: List[str], fld: dataclasses.Field) -> str:
    val = indirect(val)
    if val is None:
        return ""

    if isinstance(val, bool):
        if "int" in opts:
            return "1" if val else "0"
        return "true" if val else "false"

    if is_time(val):
        if "unix" in opts:
            return str(timeutil.unix(val))
        if "unixmilli" in opts:
            return str(timeutil.unix_milli(val))
        if "unixnano" in opts:
            return str(timeutil.unix_nano(val))
        return timeutil.format_time(val, fld.metadata.get("layout", ""))

    if isinstance(val, (bytes, bytearray)):
        return bytes(val).decode("utf-8", "replace")

    return str(val)
