"""
Encode mappings, records and nested values into URL query parameters.
"""

import dataclasses
import logging
from typing import Any, Dict, Optional

from . import timeutil
from .errors import ConfigError, RecordEncodeError, TypeMismatchError
from .record import encode_record
from .reflect import (
    indirect,
    is_mapping,
    is_marshaler,
    is_record,
    is_reference,
    is_sequence,
    is_time,
    is_zero,
    slice_values,
    string_value_map,
    value_string,
)
from .values import QueryValues, encode_custom, merge, parse_query

logger = logging.getLogger("urlvalues")


@dataclasses.dataclass(frozen=True)
class MarshalerOptions:
    """
    Options for encoding mappings and sequences.

    Records are encoded according to their own field metadata instead, see
    :py:mod:`urlvalues.record`.
    """

    # add "[]" to the keys of sequence values
    array_brackets: bool = False

    # when set, join the values of a sequence into a single value
    array_delimiter: str = ""

    # encode booleans as "1" / "0"
    int_bool: bool = False

    # encode datetimes as seconds since the epoch
    time_unix: bool = False

    # encode datetimes as milliseconds since the epoch
    time_unix_milli: bool = False

    # encode datetimes as nanoseconds since the epoch
    time_unix_nano: bool = False

    # strftime layout for datetimes, RFC 3339 when empty
    time_layout: str = ""

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "MarshalerOptions":
        """
        Build options from a configuration mapping, e.g. a loaded JSON file.
        """
        known = {fld.name: fld for fld in dataclasses.fields(cls)}
        kwargs = {}
        for key, val in cfg.items():
            if key not in known:
                raise ConfigError(f"unknown option {key!r}")
            want = type(known[key].default)
            if not isinstance(val, want):
                raise ConfigError(
                    f"option {key!r} must be {want.__name__}, got {val!r}"
                )
            kwargs[key] = val
        return cls(**kwargs)

    def marshal(self, value: Any) -> Optional[QueryValues]:
        """
        Encode value into query parameters.

        A string is parsed as an already encoded query. Mappings and
        records are flattened into bracketed keys. Returns an empty
        collection for None and None for any other zero value.

        :raises TypeMismatchError: for anything but a string, mapping or
                                   record
        """
        values = QueryValues()
        if value is None:
            return values

        val = indirect(value)
        if is_zero(val):
            return None

        if isinstance(val, str):
            logger.debug("Parsing string input as a query: %r", val)
            return parse_query(val)

        if is_mapping(val) or is_record(val):
            self._marshal_any(values, val, "")
            return values

        raise TypeMismatchError(type(val).__name__)

    def _marshal_any(self, values: QueryValues, val: Any, scope: str) -> None:
        if is_marshaler(val):
            encode_custom(val, scope, values)
        elif is_mapping(val):
            self._marshal_mapping(values, val, scope)
        elif is_sequence(val):
            self._marshal_sequence(values, val, scope)
        elif is_record(val):
            self._marshal_record(values, val, scope)
        elif is_reference(val):
            self._marshal_reference(values, val, scope)
        else:
            self._marshal_scalar(values, val, scope)

    def _marshal_mapping(self, values: QueryValues, val: Any, scope: str) -> None:
        for key, item in string_value_map(val).items():
            if scope != "":
                key = scope + "[" + key + "]"
            self._marshal_any(values, item, key)

    def _marshal_sequence(self, values: QueryValues, val: Any, scope: str) -> None:
        if self.array_brackets:
            scope += "[]"

        if self.array_delimiter == "":
            for item in slice_values(val):
                self._marshal_any(values, item, scope)
            return

        # Only values landing directly on scope survive the join; elements
        # that expand into nested keys are dropped.
        tmp = QueryValues()
        for item in slice_values(val):
            self._marshal_any(tmp, item, scope)

        if scope in tmp:
            values.add(scope, self.array_delimiter.join(tmp[scope]))

    def _marshal_record(self, values: QueryValues, val: Any, scope: str) -> None:
        if is_time(val):
            if scope != "":
                values.add(scope, self._encode_time(val))
            return

        try:
            record_values = encode_record(val)
        except RecordEncodeError:
            raise
        except Exception as err:
            raise RecordEncodeError(f"{scope!r}: {err}") from err

        merge(values, record_values, scope)

    def _marshal_reference(self, values: QueryValues, val: Any, scope: str) -> None:
        val = indirect(val)
        if val is None:
            logger.debug("Skipping nil reference at %r", scope)
            return
        self._marshal_any(values, val, scope)

    def _marshal_scalar(self, values: QueryValues, val: Any, scope: str) -> None:
        if scope == "":
            return
        if isinstance(val, bool):
            values.add(scope, self._encode_bool(val))
        else:
            values.add(scope, value_string(val))

    def _encode_bool(self, val: bool) -> str:
        if self.int_bool:
            return "1" if val else "0"
        return "true" if val else "false"

    def _encode_time(self, tim) -> str:
        if self.time_unix:
            return str(timeutil.unix(tim))
        if self.time_unix_milli:
            return str(timeutil.unix_milli(tim))
        if self.time_unix_nano:
            return str(timeutil.unix_nano(tim))
        return timeutil.format_time(tim, self.time_layout)


def marshal(value: Any) -> Optional[QueryValues]:
    """
    Encode value into query parameters with the default options.
    """
    return MarshalerOptions().marshal(value)
