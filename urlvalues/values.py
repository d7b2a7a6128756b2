"""
The query parameter collection and the helpers that build and read it.
"""

import re
import urllib.parse
from typing import Dict, Iterable, List, Protocol, Tuple

from .errors import CustomEncodeError, QueryParseError

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class QueryValues(Dict[str, List[str]]):
    """
    Query parameters: each key maps to the ordered list of its values.

    Keys keep their insertion order, and so do the values of a repeated
    key. ``encode`` sorts by key, so the wire form does not depend on the
    order in which keys were added.
    """

    def add(self, key: str, value: str) -> None:
        """
        Append a value to the list for key.
        """
        self.setdefault(key, []).append(value)

    def set(self, key: str, value: str) -> None:
        """
        Replace any existing values for key with a single value.
        """
        self[key] = [value]

    def get(self, key: str, default: str = "") -> str:  # type: ignore[override]
        """
        Return the first value for key, or default.
        """
        vals = super().get(key)
        if not vals:
            return default
        return vals[0]

    def getlist(self, key: str) -> List[str]:
        return list(super().get(key, []))

    def delete(self, key: str) -> None:
        self.pop(key, None)

    def has(self, key: str) -> bool:
        return key in self

    def pairs(self) -> List[Tuple[str, str]]:
        """
        Return every (key, value) pair, sorted by key.
        """
        return [(key, val) for key in sorted(self) for val in self[key]]

    def encode(self) -> str:
        """
        Return the URL-encoded form ("bar=baz&foo=quux"), sorted by key.
        """
        return "&".join(
            f"{urllib.parse.quote_plus(key)}={urllib.parse.quote_plus(val)}"
            for key, val in self.pairs()
        )

    def __repr__(self) -> str:
        return f"QueryValues({dict.__repr__(self)})"


def merge(dst: QueryValues, src: Dict[str, Iterable[str]], scope: str) -> None:
    """
    Append every value of src into dst, nesting each key under scope.
    """
    for key, vals in src.items():
        if scope != "":
            key = scope + "[" + key + "]"
        for val in vals:
            dst.add(key, val)


def _unescape(s: str) -> str:
    bad = _BAD_ESCAPE.search(s)
    if bad is not None:
        raise QueryParseError(f"invalid URL escape {s[bad.start():bad.start() + 3]!r}")
    return urllib.parse.unquote_plus(s)


def parse_query(query: str) -> QueryValues:
    """
    Parse an encoded query string ("a=1&b=2&b=3") into QueryValues.

    A pair without "=" gets an empty value and empty segments are ignored.
    Semicolons are not accepted as separators.
    """
    values = QueryValues()
    for segment in query.split("&"):
        if ";" in segment:
            raise QueryParseError("invalid semicolon separator in query")
        if segment == "":
            continue
        key, _, val = segment.partition("=")
        values.add(_unescape(key), _unescape(val))
    return values


class Marshaler(Protocol):
    """
    A value that writes its own query parameters under key.

    Implementations raise to signal failure.
    """

    def encode_values(self, key: str, values: QueryValues) -> None:
        ...


def encode_custom(value: Marshaler, key: str, values: QueryValues) -> None:
    try:
        value.encode_values(key, values)
    except Exception as err:
        raise CustomEncodeError(key, str(err)) from err
