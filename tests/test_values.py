"""
Test the query parameter collection
"""

import pytest

from urlvalues import QueryParseError, QueryValues, parse_query
from urlvalues.values import merge


def test_add_and_get() -> None:
    values = QueryValues()
    values.add("a", "1")
    values.add("a", "2")
    values.add("b", "")
    assert values == {"a": ["1", "2"], "b": [""]}
    assert values.get("a") == "1"
    assert values.get("b") == ""
    assert values.get("missing") == ""
    assert values.get("missing", "x") == "x"
    assert values.getlist("a") == ["1", "2"]
    assert values.getlist("missing") == []


def test_set_and_delete() -> None:
    values = QueryValues({"a": ["1", "2"]})
    values.set("a", "3")
    assert values.getlist("a") == ["3"]
    assert values.has("a")
    values.delete("a")
    values.delete("a")
    assert not values.has("a")


def test_encode_sorts_keys() -> None:
    values = QueryValues()
    values.add("q", "puppies")
    values.add("oe", "utf8")
    values.add("q", "kittens")
    assert values.encode() == "oe=utf8&q=puppies&q=kittens"
    assert values.pairs() == [
        ("oe", "utf8"),
        ("q", "puppies"),
        ("q", "kittens"),
    ]


def test_encode_escapes() -> None:
    values = QueryValues({"a b[c]": ["x&y=z", "~-_."]})
    assert values.encode() == "a+b%5Bc%5D=x%26y%3Dz&a+b%5Bc%5D=~-_."


def test_encode_empty() -> None:
    assert QueryValues().encode() == ""


def test_merge_with_scope() -> None:
    dst = QueryValues({"object[a]": ["0"]})
    merge(dst, {"a": ["1", "2"], "b[]": ["3"]}, "object")
    assert dst == {"object[a]": ["0", "1", "2"], "object[b[]]": ["3"]}


def test_merge_without_scope() -> None:
    dst = QueryValues()
    merge(dst, {"a": ["1"]}, "")
    assert dst == {"a": ["1"]}


def test_parse_query() -> None:
    values = parse_query("a=1&b=2&a=3&c=&d&&e=x+y%21")
    assert values == {
        "a": ["1", "3"],
        "b": ["2"],
        "c": [""],
        "d": [""],
        "e": ["x y!"],
    }


def test_parse_query_brackets() -> None:
    values = parse_query("client%5Bcif%5D=0123")
    assert values == {"client[cif]": ["0123"]}


def test_parse_query_bad_escape() -> None:
    with pytest.raises(QueryParseError) as exc:
        parse_query("a=%zz")
    assert "%zz" in str(exc.value)


def test_parse_query_semicolon() -> None:
    with pytest.raises(QueryParseError):
        parse_query("a=1;b=2")
