"""
Test shape inspection
"""

import dataclasses
import datetime
import decimal
import weakref

from urlvalues.reflect import (
    indirect,
    is_record,
    is_sequence,
    is_zero,
    slice_values,
    string_value_map,
    value_string,
)


@dataclasses.dataclass
class Point:
    x: int = 0


class Zeroable:
    def __init__(self, zero: bool):
        self.zero = zero

    def is_zero(self) -> bool:
        return self.zero


def test_is_zero() -> None:
    for val in (None, "", b"", [], (), {}, set(), False, 0, 0.0, decimal.Decimal(0)):
        assert is_zero(val), val
    for val in ("a", [0], {"a": None}, True, 1, -1, 0.1, Point()):
        assert not is_zero(val), val


def test_is_zero_time() -> None:
    assert is_zero(datetime.datetime.min)
    assert not is_zero(datetime.datetime(2020, 1, 1))


def test_is_zero_capability() -> None:
    assert is_zero(Zeroable(True))
    assert not is_zero(Zeroable(False))
    assert not is_zero(Zeroable)


def test_is_zero_reference() -> None:
    point = Point()
    assert not is_zero(weakref.ref(point))
    dead = weakref.ref(Point())
    assert dead() is None
    assert is_zero(dead)


def test_indirect() -> None:
    point = Point(1)
    assert indirect(point) is point
    assert indirect(weakref.ref(point)) is point
    dead = weakref.ref(Point())
    assert dead() is None
    assert indirect(dead) is None
    assert indirect(None) is None


def test_shapes() -> None:
    assert is_sequence([1])
    assert is_sequence((1,))
    assert is_sequence({1})
    assert not is_sequence("abc")
    assert not is_sequence(b"abc")
    assert not is_sequence({"a": 1})
    assert is_record(Point())
    assert is_record(datetime.datetime.now())
    assert not is_record(Point)
    assert not is_record({"x": 1})


def test_value_string() -> None:
    assert value_string(0) == ""
    assert value_string(False) == ""
    assert value_string(None) == ""
    assert value_string(True) == "true"
    assert value_string(12) == "12"
    assert value_string(1.25) == "1.25"
    assert value_string(b"\xc3\xa9") == "é"
    assert value_string(decimal.Decimal("1.10")) == "1.10"


def test_string_value_map() -> None:
    out = string_value_map({"b": 1, 2: "x", "skip": None, 0: "zero"})
    assert out == {"b": 1, "2": "x", "": "zero"}
    assert list(out) == ["b", "2", ""]


def test_slice_values() -> None:
    assert slice_values([3, 1, 2]) == [3, 1, 2]
    assert slice_values((1, "a")) == [1, "a"]
    assert slice_values({3, 1, 2}) == [1, 2, 3]
    assert slice_values({"b", 1}) == [1, "b"]
