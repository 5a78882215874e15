"""
Tests for jsoncodec.validation module.
"""

import pytest

from jsoncodec import Err, Ok
from jsoncodec.validation import (
    Validator,
    Violation,
    all_of,
    always,
    boolean,
    combine,
    fail_unless,
    integer,
    null_,
    number,
    one_of,
    string,
)


class TestValidator:
    def test_simple_check(self):
        is_positive = fail_unless(lambda x: x > 0, "positive")
        assert isinstance(is_positive(5), Ok)
        assert isinstance(is_positive(-1), Err)
        assert is_positive(-1).error.expected == "positive"

    def test_custom_check(self):
        even = Validator(
            lambda v: None if v % 2 == 0 else Violation(reason="failed_check", value=v)
        )
        assert even.is_valid(4)
        assert not even.is_valid(3)

    def test_result_keeps_value(self):
        assert string("hello") == Ok("hello")

    def test_nullable(self):
        assert string.nullable().is_valid(None)
        assert string.nullable().is_valid("x")
        violation = string.nullable()(3).error
        assert violation.reason == "one_of"
        assert [v.expected for v in violation.errors] == ["string", "null"]


class TestPrimitives:
    def test_types(self):
        assert string.is_valid("a")
        assert number.is_valid(1.5)
        assert not number.is_valid(True)
        assert integer.is_valid(2)
        assert not integer.is_valid(2.5)
        assert boolean.is_valid(False)
        assert null_.is_valid(None)
        assert always.is_valid(object())

    def test_violation_shape(self):
        assert string(3).error == Violation(reason="expected_type", expected="string", value=3)


class TestStructural:
    def test_array(self):
        assert number.array().is_valid([1, 2])
        assert not number.array().is_valid("12")
        violation = number.array()([1, "x", "y"]).error
        assert violation.path == (1,)
        assert violation.value == "x"

    def test_field(self):
        assert number.field("a").is_valid({"a": 1})
        missing = number.field("a")({}).error
        assert missing.reason == "no_such_key"
        assert missing.key == "a"
        assert number.field("a")({"a": "x"}).error.path == ("a",)
        assert number.field("a")([1]).error.expected == "object"

    def test_nested_paths_are_root_to_leaf(self):
        nested = number.field("b").field("a")
        assert nested({"a": {"b": "x"}}).error.path == ("a", "b")

    def test_index_and_get(self):
        assert number.index(1).is_valid([0, 1])
        assert number.index(2)([0, 1]).error.reason == "no_such_key"
        assert number.get(0)(["x"]).error.path == (0,)
        assert number.get("k").is_valid({"k": 1})
        with pytest.raises(TypeError):
            number.get(None)

    def test_at(self):
        assert number.at(["a", 0]).is_valid({"a": [1]})
        assert number.at(["a", 0])({"a": ["x"]}).error.path == ("a", 0)
        walking = number.at([0, "key", "oof"])([{"key": 10}]).error
        assert walking.path == (0, "key")
        assert walking.expected == "object"


class TestCombinators:
    def test_one_of(self):
        v = one_of(string, number)
        assert v.is_valid("a")
        assert v.is_valid(1)
        assert len(v(None).error.errors) == 2

    def test_all_of(self):
        v = all_of(number, fail_unless(lambda x: x > 0, "positive"))
        assert v.is_valid(3)
        violation = v(-3).error
        assert violation.reason == "all_of"
        assert [e.reason for e in violation.errors] == ["failed_check"]

    def test_combine_fields(self):
        point = combine({"x": number, "y": number}, auto=True)
        assert point.is_valid({"x": 1, "y": 2})
        violation = point({"x": "1", "y": "2"}).error
        assert [e.path for e in violation.errors] == [("x",), ("y",)]

    def test_combine_tuple(self):
        v = combine([number.field("x"), string.field("label")])
        assert v.is_valid({"x": 1, "label": "a"})
        assert len(v({}).error.errors) == 2

    def test_combine_empty(self):
        assert combine({}).is_valid("anything")

    def test_combine_bad_arguments(self):
        with pytest.raises(TypeError):
            combine(string)
        with pytest.raises(ValueError):
            combine([string], auto=True)
