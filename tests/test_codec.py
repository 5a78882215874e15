"""
Tests for jsoncodec.codec and jsoncodec.encode.
"""

import math
from datetime import datetime, timezone

import pytest

from jsoncodec import DecodeException, Err, Ok, OneOfError, codec as C, encode as E
from jsoncodec import decode as D


def expect_codec(codec, value, enc):
    assert codec.decode_value(enc) == value
    assert codec.encode_value(value) == enc


def expect_codec_raises(codec, value, enc, match):
    with pytest.raises(DecodeException, match=match):
        codec.decode_value(enc)
    with pytest.raises(DecodeException, match=match):
        codec.encode_value(value)


def expect_id_codec(codec, value):
    expect_codec(codec, value, value)


def expect_id_codec_raises(codec, value, match):
    expect_codec_raises(codec, value, value, match)


class TestPrimitiveCodecs:
    def test_string(self):
        expect_id_codec(C.string, "foo")
        expect_id_codec_raises(C.string, 3, "Expecting a STRING")

    def test_number(self):
        expect_id_codec(C.number, 3)
        expect_id_codec(C.number, 0)
        assert math.isnan(C.number.encode_value(float("nan")))
        expect_id_codec_raises(C.number, "foo", "Expecting a NUMBER")

    def test_integer(self):
        expect_id_codec(C.integer, 7)
        expect_id_codec_raises(C.integer, 7.5, "Expecting an INTEGER")

    def test_boolean(self):
        expect_id_codec(C.boolean, True)
        expect_id_codec(C.boolean, False)
        expect_id_codec_raises(C.boolean, None, "Expecting a BOOLEAN")

    def test_null(self):
        expect_id_codec(C.null_, None)
        expect_id_codec_raises(C.null_, False, "Expecting a NULL")

    def test_value(self):
        expect_id_codec(C.value, {"anything": [1, None, "x"]})

    def test_nullable(self):
        expect_id_codec(C.number.nullable(), None)
        expect_id_codec(C.number.nullable(), 3)
        expect_id_codec_raises(C.number.nullable(), "three", "Expecting a NUMBER")


class TestEncode:
    def test_unsafe_skips_check(self):
        assert C.string.encode_unsafe_value(3) == 3

    def test_result_variants(self):
        assert C.string.encode_result_value("a") == Ok("a")
        assert isinstance(C.string.encode_result_value(3), Err)
        assert C.string.encode_result_string("a") == Ok('"a"')

    def test_encode_string(self):
        assert C.number.array().encode_string([1, 2]) == "[1, 2]"

    def test_mismatched_pair_fails_loudly(self):
        broken = C.Codec(D.string, lambda n: n * 2)
        with pytest.raises(DecodeException, match="Expecting a STRING"):
            broken.encode_value(21)

    def test_encoder_type_error_becomes_failure(self):
        res = C.date_epoch.encode_result_value("yesterday")
        assert isinstance(res, Err)
        assert res.error.message.startswith("Cannot encode value")


class TestDateCodecs:
    when = datetime(2021, 6, 1, 12, 30, 15, 250000, tzinfo=timezone.utc)

    def test_epoch(self):
        expect_codec(C.date_epoch, self.when, 1622550615250)

    def test_iso_string(self):
        expect_codec(C.date_iso_string, self.when, "2021-06-01T12:30:15.250Z")

    def test_naive_is_utc(self):
        naive = datetime(1970, 1, 1, 0, 0, 1)
        assert E.date_epoch(naive) == 1000
        assert E.date_iso_string(naive) == "1970-01-01T00:00:01.000Z"

    def test_other_timezones_normalized(self):
        from datetime import timedelta

        plus_two = timezone(timedelta(hours=2))
        local = datetime(2021, 6, 1, 14, 30, 15, 250000, tzinfo=plus_two)
        assert C.date_iso_string.encode_value(local) == "2021-06-01T12:30:15.250Z"
        assert C.date_iso_string.decode_value(C.date_iso_string.encode_value(local)) == local

    def test_nullable_date(self):
        expect_codec(C.date_epoch.nullable(), None, None)
        expect_codec(C.date_epoch.nullable(), self.when, 1622550615250)

    @pytest.mark.parametrize("codec", [C.date_epoch, C.date_iso_string])
    @pytest.mark.parametrize(
        "text", ["9999-12-31T23:59:59-23:59", "0001-01-01T00:00:00+01:00"]
    )
    def test_dates_outside_utc_range(self, codec, text):
        when = D.date_iso_string.decode_value(text)
        res = codec.encode_result_value(when)
        assert isinstance(res, Err)
        assert res.error.message.startswith("Cannot encode value")
        with pytest.raises(DecodeException, match="Cannot encode value"):
            codec.encode_value(when)


class TestContainerCodecs:
    def test_array(self):
        expect_id_codec(C.number.array(), [1, 2, 3])
        expect_codec(C.date_epoch.array(), [datetime(1970, 1, 1, tzinfo=timezone.utc)], [0])

    def test_dict(self):
        expect_id_codec(C.boolean.dict(), {"a": True, "b": False})

    def test_key_value_pairs(self):
        expect_codec(C.number.key_value_pairs(), [("b", 2), ("a", 1)], {"b": 2, "a": 1})
        assert list(C.number.key_value_pairs().encode_value([("b", 2), ("a", 1)])) == [
            "b",
            "a",
        ]


class TestUnionCodecs:
    def test_union_with_exactly(self):
        codec = C.number.union(C.exactly("a"))
        expect_id_codec(codec, 3)
        expect_id_codec(codec, 9)
        expect_id_codec(codec, "a")

    def test_union_raises_first_error(self):
        codec = C.number.union(C.exactly("a"))
        with pytest.raises(DecodeException) as info:
            codec.encode_value("b")
        assert info.value.error.message == "Expecting a NUMBER"

    def test_union_decode_error_aggregates(self):
        res = C.number.union(C.exactly("a")).decode_result_value("b")
        assert isinstance(res.error, OneOfError)
        assert len(res.error.errors) == 2

    def test_one_of_requires_codecs(self):
        with pytest.raises(TypeError):
            C.one_of(C.number, D.string)

    def test_nested_unions(self):
        codec = C.one_of(C.string.union(C.number), C.null_)
        expect_id_codec(codec, None)
        expect_id_codec(codec, "x")


class TestExactly:
    def test_exactly(self):
        expect_id_codec(C.exactly("circle"), "circle")
        expect_id_codec_raises(C.exactly("circle"), "square", "Expected exactly")

    def test_strict_equality(self):
        with pytest.raises(DecodeException):
            C.exactly(1).decode_value(True)
        with pytest.raises(DecodeException):
            C.exactly(True).decode_value(1)
        assert C.exactly(1).decode_value(1.0) == 1

    def test_strict_equality_nested(self):
        with pytest.raises(DecodeException):
            C.exactly([1]).decode_value([True])
        with pytest.raises(DecodeException):
            C.exactly({"on": True}).decode_value({"on": 1})
        with pytest.raises(DecodeException):
            C.exactly([1, 2]).decode_value([1])
        expect_id_codec(C.exactly({"tags": ["a", False]}), {"tags": ["a", False]})
