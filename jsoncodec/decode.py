"""
Turn JSON values into typed, validated Python values.

A ``Decoder`` wraps a pure function from a raw JSON ``Value`` to a
``DecodeResult``. Decoders never mutate anything, so module-level decoders
can be shared freely and composed into new ones:

    point = combine({"x": number.field("x"), "y": number.field("y")})
    point.decode_string('{"x": 1, "y": 2}')  # {"x": 1, "y": 2}
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar

from .errors import (
    DecodeError,
    DecodeException,
    ElementError,
    Failure,
    FieldError,
    OneOfError,
    PathSegment,
    expecting,
    missing,
)
from .result import Err, Ok, Result
from .values import Value, parse

T = TypeVar("T")
V = TypeVar("V")

DecodeResult = Result[T, DecodeError]
DecoderFn = Callable[[Any], DecodeResult[T]]


def _is_object(v: Any) -> bool:
    return isinstance(v, dict)


def _is_array(v: Any) -> bool:
    return isinstance(v, (list, tuple))


def _is_number(v: Any) -> bool:
    # bool is a subclass of int, but never a JSON number
    return isinstance(v, (int, float)) and not isinstance(v, bool)


@dataclass(frozen=True, slots=True)
class Decoder(Generic[T]):
    """
    A value that knows how to decode JSON values.

    Calling a decoder returns its ``DecodeResult``; the ``decode_*`` methods
    are the convenience entry points.
    """

    decoder_fn: DecoderFn[T]

    def __call__(self, value: Value) -> DecodeResult[T]:
        return self.decoder_fn(value)

    def decode_value(self, value: Value) -> T:
        """
        Run the decoder on an already-parsed JSON ``Value``.

            number.decode_value(4)       # 4
            number.decode_value("four")  # raises DecodeException

        Raises:
            DecodeException: carrying the structured ``DecodeError``
        """
        res = self.decoder_fn(value)
        if isinstance(res, Err):
            raise DecodeException(res.error)
        return res.value

    def decode_string(self, text: str | bytes) -> T:
        """
        Parse ``text`` as JSON, then run the decoder on it.

        Raises:
            json.JSONDecodeError: If ``text`` is not well-formed JSON
            DecodeException: If the decoder fails
        """
        return self.decode_value(parse(text))

    def decode_result_value(self, value: Value) -> DecodeResult[T]:
        return self.decoder_fn(value)

    def decode_result_string(self, text: str | bytes) -> DecodeResult[T]:
        return self.decoder_fn(parse(text))

    def map(self, fn: Callable[[T], V]) -> Decoder[V]:
        """
        Transform a decoder. Maybe you just want to know the length of a string:

            string_length = string.map(len)
        """
        decoder_fn = self.decoder_fn

        def mapped(v: Any) -> DecodeResult[V]:
            return decoder_fn(v).map(fn)

        return Decoder(mapped)

    def and_then(self, fn: Callable[[T], Decoder[V]]) -> Decoder[V]:
        """
        Create decoders that depend on previous results.

        The decoder chosen by ``fn`` runs against the same JSON value this
        decoder received, which makes version dispatch possible:

            def info_for(version: int) -> Decoder[Info]:
                if version == 4:
                    return info_v4
                if version == 3:
                    return info_v3
                return fail(f"Version {version} is not supported")

            info = number.field("version").and_then(info_for)
        """
        decoder_fn = self.decoder_fn

        def chained(v: Any) -> DecodeResult[V]:
            return decoder_fn(v).and_then(lambda t: fn(t).decoder_fn(v))

        return Decoder(chained)

    def fail_unless(self, pred: Callable[[T], bool], message: str) -> Decoder[T]:
        """Reject decoded values for which ``pred`` is false."""
        decoder_fn = self.decoder_fn

        def checked(v: Any) -> DecodeResult[T]:
            res = decoder_fn(v)
            if isinstance(res, Ok) and not pred(res.value):
                return Err(Failure(message=message, value=v))
            return res

        return Decoder(checked)

    def union(self, other: Decoder[V]) -> Decoder[T | V]:
        """
        Merge two decoders as a union type.

            string.union(boolean).decode_string("true")     # True
            string.union(boolean).decode_string('"hello"')  # "hello"
            string.union(boolean).decode_string("42")       # raises DecodeException
        """
        a, b = self.decoder_fn, other.decoder_fn

        def union(v: Any) -> DecodeResult[T | V]:
            ar = a(v)
            if isinstance(ar, Ok):
                return ar
            br = b(v)
            if isinstance(br, Ok):
                return br
            return Err(OneOfError(errors=(ar.error, br.error)))

        return Decoder(union)

    def nullable(self) -> Decoder[T | None]:
        """``d.nullable()`` is equivalent to ``d.union(null_)``."""
        return self.union(null_)

    def maybe(self, default: Any = None) -> Decoder[Any]:
        """
        Helpful for dealing with optional fields.

            data = {"name": "tom", "age": 42}

            number.field("age").maybe().decode_value(data)     # 42
            number.field("name").maybe().decode_value(data)    # None
            number.field("height").maybe().decode_value(data)  # None

            number.maybe().field("age").decode_value(data)     # 42
            number.maybe().field("name").decode_value(data)    # None
            number.maybe().field("height").decode_value(data)  # raises DecodeException

        ``maybe`` makes exactly what it wraps conditional. For optional
        fields, that means you probably want it outside ``field`` or ``at``.

        Instead of ``None`` it can produce some other value:

            number.maybe(-1).decode_value("oof")  # -1
        """
        return one_of(self, succeed(default))

    def array(self) -> Decoder[list[T]]:
        """
        Decode a JSON array into a list.

        Only the first (lowest index) failing element is reported, as an
        ``ElementError``.
        """
        decoder_fn = self.decoder_fn

        def array(v: Any) -> DecodeResult[list[T]]:
            if not _is_array(v):
                return Err(expecting("an ARRAY", v))
            items: list[T] = []
            for i, item in enumerate(v):
                res = decoder_fn(item)
                if isinstance(res, Err):
                    return Err(ElementError(index=i, error=res.error))
                items.append(res.value)
            return Ok(items)

        return Decoder(array)

    def key_value_pairs(self) -> Decoder[list[tuple[str, T]]]:
        """
        Decode a JSON object into a list of pairs.

            number.key_value_pairs().decode_string('{"alice": 42, "bob": 99}')
            # [("alice", 42), ("bob", 99)]
        """
        decoder_fn = self.decoder_fn

        def key_value_pairs(v: Any) -> DecodeResult[list[tuple[str, T]]]:
            if not _is_object(v):
                return Err(expecting("an OBJECT", v))
            pairs: list[tuple[str, T]] = []
            for key, item in v.items():
                res = decoder_fn(item)
                if isinstance(res, Err):
                    return Err(FieldError(field=key, error=res.error))
                pairs.append((key, res.value))
            return Ok(pairs)

        return Decoder(key_value_pairs)

    def dict(self) -> Decoder[dict[str, T]]:
        """Decode a JSON object into a dict of decoded values."""
        pairs_fn = self.key_value_pairs().decoder_fn

        def dict_(v: Any) -> DecodeResult[dict[str, T]]:
            return pairs_fn(v).map(dict)

        return Decoder(dict_)

    def field(self, key: str) -> Decoder[T]:
        """
        Decode a JSON object, requiring a particular field.

            number.field("x").decode_string('{"x": 3}')          # 3
            number.field("x").decode_string('{"x": 3, "y": 4}')  # 3
            number.field("x").decode_string('{"x": true}')       # raises DecodeException
            number.field("x").decode_string('{"y": 4}')          # raises DecodeException

        Errors raised by this decoder get ``key`` prepended to their path.
        """
        decoder_fn = self.decoder_fn
        prefix = (key,)

        def field(v: Any) -> DecodeResult[T]:
            if not _is_object(v):
                return Err(expecting("an OBJECT", v))
            if key not in v:
                return Err(missing(key, v))
            return decoder_fn(v[key]).map_error(lambda e: e.with_path_prefix(prefix))

        return Decoder(field)

    def index(self, i: int) -> Decoder[T]:
        """
        Decode a JSON array, requiring a particular index.

            string.index(1).decode_string('["alice", "bob"]')  # "bob"
            string.index(2).decode_string('["alice", "bob"]')  # raises DecodeException
        """
        decoder_fn = self.decoder_fn
        prefix = (i,)

        def index(v: Any) -> DecodeResult[T]:
            if not _is_array(v):
                return Err(expecting("an ARRAY", v))
            if not 0 <= i < len(v):
                return Err(missing(i, v))
            return decoder_fn(v[i]).map_error(lambda e: e.with_path_prefix(prefix))

        return Decoder(index)

    def get(self, key: PathSegment) -> Decoder[T]:
        """``index`` for an int key, ``field`` for a str key."""
        if isinstance(key, bool):
            raise TypeError("Path keys must be str or int, not bool")
        if isinstance(key, int):
            return self.index(key)
        if isinstance(key, str):
            return self.field(key)
        raise TypeError(f"Path keys must be str or int, not {type(key).__name__}")

    def at(self, keys: Sequence[PathSegment]) -> Decoder[T]:
        """
        Decode a nested JSON value, requiring certain fields and indexes.

            json = '{"person": {"name": "tom", "age": 42}}'

            string.at(["person", "name"]).decode_string(json)  # "tom"
            number.at(["person", "age"]).decode_string(json)   # 42

        Shorthand for ``string.field("name").field("person")``.
        """
        keys = tuple(keys)
        hops = [value.get(key).decoder_fn for key in keys]
        decoder_fn = self.decoder_fn

        def at(v: Any) -> DecodeResult[T]:
            for i, hop in enumerate(hops):
                res = hop(v)
                if isinstance(res, Err):
                    return Err(res.error.with_path_prefix(keys[:i]))
                v = res.value
            return decoder_fn(v).map_error(lambda e: e.with_path_prefix(keys))

        return Decoder(at)


def _string(v: Any) -> DecodeResult[str]:
    return Ok(v) if isinstance(v, str) else Err(expecting("a STRING", v))


def _number(v: Any) -> DecodeResult[int | float]:
    return Ok(v) if _is_number(v) else Err(expecting("a NUMBER", v))


def _integer(v: Any) -> DecodeResult[int]:
    if isinstance(v, int) and not isinstance(v, bool):
        return Ok(v)
    return Err(expecting("an INTEGER", v))


def _boolean(v: Any) -> DecodeResult[bool]:
    return Ok(v) if isinstance(v, bool) else Err(expecting("a BOOLEAN", v))


def _null(v: Any) -> DecodeResult[None]:
    return Ok(v) if v is None else Err(expecting("a NULL", v))


string: Decoder[str] = Decoder(_string)
"""Decode a JSON string."""

number: Decoder[int | float] = Decoder(_number)
"""Decode a JSON number (int or float, including NaN; never bool)."""

integer: Decoder[int] = Decoder(_integer)
"""Decode a JSON number that parsed as an int."""

boolean: Decoder[bool] = Decoder(_boolean)
"""Decode a JSON boolean."""

null_: Decoder[None] = Decoder(_null)
"""Decode a JSON null."""

value: Decoder[Value] = Decoder(Ok)
"""
Do not do anything with a JSON value, just bring it in as a ``Value``.
Useful for data you would like to deal with later.
"""


def null_as(default: T) -> Decoder[T]:
    """Decode a JSON null into a constant value."""
    return null_.map(lambda _: default)


def succeed(x: T) -> Decoder[T]:
    """
    Ignore the JSON and produce ``x``. Handy as the last alternative of
    ``one_of`` or inside ``and_then``.
    """
    return Decoder(lambda _: Ok(x))


def fail(message: str) -> Decoder[Any]:
    """Ignore the JSON and fail with ``message``."""
    return Decoder(lambda v: Err(Failure(message=message, value=v)))


def one_of(head: Decoder[Any], *tail: Decoder[Any]) -> Decoder[Any]:
    """
    Try a bunch of different decoders, in order.

        bad_int = one_of(number, null_as(0))
        bad_int.array().decode_string("[1, 2, null, 4]")  # [1, 2, 0, 4]

    Only when every alternative fails is the result an error: a
    ``OneOfError`` holding each failure in the order tried. With a single
    alternative, its own error is returned unchanged.
    """
    decoders = [d.decoder_fn for d in (head, *tail)]
    if len(decoders) == 1:
        return head

    def one_of(v: Any) -> DecodeResult[Any]:
        errors: list[DecodeError] = []
        for decoder_fn in decoders:
            res = decoder_fn(v)
            if isinstance(res, Ok):
                return res
            errors.append(res.error)
        return Err(OneOfError(errors=tuple(errors)))

    return Decoder(one_of)


def combine(
    decoders: Mapping[str, Decoder[Any]] | Sequence[Decoder[Any]],
    auto: bool = False,
) -> Decoder[Any]:
    """
    Run several decoders on the same JSON value and collect their results.

    A mapping of output names to decoders produces a dict; a list or tuple of
    decoders produces a tuple:

        combine({"a": string.field("a"), "b": number.field("b")})
        combine([string.field("a"), number.field("b")])

    Unlike ``array``, every failure is reported, aggregated into a
    ``OneOfError``. In the mapping form each failure's path is prefixed with
    its output name. With ``auto=True`` each decoder reads the source field of
    the same name (``{"a": string}`` means ``{"a": string.field("a")}``).
    """
    if isinstance(decoders, Mapping):
        return _combine_fields(decoders, auto)
    if isinstance(decoders, (list, tuple)):
        if auto:
            raise ValueError("auto=True needs a mapping of field names to decoders")
        return _combine_tuple(decoders)
    raise TypeError(
        f"combine() takes a mapping or a sequence of decoders, got {type(decoders).__name__}"
    )


def _combine_tuple(decoders: Sequence[Decoder[Any]]) -> Decoder[tuple[Any, ...]]:
    decoder_fns = [d.decoder_fn for d in decoders]

    def combine(v: Any) -> DecodeResult[tuple[Any, ...]]:
        oks: list[Any] = []
        errs: list[DecodeError] = []
        for decoder_fn in decoder_fns:
            res = decoder_fn(v)
            if isinstance(res, Ok):
                oks.append(res.value)
            else:
                errs.append(res.error)
        if errs:
            return Err(OneOfError(errors=tuple(errs)))
        return Ok(tuple(oks))

    return Decoder(combine)


def _combine_fields(
    fields: Mapping[str, Decoder[Any]], auto: bool
) -> Decoder[dict[str, Any]]:
    # the field decoder already owns the key segment when auto is set
    pairs = [
        (key, (d.field(key) if auto else d).decoder_fn, () if auto else (key,))
        for key, d in fields.items()
    ]

    def combine(v: Any) -> DecodeResult[dict[str, Any]]:
        oks: dict[str, Any] = {}
        errs: list[DecodeError] = []
        for key, decoder_fn, prefix in pairs:
            res = decoder_fn(v)
            if isinstance(res, Ok):
                oks[key] = res.value
            else:
                errs.append(res.error.with_path_prefix(prefix))
        if errs:
            return Err(OneOfError(errors=tuple(errs)))
        return Ok(oks)

    return Decoder(combine)


def lazy(thunk: Callable[[], Decoder[T]]) -> Decoder[T]:
    """
    Refer to a decoder that is not defined yet.

    Needed for recursive definitions:

        tree = combine({
            "value": number.field("value"),
            "children": lazy(lambda: tree).array().field("children"),
        })
    """
    return Decoder(lambda v: thunk().decoder_fn(v))


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _from_epoch_ms(ms: int | float) -> datetime | None:
    if isinstance(ms, float) and not math.isfinite(ms):
        return None
    try:
        return _EPOCH + timedelta(milliseconds=ms)
    except OverflowError:
        return None


def _from_iso_string(s: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(s)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _valid_date(d: datetime | None) -> Decoder[datetime]:
    return fail("invalid date") if d is None else succeed(d)


date_epoch: Decoder[datetime] = number.map(_from_epoch_ms).and_then(_valid_date)
"""Decode milliseconds since the Unix epoch into an aware UTC datetime."""

date_iso_string: Decoder[datetime] = string.map(_from_iso_string).and_then(
    _valid_date
)
"""Decode an ISO-8601 string into an aware datetime (naive input is UTC)."""
