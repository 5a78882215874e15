"""
Codecs: a decoder and an encoder for the same type, kept in agreement.

``Codec.encode_value`` decodes everything it encodes before returning it, so
an encoder that disagrees with its decoder fails loudly instead of producing
JSON that cannot be read back.

Lossy decoders (``maybe``, ``one_of`` with a catch-all ``succeed``) have no
faithful encoder. ``Codec`` offers no ``maybe`` and ``one_of`` only accepts
codecs, so such a decoder only gets here when a caller pairs one by hand, and
the round-trip check still applies to it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from logging import getLogger
from typing import Any, Generic, TypeVar

from . import decode, encode
from .decode import Decoder, DecodeResult
from .encode import Encoder
from .errors import DecodeError, DecodeException, Failure
from .result import Err, Ok
from .values import Value, serialize

logger = getLogger(__name__)

T = TypeVar("T")
T2 = TypeVar("T2")


@dataclass(frozen=True, slots=True)
class Codec(Generic[T]):
    """Pairs a ``Decoder[T]`` with an ``Encoder[T]``."""

    decoder: Decoder[T]
    encoder: Encoder[T]

    def decode_value(self, value: Value) -> T:
        return self.decoder.decode_value(value)

    def decode_string(self, text: str | bytes) -> T:
        return self.decoder.decode_string(text)

    def decode_result_value(self, value: Value) -> DecodeResult[T]:
        return self.decoder.decode_result_value(value)

    def decode_result_string(self, text: str | bytes) -> DecodeResult[T]:
        return self.decoder.decode_result_string(text)

    def encode_unsafe_value(self, value: T) -> Value:
        """Encode without checking that the result decodes."""
        return self.encoder(value)

    def encode_value(self, value: T) -> Value:
        """
        Encode ``value``, then decode the output to prove it round-trips.

        Raises:
            DecodeException: If the owned decoder rejects the encoded JSON
        """
        res = self.encode_result_value(value)
        if isinstance(res, Err):
            raise DecodeException(res.error)
        return res.value

    def encode_string(self, value: T) -> str:
        return serialize(self.encode_value(value))

    def encode_result_value(self, value: T) -> DecodeResult[Value]:
        """Like ``encode_value``, but returns the ``Result`` instead of raising."""
        try:
            encoded = self.encoder(value)
        except DecodeException as e:
            return Err(e.error)
        except (TypeError, ValueError, OverflowError) as e:
            logger.debug("Encoder rejected %r: %s", value, e)
            return Err(Failure(message=f"Cannot encode value: {e}", value=value))
        res = self.decoder(encoded)
        if isinstance(res, Err):
            logger.debug("Encoded value %r does not decode; encoder and decoder disagree", encoded)
            return res
        return Ok(encoded)

    def encode_result_string(self, value: T) -> DecodeResult[str]:
        res = self.encode_result_value(value)
        if isinstance(res, Err):
            return res
        try:
            return Ok(serialize(res.value))
        except ValueError as e:
            logger.debug("Cannot serialize %r: %s", res.value, e)
            return Err(Failure(message=f"Cannot encode value: {e}", value=res.value))

    def union(self, other: Codec[T2]) -> Codec[T | T2]:
        return one_of(self, other)

    def nullable(self) -> Codec[T | None]:
        return self.union(null_)

    def array(self) -> Codec[list[T]]:
        return Codec(self.decoder.array(), encode.array(self.encoder))

    def dict(self) -> Codec[dict[str, T]]:
        return Codec(self.decoder.dict(), encode.dict_(self.encoder))

    def key_value_pairs(self) -> Codec[list[tuple[str, T]]]:
        return Codec(self.decoder.key_value_pairs(), encode.key_value_pairs(self.encoder))


string: Codec[str] = Codec(decode.string, encode.identity)
number: Codec[int | float] = Codec(decode.number, encode.identity)
integer: Codec[int] = Codec(decode.integer, encode.identity)
boolean: Codec[bool] = Codec(decode.boolean, encode.identity)
null_: Codec[None] = Codec(decode.null_, encode.identity)
value: Codec[Value] = Codec(decode.value, encode.identity)
date_epoch = Codec(decode.date_epoch, encode.date_epoch)
date_iso_string = Codec(decode.date_iso_string, encode.date_iso_string)


def _strictly_equal(a: Any, b: Any) -> bool:
    # True == 1 in Python, but not in JSON
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return len(a) == len(b) and all(map(_strictly_equal, a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(_strictly_equal(a[k], b[k]) for k in a)
    return a == b


def exactly(expected: Value) -> Codec[Any]:
    """
    A codec accepting only ``expected``, e.g. the tag of a tagged union.

        kind = exactly("circle")
        kind.decode_value("circle")  # "circle"
        kind.decode_value("square")  # raises DecodeException
    """
    return Codec(
        decode.value.fail_unless(
            lambda v: _strictly_equal(v, expected),
            f"Expected exactly {json.dumps(expected)}",
        ),
        encode.identity,
    )


def one_of(head: Codec[Any], *tail: Codec[Any]) -> Codec[Any]:
    """
    Try several codecs in order.

    Decoding is ``decode.one_of`` over the codecs' decoders. Encoding tries
    each codec's checked encode and returns the first that round-trips; if
    none does, the first codec's error is raised.
    """
    codecs = (head, *tail)
    for codec in codecs:
        if not isinstance(codec, Codec):
            raise TypeError(f"one_of() takes codecs, got {type(codec).__name__}")

    def encode_one_of(v: Any) -> Value:
        errors: list[DecodeError] = []
        for codec in codecs:
            res = codec.encode_result_value(v)
            if isinstance(res, Ok):
                return res.value
            errors.append(res.error)
        logger.debug("No alternative could encode %r (%d tried)", v, len(errors))
        raise DecodeException(errors[0])

    return Codec(decode.one_of(*(c.decoder for c in codecs)), encode_one_of)
