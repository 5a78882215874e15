"""
Turn Python values into JSON values.

``json.dumps`` already understands the primitive types, so most encoders are
the identity. Only derived types (dates) and containers need real work.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, Mapping, TypeVar

from .values import Value

T = TypeVar("T")

Encoder = Callable[[T], Value]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def identity(v: T) -> T:
    return v


def _as_utc(d: datetime) -> datetime:
    if not isinstance(d, datetime):
        raise TypeError(f"Expected a datetime, got {type(d).__name__}")
    if d.tzinfo is None:
        return d.replace(tzinfo=timezone.utc)
    try:
        return d.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError(f"{d.isoformat()} has no UTC representation") from e


def date_epoch(d: datetime) -> int:
    """
    Encode a datetime as whole milliseconds since the Unix epoch.

        date_epoch(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc))  # 1000

    Naive datetimes are taken to be UTC.
    """
    return (_as_utc(d) - _EPOCH) // timedelta(milliseconds=1)


def date_iso_string(d: datetime) -> str:
    """Encode a datetime as a UTC ISO-8601 string, e.g. ``2020-01-02T03:04:05.006Z``."""
    text = _as_utc(d).isoformat(timespec="milliseconds")
    return text.removesuffix("+00:00") + "Z"


def array(encoder: Encoder[T]) -> Encoder[Iterable[T]]:
    def encode_array(items: Iterable[T]) -> Value:
        return [encoder(item) for item in items]

    return encode_array


def dict_(encoder: Encoder[T]) -> Encoder[Mapping[str, T]]:
    def encode_dict(items: Mapping[str, T]) -> Value:
        return {key: encoder(item) for key, item in items.items()}

    return encode_dict


def key_value_pairs(encoder: Encoder[T]) -> Encoder[Iterable[tuple[str, T]]]:
    """Encode ``[(key, value), ...]`` as a JSON object, keeping pair order."""

    def encode_pairs(pairs: Iterable[tuple[str, T]]) -> Value:
        return {key: encoder(item) for key, item in pairs}

    return encode_pairs

