"""
Decode error model for jsoncodec.

A ``DecodeError`` is one of four immutable shapes, each carrying a ``path``
(root-to-leaf keys and indexes). Leaf errors are created with an empty path;
every structural combinator that introduces a key or index prepends its own
segment(s) via ``with_path_prefix``, which always returns a new error.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .context import error_indent

PathSegment = Union[str, int]
Path = tuple[PathSegment, ...]


class _DecodeErrorBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Path = ()

    def with_path_prefix(self, segments: Sequence[PathSegment]) -> DecodeError:
        """Return a copy of this error with ``segments`` prepended to its path."""
        if not segments:
            return self  # type: ignore[return-value]
        return self.model_copy(update={"path": (*segments, *self.path)})


class FieldError(_DecodeErrorBase):
    """Decoding the value stored under ``field`` of an object failed."""

    decode_error: Literal["field"] = "field"
    field: str
    error: DecodeError


class ElementError(_DecodeErrorBase):
    """Decoding the array element at ``index`` failed."""

    decode_error: Literal["index"] = "index"
    index: int
    error: DecodeError


class OneOfError(_DecodeErrorBase):
    """Every alternative failed; ``errors`` are in the order they were tried."""

    decode_error: Literal["one_of"] = "one_of"
    errors: tuple[DecodeError, ...]


class Failure(_DecodeErrorBase):
    """Leaf-level mismatch, carrying the offending raw value."""

    decode_error: Literal["failure"] = "failure"
    message: str
    value: Any = None


DecodeError = Annotated[
    Union[FieldError, ElementError, OneOfError, Failure],
    Field(discriminator="decode_error"),
]

for _model in (FieldError, ElementError, OneOfError, Failure):
    _model.model_rebuild()

_decode_error_adapter: TypeAdapter[DecodeError] = TypeAdapter(DecodeError)


def expecting(type_: str, value: Any) -> Failure:
    return Failure(message=f"Expecting {type_}", value=value)


def missing(key: PathSegment, value: Any) -> Failure:
    return Failure(message=f"Missing key: {json.dumps(key)}", value=value)


def error_to_json(error: DecodeError, indent: int | None = None) -> str:
    """
    Serialize a decode error as JSON text.

    Raw values that are not JSON-serializable fall back to their ``repr``.
    """
    return json.dumps(error.model_dump(), indent=indent, default=repr)


def parse_error(text: str | bytes) -> DecodeError:
    """Rebuild a structured decode error from ``error_to_json`` output."""
    return _decode_error_adapter.validate_json(text)


def render_error(error: DecodeError) -> str:
    """
    Render a decode error as indented, human-readable text.

    Example:
        at ["user", "age"]: Expecting a NUMBER, got "forty"
    """
    return "\n".join(_render_lines(error, 0))


def _render_lines(error: DecodeError, depth: int) -> list[str]:
    pad = "  " * depth
    where = f"at {json.dumps(list(error.path))}: " if error.path else ""

    match error:
        case Failure(message=message, value=value):
            return [f"{pad}{where}{message}, got {_short_repr(value)}"]
        case FieldError(field=key, error=inner):
            return [
                f"{pad}{where}in field {json.dumps(key)}:",
                *_render_lines(inner, depth + 1),
            ]
        case ElementError(index=i, error=inner):
            return [f"{pad}{where}in element {i}:", *_render_lines(inner, depth + 1)]
        case OneOfError(errors=errors):
            lines = [f"{pad}{where}{len(errors)} errors:"]
            for inner in errors:
                lines.extend(_render_lines(inner, depth + 1))
            return lines

    raise TypeError(f"Not a decode error: {type(error).__name__}")


def _short_repr(value: Any) -> str:
    try:
        text = json.dumps(value)
    except (TypeError, ValueError):
        text = repr(value)
    return text if len(text) <= 60 else f"{text[:57]}..."


class DecodeException(ValueError):
    """
    Raised by the convenience entry points when decoding fails.

    The message is the complete structured error serialized as JSON, so no
    information is lost; the error itself is also kept on ``.error``.
    """

    def __init__(self, error: DecodeError):
        self.error = error
        super().__init__(error_to_json(error, indent=error_indent()))
