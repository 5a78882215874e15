"""
Context manager for decoding configuration (e.g., strict JSON).
"""

from contextlib import contextmanager
from contextvars import ContextVar

# Context variables for the JSON boundary and error messages
_strict_json: ContextVar[bool] = ContextVar("strict_json", default=False)
_error_indent: ContextVar[int | None] = ContextVar("error_indent", default=2)


def is_strict_json() -> bool:
    """Check if strict JSON parsing/serialization is currently enabled."""
    return _strict_json.get()


def error_indent() -> int | None:
    """Indentation used when a decode error is serialized into an exception."""
    return _error_indent.get()


@contextmanager
def decoding_context(*, strict_json: bool = False, error_indent: int | None = 2):
    """
    Context manager for decoding configuration.

    Args:
        strict_json: If True, ``decode_string`` rejects the non-standard
               ``NaN``/``Infinity``/``-Infinity`` literals, and ``encode_string``
               refuses to emit them.
        error_indent: Indentation of the JSON error carried by
               ``DecodeException`` messages. ``None`` renders a single line.

    Example:
        from jsoncodec import decoding_context, number

        number.decode_string("NaN")  # nan

        with decoding_context(strict_json=True):
            number.decode_string("NaN")  # ValueError!
    """
    strict_token = _strict_json.set(strict_json)
    indent_token = _error_indent.set(error_indent)
    try:
        yield
    finally:
        _error_indent.reset(indent_token)
        _strict_json.reset(strict_token)
