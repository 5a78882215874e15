"""
JSON values and the text boundary for jsoncodec.

``Value`` is an undecoded, non-validated JSON tree. Parsing and serializing
text are delegated to the standard library ``json`` module.
"""

from __future__ import annotations

import json
from logging import getLogger
from typing import Any, TypeAlias

from .context import is_strict_json

logger = getLogger(__name__)

Value: TypeAlias = (
    str | int | float | bool | None | list["Value"] | dict[str, "Value"]
)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def parse(text: str | bytes) -> Value:
    """
    Parse JSON text into a ``Value``.

    Raises:
        json.JSONDecodeError: If ``text`` is not well-formed JSON
        ValueError: In strict mode, if ``text`` contains NaN or Infinity
    """
    try:
        if is_strict_json():
            return json.loads(text, parse_constant=_reject_constant)
        return json.loads(text)
    except ValueError as e:
        logger.debug("Could not parse JSON text: %s", e)
        raise


def serialize(value: Value) -> str:
    """Serialize a ``Value`` as JSON text."""
    return json.dumps(value, allow_nan=not is_strict_json())
