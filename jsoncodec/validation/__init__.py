"""
jsoncodec validation - boolean-only conformance checks for JSON values.

Usage:
    from jsoncodec.validation import combine, number, string

    point = combine({"x": number, "y": number, "label": string.nullable()}, auto=True)

    point.is_valid({"x": 1, "y": 2, "label": None})  # True
    point({"x": 1, "y": "2", "label": None})          # Err(Violation(...))
"""

from .core import Validator
from .types import ValidationResult, Violation
from .validators import (
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

__all__ = [
    # Types
    "Violation",
    "ValidationResult",
    # Core
    "Validator",
    # Validators
    "string",
    "number",
    "integer",
    "boolean",
    "null_",
    "always",
    # Combinators
    "one_of",
    "all_of",
    "fail_unless",
    "combine",
]
