"""
Built-in validators for jsoncodec validation.

Provides primitive validators and the combinators that build new ones.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from .core import _ALWAYS, Validator
from .types import Violation


def _is_type(expected: str, pred: Callable[[Any], bool]) -> Validator:
    def check(value: Any) -> Violation | None:
        if pred(value):
            return None
        return Violation(reason="expected_type", expected=expected, value=value)

    return Validator(check)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


string = _is_type("string", lambda v: isinstance(v, str))
number = _is_type("number", _is_number)
integer = _is_type("integer", lambda v: isinstance(v, int) and not isinstance(v, bool))
boolean = _is_type("boolean", lambda v: isinstance(v, bool))
null_ = _is_type("null", lambda v: v is None)
always = _ALWAYS


def fail_unless(
    pred: Callable[[Any], bool], expected: str | None = None
) -> Validator:
    """
    Create validator from arbitrary predicate function.

    Usage:
        fail_unless(lambda x: x > 0, "positive number")
    """

    def check(value: Any) -> Violation | None:
        if pred(value):
            return None
        return Violation(reason="failed_check", expected=expected, value=value)

    return Validator(check)


def one_of(head: Validator, *tail: Validator) -> Validator:
    """At least one validator must pass; otherwise every violation is kept."""
    checks = [v.check for v in (head, *tail)]

    def check(value: Any) -> Violation | None:
        violations = []
        for inner in checks:
            violation = inner(value)
            if violation is None:
                return None
            violations.append(violation)
        return Violation(reason="one_of", errors=tuple(violations), value=value)

    return Validator(check)


def all_of(head: Validator, *tail: Validator) -> Validator:
    """Every validator must pass; all violations are reported together."""
    checks = [v.check for v in (head, *tail)]

    def check(value: Any) -> Violation | None:
        violations = tuple(
            violation
            for violation in (inner(value) for inner in checks)
            if violation is not None
        )
        if violations:
            return Violation(reason="all_of", errors=violations, value=value)
        return None

    return Validator(check)


def combine(
    validators: Mapping[str, Validator] | Sequence[Validator], auto: bool = False
) -> Validator:
    """
    Validate several independent concerns of the same value.

    With a mapping and ``auto=True``, each validator checks the field of the
    same name (``{"a": string}`` means ``{"a": string.field("a")}``).

    Usage:
        combine({"name": string, "tags": string.array()}, auto=True)
        combine([number.field("x"), number.field("y")])
    """
    if isinstance(validators, Mapping):
        parts = [v.field(k) if auto else v for k, v in validators.items()]
    elif isinstance(validators, (list, tuple)):
        if auto:
            raise ValueError("auto=True needs a mapping of field names to validators")
        parts = list(validators)
    else:
        raise TypeError(
            f"combine() takes a mapping or a sequence of validators, got {type(validators).__name__}"
        )
    if not parts:
        return always
    return all_of(*parts)
