"""
Core validator class for jsoncodec validation.

A ``Validator`` answers "does this value conform?" without producing a typed
payload. Its structural combinators follow the same path rules as
``Decoder``: the combinator that introduces a key or index prepends it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

from ..errors import PathSegment
from ..result import Err, Ok
from ..values import Value
from .types import ValidationResult, Violation

CheckFn = Callable[[Any], Violation | None]


@dataclass(frozen=True, slots=True)
class Validator:
    """
    Immutable validator node.

    Wraps a check function returning ``None`` for a conforming value, or the
    ``Violation`` explaining why it does not conform.
    """

    check: CheckFn

    def __call__(self, value: Value) -> ValidationResult:
        """
        Validate a value.

        Returns:
            Ok(value) if validation passes
            Err(violation) if validation fails
        """
        violation = self.check(value)
        return Ok(value) if violation is None else Err(violation)

    def is_valid(self, value: Value) -> bool:
        return self.check(value) is None

    def nullable(self) -> Validator:
        # Import here to avoid circular dependency
        from .validators import null_, one_of

        return one_of(self, null_)

    def array(self) -> Validator:
        """Every element must conform; the first failing index is reported."""
        check = self.check

        def check_array(value: Any) -> Violation | None:
            if not isinstance(value, (list, tuple)):
                return Violation(reason="expected_type", expected="array", value=value)
            for i, item in enumerate(value):
                violation = check(item)
                if violation is not None:
                    return violation.with_path_prefix((i,))
            return None

        return Validator(check_array)

    def field(self, key: str) -> Validator:
        check = self.check

        def check_field(value: Any) -> Violation | None:
            if not isinstance(value, dict):
                return Violation(reason="expected_type", expected="object", value=value)
            if key not in value:
                return Violation(reason="no_such_key", key=key, value=value)
            violation = check(value[key])
            return None if violation is None else violation.with_path_prefix((key,))

        return Validator(check_field)

    def index(self, i: int) -> Validator:
        check = self.check

        def check_index(value: Any) -> Violation | None:
            if not isinstance(value, (list, tuple)):
                return Violation(reason="expected_type", expected="array", value=value)
            if not 0 <= i < len(value):
                return Violation(reason="no_such_key", key=i, value=value)
            violation = check(value[i])
            return None if violation is None else violation.with_path_prefix((i,))

        return Validator(check_index)

    def get(self, key: PathSegment) -> Validator:
        if isinstance(key, int) and not isinstance(key, bool):
            return self.index(key)
        if isinstance(key, str):
            return self.field(key)
        raise TypeError(f"Path keys must be str or int, not {type(key).__name__}")

    def at(self, keys: Sequence[PathSegment]) -> Validator:
        """Follow ``keys`` into the value, then validate what is there."""
        keys = tuple(keys)
        hops = [_ALWAYS.get(key).check for key in keys]
        check = self.check

        def check_at(value: Any) -> Violation | None:
            for i, (key, hop) in enumerate(zip(keys, hops)):
                violation = hop(value)
                if violation is not None:
                    return violation.with_path_prefix(keys[:i])
                # hop guarantees the key is present
                value = value[key]
            violation = check(value)
            return None if violation is None else violation.with_path_prefix(keys)

        return Validator(check_at)


_ALWAYS = Validator(lambda _: None)
