"""
Type definitions for jsoncodec validation.

A ``Violation`` says why a value does not conform, and where.
"""

from __future__ import annotations

from typing import Any, Literal, Sequence

from pydantic import BaseModel, ConfigDict

from ..errors import Path, PathSegment
from ..result import Result
from ..values import Value

Reason = Literal["expected_type", "no_such_key", "one_of", "all_of", "failed_check"]


class Violation(BaseModel):
    """Immutable description of a non-conforming value."""

    model_config = ConfigDict(frozen=True)

    reason: Reason
    value: Any = None
    path: Path = ()
    expected: str | None = None
    key: PathSegment | None = None
    errors: tuple[Violation, ...] = ()

    def with_path_prefix(self, segments: Sequence[PathSegment]) -> Violation:
        if not segments:
            return self
        return self.model_copy(update={"path": (*segments, *self.path)})


Violation.model_rebuild()

# Type aliases
ValidationResult = Result[Value, Violation]
