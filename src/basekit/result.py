"""Outcome of a construction attempt: a value or the failure that stopped it."""

from __future__ import annotations

import dataclasses
from typing import Any

import basekit.errors


@dataclasses.dataclass(frozen=True)
class Outcome:
    value: Any = None
    failure: basekit.errors.ObjectError | None = None

    @classmethod
    def success(cls, value: Any) -> Outcome:
        return cls(value=value)

    @classmethod
    def fail(cls, error: basekit.errors.ObjectError) -> Outcome:
        return cls(failure=error)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> Any:
        """Return the value, or raise the stored failure."""
        if self.failure is not None:
            raise self.failure
        return self.value
