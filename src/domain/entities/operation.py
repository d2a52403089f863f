"""Result types for facade operations that talk to the remote service."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class StepStatus(StrEnum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class StepOutcome:
    """Outcome of one remote call inside a multi-step operation."""

    name: str
    status: StepStatus
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {"name": self.name, "status": self.status.value, "error": self.error}


@dataclass
class OperationResult(Generic[T]):
    """Uniform ``{data, error}`` result.

    ``steps`` lists every planned step in order, so callers can tell which
    part of a non-transactional sequence was applied.
    """

    data: T | None = None
    error: str | None = None
    steps: list[StepOutcome] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def step(self, name: str) -> StepOutcome | None:
        return next((s for s in self.steps if s.name == name), None)
