"""
Harness Data Model
==================

Verdicts, observations, poll specs and outcomes exchanged between readers,
predicates, the poller and the reporter.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


DEADLINE_EXCEEDED = "deadline exceeded"


class Status(Enum):
    """Tri-state result of evaluating a predicate."""

    SATISFIED = "satisfied"
    PENDING = "pending"
    FAILED = "failed"


@dataclass(frozen=True)
class Verdict:
    """Predicate verdict with an optional human-readable reason."""

    status: Status
    reason: str = ""

    @classmethod
    def satisfied(cls, reason: str = "") -> "Verdict":
        return cls(Status.SATISFIED, reason)

    @classmethod
    def pending(cls, reason: str = "") -> "Verdict":
        return cls(Status.PENDING, reason)

    @classmethod
    def failed(cls, reason: str) -> "Verdict":
        return cls(Status.FAILED, reason)

    @property
    def is_terminal(self) -> bool:
        return self.status is not Status.PENDING

    def __str__(self) -> str:
        if self.reason:
            return f"{self.status.value}: {self.reason}"
        return self.status.value


class ErrorCode(Enum):
    """Read failures a reader can classify for predicates to act on.

    Unclassified reader exceptions are always treated as transient.
    """

    NOT_FOUND = "not_found"
    NO_DATA = "no_data"
    UNAUTHORIZED = "unauthorized"
    INVALID_QUERY = "invalid_query"


class ObservationError(Exception):
    """Raised by a reader for a read failure it recognises."""

    def __init__(self, code: ErrorCode, message: str = ""):
        super().__init__(message or code.value)
        self.code = code


@dataclass(frozen=True)
class Observation:
    """State fetched by one polling cycle.

    Either ``data`` holds what the reader returned, or ``error`` holds the
    read failure message (and ``code`` its classification, if any).
    """

    data: Any = None
    error: Optional[str] = None
    code: Optional[ErrorCode] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def from_error(cls, exc: Exception) -> "Observation":
        code = exc.code if isinstance(exc, ObservationError) else None
        message = str(exc) or type(exc).__name__
        return cls(error=message, code=code)


@dataclass(frozen=True)
class PollSpec:
    """Polling cadence and total time budget, in seconds.

    ``deadline`` bounds total elapsed wall-clock time, not the number of
    attempts. An ``interval`` larger than ``deadline`` allows one attempt.
    """

    interval: float
    deadline: float

    def __post_init__(self):
        if self.interval <= 0:
            raise ValueError(f"interval must be positive, got {self.interval}")
        if self.deadline <= 0:
            raise ValueError(f"deadline must be positive, got {self.deadline}")


@dataclass(frozen=True)
class Outcome:
    """Terminal result of one poll.

    A timed-out outcome fails with exactly DEADLINE_EXCEEDED; the reason of
    the last pending verdict is kept in ``last_reason``.
    """

    verdict: Verdict
    last_observation: Optional[Observation]
    attempts: int
    elapsed: float
    timed_out: bool = False
    last_reason: str = ""

    @property
    def passed(self) -> bool:
        return self.verdict.status is Status.SATISFIED

    @property
    def reason(self) -> str:
        return self.verdict.reason

    @classmethod
    def deadline_exceeded(cls, last_verdict: Verdict, last_observation: Optional[Observation],
                          attempts: int, elapsed: float) -> "Outcome":
        return cls(
            verdict=Verdict.failed(DEADLINE_EXCEEDED),
            last_observation=last_observation,
            attempts=attempts,
            elapsed=elapsed,
            timed_out=True,
            last_reason=last_verdict.reason,
        )
