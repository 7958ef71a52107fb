"""
Outcome Reporter
================

Turns an Outcome into a pass/fail signal plus a diagnostic trace of the
last observed state.
"""

from typing import Any, Optional

import yaml
from kubernetes.client import ApiClient

from ..logging import log_error, log_info, log_success
from .verdict import Observation, Outcome

MAX_OBSERVATION_CHARS = 4000


def serialize_observation(observation: Optional[Observation],
                          limit: int = MAX_OBSERVATION_CHARS) -> str:
    """Render an observation as YAML for humans.

    Kubernetes model objects are converted to their API field names first.
    """
    if observation is None:
        return "<no observation>"
    if not observation.ok:
        code = f" [{observation.code.value}]" if observation.code else ""
        return f"<read error{code}: {observation.error}>"

    try:
        data = ApiClient().sanitize_for_serialization(observation.data)
        text = yaml.safe_dump(data, default_flow_style=False, sort_keys=True).rstrip()
    except (AttributeError, TypeError, yaml.YAMLError):
        text = repr(observation.data)

    if len(text) > limit:
        text = text[:limit] + f"\n... ({len(text) - limit} more characters truncated)"
    return text


def describe_failure(outcome: Outcome) -> str:
    """One-line classification of a failed outcome."""
    if outcome.timed_out:
        return "never converged"
    return "converged to an unexpected state"


class VerificationFailed(AssertionError):
    """Raised when a verification outcome did not pass."""

    def __init__(self, description: str, outcome: Outcome):
        self.description = description
        self.outcome = outcome
        super().__init__(format_outcome(description, outcome))


def format_outcome(description: str, outcome: Outcome) -> str:
    if outcome.passed:
        return (f"{description}: satisfied after {outcome.attempts} attempt(s) "
                f"in {outcome.elapsed:.1f}s")
    lines = [
        f"{description}: {outcome.reason} ({describe_failure(outcome)})",
        f"  attempts: {outcome.attempts}",
        f"  elapsed:  {outcome.elapsed:.1f}s",
    ]
    if outcome.last_reason:
        lines.append(f"  last state: {outcome.last_reason}")
    lines.append("  last observation:")
    lines.extend(f"    {line}" for line in serialize_observation(outcome.last_observation).splitlines())
    return "\n".join(lines)


class OutcomeReporter:
    """Logs outcomes for CI consumption."""

    def report(self, outcome: Outcome, description: str = "verification") -> bool:
        if outcome.passed:
            log_success(f"  ✅ {format_outcome(description, outcome)}")
            return True

        log_error(f"  ❌ {format_outcome(description, outcome)}")
        return False

    def report_mutation(self, description: str, error: Optional[BaseException] = None) -> bool:
        if error is None:
            log_info(f"  ✓ {description}")
            return True
        log_error(f"  ❌ {description}: mutation failed: {error}")
        return False


def assert_outcome(outcome: Outcome, description: str = "verification") -> Outcome:
    """Raise VerificationFailed unless the outcome passed."""
    if not outcome.passed:
        raise VerificationFailed(description, outcome)
    return outcome
