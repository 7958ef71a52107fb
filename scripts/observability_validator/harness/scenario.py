"""
Scenario Driver
===============

Runs an ordered sequence of mutation and verification steps. A failed step
aborts the rest of the scenario; nothing is rolled back.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from ..logging import log_info
from .poller import Poller, Reader
from .predicates import Predicate
from .reporter import OutcomeReporter, describe_failure
from .verdict import Outcome, PollSpec


class MutationError(Exception):
    """A write step failed. Fatal to the scenario."""

    def __init__(self, description: str, cause: BaseException):
        super().__init__(f"{description}: {cause}")
        self.description = description
        self.cause = cause


@dataclass
class Mutation:
    """A write against the cluster. Run once, never retried."""

    description: str
    action: Callable[[], Any]


@dataclass
class Verification:
    """Poll ``reader`` until ``predicate`` holds, within ``spec``."""

    description: str
    reader: Reader
    predicate: Predicate
    spec: PollSpec


Step = Union[Mutation, Verification]


@dataclass
class Scenario:
    name: str
    steps: Sequence[Step] = field(default_factory=list)


@dataclass
class StepResult:
    description: str
    kind: str
    passed: bool
    outcome: Optional[Outcome] = None
    error: Optional[MutationError] = None

    @property
    def failure_kind(self) -> Optional[str]:
        """'mutation', 'timeout', 'predicate' or None if the step passed."""
        if self.passed:
            return None
        if self.error is not None:
            return "mutation"
        return "timeout" if self.outcome.timed_out else "predicate"

    def as_dict(self) -> Dict[str, Any]:
        result = {
            'description': self.description,
            'kind': self.kind,
            'passed': self.passed,
        }
        if self.outcome is not None:
            result['attempts'] = self.outcome.attempts
            result['elapsed'] = round(self.outcome.elapsed, 2)
            if not self.passed:
                result['reason'] = self.outcome.reason
                result['failure'] = describe_failure(self.outcome)
        if self.error is not None:
            result['error'] = str(self.error)
        return result


@dataclass
class ScenarioResult:
    name: str
    steps: List[StepResult] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def passed(self) -> bool:
        return all(s.passed for s in self.steps)

    @property
    def failed_step(self) -> Optional[StepResult]:
        return next((s for s in self.steps if not s.passed), None)

    def as_dict(self) -> Dict[str, Any]:
        failed = self.failed_step
        result = {
            'passed': self.passed,
            'skipped': False,
            'steps': [s.as_dict() for s in self.steps],
            'elapsed': round(self.elapsed, 2),
        }
        if failed is not None:
            result['failed_step'] = failed.description
            result['failure_kind'] = failed.failure_kind
        return result


class ScenarioRunner:
    """Executes scenarios strictly in order."""

    def __init__(self, poller: Optional[Poller] = None,
                 reporter: Optional[OutcomeReporter] = None):
        self.poller = poller or Poller()
        self.reporter = reporter or OutcomeReporter()

    def run_mutation(self, step: Mutation) -> StepResult:
        log_info(f"  ▶ {step.description}")
        try:
            step.action()
        except Exception as e:
            error = MutationError(step.description, e)
            self.reporter.report_mutation(step.description, e)
            return StepResult(step.description, "mutation", False, error=error)
        self.reporter.report_mutation(step.description)
        return StepResult(step.description, "mutation", True)

    def run_verification(self, step: Verification) -> StepResult:
        log_info(f"  ⏳ {step.description} "
                 f"(interval {step.spec.interval:g}s, deadline {step.spec.deadline:g}s)")
        outcome = self.poller.poll(step.reader, step.predicate, step.spec)
        passed = self.reporter.report(outcome, step.description)
        return StepResult(step.description, "verification", passed, outcome=outcome)

    def run(self, scenario: Scenario) -> ScenarioResult:
        start = time.time()
        result = ScenarioResult(scenario.name)

        for step in scenario.steps:
            if isinstance(step, Mutation):
                step_result = self.run_mutation(step)
            else:
                step_result = self.run_verification(step)
            result.steps.append(step_result)
            if not step_result.passed:
                break

        result.elapsed = time.time() - start
        return result
