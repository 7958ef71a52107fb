"""
Eventual-consistency verification harness.
"""

from .poller import Poller
from .predicates import (
    ConditionPresent,
    ContainerArgPresent,
    FunctionPredicate,
    HttpOk,
    MetricAbsent,
    MetricPresent,
    PodsAbsent,
    PodsRunning,
    Predicate,
    ReplicasEqual,
    ResourceAbsent,
    ResourcesPresent,
    predicate,
)
from .reporter import OutcomeReporter, VerificationFailed, assert_outcome, serialize_observation
from .scenario import (
    Mutation,
    MutationError,
    Scenario,
    ScenarioResult,
    ScenarioRunner,
    StepResult,
    Verification,
)
from .verdict import (
    DEADLINE_EXCEEDED,
    ErrorCode,
    Observation,
    ObservationError,
    Outcome,
    PollSpec,
    Status,
    Verdict,
)
