"""
Predicates
==========

Pure functions from an Observation to a Verdict.

Presence predicates wait for something to show up and never fail: absence
is not proof that it cannot appear before the deadline. Absence predicates
wait for something to go away and treat a classified "not found" or
"no data" read as success.
"""

from typing import Any, Callable, Iterable, Mapping, Optional, Union

from .verdict import ErrorCode, Observation, Verdict


class Predicate:
    """Base predicate.

    Subclasses implement ``check`` for successful observations and may
    override ``on_error`` to act on classified read failures.
    """

    description = "condition"

    def evaluate(self, observation: Observation) -> Verdict:
        if not observation.ok:
            return self.on_error(observation)
        return self.check(observation.data)

    def check(self, data: Any) -> Verdict:
        raise NotImplementedError

    def on_error(self, observation: Observation) -> Verdict:
        return Verdict.pending(f"read failed: {observation.error}")

    def __repr__(self) -> str:
        return f"<{type(self).__name__}: {self.description}>"


class FunctionPredicate(Predicate):
    """Predicate built from a plain ``data -> Verdict | bool`` function."""

    def __init__(self, description: str, fn: Callable[[Any], Union[Verdict, bool]]):
        self.description = description
        self.fn = fn

    def check(self, data: Any) -> Verdict:
        result = self.fn(data)
        if isinstance(result, Verdict):
            return result
        if result:
            return Verdict.satisfied()
        return Verdict.pending(f"{self.description} not met yet")


def predicate(description: str, fn: Callable[[Any], Union[Verdict, bool]]) -> Predicate:
    """Wrap a function as a presence-style predicate (True -> satisfied)."""
    return FunctionPredicate(description, fn)


def _get(obj: Any, key: str, default: Any = None) -> Any:
    """Read a field from a dict or a kubernetes model object."""
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        return obj.get(key, default)
    return getattr(obj, key, default)


# ============================================================================
# Presence predicates
# ============================================================================

class ConditionPresent(Predicate):
    """Custom resource ``status.conditions`` has an entry of a given type."""

    def __init__(self, condition_type: str, status: Optional[str] = None):
        self.condition_type = condition_type
        self.status = status
        self.description = f"status condition {condition_type!r}"

    def check(self, data: Any) -> Verdict:
        conditions = _get(_get(data, "status"), "conditions") or []
        for condition in conditions:
            if _get(condition, "type") != self.condition_type:
                continue
            if self.status is None or _get(condition, "status") == self.status:
                return Verdict.satisfied()
            return Verdict.pending(
                f"condition {self.condition_type} has status {_get(condition, 'status')}"
            )
        seen = [_get(c, "type") for c in conditions]
        return Verdict.pending(f"condition {self.condition_type} not present (have {seen})")


class PodsRunning(Predicate):
    """Every pod in the list is Running (and, optionally, exactly ``count`` pods)."""

    def __init__(self, count: Optional[int] = None):
        self.count = count
        self.description = "pods running" if count is None else f"{count} pod(s) running"

    def check(self, pods: Any) -> Verdict:
        pods = list(pods or [])
        if not pods:
            return Verdict.pending("no pods found")
        if self.count is not None and len(pods) != self.count:
            return Verdict.pending(f"expected {self.count} pod(s), found {len(pods)}")
        not_running = [
            f"{_get(_get(p, 'metadata'), 'name')}={_get(_get(p, 'status'), 'phase')}"
            for p in pods
            if _get(_get(p, "status"), "phase") != "Running"
        ]
        if not_running:
            return Verdict.pending(f"pods not running: {', '.join(not_running)}")
        return Verdict.satisfied()


class ContainerArgPresent(Predicate):
    """A workload's pod template container is started with ``arg``."""

    def __init__(self, arg: str, container_index: int = 0):
        self.arg = arg
        self.container_index = container_index
        self.description = f"container arg {arg}"

    def check(self, workload: Any) -> Verdict:
        pod_spec = _get(_get(_get(workload, "spec"), "template"), "spec")
        containers = _get(pod_spec, "containers") or []
        if len(containers) <= self.container_index:
            return Verdict.pending(f"container #{self.container_index} not present")
        args = _get(containers[self.container_index], "args") or []
        if self.arg in args:
            return Verdict.satisfied()
        return Verdict.pending(f"argument {self.arg} not found in {list(args)}")


class ResourcesPresent(Predicate):
    """The observed names include every required name."""

    def __init__(self, names: Iterable[str]):
        self.names = tuple(names)
        self.description = f"resources {', '.join(self.names)}"

    def check(self, observed: Any) -> Verdict:
        missing = [n for n in self.names if n not in set(observed or [])]
        if missing:
            return Verdict.pending(f"missing: {', '.join(missing)}")
        return Verdict.satisfied()


class ReplicasEqual(Predicate):
    """Every workload in a ``name -> workload`` mapping runs ``expected`` ready replicas."""

    def __init__(self, expected: int):
        self.expected = expected
        self.description = f"replicas == {expected}"

    def check(self, workloads: Any) -> Verdict:
        if not workloads:
            return Verdict.pending("no workloads found")
        problems = []
        for name, workload in workloads.items():
            if workload is None:
                problems.append(f"{name} missing")
                continue
            desired = _get(_get(workload, "spec"), "replicas")
            ready = _get(_get(workload, "status"), "ready_replicas") or 0
            if desired != self.expected or ready != self.expected:
                problems.append(f"{name} {ready}/{desired}")
        if problems:
            return Verdict.pending(f"replicas not {self.expected}: {', '.join(problems)}")
        return Verdict.satisfied()


class HttpOk(Predicate):
    """HTTP status code observation equals ``expected``."""

    def __init__(self, expected: int = 200):
        self.expected = expected
        self.description = f"HTTP {expected}"

    def check(self, status_code: Any) -> Verdict:
        if status_code == self.expected:
            return Verdict.satisfied()
        return Verdict.pending(f"HTTP {status_code}")


class MetricPresent(Predicate):
    """A metrics query returned at least one series."""

    description = "metric series present"

    def check(self, series: Any) -> Verdict:
        if series:
            return Verdict.satisfied(f"{len(series)} series")
        return Verdict.pending("no series returned")


# ============================================================================
# Absence predicates
# ============================================================================

class ResourceAbsent(Predicate):
    """The resource read returns "not found" (or nothing at all)."""

    description = "resource absent"

    def check(self, data: Any) -> Verdict:
        if data is None:
            return Verdict.satisfied()
        name = _get(_get(data, "metadata"), "name")
        return Verdict.pending(f"{name or 'resource'} still exists")

    def on_error(self, observation: Observation) -> Verdict:
        if observation.code is ErrorCode.NOT_FOUND:
            return Verdict.satisfied(observation.error or "")
        return super().on_error(observation)


class PodsAbsent(Predicate):
    """The pod list is empty."""

    description = "no pods"

    def check(self, pods: Any) -> Verdict:
        pods = list(pods or [])
        if not pods:
            return Verdict.satisfied()
        names = [_get(_get(p, "metadata"), "name") for p in pods]
        return Verdict.pending(f"{len(pods)} pod(s) remaining: {', '.join(map(str, names))}")

    def on_error(self, observation: Observation) -> Verdict:
        # A deleted namespace has no pods.
        if observation.code is ErrorCode.NOT_FOUND:
            return Verdict.satisfied(observation.error or "")
        return super().on_error(observation)


class MetricAbsent(Predicate):
    """A metrics query confirms that no series match any more."""

    description = "metric series absent"

    def check(self, series: Any) -> Verdict:
        if not series:
            return Verdict.satisfied()
        return Verdict.pending(f"found {len(series)} series")

    def on_error(self, observation: Observation) -> Verdict:
        if observation.code is ErrorCode.NO_DATA:
            return Verdict.satisfied(observation.error or "")
        if observation.code is ErrorCode.INVALID_QUERY:
            return Verdict.failed(f"query rejected: {observation.error}")
        return super().on_error(observation)


__all__ = [
    "Predicate",
    "FunctionPredicate",
    "predicate",
    "ConditionPresent",
    "PodsRunning",
    "ContainerArgPresent",
    "ResourcesPresent",
    "ReplicasEqual",
    "HttpOk",
    "MetricPresent",
    "ResourceAbsent",
    "PodsAbsent",
    "MetricAbsent",
]
