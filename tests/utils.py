"""
Utility functions for observability validator tests.

These are helper functions that can be imported by test modules.
"""

from typing import Iterable, List, Optional

from kubernetes import client
from kubernetes.client.exceptions import ApiException


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedReader:
    """Reader returning (or raising) a fixed sequence of results.

    The last item repeats once the script is exhausted. Each call can
    optionally advance a FakeClock to simulate read latency.
    """

    def __init__(self, script: Iterable, clock: Optional[FakeClock] = None,
                 latency: float = 0.0):
        self.script = list(script)
        self.clock = clock
        self.latency = latency
        self.calls = 0

    def __call__(self):
        item = self.script[min(self.calls, len(self.script) - 1)]
        self.calls += 1
        if self.clock is not None:
            self.clock.advance(self.latency)
        if isinstance(item, BaseException):
            raise item
        return item


def make_pod(name: str, phase: str = "Running") -> client.V1Pod:
    """Build a pod model in the given phase."""
    return client.V1Pod(
        metadata=client.V1ObjectMeta(name=name),
        status=client.V1PodStatus(phase=phase),
    )


def make_statefulset(name: str, args: List[str], replicas: int = 1,
                     ready_replicas: Optional[int] = None) -> client.V1StatefulSet:
    """Build a statefulset model whose first container runs with ``args``."""
    return client.V1StatefulSet(
        metadata=client.V1ObjectMeta(name=name),
        spec=client.V1StatefulSetSpec(
            replicas=replicas,
            selector=client.V1LabelSelector(match_labels={"app": name}),
            service_name=name,
            template=client.V1PodTemplateSpec(
                spec=client.V1PodSpec(containers=[
                    client.V1Container(name=name, image="thanos", args=args),
                ]),
            ),
        ),
        status=client.V1StatefulSetStatus(
            replicas=replicas,
            ready_replicas=replicas if ready_replicas is None else ready_replicas,
        ),
    )


def make_deployment(name: str, replicas: int, ready_replicas: Optional[int] = None) -> client.V1Deployment:
    return client.V1Deployment(
        metadata=client.V1ObjectMeta(name=name),
        spec=client.V1DeploymentSpec(
            replicas=replicas,
            selector=client.V1LabelSelector(match_labels={"app": name}),
            template=client.V1PodTemplateSpec(
                spec=client.V1PodSpec(containers=[client.V1Container(name=name)]),
            ),
        ),
        status=client.V1DeploymentStatus(
            ready_replicas=replicas if ready_replicas is None else ready_replicas,
        ),
    )


def mco_with_conditions(*types: str, status: str = "True") -> dict:
    """MultiClusterObservability object with the given status condition types."""
    return {
        "metadata": {"name": "observability"},
        "status": {"conditions": [{"type": t, "status": status} for t in types]},
    }


def api_exception(status: int, reason: str = "") -> ApiException:
    return ApiException(status=status, reason=reason or f"HTTP {status}")
