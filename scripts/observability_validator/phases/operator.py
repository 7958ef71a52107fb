"""
Operator Phase
==============

Verifies the observability operator is installed: its pod is running and
the custom resource definitions it owns are registered.
"""

from ..harness import PodsRunning, ResourcesPresent, Scenario, Verification
from ..manifests import REQUIRED_CRDS
from .base import ScenarioPhase


class OperatorPhase(ScenarioPhase):
    """Check the operator deployment and its CRDs."""

    name = "operator"
    title = "🔍 OPERATOR"

    def build(self) -> Scenario:
        cfg = self.config
        return Scenario(self.name, [
            Verification(
                "MCO operator pod is running",
                lambda: self.k8s.list_pods(cfg.operator_namespace, cfg.operator_label),
                PodsRunning(count=1),
                cfg.short_poll_spec,
            ),
            Verification(
                "Required CRDs are created",
                self.k8s.list_crd_names,
                ResourcesPresent(REQUIRED_CRDS),
                cfg.short_poll_spec,
            ),
        ])
