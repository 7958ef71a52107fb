"""
Availability Phase
==================

Switches ``availabilityConfig`` from High to Basic and waits for the
observability components to run a single replica each.
"""

from ..harness import Mutation, ReplicasEqual, Scenario, Verification
from ..manifests import MCO_GVR, availability_patch, basic_mode_workloads
from .base import ScenarioPhase


class AvailabilityPhase(ScenarioPhase):
    name = "availability"
    title = "⚖️  AVAILABILITY: HIGH -> BASIC"

    def build(self) -> Scenario:
        cfg = self.config
        workloads = basic_mode_workloads(cfg.cr_name)
        return Scenario(self.name, [
            Mutation(
                "Set availabilityConfig=Basic",
                lambda: self.k8s.patch_cluster_custom_object(
                    MCO_GVR, cfg.cr_name, availability_patch("Basic")
                ),
            ),
            Verification(
                "MCO components run in Basic mode",
                lambda: self.k8s.get_workloads(cfg.mco_namespace, workloads),
                ReplicasEqual(1),
                cfg.poll_spec,
            ),
        ])
