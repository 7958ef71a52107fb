"""
Cleanup Phase
=============

Uninstalls the MCO instance and waits for everything it created to be
removed, then deletes the observability namespace.
"""

from ..harness import Mutation, PodsAbsent, ResourceAbsent, Scenario, Verification
from ..manifests import MCO_ADDON_GVR, MCO_GVR, addon_name
from .base import ScenarioPhase


class CleanupPhase(ScenarioPhase):
    name = "cleanup"
    title = "🧹 CLEANUP"

    def build(self) -> Scenario:
        cfg = self.config
        addon = addon_name(cfg.cr_name)
        return Scenario(self.name, [
            Mutation(
                f"Delete MCO instance {cfg.cr_name}",
                lambda: self.k8s.delete_cluster_custom_object(MCO_GVR, cfg.cr_name),
            ),
            Verification(
                f"All pods in {cfg.mco_namespace} are deleted",
                lambda: self.k8s.list_pods(cfg.mco_namespace),
                PodsAbsent(),
                cfg.poll_spec,
            ),
            Verification(
                f"Addon {addon} is deleted",
                lambda: self.k8s.get_namespaced_custom_object(
                    MCO_ADDON_GVR, cfg.addon_cluster_namespace, addon
                ),
                ResourceAbsent(),
                cfg.poll_spec,
            ),
            Verification(
                f"All pods in {cfg.addon_namespace} are deleted",
                lambda: self.k8s.list_pods(cfg.addon_namespace),
                PodsAbsent(),
                cfg.poll_spec,
            ),
            Mutation(
                f"Delete namespace {cfg.mco_namespace}",
                lambda: self.k8s.delete_namespace(cfg.mco_namespace),
            ),
            Verification(
                f"Namespace {cfg.mco_namespace} is gone",
                lambda: self.k8s.get_namespace(cfg.mco_namespace),
                ResourceAbsent(),
                cfg.poll_spec,
            ),
        ])
