"""
Addon Phase
===========

Disables metrics collection through the MCO addon spec, then waits for the
metrics collector to go away and for the managed cluster metric to stop
being reported.
"""

from ..harness import MetricAbsent, Mutation, PodsAbsent, Scenario, Verification
from ..manifests import METRICS_COLLECTOR_LABEL, MCO_GVR, disable_addon_metrics_patch
from .base import ScenarioPhase


class AddonPhase(ScenarioPhase):
    name = "addon"
    title = "🔌 DISABLE OBSERVABILITY ADDON"

    def build(self) -> Scenario:
        cfg = self.config
        return Scenario(self.name, [
            Mutation(
                "Disable metrics in observabilityAddonSpec",
                lambda: self.k8s.patch_cluster_custom_object(
                    MCO_GVR, cfg.cr_name, disable_addon_metrics_patch()
                ),
            ),
            Verification(
                "Metrics collector scales to 0",
                lambda: self.k8s.list_pods(cfg.addon_namespace, METRICS_COLLECTOR_LABEL),
                PodsAbsent(),
                cfg.long_poll_spec,
            ),
            Verification(
                "No metric data in Grafana",
                lambda: self.grafana().query(cfg.metric_query),
                MetricAbsent(),
                cfg.long_poll_spec,
            ),
        ])
