"""
Retention Phase
===============

Changes ``retentionResolutionRaw`` on the MCO instance and waits for the
Thanos compactor to be restarted with the new flag.
"""

from ..harness import ContainerArgPresent, Mutation, Scenario, Verification
from ..manifests import (
    MCO_GVR,
    RETENTION_RESOLUTION_RAW,
    compact_statefulset_name,
    retention_patch,
)
from .base import ScenarioPhase


class RetentionPhase(ScenarioPhase):
    name = "retention"
    title = "🗄️  RETENTION"

    def build(self) -> Scenario:
        cfg = self.config
        compact = compact_statefulset_name(cfg.cr_name)
        return Scenario(self.name, [
            Mutation(
                f"Set retentionResolutionRaw={RETENTION_RESOLUTION_RAW}",
                lambda: self.k8s.patch_cluster_custom_object(MCO_GVR, cfg.cr_name, retention_patch()),
            ),
            Verification(
                f"{compact} runs with the new retention",
                lambda: self.k8s.get_statefulset(cfg.mco_namespace, compact),
                ContainerArgPresent(f"--retention.resolution-raw={RETENTION_RESOLUTION_RAW}"),
                cfg.poll_spec,
            ),
        ])
