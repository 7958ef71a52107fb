"""
Install Phase
=============

Bootstraps the observability namespace and secrets, creates the
MultiClusterObservability instance and waits for it to report Ready.
"""

from ..harness import ConditionPresent, Mutation, Scenario, Verification
from ..manifests import MCO_GVR, mco_instance, object_storage_config
from .base import ScenarioPhase


class InstallPhase(ScenarioPhase):
    """Deploy an MCO instance and wait until all components are running."""

    name = "install"
    title = "📦 INSTALL"

    def create_object_storage_secret(self):
        cfg = self.config
        self.k8s.create_secret(cfg.mco_namespace, cfg.object_storage_secret, {
            cfg.object_storage_key: object_storage_config(
                cfg.bucket, cfg.s3_endpoint, cfg.s3_access_key, cfg.s3_secret_key
            ),
        })

    def create_instance(self):
        cfg = self.config
        self.k8s.apply_cluster_custom_object(MCO_GVR, mco_instance(
            cfg.cr_name,
            pull_secret=cfg.pull_secret_name,
            storage_secret=cfg.object_storage_secret,
            storage_key=cfg.object_storage_key,
        ))

    def build(self) -> Scenario:
        cfg = self.config
        return Scenario(self.name, [
            Mutation(f"Create namespace {cfg.mco_namespace}",
                     lambda: self.k8s.create_namespace(cfg.mco_namespace)),
            Mutation(f"Copy pull secret {cfg.pull_secret_name}",
                     lambda: self.k8s.copy_secret(cfg.pull_secret_name,
                                                  cfg.operator_namespace, cfg.mco_namespace)),
            Mutation(f"Create object storage secret {cfg.object_storage_secret}",
                     self.create_object_storage_secret),
            Mutation(f"Create MCO instance {cfg.cr_name}", self.create_instance),
            Verification(
                "MCO reports Ready",
                lambda: self.k8s.get_cluster_custom_object(MCO_GVR, cfg.cr_name),
                ConditionPresent("Ready"),
                cfg.poll_spec,
            ),
        ])
