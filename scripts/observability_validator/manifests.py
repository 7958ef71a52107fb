"""
Observability Manifests
=======================

Resource identifiers, custom resource bodies and patches used by the
validation phases.
"""

from typing import Dict, List, NamedTuple

import yaml


class GroupVersionResource(NamedTuple):
    group: str
    version: str
    plural: str


MCO_GVR = GroupVersionResource(
    "observability.open-cluster-management.io", "v1beta1", "multiclusterobservabilities"
)
MCO_ADDON_GVR = GroupVersionResource(
    "observability.open-cluster-management.io", "v1beta1", "observabilityaddons"
)
ROUTE_GVR = GroupVersionResource("route.openshift.io", "v1", "routes")

REQUIRED_CRDS = [
    "multiclusterobservabilities.observability.open-cluster-management.io",
    "observatoria.core.observatorium.io",
    "observabilityaddons.observability.open-cluster-management.io",
]

METRICS_COLLECTOR_LABEL = "component=metrics-collector"
RETENTION_RESOLUTION_RAW = "3d"

# Workloads scaled to a single replica when availabilityConfig is Basic
BASIC_MODE_COMPONENTS = [
    "observatorium-observatorium-api",
    "observatorium-thanos-query",
    "observatorium-thanos-query-frontend",
    "observatorium-thanos-receive-controller",
    "observatorium-thanos-rule",
    "observatorium-thanos-store-memcached",
    "grafana",
    "alertmanager",
]


def mco_instance(name: str, pull_secret: str, storage_secret: str,
                 storage_key: str, availability: str = "High") -> Dict:
    """MultiClusterObservability custom resource body."""
    return {
        "apiVersion": f"{MCO_GVR.group}/{MCO_GVR.version}",
        "kind": "MultiClusterObservability",
        "metadata": {"name": name},
        "spec": {
            "availabilityConfig": availability,
            "imagePullPolicy": "Always",
            "imagePullSecret": pull_secret,
            "observabilityAddonSpec": {},
            "storageConfigObject": {
                "metricObjectStorage": {
                    "name": storage_secret,
                    "key": storage_key,
                },
                "statefulSetSize": "1Gi",
            },
        },
    }


def object_storage_config(bucket: str, endpoint: str,
                          access_key: str, secret_key: str) -> str:
    """Thanos object storage configuration (the secret's ``thanos.yaml``)."""
    return yaml.safe_dump({
        "type": "s3",
        "config": {
            "bucket": bucket,
            "endpoint": endpoint,
            "insecure": False,
            "access_key": access_key,
            "secret_key": secret_key,
        },
    }, default_flow_style=False, sort_keys=False)


def retention_patch(value: str = RETENTION_RESOLUTION_RAW) -> Dict:
    return {"spec": {"retentionResolutionRaw": value}}


def disable_addon_metrics_patch() -> Dict:
    return {"spec": {"observabilityAddonSpec": {"enableMetrics": False}}}


def availability_patch(mode: str) -> Dict:
    return {"spec": {"availabilityConfig": mode}}


def compact_statefulset_name(cr_name: str) -> str:
    return f"{cr_name}-observatorium-thanos-compact"


def addon_name(cr_name: str) -> str:
    return f"{cr_name}-addon"


def basic_mode_workloads(cr_name: str) -> List[str]:
    """Workload names expected at one replica; grafana/alertmanager are not prefixed."""
    names = []
    for component in BASIC_MODE_COMPONENTS:
        if component.startswith("observatorium-"):
            names.append(f"{cr_name}-{component}")
        else:
            names.append(component)
    return names
