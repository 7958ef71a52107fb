"""
Kubernetes Client
=================

Native Kubernetes API client - no kubectl subprocess calls.

Read methods raise ObservationError for failures the harness can classify
(404, 401/403); everything else propagates and is treated as transient by
the poller. Write methods let ApiException propagate to the scenario.
"""

from ..logging import log_debug

from contextlib import contextmanager
from typing import Dict, Iterable, List, Optional

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException

from ..harness import ErrorCode, ObservationError
from ..manifests import GroupVersionResource, ROUTE_GVR


@contextmanager
def classified_errors(what: str):
    """Translate API errors the harness understands into ObservationError."""
    try:
        yield
    except ApiException as e:
        if e.status == 404:
            raise ObservationError(ErrorCode.NOT_FOUND, f"{what} not found") from e
        if e.status in (401, 403):
            raise ObservationError(ErrorCode.UNAUTHORIZED,
                                   f"access to {what} denied: {e.reason}") from e
        raise


class KubernetesClient:
    """Native Kubernetes API client for one hub cluster"""

    def __init__(self, kubeconfig: Optional[str] = None, context: Optional[str] = None,
                 api_client: Optional[client.ApiClient] = None):
        """Initialize Kubernetes client

        Args:
            kubeconfig: Path to kubeconfig (default: $KUBECONFIG or ~/.kube/config)
            context: Kubeconfig context to use (default: current context)
            api_client: Pre-built ApiClient (skips kubeconfig loading)
        """
        if api_client is None:
            api_client = config.new_client_from_config(config_file=kubeconfig, context=context)
        self.api_client = api_client
        self.v1 = client.CoreV1Api(api_client)
        self.apps_v1 = client.AppsV1Api(api_client)
        self.custom = client.CustomObjectsApi(api_client)
        self.extensions = client.ApiextensionsV1Api(api_client)

    # ========================================================================
    # Readers
    # ========================================================================

    def list_pods(self, namespace: str, label_selector: Optional[str] = None) -> List[client.V1Pod]:
        """Get pods in namespace

        Args:
            namespace: Namespace to list
            label_selector: Optional label selector (e.g., "component=metrics-collector")

        Returns:
            List of pod objects
        """
        with classified_errors(f"pods in {namespace}"):
            return self.v1.list_namespaced_pod(
                namespace=namespace,
                label_selector=label_selector or ""
            ).items

    def list_crd_names(self) -> List[str]:
        """Names of all CustomResourceDefinitions on the cluster."""
        with classified_errors("customresourcedefinitions"):
            crds = self.extensions.list_custom_resource_definition()
        return [crd.metadata.name for crd in crds.items]

    def get_cluster_custom_object(self, gvr: GroupVersionResource, name: str) -> Dict:
        with classified_errors(f"{gvr.plural}/{name}"):
            return self.custom.get_cluster_custom_object(
                gvr.group, gvr.version, gvr.plural, name
            )

    def get_namespaced_custom_object(self, gvr: GroupVersionResource,
                                     namespace: str, name: str) -> Dict:
        with classified_errors(f"{gvr.plural}/{name} in {namespace}"):
            return self.custom.get_namespaced_custom_object(
                gvr.group, gvr.version, namespace, gvr.plural, name
            )

    def get_statefulset(self, namespace: str, name: str) -> client.V1StatefulSet:
        with classified_errors(f"statefulset/{name} in {namespace}"):
            return self.apps_v1.read_namespaced_stateful_set(name, namespace)

    def get_workload(self, namespace: str, name: str):
        """Deployment or StatefulSet named ``name``, or None if neither exists."""
        for read in (self.apps_v1.read_namespaced_deployment,
                     self.apps_v1.read_namespaced_stateful_set):
            try:
                with classified_errors(f"{name} in {namespace}"):
                    return read(name, namespace)
            except ObservationError as e:
                if e.code is not ErrorCode.NOT_FOUND:
                    raise
        return None

    def get_workloads(self, namespace: str, names: Iterable[str]) -> Dict[str, object]:
        """Map each name to its Deployment/StatefulSet (None when missing)."""
        return {name: self.get_workload(namespace, name) for name in names}

    def get_namespace(self, name: str) -> client.V1Namespace:
        with classified_errors(f"namespace/{name}"):
            return self.v1.read_namespace(name)

    def get_route_host(self, namespace: str, name: str) -> str:
        """Host of an OpenShift route."""
        route = self.get_namespaced_custom_object(ROUTE_GVR, namespace, name)
        return route["spec"]["host"]

    def bearer_token(self) -> Optional[str]:
        """Token the client authenticates with, for calling routed services."""
        header = self.api_client.configuration.api_key.get("authorization", "")
        if header.lower().startswith("bearer "):
            return header.split(" ", 1)[1]
        return header or None

    # ========================================================================
    # Mutations
    # ========================================================================

    def create_namespace(self, name: str) -> None:
        """Create a namespace; an existing one is left as is."""
        body = client.V1Namespace(metadata=client.V1ObjectMeta(name=name))
        try:
            self.v1.create_namespace(body)
        except ApiException as e:
            if e.status != 409:
                raise
            log_debug(f"    namespace {name} already exists")

    def create_secret(self, namespace: str, name: str, string_data: Dict[str, str],
                      secret_type: str = "Opaque") -> None:
        """Create or replace a secret from plain-text values."""
        body = client.V1Secret(
            metadata=client.V1ObjectMeta(name=name, namespace=namespace),
            string_data=string_data,
            type=secret_type,
        )
        try:
            self.v1.create_namespaced_secret(namespace, body)
        except ApiException as e:
            if e.status != 409:
                raise
            self.v1.replace_namespaced_secret(name, namespace, body)

    def copy_secret(self, name: str, source_namespace: str, target_namespace: str) -> None:
        """Copy a secret (data and type) between namespaces."""
        source = self.v1.read_namespaced_secret(name, source_namespace)
        body = client.V1Secret(
            metadata=client.V1ObjectMeta(name=name, namespace=target_namespace),
            data=source.data,
            type=source.type,
        )
        try:
            self.v1.create_namespaced_secret(target_namespace, body)
        except ApiException as e:
            if e.status != 409:
                raise
            self.v1.replace_namespaced_secret(name, target_namespace, body)

    def apply_cluster_custom_object(self, gvr: GroupVersionResource, body: Dict) -> Dict:
        """Create a cluster-scoped custom object, replacing it if it exists."""
        try:
            return self.custom.create_cluster_custom_object(
                gvr.group, gvr.version, gvr.plural, body
            )
        except ApiException as e:
            if e.status != 409:
                raise
        name = body["metadata"]["name"]
        existing = self.custom.get_cluster_custom_object(gvr.group, gvr.version, gvr.plural, name)
        body = dict(body)
        body["metadata"] = dict(body["metadata"],
                                resourceVersion=existing["metadata"]["resourceVersion"])
        return self.custom.replace_cluster_custom_object(
            gvr.group, gvr.version, gvr.plural, name, body
        )

    def patch_cluster_custom_object(self, gvr: GroupVersionResource, name: str,
                                    patch: Dict) -> Dict:
        """Merge-patch a cluster-scoped custom object."""
        return self.custom.patch_cluster_custom_object(
            gvr.group, gvr.version, gvr.plural, name, patch
        )

    def delete_cluster_custom_object(self, gvr: GroupVersionResource, name: str) -> None:
        self.custom.delete_cluster_custom_object(gvr.group, gvr.version, gvr.plural, name)

    def delete_namespace(self, name: str) -> None:
        self.v1.delete_namespace(name)
