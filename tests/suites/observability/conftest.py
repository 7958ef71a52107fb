"""
Observability suite fixtures.

These tests run against a live hub cluster with the observability operator
installed. They are skipped when no kubeconfig can be loaded or the API
server does not answer.
"""

import os

import pytest
import urllib3
from kubernetes import client
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException

from observability_validator.clients.kubernetes import KubernetesClient
from observability_validator.config import ValidatorConfig, build_config
from observability_validator.harness import ScenarioRunner


@pytest.fixture(scope="session")
def hub_config() -> ValidatorConfig:
    """Hub cluster configuration from environment variables (and OPTIONS_FILE, if set)."""
    return build_config(os.environ.get("OPTIONS_FILE"))


@pytest.fixture(scope="session")
def k8s_client(hub_config: ValidatorConfig) -> KubernetesClient:
    """Kubernetes client for the hub cluster, built once per session."""
    try:
        k8s = KubernetesClient(kubeconfig=hub_config.kubeconfig, context=hub_config.context)
    except (ConfigException, FileNotFoundError) as e:
        pytest.skip(f"No hub cluster configured: {e}")

    try:
        client.VersionApi(k8s.api_client).get_code(_request_timeout=10)
    except (ApiException, urllib3.exceptions.HTTPError, OSError) as e:
        pytest.skip(f"Hub cluster API not reachable: {e}")
    return k8s


@pytest.fixture(scope="session")
def scenario_runner() -> ScenarioRunner:
    return ScenarioRunner()


@pytest.fixture(scope="session")
def suite_state() -> dict:
    """Shared across the ordered tests: name of the first failed phase."""
    return {'failed_phase': None}
