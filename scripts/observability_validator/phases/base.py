"""
Scenario-backed validation phase.
"""

from typing import Any, Dict, Optional

from ..clients.grafana import GrafanaClient
from ..config import ValidatorConfig
from ..harness import Scenario, ScenarioResult, ScenarioRunner
from ..logging import log_error, log_info, log_success


class ScenarioPhase:
    """A validation phase expressed as one scenario.

    Subclasses set ``name``/``title`` and implement ``build()``.
    """

    name = "phase"
    title = "PHASE"

    def __init__(self, k8s_client, config: ValidatorConfig,
                 runner: Optional[ScenarioRunner] = None,
                 grafana: Optional[GrafanaClient] = None):
        """
        Args:
            k8s_client: KubernetesClient instance
            config: Suite configuration
            runner: Scenario runner (default: real clock)
            grafana: Grafana client (default: built from the Grafana route on first use)
        """
        self.k8s = k8s_client
        self.config = config
        self.runner = runner or ScenarioRunner()
        self._grafana = grafana
        self.last_result: Optional[ScenarioResult] = None

    def grafana(self) -> GrafanaClient:
        """Grafana client for the observability route, built once the route exists."""
        if self._grafana is None:
            host = self.k8s.get_route_host(self.config.mco_namespace, self.config.grafana_route)
            self._grafana = GrafanaClient(
                f"https://{host}",
                token=self.k8s.bearer_token(),
                datasource_id=self.config.grafana_datasource_id,
            )
        return self._grafana

    def build(self) -> Scenario:
        raise NotImplementedError

    def run(self) -> Dict[str, Any]:
        log_info("\n" + "="*70)
        log_info(self.title)
        log_info("="*70)

        result = self.runner.run(self.build())
        self.last_result = result

        if result.passed:
            log_success(f"\n✅ {self.name} passed ({result.elapsed:.1f}s)")
        else:
            failed = result.failed_step
            log_error(f"\n❌ {self.name} failed at: {failed.description} ({failed.failure_kind})")
        return result.as_dict()
