"""
Grafana Phase
=============

Verifies the Grafana console is reachable and that metrics from the
managed cluster show up in it.
"""

from ..harness import HttpOk, MetricPresent, Scenario, Verification
from .base import ScenarioPhase


class GrafanaPhase(ScenarioPhase):
    """Grafana console and managed cluster metrics."""

    name = "grafana"
    title = "📊 GRAFANA"

    def build(self) -> Scenario:
        cfg = self.config
        return Scenario(self.name, [
            Verification(
                "Grafana console is accessible",
                lambda: self.grafana().console(),
                HttpOk(200),
                cfg.poll_spec,
            ),
            Verification(
                "Managed cluster metrics show up in Grafana",
                lambda: self.grafana().query(cfg.metric_query),
                MetricPresent(),
                cfg.poll_spec,
            ),
        ])
