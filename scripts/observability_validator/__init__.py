"""
Observability E2E Validator
===========================

End-to-end validation suite for the multicluster observability operator.
Uses the Kubernetes API and the Grafana HTTP API to poll asynchronously
converging cluster state until it reaches the expected condition.
"""

__version__ = "1.0.0"
