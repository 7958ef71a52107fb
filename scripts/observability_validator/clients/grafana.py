"""
Grafana Client

Reads the observability Grafana console and queries metrics through its
Prometheus-compatible datasource proxy.

Query failures the harness can act on are raised as ObservationError:
- no matching series          -> ErrorCode.NO_DATA
- malformed query (HTTP 400)  -> ErrorCode.INVALID_QUERY
- rejected credentials        -> ErrorCode.UNAUTHORIZED
Any other failure is raised as-is and treated as transient.
"""

import requests
from typing import Dict, List, Optional

from ..harness import ErrorCode, ObservationError

NO_METRIC_MESSAGE = "Failed to find metric name from response"


class GrafanaClient:
    """Client for the observability Grafana route"""

    def __init__(self, base_url: str, token: Optional[str] = None, datasource_id: int = 1,
                 verify: bool = False, timeout: int = 30,
                 session: Optional[requests.Session] = None):
        """Initialize Grafana client

        Args:
            base_url: Grafana URL (e.g. https://grafana-open-cluster-management-observability.apps...)
            token: Bearer token of the hub cluster user
            datasource_id: Grafana datasource ID of the Thanos/Prometheus datasource
            verify: Verify TLS certificates (routes are usually self-signed)
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.datasource_id = datasource_id
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.verify = verify
        if token:
            self.session.headers['Authorization'] = f"Bearer {token}"

    def console(self) -> int:
        """HTTP status code of the Grafana console root."""
        response = self.session.get(self.base_url, timeout=self.timeout)
        return response.status_code

    def query(self, promql: str) -> List[Dict]:
        """Run an instant query and return the result series.

        Args:
            promql: PromQL expression

        Returns:
            Non-empty list of series (``{'metric': {...}, 'value': [...]}``)
        """
        url = f"{self.base_url}/api/datasources/proxy/{self.datasource_id}/api/v1/query"
        response = self.session.get(url, params={'query': promql}, timeout=self.timeout)

        if response.status_code in (401, 403):
            raise ObservationError(ErrorCode.UNAUTHORIZED,
                                   f"Grafana rejected credentials: HTTP {response.status_code}")
        if response.status_code == 400:
            raise ObservationError(ErrorCode.INVALID_QUERY,
                                   f"Invalid query {promql!r}: {response.text[:200]}")
        response.raise_for_status()

        body = response.json()
        if body.get('status') != 'success':
            if body.get('errorType') == 'bad_data':
                raise ObservationError(ErrorCode.INVALID_QUERY,
                                       f"Invalid query {promql!r}: {body.get('error')}")
            raise RuntimeError(f"Query failed: {body.get('error', body)}")

        series = body.get('data', {}).get('result', [])
        if not any('__name__' in s.get('metric', {}) for s in series):
            raise ObservationError(ErrorCode.NO_DATA, NO_METRIC_MESSAGE)
        return series
