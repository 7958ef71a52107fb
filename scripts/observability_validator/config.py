"""
Validator Configuration
=======================

Suite-level settings, read once at startup from environment variables,
an optional YAML options file and CLI flags (in increasing precedence).
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

import yaml

from .harness import PollSpec


@dataclass
class ValidatorConfig:
    """Configuration for the target hub cluster and the observability install."""

    kubeconfig: Optional[str] = None
    context: Optional[str] = None

    operator_namespace: str = "open-cluster-management"
    operator_label: str = "name=multicluster-observability-operator"
    mco_namespace: str = "open-cluster-management-observability"
    addon_namespace: str = "open-cluster-management-addon-observability"
    addon_cluster_namespace: str = "local-cluster"
    cr_name: str = "observability"

    pull_secret_name: str = "multiclusterhub-operator-pull-secret"
    object_storage_secret: str = "thanos-object-storage"
    object_storage_key: str = "thanos.yaml"
    bucket: str = "observability"
    s3_endpoint: str = "s3.amazonaws.com"
    s3_access_key: str = ""
    s3_secret_key: str = ""

    grafana_route: str = "grafana"
    grafana_datasource_id: int = 1
    metric_query: str = 'node_memory_MemAvailable_bytes{cluster="local-cluster"}'

    # Polling (seconds)
    interval: float = 5.0
    timeout: float = 300.0
    long_timeout: float = 600.0
    short_interval: float = 1.0
    short_timeout: float = 60.0

    @property
    def poll_spec(self) -> PollSpec:
        return PollSpec(interval=self.interval, deadline=self.timeout)

    @property
    def long_poll_spec(self) -> PollSpec:
        return PollSpec(interval=self.interval, deadline=self.long_timeout)

    @property
    def short_poll_spec(self) -> PollSpec:
        return PollSpec(interval=self.short_interval, deadline=self.short_timeout)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "ValidatorConfig":
        """Build a config from upper-cased field names (``MCO_NAMESPACE``, ``INTERVAL``...).

        ``KUBECONFIG`` and ``POLL_INTERVAL``/``POLL_TIMEOUT`` are accepted as aliases.
        """
        environ = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            raw = environ.get(f.name.upper())
            if raw is not None:
                values[f.name] = raw
        for alias, name in (("POLL_INTERVAL", "interval"), ("POLL_TIMEOUT", "timeout")):
            if alias in environ:
                values[name] = environ[alias]
        return cls().with_overrides(values)

    def with_overrides(self, values: Dict[str, Any]) -> "ValidatorConfig":
        """Return a copy with known keys replaced, coerced to each field's type.

        Unknown keys and ``None`` values are ignored.
        """
        defaults = {f.name: f for f in fields(self)}
        changes = {}
        for key, value in values.items():
            key = key.replace("-", "_")
            if key not in defaults or value is None:
                continue
            current = getattr(self, key)
            if isinstance(current, bool):
                value = str(value).lower() in ("1", "true", "yes")
            elif isinstance(current, (int, float)) and not isinstance(value, (int, float)):
                value = type(current)(value)
            changes[key] = value
        return replace(self, **changes)


def load_options(path: str) -> Dict[str, Any]:
    """Load a YAML options file.

    Accepts either a flat mapping of config keys or the nested
    ``options: {hub: {...}, objectStorage: {...}}`` layout.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Options file {path} must contain a mapping")

    options = data.get("options", data)
    flat = {k: v for k, v in options.items() if not isinstance(v, dict)}

    hub = options.get("hub", {})
    if hub:
        flat.setdefault("kubeconfig", hub.get("kubeconfig"))
        flat.setdefault("context", hub.get("kubecontext") or hub.get("context"))

    storage = options.get("objectStorage", options.get("object_storage", {}))
    for src, dest in (("bucket", "bucket"), ("endpoint", "s3_endpoint"),
                      ("accessKey", "s3_access_key"), ("secretKey", "s3_secret_key")):
        if src in storage:
            flat.setdefault(dest, storage[src])

    return flat


def build_config(options_path: Optional[str] = None, **overrides) -> ValidatorConfig:
    """Environment, then options file, then explicit overrides."""
    config = ValidatorConfig.from_env()
    if options_path:
        config = config.with_overrides(load_options(options_path))
    return config.with_overrides(overrides)
