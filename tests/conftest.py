"""
Pytest fixtures and configuration for observability validator tests.

Unit tests drive the harness with a fake clock; the live suites under
tests/suites/ talk to a hub cluster and skip when none is reachable.
"""

import pytest
import urllib3

from observability_validator.config import ValidatorConfig
from observability_validator.harness import Poller, ScenarioRunner

from utils import FakeClock

# Disable SSL warnings for self-signed certificates
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock starting at t=0 whose sleeps return immediately."""
    return FakeClock()


@pytest.fixture
def poller(fake_clock: FakeClock) -> Poller:
    """Poller driven by the fake clock."""
    return Poller(clock=fake_clock, sleep=fake_clock.sleep)


@pytest.fixture
def runner(poller: Poller) -> ScenarioRunner:
    """Scenario runner using the fake-clock poller."""
    return ScenarioRunner(poller=poller)


@pytest.fixture
def validator_config() -> ValidatorConfig:
    """Configuration with short deadlines for offline phase tests."""
    return ValidatorConfig(
        s3_access_key="test-access-key",
        s3_secret_key="test-secret-key",
        interval=1.0,
        timeout=5.0,
        long_timeout=10.0,
        short_interval=1.0,
        short_timeout=3.0,
    )
