"""
Validation phases, in the order the suite runs them.

Later phases depend on the cluster state left by earlier ones.
"""

from .addon import AddonPhase
from .availability import AvailabilityPhase
from .cleanup import CleanupPhase
from .grafana import GrafanaPhase
from .install import InstallPhase
from .operator import OperatorPhase
from .retention import RetentionPhase

PHASES = [
    OperatorPhase,
    InstallPhase,
    GrafanaPhase,
    RetentionPhase,
    AddonPhase,
    AvailabilityPhase,
    CleanupPhase,
]

PHASE_NAMES = [p.name for p in PHASES]
