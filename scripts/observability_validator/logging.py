"""
Observability Validator Logging Module
======================================

Provides LOG_LEVEL-aware logging functions shared by the harness, the
phases and the CLI.
"""

import os
import sys

# ============================================================================
# Logging Configuration
# ============================================================================
#
# LOG_LEVEL environment variable controls output verbosity:
#   DEBUG - Show everything, including every polling attempt
#   INFO  - Show info, success, warnings, and errors
#   WARN  - Show success, warnings, and errors (clean output)
#   ERROR - Only show errors (quietest)
#
# Default: DEBUG (CI runs need the per-attempt trace to triage stuck waits)
#
# Usage:
#   LOG_LEVEL=DEBUG observability-e2e ...  # Show everything
#   LOG_LEVEL=WARN observability-e2e ...   # Clean output
#
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG').upper()

# Log level hierarchy (from most to least verbose)
_LOG_LEVELS = {'DEBUG': 0, 'INFO': 1, 'WARN': 2, 'ERROR': 3}
_CURRENT_LEVEL = _LOG_LEVELS.get(LOG_LEVEL, 0)


def set_log_level(level: str) -> None:
    """Override LOG_LEVEL at runtime (used by the CLI --log-level flag)."""
    global LOG_LEVEL, _CURRENT_LEVEL
    LOG_LEVEL = level.upper()
    _CURRENT_LEVEL = _LOG_LEVELS.get(LOG_LEVEL, 0)


def should_log(level: str) -> bool:
    """Check if a message at given level should be logged."""
    return _LOG_LEVELS.get(level, 0) >= _CURRENT_LEVEL


def log_debug(*args, **kwargs):
    """Print debug messages (only if LOG_LEVEL=DEBUG)."""
    if should_log('DEBUG'):
        print(*args, **kwargs)


def log_info(*args, **kwargs):
    """Print info messages (if LOG_LEVEL is INFO or DEBUG)."""
    if should_log('INFO'):
        print(*args, **kwargs)


def log_success(*args, **kwargs):
    """Print success messages (if LOG_LEVEL is WARN, INFO, or DEBUG)."""
    if should_log('WARN'):
        print(*args, **kwargs)


def log_warning(*args, **kwargs):
    """Print warning messages (if LOG_LEVEL is WARN, INFO, or DEBUG)."""
    if should_log('WARN'):
        print(*args, **kwargs)


def log_error(*args, **kwargs):
    """Print error messages (always shown, sent to stderr)."""
    print(*args, **kwargs, file=sys.stderr)
