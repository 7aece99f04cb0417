"""Core module exports."""

from gitbaseline.core.errors import (
    CIEnvironmentError,
    ConfigError,
    ErrorCode,
    GitBaselineError,
)
from gitbaseline.core.logging import (
    clear_run_id,
    configure_logging,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "GitBaselineError",
    "ConfigError",
    "CIEnvironmentError",
    "ErrorCode",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_run_id",
    "set_run_id",
]
