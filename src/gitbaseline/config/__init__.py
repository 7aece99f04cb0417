"""Config module exports."""

from gitbaseline.config.loader import GitBaselineSettings, load_config
from gitbaseline.config.models import (
    BaselineConfig,
    CIConfig,
    GitBaselineConfig,
    GitConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "load_config",
    "GitBaselineConfig",
    "GitBaselineSettings",
    "BaselineConfig",
    "CIConfig",
    "GitConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
