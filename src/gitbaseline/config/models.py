"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (GITBASELINE__SECTION__KEY)
3. Repo YAML (.gitbaseline.yaml)
4. Global YAML (~/.config/gitbaseline/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    GITBASELINE__<SECTION>__<KEY>=<VALUE>

Examples:
    GITBASELINE__LOGGING__LEVEL=DEBUG
    GITBASELINE__GIT__USERNAME=ci-bot
    GITBASELINE__BASELINE__BRANCH_MATCH=unique
    GITBASELINE__CI__VCS_ROOT_URL=https://example.com/repo.git
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator

from gitbaseline.config.constants import DEFAULT_REMOTE, MIRROR_DIRECTORY

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
BranchMatch = Literal["first", "unique"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        GITBASELINE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class GitConfig(BaseModel):
    """Remote access configuration.

    Env vars:
        GITBASELINE__GIT__REMOTE: Remote used for tag pushes (default: origin)
        GITBASELINE__GIT__MIRROR_DIR: Directory name for the CI bare mirror
        GITBASELINE__GIT__USERNAME / GITBASELINE__GIT__PASSWORD: Explicit HTTPS credentials
    """

    remote: str = Field(
        default=DEFAULT_REMOTE,
        description="Remote that tags are pushed to and deleted from.",
    )
    mirror_dir: str = Field(
        default=MIRROR_DIRECTORY,
        description="Directory (relative to the project) that receives the bare mirror clone "
        "when the checkout has no .git directory.",
    )
    username: str | None = Field(
        default=None,
        description="Username for HTTPS remotes. Falls back to the system credential helper.",
    )
    password: SecretStr | None = Field(
        default=None,
        description="Password or token for HTTPS remotes.",
    )

    @field_validator("mirror_dir")
    @classmethod
    def validate_mirror_dir(cls, v: str) -> str:
        if not v or Path(v).is_absolute():
            raise ValueError(f"mirror_dir must be a relative directory name, got {v!r}")
        return v


class BaselineConfig(BaseModel):
    """Baseline diff behaviour.

    Env vars:
        GITBASELINE__BASELINE__BRANCH_MATCH: first | unique
        GITBASELINE__BASELINE__PREFERRED_REMOTE: Remote that wins among several suffix matches
    """

    branch_match: BranchMatch = Field(
        default="first",
        description="How to pick among several branches ending with the requested name. "
        "'first' takes the first in listing order, 'unique' refuses ambiguous names.",
    )
    preferred_remote: str | None = Field(
        default=None,
        description="When several branches match, prefer the one tracked from this remote.",
    )


class CIConfig(BaseModel):
    """Build server values used when the checkout carries no git metadata.

    Env vars:
        GITBASELINE__CI__VCS_ROOT_URL: Repository URL to mirror
        GITBASELINE__CI__BRANCH: Branch being built
    """

    vcs_root_url: str | None = None
    branch: str | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.vcs_root_url)


class GitBaselineConfig(BaseModel):
    """Root configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    git: GitConfig = Field(default_factory=GitConfig)
    baseline: BaselineConfig = Field(default_factory=BaselineConfig)
    ci: CIConfig = Field(default_factory=CIConfig)
