"""Build server discovery for checkouts that carry no git metadata.

TeamCity agents can fetch sources without a .git directory. The repository
URL and the branch being built are then only known from the build's
configuration properties, which TeamCity writes to a Java properties file
referenced from the file named by TEAMCITY_BUILD_PROPERTIES_FILE.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path

import structlog

from gitbaseline.config.constants import REFS_HEADS
from gitbaseline.config.models import CIConfig

log = structlog.get_logger()

TEAMCITY_VERSION_ENV = "TEAMCITY_VERSION"
BUILD_PROPERTIES_ENV = "TEAMCITY_BUILD_PROPERTIES_FILE"
CONFIGURATION_PROPERTIES_KEY = "teamcity.configuration.properties.file"

VCS_ROOT_URL = "vcsroot.url"
VCS_BRANCH = "teamcity.build.branch"

DEFAULT_BRANCH_MARKER = "<default>"
"""TeamCity's branch value for builds of the default branch."""

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)")
_SEPARATOR_RE = re.compile(r"(?<!\\)(?:\s*[=:]\s*|\s+)")


def _unescape(value: str) -> str:
    def repl(match: re.Match[str]) -> str:
        seq = match.group(1)
        if seq.startswith("u") and len(seq) == 5:
            return chr(int(seq[1:], 16))
        return _ESCAPES.get(seq, seq)

    return _ESCAPE_RE.sub(repl, value)


def _logical_lines(text: str) -> list[str]:
    """Join backslash-continued lines, drop blanks and comments."""
    lines: list[str] = []
    pending = ""
    for raw in text.splitlines():
        line = raw.lstrip()
        if not pending and (not line or line[0] in "#!"):
            continue
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue
        lines.append(pending + line)
        pending = ""
    if pending:
        lines.append(pending)
    return lines


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java .properties content (key=value, key:value or key value)."""
    props: dict[str, str] = {}
    for line in _logical_lines(text):
        parts = _SEPARATOR_RE.split(line, maxsplit=1)
        key = _unescape(parts[0])
        value = _unescape(parts[1]) if len(parts) > 1 else ""
        props[key] = value
    return props


def load_properties(path: Path | str) -> dict[str, str]:
    return parse_properties(Path(path).read_text(encoding="utf-8"))


def _lookup(props: Mapping[str, str], key: str) -> str | None:
    """Property by dotted name, also accepting the underscore spelling."""
    for candidate in (key, key.replace(".", "_")):
        if candidate in props:
            return props[candidate]
    return None


def normalize_branch(branch: str | None) -> str | None:
    """Strip the refs/heads/ prefix TeamCity reports for some VCS roots."""
    if branch and branch.startswith(REFS_HEADS):
        return branch[len(REFS_HEADS) :]
    return branch


def teamcity_config(environ: Mapping[str, str] | None = None) -> CIConfig | None:
    """CIConfig from a TeamCity agent's properties files, or None off TeamCity."""
    env = os.environ if environ is None else environ
    build_file = env.get(BUILD_PROPERTIES_ENV)
    if not env.get(TEAMCITY_VERSION_ENV) or not build_file:
        return None

    build_props = load_properties(build_file)
    config_file = build_props.get(CONFIGURATION_PROPERTIES_KEY)
    props = dict(build_props)
    if config_file and Path(config_file).is_file():
        props.update(load_properties(config_file))

    ci = CIConfig(
        vcs_root_url=_lookup(props, VCS_ROOT_URL),
        branch=normalize_branch(_lookup(props, VCS_BRANCH)),
    )
    log.debug("teamcity_detected", vcs_root_url=ci.vcs_root_url, branch=ci.branch)
    return ci


def resolve_ci_config(configured: CIConfig, environ: Mapping[str, str] | None = None) -> CIConfig:
    """Configured values first, TeamCity properties for whatever is left unset."""
    if configured.vcs_root_url and configured.branch:
        return configured
    discovered = teamcity_config(environ)
    if discovered is None:
        return configured
    return CIConfig(
        vcs_root_url=configured.vcs_root_url or discovered.vcs_root_url,
        branch=configured.branch or discovered.branch,
    )
