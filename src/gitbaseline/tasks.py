"""Build-script entry points.

Each task acquires its own repository handle for the project, does one job
and releases the handle before returning or raising:

- diff_from_baseline: what changed on the branch since the baseline tag
- create_tag / delete_tag / reset_tag: manage a tag on the remote
"""

from __future__ import annotations

import shutil
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from functools import partial
from pathlib import Path

import pygit2
import structlog

from gitbaseline.ci import DEFAULT_BRANCH_MARKER, resolve_ci_config
from gitbaseline.config.loader import load_config
from gitbaseline.config.models import CIConfig, GitBaselineConfig
from gitbaseline.core.errors import CIEnvironmentError
from gitbaseline.git._internal import RepoAccess, delete_tag_refspec, push_tag_refspec
from gitbaseline.git.accessor import has_git_metadata, open_repository
from gitbaseline.git.baseline import BranchMatchPolicy, compute_changes
from gitbaseline.git.credentials import BaselineCallbacks, callbacks_from_config
from gitbaseline.git.errors import TagExistsError
from gitbaseline.git.models import BaselineDiff, TagInfo

log = structlog.get_logger()


def ensure_clean_directory(path: Path) -> None:
    """Remove path and recreate it empty."""
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)


@contextmanager
def _project_repository(
    project_path: Path,
    remote_url: str | None,
    callbacks: pygit2.RemoteCallbacks,
    config: GitBaselineConfig,
    *,
    clean_mirror: bool = False,
) -> Iterator[RepoAccess]:
    """The project's own checkout, or a bare mirror under it."""
    if has_git_metadata(project_path):
        with open_repository(project_path) as access:
            yield access
        return

    mirror = project_path / config.git.mirror_dir
    if clean_mirror:
        ensure_clean_directory(mirror)
    with open_repository(mirror, remote_url, callbacks) as access:
        yield access


def _require(project_path: Path | str, name: str, value: str) -> Path:
    if not str(project_path):
        raise ValueError("project_path needs to refer to the project root")
    if not value:
        raise ValueError(f"{name} needs to be defined")
    return Path(project_path)


def diff_from_baseline(
    project_path: Path | str,
    baseline_name: str,
    branch_name: str | None = None,
    *,
    ci: CIConfig | None = None,
    callbacks: pygit2.RemoteCallbacks | None = None,
    config: GitBaselineConfig | None = None,
    clean_mirror: bool = False,
    environ: Mapping[str, str] | None = None,
) -> BaselineDiff:
    """Changes between the baseline tag and the branch (HEAD when not given).

    With a local checkout the project repository is used as is. Without one,
    the repository URL and branch come from ci (or the configured / discovered
    build server values) and a bare mirror is cloned into the mirror directory.
    Without config, load_config(project_path) supplies it.

    Raises:
        ValueError: Empty project path or baseline name.
        ConfigError: The project or global config file is invalid.
        CIEnvironmentError: No checkout and no build server URL, or no branch.
        BaselineNotFoundError, BranchNotFoundError: Lookup failed.
    """
    path = _require(project_path, "baseline_name", baseline_name)
    config = config or load_config(path)
    policy = BranchMatchPolicy.from_config(config.baseline)
    cbs = callbacks or callbacks_from_config(config.git)

    if has_git_metadata(path):
        log.info("local_diff_started", path=str(path), baseline=baseline_name, branch=branch_name)
        with _project_repository(path, None, cbs, config) as access:
            return compute_changes(access, baseline_name, branch_name, policy)

    ci = resolve_ci_config(ci if ci is not None else config.ci, environ)
    if not ci.is_configured:
        raise CIEnvironmentError.not_detected(str(path))
    branch = branch_name or ci.branch
    if not branch:
        raise CIEnvironmentError.property_missing("branch")
    if branch == DEFAULT_BRANCH_MARKER:
        branch = None

    log.info("mirror_diff_started", url=ci.vcs_root_url, baseline=baseline_name, branch=branch)
    with _project_repository(
        path, ci.vcs_root_url, cbs, config, clean_mirror=clean_mirror
    ) as access:
        return compute_changes(access, baseline_name, branch, policy)


def _push(
    access: RepoAccess, remote: str, refspec: str, callbacks: pygit2.RemoteCallbacks
) -> None:
    if isinstance(callbacks, BaselineCallbacks):
        callbacks.reset()
    access.run_remote_operation(
        remote, "push", partial(pygit2.Remote.push, specs=[refspec], callbacks=callbacks)
    )


def _apply_tag(access: RepoAccess, tag: str, ref: str, message: str | None) -> TagInfo:
    target = access.resolve_commit(ref)
    if message:
        access.create_annotated_tag(tag, target.id, message)
    else:
        access.create_lightweight_tag(tag, target.id)
    return TagInfo(tag, str(target.id), is_annotated=bool(message))


def create_tag(
    tag: str,
    project_path: Path | str,
    repository_url: str | None = None,
    *,
    ref: str = "HEAD",
    message: str | None = None,
    callbacks: pygit2.RemoteCallbacks | None = None,
    config: GitBaselineConfig | None = None,
    clean_mirror: bool = False,
) -> TagInfo:
    """Tag ref (annotated when message is given) and push the tag.

    Raises:
        TagExistsError: The tag already exists locally.
        RemoteError, AuthenticationError: Push failed.
    """
    path = _require(project_path, "tag", tag)
    config = config or load_config(path)
    cbs = callbacks or callbacks_from_config(config.git)
    url = repository_url or config.ci.vcs_root_url

    with _project_repository(path, url, cbs, config, clean_mirror=clean_mirror) as access:
        if access.has_tag(tag):
            raise TagExistsError(tag)
        log.info("tag_create_started", tag=tag, ref=ref)
        info = _apply_tag(access, tag, ref, message)
        _push(access, config.git.remote, push_tag_refspec(tag), cbs)
        log.info("tag_pushed", tag=tag, target=info.target_sha, remote=config.git.remote)
    return TagInfo(info.name, info.target_sha, info.is_annotated, pushed_to=config.git.remote)


def delete_tag(
    tag: str,
    project_path: Path | str,
    repository_url: str | None = None,
    *,
    callbacks: pygit2.RemoteCallbacks | None = None,
    config: GitBaselineConfig | None = None,
    clean_mirror: bool = False,
) -> TagInfo:
    """Delete the tag locally (when present) and on the remote."""
    path = _require(project_path, "tag", tag)
    config = config or load_config(path)
    cbs = callbacks or callbacks_from_config(config.git)
    url = repository_url or config.ci.vcs_root_url

    with _project_repository(path, url, cbs, config, clean_mirror=clean_mirror) as access:
        log.info("tag_delete_started", tag=tag)
        if access.has_tag(tag):
            access.delete_tag(tag)
        _push(access, config.git.remote, delete_tag_refspec(tag), cbs)
        log.info("tag_removed_from_remote", tag=tag, remote=config.git.remote)
    return TagInfo(tag, None, pushed_to=config.git.remote)


def reset_tag(
    tag: str,
    project_path: Path | str,
    repository_url: str | None = None,
    *,
    ref: str = "HEAD",
    message: str | None = None,
    callbacks: pygit2.RemoteCallbacks | None = None,
    config: GitBaselineConfig | None = None,
    clean_mirror: bool = False,
) -> TagInfo:
    """Move the tag to ref, locally and on the remote (force push)."""
    path = _require(project_path, "tag", tag)
    config = config or load_config(path)
    cbs = callbacks or callbacks_from_config(config.git)
    url = repository_url or config.ci.vcs_root_url

    with _project_repository(path, url, cbs, config, clean_mirror=clean_mirror) as access:
        log.info("tag_reset_started", tag=tag, ref=ref)
        if access.has_tag(tag):
            access.delete_tag(tag)
        info = _apply_tag(access, tag, ref, message)
        _push(access, config.git.remote, push_tag_refspec(tag, force=True), cbs)
        log.info("tag_pushed", tag=tag, target=info.target_sha, remote=config.git.remote)
    return TagInfo(info.name, info.target_sha, info.is_annotated, pushed_to=config.git.remote)
