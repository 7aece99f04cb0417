"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from collections.abc import Generator
from pathlib import Path

import pygit2
import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local gitbaseline package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from tests.helpers import BaselineRepo, build_baseline_repo  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's global config and CI environment out of every test."""
    monkeypatch.setattr(
        "gitbaseline.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "no-global-config.yaml"
    )
    monkeypatch.delenv("TEAMCITY_VERSION", raising=False)
    monkeypatch.delenv("TEAMCITY_BUILD_PROPERTIES_FILE", raising=False)


@pytest.fixture
def baseline_repo(tmp_path: Path) -> Generator[BaselineRepo, None, None]:
    """Checkout with main A-B-C, feature A-D and tag 'baseline' at A."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    built = build_baseline_repo(repo_path)
    yield built
    built.repo.free()


@pytest.fixture
def remote_repo(
    baseline_repo: BaselineRepo, tmp_path: Path
) -> Generator[pygit2.Repository, None, None]:
    """Bare repository registered as 'origin' of baseline_repo, holding main and feature."""
    bare = pygit2.init_repository(str(tmp_path / "remote.git"), bare=True, initial_head="main")
    baseline_repo.repo.remotes.create("origin", str(Path(bare.path).resolve()))
    baseline_repo.repo.remotes["origin"].push(
        ["refs/heads/main:refs/heads/main", "refs/heads/feature:refs/heads/feature"]
    )
    yield bare
    bare.free()
