"""Repository builders shared by the git, task and CLI tests."""

from dataclasses import dataclass
from pathlib import Path

import pygit2

SIG = pygit2.Signature("Test User", "test@example.com")


def make_commit(
    repo: pygit2.Repository,
    ref: str | None,
    files: dict[str, str],
    message: str,
    parents: list[pygit2.Oid] | None = None,
) -> pygit2.Oid:
    """Commit a flat snapshot of files (name -> content) and move ref to it."""
    builder = repo.TreeBuilder()
    for name, content in sorted(files.items()):
        builder.insert(name, repo.create_blob(content.encode()), pygit2.GIT_FILEMODE_BLOB)
    tree = builder.write()
    return repo.create_commit(ref, SIG, SIG, message, tree, parents or [])


FILES_A = {"README.md": "# Project\n", "keep.txt": "unchanged\n"}


@dataclass
class BaselineRepo:
    """main: A -> B -> C (HEAD), feature: A -> D, tag 'baseline' at A."""

    path: Path
    repo: pygit2.Repository
    a: pygit2.Oid
    b: pygit2.Oid
    c: pygit2.Oid
    d: pygit2.Oid


def build_baseline_repo(repo_path: Path) -> BaselineRepo:
    repo = pygit2.init_repository(str(repo_path), initial_head="main")
    repo.config["user.name"] = "Test User"
    repo.config["user.email"] = "test@example.com"

    a = make_commit(repo, "refs/heads/main", FILES_A, "A")
    files_b = {**FILES_A, "README.md": "# Project\n\nmore\n", "b.txt": "b\n"}
    b = make_commit(repo, "refs/heads/main", files_b, "B", [a])
    files_c = {**files_b, "c.txt": "c\n"}
    c = make_commit(repo, "refs/heads/main", files_c, "C", [b])
    d = make_commit(repo, "refs/heads/feature", {**FILES_A, "d.txt": "d\n"}, "D", [a])

    repo.references.create("refs/tags/baseline", a)
    repo.set_head("refs/heads/main")
    # Materialize .git/index so the checkout counts as a local repository
    repo.index.read_tree(repo.get(c).tree)
    repo.index.write()
    return BaselineRepo(repo_path, repo, a, b, c, d)
