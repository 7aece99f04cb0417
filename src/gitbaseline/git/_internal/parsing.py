"""String parsing helpers for git ref names."""

from __future__ import annotations

from gitbaseline.config.constants import DELETE_REFSPEC_PREFIX, REFS_REMOTES, REFS_TAGS


def make_tag_ref(name: str) -> str:
    """Create full tag ref from name."""
    return f"{REFS_TAGS}{name}"


def remote_of(refname: str) -> str | None:
    """Remote name of a remote-tracking ref (e.g., 'refs/remotes/origin/main' -> 'origin')."""
    if not refname.startswith(REFS_REMOTES):
        return None
    return refname[len(REFS_REMOTES) :].split("/", 1)[0]


def push_tag_refspec(name: str, *, force: bool = False) -> str:
    """Refspec that publishes a tag (e.g., 'refs/tags/v1:refs/tags/v1')."""
    ref = make_tag_ref(name)
    prefix = "+" if force else ""
    return f"{prefix}{ref}:{ref}"


def delete_tag_refspec(name: str) -> str:
    """Refspec that deletes a tag on the remote (e.g., '+:refs/tags/v1')."""
    return f"{DELETE_REFSPEC_PREFIX}{make_tag_ref(name)}"
