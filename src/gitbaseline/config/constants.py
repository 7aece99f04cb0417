"""Configuration constants.

Values here are git layout and protocol facts, not user settings.
For configurable values, see models.py.
"""

GIT_DIRECTORY = ".git"
"""Metadata directory of a non-bare checkout."""

INDEX_FILE = "index"
"""Index file whose presence marks a usable local checkout."""

MIRROR_DIRECTORY = ".gitmirror"
"""Default directory for the bare mirror cloned on CI agents."""

DEFAULT_REMOTE = "origin"

REFS_TAGS = "refs/tags/"
REFS_HEADS = "refs/heads/"
REFS_REMOTES = "refs/remotes/"

DELETE_REFSPEC_PREFIX = "+:"
"""Push refspec prefix that deletes the destination ref on the remote."""

REPO_CONFIG_FILE = ".gitbaseline.yaml"
