"""gitbaseline - diff a branch against a baseline tag and manage baseline tags."""

from gitbaseline.git import BaselineDiff, ChangeSet
from gitbaseline.tasks import create_tag, delete_tag, diff_from_baseline, reset_tag

__version__ = "0.1.0"

__all__ = [
    "BaselineDiff",
    "ChangeSet",
    "create_tag",
    "delete_tag",
    "diff_from_baseline",
    "reset_tag",
    "__version__",
]
