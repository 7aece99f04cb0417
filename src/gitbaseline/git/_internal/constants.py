"""Internal pygit2 constants - keeps trivia out of public modules."""

from __future__ import annotations

import pygit2

# Commit walking: children before parents, newest first among siblings
SORT_NEWEST_FIRST = pygit2.GIT_SORT_TOPOLOGICAL | pygit2.GIT_SORT_TIME

# Tree diff
DIFF_FIND_RENAMES = pygit2.GIT_DIFF_FIND_RENAMES
