"""Git module error types."""

from collections.abc import Sequence


class GitError(Exception):
    """Base error for git operations."""

    pass


class NotARepositoryError(GitError):
    """Path is not a git repository."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class RepositoryUnavailableError(GitError):
    """No local git metadata and no remote to clone from."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"No git repository at {path} and no remote URL to clone it from"
        )
        self.path = path


class RefNotFoundError(GitError):
    """Reference (branch, tag, commit) not found."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"Reference not found: {ref}")
        self.ref = ref


class BaselineNotFoundError(GitError):
    """Baseline tag is missing or does not resolve to a commit."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Tag and commit are not found for baseline {name!r}")
        self.name = name


class BranchNotFoundError(GitError):
    """No branch matches the requested name."""

    def __init__(self, name: str, known: Sequence[str] = ()) -> None:
        known_part = f", following branches found: {', '.join(known)}" if known else ""
        super().__init__(f"Branch not found: {name}{known_part}")
        self.name = name
        self.known = list(known)


class AmbiguousBranchError(GitError):
    """Several branches end with the requested name and the match policy forbids guessing."""

    def __init__(self, name: str, candidates: Sequence[str]) -> None:
        super().__init__(f"Branch name {name!r} is ambiguous: {', '.join(candidates)}")
        self.name = name
        self.candidates = list(candidates)


class TagExistsError(GitError):
    """Tag already exists locally."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Tag already exists: {name}. Use reset_tag to move it.")
        self.name = name


class UnbornHeadError(GitError):
    """Repository HEAD has no commits yet."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot {operation}: HEAD has no commits (unborn branch)")
        self.operation = operation


class RemoteError(GitError):
    """Error communicating with remote."""

    def __init__(self, remote: str, message: str) -> None:
        super().__init__(f"Remote error ({remote}): {message}")
        self.remote = remote


class AuthenticationError(GitError):
    """Authentication failed for remote operation."""

    def __init__(self, remote: str, operation: str | None = None) -> None:
        op_part = f" during {operation}" if operation else ""
        super().__init__(f"Authentication failed for remote {remote!r}{op_part}")
        self.remote = remote
        self.operation = operation
