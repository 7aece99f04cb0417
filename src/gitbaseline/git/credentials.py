"""Credential handling for clone and push."""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from typing import TYPE_CHECKING
from urllib.parse import urlparse

import pygit2

if TYPE_CHECKING:
    from pygit2.enums import CredentialType

    from gitbaseline.config.models import GitConfig

Credential = pygit2.Username | pygit2.UserPass | pygit2.Keypair
CredentialProvider = Callable[[str, "str | None", "CredentialType"], "Credential | None"]


class BaselineCallbacks(pygit2.RemoteCallbacks):
    """RemoteCallbacks that turn rejected ref updates into errors.

    libgit2 reports a rejected push per ref instead of failing the push, so
    without this a refused tag update would pass silently.
    """

    def push_update_reference(self, refname: str, message: str | None) -> None:
        if message is not None:
            raise pygit2.GitError(f"{refname} rejected: {message}")

    def reset(self) -> None:
        """Forget per-operation state before the next clone or push."""


class SystemCredentialCallback(BaselineCallbacks):
    """
    RemoteCallbacks that uses system credential helpers.

    Supports:
    - SSH via KeypairFromAgent (uses system SSH agent)
    - HTTPS via git-credential-manager or other configured helpers
    """

    def credentials(  # type: ignore[override]
        self,
        url: str,
        username_from_url: str | None,
        allowed_types: CredentialType,
    ) -> Credential:
        """Provide credentials for remote operations."""
        # SSH: use agent
        if allowed_types & pygit2.enums.CredentialType.SSH_KEY:
            username = username_from_url or "git"
            return pygit2.KeypairFromAgent(username)

        # HTTPS: query system credential helper
        if allowed_types & pygit2.enums.CredentialType.USERPASS_PLAINTEXT:
            creds = self._query_credential_helper(url)
            if creds:
                return pygit2.UserPass(creds["username"], creds["password"])

        raise pygit2.Passthrough

    def _query_credential_helper(self, url: str) -> dict[str, str] | None:
        """
        Query system git credential helper.

        Invokes: git credential fill
        See: https://git-scm.com/docs/git-credential
        """
        parsed = urlparse(url)
        host = parsed.hostname or parsed.netloc
        input_lines = [
            f"protocol={parsed.scheme}",
            f"host={host}",
        ]
        if parsed.port is not None:
            input_lines.append(f"port={parsed.port}")
        if parsed.path:
            input_lines.append(f"path={parsed.path.lstrip('/')}")
        input_lines.append("")  # Empty line terminates input
        input_data = "\n".join(input_lines)

        try:
            result = subprocess.run(
                ["git", "credential", "fill"],
                input=input_data,
                capture_output=True,
                text=True,
                timeout=30,
                check=False,
            )
            if result.returncode != 0:
                return None

            creds: dict[str, str] = {}
            for line in result.stdout.strip().split("\n"):
                if "=" in line:
                    key, value = line.split("=", 1)
                    creds[key] = value

            if "username" in creds and "password" in creds:
                return creds
        except (subprocess.TimeoutExpired, FileNotFoundError, OSError):
            # No git binary or no helper configured: libgit2 reports the auth failure
            pass

        return None


class UserPassCallback(BaselineCallbacks):
    """Fixed username/password (or token) for HTTPS remotes.

    libgit2 keeps asking while the server rejects a credential; this hands the
    credential out once per clone or push (see reset()) so a wrong password
    ends in an authentication error instead of a loop.
    """

    def __init__(self, username: str, password: str) -> None:
        super().__init__()
        self._username = username
        self._password = password
        self._attempts = 0

    def credentials(  # type: ignore[override]
        self,
        url: str,
        username_from_url: str | None,  # noqa: ARG002
        allowed_types: CredentialType,
    ) -> Credential:
        if not allowed_types & pygit2.enums.CredentialType.USERPASS_PLAINTEXT:
            raise pygit2.Passthrough
        self._attempts += 1
        if self._attempts > 1:
            raise pygit2.GitError(f"authentication failed: credentials rejected for {url}")
        return pygit2.UserPass(self._username, self._password)

    def reset(self) -> None:
        self._attempts = 0


class CallableCredentialCallback(BaselineCallbacks):
    """Delegates every credential challenge to a caller-supplied function.

    The function receives (url, username_from_url, allowed_types) and returns a
    pygit2 credential object, or None to let libgit2 fall back to its defaults.
    """

    def __init__(self, provider: CredentialProvider) -> None:
        super().__init__()
        self._provider = provider

    def credentials(  # type: ignore[override]
        self,
        url: str,
        username_from_url: str | None,
        allowed_types: CredentialType,
    ) -> Credential:
        credential = self._provider(url, username_from_url, allowed_types)
        if credential is None:
            raise pygit2.Passthrough
        return credential


def get_default_callbacks() -> SystemCredentialCallback:
    """Get default remote callbacks with system credential support."""
    return SystemCredentialCallback()


def callbacks_from_config(config: GitConfig) -> BaselineCallbacks:
    """Explicit username/password when configured, system helpers otherwise."""
    if config.username and config.password is not None:
        return UserPassCallback(config.username, config.password.get_secret_value())
    return get_default_callbacks()
