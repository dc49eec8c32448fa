"""Custom error hierarchy for git-smart-tools."""

from __future__ import annotations


class GitToolsError(RuntimeError):
    """Base error for both CLIs."""


class InvalidArgument(GitToolsError):
    """Raised when command-line input is malformed."""


class UnknownRevision(GitToolsError):
    """Raised when a revision token does not name any object."""


class PathNotFound(GitToolsError):
    """Raised when a path does not exist in the resolved revision."""


class RemoteResolutionError(GitToolsError):
    """Raised when no remote URL can be determined."""


class UnsupportedHost(GitToolsError):
    """Raised when the remote is not hosted on GitHub or GitLab."""

    def __init__(self, hostname: str):
        self.hostname = hostname
        super().__init__(f"Unsupported host: {hostname}")


class OpenerError(GitToolsError):
    """Raised when the URL opener cannot be run."""


class GitCommandError(GitToolsError):
    """Raised when an underlying git command fails."""

    def __init__(
        self,
        command: list[str],
        returncode: int,
        *,
        stdout: str | None = None,
        stderr: str | None = None,
    ):
        self.command = command
        self.returncode = returncode
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        message = f"git command failed (exit {returncode}): {' '.join(command)}"
        details = "\n".join(
            section
            for section in (self.stdout.strip(), self.stderr.strip())
            if section
        )
        if details:
            message = f"{message}\n{details}"
        super().__init__(message)


__all__ = [
    "GitToolsError",
    "InvalidArgument",
    "UnknownRevision",
    "PathNotFound",
    "RemoteResolutionError",
    "UnsupportedHost",
    "OpenerError",
    "GitCommandError",
]
