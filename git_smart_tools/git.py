"""Thin wrappers around git CLI commands."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from .exceptions import GitCommandError

logger = logging.getLogger(__name__)


def run_git(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    check: bool = True,
    capture: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Execute a git command and optionally raise on failure.

    With ``capture=False`` the command inherits the standard streams, which is
    what mutating commands use so git can report progress and conflicts.
    """

    command = ["git", *args]
    logger.debug("Running command: %s", " ".join(command))
    result = subprocess.run(
        command,
        cwd=str(cwd) if cwd else None,
        text=True,
        capture_output=capture,
    )
    if check and result.returncode != 0:
        raise GitCommandError(command, result.returncode, stdout=result.stdout, stderr=result.stderr)
    return result


def _stdout_or_none(args: Sequence[str], cwd: Path) -> str | None:
    proc = run_git(args, cwd=cwd, check=False)
    if proc.returncode != 0:
        return None
    value = proc.stdout.strip()
    return value or None


def rev_parse_toplevel(path: Path) -> Path:
    proc = run_git(["rev-parse", "--show-toplevel"], cwd=path)
    return Path(proc.stdout.strip())


def show_prefix(path: Path) -> str | None:
    """Return the path of ``path`` relative to the repository root, with a trailing slash."""

    proc = run_git(["rev-parse", "--show-prefix"], cwd=path, check=False)
    if proc.returncode != 0:
        return None
    return proc.stdout.strip()


def full_hash(path: Path, rev: str) -> str | None:
    return _stdout_or_none(["rev-parse", "--verify", "--quiet", "--end-of-options", rev], path)


def symbolic_full_name(path: Path, rev: str) -> str | None:
    return _stdout_or_none(["rev-parse", "--symbolic-full-name", rev], path)


def object_type(path: Path, spec: str) -> str | None:
    return _stdout_or_none(["cat-file", "-t", spec], path)


def current_branch(path: Path) -> str | None:
    return _stdout_or_none(["symbolic-ref", "--quiet", "--short", "HEAD"], path)


def config_get(path: Path, key: str) -> str | None:
    return _stdout_or_none(["config", "--get", key], path)


def remote_url(path: Path, remote: str) -> str | None:
    return _stdout_or_none(["remote", "get-url", remote], path)


def merge_base(path: Path, first: str, second: str) -> str:
    proc = run_git(["merge-base", first, second], cwd=path)
    return proc.stdout.strip()


def fetch(path: Path, prune: bool = True) -> None:
    args = ["fetch"]
    if prune:
        args.append("--prune")
    run_git(args, cwd=path, capture=False)


def has_uncommitted_changes(path: Path) -> bool:
    proc = run_git(["status", "--porcelain", "--untracked-files=no"], cwd=path)
    return bool(proc.stdout.strip())


def stash_push(path: Path, message: str) -> int:
    return run_git(["stash", "push", "-m", message], cwd=path, check=False, capture=False).returncode


def stash_pop(path: Path) -> int:
    return run_git(["stash", "pop"], cwd=path, check=False, capture=False).returncode


def checkout(path: Path, ref: str) -> int:
    return run_git(["checkout", ref], cwd=path, check=False, capture=False).returncode


def merge(path: Path, ref: str) -> int:
    return run_git(["merge", ref], cwd=path, check=False, capture=False).returncode


def rebase(path: Path, ref: str) -> int:
    return run_git(["rebase", ref], cwd=path, check=False, capture=False).returncode


__all__ = [
    "run_git",
    "rev_parse_toplevel",
    "show_prefix",
    "full_hash",
    "symbolic_full_name",
    "object_type",
    "current_branch",
    "config_get",
    "remote_url",
    "merge_base",
    "fetch",
    "has_uncommitted_changes",
    "stash_push",
    "stash_pop",
    "checkout",
    "merge",
    "rebase",
]
