"""Runtime environment: working directory, environment variables and git metadata."""

from __future__ import annotations

import os
import platform
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from . import git
from .exceptions import PathNotFound

DEFAULT_BRANCH = "master"
DEFAULT_BRANCH_FILE = ".default-branch"
DEFAULT_REMOTE = "origin"
OPENER_ENV_VAR = "GIT_BROWSE_OPENER"


@dataclass
class Environment:
    """Everything the tools read from the outside world.

    Resolver, URL builder, launcher and sync all go through this object so
    tests can substitute a fake one.
    """

    cwd: Path = field(default_factory=Path.cwd)
    variables: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))
    system: str = field(default_factory=platform.system)
    kernel: str = field(default_factory=lambda: f"{platform.release()} {platform.version()}")

    # filesystem

    def exists(self, path: str) -> bool:
        return (self.cwd / path).exists()

    def is_dir(self, path: str) -> bool:
        return (self.cwd / path).is_dir()

    def repo_prefix(self, directory: str) -> str:
        """Return the root-relative prefix of ``directory`` (``""`` or ``"a/b/"``)."""

        target = self.cwd / directory
        if not target.is_dir():
            raise PathNotFound(f"No such directory: {directory}")
        prefix = git.show_prefix(target)
        if prefix is None:
            raise PathNotFound(f"Path is outside the repository: {directory}")
        return prefix

    def toplevel(self) -> Path:
        return git.rev_parse_toplevel(self.cwd)

    # revisions

    def full_hash(self, rev: str) -> str | None:
        return git.full_hash(self.cwd, rev)

    def symbolic_name(self, rev: str) -> str | None:
        return git.symbolic_full_name(self.cwd, rev)

    def object_type(self, spec: str) -> str | None:
        return git.object_type(self.cwd, spec)

    def current_branch(self) -> str | None:
        return git.current_branch(self.cwd)

    def config_value(self, key: str) -> str | None:
        return git.config_get(self.cwd, key)

    def remote_url(self, name: str) -> str | None:
        return git.remote_url(self.cwd, name)

    def merge_base(self, first: str, second: str) -> str:
        return git.merge_base(self.cwd, first, second)

    # mutations used by sync

    def fetch(self) -> None:
        git.fetch(self.cwd, prune=True)

    def is_dirty(self) -> bool:
        return git.has_uncommitted_changes(self.cwd)

    def stash_push(self, message: str) -> int:
        return git.stash_push(self.cwd, message)

    def stash_pop(self) -> int:
        return git.stash_pop(self.cwd)

    def checkout(self, ref: str) -> int:
        return git.checkout(self.cwd, ref)

    def merge(self, ref: str) -> int:
        return git.merge(self.cwd, ref)

    def rebase(self, ref: str) -> int:
        return git.rebase(self.cwd, ref)

    # launcher

    def opener_override(self) -> list[str] | None:
        raw = self.variables.get(OPENER_ENV_VAR, "").strip()
        if not raw:
            return None
        return shlex.split(raw)

    @property
    def is_wsl(self) -> bool:
        return self.system == "Linux" and "microsoft" in self.kernel.lower()


def default_branch(env: Environment) -> str:
    """Branch named in ``.default-branch`` at the repository root, else ``master``."""

    marker = env.toplevel() / DEFAULT_BRANCH_FILE
    try:
        content = marker.read_text(encoding="utf-8")
    except FileNotFoundError:
        return DEFAULT_BRANCH
    for line in content.splitlines():
        name = line.strip()
        if name:
            return name
    return DEFAULT_BRANCH
