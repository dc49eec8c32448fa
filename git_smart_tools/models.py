"""Dataclasses and enums shared across modules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Host(Enum):
    GITHUB = "github.com"
    GITLAB = "gitlab.com"


class ObjectKind(Enum):
    COMMIT = "commit"
    TREE = "tree"
    BLOB = "blob"


class Mode(Enum):
    HOME = "home"
    ISSUE = "issue"
    PULL_REQUEST = "pull-request"
    RELEASE = "release"
    REVISION = "revision"


class SyncState(Enum):
    UP_TO_DATE = "up to date"
    AHEAD = "ahead"
    BEHIND = "behind"
    DIVERGED = "diverged"


@dataclass(frozen=True)
class RemoteDescriptor:
    """A remote resolved to the web URL of its repository."""

    name: str
    raw_url: str
    base_url: str
    host: Host


@dataclass(frozen=True)
class NamedRef:
    """A branch or tag name usable in a URL."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class HashRef:
    """A full object hash for revisions without a branch or tag name."""

    sha: str

    def __str__(self) -> str:
        return self.sha


Ref = Union[NamedRef, HashRef]


@dataclass(frozen=True)
class RevisionDescriptor:
    """Canonical ``(revision, path)`` pair produced by the resolver.

    ``path`` is ``None`` to browse the revision itself, ``""`` for the root
    tree, otherwise a root-relative path without surrounding slashes.
    """

    requested: str
    ref: Ref
    sha: str
    path: str | None = None

    @property
    def is_named_ref(self) -> bool:
        return isinstance(self.ref, NamedRef)


@dataclass(frozen=True)
class SyncSnapshot:
    """Commit hashes compared by the sync command."""

    local: str
    remote: str
    merge_base: str

    def classify(self) -> SyncState:
        if self.local == self.remote:
            return SyncState.UP_TO_DATE
        if self.merge_base == self.remote:
            return SyncState.AHEAD
        if self.merge_base == self.local:
            return SyncState.BEHIND
        return SyncState.DIVERGED


@dataclass(frozen=True)
class SyncOutcome:
    state: SyncState
    returncode: int = 0
