"""Turn ``git-browse`` positional arguments into a revision and a repository path."""

from __future__ import annotations

from typing import Sequence

from .config import Environment
from .exceptions import InvalidArgument, PathNotFound, UnknownRevision
from .fs import RepoPath, join_prefix
from .models import HashRef, NamedRef, ObjectKind, Ref, RevisionDescriptor

_NAMED_PREFIXES = ("refs/heads/", "refs/tags/")
_REMOTE_PREFIX = "refs/remotes/"


def resolve(args: Sequence[str], env: Environment) -> RevisionDescriptor | None:
    """Resolve ``<rev>``, ``<rev>:<path>``, ``<rev> <path>`` or ``<path>``.

    Returns ``None`` when no arguments were given.
    """

    rev, path = split_arguments(args, env)
    if rev is None:
        return None
    return describe(rev, path, env)


def split_arguments(args: Sequence[str], env: Environment) -> tuple[str | None, str | None]:
    if not args:
        return None, None
    if len(args) > 2:
        raise InvalidArgument("Expected at most two arguments: <rev> <path>")
    if len(args) == 2:
        rev, raw_path = args
        if ":" in rev:
            raise InvalidArgument(f"Revision must not contain ':' when a path is given: {rev}")
        return rev, cwd_relative_path(raw_path, env)

    (arg,) = args
    if arg.startswith(":/"):
        return arg, None
    if arg.startswith(":"):
        raise InvalidArgument(f"Index paths are not supported: {arg}")
    if ":" in arg:
        rev, _, path_part = arg.rpartition(":")
        return rev, revision_relative_path(path_part, env)
    if env.exists(arg):
        return "HEAD", cwd_relative_path(arg, env)
    return arg, None


def revision_relative_path(path_part: str, env: Environment) -> str:
    """Resolve the ``<path>`` of ``<rev>:<path>``.

    Only ``./`` and ``../`` paths are taken relative to the working directory;
    anything else is already relative to the repository root.
    """

    path = RepoPath.parse(path_part)
    if path.is_dot_only:
        path = path.as_directory()
    if not path.is_cwd_relative:
        return str(path.without_trailing_slash())
    prefix = env.repo_prefix(str(path.containing_directory()))
    return join_prefix(prefix, path.name)


def cwd_relative_path(raw: str, env: Environment) -> str:
    """Resolve a filesystem path against the working directory."""

    path = RepoPath.parse(raw)
    if env.is_dir(raw):
        path = path.as_directory()
    prefix = env.repo_prefix(str(path.containing_directory()))
    return join_prefix(prefix, path.name)


def describe(rev: str, path: str | None, env: Environment) -> RevisionDescriptor:
    sha = env.full_hash(rev)
    if sha is None:
        raise UnknownRevision(f"Unknown revision: {rev}")
    name = short_ref_name(rev, env)
    ref: Ref = NamedRef(name) if name else HashRef(sha)
    if path is not None and env.object_type(f"{sha}:{path}") is None:
        raise PathNotFound(f"Path '{path}' does not exist in {rev}")
    return RevisionDescriptor(requested=rev, ref=ref, sha=sha, path=path)


def short_ref_name(rev: str, env: Environment) -> str | None:
    """Branch or tag name of ``rev``, if it is one."""

    full = env.symbolic_name(rev)
    if not full:
        return None
    for prefix in _NAMED_PREFIXES:
        if full.startswith(prefix):
            return full[len(prefix):]
    if full.startswith(_REMOTE_PREFIX):
        # refs/remotes/<remote>/<branch>
        _, _, branch = full[len(_REMOTE_PREFIX):].partition("/")
        return branch or None
    return None


def object_kind(descriptor: RevisionDescriptor, env: Environment) -> ObjectKind:
    if descriptor.path is None:
        spec = f"{descriptor.sha}^{{}}"
    else:
        spec = f"{descriptor.sha}:{descriptor.path}"
    raw = env.object_type(spec)
    if raw == ObjectKind.TREE.value:
        kind = ObjectKind.TREE
    elif raw == ObjectKind.BLOB.value:
        kind = ObjectKind.BLOB
    else:
        kind = ObjectKind.COMMIT
    if kind is ObjectKind.COMMIT and descriptor.is_named_ref and descriptor.path is None:
        return ObjectKind.TREE
    return kind
