"""Path helpers for turning user-supplied paths into repository paths."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class RepoPath:
    """A slash-separated path split into segments.

    ``trailing_slash`` marks a path written in directory form (``sub/``), in
    which case the final segment is empty and the path names its own
    containing directory.
    """

    segments: tuple[str, ...] = ()
    absolute: bool = False
    trailing_slash: bool = False

    @classmethod
    def parse(cls, text: str) -> "RepoPath":
        segments = tuple(part for part in text.split("/") if part)
        absolute = text.startswith("/")
        trailing = text.endswith("/") and bool(segments)
        return cls(segments=segments, absolute=absolute, trailing_slash=trailing)

    def __str__(self) -> str:
        body = "/".join(self.segments)
        if self.absolute:
            body = "/" + body
        if self.trailing_slash:
            body += "/"
        return body

    @property
    def is_cwd_relative(self) -> bool:
        """True for paths spelled ``.``, ``..``, ``./x`` or ``../x``."""

        return not self.absolute and bool(self.segments) and self.segments[0] in (".", "..")

    @property
    def is_dot_only(self) -> bool:
        return not self.absolute and len(self.segments) == 1 and self.segments[0] in (".", "..")

    @property
    def name(self) -> str:
        if self.trailing_slash or not self.segments:
            return ""
        return self.segments[-1]

    def as_directory(self) -> "RepoPath":
        if not self.segments:
            return self
        return replace(self, trailing_slash=True)

    def without_trailing_slash(self) -> "RepoPath":
        return replace(self, trailing_slash=False)

    def containing_directory(self) -> "RepoPath":
        """Directory that holds :attr:`name`; ``.`` when there is no parent."""

        if self.trailing_slash:
            return self.without_trailing_slash()
        parent = self.segments[:-1]
        if not parent and not self.absolute:
            return RepoPath(segments=(".",))
        return RepoPath(segments=parent, absolute=self.absolute)

    def join(self, name: str) -> "RepoPath":
        if not name:
            return self
        return RepoPath(segments=self.segments + (name,), absolute=self.absolute)


def join_prefix(prefix: str, name: str) -> str:
    """Combine a ``git rev-parse --show-prefix`` value with a final segment.

    The result is root-relative with no leading or trailing slash; an empty
    string is the root tree.
    """

    return str(RepoPath.parse(prefix).join(name).without_trailing_slash())
