"""Remote URL normalization and per-host web URL construction."""

from __future__ import annotations

import re
from urllib.parse import quote, urlparse

from .config import DEFAULT_REMOTE, Environment
from .exceptions import InvalidArgument, RemoteResolutionError, UnsupportedHost
from .models import Host, Mode, ObjectKind, RemoteDescriptor, RevisionDescriptor

_URL_PREFIXES = ("git@", "ssh://", "http://", "https://")
_ISSUE_ID = re.compile(r"#?(\d+)")

# (GitHub, GitLab) path templates
_TEMPLATES: dict[tuple[Mode, bool], tuple[str, str]] = {
    (Mode.ISSUE, False): ("/issues", "/-/issues"),
    (Mode.ISSUE, True): ("/issues/{item}", "/-/issues/{item}"),
    (Mode.PULL_REQUEST, False): ("/pulls", "/-/merge_requests"),
    (Mode.PULL_REQUEST, True): ("/pull/{item}", "/-/merge_requests/{item}"),
    (Mode.RELEASE, False): ("/releases", "/-/releases"),
    (Mode.RELEASE, True): ("/releases/tag/{item}", "/-/releases/{item}"),
}


def looks_like_url(value: str) -> bool:
    return value.startswith(_URL_PREFIXES)


def normalize_remote_url(raw: str) -> tuple[str, Host]:
    """Return the ``https://host/org/repo`` form of a remote URL and its host."""

    remote = raw.strip()
    if remote.startswith("git@"):
        host_token = remote.split("@", 1)[1]
        host, _, path = host_token.partition(":")
        scheme = "https"
    else:
        parsed = urlparse(remote)
        host = parsed.hostname or parsed.netloc
        path = parsed.path
        scheme = "https" if parsed.scheme in ("ssh", "git", "https", "") else parsed.scheme
    path = path.strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    path = path.rstrip("/")
    if not host or not path:
        raise RemoteResolutionError(f"Unsupported remote URL: {raw}")
    base_url = f"{scheme}://{host}/{path}"
    return base_url, detect_host(base_url, host)


def detect_host(base_url: str, hostname: str) -> Host:
    for host in Host:
        if host.value in base_url:
            return host
    raise UnsupportedHost(hostname)


def resolve_remote(
    env: Environment,
    remote: str | None = None,
    descriptor: RevisionDescriptor | None = None,
) -> RemoteDescriptor:
    """Find the remote to browse and normalize its URL.

    Without an explicit ``remote`` the remote configured for the named branch
    (or the checked-out branch) is used, falling back to ``origin``.
    """

    name = remote
    if not name:
        branch = str(descriptor.ref) if descriptor and descriptor.is_named_ref else env.current_branch()
        if branch:
            name = env.config_value(f"branch.{branch}.remote")
        name = name or DEFAULT_REMOTE
    if looks_like_url(name):
        raw_url = name
    else:
        raw_url = env.remote_url(name)
    if not raw_url:
        raise RemoteResolutionError(f"No URL configured for remote '{name}'")
    base_url, host = normalize_remote_url(raw_url)
    return RemoteDescriptor(name=name, raw_url=raw_url, base_url=base_url, host=host)


def parse_item_id(value: str) -> str:
    """Validate an issue or pull request id such as ``42`` or ``#42``."""

    match = _ISSUE_ID.fullmatch(value.strip())
    if not match:
        raise InvalidArgument(f"Invalid id: {value}")
    return match.group(1)


def build_url(
    remote: RemoteDescriptor,
    mode: Mode,
    *,
    item: str | None = None,
    descriptor: RevisionDescriptor | None = None,
    kind: ObjectKind | None = None,
) -> str:
    gitlab = remote.host is Host.GITLAB
    if mode is Mode.HOME:
        return remote.base_url
    if mode is Mode.REVISION:
        if descriptor is None or kind is None:
            raise InvalidArgument("A revision is required to build a revision URL")
        marker = "/-" if gitlab else ""
        rev = quote(str(descriptor.ref), safe="/")
        path = quote(descriptor.path or "", safe="/")
        url = f"{remote.base_url}{marker}/{kind.value}/{rev}/{path}"
        return url.rstrip("/")
    if item and mode in (Mode.ISSUE, Mode.PULL_REQUEST):
        item = parse_item_id(item)
    elif item:
        item = quote(item, safe="/")
    templates = _TEMPLATES[(mode, bool(item))]
    template = templates[1] if gitlab else templates[0]
    return remote.base_url + template.format(item=item)
