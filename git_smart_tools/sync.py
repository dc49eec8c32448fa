"""Bring the default branch up to date with its upstream."""

from __future__ import annotations

import logging
from contextlib import ExitStack, contextmanager
from datetime import datetime
from typing import Iterator

from rich.console import Console

from .config import Environment, default_branch
from .exceptions import GitCommandError, UnknownRevision
from .models import SyncOutcome, SyncSnapshot, SyncState

logger = logging.getLogger(__name__)

STASH_PREFIX = "git-sync-default-branch"


def sync_default_branch(env: Environment, console: Console | None = None) -> SyncOutcome:
    """Fetch, classify and integrate the default branch.

    Fetch failures raise :class:`GitCommandError` before anything is changed.
    Merge and rebase failures are reported through ``returncode`` only; the
    original branch and any stash are restored afterwards either way.
    """

    console = console or Console()
    env.fetch()
    branch = default_branch(env)
    upstream = f"{branch}@{{upstream}}"
    snapshot = take_snapshot(env, branch, upstream)
    state = snapshot.classify()
    if state is SyncState.UP_TO_DATE:
        console.print(f"{branch} is up to date.")
        return SyncOutcome(state)
    if state is SyncState.AHEAD:
        console.print(f"{branch} is ahead of {upstream}; nothing to do.")
        return SyncOutcome(state)

    console.print(f"{branch} is {state.value}; updating from {upstream}.")
    with ExitStack() as stack:
        stack.enter_context(stashed_changes(env))
        stack.enter_context(checked_out(env, branch))
        if state is SyncState.BEHIND:
            returncode = env.merge(upstream)
        else:
            returncode = env.rebase(upstream)
    if returncode != 0:
        logger.warning("Integrating %s into %s exited with status %s", upstream, branch, returncode)
    return SyncOutcome(state, returncode)


def take_snapshot(env: Environment, branch: str, upstream: str) -> SyncSnapshot:
    local = env.full_hash(branch)
    remote = env.full_hash(upstream)
    if local is None or remote is None:
        missing = branch if local is None else upstream
        raise UnknownRevision(f"Unknown revision: {missing}")
    return SyncSnapshot(local=local, remote=remote, merge_base=env.merge_base(local, remote))


@contextmanager
def stashed_changes(env: Environment) -> Iterator[bool]:
    """Stash uncommitted changes for the duration of the block."""

    has_stash = False
    if env.is_dirty():
        message = f"{STASH_PREFIX} {datetime.now().isoformat(timespec='seconds')}"
        status = env.stash_push(message)
        if status == 0:
            has_stash = True
        else:
            logger.warning("git stash exited with status %s; continuing without a stash", status)
    try:
        yield has_stash
    finally:
        if has_stash and env.stash_pop() != 0:
            logger.warning("git stash pop failed; your changes remain in the stash")


@contextmanager
def checked_out(env: Environment, branch: str) -> Iterator[None]:
    """Switch to ``branch`` for the block, then back to the original ref."""

    original = env.current_branch() or env.full_hash("HEAD")
    switched = False
    if original != branch:
        status = env.checkout(branch)
        if status != 0:
            raise GitCommandError(["git", "checkout", branch], status)
        switched = True
    try:
        yield
    finally:
        if switched and original and env.checkout(original) != 0:
            logger.warning("Could not switch back to %s", original)
