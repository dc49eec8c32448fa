"""Print a URL and hand it to the platform's opener."""

from __future__ import annotations

import logging
import subprocess

import typer

from .config import Environment
from .exceptions import OpenerError

logger = logging.getLogger(__name__)


def opener_command(env: Environment, url: str) -> list[str]:
    override = env.opener_override()
    if override:
        return [*override, url]
    if env.system == "Darwin":
        return ["open", url]
    if env.system == "Windows" or env.is_wsl:
        return ["cmd.exe", "/c", "start", "", url]
    return ["xdg-open", url]


def launch(url: str, env: Environment, *, dry_run: bool = False) -> None:
    typer.echo(url)
    if dry_run:
        return
    command = opener_command(env, url)
    logger.debug("Running command: %s", " ".join(command))
    try:
        proc = subprocess.run(command, check=False)
    except OSError as exc:
        raise OpenerError(f"Unable to run {command[0]}: {exc}") from exc
    if proc.returncode != 0:
        raise OpenerError(f"{command[0]} exited with status {proc.returncode}")
