"""End-to-end tests for the git-browse and git-sync-default-branch CLIs."""

from __future__ import annotations

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

from typer.testing import CliRunner

from fakes import SHA, FakeEnvironment

from git_smart_tools.cli import browse_app, browse_main, sync_app
from git_smart_tools.exceptions import GitCommandError


def _github_env(**overrides) -> FakeEnvironment:
    defaults = dict(
        remotes={"origin": "git@github.com:org/repo.git"},
        hashes={"HEAD": SHA, "main": SHA},
        symbolic={"HEAD": "refs/heads/main", "main": "refs/heads/main"},
        objects={f"{SHA}^{{}}": "commit", f"{SHA}:docs/guide.md": "blob"},
    )
    defaults.update(overrides)
    return FakeEnvironment(**defaults)


class BrowseCliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()

    def test_home_page(self) -> None:
        result = self.runner.invoke(browse_app, ["-n"], obj=_github_env())

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "https://github.com/org/repo")

    def test_branch_opens_tree(self) -> None:
        result = self.runner.invoke(browse_app, ["-n", "main"], obj=_github_env())

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "https://github.com/org/repo/tree/main")

    def test_blob_with_revision_path(self) -> None:
        result = self.runner.invoke(browse_app, ["-n", "main:docs/guide.md"], obj=_github_env())

        self.assertEqual(result.output.strip(), "https://github.com/org/repo/blob/main/docs/guide.md")

    def test_issue_with_id(self) -> None:
        result = self.runner.invoke(browse_app, ["-n", "-i", "42"], obj=_github_env())

        self.assertEqual(result.output.strip(), "https://github.com/org/repo/issues/42")

    def test_gitlab_merge_requests(self) -> None:
        env = _github_env(remotes={"origin": "https://gitlab.com/org/repo.git"})

        result = self.runner.invoke(browse_app, ["-n", "-p"], obj=env)

        self.assertEqual(result.output.strip(), "https://gitlab.com/org/repo/-/merge_requests")

    def test_mode_ignores_extra_positionals(self) -> None:
        result = self.runner.invoke(browse_app, ["-n", "-t", "v2.0", "ignored"], obj=_github_env())

        self.assertEqual(result.output.strip(), "https://github.com/org/repo/releases/tag/v2.0")

    def test_remote_option(self) -> None:
        env = _github_env(remotes={"upstream": "https://gitlab.com/team/repo"})

        result = self.runner.invoke(browse_app, ["-n", "-r", "upstream", "-i"], obj=env)

        self.assertEqual(result.output.strip(), "https://gitlab.com/team/repo/-/issues")

    def test_unsupported_host(self) -> None:
        env = _github_env(remotes={"origin": "https://bitbucket.org/org/repo"})

        result = self.runner.invoke(browse_app, ["-n"], obj=env)

        self.assertEqual(result.exit_code, 1)
        self.assertIn("bitbucket.org", result.output)
        self.assertNotIn("https://", result.output)

    def test_invalid_issue_id(self) -> None:
        result = self.runner.invoke(browse_app, ["-n", "-i", "abc"], obj=_github_env())

        self.assertEqual(result.exit_code, 1)


class BrowseMainTests(unittest.TestCase):
    def setUp(self) -> None:
        self.stderr = io.StringIO()

    def _run(self, argv: list[str]) -> int:
        with redirect_stdout(io.StringIO()), redirect_stderr(self.stderr):
            with self.assertRaises(SystemExit) as ctx:
                browse_main(argv)
        return ctx.exception.code

    def test_issue_and_pull_request_are_exclusive(self) -> None:
        self.assertEqual(self._run(["-i", "-p"]), 1)
        self.assertIn("mutually exclusive", self.stderr.getvalue())
        self.assertIn("Usage:", self.stderr.getvalue())

    def test_unknown_flag(self) -> None:
        self.assertEqual(self._run(["--bogus"]), 1)
        self.assertIn("--bogus", self.stderr.getvalue())

    def test_help(self) -> None:
        self.assertEqual(self._run(["-h"]), 0)


class SyncCliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()

    def test_up_to_date(self) -> None:
        env = FakeEnvironment(hashes={"master": SHA, "master@{upstream}": SHA})

        result = self.runner.invoke(sync_app, [], obj=env)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("master is up to date", result.output)

    def test_failed_integration_exit_code(self) -> None:
        env = FakeEnvironment(
            hashes={"master": SHA, "master@{upstream}": "0" * 40},
            merge_base="f" * 40,
            integrate_status=1,
        )

        result = self.runner.invoke(sync_app, [], obj=env)

        self.assertEqual(result.exit_code, 1)
        self.assertIn(("rebase", "master@{upstream}"), env.calls)

    def test_fetch_failure_propagates_exit_code(self) -> None:
        env = FakeEnvironment(fetch_error=GitCommandError(["git", "fetch", "--prune"], 128))

        result = self.runner.invoke(sync_app, [], obj=env)

        self.assertEqual(result.exit_code, 128)


if __name__ == "__main__":
    unittest.main()
