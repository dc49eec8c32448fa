"""Tests for the RepoPath helpers."""

from __future__ import annotations

import unittest

from git_smart_tools.fs import RepoPath, join_prefix


class RepoPathTests(unittest.TestCase):
    def test_parse_keeps_directory_form(self) -> None:
        path = RepoPath.parse("sub//dir/")

        self.assertEqual(path.segments, ("sub", "dir"))
        self.assertTrue(path.trailing_slash)
        self.assertEqual(str(path), "sub/dir/")
        self.assertEqual(path.name, "")

    def test_containing_directory_of_file(self) -> None:
        self.assertEqual(str(RepoPath.parse("../lib/util.py").containing_directory()), "../lib")
        self.assertEqual(str(RepoPath.parse("util.py").containing_directory()), ".")
        self.assertEqual(str(RepoPath.parse("/srv/repo/util.py").containing_directory()), "/srv/repo")

    def test_containing_directory_of_directory_form(self) -> None:
        self.assertEqual(str(RepoPath.parse("./").containing_directory()), ".")
        self.assertEqual(str(RepoPath.parse("..").as_directory().containing_directory()), "..")

    def test_cwd_relative_detection(self) -> None:
        self.assertTrue(RepoPath.parse("./x").is_cwd_relative)
        self.assertTrue(RepoPath.parse("..").is_dot_only)
        self.assertFalse(RepoPath.parse(".github/workflows").is_cwd_relative)
        self.assertFalse(RepoPath.parse("/abs").is_cwd_relative)

    def test_join_prefix(self) -> None:
        self.assertEqual(join_prefix("a/b/", "file.txt"), "a/b/file.txt")
        self.assertEqual(join_prefix("a/b/", ""), "a/b")
        self.assertEqual(join_prefix("", "file.txt"), "file.txt")
        self.assertEqual(join_prefix("", ""), "")


if __name__ == "__main__":
    unittest.main()
