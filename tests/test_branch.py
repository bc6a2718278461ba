from __future__ import annotations

import unittest
from unittest import mock

from theme_deploy.branch import (
    BranchKind,
    classify_branch,
    git_base_for,
    inspect_branch,
    parse_cherry_output,
    parse_current_branch,
)
from theme_deploy.common import ThemeDeployError


class ClassifyBranchTests(unittest.TestCase):
    def test_develop_wins_over_feature(self) -> None:
        # First match wins: `develop` is checked before feature words.
        self.assertIs(classify_branch("feature/develop-tools"), BranchKind.DEVELOP)

    def test_feature_words_case_insensitive(self) -> None:
        self.assertIs(classify_branch("feature/cart"), BranchKind.FEATURE)
        self.assertIs(classify_branch("HOTFIX/price"), BranchKind.FEATURE)
        self.assertIs(classify_branch("BugFix/nav"), BranchKind.FEATURE)

    def test_master_and_other(self) -> None:
        self.assertIs(classify_branch("Master"), BranchKind.MASTER)
        self.assertIs(classify_branch("release/1.0"), BranchKind.OTHER)
        self.assertIs(classify_branch(""), BranchKind.OTHER)

    def test_git_base(self) -> None:
        self.assertEqual(git_base_for(BranchKind.DEVELOP), "master")
        self.assertEqual(git_base_for(BranchKind.FEATURE), "develop")
        self.assertEqual(git_base_for(BranchKind.MASTER), "develop")


class ParseGitOutputTests(unittest.TestCase):
    def test_parses_marked_branch(self) -> None:
        output = "  develop\n* feature/cart\n  master\n"
        self.assertEqual(parse_current_branch(output), "feature/cart")

    def test_no_marked_branch(self) -> None:
        self.assertEqual(parse_current_branch("  develop\n  master\n"), "")

    def test_parses_cherry_lines(self) -> None:
        output = "+ abc1234 Add cart drawer\n- def5678 Already upstream\n\n+ 9999999 Fix price \n"
        self.assertEqual(
            parse_cherry_output(output),
            ["abc1234 Add cart drawer", "def5678 Already upstream", "9999999 Fix price"],
        )


class InspectBranchTests(unittest.TestCase):
    def test_runs_git_commands_in_order(self) -> None:
        outputs = {
            ("git", "branch"): "  develop\n* hotfix/price\n",
            ("git", "fetch", "--all"): "",
            ("git", "cherry", "-v", "develop"): "+ abc1234 Fix price\n",
        }
        calls = []

        def _fake_run(args, **kwargs):
            calls.append(tuple(args))
            return outputs[tuple(args)]

        with mock.patch("theme_deploy.branch.run_cmd", side_effect=_fake_run), mock.patch(
            "builtins.print"
        ):
            info = inspect_branch(cwd="/repo")

        self.assertEqual(info.name, "hotfix/price")
        self.assertIs(info.kind, BranchKind.FEATURE)
        self.assertEqual(info.commits, ["abc1234 Fix price"])
        self.assertEqual(calls, list(outputs.keys()))

    def test_git_failure_propagates(self) -> None:
        with mock.patch(
            "theme_deploy.branch.run_cmd", side_effect=ThemeDeployError("Command failed: git branch")
        ), mock.patch("builtins.print"):
            with self.assertRaises(ThemeDeployError):
                inspect_branch()


if __name__ == "__main__":
    unittest.main()
