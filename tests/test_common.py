from __future__ import annotations

import os
import subprocess
import unittest
from unittest import mock

from theme_deploy.common import ThemeDeployError, env_flag, mask_secrets, optional_env, run_cmd


class RunCmdTests(unittest.TestCase):
    def test_returns_stdout(self) -> None:
        completed = subprocess.CompletedProcess(["git", "branch"], 0, stdout="* main\n", stderr="")
        with mock.patch("theme_deploy.common.subprocess.run", return_value=completed) as run:
            self.assertEqual(run_cmd(["git", "branch"], cwd="/repo"), "* main\n")
        self.assertEqual(run.call_args.kwargs["cwd"], "/repo")

    def test_failure_masks_secrets(self) -> None:
        error = subprocess.CalledProcessError(
            1, ["theme", "new", "--password", "hunter2"], output="", stderr="bad password hunter2"
        )
        with mock.patch("theme_deploy.common.subprocess.run", side_effect=error):
            with self.assertRaises(ThemeDeployError) as ctx:
                run_cmd(["theme", "new", "--password", "hunter2"], secrets=["hunter2"])
        self.assertNotIn("hunter2", str(ctx.exception))
        self.assertIn("Command failed: theme new", str(ctx.exception))

    def test_missing_executable(self) -> None:
        with mock.patch("theme_deploy.common.subprocess.run", side_effect=FileNotFoundError()):
            with self.assertRaises(ThemeDeployError):
                run_cmd(["brrl", "deploy"])

    def test_mask_secrets_skips_empty_values(self) -> None:
        self.assertEqual(mask_secrets("abc", ["", "b"]), "a***c")


class EnvHelperTests(unittest.TestCase):
    def test_optional_env_default(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(optional_env("STAGE", "backup"), "backup")

    def test_env_flag_values(self) -> None:
        cases = {"1": True, "yes": True, "TRUE": True, "": False, "0": False, "False": False, "no": False}
        for value, expected in cases.items():
            with mock.patch.dict(os.environ, {"IS_QUICK_TEST": value}, clear=True):
                self.assertIs(env_flag("IS_QUICK_TEST"), expected, value)


if __name__ == "__main__":
    unittest.main()
