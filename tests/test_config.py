from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from theme_deploy.common import ThemeDeployError
from theme_deploy.config import load_run_settings, load_theme_config


class LoadThemeConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._temp = tempfile.TemporaryDirectory()
        self.addCleanup(self._temp.cleanup)
        self.root = Path(self._temp.name)

    def test_reads_selected_section_from_config_file(self) -> None:
        (self.root / "config.yml").write_text(
            "production:\n  api_key: pk\n  password: pp\n  store: prod.myshopify.com\n"
            "staging:\n  api_key: sk\n  password: sp\n  store: stage.myshopify.com\n",
            encoding="utf-8",
        )
        config = load_theme_config(self.root, "staging")
        self.assertEqual(config.api_key, "sk")
        self.assertEqual(config.store, "stage.myshopify.com")

    def test_missing_section_raises(self) -> None:
        (self.root / "config.yml").write_text("production:\n  api_key: pk\n", encoding="utf-8")
        with self.assertRaises(ThemeDeployError):
            load_theme_config(self.root, "staging")

    def test_incomplete_section_raises(self) -> None:
        (self.root / "config.yml").write_text("production:\n  api_key: pk\n", encoding="utf-8")
        with self.assertRaises(ThemeDeployError):
            load_theme_config(self.root, "production")

    def test_falls_back_to_environment_variables(self) -> None:
        env = {
            "SHOPIFY_API_KEY": "ek",
            "SHOPIFY_PASSWORD": "ep",
            "SHOPIFY_STORE": "env.myshopify.com",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            config = load_theme_config(self.root, "production")
        self.assertEqual((config.api_key, config.password, config.store), ("ek", "ep", "env.myshopify.com"))

    def test_missing_environment_variables_raise(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ThemeDeployError):
                load_theme_config(self.root, "production")


class LoadRunSettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = load_run_settings(Path("/project"))
        self.assertEqual(settings.config_env, "production")
        self.assertEqual(settings.stage, "backup")
        self.assertFalse(settings.is_quick_test)
        self.assertEqual(settings.base_theme_id, "")
        self.assertEqual(settings.scratch_dir, Path("/project/tmp"))
        self.assertEqual(settings.deploy_command, ("brrl", "deploy"))

    def test_reads_flags(self) -> None:
        env = {
            "CONFIG_ENV": "staging",
            "STAGE": "Deploy",
            "IS_QUICK_TEST": "1",
            "BASE_THEME": " 123 ",
            "DEPLOY_COMMAND": "npx brrl deploy",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = load_run_settings(Path("/project"))
        self.assertEqual(settings.config_env, "staging")
        self.assertEqual(settings.stage, "deploy")
        self.assertTrue(settings.is_quick_test)
        self.assertEqual(settings.base_theme_id, "123")
        self.assertEqual(settings.deploy_command, ("npx", "brrl", "deploy"))

    def test_quick_test_off_values(self) -> None:
        for value in ("", "0", "false", "No"):
            with mock.patch.dict(os.environ, {"IS_QUICK_TEST": value}, clear=True):
                self.assertFalse(load_run_settings(Path("/project")).is_quick_test, value)


if __name__ == "__main__":
    unittest.main()
