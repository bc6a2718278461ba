"""
Script: theme_deploy/config.py
What: Loads store credentials and run-mode settings for one deployment run.
Doing: Reads `config.yml` (or `SHOPIFY_*` env vars) and the `CONFIG_ENV`/`STAGE`/`IS_QUICK_TEST`/`BASE_THEME` flags.
Why: Every later step needs the same credentials and flags; reading them once keeps the run consistent.
Goal: Provide immutable settings objects that the rest of the workflow threads through.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path

import yaml

from theme_deploy.common import ThemeDeployError, env_flag, optional_env


CONFIG_FILE_NAME = "config.yml"
SCRATCH_DIR_NAME = "tmp"
DEFAULT_DEPLOY_COMMAND = "brrl deploy"


@dataclass(frozen=True)
class ThemeConfig:
    api_key: str
    password: str
    store: str

    @property
    def secrets(self) -> tuple[str, str]:
        return (self.api_key, self.password)


@dataclass(frozen=True)
class RunSettings:
    config_env: str
    stage: str
    is_quick_test: bool
    base_theme_id: str
    project_root: Path
    themekit_bin: str = "theme"
    deploy_command: tuple[str, ...] = tuple(shlex.split(DEFAULT_DEPLOY_COMMAND))

    @property
    def scratch_dir(self) -> Path:
        return self.project_root / SCRATCH_DIR_NAME


def _validate_credentials(values: dict, source: str) -> ThemeConfig:
    missing = [key for key in ("api_key", "password", "store") if not values.get(key)]
    if missing:
        raise ThemeDeployError(f"Missing store credentials in {source}: {', '.join(missing)}")
    return ThemeConfig(
        api_key=str(values["api_key"]),
        password=str(values["password"]),
        store=str(values["store"]),
    )


def load_theme_config(project_root: Path, config_env: str) -> ThemeConfig:
    """
    Load store credentials for `config_env`.

    `config.yml` is keyed by environment name. When the file does not exist,
    credentials come from `SHOPIFY_API_KEY`, `SHOPIFY_PASSWORD` and
    `SHOPIFY_STORE` instead.
    """
    config_path = project_root / CONFIG_FILE_NAME
    if not config_path.exists():
        return _validate_credentials(
            {
                "api_key": optional_env("SHOPIFY_API_KEY"),
                "password": optional_env("SHOPIFY_PASSWORD"),
                "store": optional_env("SHOPIFY_STORE"),
            },
            "SHOPIFY_* environment variables",
        )

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ThemeDeployError(f"Could not parse {config_path}") from exc

    section = data.get(config_env) if isinstance(data, dict) else None
    if not isinstance(section, dict):
        raise ThemeDeployError(f"No '{config_env}' section found in {config_path}")
    return _validate_credentials(section, f"{config_path} [{config_env}]")


def load_run_settings(project_root: Path | None = None) -> RunSettings:
    """Read run-mode flags from the environment."""
    root = project_root if project_root is not None else Path.cwd()
    return RunSettings(
        config_env=optional_env("CONFIG_ENV", "production") or "production",
        stage=(optional_env("STAGE", "backup") or "backup").strip().lower(),
        is_quick_test=env_flag("IS_QUICK_TEST"),
        base_theme_id=optional_env("BASE_THEME").strip(),
        project_root=root,
        themekit_bin=optional_env("THEMEKIT_BIN", "theme") or "theme",
        deploy_command=tuple(shlex.split(optional_env("DEPLOY_COMMAND", DEFAULT_DEPLOY_COMMAND))),
    )
