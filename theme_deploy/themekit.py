"""
Script: theme_deploy/themekit.py
What: Copies one store theme into a brand-new theme using Theme Kit.
Doing: Runs `theme download` into the scratch directory, `theme new` to upload it, then reads the new id from `config.yml`.
Why: Backups and staging themes are both created by duplicating a base theme.
Goal: Return the id of the freshly created theme so it can be deployed to.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from theme_deploy.common import ThemeDeployError, run_cmd
from theme_deploy.config import ThemeConfig
from theme_deploy.themes import Theme


NEW_THEME_NAME = "[DEPLOYMENT IN PROGRESS]"
THEMEKIT_CONFIG_NAME = "config.yml"
THEMEKIT_ENV = "development"


def download_theme(
    theme: Theme,
    config: ThemeConfig,
    scratch_dir: Path,
    *,
    quick_test: bool,
    themekit_bin: str = "theme",
) -> None:
    if quick_test:
        return

    print("Downloading theme")
    print(f"Theme Name: {theme.name}")
    command = [
        themekit_bin,
        "download",
        "--password",
        config.password,
        "--store",
        config.store,
        "--themeid",
        str(theme.id),
        "--dir",
        str(scratch_dir),
    ]
    try:
        run_cmd(command, cwd=str(scratch_dir), capture_output=False, secrets=config.secrets)
    except ThemeDeployError as exc:
        raise ThemeDeployError("Themekit download failed") from exc


def create_theme(
    config: ThemeConfig,
    scratch_dir: Path,
    *,
    quick_test: bool,
    themekit_bin: str = "theme",
) -> None:
    """
    Upload the scratch directory as a new, unpublished theme.

    Theme Kit writes the new theme id into `<scratch>/config.yml` under the
    `development` environment.
    """
    if quick_test:
        return

    print("Uploading new theme!")
    command = [
        themekit_bin,
        "new",
        "--password",
        config.password,
        "--store",
        config.store,
        "--name",
        NEW_THEME_NAME,
        "--dir",
        str(scratch_dir),
    ]
    run_cmd(command, cwd=str(scratch_dir), capture_output=False, secrets=config.secrets)


def read_new_theme_id(scratch_dir: Path) -> str:
    config_path = scratch_dir / THEMEKIT_CONFIG_NAME
    if not config_path.exists():
        raise ThemeDeployError(f"Theme Kit config not found: {config_path}")
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ThemeDeployError(f"Could not parse {config_path}") from exc

    section = data.get(THEMEKIT_ENV) if isinstance(data, dict) else None
    theme_id = section.get("theme_id") if isinstance(section, dict) else None
    if theme_id in (None, ""):
        raise ThemeDeployError(f"Missing {THEMEKIT_ENV}.theme_id in {config_path}")
    return str(theme_id)


def duplicate_theme(
    theme: Theme,
    config: ThemeConfig,
    scratch_dir: Path,
    *,
    quick_test: bool,
    themekit_bin: str = "theme",
) -> str:
    download_theme(theme, config, scratch_dir, quick_test=quick_test, themekit_bin=themekit_bin)
    create_theme(config, scratch_dir, quick_test=quick_test, themekit_bin=themekit_bin)
    return read_new_theme_id(scratch_dir)
