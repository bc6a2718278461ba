"""
Script: theme_deploy/deploy.py
What: Hands the chosen theme id to the external build-and-deploy command.
Doing: Builds the command line with explicit credentials and runs it from the project root.
Why: The build tool would otherwise discover its own config; this run already knows the target.
Goal: Build and upload the current branch into exactly one theme.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from theme_deploy.common import ThemeDeployError, run_cmd
from theme_deploy.config import ThemeConfig


def build_deploy_command(theme_id: str, config: ThemeConfig, command: Sequence[str]) -> list[str]:
    """
    Return the full argv for the deploy tool.

    `--no-config` stops the tool from loading its own config file, so only the
    values passed here are used. Whatever `DEPLOY_COMMAND` points at must accept
    `--no-config`, `--theme-id`, `--api-key`, `--password` and `--store`; wrap
    the real build tool in a small script if its flags differ.
    """
    if not command:
        raise ThemeDeployError("DEPLOY_COMMAND is empty")
    return [
        *command,
        "--no-config",
        "--theme-id",
        str(theme_id),
        "--api-key",
        config.api_key,
        "--password",
        config.password,
        "--store",
        config.store,
    ]


def build_and_deploy(
    theme_id: str,
    config: ThemeConfig,
    project_root: Path,
    command: Sequence[str],
) -> None:
    print(f"Deploying to theme {theme_id}")
    run_cmd(
        build_deploy_command(theme_id, config, command),
        cwd=str(project_root),
        capture_output=False,
        secrets=config.secrets,
    )
