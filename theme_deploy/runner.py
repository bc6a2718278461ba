"""
Script: theme_deploy/runner.py
What: Runs one full backup/staging/deploy pass for the current branch.
Doing: Prepares the workspace, inspects git, and lists themes in parallel, then plans, executes, and cleans up.
Why: Ties the individual helpers together in the order the deploy workflow expects.
Goal: Leave the store with a backup, a staging theme, or a fresh live deploy, depending on branch and stage.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import Callable

from theme_deploy.branch import BranchInfo, git_base_for, inspect_branch
from theme_deploy.config import RunSettings, ThemeConfig, load_run_settings, load_theme_config
from theme_deploy.deploy import build_and_deploy
from theme_deploy.planner import DeployPlan, PlanAction, plan_deployment
from theme_deploy.themekit import duplicate_theme
from theme_deploy.themes import Theme, fetch_themes
from theme_deploy.workspace import cleanup_workspace, prepare_workspace


DuplicateFn = Callable[[Theme, ThemeConfig, Path], str]
DeployFn = Callable[[str, ThemeConfig, Path], None]


def gather_inputs(settings: RunSettings, config: ThemeConfig) -> tuple[Path, BranchInfo, list[Theme]]:
    """
    Run workspace prep, branch inspection, and theme listing at the same time.

    Results are read in submission order; the first failure raised aborts the run.
    """
    with ThreadPoolExecutor(max_workers=3) as executor:
        workspace_future = executor.submit(
            prepare_workspace, settings.scratch_dir, quick_test=settings.is_quick_test
        )
        branch_future = executor.submit(inspect_branch, cwd=str(settings.project_root))
        themes_future = executor.submit(fetch_themes, config)
        return workspace_future.result(), branch_future.result(), themes_future.result()


def default_duplicate(settings: RunSettings) -> DuplicateFn:
    def _duplicate(theme: Theme, config: ThemeConfig, scratch_dir: Path) -> str:
        return duplicate_theme(
            theme,
            config,
            scratch_dir,
            quick_test=settings.is_quick_test,
            themekit_bin=settings.themekit_bin,
        )

    return _duplicate


def default_deploy(settings: RunSettings) -> DeployFn:
    def _deploy(theme_id: str, config: ThemeConfig, project_root: Path) -> None:
        build_and_deploy(theme_id, config, project_root, settings.deploy_command)

    return _deploy


def execute_plan(
    plan: DeployPlan,
    settings: RunSettings,
    config: ThemeConfig,
    *,
    duplicate: DuplicateFn,
    deploy: DeployFn,
) -> str | None:
    """
    Carry out one plan and return the theme id it produced or deployed to.

    `duplicate` and `deploy` are passed in to keep this function easy to test.
    """
    print(plan.reason)
    if plan.theme is not None:
        print(f"Theme Name: {plan.theme.name}")

    if plan.action is PlanAction.NOTHING or plan.theme is None:
        return None

    if plan.action is PlanAction.DEPLOY_EXISTING or plan.action is PlanAction.DEPLOY_ONLY:
        theme_id = str(plan.theme.id)
        deploy(theme_id, config, settings.project_root)
        return theme_id

    theme_id = duplicate(plan.theme, config, settings.scratch_dir)
    print(f"Created theme {theme_id}")
    if plan.action is PlanAction.DUPLICATE_AND_DEPLOY:
        deploy(theme_id, config, settings.project_root)
    return theme_id


def run(
    settings: RunSettings,
    config: ThemeConfig,
    *,
    duplicate: DuplicateFn | None = None,
    deploy: DeployFn | None = None,
    now: datetime | None = None,
) -> str | None:
    _, branch, themes = gather_inputs(settings, config)

    print("Running main routine")
    plan = plan_deployment(
        branch,
        themes,
        stage=settings.stage,
        base_theme_id=settings.base_theme_id,
        now=now,
    )
    theme_id = execute_plan(
        plan,
        settings,
        config,
        duplicate=duplicate or default_duplicate(settings),
        deploy=deploy or default_deploy(settings),
    )

    # A failed step leaves tmp/ in place; the next run removes it.
    cleanup_workspace(settings.scratch_dir, quick_test=settings.is_quick_test)
    return theme_id


def main() -> None:
    settings = load_run_settings()
    config = load_theme_config(settings.project_root, settings.config_env)
    if settings.is_quick_test:
        print("Quick test mode: theme download, creation, and tmp removal are skipped")
    run(settings, config)


def plan_main() -> None:
    # Read-only preview: no workspace, no Theme Kit, no deploy.
    settings = load_run_settings()
    config = load_theme_config(settings.project_root, settings.config_env)
    branch = inspect_branch(cwd=str(settings.project_root))
    themes = fetch_themes(config)
    plan = plan_deployment(
        branch,
        themes,
        stage=settings.stage,
        base_theme_id=settings.base_theme_id,
    )

    print(f"Branch: {branch.name} ({branch.kind.value}, compared against {git_base_for(branch.kind)})")
    print(f"Stage: {settings.stage}")
    print(f"Action: {plan.action.value}")
    print(f"Reason: {plan.reason}")
    if plan.theme is not None:
        print(f"Theme: {plan.theme.id} {plan.theme.name}")


if __name__ == "__main__":
    main()
