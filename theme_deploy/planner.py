"""
Script: theme_deploy/planner.py
What: Decides which theme a run should back up, reuse, or deploy to.
Doing: Matches staging themes against branch commits, picks a base theme, and returns a `DeployPlan`.
Why: Keeps every branching rule in pure functions so the decision table can be tested without git or the store.
Goal: Turn branch info plus the theme list into one explicit action for the runner.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Sequence

from theme_deploy.branch import BranchInfo, BranchKind
from theme_deploy.common import NoDeployableBaseError, ThemeDeployError
from theme_deploy.themes import EnvironmentTag, Theme


STAGING_MAX_AGE = timedelta(days=7)
BASE_ENVIRONMENTS = (EnvironmentTag.LIVE, EnvironmentTag.STAGE)
STAGE_BACKUP = "backup"
STAGE_DEPLOY = "deploy"


class PlanAction(str, Enum):
    DEPLOY_EXISTING = "deploy-existing"
    DUPLICATE_AND_DEPLOY = "duplicate-and-deploy"
    DUPLICATE_ONLY = "duplicate-only"
    DEPLOY_ONLY = "deploy-only"
    NOTHING = "nothing"


@dataclass(frozen=True)
class DeployPlan:
    action: PlanAction
    theme: Theme | None = None
    reason: str = ""


def find_existing_staging_theme(
    themes: Sequence[Theme],
    commits: Sequence[str],
    *,
    require_recent: bool = False,
    now: datetime | None = None,
) -> Theme | None:
    """
    Return the first staging theme whose name carries a commit from this branch.

    Rules:
    - the environment label must mention stage/staging
    - the commit token in parentheses must appear in one of `commits`;
      names without parentheses use the whole label instead
    - with `require_recent`, the theme must have been updated in the last 7 days

    `themes` is expected newest first, so the first match is the freshest one.
    """
    current = now or datetime.now(timezone.utc)
    cutoff = current - STAGING_MAX_AGE
    for theme in themes:
        if not theme.is_staging:
            continue
        token = theme.commit_token or theme.label
        # An empty token would match every commit.
        if not token or not any(token in commit for commit in commits):
            continue
        if require_recent and theme.updated_at < cutoff:
            continue
        return theme
    return None


def find_published_theme(themes: Sequence[Theme]) -> Theme:
    for theme in themes:
        if theme.is_published:
            return theme
    raise ThemeDeployError("No published (role=main) theme found on the store")


def select_base_theme(
    themes: Sequence[Theme],
    *,
    base_theme_id: str = "",
    force_published: bool = False,
) -> Theme:
    """
    Pick the theme that a new theme is copied from (or deployed to on master).

    Order:
    1. an explicit `base_theme_id` (from `BASE_THEME`)
    2. the published theme when `force_published` is set
    3. the published theme when it is a live or stage theme
    4. the newest unpublished live or stage theme
    """
    if base_theme_id:
        for theme in themes:
            if str(theme.id) == str(base_theme_id):
                return theme
        raise ThemeDeployError(f"Base theme {base_theme_id} not found on the store")

    published = find_published_theme(themes)
    if force_published:
        return published
    if published.environment in BASE_ENVIRONMENTS:
        return published

    # Published theme is a dev theme; fall back to any live/stage theme.
    for theme in themes:
        if theme.environment in BASE_ENVIRONMENTS:
            return theme
    raise NoDeployableBaseError("No base theme could be found. Duplication not possible.")


def plan_deployment(
    branch: BranchInfo,
    themes: Sequence[Theme],
    *,
    stage: str,
    base_theme_id: str = "",
    now: datetime | None = None,
) -> DeployPlan:
    if branch.kind in (BranchKind.DEVELOP, BranchKind.FEATURE):
        existing = find_existing_staging_theme(
            themes,
            branch.commits,
            require_recent=branch.kind is BranchKind.DEVELOP,
            now=now,
        )
        if existing is not None:
            return DeployPlan(PlanAction.DEPLOY_EXISTING, existing, "Existing base found!")
        base = select_base_theme(themes, base_theme_id=base_theme_id)
        return DeployPlan(PlanAction.DUPLICATE_AND_DEPLOY, base, "No existing base found")

    if branch.kind is BranchKind.MASTER and stage == STAGE_BACKUP:
        base = select_base_theme(themes, base_theme_id=base_theme_id, force_published=True)
        return DeployPlan(PlanAction.DUPLICATE_ONLY, base, "Backing up published theme")

    if branch.kind is BranchKind.MASTER and stage == STAGE_DEPLOY:
        base = select_base_theme(themes, base_theme_id=base_theme_id, force_published=True)
        return DeployPlan(PlanAction.DEPLOY_ONLY, base, "Deploying to published theme")

    return DeployPlan(
        PlanAction.NOTHING,
        reason=f"Nothing to do for branch '{branch.name}' with stage '{stage}'",
    )
