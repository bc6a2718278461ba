"""
Script: theme_deploy/branch.py
What: Reads the active git branch and the commits that are unique to it.
Doing: Parses `git branch`, classifies the name, then runs `git fetch --all` and `git cherry -v <base>`.
Why: The branch kind decides between backup, staging, and live deploys; commits link a branch to its staging theme.
Goal: Provide one `BranchInfo` value that the planner can work from without touching git.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from theme_deploy.common import run_cmd


FEATURE_BRANCH_RE = re.compile(r"feature|hotfix|bugfix", re.IGNORECASE)
CHERRY_MARKER_RE = re.compile(r"^[+-] ?")


class BranchKind(str, Enum):
    DEVELOP = "develop"
    FEATURE = "feature"
    MASTER = "master"
    OTHER = "other"


@dataclass(frozen=True)
class BranchInfo:
    name: str
    kind: BranchKind
    commits: list[str] = field(default_factory=list)


def classify_branch(name: str) -> BranchKind:
    """
    Map a branch name to the kind of deploy it drives.

    First match wins, case-insensitive:
    - anything containing `develop`
    - `feature`, `hotfix`, or `bugfix` branches
    - anything containing `master`
    """
    lowered = name.lower()
    if "develop" in lowered:
        return BranchKind.DEVELOP
    if FEATURE_BRANCH_RE.search(name):
        return BranchKind.FEATURE
    if "master" in lowered:
        return BranchKind.MASTER
    return BranchKind.OTHER


def git_base_for(kind: BranchKind) -> str:
    """Branch the current one is compared against when listing its own commits."""
    return "master" if kind is BranchKind.DEVELOP else "develop"


def parse_current_branch(output: str) -> str:
    """Return the `*`-marked branch from `git branch` output, or empty string."""
    for line in output.splitlines():
        if "*" in line:
            return line.replace("* ", "", 1).strip()
    return ""


def parse_cherry_output(output: str) -> list[str]:
    """
    Turn `git cherry -v` output into a list of `<sha> <subject>` strings.

    Each line starts with a `+` (not upstream) or `-` (already upstream) marker.
    """
    commits = []
    for line in output.splitlines():
        commit = CHERRY_MARKER_RE.sub("", line, count=1).strip()
        if commit:
            commits.append(commit)
    return commits


def current_branch(*, cwd: str | None = None) -> str:
    print("Getting current branch")
    return parse_current_branch(run_cmd(["git", "branch"], cwd=cwd))


def unmerged_commits(kind: BranchKind, *, cwd: str | None = None) -> list[str]:
    base = git_base_for(kind)
    print("Running 'git fetch --all'")
    run_cmd(["git", "fetch", "--all"], cwd=cwd)
    print(f"Running 'git cherry -v {base}'")
    return parse_cherry_output(run_cmd(["git", "cherry", "-v", base], cwd=cwd))


def inspect_branch(*, cwd: str | None = None) -> BranchInfo:
    name = current_branch(cwd=cwd)
    kind = classify_branch(name)
    commits = unmerged_commits(kind, cwd=cwd)
    return BranchInfo(name=name, kind=kind, commits=commits)


def main() -> None:
    info = inspect_branch()
    print(f"Branch: {info.name}")
    print(f"Kind: {info.kind.value}")
    print(f"Compared against: {git_base_for(info.kind)}")
    print(f"Unmerged commits: {len(info.commits)}")
    for commit in info.commits:
        print(f"  {commit}")


if __name__ == "__main__":
    main()
