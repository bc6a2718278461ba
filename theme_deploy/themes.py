"""
Script: theme_deploy/themes.py
What: Fetches every theme on the store and parses the naming convention used for them.
Doing: Calls `GET https://<store>/admin/themes.json` with basic auth, converts entries to `Theme` values, and sorts newest first.
Why: Base selection and staging lookup both depend on theme names, roles, and update times.
Goal: Provide a typed, sorted theme list and the name helpers the planner relies on.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

import requests

from theme_deploy.common import ThemeDeployError
from theme_deploy.config import ThemeConfig, load_run_settings, load_theme_config


NAME_SEPARATOR = " - "
COMMIT_TOKEN_RE = re.compile(r".*\((.*)\)")
STAGING_LABEL_RE = re.compile(r"staging|stage", re.IGNORECASE)
PUBLISHED_ROLE = "main"
REQUEST_TIMEOUT_SECONDS = 30


class EnvironmentTag(str, Enum):
    LIVE = "live"
    STAGE = "stage"
    DEV = "dev"
    UNKNOWN = "unknown"


def classify_environment(label: str) -> EnvironmentTag:
    """Map the environment part of a theme name (`LIVE`, `STAGING`, ...) to a tag."""
    lowered = label.lower()
    if "live" in lowered:
        return EnvironmentTag.LIVE
    # `staging` contains `stage`.
    if "stage" in lowered:
        return EnvironmentTag.STAGE
    if "dev" in lowered:
        return EnvironmentTag.DEV
    return EnvironmentTag.UNKNOWN


def parse_theme_name(name: str) -> tuple[str, str]:
    """
    Split a theme name into its environment label and commit token.

    Names follow `<ENV> - <label> (<commit>)`. Example:
    `STAGE - fix-bug (abc123)` gives `("STAGE", "abc123")`.
    The commit token is empty when the label has no parenthesized part.
    """
    env_label, _, label = name.partition(NAME_SEPARATOR)
    match = COMMIT_TOKEN_RE.match(label)
    return env_label, match.group(1) if match else ""


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp; values without an offset are treated as UTC."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ThemeDeployError(f"Invalid theme timestamp: {value}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Theme:
    id: int
    name: str
    role: str
    updated_at: datetime

    @property
    def environment(self) -> EnvironmentTag:
        return classify_environment(parse_theme_name(self.name)[0])

    @property
    def commit_token(self) -> str:
        return parse_theme_name(self.name)[1]

    @property
    def label(self) -> str:
        """Part of the name after the environment, e.g. `fix-bug (abc123)`."""
        return self.name.partition(NAME_SEPARATOR)[2].strip()

    @property
    def is_staging(self) -> bool:
        # Independent of `environment`: `LIVE-STAGE` counts as staging.
        return bool(STAGING_LABEL_RE.search(parse_theme_name(self.name)[0]))

    @property
    def is_published(self) -> bool:
        return self.role == PUBLISHED_ROLE

    @classmethod
    def from_api(cls, entry: dict) -> "Theme":
        try:
            return cls(
                id=int(entry["id"]),
                name=str(entry.get("name") or ""),
                role=str(entry.get("role") or ""),
                updated_at=parse_timestamp(str(entry["updated_at"])),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise ThemeDeployError(f"Malformed theme entry: {entry!r}") from exc


def sort_newest_first(themes: list[Theme]) -> list[Theme]:
    return sorted(themes, key=lambda theme: theme.updated_at, reverse=True)


def themes_url(store: str) -> str:
    return f"https://{store}/admin/themes.json"


def fetch_themes(
    config: ThemeConfig,
    *,
    session: requests.Session | None = None,
    timeout: int = REQUEST_TIMEOUT_SECONDS,
) -> list[Theme]:
    """
    Return every theme on the configured store, most recently updated first.

    `session` can be passed in to keep this function easy to test.
    """
    http = session or requests.Session()
    url = themes_url(config.store)
    try:
        response = http.get(url, auth=(config.api_key, config.password), timeout=timeout)
    except requests.RequestException as exc:
        raise ThemeDeployError(f"Theme list request failed for {url}: {exc}") from exc

    if not response.ok:
        raise ThemeDeployError(f"Theme list request failed for {url}: HTTP {response.status_code}")

    try:
        payload = response.json()
    except ValueError as exc:
        raise ThemeDeployError(f"Expected JSON from {url}") from exc

    entries = (payload.get("themes") if isinstance(payload, dict) else None) or []
    print("Existing themes fetched")
    return sort_newest_first([Theme.from_api(entry) for entry in entries])


def main() -> None:
    settings = load_run_settings()
    config = load_theme_config(settings.project_root, settings.config_env)
    for theme in fetch_themes(config):
        marker = "*" if theme.is_published else " "
        print(
            f"{marker} {theme.id}  {theme.environment.value:<7}  "
            f"{theme.updated_at.isoformat()}  {theme.name}"
        )


if __name__ == "__main__":
    main()
