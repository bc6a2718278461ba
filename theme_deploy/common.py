"""
Script: theme_deploy/common.py
What: Shared helper functions used by all `theme_deploy` modules.
Doing: Wraps env reads, command execution, and truthy-flag parsing.
Why: Avoids duplicated helper code.
Goal: Keep behavior consistent across all workflow modules.
"""

from __future__ import annotations

import os
import subprocess
from typing import Sequence


class ThemeDeployError(RuntimeError):
    """Raised when a deployment step hits a known error condition."""


class NoDeployableBaseError(ThemeDeployError):
    """Raised when no live or stage theme exists to use as a base."""


FALSE_FLAG_VALUES = {"", "0", "false", "no"}


def optional_env(name: str, default: str = "") -> str:
    """Return an environment variable with a fallback default."""
    return os.environ.get(name, default)


def env_flag(name: str) -> bool:
    """True when the variable is set to anything other than an explicit "off" value."""
    return optional_env(name).strip().lower() not in FALSE_FLAG_VALUES


def mask_secrets(text: str, secrets: Sequence[str]) -> str:
    """Replace every non-empty secret in `text` with `***`."""
    for secret in secrets:
        if secret:
            text = text.replace(secret, "***")
    return text


def run_cmd(
    args: Sequence[str],
    *,
    capture_output: bool = True,
    cwd: str | None = None,
    secrets: Sequence[str] = (),
) -> str:
    """
    Run a command and return stdout, raising a readable error on failure.

    Values in `secrets` are masked in the error message so credentials passed
    as arguments do not end up in workflow logs.
    """
    try:
        result = subprocess.run(
            list(args),
            check=True,
            text=True,
            capture_output=capture_output,
            cwd=cwd,
        )
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        stdout = (exc.stdout or "").strip()
        details = stderr or stdout or str(exc)
        message = f"Command failed: {' '.join(args)}\n{details}"
        raise ThemeDeployError(mask_secrets(message, secrets)) from exc
    except FileNotFoundError as exc:
        raise ThemeDeployError(f"Command not found: {args[0]}") from exc

    if not capture_output:
        return ""
    return result.stdout
