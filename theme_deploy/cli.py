from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Mapping

from theme_deploy.common import ThemeDeployError


def command_map() -> dict[str, Callable[[], None]]:
    """
    Map CLI command names to Python entry functions.

    Each value is a `main()`-style function from one workflow module.
    """
    from theme_deploy.branch import main as current_branch
    from theme_deploy.runner import main as run
    from theme_deploy.runner import plan_main as plan
    from theme_deploy.themes import main as list_themes

    return {
        "run": run,
        "plan": plan,
        "list-themes": list_themes,
        "current-branch": current_branch,
    }


def build_parser(commands: Mapping[str, Callable[[], None]]) -> argparse.ArgumentParser:
    """Build argument parser with one positional command choice."""
    parser = argparse.ArgumentParser(
        prog="python3 -m theme_deploy.cli",
        description="Back up, stage, or deploy the storefront theme for the current branch.",
    )
    parser.add_argument("command", nargs="?", default="run", choices=sorted(commands.keys()))
    return parser


def run_command(command: str, commands: Mapping[str, Callable[[], None]]) -> None:
    """
    Run one registered command.

    `commands` is passed in to keep this function easy to test.
    """
    commands[command]()


def main(argv: list[str] | None = None) -> None:
    # Build command registry once so parser and dispatcher use the same keys.
    commands = command_map()
    parser = build_parser(commands)
    args = parser.parse_args(argv)

    try:
        run_command(args.command, commands)
    except ThemeDeployError as exc:
        # Keep failures short and readable in deploy logs.
        print(str(exc), file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
