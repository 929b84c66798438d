"""
Open Ban CLI entry point.

Commands:
- openban version: Show version information
- openban types: List the ban types a configuration registers
- openban validate: Validate an openban.yaml config file
- openban check: Check a subject against the configured bans
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click

from openban import __version__
from openban.cli_ui import (
    config_panel,
    console,
    dim,
    error,
    make_table,
    success,
    warning,
)

# Exit code of `openban check` when the subject is banned
EXIT_BANNED = 2

RESULT_LABELS = {
    -1: "[green]excluded[/]",
    0: "[dim]no result[/]",
    1: "[red]banned[/]",
}


def setup_logging(debug: bool = False, log_level: str = "INFO") -> None:
    """Configure logging. --debug or settings.debug wins over log_level."""
    level = logging.DEBUG if debug else getattr(logging, log_level)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _load_settings(config: Optional[Path]):
    from openban.config.settings import BanSettings

    settings = BanSettings(_config_path=str(config) if config else None)
    settings.validate()
    return settings


config_option = click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to openban.yaml config file",
)


@click.group()
@click.version_option(version=__version__, prog_name="openban")
def main() -> None:
    """Open Ban - Pluggable ban and exclusion management."""
    pass


@main.command()
def version() -> None:
    """Show version information."""
    console.print(f"Open Ban [bold]v{__version__}[/]")


@main.command()
@config_option
def types(config: Optional[Path]) -> None:
    """List the ban types registered by a configuration.

    Example:
        openban types -c openban.yaml
    """
    from openban.factory import build_registry

    try:
        settings = _load_settings(config)
        setup_logging(settings.debug, settings.log_level)
        registry = build_registry(settings)
    except Exception as e:
        error(str(e), hint="Check your openban.yaml")
        raise SystemExit(1)

    rows = [
        [key, type(ban_type).__name__, "yes" if ban_type.is_exclude_possible() else "no"]
        for key, ban_type in registry.items()
    ]
    make_table("Ban Types", ["Key", "Class", "Exclusions"], rows)


@main.command()
@click.argument(
    "config_path",
    type=click.Path(exists=True, path_type=Path),
)
def validate(config_path: Path) -> None:
    """Validate an openban.yaml config file.

    Example:
        openban validate openban.yaml
    """
    try:
        settings = _load_settings(config_path)
    except Exception as e:
        error(f"Validation error: {e}")
        raise SystemExit(1)

    setup_logging(settings.debug, settings.log_level)

    excluded = sum(1 for ban in settings.bans if ban.exclude)
    config_panel(
        "✓ Valid Configuration",
        {
            "Types": ", ".join(settings.types) or "-",
            "Namespaced": str(settings.namespaced),
            "Static bans": str(len(settings.bans) - excluded),
            "Static exclusions": str(excluded),
            "Logging": "enabled" if settings.log_enabled else "disabled",
        },
    )


@main.command()
@config_option
@click.option("--user-id", type=int, default=None, help="User id to check")
@click.option("--ip", type=str, default=None, help="IP address to check")
@click.option("--email", type=str, default=None, help="Email address to check")
@click.option("--debug/--no-debug", default=False, help="Enable debug logging")
def check(
    config: Optional[Path],
    user_id: Optional[int],
    ip: Optional[str],
    email: Optional[str],
    debug: bool,
) -> None:
    """Check a subject against the configured static bans.

    Exits with code 2 when the subject is banned.

    Example:
        openban check -c openban.yaml --ip 192.0.2.17 --email bot@spam.example
    """
    from openban.factory import create_manager
    from openban.log import MemoryLogSink

    user_row: Dict[str, Any] = {}
    if user_id is not None:
        user_row["user_id"] = user_id
    if ip:
        user_row["user_ip"] = ip
    if email:
        user_row["user_email"] = email

    if not user_row:
        error("Nothing to check", hint="Pass --user-id, --ip and/or --email")
        raise SystemExit(1)

    try:
        settings = _load_settings(config)
        setup_logging(debug or settings.debug, settings.log_level)
        manager = create_manager(settings, log=MemoryLogSink())
    except Exception as e:
        error(str(e), hint="Check your openban.yaml")
        if debug:
            import traceback

            traceback.print_exc()
        raise SystemExit(1)

    dim("Subject: " + ", ".join(f"{k}={v}" for k, v in user_row.items()))

    rows = [
        [key, RESULT_LABELS[int(ban_type.check(user_row))]]
        for key, ban_type in manager.registry.items()
    ]
    make_table("Check Results", ["Type", "Result"], rows)

    result = manager.check_all(user_row)
    console.print()
    if result == -1:
        success("Subject is excluded from all bans")
    elif result & 1:
        warning("Subject is banned")
        raise SystemExit(EXIT_BANNED)
    else:
        success("Subject is not banned")


if __name__ == "__main__":
    main()
