"""CLI utility functions for repoguard.

Provides helper functions for:
- Config wiring: Extracting Typer CLI options and passing to load_config
- Path resolution: Resolving and checking the repository path argument
- Error formatting: Styled error messages that exit with a code
- Exit codes: Mapping a validation report to the process exit status
- Logging: Routing library log records through Rich when verbose
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler

from repoguard.config import RepoguardConfig, load_config
from repoguard.validators.base import ValidationReport

# Exit code conventions
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # User error, or an invalid report without errors
EXIT_VALIDATION_ERROR = 2  # Report contains at least one error


# -----------------------------------------------------------------------------
# Error Formatting Helpers
# -----------------------------------------------------------------------------


def error(msg: str, *, exit_code: int = EXIT_USER_ERROR) -> NoReturn:
    """Print an error message and exit with the given exit code.

    Raises:
        typer.Exit: Always raises to exit the program.
    """
    styled_prefix = typer.style("Error:", fg=typer.colors.RED, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=True)
    raise typer.Exit(code=exit_code)


# -----------------------------------------------------------------------------
# Path Resolution Helpers
# -----------------------------------------------------------------------------


def resolve_path(path: str | Path, base_path: Path | None = None) -> Path:
    """Resolve a path relative to a base path.

    Absolute paths are returned resolved; relative paths are resolved
    against base_path (default: cwd).
    """
    p = Path(path)
    base = base_path or Path.cwd()
    return p.resolve() if p.is_absolute() else (base / p).resolve()


def ensure_path_exists(
    path: Path,
    path_type: str = "path",
    must_be_dir: bool = False,
    must_be_file: bool = False,
) -> Path:
    """Ensure a path exists and optionally check its type.

    Raises:
        typer.Exit: If the path doesn't exist or is the wrong type.
    """
    if not path.exists():
        error(f"{path_type} does not exist: {path}")

    if must_be_dir and not path.is_dir():
        error(f"{path_type} is not a directory: {path}")

    if must_be_file and not path.is_file():
        error(f"{path_type} is not a file: {path}")

    return path


# -----------------------------------------------------------------------------
# Config Wiring Helper
# -----------------------------------------------------------------------------


def wire_config(
    auto_fix: bool | None = None,
    verbose: bool | None = None,
    schema_file: str | None = None,
    start_dir: Path | None = None,
) -> RepoguardConfig:
    """Wire CLI options to load_config with appropriate overrides.

    Flags left at None fall through to the environment and config files.

    Raises:
        typer.Exit: If configuration is invalid.
    """
    cli_overrides: dict[str, Any] = {}

    if auto_fix:
        cli_overrides["auto_fix"] = True
    if verbose:
        cli_overrides["verbose"] = True
    if schema_file is not None:
        cli_overrides["schema_file"] = schema_file

    try:
        return load_config(cli_overrides=cli_overrides, start_dir=start_dir)
    except ValueError as e:
        error(f"Invalid configuration: {e}", exit_code=EXIT_USER_ERROR)


# -----------------------------------------------------------------------------
# Exit Codes and Logging
# -----------------------------------------------------------------------------


def exit_code_for(report: ValidationReport) -> int:
    """Map a validation report to a process exit code.

    Returns:
        0 when valid, 2 when any error is present, 1 otherwise.
    """
    if report.is_valid:
        return EXIT_SUCCESS
    if report.errors:
        return EXIT_VALIDATION_ERROR
    return EXIT_USER_ERROR


def configure_logging(verbose: bool, console: Console | None = None) -> None:
    """Send repoguard debug logs to stderr through Rich when verbose."""
    logger = logging.getLogger("repoguard")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    if not verbose:
        logger.setLevel(logging.WARNING)
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


# -----------------------------------------------------------------------------
# Typer Option Factory Functions
# -----------------------------------------------------------------------------
# Typer consumes Option objects when decorating commands, so each command
# gets a fresh instance.


def schema_option() -> Any:
    """Create a Typer Option for --schema."""
    return typer.Option(
        None,
        "--schema",
        help="Schema override file (reserved).",
        envvar="REPOGUARD_SCHEMA_FILE",
    )


def verbose_option() -> Any:
    """Create a Typer Option for --verbose."""
    return typer.Option(
        False,
        "--verbose",
        help="Show suggestions and debug logging.",
    )
