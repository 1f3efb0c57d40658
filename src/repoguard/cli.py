"""repoguard CLI - Main entry point."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from repoguard import __version__
from repoguard.cli_utils import (
    EXIT_SUCCESS,
    configure_logging,
    ensure_path_exists,
    exit_code_for,
    resolve_path,
    schema_option,
    verbose_option,
    wire_config,
)
from repoguard.engine import ComplianceEngine
from repoguard.fixers.base import InvalidFixKind
from repoguard.template_manager import FILE_TEMPLATES, TEMPLATE_FILES, list_templates
from repoguard.validators.base import FixableIssue, ValidationReport

app = typer.Typer(
    name="repoguard",
    help="repoguard - Audit and repair repository structure against a fixed policy.",
    add_completion=False,
)

# Rich consoles for output
console = Console()
err_console = Console(stderr=True)


# -----------------------------------------------------------------------------
# Output Helpers
# -----------------------------------------------------------------------------


def _output_success(message: str, quiet: bool = False) -> None:
    """Print a success message."""
    if not quiet:
        console.print(f"[green]Success:[/green] {message}")


def _output_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[red]Error:[/red] {message}")


def _output_info(message: str, quiet: bool = False) -> None:
    """Print an info message."""
    if not quiet:
        console.print(message)


# -----------------------------------------------------------------------------
# Version and Main Callbacks
# -----------------------------------------------------------------------------


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"repoguard version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """repoguard - Audit and repair repository structure against a fixed policy."""
    pass


# -----------------------------------------------------------------------------
# Validate Command
# -----------------------------------------------------------------------------


@app.command()
def validate(
    path: str = typer.Argument(
        ".",
        help="Path to the repository root. Defaults to current directory.",
    ),
    fix: bool = typer.Option(
        False,
        "--fix",
        help="Apply available fixes, then validate again.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Show what would be fixed (no changes).",
    ),
    schema: str | None = schema_option(),
    verbose: bool = verbose_option(),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Minimal output for CI.",
    ),
) -> None:
    """Validate repository structure and optionally repair it.

    Checks core files, container setup, CI workflows, documentation and
    security. Fixes overwrite their target files.

    Exits with code 0 when valid, 2 when errors are found, 1 otherwise.
    """
    root = resolve_path(path)
    ensure_path_exists(root, "Repository path", must_be_dir=True)

    config = wire_config(auto_fix=fix, verbose=verbose, schema_file=schema, start_dir=root)
    schema_path = config.get_schema_path(root)
    if schema_path is not None:
        ensure_path_exists(schema_path, "Schema file", must_be_file=True)

    configure_logging(config.verbose, err_console)

    engine = ComplianceEngine(config)
    report = engine.validate_repository(root)

    result: dict[str, Any] = {
        "path": str(root),
        "report": report.to_dict(),
        "fixes": [],
        "fixes_applied": 0,
        "fixes_failed": 0,
    }

    final_report = report
    if dry_run:
        for issue in report.fixable_issues:
            result["fixes"].append(_fix_info(issue, "would_apply"))
    elif config.auto_fix and report.fixable_issues:
        for issue in report.fixable_issues:
            fix_info = _apply_one(engine, root, issue)
            if fix_info["status"] == "applied":
                result["fixes_applied"] += 1
            else:
                result["fixes_failed"] += 1
            result["fixes"].append(fix_info)

        # Fixes are not verified by the executor; confirm convergence
        final_report = engine.validate_repository(root)
        result["revalidated"] = final_report.to_dict()

    if json_output:
        console.print_json(json.dumps(result))
    else:
        _print_report(report, root, verbose=config.verbose, quiet=quiet)
        if result["fixes"]:
            _print_fixes(result, dry_run=dry_run, verbose=config.verbose, quiet=quiet)
        if final_report is not report:
            _print_summary_line(final_report, quiet, prefix="After fixes: ")

    code = exit_code_for(final_report)
    if code != EXIT_SUCCESS:
        raise typer.Exit(code=code)


def _fix_info(issue: FixableIssue, status: str) -> dict[str, Any]:
    """Build the JSON record for one fix attempt."""
    return {
        "type": issue.kind,
        "file": issue.file,
        "description": issue.description,
        "status": status,
    }


def _apply_one(engine: ComplianceEngine, root: Path, issue: FixableIssue) -> dict[str, Any]:
    """Apply one fix, recording failure instead of stopping the loop."""
    try:
        fix_result = engine.apply_fix(root, issue)
    except InvalidFixKind as e:
        info = _fix_info(issue, "failed")
        info["message"] = str(e)
        return info

    info = _fix_info(issue, "applied" if fix_result.success else "failed")
    info["message"] = fix_result.message
    info["files_modified"] = fix_result.files_modified
    return info


def _print_summary_line(report: ValidationReport, quiet: bool, prefix: str = "") -> None:
    if report.is_valid:
        _output_success(f"{prefix}Repository structure is valid", quiet)
    else:
        _output_error(
            f"{prefix}Repository structure has issues "
            f"({len(report.errors)} error(s), {len(report.warnings)} warning(s))"
        )


def _print_report(
    report: ValidationReport,
    root: Path,
    *,
    verbose: bool,
    quiet: bool,
) -> None:
    """Print a validation report to the console.

    Args:
        report: The report to display.
        root: Repository root that was validated.
        verbose: Whether to show suggestions and finding tags.
        quiet: Whether to show only the summary line and errors.
    """
    if quiet:
        _print_summary_line(report, quiet=False)
        for finding in report.errors:
            _output_error(escape(finding.message))
        return

    console.print(f"\n[bold]Validation Results for: {escape(root.name)}[/bold]\n")
    _print_summary_line(report, quiet)

    console.print(f"\n  Files checked: {report.files_checked}")
    console.print(f"  Errors: [red]{len(report.errors)}[/red]")
    console.print(f"  Warnings: [yellow]{len(report.warnings)}[/yellow]")
    console.print(f"  Fixable issues: [cyan]{len(report.fixable_issues)}[/cyan]\n")

    for title, color, findings in (
        ("Errors", "red", report.errors),
        ("Warnings", "yellow", report.warnings),
    ):
        if not findings:
            continue
        console.print(f"[bold {color}]{title}:[/bold {color}]")
        for index, finding in enumerate(findings, 1):
            tag = f" [dim]({finding.category})[/dim]" if verbose else ""
            console.print(f"  [{color}]{index}. {escape(finding.message)}[/{color}]{tag}")
            if finding.file:
                console.print(f"     [dim]File: {escape(finding.file)}[/dim]")
            if finding.suggestion and verbose:
                console.print(f"     [cyan]Suggestion:[/cyan] {escape(finding.suggestion)}")
        console.print()

    table = Table(title="Validation Categories")
    table.add_column("Category", style="cyan")
    table.add_column("Status")
    table.add_column("Message")
    for name, status in report.categories.items():
        label = "[green]PASS[/green]" if status.passed else "[red]FAIL[/red]"
        table.add_row(escape(name), label, escape(status.message))
    console.print(table)
    console.print()

    if report.fixable_issues:
        console.print("[bold cyan]Auto-fixable Issues:[/bold cyan]")
        for index, issue in enumerate(report.fixable_issues, 1):
            console.print(f"  {index}. {escape(issue.description)}")
            console.print(f"     [green]Fix:[/green] {escape(issue.fix)}")
        console.print()

    if report.recommendations:
        console.print("[bold magenta]Recommendations:[/bold magenta]")
        for index, recommendation in enumerate(report.recommendations, 1):
            console.print(f"  {index}. {escape(recommendation)}")
        console.print()


def _print_fixes(result: dict[str, Any], *, dry_run: bool, verbose: bool, quiet: bool) -> None:
    """Print fix outcomes and a summary line."""
    if not quiet:
        if dry_run:
            console.print("[bold]Would apply the following fixes:[/bold]")
        else:
            console.print("[bold]Fix Results:[/bold]")

        for fix_info in result["fixes"]:
            status = fix_info["status"]
            if status == "would_apply":
                console.print(f"  [cyan]WOULD FIX[/cyan] {escape(fix_info['description'])}")
            elif status == "applied":
                console.print(f"  [green]FIXED[/green] {escape(fix_info['description'])}")
                if verbose:
                    for f in fix_info.get("files_modified", []):
                        console.print(f"    [dim]Modified: {escape(f)}[/dim]")
            else:
                console.print(f"  [red]FAILED[/red] {escape(fix_info['description'])}")
                console.print(f"    [dim]{escape(fix_info.get('message', ''))}[/dim]")
        console.print()

    if dry_run:
        _output_info(
            f"Run [bold]repoguard validate --fix[/bold] to apply {len(result['fixes'])} fix(es)",
            quiet,
        )
        return

    applied = result["fixes_applied"]
    failed = result["fixes_failed"]
    if failed == 0:
        _output_success(f"Applied {applied} fix(es) successfully", quiet)
    else:
        _output_error(f"Applied {applied} fix(es), {failed} failed")


# -----------------------------------------------------------------------------
# Templates Command
# -----------------------------------------------------------------------------


@app.command()
def templates(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON.",
    ),
) -> None:
    """List the built-in remediation templates."""
    creates = {template: file_name for file_name, template in FILE_TEMPLATES.items()}
    creates["dockerfile"] = "Dockerfile"

    rows = [
        {"name": name, "file": TEMPLATE_FILES[name], "creates": creates.get(name)}
        for name in list_templates()
    ]

    if json_output:
        console.print_json(json.dumps({"templates": rows}))
        return

    table = Table(title="Remediation Templates")
    table.add_column("Name", style="cyan")
    table.add_column("Template File")
    table.add_column("Creates", style="green")
    for row in rows:
        table.add_row(row["name"], row["file"], row["creates"] or "(any missing file)")
    console.print(table)


if __name__ == "__main__":
    app()
