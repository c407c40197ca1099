"""
Report formatting for validation runs.

Text reports are printed with rich; JSON reports use the
{summary, results} shape consumed by CI.
"""

import json
import re
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

from .models import AggregatedResults, ContentType, Severity, ValidationIssue, ValidationResult

SEVERITY_STYLES = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}

SEVERITY_ICONS = {
    Severity.ERROR: "x",
    Severity.WARNING: "!",
    Severity.INFO: "i",
}

_CAMEL_BOUNDARY_RE = re.compile(r"([A-Z])")


def format_metric(name: str, value: float) -> str:
    """Format a metric value based on its kind."""
    if "Percent" in name or "Density" in name or "Similarity" in name:
        return f"{value:.1f}%"
    if "Length" in name or "Count" in name or "Words" in name:
        return str(round(value))
    return f"{value:.1f}"


def format_metric_name(name: str) -> str:
    """Turn a camelCase metric key into a label, e.g. "Flesch Reading Ease"."""
    spaced = _CAMEL_BOUNDARY_RE.sub(r" \1", name).strip()
    return spaced[:1].upper() + spaced[1:]


def format_issue(issue: ValidationIssue, verbose: bool = False) -> str:
    """Format a validation issue as rich markup."""
    style = SEVERITY_STYLES.get(issue.severity, "grey50")
    icon = SEVERITY_ICONS.get(issue.severity, "-")

    output = f"    [{style}]{icon}[/{style}] \\[[{style}]{issue.code}[/{style}]] {escape(issue.message)}"
    if issue.field:
        output += f" [grey50]({escape(issue.field)})[/grey50]"
    if issue.suggestion and verbose:
        output += f"\n      [dim]Suggestion: {escape(issue.suggestion)}[/dim]"
    return output


def format_validator_status(result: ValidationResult) -> str:
    """Format the status line for one validator result."""
    name = result.validator[:1].upper() + result.validator[1:]

    if result.error_count > 0:
        line = f"  [red]x[/red] {name}: [red]{result.error_count} error(s)[/red]"
        if result.warning_count > 0:
            line += f", {result.warning_count} warning(s)"
        return line
    if result.warning_count > 0:
        line = f"  [yellow]![/yellow] {name}: [yellow]{result.warning_count} warning(s)[/yellow]"
        if result.info_count > 0:
            line += f", {result.info_count} info"
        return line
    if result.info_count > 0:
        return f"  [cyan]i[/cyan] {name}: [cyan]{result.info_count} info[/cyan]"
    return f"  [green]v[/green] {name}: [green]Passed[/green]"


def print_text_report(results: AggregatedResults, console: Console, verbose: bool = False) -> None:
    """
    Print a human-readable report.

    Files without issues are only listed in verbose mode. Verbose mode
    also shows suggestions and raw metrics.
    """
    console.print()
    console.print(Rule("[bold blue]Content Quality Validation[/bold blue]", style="blue"))
    console.print()

    for file_path, file_results in results.results.items():
        has_issues = any(result.issues for result in file_results)
        if not has_issues and not verbose:
            continue

        file_type = file_results[0].type if file_results else ContentType.from_path(file_path)
        console.print(f"[bold]{escape(Path(file_path).name)}[/bold] [grey50]({file_type.value})[/grey50]")
        console.print()

        for result in file_results:
            console.print(format_validator_status(result))
            for issue in result.issues:
                console.print(format_issue(issue, verbose))

            if verbose and result.metrics:
                console.print("    [grey50]Metrics:[/grey50]")
                for name, value in result.metrics.items():
                    console.print(f"      [dim]{format_metric_name(name)}: {format_metric(name, value)}[/dim]")

        console.print()

    console.print(Rule("[bold]Summary[/bold]", style="blue"))
    console.print()
    console.print(f"  Total files:    {results.total_files}")
    console.print(f"  [green]Passed:[/green]         {results.passed_files}")
    if results.warning_files > 0:
        console.print(f"  [yellow]With warnings:[/yellow]  {results.warning_files}")
    if results.error_files > 0:
        console.print(f"  [red]With errors:[/red]    {results.error_files}")
    console.print()
    console.print(f"  [red]Errors:[/red]   {results.total_errors}")
    console.print(f"  [yellow]Warnings:[/yellow] {results.total_warnings}")
    console.print(f"  [cyan]Info:[/cyan]     {results.total_info}")
    console.print()
    console.print(f"  Duration: {results.duration / 1000:.2f}s")
    console.print()

    if results.total_errors > 0:
        console.print("[bold red]x Content quality validation failed[/bold red]")
    elif results.total_warnings > 0:
        console.print("[bold yellow]! Content quality validation passed with warnings[/bold yellow]")
    else:
        console.print("[bold green]v Content quality validation passed[/bold green]")
    console.print()


def _json_default(value: Any) -> Any:
    # Frontmatter values echoed in issue details may be dates etc.
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def format_json_report(results: AggregatedResults) -> str:
    """Serialize results to the JSON report shape."""
    return json.dumps(results.to_dict(), indent=2, default=_json_default)


def format_json_error(message: str) -> str:
    """Serialize a run failure for JSON mode."""
    return json.dumps({"error": message})
