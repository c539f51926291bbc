"""CLI interface for attrcheck using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from attrcheck import __description__, __version__
from attrcheck.attributes import AttributeSchema, AttributeSetResult
from attrcheck.config import LogLevel, OutputFormat, load_config
from attrcheck.validation import DEFAULT_REGISTRY, CheckResult, RuleDefinitionError, check, parse_rules

app = typer.Typer(
    name="attrcheck",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}

_log_level_override: str | None = None


def _configure_logging(level: str) -> None:
    """Point the root logger at stderr with the given level name."""
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(_LOG_LEVELS.get(level, logging.WARNING))


def _validate_format(format: str | None) -> None:
    valid_formats = [f.value for f in OutputFormat]
    if format is not None and format not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid format '{escape(format)}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(1)


def _print_json(data: Any) -> None:
    console.print(jsonlib.dumps(data, indent=2), markup=False, emoji=False, highlight=False, soft_wrap=True)


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"attrcheck version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit")
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Log level: error, warn, info, debug (default: from config or warn)")
    ] = None,
) -> None:
    """attrcheck - Rule-based validation engine for string attribute values."""
    global _log_level_override

    if log_level is not None and log_level not in _LOG_LEVELS:
        console.print(f"[red]Error:[/red] Invalid log level '{escape(log_level)}'. Must be one of: {', '.join(_LOG_LEVELS)}")
        raise typer.Exit(1)

    _log_level_override = log_level
    _configure_logging(log_level or LogLevel.WARN.value)


def _print_check_result(result: CheckResult) -> None:
    if result.valid:
        console.print("[green]Valid[/green]")
        return

    if result.is_misconfigured:
        console.print(f"[red]Misconfigured rule:[/red] {escape(str(result.failed_rules[0]))}")
        console.print(f"[dim]{escape(str(result.exception))}[/dim]")
        return

    console.print("[red]Invalid[/red]")
    table = Table()
    table.add_column("Rule", style="cyan")
    table.add_column("Expectation", style="white")
    for rule_def in result.failed_rules:
        table.add_row(rule_def.rule_name, escape(rule_def.expectation or ""))
    console.print(table)


@app.command("check")
def check_command(
    value: Annotated[
        Optional[str],
        typer.Argument(help="Value to validate (omit to validate a missing value)")
    ] = None,
    rules: Annotated[
        str,
        typer.Option("--rules", "-r", help="Rule definition, e.g. 'required; type:number; min:0'")
    ] = "",
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: table, json (default: table)")
    ] = None,
) -> None:
    """Validate a single value against a rule definition."""
    _validate_format(format)

    try:
        result = check(value, rules)
    except RuleDefinitionError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if format == OutputFormat.JSON.value:
        _print_json(result.to_dict())
    else:
        _print_check_result(result)

    raise typer.Exit(0 if result.valid else 1)


@app.command("parse")
def parse_command(
    definition: Annotated[
        str,
        typer.Argument(help="Rule definition to parse")
    ],
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: table, json (default: table)")
    ] = None,
) -> None:
    """Parse a rule definition and show the resulting rules."""
    _validate_format(format)

    try:
        rule_defs = parse_rules(definition)
    except RuleDefinitionError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if format == OutputFormat.JSON.value:
        _print_json([{"rule": r.rule_name, "expectation": r.expectation} for r in rule_defs])
        return

    if not rule_defs:
        console.print("[yellow]No rules defined[/yellow]")
        return

    table = Table(title=f"{len(rule_defs)} rules")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Rule", style="cyan")
    table.add_column("Expectation", style="white")
    for i, rule_def in enumerate(rule_defs, 1):
        table.add_row(str(i), rule_def.rule_name, escape(rule_def.expectation or ""))
    console.print(table)


@app.command("rules")
def rules_command() -> None:
    """List the available rules."""
    table = Table()
    table.add_column("Rule", style="cyan")
    table.add_column("Expectation", style="white")
    table.add_column("Description", style="dim")
    for rule in DEFAULT_REGISTRY:
        doc = (type(rule).__doc__ or "").strip().splitlines()
        table.add_row(rule.name, "required" if rule.requires_expectation else "-", doc[0] if doc else "")
    console.print(table)


def _load_schema(config: Path | None) -> tuple[AttributeSchema, str]:
    """Load the attribute schema and default output format from configuration."""
    try:
        attrcheck_config = load_config(config)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if _log_level_override is None:
        _configure_logging(attrcheck_config.logging.level)

    if not attrcheck_config.attributes:
        console.print("[yellow]Warning:[/yellow] No attributes configured")

    return AttributeSchema(attrcheck_config.attributes), attrcheck_config.output.format


def _read_values(values_file: Path) -> dict[str, str | None]:
    """Read submitted attribute values from a JSON object file."""
    if not values_file.exists():
        console.print(f"[red]Error:[/red] Values file not found: {escape(str(values_file))}")
        raise typer.Exit(1)

    try:
        with open(values_file, encoding="utf-8") as f:
            data = jsonlib.load(f)
    except jsonlib.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] Invalid JSON in {escape(str(values_file))}: {escape(str(e))}")
        raise typer.Exit(1)

    if not isinstance(data, dict):
        console.print(f"[red]Error:[/red] Values file must contain a JSON object of attribute values: {escape(str(values_file))}")
        raise typer.Exit(1)

    values = {}
    for name, raw in data.items():
        if raw is None or isinstance(raw, str):
            values[name] = raw
        elif isinstance(raw, bool):
            values[name] = "true" if raw else "false"
        else:
            values[name] = jsonlib.dumps(raw)
    return values


def _print_attribute_results(result: AttributeSetResult) -> None:
    status_color = "green" if result.valid else "red"
    console.print(f"[{status_color}]Validation Status: {'VALID' if result.valid else 'INVALID'}[/{status_color}]")

    table = Table()
    table.add_column("Attribute", style="cyan")
    table.add_column("Status", style="white")
    table.add_column("Failed Rules", style="white")
    for name, attribute_result in result.results.items():
        if attribute_result.valid:
            status = "[green]OK[/green]"
        elif attribute_result.is_misconfigured:
            status = "[yellow]MISCONFIGURED[/yellow]"
        else:
            status = "[red]INVALID[/red]"
        table.add_row(escape(name), status, escape(attribute_result.summary()))
    console.print(table)


@app.command("validate")
def validate_command(
    values_file: Annotated[
        Path,
        typer.Argument(help="JSON file with attribute values, e.g. {\"score\": \"42\"}")
    ],
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .attrcheck.json)")
    ] = None,
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: table, json (default: from config)")
    ] = None,
) -> None:
    """Validate attribute values against the configured attribute rules."""
    _validate_format(format)

    schema, default_format = _load_schema(config)
    values = _read_values(values_file)
    result = schema.check(values)

    if (format or default_format) == OutputFormat.JSON.value:
        _print_json(result.to_dict())
    else:
        _print_attribute_results(result)

    raise typer.Exit(0 if result.valid else 1)


@app.command("hints")
def hints_command(
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .attrcheck.json)")
    ] = None,
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: table, json (default: from config)")
    ] = None,
) -> None:
    """Show form field hints derived from the configured attribute rules."""
    _validate_format(format)

    schema, default_format = _load_schema(config)
    hints = schema.field_hints()

    if (format or default_format) == OutputFormat.JSON.value:
        _print_json(hints)
        return

    table = Table()
    table.add_column("Attribute", style="cyan")
    for key in ("type", "required", "min", "max", "minLength", "maxLength", "pattern"):
        table.add_column(key, style="white")
    for name, attribute_hints in hints.items():
        table.add_row(
            escape(name),
            *(escape(attribute_hints.get(key, "")) for key in
              ("type", "required", "min", "max", "minLength", "maxLength", "pattern"))
        )
    console.print(table)


if __name__ == "__main__":
    app()
