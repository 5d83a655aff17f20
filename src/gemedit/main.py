from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from gemedit import __version__
from gemedit.cli.output import get_console, print_error, print_json
from gemedit.exceptions import GemeditError
from gemedit.logging_config import logger, setup_logging
from gemedit.manifest import ManifestFacade, QuoteConfig
from gemedit.manifest.quotes import parse_quote_style
from gemedit.projects import ProjectManager
from gemedit.schemas import EditResult

app = typer.Typer(help="Read and edit Gemfiles and gemspecs without evaluating Ruby.")
console = get_console()


@app.callback()
def global_options(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level for stderr output (DEBUG, INFO, WARNING, ERROR)"
    ),
):
    """
    gemedit: line-preserving Gemfile and gemspec editor.

    Every command works on one manifest file; untouched lines stay byte-identical.
    """
    if log_level:
        setup_logging(level=log_level.upper(), force=True)


def _facade() -> ManifestFacade:
    return ManifestFacade(project_manager=ProjectManager())


def _report(result: EditResult, json_output: bool) -> None:
    """Print an edit result; exit 1 on failure."""
    if not result.success:
        print_error(result.message, code=result.error_type, json_output=json_output, input_value=result.gem_name)
        raise typer.Exit(code=1)

    if json_output:
        print_json({"status": "ok", **result.model_dump(mode="json", exclude_none=True)})
        return

    style = "green" if result.changed else "yellow"
    console.print(f"[{style}]{escape(result.message)}[/{style}]")
    if result.diff:
        console.print(escape(result.diff), highlight=False)


@app.command()
def version():
    """
    Prints the current version of gemedit.
    """
    typer.echo(f"gemedit v{__version__}")


@app.command()
def serve(
    project: List[str] = typer.Option(
        [],
        "--project",
        "-p",
        help="Project root as name:path or path (repeatable)"
    ),
    quotes: Optional[str] = typer.Option(
        None,
        "--quotes",
        "-q",
        help="Default quote style for both Gemfiles and gemspecs (single|double)"
    ),
):
    """
    Run the MCP server over stdio.
    """
    from gemedit.mcp import run_server

    try:
        manager = ProjectManager.from_specs(project)
        manager.validate_projects()
        quote_config = QuoteConfig.uniform(parse_quote_style(quotes)) if quotes else None
    except GemeditError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    logger.info(f"Starting gemedit MCP server (projects: {', '.join(manager.list_projects())})")
    run_server(manager, quote_config)


@app.command()
def parse(
    file: Path = typer.Argument(..., help="Gemfile or gemspec to read"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List the dependencies declared in a manifest.
    """
    try:
        document = _facade().read(str(file))
    except GemeditError as e:
        print_error(str(e), code=e.code, json_output=json_output, input_value=str(file))
        raise typer.Exit(code=1)

    if json_output:
        print_json({"status": "ok", **document.model_dump(mode="json")})
        return

    console.print(f"[bold]{escape(document.path)}[/bold] ({document.kind.value})")
    if document.ruby_version:
        console.print(f"Ruby: {escape(document.ruby_version)}")
    if document.source:
        console.print(f"Source: {escape(document.source)}")

    table = Table(title=f"{len(document.gems)} dependencies")
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Gem", style="cyan")
    table.add_column("Requirement")
    table.add_column("Groups")
    table.add_column("Platforms")
    table.add_column("Source")

    for gem in document.gems:
        table.add_row(
            str(gem.line or ""),
            escape(gem.name),
            escape(gem.requirement or ""),
            ", ".join(gem.groups),
            ", ".join(gem.platforms),
            escape(gem.source or ""),
        )
    console.print(table)


@app.command()
def pin(
    file: Path = typer.Argument(..., help="Gemfile or gemspec to edit"),
    gem: str = typer.Argument(..., help="Gem name"),
    version_number: str = typer.Argument(..., metavar="VERSION", help="Version, e.g. 7.0.0"),
    op: str = typer.Option("~>", "--op", help="Constraint operator: ~>, >=, >, <, <=, ="),
    quotes: Optional[str] = typer.Option(None, "--quotes", "-q", help="Quote style (single|double)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the diff without writing"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Pin a gem to a version constraint.
    """
    result = _facade().pin(
        gem,
        version_number,
        pin_type=op,
        file_path=str(file),
        quote_style=quotes,
        dry_run=dry_run,
    )
    _report(result, json_output)


@app.command()
def unpin(
    file: Path = typer.Argument(..., help="Gemfile or gemspec to edit"),
    gem: str = typer.Argument(..., help="Gem name"),
    quotes: Optional[str] = typer.Option(None, "--quotes", "-q", help="Quote style (single|double)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the diff without writing"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Remove a gem's version constraints.
    """
    result = _facade().unpin(gem, file_path=str(file), quote_style=quotes, dry_run=dry_run)
    _report(result, json_output)


@app.command()
def add(
    file: Path = typer.Argument(..., help="Gemfile to edit"),
    gem: str = typer.Argument(..., help="Gem name"),
    version_number: Optional[str] = typer.Option(None, "--version", "-v", help="Version constraint value"),
    op: str = typer.Option("~>", "--op", help="Constraint operator: ~>, >=, >, <, <=, ="),
    group: List[str] = typer.Option([], "--group", "-g", help="Group (repeatable)"),
    platform: List[str] = typer.Option([], "--platform", help="Platform (repeatable)"),
    source: Optional[str] = typer.Option(None, "--source", help="git URL, path or source name"),
    require: Optional[str] = typer.Option(None, "--require", help="Custom require path"),
    no_require: bool = typer.Option(False, "--no-require", help="Emit require: false"),
    quotes: Optional[str] = typer.Option(None, "--quotes", "-q", help="Quote style (single|double)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the diff without writing"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Add a gem to a Gemfile, inside a group block when --group is given.
    """
    if require and no_require:
        print_error("--require and --no-require are mutually exclusive", code="invalid_input",
                    json_output=json_output, input_value=gem)
        raise typer.Exit(code=1)

    result = _facade().add_to_gemfile(
        gem,
        version=version_number,
        pin_type=op,
        group=group or None,
        platforms=platform or None,
        source=source,
        require=False if no_require else require,
        file_path=str(file),
        quote_style=quotes,
        dry_run=dry_run,
    )
    _report(result, json_output)


@app.command("add-dependency")
def add_dependency(
    file: Path = typer.Argument(..., help="gemspec to edit"),
    gem: str = typer.Argument(..., help="Gem name"),
    version_number: Optional[str] = typer.Option(None, "--version", "-v", help="Version constraint value"),
    op: str = typer.Option("~>", "--op", help="Constraint operator: ~>, >=, >, <, <=, ="),
    development: bool = typer.Option(False, "--development", "-d", help="Add as development dependency"),
    quotes: Optional[str] = typer.Option(None, "--quotes", "-q", help="Quote style (single|double)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the diff without writing"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Add a dependency to a gemspec.
    """
    result = _facade().add_to_gemspec(
        gem,
        str(file),
        version=version_number,
        pin_type=op,
        dependency_type="development" if development else "runtime",
        quote_style=quotes,
        dry_run=dry_run,
    )
    _report(result, json_output)


if __name__ == "__main__":
    app()
