"""Typer CLI application for Schema Manager.

Provides commands to render and preview JSON-LD, inspect opening hours and
selectable types, bulk-assign entity types, import content and check for
conflicting structured-data plugins.
"""

import json
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

console = Console()
app = typer.Typer(
    name="schema",
    help="Schema Manager -- schema.org JSON-LD for site pages and content items.",
    add_completion=False,
    no_args_is_help=True,
)

CONFIG_OPTION = typer.Option("config/settings.yaml", "--config", "-c", help="Path to settings YAML.")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging level and format."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _get_app(config: str):
    """Lazy-import and return an initialised SchemaManager."""
    from schema_manager.app import SchemaManager
    manager = SchemaManager(config_path=config)
    manager.initialize()
    return manager


def _fail(exc: Exception) -> None:
    console.print("[red]✘[/red] " + str(exc))
    raise typer.Exit(code=1)


# ------------------------------------------------------------------
# render
# ------------------------------------------------------------------
@app.command()
def render(
    item: Optional[int] = typer.Option(None, "--item", "-i", help="Content item id (site-wide if omitted)."),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON array instead of script tags."),
    config: str = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Render the <script> tags emitted in the page head."""
    _setup_logging(verbose)
    try:
        manager = _get_app(config)
        if as_json:
            output = json.dumps(manager.render(item), indent=4, ensure_ascii=False)
        else:
            output = manager.render_head(item)
    except (ValueError, RuntimeError) as exc:
        _fail(exc)
        return
    typer.echo(output)


# ------------------------------------------------------------------
# preview
# ------------------------------------------------------------------
@app.command()
def preview(
    item: int = typer.Argument(..., help="Content item id."),
    config: str = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show the JSON-LD an editor would see for a content item."""
    _setup_logging(verbose)
    try:
        text = _get_app(config).preview(item)
    except (ValueError, RuntimeError) as exc:
        _fail(exc)
        return
    console.print(Panel(Syntax(text, "json", word_wrap=True), title="Item " + str(item)))


# ------------------------------------------------------------------
# hours
# ------------------------------------------------------------------
@app.command()
def hours(
    value: str = typer.Argument(..., help='Opening hours, e.g. "Mo-Fr 09:00-17:00, Sa 10:00-14:00".'),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Parse an opening-hours string into weekly specifications."""
    _setup_logging(verbose)
    from schema_manager.modules.schema_types.opening_hours import parse_opening_hours

    specs = parse_opening_hours(value)
    if not specs:
        console.print("[yellow]⚠[/yellow] No valid opening-hours entries found.")
        return

    table = Table(title="Opening Hours", show_header=True, header_style="bold magenta")
    table.add_column("Days", style="cyan", min_width=30)
    table.add_column("Opens", min_width=6)
    table.add_column("Closes", min_width=6)
    for spec in specs:
        table.add_row(", ".join(spec["dayOfWeek"]), spec["opens"], spec["closes"])
    console.print(table)


# ------------------------------------------------------------------
# types
# ------------------------------------------------------------------
@app.command()
def types(
    config: str = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """List the selectable entity types."""
    _setup_logging(verbose)
    from schema_manager.app import SchemaManager

    table = Table(title="Entity Types", show_header=True, header_style="bold magenta")
    table.add_column("Type", style="cyan", min_width=20)
    table.add_column("Label", min_width=20)
    for name, label in SchemaManager(config_path=config).available_types().items():
        table.add_row(name, label)
    console.print(table)


# ------------------------------------------------------------------
# bulk-assign
# ------------------------------------------------------------------
@app.command("bulk-assign")
def bulk_assign(
    taxonomy: str = typer.Argument(..., help="Taxonomy name, e.g. category."),
    term_id: int = typer.Argument(..., help="Term id within the taxonomy."),
    schema_type: str = typer.Argument(..., help="Entity type to assign, e.g. FAQPage."),
    enable: bool = typer.Option(False, "--enable", help="Also enable schema on every item."),
    config: str = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Assign an entity type to every item filed under a term."""
    _setup_logging(verbose)
    try:
        count = _get_app(config).bulk_assign(taxonomy, term_id, schema_type, enable=enable)
    except (ValueError, RuntimeError) as exc:
        _fail(exc)
        return
    console.print(f"[green]✔[/green] Updated {count} items to {schema_type}.")


# ------------------------------------------------------------------
# import
# ------------------------------------------------------------------
@app.command("import")
def import_content(
    path: str = typer.Argument(..., help="YAML file with kinds, terms and items."),
    config: str = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Import content kinds, terms, items and products."""
    _setup_logging(verbose)
    try:
        counts = _get_app(config).import_content(path)
    except (OSError, ValueError, RuntimeError) as exc:
        _fail(exc)
        return
    console.print(
        "[green]✔[/green] Imported {kinds} kinds, {terms} terms, {items} items.".format(**counts)
    )


# ------------------------------------------------------------------
# conflicts
# ------------------------------------------------------------------
@app.command()
def conflicts(
    config: str = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Report active plugins that also emit structured data."""
    _setup_logging(verbose)
    names = _get_app(config).detect_conflicts()
    if not names:
        console.print("[green]✔[/green] No conflicting schema plugins detected.")
        return
    console.print(
        "[yellow]⚠[/yellow] Other schema plugins are active: "
        + ", ".join(names)
        + ". They may emit duplicate structured data."
    )


# ------------------------------------------------------------------
# init-db
# ------------------------------------------------------------------
@app.command("init-db")
def init_db(
    config: str = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Create the content store tables."""
    _setup_logging(verbose)
    _get_app(config)
    console.print("[green]✔[/green] Database tables created.")


# ------------------------------------------------------------------
# status
# ------------------------------------------------------------------
@app.command()
def status(
    config: str = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Show the effective schema settings."""
    _setup_logging(verbose)
    manager = _get_app(config)

    table = Table(title="Schema Status", show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan", min_width=25)
    table.add_column("Value", max_width=50)

    from schema_manager.database import check_connection
    db_ok, db_detail = check_connection()
    db_status = "[green]✔ OK[/green]" if db_ok else "[red]✘ Error[/red]"
    table.add_row("Database", db_status + " " + db_detail[:50])

    for key, value in manager.get_status().items():
        if isinstance(value, bool):
            display = "[green]✔ yes[/green]" if value else "[yellow]○ no[/yellow]"
        elif isinstance(value, list):
            display = ", ".join(value)
        else:
            display = str(value)
        table.add_row(key.replace("_", " ").title(), display)
    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
