"""
Command-line interface for schema_catalog.

Provides extract, check-names, and show commands for catalog metadata.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from schema_catalog import __version__
from schema_catalog.config import ConfigError, ExtractionConfig, load_config
from schema_catalog.models import DatabaseMetadata

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with Rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def open_connection(config: ExtractionConfig):
    """Create the catalog connection for the configured source."""
    if config.source == "oracle":
        from schema_catalog.metadata import OracleCatalogConnection
        return OracleCatalogConnection(config.oracle_conn)

    from schema_catalog.metadata import SqliteCatalogConnection
    return SqliteCatalogConnection(config.sqlite_path)


def print_metadata(metadata: DatabaseMetadata, title: str) -> None:
    """Render accepted tables as a rich table."""
    tables_table = Table(title=title)
    tables_table.add_column("Table", style="cyan")
    tables_table.add_column("Columns", style="green", justify="right")
    tables_table.add_column("Numeric", style="yellow", justify="right")

    for table in metadata.tables:
        tables_table.add_row(
            table.table_name,
            str(len(table.columns)),
            str(sum(1 for c in table.columns if c.is_numeric)),
        )

    console.print(tables_table)


@click.group()
@click.version_option(version=__version__, prog_name="schema-catalog")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def cli(verbose: bool) -> None:
    """
    Schema Catalog - Validated database metadata for schema generation

    Read a database catalog and keep the tables whose columns can be exposed
    as schema fields.
    """
    setup_logging(verbose)


@cli.command()
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="YAML configuration file",
)
@click.option(
    "--source",
    type=click.Choice(["sqlite", "oracle"]),
    default=None,
    help="Catalog source (default: sqlite)",
)
@click.option(
    "--database",
    type=str,
    default=None,
    help="Database name to extract (matched exactly, case-sensitive)",
)
@click.option(
    "--sqlite_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="SQLite database file",
)
@click.option(
    "--oracle_conn",
    type=str,
    default=None,
    help="Oracle connection string (user/pwd@host:port/service)",
)
@click.option(
    "--table_types",
    type=str,
    default=None,
    help="Comma-separated table kinds to list (default: TABLE)",
)
@click.option(
    "--output",
    type=click.Path(path_type=Path),
    default=None,
    help="Save the snapshot as JSON (or YAML for .yaml/.yml)",
)
def extract(
    config_file: Optional[Path],
    source: Optional[str],
    database: Optional[str],
    sqlite_path: Optional[Path],
    oracle_conn: Optional[str],
    table_types: Optional[str],
    output: Optional[Path],
) -> None:
    """
    Extract validated metadata for one database.

    Tables with no columns or with column names that are not valid
    identifiers are left out and reported in the log.

    Examples:

        # SQLite file, main database
        schema-catalog extract --sqlite_path app.db --database main

        # Oracle schema, saved for schema rendering
        schema-catalog extract --source oracle \\
            --oracle_conn "user/pwd@localhost:1521/ORCL" \\
            --database APP --output app_metadata.json
    """
    from schema_catalog.metadata import DatabaseMetadataExtractor

    try:
        config = load_config(config_file).merge(
            source=source,
            database=database,
            sqlite_path=sqlite_path,
            oracle_conn=oracle_conn,
            table_types=table_types,
            output=output,
        )
        config.validate()
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    console.print("[bold blue]Schema Catalog Extraction[/bold blue]")
    console.print(f"Source: {config.source}")
    console.print(f"Database: {config.database}")

    extractor = DatabaseMetadataExtractor(table_types=config.table_types)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Reading catalog...", total=None)

        with open_connection(config) as connection:
            metadata = extractor.get_database_metadata(connection, config.database)

        progress.update(task, completed=True)

    if metadata.tables:
        print_metadata(metadata, f"Tables in {metadata.database_name}")
    else:
        console.print(f"\n[yellow]No valid tables found in {metadata.database_name}.[/yellow]")

    if config.output:
        metadata.save(config.output)
        console.print(f"\n[green]Saved metadata to: {config.output}[/green]")


@cli.command("check-names")
@click.argument("names", nargs=-1, required=True)
def check_names(names: Tuple[str, ...]) -> None:
    """
    Check column names against the identifier pattern.

    Every name is checked and every failure reported.

    Example:

        schema-catalog check-names id user_name 1st-column
    """
    from schema_catalog.metadata import validate_column_names

    result = validate_column_names(names)
    if result.is_valid:
        console.print(f"[green]{len(names)} valid name(s)[/green]")
        return

    for message in result.errors:
        console.print(f"[red]{escape(message)}[/red]")
    sys.exit(1)


@cli.command()
@click.option(
    "--snapshot",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to a saved metadata snapshot",
)
def show(snapshot: Path) -> None:
    """
    Display a saved metadata snapshot.

    Example:

        schema-catalog show --snapshot app_metadata.json
    """
    metadata = DatabaseMetadata.load(snapshot)

    print_metadata(metadata, f"Tables in {metadata.database_name}")

    for table in metadata.tables:
        columns_table = Table(title=table.full_name)
        columns_table.add_column("Column", style="cyan")
        columns_table.add_column("Type", style="green")
        columns_table.add_column("Code", style="yellow", justify="right")

        for col in table.columns:
            columns_table.add_row(col.column_name, col.type_name, str(col.type_code))

        console.print(columns_table)


if __name__ == "__main__":
    cli()
