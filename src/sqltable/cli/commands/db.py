"""CLI commands for inspecting and managing database tables."""

from __future__ import annotations

import contextlib
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table as RichTable

from ..base import BaseCLI
from ...database import Table, catalog_entries, get_connection, tables

db_app = typer.Typer(help="Database table commands.")

DbPathOption = Annotated[
    Path | None,
    typer.Option(
        "--db-path",
        help="Path to SQLite database file (defaults to global config)",
    ),
]


class DatabaseCLI(BaseCLI):
    """CLI helpers for table inspection and management."""

    def __init__(self) -> None:
        super().__init__("db")
        self.console = Console()

    def list_tables(self, *, db_path: Path | None) -> list[str]:
        """Return the sorted catalog snapshot, printed as a list."""
        return self.handle_cli_operation(
            operation="Tables",
            op_callable=lambda: self._tables_operation(db_path=db_path),
        )

    def list_entries(self, *, db_path: Path | None) -> list[Any]:
        """Print every catalog entry in a Rich table."""
        entries = self.handle_cli_operation(
            operation="db tables --all",
            op_callable=lambda: self._entries_operation(db_path=db_path),
            echo_result=False,
        )
        view = RichTable(title="Catalog")
        view.add_column("schema")
        view.add_column("name")
        view.add_column("kind")
        for entry in entries:
            view.add_row(entry.schema, entry.name, entry.kind)
        self.console.print(view)
        return entries

    def drop_table(self, *, name: str, db_path: Path | None) -> dict[str, Any]:
        """Drop one table using CLI operation handler."""
        return self.handle_cli_operation(
            operation="db drop",
            op_callable=lambda: self._drop_operation(name=name, db_path=db_path),
            pre_message=f"Dropping table {name}...",
        )

    def _tables_operation(self, *, db_path: Path | None) -> list[str]:
        with contextlib.closing(get_connection(db_path)) as conn:
            return sorted(tables(conn))

    def _entries_operation(self, *, db_path: Path | None) -> list[Any]:
        with contextlib.closing(get_connection(db_path)) as conn:
            return catalog_entries(conn)

    def _drop_operation(self, *, name: str, db_path: Path | None) -> dict[str, Any]:
        """Drop ``name`` and commit.

        Raises:
            StorageError: If the DROP fails (handled by handle_cli_operation).
        """
        with contextlib.closing(get_connection(db_path)) as conn:
            if name not in tables(conn):
                return {"success": False, "message": f"No such table: {name}"}
            Table(name, "").drop(conn)
            conn.commit()
        return {"success": True, "message": f"Table {name} dropped"}


cli = DatabaseCLI()


@db_app.command("tables")
def tables_command(
    db_path: DbPathOption = None,
    show_all: Annotated[
        bool,
        typer.Option("--all", help="Show every catalog entry with schema and kind"),
    ] = False,
) -> None:
    """List the tables defined in the database.

    With --all, every catalog entry (tables, views, and other kinds) is shown
    with its schema and kind.
    """
    if show_all:
        cli.list_entries(db_path=db_path)
    else:
        cli.list_tables(db_path=db_path)


@db_app.command("drop")
def drop_command(
    name: Annotated[str, typer.Argument(help="Name of the table to drop")],
    db_path: DbPathOption = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", help="Confirm that all rows of the table will be lost"),
    ] = False,
) -> None:
    """Drop one table and all of its rows.

    Refuses to run without --yes. Exits with code 1 if the table does not
    exist or the drop fails.
    """
    if not yes:
        typer.secho("Refusing to drop without --yes", fg=typer.colors.RED)
        raise typer.Exit(1)
    result = cli.drop_table(name=name, db_path=db_path)
    if not result.get("success"):
        raise typer.Exit(1)


app = db_app
