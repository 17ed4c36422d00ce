from __future__ import annotations

import typer

from .base import configure_logging
from .commands.db import app as db_app

configure_logging()
app = typer.Typer(
    help="Inspect and manage sqltable databases",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(db_app, name="db")


def main() -> None:
    """Main entry point for package CLI.

    Side Effects:
        - Processes CLI arguments and executes commands.
        - May exit with non-zero code on errors.
    """
    app()


if __name__ == "__main__":
    main()
