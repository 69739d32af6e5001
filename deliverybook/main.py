"""Entry point for the deliverybook Textual app."""

from __future__ import annotations

import logging
from typing import Optional

import typer

from deliverybook.config import resolve_db_path
from deliverybook.delivery_app import DeliveryBookApp
from deliverybook.logging_setup import configure_logging
from deliverybook.logic import LogicManager

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Manage delivery customers, drivers, dishes and orders.",
    add_completion=False,
)


@app.command()
def main(
    db: Optional[str] = typer.Option(None, "--db", help="Path to the SQLite data file."),
):
    """Run the Textual application."""
    configure_logging()
    db_path = resolve_db_path(db)
    logger.info("Starting deliverybook with data file %s", db_path)
    DeliveryBookApp(LogicManager.from_file(db_path)).run()


if __name__ == "__main__":
    app()
