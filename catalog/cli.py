# catalog/cli.py
from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator

import click
from flask import Flask, current_app

from catalog.db import Database
from catalog.services.category_store import CategoryStore
from catalog.services.import_service import import_products
from catalog.services.path_renderer import render_all


@contextmanager
def _database() -> Iterator[Database]:
    """DB der App; wird am Ende jedes Kommandos geschlossen."""
    database: Database = current_app.extensions["catalog_db"]
    try:
        yield database
    finally:
        database.close()


def register_cli(app: Flask) -> None:

    @app.cli.command("init-db")
    def init_db_command():
        """Tabellen anlegen (idempotent)."""
        with _database() as database:
            database.init_schema()
        click.echo("Datenbank initialisiert.")

    @app.cli.command("import-products")
    @click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
    @click.option("--workers", type=int, default=None, help="Parallele Worker (Default: IMPORT_WORKERS)")
    def import_products_command(csv_path: str, workers: int | None):
        """Produkte + Kategorie-Pfade aus CSV importieren."""
        n = workers if workers is not None else current_app.config["IMPORT_WORKERS"]
        with _database() as database:
            try:
                report = import_products(csv_path, database, workers=max(1, n))
            except ValueError as e:
                raise click.ClickException(str(e)) from e

        click.echo(f"{report.imported} Produkte importiert, {report.categories_created} neue Kategorien.")
        for line, reason in report.skipped:
            click.echo(f"  übersprungen Zeile {line}: {reason}")
        for line, reason in report.failed:
            click.echo(f"  FEHLER Zeile {line}: {reason}", err=True)
        if report.failed:
            raise SystemExit(1)

    @app.cli.command("categories")
    def list_categories_command():
        """Flache Kategorie-Liste ausgeben."""
        with _database() as database:
            rows = CategoryStore(database).list_all()
        for cid, path in render_all(rows):
            click.echo(f"{cid:>6}  {path}")
