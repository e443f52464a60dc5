"""
Point d'entree CLI de CineForm.

Configure le logging et monte les commandes du catalogue et de TMDB.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import (
    add,
    autofill,
    cast,
    delete,
    init_db,
    list_items,
    show,
    update,
    upcoming,
)
from .config import Settings
from .logging_config import configure_logging

app = typer.Typer(
    name="cineform",
    help="Gestion d'un catalogue de films et de series",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Afficher les logs DEBUG"),
    ] = False,
) -> None:
    """CineForm - catalogue de films et de series."""
    settings = Settings()
    configure_logging(
        log_level="DEBUG" if verbose else settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


app.command(name="init-db")(init_db)
app.command(name="list")(list_items)
app.command()(show)
app.command()(add)
app.command()(update)
app.command()(delete)
app.command()(autofill)
app.command()(cast)
app.command()(upcoming)


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    settings = Settings()
    logger.info("Configuration CineForm")
    typer.echo(f"Base de donnees : {settings.database_url}")
    typer.echo(f"API TMDB : {'activee' if settings.tmdb_enabled else 'desactivee'}")
    typer.echo(f"Langue TMDB : {settings.tmdb_language}")
    typer.echo(
        f"Episodes a venir : {settings.upcoming_window_days} jours, "
        f"{settings.upcoming_candidate_limit} series"
    )
    typer.echo(f"Niveau de log : {settings.log_level}")


@app.command()
def version() -> None:
    """Affiche la version."""
    typer.echo(f"CineForm v{__version__}")


def main() -> None:
    """Point d'entree de l'application."""
    app()


if __name__ == "__main__":
    main()
