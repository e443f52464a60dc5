"""
Utilitaires partages pour les commandes CLI de CineForm.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- async_command : decorateur transformant une fonction async en commande sync
- load_candidate : lecture d'un fichier JSON de contenu
- render_items / render_item : affichage Rich du catalogue
"""

import asyncio
import inspect
import json
from contextlib import contextmanager
from functools import wraps
from pathlib import Path
from typing import Any

import typer
from loguru import logger as loguru_logger
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from cineform.container import Container
from cineform.core.entities.content import ContentItem, MovieItem, SeriesItem
from cineform.core.errors import ContentValidationError

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("cineform")
    try:
        yield
    finally:
        loguru_logger.enable("cineform")


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Args:
        requires_db: Si True (defaut), cree les tables si necessaire.
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            return await func(container, *args, **kwargs)
        # Typer ne doit pas voir le parametre container
        signature = inspect.signature(func)
        wrapper.__signature__ = signature.replace(
            parameters=list(signature.parameters.values())[1:]
        )
        return wrapper
    return decorator


def async_command(func):
    """
    Transforme une fonction async en commande sync via asyncio.run().

    Les annotations Typer de la fonction d'origine sont conservees.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        return asyncio.run(func(*args, **kwargs))
    wrapper.__signature__ = inspect.signature(func)
    wrapper.__annotations__ = func.__annotations__
    return wrapper


def load_candidate(path: Path) -> dict[str, Any]:
    """Lit un contenu candidat (forme document) depuis un fichier JSON."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        console.print(f"[red]Fichier illisible {path}: {e}[/red]")
        raise typer.Exit(code=1) from e
    if not isinstance(data, dict):
        console.print(f"[red]{path} doit contenir un objet JSON[/red]")
        raise typer.Exit(code=1)
    return data


def print_validation_errors(error: ContentValidationError) -> None:
    console.print("[red]Contenu invalide :[/red]")
    for field_error in error.errors:
        console.print(f"  [yellow]{field_error.path or '-'}[/yellow] {field_error.message}")


def render_items(items: list[ContentItem]) -> Table:
    """Tableau recapitulatif du catalogue."""
    table = Table(title="Catalogue")
    table.add_column("ID", style="dim")
    table.add_column("Type")
    table.add_column("Titre", style="bold")
    table.add_column("Annee", justify="right")
    table.add_column("Statut")
    table.add_column("Modifie le", style="dim")

    for item in items:
        table.add_row(
            item.id or "",
            "Serie" if isinstance(item, SeriesItem) else "Film",
            item.display_title,
            str(item.release_year or ""),
            "[green]ativo[/green]" if item.is_active else "[red]inativo[/red]",
            item.updated_at or "",
        )
    return table


def render_item(item: ContentItem) -> Tree:
    """Arborescence d'un contenu (sources video, saisons et episodes)."""
    tree = Tree(f"[bold blue]{item.display_title}[/bold blue] [dim]({item.id})[/dim]")
    if item.original_title != item.display_title:
        tree.add(f"Titre original : {item.original_title}")
    if item.genres:
        tree.add(f"Genres : {', '.join(item.genre_list())}")
    if item.tmdb_id is not None:
        tree.add(f"TMDB : {item.tmdb_id}")
    tree.add(f"Cree le {item.created_at or '?'} - modifie le {item.updated_at or '?'}")

    if isinstance(item, MovieItem):
        sources = tree.add(f"[cyan]Sources video ({len(item.video_sources)})[/cyan]")
        for source in item.video_sources:
            sources.add(f"{source.server_name}: [dim]{source.url}[/dim]")
    elif isinstance(item, SeriesItem):
        seasons = tree.add(
            f"[magenta]Saisons ({len(item.seasons)}/{item.total_seasons or '?'})[/magenta]"
        )
        for season in item.seasons:
            season_branch = seasons.add(f"Saison {season.season_number}")
            for index, episode in enumerate(season.episodes):
                season_branch.add(
                    f"[dim]{index}[/dim] {episode.title} "
                    f"[dim]({len(episode.video_sources)} source(s))[/dim]"
                )
    return tree
