"""
Commandes CLI de gestion du catalogue (init-db, list, show, add, update, delete).
"""

from pathlib import Path
from typing import Annotated

import typer

from cineform.adapters.cli.helpers import (
    console,
    load_candidate,
    print_validation_errors,
    render_item,
    render_items,
)
from cineform.container import Container
from cineform.core.errors import (
    CineFormError,
    ContentTypeChangeError,
    ContentValidationError,
    DocumentNotFoundError,
)
from cineform.core.schemas import ensure_valid


def _catalog(container: Container):
    container.database.init()
    return container.catalog_repository()


def init_db() -> None:
    """Cree les tables du store documentaire."""
    container = Container()
    container.database.init()
    console.print(f"[green]Base initialisee :[/green] {container.config().database_url}")


def list_items(
    all_items: Annotated[
        bool,
        typer.Option("--all", "-a", help="Inclure les contenus inactifs"),
    ] = False,
) -> None:
    """Liste le catalogue, du plus recemment modifie au plus ancien."""
    repository = _catalog(Container())
    try:
        items = repository.list()
    except CineFormError as e:
        console.print(f"[red]Lecture du catalogue impossible : {e}[/red]")
        console.print("[dim]Reessayez la commande.[/dim]")
        raise typer.Exit(code=1) from e

    if not all_items:
        items = [item for item in items if item.is_active]
    if not items:
        console.print("[yellow]Catalogue vide.[/yellow]")
        return
    console.print(render_items(items))


def show(
    item_id: Annotated[str, typer.Argument(help="ID du contenu")],
) -> None:
    """Affiche le detail d'un contenu."""
    repository = _catalog(Container())
    try:
        item = repository.get_by_id(item_id)
    except CineFormError as e:
        console.print(f"[red]Lecture impossible : {e}[/red]")
        raise typer.Exit(code=1) from e

    if item is None:
        console.print(f"[yellow]Aucun contenu avec l'ID {item_id}[/yellow]")
        raise typer.Exit(code=1)
    console.print(render_item(item))


def add(
    file: Annotated[Path, typer.Argument(help="Fichier JSON du contenu (cles du document)")],
) -> None:
    """
    Valide puis cree un contenu.

    Exemple:
      cineform add film.json
    """
    candidate = load_candidate(file)
    try:
        item = ensure_valid(candidate)
    except ContentValidationError as e:
        print_validation_errors(e)
        raise typer.Exit(code=1) from e

    repository = _catalog(Container())
    try:
        item_id = repository.create(item)
    except CineFormError as e:
        console.print(f"[red]Creation impossible : {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[green]Contenu cree :[/green] {item.display_title} [dim]({item_id})[/dim]")


def update(
    item_id: Annotated[str, typer.Argument(help="ID du contenu")],
    file: Annotated[Path, typer.Argument(help="Fichier JSON du contenu (cles du document)")],
) -> None:
    """Valide puis remplace les champs d'un contenu existant."""
    candidate = load_candidate(file)
    try:
        item = ensure_valid(candidate)
    except ContentValidationError as e:
        print_validation_errors(e)
        raise typer.Exit(code=1) from e

    repository = _catalog(Container())
    try:
        repository.update(item_id, item)
    except DocumentNotFoundError as e:
        console.print(f"[yellow]Aucun contenu avec l'ID {item_id}[/yellow]")
        raise typer.Exit(code=1) from e
    except ContentTypeChangeError as e:
        console.print(
            "[red]Le type de contenu ne peut pas changer ; "
            "supprimez puis recreez le contenu.[/red]"
        )
        raise typer.Exit(code=1) from e
    except CineFormError as e:
        console.print(f"[red]Mise a jour impossible : {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[green]Contenu mis a jour :[/green] {item.display_title} [dim]({item_id})[/dim]")


def delete(
    item_id: Annotated[str, typer.Argument(help="ID du contenu")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Ne pas demander de confirmation"),
    ] = False,
) -> None:
    """Supprime definitivement un contenu."""
    if not yes and not typer.confirm(f"Supprimer definitivement {item_id} ?"):
        raise typer.Abort()

    repository = _catalog(Container())
    try:
        repository.delete(item_id)
    except CineFormError as e:
        console.print(f"[red]Suppression impossible : {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[green]Contenu supprime :[/green] {item_id}")
