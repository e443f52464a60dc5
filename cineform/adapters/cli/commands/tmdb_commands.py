"""
Commandes CLI reposant sur TMDB (autofill, cast, upcoming).
"""

from datetime import date, datetime
from typing import Annotated, Optional

import typer
from rich.table import Table

from cineform.adapters.cli.helpers import async_command, console, suppress_loguru, with_container
from cineform.core.errors import CineFormError, ProviderError, ProviderTransientError


def _require_tmdb(container) -> None:
    if not container.config().tmdb_enabled:
        console.print("[red]TMDB non configure (CINEFORM_TMDB_API_KEY).[/red]")
        raise typer.Exit(code=1)


@async_command
@with_container()
async def autofill(
    container,
    query: Annotated[str, typer.Argument(help="Titre a rechercher sur TMDB")],
    item_id: Annotated[
        Optional[str],
        typer.Option("--apply", help="ID du contenu a completer avec le resultat"),
    ] = None,
) -> None:
    """
    Recherche un contenu sur TMDB et affiche les champs proposes.

    Exemples:
      cineform autofill "Frieren"
      cineform autofill "Frieren" --apply 3f2a...
    """
    _require_tmdb(container)
    client = container.tmdb_client()
    try:
        with suppress_loguru():
            result = await container.autofill_service().autofill(query)
    except ProviderError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e
    finally:
        await client.close()

    if result is None:
        console.print(f"[yellow]Aucun film ni serie pour '{query}'.[/yellow]")
        raise typer.Exit(code=1)

    table = Table(title=f"TMDB {result.media_type.value} {result.tmdb_id}", show_header=False)
    table.add_column("Champ", style="cyan")
    table.add_column("Valeur")
    table.add_row("Titre", result.title)
    table.add_row("Synopsis", result.synopsis)
    table.add_row("Genres", ", ".join(result.genres))
    table.add_row("Sortie", result.release_date)
    table.add_row("Duree", f"{result.duration} min" if result.duration else "-")
    if result.number_of_seasons is not None:
        table.add_row("Saisons", str(result.number_of_seasons))
    table.add_row("Affiche", result.poster)
    table.add_row("Banniere", result.banner)
    console.print(table)

    if item_id is None:
        return

    repository = container.catalog_repository()
    try:
        item = repository.get_by_id(item_id)
        if item is None:
            console.print(f"[yellow]Aucun contenu avec l'ID {item_id}[/yellow]")
            raise typer.Exit(code=1)
        repository.update(item_id, result.apply_to(item))
    except CineFormError as e:
        console.print(f"[red]Mise a jour impossible : {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[green]Contenu complete :[/green] {item_id}")


@async_command
@with_container(requires_db=False)
async def cast(
    container,
    name: Annotated[str, typer.Argument(help="Nom de la personne a rechercher sur TMDB")],
) -> None:
    """
    Recherche des membres de distribution sur TMDB.

    Exemple:
      cineform cast "Hayao Miyazaki"
    """
    _require_tmdb(container)
    client = container.tmdb_client()
    try:
        with suppress_loguru():
            people = await client.search_people(name)
    except ProviderTransientError as e:
        console.print(f"[yellow]{e}[/yellow]")
        console.print("[dim]Relancez la commande dans quelques instants.[/dim]")
        raise typer.Exit(code=2) from e
    except ProviderError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e
    finally:
        await client.close()

    if not people:
        console.print(f"[yellow]Aucune personne pour '{name}'.[/yellow]")
        return

    table = Table(title=f"Distribution : {name}")
    table.add_column("ID TMDB", style="dim")
    table.add_column("Nom", style="bold", no_wrap=True)
    table.add_column("Departement")
    table.add_column("Photo", overflow="fold")
    for person in people:
        table.add_row(
            str(person.id),
            person.name,
            person.known_for_department or "-",
            person.profile_image_url,
        )
    console.print(table)


def _parse_day(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise typer.BadParameter("format attendu : AAAA-MM-JJ") from e


@async_command
@with_container()
async def upcoming(
    container,
    day: Annotated[
        Optional[str],
        typer.Option("--date", help="Ne montrer que les episodes de ce jour (AAAA-MM-JJ)"),
    ] = None,
    today: Annotated[
        Optional[str],
        typer.Option("--today", help="Date de reference de la fenetre (AAAA-MM-JJ)"),
    ] = None,
) -> None:
    """Calendrier des prochains episodes d'animes, rattaches au catalogue."""
    _require_tmdb(container)
    selected_day = _parse_day(day)
    reference = _parse_day(today)

    client = container.tmdb_client()
    try:
        catalog = container.catalog_repository().list()
        with suppress_loguru():
            calendar = await container.upcoming_service().fetch_calendar(catalog, today=reference)
    except ProviderTransientError as e:
        console.print(f"[yellow]{e}[/yellow]")
        console.print("[dim]Relancez la commande dans quelques instants.[/dim]")
        raise typer.Exit(code=2) from e
    except CineFormError as e:
        console.print(f"[red]Calendrier indisponible : {e}[/red]")
        raise typer.Exit(code=1) from e
    finally:
        await client.close()

    reconciler = container.upcoming_reconciler()
    if selected_day is not None:
        calendar = reconciler.episodes_on(calendar, selected_day)

    if not calendar:
        console.print("[yellow]Aucun episode a venir.[/yellow]")
        return

    days = sorted(reconciler.highlighted_days(calendar))
    console.print(f"[bold]{len(calendar)} episode(s) sur {len(days)} jour(s)[/bold]")

    table = Table(title="Prochains episodes")
    table.add_column("Date")
    table.add_column("Serie", style="bold")
    table.add_column("Episode")
    table.add_column("Adresse", style="dim")
    table.add_column("Catalogue")
    for entry in calendar:
        episode = entry.episode
        table.add_row(
            episode.air_date.isoformat(),
            episode.series_title,
            f"S{episode.season_number:02d}E{episode.episode_number:02d} {episode.episode_name}",
            f"saison {entry.address.season_number}, index {entry.address.episode_index}",
            f"[green]{entry.item.id}[/green]" if entry.is_local else "[dim]absent[/dim]",
        )
    console.print(table)
