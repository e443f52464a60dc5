"""
Synchronisation de l'etat du formulaire de contenu.

Aligne une valeur de cardinalite saisie (ex: total de saisons) avec la liste
ordonnee des enregistrements enfants. Toutes les fonctions sont pures : la
liste d'entree n'est jamais modifiee, une nouvelle liste est retournee.
Elles peuvent etre appelees a chaque frappe sans effet de bord.

Regles :
- nouvelle valeur None ou negative : liste inchangee
- valeur superieure a la longueur : ajout en fin de liste d'elements par defaut
- valeur inferieure : troncature par la fin (par index, jamais par numero)
- valeur egale : aucun changement
"""

from dataclasses import replace
from typing import Callable, Optional, TypeVar

from cineform.core.entities.content import Episode, Season, SeriesItem

T = TypeVar("T")


def reconcile_count(
    current: list[T],
    new_count: Optional[int],
    make_default: Callable[[int], T],
) -> list[T]:
    """
    Ajuste la longueur d'une liste a une cardinalite cible.

    Args:
        current: Liste actuelle (non modifiee)
        new_count: Cardinalite souhaitee
        make_default: Fabrique appelee avec l'index (base 0) de chaque nouvel element

    Returns:
        Nouvelle liste ; les elements existants conservent leur identite
    """
    if new_count is None or new_count < 0:
        return list(current)

    length = len(current)
    if new_count > length:
        return list(current) + [make_default(index) for index in range(length, new_count)]
    return list(current[:new_count])


def default_season(index: int) -> Season:
    """Saison vide numerotee index + 1."""
    return Season(season_number=index + 1, episodes=[])


def default_episode(index: int) -> Episode:
    return Episode(title=f"Episódio {index + 1}")


def append_season(seasons: list[Season]) -> list[Season]:
    """Ajoute une saison ; le prochain numero est toujours len(seasons) + 1."""
    return reconcile_count(seasons, len(seasons) + 1, default_season)


def append_episode(episodes: list[Episode]) -> list[Episode]:
    return reconcile_count(episodes, len(episodes) + 1, default_episode)


def remove_at(items: list[T], index: int) -> list[T]:
    """Retire l'element a l'index donne ; index hors bornes : liste inchangee."""
    if index < 0 or index >= len(items):
        return list(items)
    return list(items[:index]) + list(items[index + 1:])


def sync_total_seasons(series: SeriesItem, new_total: Optional[int]) -> SeriesItem:
    """
    Applique une nouvelle valeur de total de saisons a une serie.

    Retourne une copie : total_seasons prend la valeur saisie et la liste des
    saisons est reconciliee. None vide le champ sans toucher aux saisons ;
    une valeur negative est ignoree.
    """
    if new_total is not None and new_total < 0:
        return replace(series)
    seasons = reconcile_count(series.seasons, new_total, default_season)
    return replace(series, total_seasons=new_total, seasons=seasons)
