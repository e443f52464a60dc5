"""
Entites ephemeres du calendrier des prochains episodes.

Ces objets ne sont jamais persistes : ils sont recalcules a chaque
recuperation depuis TMDB.
"""

from dataclasses import dataclass
from datetime import date

from cineform.core.entities.content import SeriesItem


@dataclass(frozen=True)
class UpcomingEpisode:
    """
    Prochain episode a diffuser, tel qu'annonce par TMDB.

    Attributs :
        series_tmdb_id : Identifiant TMDB de la serie
        series_title : Titre de la serie
        poster_url : URL complete de l'affiche (ou placeholder)
        season_number : Numero de saison
        episode_number : Numero d'episode (base 1)
        air_date : Date de diffusion (jour calendaire)
        episode_name : Titre de l'episode
        episode_overview : Resume de l'episode
        series_overview : Synopsis de la serie
    """

    series_tmdb_id: int
    series_title: str
    poster_url: str
    season_number: int
    episode_number: int
    air_date: date
    episode_name: str = ""
    episode_overview: str = ""
    series_overview: str = ""


@dataclass(frozen=True)
class EpisodeAddress:
    """Adresse d'un episode dans une serie : numero de saison + index base 0."""

    season_number: int
    episode_index: int


@dataclass
class ReconciledEpisode:
    """
    Episode annonce rattache a une serie.

    is_local vaut False quand la serie a ete synthetisee faute de
    correspondance dans le catalogue ; elle ne doit alors jamais etre ecrite.
    """

    episode: UpcomingEpisode
    item: SeriesItem
    address: EpisodeAddress
    is_local: bool
