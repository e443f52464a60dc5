"""
Interfaces ports pour le fournisseur de metadonnees externe.

Le fournisseur (TMDB) expose une recherche texte, le detail d'un media, la
decouverte de series populaires et la recherche de personnes. Les chemins
d'images des medias sont relatifs ; le consommateur leur ajoute l'URL de base
selon la taille souhaitee.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class MediaType(str, Enum):
    """Type de media cote fournisseur."""

    MOVIE = "movie"
    TV = "tv"


@dataclass
class SearchResult:
    """
    Resultat de recherche depuis le fournisseur.

    Attributs :
        id : ID TMDB
        title : Titre localise
        media_type : movie ou tv
        poster_path : Chemin relatif de l'affiche
        release_date : Date de sortie / premiere diffusion (YYYY-MM-DD)
        overview : Resume
    """

    id: int
    title: str
    media_type: MediaType
    poster_path: Optional[str] = None
    release_date: Optional[str] = None
    overview: Optional[str] = None


@dataclass
class NextEpisode:
    """Prochain episode a diffuser selon le fournisseur."""

    season_number: int
    episode_number: int
    air_date: str
    name: Optional[str] = None
    overview: Optional[str] = None


@dataclass
class MediaDetails:
    """
    Informations detaillees d'un film ou d'une serie.

    Attributs :
        id : ID TMDB
        media_type : movie ou tv
        title : Titre localise
        overview : Synopsis
        genres : Noms des genres
        genre_ids : IDs des genres (quand les noms sont absents)
        poster_path : Chemin relatif de l'affiche
        backdrop_path : Chemin relatif de la banniere
        release_date : Date de sortie ou de premiere diffusion
        runtime : Duree en minutes (film) ou duree d'un episode (serie)
        number_of_seasons : Nombre de saisons (series)
        next_episode_to_air : Prochain episode annonce (series)
    """

    id: int
    media_type: MediaType
    title: str = ""
    overview: str = ""
    genres: tuple[str, ...] = ()
    genre_ids: tuple[int, ...] = ()
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    runtime: Optional[int] = None
    number_of_seasons: Optional[int] = None
    next_episode_to_air: Optional[NextEpisode] = None


@dataclass
class DiscoverResult:
    """Serie decouverte (tri par popularite)."""

    id: int
    name: str = ""
    poster_path: Optional[str] = None
    genre_ids: tuple[int, ...] = field(default_factory=tuple)


@dataclass
class CastMember:
    """
    Personne trouvee par la recherche de distribution.

    profile_image_url est une URL complete (vignette w185 ou image de
    remplacement portant le nom), prete a l'affichage.
    """

    id: int
    name: str
    profile_image_url: str
    known_for_department: Optional[str] = None


class IMetadataProvider(ABC):
    """
    Interface du fournisseur de metadonnees (TMDB).

    Les erreurs de disponibilite sont levees sous forme de ProviderError
    (ProviderTransientError pour une surcharge passagere).
    """

    @abstractmethod
    async def search(self, query: str) -> list[SearchResult]:
        """Recherche films et series par texte."""
        ...

    @abstractmethod
    async def get_details(self, media_id: int, media_type: MediaType) -> Optional[MediaDetails]:
        """Recupere le detail d'un media, ou None s'il n'existe pas."""
        ...

    @abstractmethod
    async def discover_tv(
        self,
        genre_id: Optional[int] = None,
        original_language: Optional[str] = None,
        page: int = 1,
    ) -> list[DiscoverResult]:
        """Decouvre des series triees par popularite decroissante."""
        ...

    @abstractmethod
    async def get_genre_map(self, media_type: MediaType) -> dict[int, str]:
        """Table id -> nom des genres pour un type de media."""
        ...

    @abstractmethod
    async def search_people(self, name: str) -> list[CastMember]:
        """Recherche des membres de distribution par nom (liste vide si aucun)."""
        ...

    @property
    @abstractmethod
    def source(self) -> str:
        """Identifiant de la source (ex: 'tmdb')."""
        ...
