"""
Entites du catalogue de contenus.

Un ContentItem est soit un film (MovieItem), soit une serie (SeriesItem).
Le type de contenu est porte par la classe elle-meme : un film ne peut pas
transporter de saisons et une serie ne peut pas transporter de sources video
globales. Changer de type revient a supprimer puis recreer l'element.

Hierarchie d'une serie : SeriesItem -> Season -> Episode -> VideoSource.
Les saisons, episodes et sources n'ont pas de cycle de vie propre : ils sont
persistes et supprimes avec le document qui les contient.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional


class ContentType(str, Enum):
    """Discriminant du catalogue (valeur stockee dans `contentType`)."""

    MOVIE = "movie"
    SERIES = "series"


class ContentStatus(str, Enum):
    """Statut de publication d'un contenu."""

    ACTIVE = "ativo"
    INACTIVE = "inativo"


def split_csv(value: str) -> list[str]:
    """Decoupe une liste separee par des virgules, sans doublons ni vides."""
    seen: list[str] = []
    for part in (value or "").split(","):
        part = part.strip()
        if part and part not in seen:
            seen.append(part)
    return seen


@dataclass
class VideoSource:
    """
    Lien vers un flux lisible (miroir ou hebergeur).

    Attributs :
        server_name : Libelle du serveur affiche a l'utilisateur
        url : URL du flux (vide tolere uniquement pendant la saisie)
        id : Identifiant stable optionnel
    """

    server_name: str = ""
    url: str = ""
    id: Optional[str] = None


@dataclass
class Episode:
    """
    Episode d'une saison.

    Attributs :
        title : Titre de l'episode (obligatoire)
        description : Resume de l'episode
        duration : Duree en minutes
        video_sources : Sources video ordonnees
        subtitle_url : Lien vers le fichier de sous-titres
        id : Identifiant stable optionnel
    """

    title: str = ""
    description: str = ""
    duration: Optional[float] = None
    video_sources: list[VideoSource] = field(default_factory=list)
    subtitle_url: str = ""
    id: Optional[str] = None


@dataclass
class Season:
    """
    Saison d'une serie.

    Le numero de saison est l'adresse utilisee pour la correspondance avec
    TMDB ; les episodes sont adresses par leur index (base 0) dans la liste.
    """

    season_number: int = 1
    episodes: list[Episode] = field(default_factory=list)
    id: Optional[str] = None


@dataclass
class ContentItem:
    """
    Champs communs a tous les contenus du catalogue.

    Attributs :
        id : Identifiant attribue par le store a la creation (jamais par le client)
        original_title : Titre original (obligatoire)
        localized_title : Titre localise
        synopsis : Synopsis (2000 caracteres max)
        genres : Genres separes par des virgules
        original_language : Langue originale
        dub_languages : Doublages disponibles, separes par des virgules
        release_year : Annee de sortie
        average_duration : Duree moyenne en minutes
        content_rating : Classification indicative (Livre, 12+, ...)
        quality : Qualite (4K, 1080p, ...)
        poster_url : URL de l'affiche
        banner_url : URL de la banniere de fond
        tags : Tags separes par des virgules
        featured_on_home : Mise en avant sur l'accueil
        status : Statut de publication
        tmdb_id : Identifiant TMDB (cle de correspondance externe)
        tmdb_search_query : Derniere recherche TMDB saisie
        created_at : Date de creation ISO-8601 (attribuee par le store)
        updated_at : Date de modification ISO-8601 (attribuee par le store)
    """

    content_type: ClassVar[ContentType]

    id: Optional[str] = None
    original_title: str = ""
    localized_title: str = ""
    synopsis: str = ""
    genres: str = ""
    original_language: str = ""
    dub_languages: str = ""
    release_year: Optional[int] = None
    average_duration: Optional[float] = None
    content_rating: str = ""
    quality: str = ""
    poster_url: str = ""
    banner_url: str = ""
    tags: str = ""
    featured_on_home: bool = False
    status: ContentStatus = ContentStatus.ACTIVE
    tmdb_id: Optional[int] = None
    tmdb_search_query: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def display_title(self) -> str:
        """Titre localise s'il existe, sinon le titre original."""
        return self.localized_title or self.original_title

    @property
    def is_active(self) -> bool:
        return self.status == ContentStatus.ACTIVE

    @property
    def last_touched(self) -> str:
        """Horodatage de tri : updated_at, a defaut created_at."""
        return self.updated_at or self.created_at or ""

    def genre_list(self) -> list[str]:
        """Genres normalises (premiere lettre en majuscule, sans doublons)."""
        normalized: list[str] = []
        for genre in split_csv(self.genres):
            genre = genre[:1].upper() + genre[1:].lower()
            if genre not in normalized:
                normalized.append(genre)
        return normalized

    def dub_language_list(self) -> list[str]:
        return split_csv(self.dub_languages)

    def tag_list(self) -> list[str]:
        return split_csv(self.tags)


@dataclass
class MovieItem(ContentItem):
    """Film : sources video ordonnees et un lien de sous-titres global."""

    content_type: ClassVar[ContentType] = ContentType.MOVIE

    video_sources: list[VideoSource] = field(default_factory=list)
    subtitle_url: str = ""


@dataclass
class SeriesItem(ContentItem):
    """
    Serie : nombre de saisons annonce et liste ordonnee des saisons.

    total_seasons est indicatif ; seul le synchroniseur de formulaire
    (services.form_sync) aligne la liste des saisons sur cette valeur.
    """

    content_type: ClassVar[ContentType] = ContentType.SERIES

    total_seasons: Optional[int] = None
    seasons: list[Season] = field(default_factory=list)

    @property
    def episode_count(self) -> int:
        return sum(len(season.episodes) for season in self.seasons)
