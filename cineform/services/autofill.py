"""
Auto-remplissage d'un contenu a partir de TMDB.

Recherche multi, premier resultat film ou serie, puis detail. Les noms de
genres absents du detail sont resolus par une table id -> nom fournie par
l'appelant (ou chargee pour la duree de l'appel), jamais par un cache global.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from loguru import logger

from cineform.adapters.api.images import banner_url, poster_url
from cineform.core.entities.content import ContentItem, SeriesItem
from cineform.core.ports.api_clients import IMetadataProvider, MediaDetails, MediaType
from cineform.services.form_sync import sync_total_seasons
from cineform.utils.constants import UNAVAILABLE_DATE, UNAVAILABLE_SYNOPSIS, UNAVAILABLE_TITLE


@dataclass
class AutoFillResult:
    """
    Champs proposes par TMDB pour le formulaire.

    Attributs :
        title : Titre localise (ou valeur de repli)
        synopsis : Synopsis (ou valeur de repli)
        genres : Noms des genres
        poster : URL de l'affiche (w500 ou placeholder)
        banner : URL de la banniere (w1280 ou placeholder)
        release_date : Date de sortie YYYY-MM-DD (ou valeur de repli)
        duration : Duree en minutes (film) ou d'un episode (serie)
        number_of_seasons : Nombre de saisons (series uniquement)
        media_type : movie ou tv
        tmdb_id : Identifiant TMDB
    """

    title: str
    synopsis: str
    poster: str
    banner: str
    release_date: str
    media_type: MediaType
    tmdb_id: int
    genres: list[str] = field(default_factory=list)
    duration: Optional[int] = None
    number_of_seasons: Optional[int] = None

    @property
    def release_year(self) -> Optional[int]:
        """Annee extraite de la date de sortie, None si non disponible."""
        prefix = self.release_date[:4]
        return int(prefix) if prefix.isdigit() else None

    def apply_to(self, item: ContentItem) -> ContentItem:
        """
        Retourne une copie du contenu completee avec les donnees TMDB.

        Pour une serie associee a une serie TMDB, le nombre de saisons est
        applique via sync_total_seasons (saisons existantes conservees).
        """
        updated = replace(
            item,
            tmdb_id=self.tmdb_id,
            original_title=self.title,
            synopsis=self.synopsis,
            genres=", ".join(self.genres),
            poster_url=self.poster,
            banner_url=self.banner,
            release_year=self.release_year or item.release_year,
            average_duration=self.duration or item.average_duration,
        )
        if not isinstance(updated, SeriesItem):
            if self.media_type is MediaType.TV:
                logger.warning(f"'{self.title}' est une serie TMDB, le contenu edite est un film")
            return updated

        if self.media_type is not MediaType.TV:
            logger.warning(f"'{self.title}' est un film TMDB, le contenu edite est une serie")
            return updated
        if self.number_of_seasons:
            return sync_total_seasons(updated, self.number_of_seasons)
        return updated


class AutoFillService:
    """
    Service d'auto-remplissage.

    Example:
        service = AutoFillService(tmdb_client)
        result = await service.autofill("Frieren")
        if result:
            item = result.apply_to(item)
    """

    def __init__(self, provider: IMetadataProvider) -> None:
        self._provider = provider

    async def autofill(
        self,
        query: str,
        genre_map: Optional[dict[int, str]] = None,
    ) -> Optional[AutoFillResult]:
        """
        Cherche un contenu et construit les champs du formulaire.

        Args:
            query: Texte recherche
            genre_map: Table id -> nom des genres ; chargee depuis le
                fournisseur pour cet appel si absente et necessaire

        Returns:
            AutoFillResult, ou None si aucun film ni serie ne correspond

        Raises:
            ProviderError: Panne du fournisseur
        """
        results = await self._provider.search(query)
        if not results:
            logger.info(f"Aucun film ni serie TMDB pour '{query}'")
            return None

        first = results[0]
        details = await self._provider.get_details(first.id, first.media_type)
        if details is None:
            logger.info(f"TMDB {first.media_type.value} {first.id} introuvable")
            return None

        genres = list(details.genres)
        if not genres and details.genre_ids:
            if genre_map is None:
                genre_map = await self._provider.get_genre_map(details.media_type)
            genres = [genre_map[gid] for gid in details.genre_ids if gid in genre_map]

        return self._build_result(details, genres)

    @staticmethod
    def _build_result(details: MediaDetails, genres: list[str]) -> AutoFillResult:
        is_series = details.media_type is MediaType.TV
        return AutoFillResult(
            title=details.title or UNAVAILABLE_TITLE,
            synopsis=details.overview or UNAVAILABLE_SYNOPSIS,
            genres=genres,
            poster=poster_url(details.poster_path),
            banner=banner_url(details.backdrop_path),
            release_date=details.release_date or UNAVAILABLE_DATE,
            duration=details.runtime,
            number_of_seasons=details.number_of_seasons if is_series else None,
            media_type=details.media_type,
            tmdb_id=details.id,
        )
