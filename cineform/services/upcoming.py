"""
Calendrier des prochains episodes d'animes.

Deux etapes :
1. UpcomingEpisodeService interroge TMDB (series populaires du genre
   animation en japonais) et construit la liste des episodes annonces
   dans la fenetre [aujourd'hui, aujourd'hui + N jours].
2. UpcomingEpisodeReconciler rattache chaque episode a la serie du catalogue
   portant le meme identifiant TMDB, ou synthetise une serie ephemere.

La correspondance se fait uniquement par egalite stricte des identifiants
TMDB, jamais par titre.
"""

from collections.abc import Iterable
from datetime import date, timedelta
from typing import Optional

from loguru import logger

from cineform.adapters.api.images import thumbnail_url
from cineform.core.entities.content import (
    ContentItem,
    ContentStatus,
    Episode,
    Season,
    SeriesItem,
)
from cineform.core.entities.upcoming import EpisodeAddress, ReconciledEpisode, UpcomingEpisode
from cineform.core.errors import ProviderError, classify_provider_failure
from cineform.core.ports.api_clients import DiscoverResult, IMetadataProvider, MediaType
from cineform.utils.constants import (
    ANIME_GENRE_ID,
    ANIME_ORIGINAL_LANGUAGE,
    EXTERNAL_ID_PREFIX,
    SYNTHESIZED_CONTENT_RATING,
    SYNTHESIZED_GENRES,
    SYNTHESIZED_LANGUAGE,
    SYNTHESIZED_QUALITY,
    SYNTHESIZED_TAGS,
)


class UpcomingEpisodeReconciler:
    """
    Rattache le flux des episodes a venir au catalogue local.

    Le reconciliateur est sans etat : chaque appel travaille sur le flux et
    l'instantane du catalogue recus. Les series synthetisees (is_local=False)
    ne doivent jamais etre transmises au repository.
    """

    def reconcile(
        self,
        feed: Iterable[UpcomingEpisode],
        catalog: Iterable[ContentItem],
    ) -> list[ReconciledEpisode]:
        """
        Associe chaque episode a une serie et trie par date de diffusion.

        Args:
            feed: Episodes annonces (deja filtres sur la fenetre)
            catalog: Instantane complet du catalogue

        Returns:
            Episodes rattaches, par date croissante (ordre du flux conserve
            pour une meme date)
        """
        catalog = list(catalog)
        reconciled = []
        for episode in feed:
            series = self.match(episode, catalog)
            if series is not None:
                reconciled.append(
                    ReconciledEpisode(
                        episode=episode,
                        item=series,
                        address=EpisodeAddress(
                            season_number=episode.season_number,
                            episode_index=episode.episode_number - 1,
                        ),
                        is_local=True,
                    )
                )
            else:
                reconciled.append(
                    ReconciledEpisode(
                        episode=episode,
                        item=self.synthesize_series(episode),
                        address=EpisodeAddress(
                            season_number=episode.season_number,
                            episode_index=0,
                        ),
                        is_local=False,
                    )
                )
        return self.sort_by_air_date(reconciled)

    @staticmethod
    def match(episode: UpcomingEpisode, catalog: Iterable[ContentItem]) -> Optional[SeriesItem]:
        """Premiere serie du catalogue dont l'ID TMDB est celui de l'episode."""
        for item in catalog:
            if isinstance(item, SeriesItem) and item.tmdb_id == episode.series_tmdb_id:
                return item
        return None

    @staticmethod
    def synthesize_series(episode: UpcomingEpisode) -> SeriesItem:
        """
        Construit une serie ephemere a partir des seules donnees du flux.

        L'ID est derive de l'ID TMDB ("ext-42") ; la serie porte une saison
        unique contenant l'episode annonce, sans source video.
        """
        return SeriesItem(
            id=f"{EXTERNAL_ID_PREFIX}{episode.series_tmdb_id}",
            tmdb_id=episode.series_tmdb_id,
            original_title=episode.series_title,
            synopsis=episode.series_overview,
            poster_url=episode.poster_url,
            genres=SYNTHESIZED_GENRES,
            original_language=SYNTHESIZED_LANGUAGE,
            release_year=episode.air_date.year,
            content_rating=SYNTHESIZED_CONTENT_RATING,
            quality=SYNTHESIZED_QUALITY,
            tags=SYNTHESIZED_TAGS,
            status=ContentStatus.ACTIVE,
            total_seasons=episode.season_number,
            seasons=[
                Season(
                    season_number=episode.season_number,
                    episodes=[
                        Episode(
                            title=episode.episode_name,
                            description=episode.episode_overview,
                            id=f"s{episode.season_number}e{episode.episode_number}",
                        )
                    ],
                )
            ],
        )

    @staticmethod
    def filter_window(
        feed: Iterable[UpcomingEpisode],
        today: date,
        days: int = 30,
    ) -> list[UpcomingEpisode]:
        """Episodes diffuses entre aujourd'hui et aujourd'hui + days (inclus)."""
        end = today + timedelta(days=days)
        return [episode for episode in feed if today <= episode.air_date <= end]

    @staticmethod
    def sort_by_air_date(items: Iterable) -> list:
        """
        Tri stable par date de diffusion croissante.

        Accepte des UpcomingEpisode ou des ReconciledEpisode.
        """
        return sorted(items, key=lambda item: getattr(item, "episode", item).air_date)

    @staticmethod
    def highlighted_days(feed: Iterable[UpcomingEpisode]) -> set[date]:
        """Jours du calendrier portant au moins un episode."""
        return {getattr(item, "episode", item).air_date for item in feed}

    @staticmethod
    def episodes_on(feed: Iterable, day: date) -> list:
        """Elements du flux diffuses ce jour-la (ordre conserve)."""
        return [item for item in feed if getattr(item, "episode", item).air_date == day]


class UpcomingEpisodeService:
    """
    Construit le flux des prochains episodes depuis le fournisseur.

    Les details sont recuperes un par un (pas d'appel groupe cote TMDB) pour
    les N series les plus populaires. L'echec d'un candidat est logge et le
    candidat ignore ; seul l'echec de la decouverte est fatal.
    """

    def __init__(
        self,
        provider: IMetadataProvider,
        reconciler: Optional[UpcomingEpisodeReconciler] = None,
        window_days: int = 30,
        candidate_limit: int = 20,
    ) -> None:
        """
        Initialise le service.

        Args:
            provider: Fournisseur de metadonnees (TMDB)
            reconciler: Reconciliateur utilise pour la fenetre et le tri
            window_days: Taille de la fenetre de diffusion en jours
            candidate_limit: Nombre maximum de series interrogees
        """
        self._provider = provider
        self._reconciler = reconciler or UpcomingEpisodeReconciler()
        self._window_days = window_days
        self._candidate_limit = candidate_limit

    async def fetch_upcoming(self, today: Optional[date] = None) -> list[UpcomingEpisode]:
        """
        Episodes a venir dans la fenetre, tries par date de diffusion.

        Raises:
            ProviderTransientError: Fournisseur surcharge lors de la decouverte
            ProviderUnavailableError: Toute autre panne de la decouverte
        """
        today = today or date.today()
        try:
            candidates = await self._provider.discover_tv(
                genre_id=ANIME_GENRE_ID,
                original_language=ANIME_ORIGINAL_LANGUAGE,
            )
        except ProviderError:
            raise
        except Exception as e:
            raise classify_provider_failure(e) from e

        episodes = []
        for candidate in candidates[: self._candidate_limit]:
            episode = await self._fetch_candidate(candidate)
            if episode is not None:
                episodes.append(episode)

        upcoming = self._reconciler.filter_window(episodes, today, self._window_days)
        logger.info(
            f"{len(upcoming)} episode(s) a venir sur {min(len(candidates), self._candidate_limit)} serie(s)"
        )
        return self._reconciler.sort_by_air_date(upcoming)

    async def fetch_calendar(
        self,
        catalog: Iterable[ContentItem],
        today: Optional[date] = None,
    ) -> list[ReconciledEpisode]:
        """Flux des episodes a venir rattache au catalogue."""
        return self._reconciler.reconcile(await self.fetch_upcoming(today), catalog)

    async def _fetch_candidate(self, candidate: DiscoverResult) -> Optional[UpcomingEpisode]:
        try:
            details = await self._provider.get_details(candidate.id, MediaType.TV)
        except Exception as e:
            logger.warning(f"Details indisponibles pour la serie TMDB {candidate.id}: {e}")
            return None

        if details is None or details.next_episode_to_air is None:
            return None

        next_episode = details.next_episode_to_air
        try:
            air_date = date.fromisoformat(next_episode.air_date[:10])
        except ValueError:
            logger.warning(
                f"Date de diffusion invalide pour la serie TMDB {candidate.id}: {next_episode.air_date!r}"
            )
            return None

        title = details.title or candidate.name
        return UpcomingEpisode(
            series_tmdb_id=details.id,
            series_title=title,
            poster_url=thumbnail_url(details.poster_path or candidate.poster_path, title),
            season_number=next_episode.season_number,
            episode_number=next_episode.episode_number,
            air_date=air_date,
            episode_name=next_episode.name or "",
            episode_overview=next_episode.overview or "",
            series_overview=details.overview,
        )
