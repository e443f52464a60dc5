"""
Client TMDB : recherche multi, details, decouverte de series, genres et personnes.

Implemente IMetadataProvider. Les reponses sont mises en cache (APICache)
et les 429 relances (request_with_retry). Toute autre panne est convertie
en ProviderError : ProviderTransientError pour une surcharge (503).

Usage:
    cache = APICache()
    client = TMDBClient(api_key="your_key", cache=cache)
    results = await client.search("Frieren")
    details = await client.get_details(results[0].id, results[0].media_type)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from cineform.adapters.api.cache import APICache
from cineform.adapters.api.images import thumbnail_url
from cineform.adapters.api.retry import RateLimitError, request_with_retry
from cineform.core.errors import classify_provider_failure
from cineform.core.ports.api_clients import (
    CastMember,
    DiscoverResult,
    IMetadataProvider,
    MediaDetails,
    MediaType,
    NextEpisode,
    SearchResult,
)


def _genre_ids(values: Any) -> tuple[int, ...]:
    if not isinstance(values, list):
        return ()
    return tuple(value for value in values if isinstance(value, int))


def _next_episode(data: Any) -> Optional[NextEpisode]:
    if not isinstance(data, dict):
        return None
    season = data.get("season_number")
    episode = data.get("episode_number")
    air_date = data.get("air_date")
    if not isinstance(season, int) or not isinstance(episode, int) or not air_date:
        return None
    return NextEpisode(
        season_number=season,
        episode_number=episode,
        air_date=air_date,
        name=data.get("name") or None,
        overview=data.get("overview") or None,
    )


class TMDBClient(IMetadataProvider):
    """
    Client API TMDB (v3).

    - search : /search/multi, seuls les films et series sont conserves (cache 24h)
    - get_details : /movie/{id} ou /tv/{id}, None sur 404 (cache 7j)
    - discover_tv : /discover/tv trie par popularite (cache 6h)
    - get_genre_map : /genre/{type}/list (cache 7j)
    - search_people : /search/person, premiere page (cache 24h)

    La langue des reponses est fixee a la construction (pt-BR par defaut).
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"

    def __init__(self, api_key: str, cache: APICache, language: str = "pt-BR") -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API v3 (32 caracteres) ou jeton de lecture v4
            cache: Cache des reponses
            language: Langue des titres et synopsis retournes
        """
        self._api_key = api_key
        self._cache = cache
        self._language = language
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, cree a la demande.

        Une cle v3 passe en parametre api_key, un jeton v4 en en-tete Bearer.
        """
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json"}
            params = {}
            if len(self._api_key) > 40:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=30.0,
            )
        return self._client

    @property
    def source(self) -> str:
        return "tmdb"

    async def _get_json(
        self,
        path: str,
        params: dict[str, Any],
        allow_missing: bool = False,
    ) -> Optional[dict[str, Any]]:
        """
        GET sur l'API, avec conversion des pannes en ProviderError.

        Args:
            path: Chemin relatif (ex: "/tv/123")
            params: Parametres de requete (la langue est ajoutee)
            allow_missing: Retourne None sur 404 au lieu de lever

        Raises:
            ProviderTransientError: Surcharge du fournisseur (503)
            ProviderUnavailableError: Toute autre panne
        """
        client = self._get_client()
        logger.debug(f"TMDB GET {path}", params=params)
        try:
            response = await request_with_retry(
                client, "GET", path, params={"language": self._language, **params}
            )
            data = response.json()
        except httpx.HTTPStatusError as e:
            if allow_missing and e.response.status_code == 404:
                return None
            logger.warning(f"TMDB {path}: HTTP {e.response.status_code}")
            raise classify_provider_failure(e) from e
        except (httpx.HTTPError, RateLimitError, ValueError) as e:
            logger.warning(f"TMDB {path}: {e}")
            raise classify_provider_failure(e) from e

        if not isinstance(data, dict):
            raise classify_provider_failure(ValueError(f"Reponse TMDB invalide pour {path}"))
        return data

    async def search(self, query: str) -> list[SearchResult]:
        """
        Recherche films et series par texte.

        Les personnes et autres types de resultats sont ignores.
        """
        cache_key = f"tmdb:search:{self._language}:{query}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        data = await self._get_json(
            "/search/multi", {"query": query, "include_adult": "false"}
        )

        results = []
        for item in data.get("results", []):
            try:
                media_type = MediaType(item.get("media_type"))
            except ValueError:
                continue
            if media_type is MediaType.MOVIE:
                title = item.get("title") or item.get("original_title") or ""
                release_date = item.get("release_date")
            else:
                title = item.get("name") or item.get("original_name") or ""
                release_date = item.get("first_air_date")
            results.append(
                SearchResult(
                    id=item["id"],
                    title=title,
                    media_type=media_type,
                    poster_path=item.get("poster_path"),
                    release_date=release_date or None,
                    overview=item.get("overview") or None,
                )
            )

        await self._cache.set_search(cache_key, results)
        return results

    async def get_details(self, media_id: int, media_type: MediaType) -> Optional[MediaDetails]:
        """
        Recupere le detail d'un film ou d'une serie.

        Returns:
            MediaDetails, ou None si TMDB ne connait pas cet ID
        """
        cache_key = f"tmdb:{media_type.value}:{self._language}:{media_id}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        data = await self._get_json(f"/{media_type.value}/{media_id}", {}, allow_missing=True)
        if data is None:
            logger.debug(f"TMDB: aucun {media_type.value} avec l'ID {media_id}")
            return None

        genres = tuple(
            genre["name"] for genre in data.get("genres", []) if genre.get("name")
        )
        genre_ids = tuple(
            genre["id"] for genre in data.get("genres", []) if isinstance(genre.get("id"), int)
        ) or _genre_ids(data.get("genre_ids"))

        if media_type is MediaType.MOVIE:
            title = data.get("title") or data.get("original_title") or ""
            release_date = data.get("release_date")
            runtime = data.get("runtime")
            number_of_seasons = None
        else:
            title = data.get("name") or data.get("original_name") or ""
            release_date = data.get("first_air_date")
            run_times = data.get("episode_run_time") or []
            runtime = run_times[0] if run_times else None
            number_of_seasons = data.get("number_of_seasons")

        details = MediaDetails(
            id=data["id"],
            media_type=media_type,
            title=title,
            overview=data.get("overview") or "",
            genres=genres,
            genre_ids=genre_ids,
            poster_path=data.get("poster_path"),
            backdrop_path=data.get("backdrop_path"),
            release_date=release_date or None,
            runtime=runtime if isinstance(runtime, int) and runtime > 0 else None,
            number_of_seasons=number_of_seasons,
            next_episode_to_air=_next_episode(data.get("next_episode_to_air")),
        )

        await self._cache.set_details(cache_key, details)
        return details

    async def discover_tv(
        self,
        genre_id: Optional[int] = None,
        original_language: Optional[str] = None,
        page: int = 1,
    ) -> list[DiscoverResult]:
        """Decouvre des series, les plus populaires en premier."""
        cache_key = f"tmdb:discover_tv:{self._language}:{genre_id}:{original_language}:{page}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        params: dict[str, Any] = {"sort_by": "popularity.desc", "page": page}
        if genre_id is not None:
            params["with_genres"] = genre_id
        if original_language:
            params["with_original_language"] = original_language

        data = await self._get_json("/discover/tv", params)
        results = [
            DiscoverResult(
                id=item["id"],
                name=item.get("name") or item.get("original_name") or "",
                poster_path=item.get("poster_path"),
                genre_ids=_genre_ids(item.get("genre_ids")),
            )
            for item in data.get("results", [])
            if isinstance(item.get("id"), int)
        ]

        await self._cache.set_discover(cache_key, results)
        return results

    async def get_genre_map(self, media_type: MediaType) -> dict[int, str]:
        """Table id -> nom localise des genres TMDB."""
        cache_key = f"tmdb:genres:{media_type.value}:{self._language}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        data = await self._get_json(f"/genre/{media_type.value}/list", {})
        genre_map = {
            genre["id"]: genre["name"]
            for genre in data.get("genres", [])
            if isinstance(genre.get("id"), int) and genre.get("name")
        }

        await self._cache.set_details(cache_key, genre_map)
        return genre_map

    async def search_people(self, name: str) -> list[CastMember]:
        """
        Recherche des personnes (acteurs, realisateurs...) par nom.

        Seule la premiere page de resultats est lue. Une personne sans photo
        recoit une image de remplacement portant son nom.
        """
        cache_key = f"tmdb:person:{self._language}:{name}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        data = await self._get_json("/search/person", {"query": name, "page": 1})
        people = []
        for person in data.get("results", []):
            if not isinstance(person.get("id"), int):
                continue
            person_name = person.get("name") or ""
            people.append(
                CastMember(
                    id=person["id"],
                    name=person_name,
                    profile_image_url=thumbnail_url(person.get("profile_path"), person_name),
                    known_for_department=person.get("known_for_department") or None,
                )
            )

        await self._cache.set_search(cache_key, people)
        return people

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
