"""
Tests pour TMDBClient.

Utilise respx pour simuler les appels httpx et verifie:
- search ne garde que les films et series
- get_details lit le prochain episode et retourne None sur 404
- discover_tv envoie les filtres genre / langue
- search_people produit des URLs de photo ou des images de remplacement
- Le cache est consulte avant l'API
- Les pannes sont classees (surcharge 503 / panne generique)
"""

from unittest.mock import AsyncMock

import httpx
import pytest
import respx

from cineform.adapters.api.cache import APICache
from cineform.adapters.api.tmdb_client import TMDBClient
from cineform.core.errors import ProviderTransientError, ProviderUnavailableError
from cineform.core.ports.api_clients import (
    CastMember,
    DiscoverResult,
    IMetadataProvider,
    MediaDetails,
    MediaType,
    SearchResult,
)
from tests.fixtures.tmdb_responses import (
    TMDB_DISCOVER_TV_RESPONSE,
    TMDB_EMPTY_SEARCH_RESPONSE,
    TMDB_ENDED_TV_DETAILS_RESPONSE,
    TMDB_MOVIE_DETAILS_RESPONSE,
    TMDB_MULTI_SEARCH_RESPONSE,
    TMDB_NOT_FOUND_RESPONSE,
    TMDB_PERSON_SEARCH_RESPONSE,
    TMDB_TV_DETAILS_RESPONSE,
    TMDB_TV_GENRES_RESPONSE,
)

BASE = "https://api.themoviedb.org/3"


@pytest.fixture
def mock_cache() -> AsyncMock:
    cache = AsyncMock(spec=APICache)
    cache.get.return_value = None
    return cache


@pytest.fixture
def tmdb_client(mock_cache: AsyncMock) -> TMDBClient:
    return TMDBClient(api_key="test_api_key", cache=mock_cache)


class TestInterface:
    def test_implements_metadata_provider(self, tmdb_client: TMDBClient):
        assert isinstance(tmdb_client, IMetadataProvider)
        assert tmdb_client.source == "tmdb"


class TestAuthentication:
    @pytest.mark.asyncio
    @respx.mock
    async def test_v3_key_sent_as_query_param(self, tmdb_client: TMDBClient):
        route = respx.get(f"{BASE}/search/multi").mock(
            return_value=httpx.Response(200, json=TMDB_EMPTY_SEARCH_RESPONSE)
        )

        await tmdb_client.search("Frieren")

        request = route.calls.last.request
        assert request.url.params["api_key"] == "test_api_key"
        assert request.url.params["language"] == "pt-BR"
        assert "Authorization" not in request.headers
        await tmdb_client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_v4_token_sent_as_bearer(self, mock_cache: AsyncMock):
        token = "eyJ" + "a" * 60
        client = TMDBClient(api_key=token, cache=mock_cache, language="en-US")
        route = respx.get(f"{BASE}/search/multi").mock(
            return_value=httpx.Response(200, json=TMDB_EMPTY_SEARCH_RESPONSE)
        )

        await client.search("Frieren")

        request = route.calls.last.request
        assert request.headers["Authorization"] == f"Bearer {token}"
        assert "api_key" not in request.url.params
        assert request.url.params["language"] == "en-US"
        await client.close()


class TestSearch:
    @pytest.mark.asyncio
    @respx.mock
    async def test_keeps_movies_and_series_only(self, tmdb_client: TMDBClient, mock_cache: AsyncMock):
        respx.get(f"{BASE}/search/multi").mock(
            return_value=httpx.Response(200, json=TMDB_MULTI_SEARCH_RESPONSE)
        )

        results = await tmdb_client.search("Frieren")

        assert len(results) == 2
        assert all(isinstance(result, SearchResult) for result in results)
        assert results[0].id == 209867
        assert results[0].media_type is MediaType.TV
        assert results[0].title == "Frieren e a Jornada para o Além"
        assert results[0].release_date == "2023-09-29"
        assert results[1].media_type is MediaType.MOVIE
        assert results[1].title == "Frieren: Special"
        assert results[1].release_date is None
        mock_cache.set_search.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cache_hit_skips_api(self, tmdb_client: TMDBClient, mock_cache: AsyncMock):
        cached = [SearchResult(id=1, title="Cached", media_type=MediaType.MOVIE)]
        mock_cache.get.return_value = cached

        with respx.mock(assert_all_called=False) as router:
            route = router.get(f"{BASE}/search/multi")
            results = await tmdb_client.search("Cached")

        assert results == cached
        assert not route.called
        mock_cache.get.assert_awaited_once_with("tmdb:search:pt-BR:Cached")


class TestGetDetails:
    @pytest.mark.asyncio
    @respx.mock
    async def test_movie_details(self, tmdb_client: TMDBClient, mock_cache: AsyncMock):
        respx.get(f"{BASE}/movie/129").mock(
            return_value=httpx.Response(200, json=TMDB_MOVIE_DETAILS_RESPONSE)
        )

        details = await tmdb_client.get_details(129, MediaType.MOVIE)

        assert isinstance(details, MediaDetails)
        assert details.title == "A Viagem de Chihiro"
        assert details.genres == ("Animação", "Família", "Fantasia")
        assert details.genre_ids == (16, 10751, 14)
        assert details.runtime == 125
        assert details.number_of_seasons is None
        assert details.next_episode_to_air is None
        mock_cache.set_details.assert_awaited_once()

    @pytest.mark.asyncio
    @respx.mock
    async def test_tv_details_with_next_episode(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/tv/209867").mock(
            return_value=httpx.Response(200, json=TMDB_TV_DETAILS_RESPONSE)
        )

        details = await tmdb_client.get_details(209867, MediaType.TV)

        assert details.runtime == 24
        assert details.number_of_seasons == 2
        next_episode = details.next_episode_to_air
        assert next_episode.season_number == 2
        assert next_episode.episode_number == 5
        assert next_episode.air_date == "2024-06-07"
        assert next_episode.name == "Sombras do passado"

    @pytest.mark.asyncio
    @respx.mock
    async def test_ended_series(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/tv/30991").mock(
            return_value=httpx.Response(200, json=TMDB_ENDED_TV_DETAILS_RESPONSE)
        )

        details = await tmdb_client.get_details(30991, MediaType.TV)

        assert details.next_episode_to_air is None
        assert details.runtime is None
        assert details.backdrop_path is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_unknown_id_returns_none(self, tmdb_client: TMDBClient, mock_cache: AsyncMock):
        respx.get(f"{BASE}/movie/999999").mock(
            return_value=httpx.Response(404, json=TMDB_NOT_FOUND_RESPONSE)
        )

        assert await tmdb_client.get_details(999999, MediaType.MOVIE) is None
        mock_cache.set_details.assert_not_awaited()


class TestDiscoverAndGenres:
    @pytest.mark.asyncio
    @respx.mock
    async def test_discover_sends_filters(self, tmdb_client: TMDBClient, mock_cache: AsyncMock):
        route = respx.get(f"{BASE}/discover/tv").mock(
            return_value=httpx.Response(200, json=TMDB_DISCOVER_TV_RESPONSE)
        )

        results = await tmdb_client.discover_tv(genre_id=16, original_language="ja")

        params = route.calls.last.request.url.params
        assert params["with_genres"] == "16"
        assert params["with_original_language"] == "ja"
        assert params["sort_by"] == "popularity.desc"
        assert [result.id for result in results] == [209867, 30991]
        assert isinstance(results[0], DiscoverResult)
        assert results[1].name == "カウボーイビバップ"
        mock_cache.set_discover.assert_awaited_once()

    @pytest.mark.asyncio
    @respx.mock
    async def test_genre_map(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/genre/tv/list").mock(
            return_value=httpx.Response(200, json=TMDB_TV_GENRES_RESPONSE)
        )

        genre_map = await tmdb_client.get_genre_map(MediaType.TV)

        assert genre_map[16] == "Animação"
        assert len(genre_map) == 3


class TestSearchPeople:
    @pytest.mark.asyncio
    @respx.mock
    async def test_maps_people(self, tmdb_client: TMDBClient, mock_cache: AsyncMock):
        route = respx.get(f"{BASE}/search/person").mock(
            return_value=httpx.Response(200, json=TMDB_PERSON_SEARCH_RESPONSE)
        )

        people = await tmdb_client.search_people("Miyazaki")

        params = route.calls.last.request.url.params
        assert params["query"] == "Miyazaki"
        assert params["page"] == "1"
        assert params["language"] == "pt-BR"
        assert people[0] == CastMember(
            id=608,
            name="Hayao Miyazaki",
            profile_image_url="https://image.tmdb.org/t/p/w185/mG3cfxtA5jqDc7fpKgyzZMKoXDh.jpg",
            known_for_department="Directing",
        )
        mock_cache.set_search.assert_awaited_once()

    @pytest.mark.asyncio
    @respx.mock
    async def test_person_without_photo_gets_placeholder(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/search/person").mock(
            return_value=httpx.Response(200, json=TMDB_PERSON_SEARCH_RESPONSE)
        )

        people = await tmdb_client.search_people("Miyazaki")

        assert people[1].profile_image_url == "https://placehold.co/185x278.png?text=Goro+Miyazaki"
        assert people[1].known_for_department is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_result(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/search/person").mock(
            return_value=httpx.Response(200, json=TMDB_EMPTY_SEARCH_RESPONSE)
        )

        assert await tmdb_client.search_people("zzz") == []

    @pytest.mark.asyncio
    async def test_cache_hit_skips_api(self, tmdb_client: TMDBClient, mock_cache: AsyncMock):
        cached = [CastMember(id=1, name="X", profile_image_url="https://placehold.co/x")]
        mock_cache.get.return_value = cached

        with respx.mock(assert_all_called=False) as router:
            route = router.get(f"{BASE}/search/person")
            people = await tmdb_client.search_people("X")

        assert people == cached
        assert not route.called

    @pytest.mark.asyncio
    @respx.mock
    async def test_503_is_transient(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/search/person").mock(return_value=httpx.Response(503))

        with pytest.raises(ProviderTransientError):
            await tmdb_client.search_people("Miyazaki")


class TestFailures:
    @pytest.mark.asyncio
    @respx.mock
    async def test_503_is_transient(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/discover/tv").mock(return_value=httpx.Response(503))

        with pytest.raises(ProviderTransientError):
            await tmdb_client.discover_tv(genre_id=16)

    @pytest.mark.asyncio
    @respx.mock
    async def test_500_is_unavailable(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/discover/tv").mock(return_value=httpx.Response(500))

        with pytest.raises(ProviderUnavailableError):
            await tmdb_client.discover_tv(genre_id=16)

    @pytest.mark.asyncio
    @respx.mock
    async def test_network_error_is_unavailable(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/search/multi").mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(ProviderUnavailableError):
            await tmdb_client.search("Frieren")

    @pytest.mark.asyncio
    @respx.mock
    async def test_404_outside_details_is_unavailable(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/genre/movie/list").mock(return_value=httpx.Response(404))

        with pytest.raises(ProviderUnavailableError):
            await tmdb_client.get_genre_map(MediaType.MOVIE)

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_json_body_is_unavailable(self, tmdb_client: TMDBClient):
        respx.get(f"{BASE}/search/multi").mock(return_value=httpx.Response(200, text="<html>"))

        with pytest.raises(ProviderUnavailableError):
            await tmdb_client.search("Frieren")


class TestClose:
    @pytest.mark.asyncio
    async def test_close_without_client(self, tmdb_client: TMDBClient):
        await tmdb_client.close()

    @pytest.mark.asyncio
    async def test_close_then_reopen(self, tmdb_client: TMDBClient):
        first = tmdb_client._get_client()
        await tmdb_client.close()

        assert first.is_closed
        assert tmdb_client._get_client() is not first
        await tmdb_client.close()
