"""
Tests unitaires pour la validation des contenus.

Ces tests verifient:
- Le choix du jeu de regles par contentType
- Les erreurs localisees par chemin (tituloOriginal, temporadas.0...)
- Le mode brouillon pour les URL de sources video
- Les schemas annexes (bandeau, retour utilisateur)
"""

from datetime import date

import pytest

from cineform.core.entities.content import ContentStatus, MovieItem, SeriesItem
from cineform.core.entities.site import FeedbackStatus, FeedbackType, NewsBannerType
from cineform.core.errors import ContentValidationError, FieldError
from cineform.core.schemas import (
    ensure_valid,
    validate_content,
    validate_episode,
    validate_feedback,
    validate_news_banner,
    validate_season,
    validate_video_source,
)


def _paths(errors: list[FieldError]) -> set[str]:
    return {error.path for error in errors}


class TestContentTypeDispatch:
    """Tests du discriminant contentType."""

    def test_valid_movie_builds_movie_item(self, movie_document):
        """Un film valide donne un MovieItem."""
        result = validate_content(movie_document)

        assert isinstance(result, MovieItem)
        assert result.original_title == "Sen to Chihiro no Kamikakushi"
        assert result.tmdb_id == 129
        assert result.video_sources[0].server_name == "Principal"
        assert result.average_duration == 125

    def test_valid_series_builds_series_item(self, series_document):
        """Une serie valide donne un SeriesItem avec ses saisons."""
        result = validate_content(series_document)

        assert isinstance(result, SeriesItem)
        assert result.total_seasons == 2
        assert [season.season_number for season in result.seasons] == [1, 2]
        assert result.seasons[0].episodes[0].duration == 24
        assert result.seasons[1].episodes == []

    @pytest.mark.parametrize("content_type", [None, "", "anime", 3])
    def test_unknown_content_type(self, content_type):
        """contentType absent ou inconnu : erreur sur contentType."""
        result = validate_content({"contentType": content_type, "tituloOriginal": "X"})

        assert isinstance(result, list)
        assert _paths(result) == {"contentType"}

    def test_not_a_mapping(self):
        result = validate_content(["movie"])
        assert isinstance(result, list)

    def test_movie_rejects_series_fields(self):
        """Un film ne peut pas porter de saisons."""
        result = validate_content({"contentType": "movie", "tituloOriginal": "X", "temporadas": []})

        assert isinstance(result, list)
        assert "temporadas" in _paths(result)

    def test_series_rejects_movie_fields(self):
        """Une serie ne peut pas porter de sources video globales."""
        result = validate_content(
            {"contentType": "series", "tituloOriginal": "X", "videoSources": []}
        )

        assert isinstance(result, list)
        assert "videoSources" in _paths(result)

    def test_system_fields_are_ignored(self, movie_document):
        """id, createdAt et updatedAt ne sont jamais repris du client."""
        movie_document.update(id="client-id", createdAt="2020-01-01", updatedAt="2020-01-01")

        result = validate_content(movie_document)

        assert isinstance(result, MovieItem)
        assert result.id is None
        assert result.created_at is None
        assert result.updated_at is None


class TestCommonRules:
    """Tests des regles communes aux deux types."""

    def test_original_title_required(self):
        result = validate_content({"contentType": "movie"})
        assert "tituloOriginal" in _paths(result)

    def test_blank_original_title_rejected(self):
        result = validate_content({"contentType": "movie", "tituloOriginal": "   "})
        assert "tituloOriginal" in _paths(result)

    def test_synopsis_max_length(self):
        result = validate_content(
            {"contentType": "movie", "tituloOriginal": "X", "sinopse": "a" * 2001}
        )
        assert "sinopse" in _paths(result)

    def test_release_year_lower_bound(self):
        result = validate_content(
            {"contentType": "movie", "tituloOriginal": "X", "anoLancamento": 1799}
        )
        assert "anoLancamento" in _paths(result)

    def test_release_year_upper_bound(self):
        too_far = date.today().year + 11
        result = validate_content(
            {"contentType": "movie", "tituloOriginal": "X", "anoLancamento": too_far}
        )
        assert "anoLancamento" in _paths(result)

    def test_release_year_near_future_accepted(self):
        result = validate_content(
            {"contentType": "movie", "tituloOriginal": "X", "anoLancamento": date.today().year + 1}
        )
        assert isinstance(result, MovieItem)

    def test_duration_must_be_positive(self):
        result = validate_content(
            {"contentType": "movie", "tituloOriginal": "X", "duracaoMedia": 0}
        )
        assert "duracaoMedia" in _paths(result)

    def test_blank_numbers_become_none(self):
        """Un champ numerique vide du formulaire devient None."""
        result = validate_content(
            {"contentType": "movie", "tituloOriginal": "X", "duracaoMedia": "", "anoLancamento": ""}
        )
        assert isinstance(result, MovieItem)
        assert result.average_duration is None
        assert result.release_year is None

    def test_poster_must_be_url_or_empty(self):
        result = validate_content(
            {"contentType": "movie", "tituloOriginal": "X", "capaPoster": "poster.jpg"}
        )
        assert "capaPoster" in _paths(result)

    def test_empty_poster_accepted(self):
        result = validate_content({"contentType": "movie", "tituloOriginal": "X", "capaPoster": ""})
        assert isinstance(result, MovieItem)

    def test_status_values(self):
        result = validate_content({"contentType": "movie", "tituloOriginal": "X", "status": "inativo"})
        assert result.status is ContentStatus.INACTIVE

        result = validate_content({"contentType": "movie", "tituloOriginal": "X", "status": "oculto"})
        assert "status" in _paths(result)


class TestNestedRules:
    """Tests des saisons, episodes et sources video."""

    def test_season_number_must_be_positive(self, series_document):
        series_document["temporadas"][1]["numeroTemporada"] = 0

        result = validate_content(series_document)

        assert "temporadas.1.numeroTemporada" in _paths(result)

    def test_episode_title_required(self, series_document):
        series_document["temporadas"][0]["episodios"][1]["titulo"] = ""

        result = validate_content(series_document)

        assert "temporadas.0.episodios.1.titulo" in _paths(result)

    def test_video_source_url_required_outside_draft(self, movie_document):
        movie_document["videoSources"].append({"serverName": "Espelho", "url": ""})

        result = validate_content(movie_document)

        assert "videoSources.1.url" in _paths(result)

    def test_video_source_url_tolerated_in_draft(self, movie_document):
        """En brouillon, une URL vide est acceptee."""
        movie_document["videoSources"].append({"serverName": "Espelho", "url": ""})

        result = validate_content(movie_document, allow_draft=True)

        assert isinstance(result, MovieItem)
        assert result.video_sources[1].url == ""

    def test_invalid_video_source_url_rejected_even_in_draft(self, movie_document):
        movie_document["videoSources"][0]["url"] = "not a url"

        result = validate_content(movie_document, allow_draft=True)

        assert "videoSources.0.url" in _paths(result)

    def test_server_name_required(self, movie_document):
        movie_document["videoSources"][0]["serverName"] = " "

        result = validate_content(movie_document)

        assert "videoSources.0.serverName" in _paths(result)

    def test_null_nested_lists_default_to_empty(self):
        result = validate_content(
            {
                "contentType": "series",
                "tituloOriginal": "X",
                "temporadas": [{"numeroTemporada": 1, "episodios": None}],
            }
        )
        assert isinstance(result, SeriesItem)
        assert result.seasons[0].episodes == []

    def test_validate_season(self):
        season = validate_season({"numeroTemporada": 3})
        assert season.season_number == 3
        assert season.episodes == []

    def test_validate_episode(self):
        errors = validate_episode({"titulo": "", "duracao": -3})
        assert _paths(errors) == {"titulo", "duracao"}

    def test_validate_video_source(self):
        source = validate_video_source({"serverName": "Principal", "url": "https://a.example/v"})
        assert source.url == "https://a.example/v"

        errors = validate_video_source({"serverName": "Principal"})
        assert _paths(errors) == {"url"}


class TestEnsureValid:
    def test_returns_entity(self, movie_document):
        assert isinstance(ensure_valid(movie_document), MovieItem)

    def test_raises_with_all_errors(self):
        with pytest.raises(ContentValidationError) as exc_info:
            ensure_valid({"contentType": "movie", "tituloOriginal": "", "duracaoMedia": -1})

        assert _paths(exc_info.value.errors) == {"tituloOriginal", "duracaoMedia"}


class TestSiteSchemas:
    """Tests du bandeau et des retours utilisateurs."""

    def test_news_banner_defaults(self):
        banner = validate_news_banner({"message": "Manutencao hoje a noite"})

        assert banner.type is NewsBannerType.NONE
        assert banner.is_active is False
        assert banner.link is None

    def test_news_banner_message_length(self):
        assert "message" in _paths(validate_news_banner({"message": ""}))
        assert "message" in _paths(validate_news_banner({"message": "a" * 301}))

    def test_news_banner_link_must_be_url(self):
        errors = validate_news_banner({"message": "Oi", "link": "site"})
        assert "link" in _paths(errors)

    def test_news_banner_link_text_length(self):
        errors = validate_news_banner({"message": "Oi", "linkText": "a" * 51})
        assert "linkText" in _paths(errors)

    def test_feedback(self):
        feedback = validate_feedback(
            {"feedbackType": "episodio_offline", "message": "Episodio 3 fora do ar", "contentId": "abc"}
        )

        assert feedback.feedback_type is FeedbackType.EPISODE_OFFLINE
        assert feedback.status is FeedbackStatus.NEW
        assert feedback.content_id == "abc"

    def test_feedback_message_required(self):
        errors = validate_feedback({"feedbackType": "outro", "message": "  "})
        assert _paths(errors) == {"message"}

    def test_feedback_type_checked(self):
        errors = validate_feedback({"feedbackType": "elogio", "message": "Top"})
        assert "feedbackType" in _paths(errors)
