"""
Conversion bidirectionnelle document persiste <-> entite du catalogue.

Sens lecture (to_entity) : tolerant. Les documents anciens ou incomplets
(cles absentes, listes nulles, horodatages natifs du store ou chaines) sont
normalises : listes imbriquees vides par defaut, nombres absents -> None,
textes absents -> "". Seul un contentType inconnu est fatal
(UnknownContentTypeError), car il s'agit d'une incoherence de donnees.

Sens ecriture (to_document) : les champs de l'entite sont recopies tels
quels ; id, createdAt et updatedAt ne sont jamais ecrits (le repository
pose les horodatages avec l'horloge du store).
"""

import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

from cineform.core.entities.content import (
    ContentItem,
    ContentStatus,
    ContentType,
    Episode,
    MovieItem,
    Season,
    SeriesItem,
    VideoSource,
)
from cineform.core.errors import UnknownContentTypeError
from cineform.core.ports.repositories import RawDocument


def normalize_timestamp(value: Any) -> Optional[str]:
    """
    Convertit un horodatage stocke en chaine ISO-8601.

    - objet datetime (horodatage natif du store) : isoformat()
    - objet exposant to_datetime()/ToDatetime() : conversion puis isoformat()
    - chaine : retournee telle quelle
    - autre (absent, None, ...) : None, sans jamais lever
    """
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, str):
        return value
    for converter_name in ("to_datetime", "ToDatetime"):
        converter = getattr(value, converter_name, None)
        if callable(converter):
            converted = converter()
            if isinstance(converted, datetime):
                return converted.isoformat()
    return None


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _optional_text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _optional_number(value: Any) -> Optional[float]:
    """Nombre stocke ou None ; n'invente jamais de zero."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return int(number) if number.is_integer() else number


def _optional_int(value: Any) -> Optional[int]:
    """Entier stocke ou None ; une valeur fractionnaire n'est pas tronquee."""
    number = _optional_number(value)
    return number if isinstance(number, int) else None


def _mappings(value: Any) -> list[Mapping[str, Any]]:
    """Liste des sous-documents exploitables (les entrees non-objets sont ignorees)."""
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, Mapping)]


def _map_video_sources(value: Any) -> list[VideoSource]:
    return [
        VideoSource(
            server_name=_text(source.get("serverName")),
            url=_text(source.get("url")),
            id=_optional_text(source.get("id")),
        )
        for source in _mappings(value)
    ]


def _map_episodes(value: Any) -> list[Episode]:
    return [
        Episode(
            title=_text(episode.get("titulo")),
            description=_text(episode.get("descricao")),
            duration=_optional_number(episode.get("duracao")),
            video_sources=_map_video_sources(episode.get("videoSources")),
            subtitle_url=_text(episode.get("linkLegenda")),
            id=_optional_text(episode.get("id")),
        )
        for episode in _mappings(value)
    ]


def _season_number(value: Any, index: int) -> int:
    """Numero stocke s'il est >= 1, sinon la position de la saison (1-based)."""
    number = _optional_int(value)
    return number if number is not None and number >= 1 else index + 1


def _map_seasons(value: Any) -> list[Season]:
    return [
        Season(
            season_number=_season_number(season.get("numeroTemporada"), index),
            episodes=_map_episodes(season.get("episodios")),
            id=_optional_text(season.get("id")),
        )
        for index, season in enumerate(_mappings(value))
    ]


def _map_status(value: Any) -> ContentStatus:
    try:
        return ContentStatus(value)
    except ValueError:
        return ContentStatus.ACTIVE


def _common_fields(raw: Mapping[str, Any], doc_id: Optional[str]) -> dict[str, Any]:
    featured = raw.get("destaqueHome")
    return {
        "id": doc_id,
        "tmdb_search_query": _text(raw.get("tmdbSearchQuery")),
        "tmdb_id": _optional_int(raw.get("tmdbId")),
        "original_title": _text(raw.get("tituloOriginal")),
        "localized_title": _text(raw.get("tituloLocalizado")),
        "synopsis": _text(raw.get("sinopse")),
        "genres": _text(raw.get("generos")),
        "original_language": _text(raw.get("idiomaOriginal")),
        "dub_languages": _text(raw.get("dublagensDisponiveis")),
        "release_year": _optional_int(raw.get("anoLancamento")),
        "average_duration": _optional_number(raw.get("duracaoMedia")),
        "content_rating": _text(raw.get("classificacaoIndicativa")),
        "quality": _text(raw.get("qualidade")),
        "poster_url": _text(raw.get("capaPoster")),
        "banner_url": _text(raw.get("bannerFundo")),
        "tags": _text(raw.get("tags")),
        "featured_on_home": featured if isinstance(featured, bool) else False,
        "status": _map_status(raw.get("status")),
        "created_at": normalize_timestamp(raw.get("createdAt")),
        "updated_at": normalize_timestamp(raw.get("updatedAt")),
    }


def to_entity(raw: Mapping[str, Any], doc_id: Optional[str]) -> ContentItem:
    """
    Convertit un document brut en MovieItem ou SeriesItem.

    Args:
        raw: Donnees du document
        doc_id: Identifiant du document dans le store

    Returns:
        L'entite correspondante, collections imbriquees toujours materialisees

    Raises:
        UnknownContentTypeError: contentType absent ou non reconnu
    """
    content_type = raw.get("contentType")

    if content_type == ContentType.MOVIE.value:
        return MovieItem(
            **_common_fields(raw, doc_id),
            video_sources=_map_video_sources(raw.get("videoSources")),
            subtitle_url=_text(raw.get("linkLegendas")),
        )
    if content_type == ContentType.SERIES.value:
        return SeriesItem(
            **_common_fields(raw, doc_id),
            total_seasons=_optional_int(raw.get("totalTemporadas")),
            seasons=_map_seasons(raw.get("temporadas")),
        )

    raise UnknownContentTypeError(doc_id, content_type)


def _with_id(data: RawDocument, item_id: Optional[str]) -> RawDocument:
    if item_id is not None:
        data["id"] = item_id
    return data


def _video_sources_document(sources: list[VideoSource]) -> list[RawDocument]:
    return [
        _with_id({"serverName": source.server_name, "url": source.url}, source.id)
        for source in sources
    ]


def _episode_document(episode: Episode) -> RawDocument:
    return _with_id(
        {
            "titulo": episode.title,
            "descricao": episode.description,
            "duracao": episode.duration,
            "videoSources": _video_sources_document(episode.video_sources),
            "linkLegenda": episode.subtitle_url,
        },
        episode.id,
    )


def _season_document(season: Season) -> RawDocument:
    return _with_id(
        {
            "numeroTemporada": season.season_number,
            "episodios": [_episode_document(episode) for episode in season.episodes],
        },
        season.id,
    )


def to_document(entity: ContentItem) -> RawDocument:
    """
    Convertit une entite en document a persister.

    N'inclut ni id ni horodatages d'audit, quelle que soit leur valeur
    dans l'entite.
    """
    if not isinstance(entity, (MovieItem, SeriesItem)):
        raise UnknownContentTypeError(entity.id, getattr(entity, "content_type", None))

    document: RawDocument = {
        "contentType": entity.content_type.value,
        "tmdbSearchQuery": entity.tmdb_search_query,
        "tmdbId": entity.tmdb_id,
        "tituloOriginal": entity.original_title,
        "tituloLocalizado": entity.localized_title,
        "sinopse": entity.synopsis,
        "generos": entity.genres,
        "idiomaOriginal": entity.original_language,
        "dublagensDisponiveis": entity.dub_languages,
        "anoLancamento": entity.release_year,
        "duracaoMedia": entity.average_duration,
        "classificacaoIndicativa": entity.content_rating,
        "qualidade": entity.quality,
        "capaPoster": entity.poster_url,
        "bannerFundo": entity.banner_url,
        "tags": entity.tags,
        "destaqueHome": entity.featured_on_home,
        "status": entity.status.value,
    }

    if isinstance(entity, MovieItem):
        document["videoSources"] = _video_sources_document(entity.video_sources)
        document["linkLegendas"] = entity.subtitle_url
    else:
        document["totalTemporadas"] = entity.total_seasons
        document["temporadas"] = [_season_document(season) for season in entity.seasons]

    return document
