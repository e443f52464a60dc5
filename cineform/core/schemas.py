"""
Schemas de validation des contenus (pydantic).

Les schemas suivent la forme du document persiste (les alias sont les cles
du document : tituloOriginal, temporadas, ...) et le type de contenu
selectionne le jeu de regles applicable. Chaque fonction validate_* retourne
soit l'entite construite, soit la liste des violations avec leur chemin :

    result = validate_content({"contentType": "movie", "tituloOriginal": ""})
    if isinstance(result, list):
        for error in result:
            print(error.path, error.message)   # tituloOriginal: ...

Les champs geres par le systeme (id, createdAt, updatedAt) sont ignores.
"""

from collections.abc import Mapping
from datetime import date
from typing import Annotated, Any, Literal, Optional, Union
from urllib.parse import urlparse

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

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
from cineform.core.entities.site import (
    FeedbackStatus,
    FeedbackType,
    NewsBannerMessage,
    NewsBannerType,
    UserFeedback,
)
from cineform.core.errors import ContentValidationError, FieldError

SYNOPSIS_MAX_LENGTH = 2000
MIN_RELEASE_YEAR = 1800
FUTURE_YEARS_ALLOWED = 10

SYSTEM_MANAGED_KEYS = ("id", "createdAt", "updatedAt")

_MESSAGES = {
    "extra_forbidden": "Champ non autorise pour ce type de contenu.",
    "missing": "Champ obligatoire.",
    "greater_than": "La valeur doit etre strictement positive.",
    "greater_than_equal": "Valeur trop petite.",
    "string_too_long": "Texte trop long.",
    "too_long": "Texte trop long.",
    "string_too_short": "Champ obligatoire.",
    "int_parsing": "Nombre entier attendu.",
    "int_from_float": "Nombre entier attendu.",
    "float_parsing": "Nombre attendu.",
    "enum": "Valeur non autorisee.",
}


def _is_valid_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _url_or_empty(value: str) -> str:
    if value and not _is_valid_url(value):
        raise ValueError("URL invalide.")
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _none_to_blank(value: Any) -> Any:
    return "" if value is None else value


def _positive(value: Optional[float]) -> Optional[float]:
    if value is not None and value <= 0:
        raise ValueError("La valeur doit etre strictement positive.")
    return value


def _not_negative(value: Optional[int]) -> Optional[int]:
    if value is not None and value < 0:
        raise ValueError("La valeur ne peut pas etre negative.")
    return value


UrlOrEmpty = Annotated[str, BeforeValidator(_none_to_blank), AfterValidator(_url_or_empty)]
Text = Annotated[str, BeforeValidator(_none_to_blank)]
PositiveNumber = Annotated[Optional[float], BeforeValidator(_blank_to_none), AfterValidator(_positive)]
OptionalInt = Annotated[Optional[int], BeforeValidator(_blank_to_none)]
Count = Annotated[Optional[int], BeforeValidator(_blank_to_none), AfterValidator(_not_negative)]


class _DocumentSchema(BaseModel):
    """Base commune : alias = cles du document, peuplement par nom autorise."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class VideoSourceSchema(_DocumentSchema):
    id: Optional[str] = None
    server_name: str = Field(alias="serverName")
    url: UrlOrEmpty = Field(default="", validate_default=True)

    @field_validator("server_name")
    @classmethod
    def _server_name_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Nom du serveur obligatoire.")
        return value

    @field_validator("url")
    @classmethod
    def _url_required_unless_draft(cls, value: str, info: ValidationInfo) -> str:
        allow_draft = bool(info.context and info.context.get("allow_draft"))
        if not value and not allow_draft:
            raise ValueError("URL de la source video obligatoire.")
        return value

    def to_entity(self) -> VideoSource:
        return VideoSource(server_name=self.server_name, url=self.url, id=self.id)


class EpisodeSchema(_DocumentSchema):
    id: Optional[str] = None
    title: str = Field(alias="titulo")
    description: Text = Field(default="", alias="descricao")
    duration: PositiveNumber = Field(default=None, alias="duracao")
    video_sources: list[VideoSourceSchema] = Field(default_factory=list, alias="videoSources")
    subtitle_url: UrlOrEmpty = Field(default="", alias="linkLegenda")

    @field_validator("title")
    @classmethod
    def _title_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Titre de l'episode obligatoire.")
        return value

    @field_validator("video_sources", mode="before")
    @classmethod
    def _default_sources(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_entity(self) -> Episode:
        return Episode(
            title=self.title,
            description=self.description,
            duration=_integral(self.duration),
            video_sources=[source.to_entity() for source in self.video_sources],
            subtitle_url=self.subtitle_url,
            id=self.id,
        )


class SeasonSchema(_DocumentSchema):
    id: Optional[str] = None
    season_number: int = Field(alias="numeroTemporada", ge=1)
    episodes: list[EpisodeSchema] = Field(default_factory=list, alias="episodios")

    @field_validator("episodes", mode="before")
    @classmethod
    def _default_episodes(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_entity(self) -> Season:
        return Season(
            season_number=self.season_number,
            episodes=[episode.to_entity() for episode in self.episodes],
            id=self.id,
        )


class _BaseContentSchema(_DocumentSchema):
    """Champs communs aux films et aux series."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    tmdb_search_query: Text = Field(default="", alias="tmdbSearchQuery")
    tmdb_id: OptionalInt = Field(default=None, alias="tmdbId")
    original_title: str = Field(alias="tituloOriginal")
    localized_title: Text = Field(default="", alias="tituloLocalizado")
    synopsis: Text = Field(default="", alias="sinopse", max_length=SYNOPSIS_MAX_LENGTH)
    genres: Text = Field(default="", alias="generos")
    original_language: Text = Field(default="", alias="idiomaOriginal")
    dub_languages: Text = Field(default="", alias="dublagensDisponiveis")
    release_year: OptionalInt = Field(default=None, alias="anoLancamento")
    average_duration: PositiveNumber = Field(default=None, alias="duracaoMedia")
    content_rating: Text = Field(default="", alias="classificacaoIndicativa")
    quality: Text = Field(default="", alias="qualidade")
    poster_url: UrlOrEmpty = Field(default="", alias="capaPoster")
    banner_url: UrlOrEmpty = Field(default="", alias="bannerFundo")
    tags: Text = ""
    featured_on_home: bool = Field(default=False, alias="destaqueHome")
    status: ContentStatus = ContentStatus.ACTIVE

    @field_validator("original_title")
    @classmethod
    def _original_title_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Titre original obligatoire.")
        return value

    @field_validator("release_year")
    @classmethod
    def _release_year_range(cls, value: Optional[int]) -> Optional[int]:
        if value is None:
            return value
        if value < MIN_RELEASE_YEAR:
            raise ValueError("Annee invalide.")
        if value > date.today().year + FUTURE_YEARS_ALLOWED:
            raise ValueError("Annee future invalide.")
        return value

    def _common_fields(self) -> dict[str, Any]:
        return {
            "tmdb_search_query": self.tmdb_search_query,
            "tmdb_id": self.tmdb_id,
            "original_title": self.original_title,
            "localized_title": self.localized_title,
            "synopsis": self.synopsis,
            "genres": self.genres,
            "original_language": self.original_language,
            "dub_languages": self.dub_languages,
            "release_year": self.release_year,
            "average_duration": _integral(self.average_duration),
            "content_rating": self.content_rating,
            "quality": self.quality,
            "poster_url": self.poster_url,
            "banner_url": self.banner_url,
            "tags": self.tags,
            "featured_on_home": self.featured_on_home,
            "status": self.status,
        }


class MovieSchema(_BaseContentSchema):
    content_type: Literal["movie"] = Field(alias="contentType")
    video_sources: list[VideoSourceSchema] = Field(default_factory=list, alias="videoSources")
    subtitle_url: UrlOrEmpty = Field(default="", alias="linkLegendas")

    @field_validator("video_sources", mode="before")
    @classmethod
    def _default_sources(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_entity(self) -> MovieItem:
        return MovieItem(
            **self._common_fields(),
            video_sources=[source.to_entity() for source in self.video_sources],
            subtitle_url=self.subtitle_url,
        )


class SeriesSchema(_BaseContentSchema):
    content_type: Literal["series"] = Field(alias="contentType")
    total_seasons: Count = Field(default=None, alias="totalTemporadas")
    seasons: list[SeasonSchema] = Field(default_factory=list, alias="temporadas")

    @field_validator("seasons", mode="before")
    @classmethod
    def _default_seasons(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_entity(self) -> SeriesItem:
        return SeriesItem(
            **self._common_fields(),
            total_seasons=self.total_seasons,
            seasons=[season.to_entity() for season in self.seasons],
        )


_CONTENT_SCHEMAS: dict[str, type[Union[MovieSchema, SeriesSchema]]] = {
    ContentType.MOVIE.value: MovieSchema,
    ContentType.SERIES.value: SeriesSchema,
}


class NewsBannerSchema(_DocumentSchema):
    message: str = Field(min_length=1, max_length=300)
    type: NewsBannerType = NewsBannerType.NONE
    is_active: bool = Field(default=False, alias="isActive")
    link: UrlOrEmpty = ""
    link_text: Text = Field(default="", alias="linkText", max_length=50)

    def to_entity(self) -> NewsBannerMessage:
        return NewsBannerMessage(
            message=self.message,
            type=self.type,
            is_active=self.is_active,
            link=self.link or None,
            link_text=self.link_text or None,
        )


class FeedbackSchema(_DocumentSchema):
    feedback_type: FeedbackType = Field(alias="feedbackType")
    message: str = Field(max_length=SYNOPSIS_MAX_LENGTH)
    content_id: Optional[str] = Field(default=None, alias="contentId")
    content_title: Optional[str] = Field(default=None, alias="contentTitle")
    user_id: Optional[str] = Field(default=None, alias="userId")

    @field_validator("message")
    @classmethod
    def _message_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message obligatoire.")
        return value

    def to_entity(self) -> UserFeedback:
        return UserFeedback(
            feedback_type=self.feedback_type,
            message=self.message,
            status=FeedbackStatus.NEW,
            content_id=self.content_id,
            content_title=self.content_title,
            user_id=self.user_id,
        )


def _integral(value: Optional[float]) -> Optional[float]:
    """Ramene 45.0 a 45 pour conserver des entiers dans les documents."""
    if value is not None and float(value).is_integer():
        return int(value)
    return value


def _to_field_errors(error: ValidationError, prefix: str = "") -> list[FieldError]:
    field_errors = []
    for detail in error.errors():
        path = ".".join(str(part) for part in detail["loc"])
        if prefix:
            path = f"{prefix}.{path}" if path else prefix
        message = _MESSAGES.get(detail["type"], detail["msg"])
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        field_errors.append(FieldError(path=path, message=message))
    return field_errors


def _validate(
    schema: type[BaseModel],
    candidate: Mapping[str, Any],
    context: Optional[dict[str, Any]] = None,
) -> Union[Any, list[FieldError]]:
    try:
        model = schema.model_validate(dict(candidate), context=context)
    except ValidationError as e:
        return _to_field_errors(e)
    return model.to_entity()


def validate_content(
    candidate: Mapping[str, Any],
    allow_draft: bool = False,
) -> Union[ContentItem, list[FieldError]]:
    """
    Valide un contenu candidat (forme document) et construit l'entite.

    Args:
        candidate: Donnees a valider, cles du document (tituloOriginal, ...)
        allow_draft: Tolere les URL de sources video vides (saisie en cours)

    Returns:
        MovieItem ou SeriesItem selon contentType, ou la liste des violations
    """
    if not isinstance(candidate, Mapping):
        return [FieldError(path="", message="Le contenu doit etre un objet.")]

    content_type = candidate.get("contentType")
    schema = _CONTENT_SCHEMAS.get(content_type) if isinstance(content_type, str) else None
    if schema is None:
        return [
            FieldError(
                path="contentType",
                message="Type de contenu attendu: 'movie' ou 'series'.",
            )
        ]

    data = {key: value for key, value in candidate.items() if key not in SYSTEM_MANAGED_KEYS}
    return _validate(schema, data, context={"allow_draft": allow_draft})


def ensure_valid(candidate: Mapping[str, Any], allow_draft: bool = False) -> ContentItem:
    """Comme validate_content, mais leve ContentValidationError en cas d'echec."""
    result = validate_content(candidate, allow_draft=allow_draft)
    if isinstance(result, list):
        raise ContentValidationError(result)
    return result


def validate_season(
    candidate: Mapping[str, Any], allow_draft: bool = False
) -> Union[Season, list[FieldError]]:
    return _validate(SeasonSchema, candidate, context={"allow_draft": allow_draft})


def validate_episode(
    candidate: Mapping[str, Any], allow_draft: bool = False
) -> Union[Episode, list[FieldError]]:
    return _validate(EpisodeSchema, candidate, context={"allow_draft": allow_draft})


def validate_video_source(
    candidate: Mapping[str, Any], allow_draft: bool = False
) -> Union[VideoSource, list[FieldError]]:
    return _validate(VideoSourceSchema, candidate, context={"allow_draft": allow_draft})


def validate_news_banner(
    candidate: Mapping[str, Any],
) -> Union[NewsBannerMessage, list[FieldError]]:
    return _validate(NewsBannerSchema, candidate)


def validate_feedback(candidate: Mapping[str, Any]) -> Union[UserFeedback, list[FieldError]]:
    return _validate(FeedbackSchema, candidate)
