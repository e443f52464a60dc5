"""
Fixtures pytest partagees pour les tests CineForm.

Ce module contient les fixtures communes utilisees dans les tests:
- Session SQLite en memoire et horloge controlable pour le store
- Documents et entites de reference (film, serie)
- Settings de test avec chemins temporaires
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Iterator

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from cineform.config import Settings
from cineform.core.entities.content import (
    Episode,
    MovieItem,
    Season,
    SeriesItem,
    VideoSource,
)
from cineform.infrastructure.persistence.document_store import SQLModelDocumentStore
from cineform.infrastructure.persistence.models import DocumentModel  # noqa: F401


class FakeClock:
    """Horloge du store avancant d'une seconde a chaque lecture."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + timedelta(seconds=1)
        return now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def session() -> Iterator[Session]:
    """Session SQLModel sur une base SQLite en memoire."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture
def store_factory(session: Session, clock: FakeClock):
    """Fabrique de stores documentaires partageant la session et l'horloge."""

    def _make(collection: str = "contentItems") -> SQLModelDocumentStore:
        return SQLModelDocumentStore(session, collection, clock=clock)

    return _make


@pytest.fixture
def movie_document() -> dict[str, Any]:
    """Document de film tel que saisi dans le formulaire."""
    return {
        "contentType": "movie",
        "tituloOriginal": "Sen to Chihiro no Kamikakushi",
        "tituloLocalizado": "A Viagem de Chihiro",
        "sinopse": "Chihiro se perde num mundo de espiritos.",
        "generos": "animação, fantasia",
        "idiomaOriginal": "Japonês",
        "anoLancamento": 2001,
        "duracaoMedia": 125,
        "classificacaoIndicativa": "Livre",
        "qualidade": "1080p",
        "capaPoster": "https://image.tmdb.org/t/p/w500/poster.jpg",
        "tmdbId": 129,
        "videoSources": [
            {"serverName": "Principal", "url": "https://cdn.example.com/chihiro.m3u8"},
        ],
    }


@pytest.fixture
def series_document() -> dict[str, Any]:
    """Document de serie avec deux saisons."""
    return {
        "contentType": "series",
        "tituloOriginal": "Sousou no Frieren",
        "generos": "Animação, Aventura",
        "tmdbId": 209867,
        "totalTemporadas": 2,
        "temporadas": [
            {
                "numeroTemporada": 1,
                "episodios": [
                    {
                        "titulo": "O fim da jornada",
                        "duracao": 24,
                        "videoSources": [
                            {"serverName": "Principal", "url": "https://cdn.example.com/f/1.m3u8"},
                        ],
                    },
                    {"titulo": "Nao precisava ser magia", "videoSources": []},
                ],
            },
            {"numeroTemporada": 2, "episodios": []},
        ],
    }


@pytest.fixture
def movie_item() -> MovieItem:
    return MovieItem(
        id="movie-1",
        original_title="Perfect Blue",
        localized_title="Perfect Blue",
        genres="Animação, Suspense",
        release_year=1997,
        average_duration=81,
        tmdb_id=10494,
        video_sources=[
            VideoSource(server_name="Principal", url="https://cdn.example.com/pb.m3u8", id="vs1"),
            VideoSource(server_name="Espelho", url="https://mirror.example.com/pb.m3u8"),
        ],
        subtitle_url="https://cdn.example.com/pb.vtt",
    )


@pytest.fixture
def series_item() -> SeriesItem:
    return SeriesItem(
        id="series-1",
        original_title="Sousou no Frieren",
        genres="Animação, Aventura",
        tmdb_id=42,
        total_seasons=2,
        seasons=[
            Season(
                season_number=1,
                episodes=[
                    Episode(
                        title="O fim da jornada",
                        duration=24,
                        video_sources=[
                            VideoSource(server_name="Principal", url="https://cdn.example.com/1.m3u8")
                        ],
                        id="s1e1",
                    ),
                ],
                id="season-1",
            ),
            Season(
                season_number=2,
                episodes=[Episode(title=f"Episodio {n}") for n in range(1, 6)],
            ),
        ],
    )


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings de test avec base et logs dans un repertoire temporaire."""
    return Settings(
        database_url=f"sqlite:///{tmp_path}/test.db",
        tmdb_api_key="test_api_key",
        cache_dir=tmp_path / "cache",
        log_file=tmp_path / "test.log",
    )
