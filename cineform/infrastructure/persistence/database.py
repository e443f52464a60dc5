"""
Engine et sessions du store documentaire.

L'engine est construit a partir d'une URL explicite (en pratique
Settings.database_url, fournie par le container) ; ce module ne lit aucune
configuration lui-meme. Une base SQLite en memoire partage une connexion
unique pour que toutes les sessions voient les memes documents.
"""

from pathlib import Path

from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

_SQLITE_FILE_PREFIX = "sqlite:///"


def is_memory_database(database_url: str) -> bool:
    """True pour `sqlite://` et `sqlite:///:memory:`."""
    return database_url in ("sqlite://", "sqlite:///:memory:")


def create_database_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Cree l'engine du store.

    Pour un fichier SQLite, le repertoire parent est cree au besoin.

    Args:
        database_url: URL SQLAlchemy de la base
        echo: Journaliser le SQL emis

    Returns:
        Engine pret a l'emploi (tables non creees, voir init_db)
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo)

    if is_memory_database(database_url):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if database_url.startswith(_SQLITE_FILE_PREFIX):
        Path(database_url[len(_SQLITE_FILE_PREFIX):]).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url, echo=echo, connect_args={"check_same_thread": False})


def open_session(engine: Engine) -> Session:
    """Nouvelle session sur l'engine ; l'appelant la ferme."""
    return Session(engine)


def init_db(engine: Engine) -> None:
    """Cree la table `documents` si elle n'existe pas encore."""
    from cineform.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
