"""
Module de persistance SQLite pour CineForm.

Ce module fournit l'infrastructure de stockage documentaire utilisant
SQLModel (SQLAlchemy). Il contient :

- database.py : Engine construit depuis une URL, sessions, creation des tables
- models.py : Table `documents` (une ligne par document JSON)
- document_store.py : Store documentaire par collection (IDs et horodatages cote store)
- mapper.py : Conversion document <-> entites du catalogue
- repositories/ : Catalogue, bandeau, retours utilisateurs, favoris

Usage:
    from cineform.infrastructure.persistence import create_database_engine, init_db, open_session

    engine = create_database_engine("sqlite:///cineform.db")
    init_db(engine)
    session = open_session(engine)
    store = SQLModelDocumentStore(session, "contentItems")
"""

from cineform.infrastructure.persistence.database import (
    create_database_engine,
    init_db,
    open_session,
)
from cineform.infrastructure.persistence.document_store import SQLModelDocumentStore
from cineform.infrastructure.persistence.models import DocumentModel

__all__ = [
    "create_database_engine",
    "init_db",
    "open_session",
    "SQLModelDocumentStore",
    "DocumentModel",
]
