"""
Implementation SQLModel du store documentaire.

Chaque instance gere une collection de la table `documents`. Le store :
- attribue les identifiants (uuid4 hex), jamais le client ;
- remplace les valeurs SERVER_TIMESTAMP par son horloge (UTC) ;
- restitue les horodatages sous forme d'objets datetime ;
- convertit les pannes SQLAlchemy en StoreUnavailableError.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Optional
from uuid import uuid4

from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from cineform.core.errors import DataIntegrityError, DocumentNotFoundError, StoreUnavailableError
from cineform.core.ports.repositories import SERVER_TIMESTAMP, IDocumentStore, RawDocument
from cineform.infrastructure.persistence.models import DocumentModel, dumps_document, loads_document


def utc_now() -> datetime:
    """Horloge par defaut du store."""
    return datetime.now(timezone.utc)


def _sort_key(value: Any) -> tuple[int, float, str]:
    """Cle de tri tolerante : datetime, chaine ISO, nombre ou texte."""
    if value is None:
        return (0, 0.0, "")
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return (1, value.timestamp(), "")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (1, float(value), "")
    if isinstance(value, str):
        try:
            return _sort_key(datetime.fromisoformat(value))
        except ValueError:
            return (1, 0.0, value)
    return (1, 0.0, str(value))


class SQLModelDocumentStore(IDocumentStore):
    """
    Store documentaire sur SQLite via SQLModel.

    Example:
        store = SQLModelDocumentStore(session, "contentItems")
        doc_id = store.create({"tituloOriginal": "X", "createdAt": SERVER_TIMESTAMP})
        data = store.get(doc_id)   # data["createdAt"] est un datetime
    """

    def __init__(
        self,
        session: Session,
        collection: str,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Initialise le store avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
            collection : Nom de la collection geree
            clock : Horloge du store (UTC par defaut), injectable pour les tests
        """
        self._session = session
        self._collection = collection
        self._clock = clock or utc_now

    @property
    def collection(self) -> str:
        return self._collection

    @contextmanager
    def _operation(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(f"Echec du store ({action} sur {self._collection}): {e}")
            raise StoreUnavailableError(
                f"Store indisponible pendant '{action}' sur {self._collection}"
            ) from e

    def _resolve(self, data: RawDocument) -> RawDocument:
        """Remplace les sentinelles SERVER_TIMESTAMP par l'horloge du store."""
        now: Optional[datetime] = None
        resolved: RawDocument = {}
        for key, value in data.items():
            if value is SERVER_TIMESTAMP:
                if now is None:
                    now = self._clock()
                value = now
            resolved[key] = value
        return resolved

    def _load(self, model: DocumentModel) -> RawDocument:
        try:
            return loads_document(model.data_json)
        except ValueError as e:
            raise DataIntegrityError(model.id, f"JSON illisible ({e})") from e

    def _find(self, doc_id: str) -> Optional[DocumentModel]:
        return self._session.get(DocumentModel, (self._collection, doc_id))

    def _next_sequence(self) -> int:
        statement = select(func.max(DocumentModel.sequence)).where(
            DocumentModel.collection == self._collection
        )
        current = self._session.exec(statement).first()
        return (current or 0) + 1

    def create(self, data: RawDocument) -> str:
        """Insere un document et retourne l'identifiant genere par le store."""
        with self._operation("create"):
            doc_id = uuid4().hex
            model = DocumentModel(
                collection=self._collection,
                id=doc_id,
                sequence=self._next_sequence(),
            )
            model.data_json = dumps_document(self._resolve(data))
            self._session.add(model)
            self._session.commit()
        logger.debug(f"Document cree: {self._collection}/{doc_id}")
        return doc_id

    def list(self, order_by: Optional[str] = None, descending: bool = False) -> list[tuple[str, RawDocument]]:
        """
        Liste les documents de la collection.

        Sans order_by, l'ordre d'insertion est conserve. Avec order_by, les
        documents sans ce champ sont places en fin de liste (jamais omis).
        """
        with self._operation("list"):
            statement = (
                select(DocumentModel)
                .where(DocumentModel.collection == self._collection)
                .order_by(DocumentModel.sequence)
            )
            models = self._session.exec(statement).all()

        documents = [(model.id, self._load(model)) for model in models]
        if order_by is None:
            return documents

        present = [doc for doc in documents if doc[1].get(order_by) is not None]
        missing = [doc for doc in documents if doc[1].get(order_by) is None]
        present.sort(key=lambda doc: _sort_key(doc[1].get(order_by)), reverse=descending)
        return present + missing

    def get(self, doc_id: str) -> Optional[RawDocument]:
        """Recupere un document, ou None s'il n'existe pas."""
        with self._operation("get"):
            model = self._find(doc_id)
        if model is None:
            return None
        return self._load(model)

    def update(self, doc_id: str, data: RawDocument) -> None:
        """Fusionne les champs de premier niveau dans un document existant."""
        with self._operation("update"):
            model = self._find(doc_id)
            if model is None:
                raise DocumentNotFoundError(self._collection, doc_id)
            merged = self._load(model)
            merged.update(self._resolve(data))
            model.data_json = dumps_document(merged)
            self._session.add(model)
            self._session.commit()
        logger.debug(f"Document mis a jour: {self._collection}/{doc_id}")

    def set(self, doc_id: str, data: RawDocument, merge: bool = False) -> None:
        """Cree ou remplace (merge=False) / fusionne (merge=True) un document."""
        with self._operation("set"):
            model = self._find(doc_id)
            resolved = self._resolve(data)
            if model is None:
                model = DocumentModel(
                    collection=self._collection,
                    id=doc_id,
                    sequence=self._next_sequence(),
                )
                model.data_json = dumps_document(resolved)
            elif merge:
                merged = self._load(model)
                merged.update(resolved)
                model.data_json = dumps_document(merged)
            else:
                model.data_json = dumps_document(resolved)
            self._session.add(model)
            self._session.commit()
        logger.debug(f"Document ecrit: {self._collection}/{doc_id}")

    def delete(self, doc_id: str) -> None:
        """Supprime un document ; un ID inexistant n'est pas une erreur."""
        with self._operation("delete"):
            model = self._find(doc_id)
            if model is None:
                return
            self._session.delete(model)
            self._session.commit()
        logger.debug(f"Document supprime: {self._collection}/{doc_id}")
