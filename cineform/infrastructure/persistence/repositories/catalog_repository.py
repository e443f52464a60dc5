"""
Repository du catalogue (films et series) sur le store documentaire.

Implemente ICatalogRepository : conversion entite <-> document via le mapper,
horodatages d'audit poses exclusivement avec l'horloge du store.
"""

from typing import Optional

from loguru import logger

from cineform.core.entities.content import ContentItem
from cineform.core.errors import ContentTypeChangeError, DocumentNotFoundError
from cineform.core.ports.repositories import SERVER_TIMESTAMP, ICatalogRepository, IDocumentStore
from cineform.infrastructure.persistence.mapper import to_document, to_entity

CONTENT_COLLECTION = "contentItems"


class DocumentCatalogRepository(ICatalogRepository):
    """
    Repository du catalogue.

    - create : pose createdAt et updatedAt (horloge du store), retourne l'ID
    - list : tri par updatedAt decroissant ; un document incoherent fait
      echouer toute la lecture (DataIntegrityError), il n'est jamais ignore
    - update : reecrit le document en gardant createdAt ; le contentType
      stocke ne change jamais (ContentTypeChangeError)
    - delete : suppression definitive, idempotente

    Aucune erreur du store n'est interceptee ici.
    """

    def __init__(self, store: IDocumentStore) -> None:
        """
        Initialise le repository.

        Args :
            store : Store documentaire de la collection contentItems
        """
        self._store = store

    def create(self, item: ContentItem) -> str:
        """Cree un contenu et retourne l'identifiant attribue par le store."""
        document = to_document(item)
        document["createdAt"] = SERVER_TIMESTAMP
        document["updatedAt"] = SERVER_TIMESTAMP
        item_id = self._store.create(document)
        logger.info(f"Contenu cree: {item.original_title} ({item.content_type.value}, id={item_id})")
        return item_id

    def list(self) -> list[ContentItem]:
        """Liste tous les contenus, du plus recemment modifie au plus ancien."""
        documents = self._store.list(order_by="updatedAt", descending=True)
        return [to_entity(data, doc_id) for doc_id, data in documents]

    def get_by_id(self, item_id: str) -> Optional[ContentItem]:
        """Recupere un contenu par son ID, ou None s'il n'existe pas."""
        data = self._store.get(item_id)
        if data is None:
            logger.debug(f"Aucun contenu avec l'ID {item_id}")
            return None
        return to_entity(data, item_id)

    def update(self, item_id: str, item: ContentItem) -> None:
        """
        Remplace les champs d'un contenu existant.

        Le document est reecrit en entier : les cles de l'autre variante ne
        peuvent pas survivre. createdAt est recopie depuis le document stocke,
        updatedAt prend l'heure du store.

        Raises:
            DocumentNotFoundError: Aucun contenu avec cet ID
            ContentTypeChangeError: item n'a pas le contentType stocke
        """
        stored = self._store.get(item_id)
        if stored is None:
            raise DocumentNotFoundError(CONTENT_COLLECTION, item_id)
        stored_type = stored.get("contentType")
        if stored_type != item.content_type.value:
            raise ContentTypeChangeError(item_id, stored_type, item.content_type.value)

        document = to_document(item)
        if stored.get("createdAt") is not None:
            document["createdAt"] = stored["createdAt"]
        document["updatedAt"] = SERVER_TIMESTAMP
        self._store.set(item_id, document)
        logger.info(f"Contenu mis a jour: {item.original_title} (id={item_id})")

    def delete(self, item_id: str) -> None:
        """Supprime definitivement un contenu (sans erreur s'il n'existe pas)."""
        self._store.delete(item_id)
        logger.info(f"Contenu supprime: id={item_id}")
