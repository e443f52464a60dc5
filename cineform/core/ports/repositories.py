"""
Interfaces ports pour la persistance.

IDocumentStore est le contrat du store documentaire brut (une collection de
documents JSON, identifiants et horodatages attribues cote store).
Les repositories du catalogue et du site s'appuient dessus et ne manipulent
que des entites du domaine.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from cineform.core.entities.content import ContentItem
from cineform.core.entities.site import FeedbackStatus, NewsBannerMessage, UserFeedback


class _ServerTimestamp:
    """Sentinelle : le store remplace cette valeur par son horloge a l'ecriture."""

    _instance: Optional["_ServerTimestamp"] = None

    def __new__(cls) -> "_ServerTimestamp":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()

RawDocument = dict[str, Any]


class IDocumentStore(ABC):
    """
    Interface d'un store documentaire (une collection).

    Les valeurs SERVER_TIMESTAMP presentes au premier niveau d'un document
    sont resolues par le store avec sa propre horloge.
    """

    @property
    @abstractmethod
    def collection(self) -> str:
        """Nom de la collection geree."""
        ...

    @abstractmethod
    def create(self, data: RawDocument) -> str:
        """Insere un document et retourne l'identifiant attribue par le store."""
        ...

    @abstractmethod
    def list(self, order_by: Optional[str] = None, descending: bool = False) -> list[tuple[str, RawDocument]]:
        """Liste les documents (id, donnees), tries par un champ optionnel."""
        ...

    @abstractmethod
    def get(self, doc_id: str) -> Optional[RawDocument]:
        """Recupere un document, ou None s'il n'existe pas."""
        ...

    @abstractmethod
    def update(self, doc_id: str, data: RawDocument) -> None:
        """Fusionne des champs dans un document existant (DocumentNotFoundError sinon)."""
        ...

    @abstractmethod
    def set(self, doc_id: str, data: RawDocument, merge: bool = False) -> None:
        """Ecrit un document a un identifiant fixe (cree ou remplace/fusionne)."""
        ...

    @abstractmethod
    def delete(self, doc_id: str) -> None:
        """Supprime un document ; sans effet s'il n'existe pas."""
        ...


class ICatalogRepository(ABC):
    """
    Interface de stockage du catalogue (films et series).

    Le repository ne revalide pas : les entites recues respectent deja le schema.
    """

    @abstractmethod
    def create(self, item: ContentItem) -> str:
        """Cree un contenu et retourne son identifiant."""
        ...

    @abstractmethod
    def list(self) -> list[ContentItem]:
        """Liste tous les contenus, du plus recemment modifie au plus ancien."""
        ...

    @abstractmethod
    def get_by_id(self, item_id: str) -> Optional[ContentItem]:
        """Recupere un contenu par son ID, ou None s'il n'existe pas."""
        ...

    @abstractmethod
    def update(self, item_id: str, item: ContentItem) -> None:
        """Remplace un contenu existant sans changer son contentType ni son createdAt."""
        ...

    @abstractmethod
    def delete(self, item_id: str) -> None:
        """Supprime definitivement un contenu (idempotent)."""
        ...


class INewsBannerRepository(ABC):
    """Interface de stockage du bandeau d'information (document unique)."""

    @abstractmethod
    def get_message(self) -> Optional[NewsBannerMessage]:
        ...

    @abstractmethod
    def set_message(self, banner: NewsBannerMessage) -> None:
        ...


class IFeedbackRepository(ABC):
    """Interface de stockage des retours utilisateurs."""

    @abstractmethod
    def submit(self, feedback: UserFeedback) -> str:
        ...

    @abstractmethod
    def list(self) -> list[UserFeedback]:
        ...

    @abstractmethod
    def respond(
        self,
        feedback_id: str,
        status: FeedbackStatus,
        admin_response: Optional[str] = None,
    ) -> None:
        ...


class IFavoritesRepository(ABC):
    """Interface de stockage de la liste ordonnee des favoris (IDs du store)."""

    @abstractmethod
    def list_ids(self) -> list[str]:
        ...

    @abstractmethod
    def add(self, item_id: str) -> None:
        ...

    @abstractmethod
    def remove(self, item_id: str) -> None:
        ...

    @abstractmethod
    def toggle(self, item_id: str) -> bool:
        """Ajoute ou retire l'ID ; retourne True s'il est desormais favori."""
        ...

    @abstractmethod
    def is_favorite(self, item_id: str) -> bool:
        ...
