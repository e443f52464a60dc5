"""
Repositories des entites annexes du site : bandeau d'information,
retours utilisateurs et liste des favoris.
"""

from typing import Any, Optional

from loguru import logger

from cineform.core.entities.site import (
    FeedbackStatus,
    FeedbackType,
    NewsBannerMessage,
    NewsBannerType,
    UserFeedback,
)
from cineform.core.ports.repositories import (
    SERVER_TIMESTAMP,
    IDocumentStore,
    IFavoritesRepository,
    IFeedbackRepository,
    INewsBannerRepository,
)
from cineform.infrastructure.persistence.mapper import normalize_timestamp

SITE_CONFIGURATION_COLLECTION = "siteConfiguration"
NEWS_BANNER_DOC_ID = "newsBannerControls"
FEEDBACK_COLLECTION = "userFeedback"
FAVORITES_COLLECTION = "favorites"
FAVORITES_DOC_ID = "default"


def _optional_text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


class DocumentNewsBannerRepository(INewsBannerRepository):
    """Bandeau d'information stocke dans siteConfiguration/newsBannerControls."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    def get_message(self) -> Optional[NewsBannerMessage]:
        """Retourne le bandeau, ou None s'il n'a jamais ete configure."""
        data = self._store.get(NEWS_BANNER_DOC_ID)
        if data is None:
            return None
        try:
            banner_type = NewsBannerType(data.get("type"))
        except ValueError:
            banner_type = NewsBannerType.NONE
        is_active = data.get("isActive")
        return NewsBannerMessage(
            id=NEWS_BANNER_DOC_ID,
            message=data.get("message") if isinstance(data.get("message"), str) else "",
            type=banner_type,
            is_active=is_active if isinstance(is_active, bool) else False,
            link=_optional_text(data.get("link")),
            link_text=_optional_text(data.get("linkText")),
            updated_at=normalize_timestamp(data.get("updatedAt")),
        )

    def set_message(self, banner: NewsBannerMessage) -> None:
        """Ecrit le bandeau (fusion) et rafraichit updatedAt."""
        self._store.set(
            NEWS_BANNER_DOC_ID,
            {
                "message": banner.message,
                "type": banner.type.value,
                "isActive": banner.is_active,
                "link": banner.link or "",
                "linkText": banner.link_text or "",
                "updatedAt": SERVER_TIMESTAMP,
            },
            merge=True,
        )
        logger.info(f"Bandeau mis a jour (actif={banner.is_active})")


class DocumentFeedbackRepository(IFeedbackRepository):
    """Retours utilisateurs stockes dans la collection userFeedback."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    def _to_entity(self, doc_id: str, data: dict[str, Any]) -> UserFeedback:
        try:
            feedback_type = FeedbackType(data.get("feedbackType"))
        except ValueError:
            feedback_type = FeedbackType.OTHER
        try:
            status = FeedbackStatus(data.get("status"))
        except ValueError:
            status = FeedbackStatus.NEW
        return UserFeedback(
            id=doc_id,
            feedback_type=feedback_type,
            message=data.get("message") if isinstance(data.get("message"), str) else "",
            status=status,
            content_id=_optional_text(data.get("contentId")),
            content_title=_optional_text(data.get("contentTitle")),
            user_id=_optional_text(data.get("userId")),
            admin_response=_optional_text(data.get("adminResponse")),
            submitted_at=normalize_timestamp(data.get("submittedAt")),
            responded_at=normalize_timestamp(data.get("respondedAt")),
        )

    def submit(self, feedback: UserFeedback) -> str:
        """Enregistre un retour ; le statut initial est toujours 'novo'."""
        document: dict[str, Any] = {
            "feedbackType": feedback.feedback_type.value,
            "message": feedback.message,
            "status": FeedbackStatus.NEW.value,
            "submittedAt": SERVER_TIMESTAMP,
        }
        if feedback.content_id:
            document["contentId"] = feedback.content_id
        if feedback.content_title:
            document["contentTitle"] = feedback.content_title
        if feedback.user_id:
            document["userId"] = feedback.user_id
        feedback_id = self._store.create(document)
        logger.info(f"Retour utilisateur recu: {feedback.feedback_type.value} (id={feedback_id})")
        return feedback_id

    def list(self) -> list[UserFeedback]:
        """Liste les retours, du plus recent au plus ancien."""
        documents = self._store.list(order_by="submittedAt", descending=True)
        return [self._to_entity(doc_id, data) for doc_id, data in documents]

    def respond(
        self,
        feedback_id: str,
        status: FeedbackStatus,
        admin_response: Optional[str] = None,
    ) -> None:
        """Change le statut (et la reponse) d'un retour ; pose respondedAt."""
        document: dict[str, Any] = {
            "status": status.value,
            "respondedAt": SERVER_TIMESTAMP,
        }
        if admin_response is not None:
            document["adminResponse"] = admin_response
        self._store.update(feedback_id, document)


class DocumentFavoritesRepository(IFavoritesRepository):
    """Liste ordonnee des IDs favoris, stockee dans un document unique."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    def list_ids(self) -> list[str]:
        """IDs favoris, du plus ancien ajout au plus recent."""
        data = self._store.get(FAVORITES_DOC_ID)
        if data is None or not isinstance(data.get("ids"), list):
            return []
        return [item_id for item_id in data["ids"] if isinstance(item_id, str)]

    def _save(self, ids: list[str]) -> None:
        self._store.set(FAVORITES_DOC_ID, {"ids": ids, "updatedAt": SERVER_TIMESTAMP})

    def add(self, item_id: str) -> None:
        ids = self.list_ids()
        if item_id not in ids:
            self._save([*ids, item_id])

    def remove(self, item_id: str) -> None:
        ids = self.list_ids()
        if item_id in ids:
            self._save([existing for existing in ids if existing != item_id])

    def toggle(self, item_id: str) -> bool:
        """Ajoute ou retire l'ID ; retourne True s'il est desormais favori."""
        if self.is_favorite(item_id):
            self.remove(item_id)
            return False
        self.add(item_id)
        return True

    def is_favorite(self, item_id: str) -> bool:
        return item_id in self.list_ids()
