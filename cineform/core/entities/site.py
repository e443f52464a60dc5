"""
Entites annexes du site : bandeau d'information et retours utilisateurs.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class NewsBannerType(str, Enum):
    """Style du bandeau d'information."""

    NONE = "none"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class FeedbackType(str, Enum):
    """Nature d'un retour utilisateur."""

    CONTENT_REQUEST = "pedido_conteudo"
    EPISODE_OFFLINE = "episodio_offline"
    GENERAL_ISSUE = "problema_geral"
    OTHER = "outro"


class FeedbackStatus(str, Enum):
    """Etat de traitement d'un retour utilisateur."""

    NEW = "novo"
    IN_REVIEW = "em_analise"
    RESOLVED = "resolvido"
    REJECTED = "recusado"


@dataclass
class NewsBannerMessage:
    """
    Bandeau d'information affiche en haut du site.

    Un seul document existe (identifiant fixe `newsBannerControls`).
    """

    message: str = ""
    type: NewsBannerType = NewsBannerType.NONE
    is_active: bool = False
    link: Optional[str] = None
    link_text: Optional[str] = None
    id: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class UserFeedback:
    """
    Retour envoye par un utilisateur (demande de contenu, episode hors ligne, ...).

    Attributs :
        feedback_type : Nature du retour
        message : Texte libre
        status : Etat de traitement (novo a la soumission)
        content_id : Contenu concerne (identifiant du store)
        content_title : Titre du contenu concerne, pour contexte
        user_id : Auteur, si connu
        admin_response : Reponse de l'administrateur
        submitted_at : Date de soumission (attribuee par le store)
        responded_at : Date de la derniere reponse
    """

    feedback_type: FeedbackType = FeedbackType.OTHER
    message: str = ""
    status: FeedbackStatus = FeedbackStatus.NEW
    content_id: Optional[str] = None
    content_title: Optional[str] = None
    user_id: Optional[str] = None
    admin_response: Optional[str] = None
    id: Optional[str] = None
    submitted_at: Optional[str] = None
    responded_at: Optional[str] = None
