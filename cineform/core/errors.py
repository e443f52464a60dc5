"""
Taxonomie des erreurs de CineForm.

- ContentValidationError : erreurs de saisie par champ, recuperables, levees
  avant toute ecriture.
- DataIntegrityError : document stocke incoherent (ex: contentType inconnu),
  fatal pour la lecture concernee, jamais relance automatiquement.
- StoreUnavailableError : panne du store, propagee telle quelle ; la
  politique de retry appartient a l'appelant.
- ProviderTransientError / ProviderUnavailableError : echec du fournisseur de
  metadonnees, distingue pour proposer un "reessayer" sur les pannes passageres.

Un element absent n'est pas une erreur : les lectures retournent None.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FieldError:
    """Violation d'une regle de validation, localisee par un chemin pointe."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


class CineFormError(Exception):
    """Classe de base des erreurs applicatives."""


class ContentValidationError(CineFormError):
    """
    Le candidat ne respecte pas le schema.

    Attributes:
        errors: Liste des violations (chemin + message)
    """

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        details = "; ".join(str(error) for error in self.errors)
        super().__init__(f"Validation echouee: {details}")


class ContentTypeChangeError(ContentValidationError):
    """Mise a jour d'un contenu avec un contentType different de celui stocke."""

    def __init__(self, doc_id: str, stored: object, requested: object) -> None:
        self.doc_id = doc_id
        self.stored = stored
        self.requested = requested
        super().__init__(
            [FieldError("contentType", f"{stored!r} ne peut pas devenir {requested!r}")]
        )


class DataIntegrityError(CineFormError):
    """Document stocke impossible a convertir en entite."""

    def __init__(self, doc_id: Optional[str], message: str) -> None:
        self.doc_id = doc_id
        super().__init__(f"Document {doc_id!r}: {message}")


class UnknownContentTypeError(DataIntegrityError):
    """contentType absent ou hors de {movie, series}."""

    def __init__(self, doc_id: Optional[str], content_type: object) -> None:
        self.content_type = content_type
        super().__init__(doc_id, f"contentType inconnu {content_type!r}")


class StoreUnavailableError(CineFormError):
    """Le store documentaire est injoignable ou a echoue."""


class DocumentNotFoundError(CineFormError):
    """Mise a jour d'un document inexistant."""

    def __init__(self, collection: str, doc_id: str) -> None:
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"Document introuvable: {collection}/{doc_id}")


class ProviderError(CineFormError):
    """Echec du fournisseur de metadonnees externe."""


class ProviderTransientError(ProviderError):
    """Fournisseur temporairement surcharge (503 ou 'overloaded')."""


class ProviderUnavailableError(ProviderError):
    """Echec generique du fournisseur (non 2xx, reseau, reponse invalide)."""


def is_transient_failure(error: BaseException) -> bool:
    """
    Detecte une surcharge passagere du fournisseur.

    Un statut HTTP 503 ou la mention "overloaded" / "503" dans le message
    suffit, quel que soit le type d'exception d'origine.
    """
    if isinstance(error, ProviderTransientError):
        return True
    response = getattr(error, "response", None)
    if getattr(response, "status_code", None) == 503:
        return True
    text = str(error).lower()
    return "503" in text or "overloaded" in text


def classify_provider_failure(error: BaseException) -> ProviderError:
    """Convertit une exception quelconque du fournisseur en erreur typee."""
    if is_transient_failure(error):
        if isinstance(error, ProviderTransientError):
            return error
        return ProviderTransientError(
            "TMDB est peut-etre temporairement surcharge. Reessayez plus tard."
        )
    if isinstance(error, ProviderError):
        return error
    return ProviderUnavailableError(str(error) or "Echec du fournisseur de metadonnees.")
