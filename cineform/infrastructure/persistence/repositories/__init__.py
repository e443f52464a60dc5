"""
Implementations des repositories sur le store documentaire.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit un IDocumentStore (collection dediee) via injection de dependances
- Convertit entre entites de domaine (dataclass) et documents bruts
"""

from cineform.infrastructure.persistence.repositories.catalog_repository import (
    CONTENT_COLLECTION,
    DocumentCatalogRepository,
)
from cineform.infrastructure.persistence.repositories.site_repository import (
    FAVORITES_COLLECTION,
    FEEDBACK_COLLECTION,
    SITE_CONFIGURATION_COLLECTION,
    DocumentFavoritesRepository,
    DocumentFeedbackRepository,
    DocumentNewsBannerRepository,
)

__all__ = [
    "CONTENT_COLLECTION",
    "FAVORITES_COLLECTION",
    "FEEDBACK_COLLECTION",
    "SITE_CONFIGURATION_COLLECTION",
    "DocumentCatalogRepository",
    "DocumentFavoritesRepository",
    "DocumentFeedbackRepository",
    "DocumentNewsBannerRepository",
]
