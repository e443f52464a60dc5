"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Ports repository : Contrats de persistance
- IDocumentStore : Store documentaire brut (SERVER_TIMESTAMP resolu cote store)
- ICatalogRepository : Catalogue de films et series
- INewsBannerRepository : Bandeau d'information
- IFeedbackRepository : Retours utilisateurs
- IFavoritesRepository : Liste des favoris

Ports client API : Contrats pour le fournisseur de metadonnees
- IMetadataProvider : Recherche, detail, decouverte, genres, personnes
- SearchResult, MediaDetails, NextEpisode, DiscoverResult, CastMember, MediaType
"""

from cineform.core.ports.repositories import (
    SERVER_TIMESTAMP,
    ICatalogRepository,
    IDocumentStore,
    IFavoritesRepository,
    IFeedbackRepository,
    INewsBannerRepository,
    RawDocument,
)
from cineform.core.ports.api_clients import (
    CastMember,
    DiscoverResult,
    IMetadataProvider,
    MediaDetails,
    MediaType,
    NextEpisode,
    SearchResult,
)

__all__ = [
    # Repositories
    "SERVER_TIMESTAMP",
    "ICatalogRepository",
    "IDocumentStore",
    "IFavoritesRepository",
    "IFeedbackRepository",
    "INewsBannerRepository",
    "RawDocument",
    # Fournisseur de metadonnees
    "CastMember",
    "DiscoverResult",
    "IMetadataProvider",
    "MediaDetails",
    "MediaType",
    "NextEpisode",
    "SearchResult",
]
