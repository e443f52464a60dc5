"""
Container d'injection de dependances via dependency-injector.

Centralise la construction des stores documentaires, des repositories,
du client TMDB et des services pour la CLI.
"""

from dependency_injector import containers, providers

from .adapters.api.cache import APICache
from .adapters.api.tmdb_client import TMDBClient
from .config import Settings
from .infrastructure.persistence.database import create_database_engine, init_db, open_session
from .infrastructure.persistence.document_store import SQLModelDocumentStore
from .infrastructure.persistence.repositories import (
    CONTENT_COLLECTION,
    FAVORITES_COLLECTION,
    FEEDBACK_COLLECTION,
    SITE_CONFIGURATION_COLLECTION,
    DocumentCatalogRepository,
    DocumentFavoritesRepository,
    DocumentFeedbackRepository,
    DocumentNewsBannerRepository,
)
from .services.autofill import AutoFillService
from .services.catalog_browser import CatalogBrowser
from .services.upcoming import UpcomingEpisodeReconciler, UpcomingEpisodeService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Cree les tables une fois
        repository = container.catalog_repository()
        items = repository.list()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Engine construit depuis la configuration du container
    engine = providers.Singleton(
        create_database_engine,
        database_url=config.provided.database_url,
    )

    # Creation des tables, une fois par container
    database = providers.Resource(init_db, engine=engine)

    # Nouvelle session a chaque appel
    session = providers.Factory(open_session, engine=engine)

    # Stores documentaires - un par collection
    content_store = providers.Factory(
        SQLModelDocumentStore,
        session=session,
        collection=CONTENT_COLLECTION,
    )
    site_configuration_store = providers.Factory(
        SQLModelDocumentStore,
        session=session,
        collection=SITE_CONFIGURATION_COLLECTION,
    )
    feedback_store = providers.Factory(
        SQLModelDocumentStore,
        session=session,
        collection=FEEDBACK_COLLECTION,
    )
    favorites_store = providers.Factory(
        SQLModelDocumentStore,
        session=session,
        collection=FAVORITES_COLLECTION,
    )

    # Repositories - Factory pour une session fraiche a chaque appel
    catalog_repository = providers.Factory(DocumentCatalogRepository, store=content_store)
    news_banner_repository = providers.Factory(
        DocumentNewsBannerRepository, store=site_configuration_store
    )
    feedback_repository = providers.Factory(DocumentFeedbackRepository, store=feedback_store)
    favorites_repository = providers.Factory(DocumentFavoritesRepository, store=favorites_store)

    # Cache API - Singleton partage
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.cache_dir,
    )

    # Client TMDB - la CLI verifie config.tmdb_enabled avant utilisation
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        cache=api_cache,
        language=config.provided.tmdb_language,
    )

    # Services
    upcoming_reconciler = providers.Singleton(UpcomingEpisodeReconciler)
    upcoming_service = providers.Factory(
        UpcomingEpisodeService,
        provider=tmdb_client,
        reconciler=upcoming_reconciler,
        window_days=config.provided.upcoming_window_days,
        candidate_limit=config.provided.upcoming_candidate_limit,
    )
    autofill_service = providers.Factory(AutoFillService, provider=tmdb_client)
    catalog_browser = providers.Factory(CatalogBrowser, repository=catalog_repository)
