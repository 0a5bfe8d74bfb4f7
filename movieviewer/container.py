"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI :
engine SQLite, stockage local, client TMDB, SyncRepository et AppState.
"""

from dependency_injector import containers, providers

from .adapters.api.tmdb_client import TMDBClient
from .config import Settings
from .infrastructure.persistence.database import create_db_engine, init_db
from .infrastructure.persistence.repositories import build_local_store
from .services.sync_repository import SyncRepository
from .state.app_state import AppState


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Cree les tables une fois
        state = container.app_state()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Engine partage par tous les repositories (une session par operation)
    engine = providers.Singleton(
        create_db_engine,
        database_url=config.provided.database_url,
    )

    # Database - Resource pour initialisation unique du schema
    database = providers.Resource(init_db, engine=engine)

    # Stockage local - construit une fois et injecte
    local_store = providers.Singleton(build_local_store, engine=engine)

    # Client API - Singleton avec api_key depuis config
    # Sans cle, le client est cree mais la CLI force le mode hors-ligne
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        base_url=config.provided.tmdb_base_url,
        timeout=config.provided.request_timeout,
    )

    sync_repository = providers.Singleton(
        SyncRepository,
        api_client=tmdb_client,
        store=local_store,
        offline=config.provided.start_offline,
        store_workers=config.provided.store_workers,
    )

    app_state = providers.Singleton(
        AppState,
        repository=sync_repository,
        offline=config.provided.start_offline,
    )
