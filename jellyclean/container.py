"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI : configuration,
clients API, liste d'exclusion persistante et services.

Un client dont le service n'est pas configure (URL ou cle API absente) est
fourni comme None : les services traitent ce cas comme "non configure".
"""

from typing import Optional

from dependency_injector import containers, providers

from .adapters.api.jellyfin_client import JellyfinClient
from .adapters.api.radarr_client import RadarrClient
from .adapters.api.sonarr_client import SonarrClient
from .config import Settings
from .infrastructure.persistence.database import get_session, init_db
from .infrastructure.persistence.repositories import SQLModelExclusionStore
from .services.dashboard import DashboardService
from .services.deletion import DeletionOrchestrator
from .services.exclusions import ExclusionService
from .services.resolver import FirstDigitRunSeasonParser
from .services.session import CleanupSession


def build_jellyfin_client(settings: Settings) -> Optional[JellyfinClient]:
    if not settings.jellyfin_enabled:
        return None
    return JellyfinClient(
        base_url=settings.jellyfin_url,
        api_key=settings.jellyfin_api_key,
        user_id=settings.jellyfin_user_id or None,
        timeout=settings.http_timeout,
        max_retries=settings.max_retries,
    )


def build_radarr_client(settings: Settings) -> Optional[RadarrClient]:
    if not settings.radarr_enabled:
        return None
    return RadarrClient(
        base_url=settings.radarr_url,
        api_key=settings.radarr_api_key,
        timeout=settings.http_timeout,
        max_retries=settings.max_retries,
    )


def build_sonarr_client(settings: Settings) -> Optional[SonarrClient]:
    if not settings.sonarr_enabled:
        return None
    return SonarrClient(
        base_url=settings.sonarr_url,
        api_key=settings.sonarr_api_key,
        timeout=settings.http_timeout,
        max_retries=settings.max_retries,
    )


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        session = container.cleanup_session()
        pool = await session.scan()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db, database_url=config.provided.database_url)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(
        lambda database_url: next(get_session(database_url)),
        database_url=config.provided.database_url,
    )

    # Clients API - Singleton, None si le service n'est pas configure
    catalog_client = providers.Singleton(build_jellyfin_client, settings=config)
    movie_client = providers.Singleton(build_radarr_client, settings=config)
    series_client = providers.Singleton(build_sonarr_client, settings=config)

    # Repository - Factory pour nouvelle instance avec session fraiche
    exclusion_store = providers.Factory(SQLModelExclusionStore, session=session)

    # Strategie d'extraction du numero de saison (stateless - Singleton)
    season_parser = providers.Singleton(FirstDigitRunSeasonParser)

    # Services
    exclusion_service = providers.Factory(
        ExclusionService,
        store=exclusion_store,
        catalog=catalog_client,
    )
    deletion_orchestrator = providers.Factory(
        DeletionOrchestrator,
        catalog=catalog_client,
        movie_client=movie_client,
        series_client=series_client,
        season_parser=season_parser,
    )
    cleanup_session = providers.Factory(
        CleanupSession,
        catalog=catalog_client,
        exclusions=exclusion_service,
        orchestrator=deletion_orchestrator,
        policy=config.provided.retention_policy,
    )
    dashboard_service = providers.Factory(
        DashboardService,
        catalog=catalog_client,
        movie_client=movie_client,
        series_client=series_client,
    )
