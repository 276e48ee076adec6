"""
Utilitaires partages pour les commandes CLI de JellyClean.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- close_clients : fermeture des clients HTTP du container
"""

from contextlib import contextmanager
from functools import wraps

from loguru import logger as loguru_logger
from rich.console import Console

from jellyclean.container import Container

# Console globale pour tous les affichages
console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("jellyclean")
    try:
        yield
    finally:
        loguru_logger.enable("jellyclean")


async def close_clients(container: Container) -> None:
    """Ferme les clients HTTP configures."""
    for provider in (container.catalog_client, container.movie_client, container.series_client):
        client = provider()
        if client is not None:
            await client.close()


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Les clients HTTP sont fermes a la fin de la commande.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            try:
                return await func(container, *args, **kwargs)
            finally:
                await close_clients(container)
        return wrapper
    return decorator
