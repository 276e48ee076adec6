"""
Module de persistance SQLite pour JellyClean.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy) :

- database.py : Configuration de l'engine, session factory, initialisation
- models.py : Modeles SQLModel representant les tables
- repositories/ : Implementations des ports de persistance

Usage:
    from jellyclean.infrastructure.persistence import init_db, get_session

    init_db()  # Cree les tables si necessaire
    store = SQLModelExclusionStore(next(get_session()))
"""

from jellyclean.infrastructure.persistence.database import get_engine, get_session, init_db
from jellyclean.infrastructure.persistence.models import ExcludedItemModel

__all__ = [
    "get_engine",
    "get_session",
    "init_db",
    "ExcludedItemModel",
]
