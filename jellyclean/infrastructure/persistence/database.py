"""
Configuration de la base de donnees SQLite pour JellyClean.

Ce module fournit :
- Engine SQLite avec configuration compatible multi-thread
- Session factory
- Fonction d'initialisation des tables

La base de donnees est configuree via JELLYCLEAN_DATABASE_URL (defaut: sqlite:///jellyclean.db).
"""

from collections.abc import Generator
from pathlib import Path
from typing import Optional

from sqlalchemy import Engine
from sqlmodel import Session, SQLModel, create_engine

# Engines deja crees, par URL
_engines: dict[str, Engine] = {}


def _default_database_url() -> str:
    from jellyclean.config import Settings

    return Settings().database_url


def get_engine(database_url: Optional[str] = None) -> Engine:
    """
    Retourne l'engine pour l'URL donnee, en le creant si necessaire.

    Sans URL, utilise la configuration de l'application.
    """
    db_url = database_url or _default_database_url()
    engine = _engines.get(db_url)
    if engine is None:
        # Creer le repertoire parent si l'URL est un fichier SQLite
        if db_url.startswith("sqlite:///") and not db_url.startswith("sqlite:///:memory:"):
            db_path = Path(db_url.replace("sqlite:///", "", 1))
            db_path.parent.mkdir(exist_ok=True, parents=True)

        engine = create_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False} if db_url.startswith("sqlite") else {},
        )
        _engines[db_url] = engine
    return engine


def get_session(database_url: Optional[str] = None) -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation avec next() :
        session = next(get_session())

    Yields:
        Session SQLModel connectee a l'engine
    """
    with Session(get_engine(database_url)) as session:
        yield session


def init_db(database_url: Optional[str] = None) -> None:
    """
    Initialise la base de donnees en creant toutes les tables.

    Doit etre appelee une fois au demarrage de l'application.
    """
    # Import des modeles pour enregistrer leurs metadonnees
    from jellyclean.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(get_engine(database_url))
