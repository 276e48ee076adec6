"""
Modeles SQLModel pour la base de donnees JellyClean.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des ports du domaine selon l'architecture hexagonale.

Tables:
- excluded_items: Elements du catalogue exclus definitivement de la suppression
"""

from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExcludedItemModel(SQLModel, table=True):
    """
    Element du catalogue Jellyfin exclu de la suppression.

    La date d'exclusion est conservee tant que l'element reste exclu.
    """

    __tablename__ = "excluded_items"

    item_id: str = Field(primary_key=True)
    excluded_at: datetime = Field(default_factory=_utcnow)
