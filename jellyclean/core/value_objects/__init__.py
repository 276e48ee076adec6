"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- RetentionPolicy : Seuils de retention par type (films, saisons)
- EligibleItem : Entrée du catalogue eligible avec son age
"""

from jellyclean.core.value_objects.retention import (
    DEFAULT_MOVIE_RETENTION_DAYS,
    DEFAULT_SEASON_RETENTION_DAYS,
    EligibleItem,
    RetentionPolicy,
)

__all__ = [
    "DEFAULT_MOVIE_RETENTION_DAYS",
    "DEFAULT_SEASON_RETENTION_DAYS",
    "EligibleItem",
    "RetentionPolicy",
]
