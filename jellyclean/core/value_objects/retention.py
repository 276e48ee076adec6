"""
Objets valeur de la politique de retention.

Tous les objets valeur utilisent @dataclass(frozen=True) pour garantir l'immutabilité :
une politique ne change pas pendant un scan, et un element eligible n'est
jamais modifie apres sa production par l'evaluateur.
"""

from dataclasses import dataclass

from jellyclean.core.entities.catalog import CatalogEntry, ItemKind


DEFAULT_MOVIE_RETENTION_DAYS = 7
DEFAULT_SEASON_RETENTION_DAYS = 28


@dataclass(frozen=True)
class RetentionPolicy:
    """
    Seuils de retention par type d'entrée, en jours entiers.

    Attributs :
        movie_days : Age au-dela duquel un film est eligible
        season_days : Age au-dela duquel une saison est eligible
    """

    movie_days: int = DEFAULT_MOVIE_RETENTION_DAYS
    season_days: int = DEFAULT_SEASON_RETENTION_DAYS

    def __post_init__(self) -> None:
        if self.movie_days < 0 or self.season_days < 0:
            raise ValueError("Les seuils de retention doivent etre positifs")

    def threshold_for(self, kind: ItemKind) -> int | None:
        """Retourne le seuil applicable, ou None si le type n'est jamais eligible."""
        if kind == ItemKind.MOVIE:
            return self.movie_days
        if kind == ItemKind.SEASON:
            return self.season_days
        return None


@dataclass(frozen=True)
class EligibleItem:
    """
    Entrée du catalogue eligible a la suppression pour le scan courant.

    Attributs :
        entry : L'entrée du catalogue
        age_days : Age en jours (fractionnaire) au moment de l'evaluation
    """

    entry: CatalogEntry
    age_days: float

    @property
    def id(self) -> str:
        return self.entry.id

    @property
    def kind(self) -> ItemKind:
        return self.entry.kind
