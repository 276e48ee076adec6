"""
Evaluation de la politique de retention.

Determine, parmi les entrees du catalogue, celles qui ont depasse leur
duree de retention et ne figurent pas dans la liste d'exclusion.
Fonction pure : aucune I/O, aucun effet de bord.
"""

from datetime import datetime, timezone
from typing import AbstractSet, Iterable, Optional

from jellyclean.core.entities.catalog import CatalogEntry
from jellyclean.core.value_objects.retention import EligibleItem, RetentionPolicy

_SECONDS_PER_DAY = 86400.0


def age_in_days(entry: CatalogEntry, now: datetime) -> float:
    """Age de l'entree en jours fractionnaires (une demi-journee compte)."""
    return (now - entry.created_at).total_seconds() / _SECONDS_PER_DAY


def evaluate(
    entries: Iterable[CatalogEntry],
    exclusions: AbstractSet[str],
    policy: RetentionPolicy,
    now: Optional[datetime] = None,
) -> list[EligibleItem]:
    """
    Retourne les entrees eligibles a la suppression, dans l'ordre d'entree.

    Une entree exclue est ecartee avant tout calcul d'age. Un film (ou une
    saison) est eligible si son age est strictement superieur au seuil de
    son type ; les autres types ne sont jamais eligibles. Une entree
    presente plusieurs fois n'est retenue qu'une fois.

    Args:
        entries: Entrees du catalogue
        exclusions: Identifiants exclus
        policy: Seuils de retention
        now: Instant de reference (defaut: maintenant, UTC)
    """
    now = now or datetime.now(timezone.utc)
    eligible: list[EligibleItem] = []
    seen: set[str] = set()

    for entry in entries:
        if entry.id in exclusions or entry.id in seen:
            continue
        threshold = policy.threshold_for(entry.kind)
        if threshold is None:
            continue
        age = age_in_days(entry, now)
        if age > threshold:
            seen.add(entry.id)
            eligible.append(EligibleItem(entry=entry, age_days=age))

    return eligible
