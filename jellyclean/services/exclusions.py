"""
Gestion de la liste d'exclusion.

Les elements exclus ne sont jamais proposes a la suppression, quel que soit
leur age. Toutes les operations sont idempotentes.
"""

from typing import Iterable, Optional

from loguru import logger

from jellyclean.core.entities.catalog import CatalogEntry
from jellyclean.core.ports.api_clients import ICatalogClient
from jellyclean.core.ports.repositories import IExclusionStore


class ExclusionService:
    """Service d'ajout / retrait d'elements dans la liste d'exclusion."""

    def __init__(self, store: IExclusionStore, catalog: Optional[ICatalogClient] = None) -> None:
        self._store = store
        self._catalog = catalog

    def excluded_ids(self) -> set[str]:
        """Retourne l'ensemble des identifiants exclus."""
        return self._store.get()

    def exclude(self, item_id: str) -> bool:
        """
        Exclut un element.

        Returns:
            True si l'element a ete ajoute, False s'il etait deja exclu
        """
        return self.exclude_all([item_id]) == 1

    def exclude_all(self, item_ids: Iterable[str]) -> int:
        """
        Exclut plusieurs elements en une seule ecriture.

        Returns:
            Nombre d'elements nouvellement exclus (0 = aucune ecriture)
        """
        current = self._store.get()
        added = {item_id for item_id in item_ids if item_id} - current
        if added:
            self._store.set(current | added)
            logger.debug(f"{len(added)} element(s) ajoute(s) a la liste d'exclusion")
        return len(added)

    def unexclude(self, item_id: str) -> bool:
        """
        Retire un element de la liste d'exclusion.

        Returns:
            True si l'element a ete retire, False s'il n'etait pas exclu
        """
        current = self._store.get()
        if item_id not in current:
            return False
        self._store.set(current - {item_id})
        logger.debug(f"{item_id} retire de la liste d'exclusion")
        return True

    async def list_excluded_entries(self) -> list[CatalogEntry]:
        """
        Retourne les entrees du catalogue correspondant aux elements exclus.

        Les identifiants inconnus du catalogue (element supprime entre-temps)
        sont absents du resultat.
        """
        ids = self._store.get()
        if not ids or self._catalog is None:
            return []
        return await self._catalog.get_entries_by_ids(sorted(ids))
