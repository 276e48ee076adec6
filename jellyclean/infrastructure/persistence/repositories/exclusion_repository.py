"""
Implementation SQLModel de la liste d'exclusion.

Implemente l'interface IExclusionStore : la liste est lue et ecrite en bloc,
chaque ecriture etant une seule transaction.
"""

from sqlmodel import Session, select

from jellyclean.core.ports.repositories import IExclusionStore
from jellyclean.infrastructure.persistence.models import ExcludedItemModel


class SQLModelExclusionStore(IExclusionStore):
    """
    Repository SQLModel pour la liste d'exclusion.

    set() ne reecrit que la difference : les elements deja exclus gardent
    leur date d'exclusion d'origine.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def get(self) -> set[str]:
        """Retourne l'ensemble des identifiants exclus."""
        return set(self._session.exec(select(ExcludedItemModel.item_id)).all())

    def set(self, ids: set[str]) -> None:
        """Remplace l'ensemble des identifiants exclus en une transaction."""
        wanted = {item_id for item_id in ids if item_id}
        existing = {
            model.item_id: model
            for model in self._session.exec(select(ExcludedItemModel)).all()
        }

        for item_id, model in existing.items():
            if item_id not in wanted:
                self._session.delete(model)
        for item_id in wanted - existing.keys():
            self._session.add(ExcludedItemModel(item_id=item_id))

        self._session.commit()
