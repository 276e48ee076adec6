"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance des données.
Les implémentations (adaptateurs) fourniront les mécanismes de stockage concrets
(SQLite via SQLModel, en mémoire pour les tests, etc.).
"""

from abc import ABC, abstractmethod


class IExclusionStore(ABC):
    """
    Interface de stockage de la liste d'exclusion.

    La liste d'exclusion est un ensemble d'identifiants du catalogue qui ne
    sont jamais proposés à la suppression. Elle est traitée comme une simple
    cellule clé/valeur synchrone : lecture complète, écriture complète.
    """

    @abstractmethod
    def get(self) -> set[str]:
        """Retourne l'ensemble des identifiants exclus."""
        ...

    @abstractmethod
    def set(self, ids: set[str]) -> None:
        """Remplace l'ensemble des identifiants exclus (une seule écriture)."""
        ...
