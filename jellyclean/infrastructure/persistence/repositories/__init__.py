"""
Implementations SQLModel des repositories.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une session SQLModel via injection de dependances
"""

from jellyclean.infrastructure.persistence.repositories.exclusion_repository import (
    SQLModelExclusionStore,
)

__all__ = [
    "SQLModelExclusionStore",
]
