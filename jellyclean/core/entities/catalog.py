"""
Entités du catalogue de la mediatheque.

Une entrée du catalogue represente un film, une serie ou une saison tel que
connu par le service de bibliotheque (Jellyfin). Ces entités sont en lecture
seule pour JellyClean : seul le service de bibliotheque les modifie.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class ItemKind(str, Enum):
    """
    Type d'une entrée du catalogue.

    Les valeurs correspondent aux types Jellyfin. Tout type non reconnu
    est ramene a OTHER pour rester extensible sans casser le parsing.
    """

    MOVIE = "Movie"
    SERIES = "Series"
    SEASON = "Season"
    EPISODE = "Episode"
    OTHER = "Other"

    @classmethod
    def _missing_(cls, value: object) -> "ItemKind":
        return cls.OTHER


@dataclass(frozen=True)
class CatalogEntry:
    """
    Entrée du catalogue Jellyfin.

    Attributs :
        id : Identifiant stable et unique dans le catalogue
        kind : Type de l'entrée (film, serie, saison...)
        name : Nom affiche (ex: "Inception", "Saison 2")
        created_at : Date d'ajout au catalogue (timezone-aware, UTC)
        series_id : Identifiant de la serie parente (saisons uniquement)
        series_name : Nom de la serie parente (saisons uniquement)
        provider_ids : Identifiants externes par fournisseur (ex: {"Tmdb": "27205"})
        image_tag : Tag de l'image principale, si elle existe
        series_image_tag : Tag de l'image principale de la serie parente
    """

    id: str
    kind: ItemKind
    name: str
    created_at: datetime
    series_id: Optional[str] = None
    series_name: Optional[str] = None
    provider_ids: dict[str, str] = field(default_factory=dict)
    image_tag: Optional[str] = None
    series_image_tag: Optional[str] = None

    def provider_id(self, provider: str) -> Optional[str]:
        """
        Retourne l'identifiant externe d'un fournisseur (insensible a la casse).

        Une valeur vide ou composee d'espaces est consideree comme absente.
        """
        wanted = provider.lower()
        for key, value in self.provider_ids.items():
            if key.lower() == wanted:
                value = (value or "").strip()
                return value or None
        return None

    @property
    def display_name(self) -> str:
        """Nom complet pour les logs : "Serie - Saison 2" pour une saison."""
        if self.kind == ItemKind.SEASON and self.series_name:
            return f"{self.series_name} - {self.name}"
        return self.name
