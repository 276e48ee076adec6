"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

Ports client API : Contrats pour les services externes
- ICatalogClient : Catalogue de la médiathèque (Jellyfin)
- IMovieManagerClient : Gestionnaire des films (Radarr)
- ISeriesManagerClient : Gestionnaire des séries (Sonarr)

Ports repository : Contrats de persistance des données
- IExclusionStore : Liste d'exclusion persistante
"""

from jellyclean.core.ports.api_clients import (
    ICatalogClient,
    IMovieManagerClient,
    ISeriesManagerClient,
)
from jellyclean.core.ports.repositories import IExclusionStore

__all__ = [
    # Clients API
    "ICatalogClient",
    "IMovieManagerClient",
    "ISeriesManagerClient",
    # Repositories
    "IExclusionStore",
]
