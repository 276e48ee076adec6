"""
JellyClean - Nettoyage automatique d'une mediatheque Jellyfin.

Ce package supprime les films et saisons dont l'anciennete depasse une
duree de retention configurable, en coordonnant la suppression des
fichiers avec Radarr (films) et Sonarr (series).

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur)
- services/ : Couche application (evaluation, correlation, orchestration)
- adapters/ : Couche infrastructure (CLI, clients API)
- infrastructure/ : Persistance de la liste d'exclusion
"""

__version__ = "0.1.0"
