"""
Couche infrastructure de JellyClean.

Ce module contient les implementations concretes des interfaces definies
dans la couche domaine (ports) qui ne sont pas des clients HTTP :

- persistence/ : Stockage SQLite de la liste d'exclusion avec SQLModel

Architecture hexagonale : les adapters ici implementent les ports du domaine,
permettant de changer l'implementation (ex: PostgreSQL au lieu de SQLite)
sans modifier la logique metier.
"""
