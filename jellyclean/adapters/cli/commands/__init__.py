"""Sous-package CLI commands - re-exporte les commandes publiques."""

from jellyclean.adapters.cli.commands.cleanup_commands import (
    purge,
    scan,
)
from jellyclean.adapters.cli.commands.exclusion_commands import (
    exclusions_add,
    exclusions_add_eligible,
    exclusions_app,
    exclusions_list,
    exclusions_remove,
)
from jellyclean.adapters.cli.commands.status_command import (
    status,
)

__all__ = [
    # nettoyage
    "scan",
    "purge",
    # exclusions
    "exclusions_app",
    "exclusions_list",
    "exclusions_add",
    "exclusions_remove",
    "exclusions_add_eligible",
    # tableau de bord
    "status",
]
