"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe JELLYCLEAN_,
et peut optionnellement être fournie via un fichier .env.

Radarr et Sonarr sont optionnels - un service sans URL ou sans clé API est
considéré comme non configuré, et les éléments qui en dépendent sont ignorés.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jellyclean.core.value_objects import (
    DEFAULT_MOVIE_RETENTION_DAYS,
    DEFAULT_SEASON_RETENTION_DAYS,
    RetentionPolicy,
)

# Trouver le fichier .env à la racine du projet (parent de jellyclean/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


def _is_set(value: Optional[str]) -> bool:
    return bool(value and value.strip())


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe JELLYCLEAN_.
    Exemple : JELLYCLEAN_MOVIE_RETENTION_DAYS=14

    Les URLs sont normalisées (slash final retiré, http:// ajouté si absent).
    """

    model_config = SettingsConfigDict(
        env_prefix="JELLYCLEAN_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Jellyfin (catalogue - requis pour scanner)
    jellyfin_url: Optional[str] = Field(default=None)
    jellyfin_api_key: Optional[str] = Field(default=None)
    jellyfin_user_id: Optional[str] = Field(default=None)

    # Gestionnaires d'acquisition (OPTIONNELS)
    radarr_url: Optional[str] = Field(default=None)
    radarr_api_key: Optional[str] = Field(default=None)
    sonarr_url: Optional[str] = Field(default=None)
    sonarr_api_key: Optional[str] = Field(default=None)

    # Politique de retention (en jours)
    movie_retention_days: int = Field(default=DEFAULT_MOVIE_RETENTION_DAYS, ge=0)
    season_retention_days: int = Field(default=DEFAULT_SEASON_RETENTION_DAYS, ge=0)

    # Reseau
    http_timeout: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=5, ge=1)

    # Base de données (liste d'exclusion)
    database_url: str = Field(default="sqlite:///jellyclean.db")

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/jellyclean.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("jellyfin_url", "radarr_url", "sonarr_url", mode="before")
    @classmethod
    def normalize_url(cls, v: Optional[str]) -> Optional[str]:
        """Retire le slash final et ajoute http:// si le schéma est absent."""
        if v is None or not str(v).strip():
            return None
        url = str(v).strip().rstrip("/")
        if not url.startswith(("http://", "https://")):
            url = f"http://{url}"
        return url

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def jellyfin_enabled(self) -> bool:
        """Vérifie si Jellyfin est configuré (URL et clé API)."""
        return _is_set(self.jellyfin_url) and _is_set(self.jellyfin_api_key)

    @property
    def radarr_enabled(self) -> bool:
        """Vérifie si Radarr est configuré (URL et clé API)."""
        return _is_set(self.radarr_url) and _is_set(self.radarr_api_key)

    @property
    def sonarr_enabled(self) -> bool:
        """Vérifie si Sonarr est configuré (URL et clé API)."""
        return _is_set(self.sonarr_url) and _is_set(self.sonarr_api_key)

    @property
    def retention_policy(self) -> RetentionPolicy:
        """Politique de retention construite depuis les seuils configurés."""
        return RetentionPolicy(
            movie_days=self.movie_retention_days,
            season_days=self.season_retention_days,
        )
