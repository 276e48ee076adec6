"""
Configuration du logging de l'application via loguru.

Fournit un logging structuré avec :
- Sortie console : lisible par l'humain, colorée, pour la surveillance en temps réel
- Sortie fichier : sérialisée en JSON, avec rotation, pour l'audit des suppressions
- Interception du module logging standard (httpx, sqlalchemy) vers loguru
"""

import logging
import sys
from pathlib import Path

from loguru import logger

# Bibliotheques tierces dont les logs standard sont rediriges vers loguru
_INTERCEPTED_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")


class InterceptHandler(logging.Handler):
    """Redirige les enregistrements du module logging standard vers loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Remonter la pile pour attribuer le message a l'appelant d'origine
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def verbosity_to_level(verbose: int, quiet: bool, default: str = "INFO") -> str:
    """
    Convertit les options CLI -v/-q en niveau de log console.

    Args :
        verbose : Nombre d'occurrences de -v
        quiet : True si -q est passe (erreurs uniquement)
        default : Niveau utilise sans option
    """
    if quiet:
        return "ERROR"
    if verbose >= 2:
        return "TRACE"
    if verbose == 1:
        return "DEBUG"
    return default


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/jellyclean.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau de log minimum pour la sortie console (DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin vers le fichier de log
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB", "1 GB")
        retention_count : Nombre de fichiers rotatifs à conserver

    Le fichier JSON capture tout a partir de DEBUG : il sert de trace d'audit
    des suppressions meme quand la console est en mode silencieux.
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,  # Thread-safe
    )

    # httpx trace chaque requete en INFO : on ne garde que les avertissements
    for name in _INTERCEPTED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.setLevel(logging.WARNING)
        std_logger.propagate = False

    logger.debug("Logging configuré", log_file=str(log_file), rotation=rotation_size)
