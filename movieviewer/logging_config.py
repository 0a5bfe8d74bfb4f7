"""
Configuration loguru de MovieViewer.

Deux sorties :
- stderr, coloree, au niveau choisi par MOVIEVIEWER_LOG_LEVEL
- un fichier JSON tournant qui garde tout en DEBUG (appels TMDB,
  replis sur le cache, ecritures du stockage local)
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> "
    "<level>{level: <7}</level> "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = Path("logs/movieviewer.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """
    Remplace les handlers loguru par ceux de l'application.

    Args:
        log_level: Niveau minimum affiche sur stderr
        log_file: Fichier JSON tournant, ou None pour la console seule
        rotation_size: Taille declenchant la rotation (ex: "10 MB")
        retention_count: Nombre d'archives conservees
    """
    logger.remove()
    logger.add(sys.stderr, level=log_level.upper(), format=CONSOLE_FORMAT, colorize=True)

    if log_file is not None:
        _add_file_sink(log_file, rotation_size, retention_count)


def _add_file_sink(log_file: Path, rotation_size: str, retention_count: int) -> None:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        # Le stockage local journalise depuis son pool de threads
        enqueue=True,
    )
    logger.debug(f"Journal fichier : {log_file} (rotation {rotation_size})")
