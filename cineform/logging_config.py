"""
Configuration du logging via loguru.

Deux sorties :
- stderr : format colore lisible, filtre par le niveau configure
- fichier : JSON avec rotation, tous niveaux (les appels TMDB sont logges en DEBUG)
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(
    log_level: str = "INFO",
    log_file: Path | None = Path("logs/cineform.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Remplace les handlers loguru par ceux de l'application.

    Args :
        log_level : Niveau minimum affiche sur stderr
        log_file : Fichier JSON de log, ou None pour ne logger que sur stderr
        rotation_size : Taille declenchant la rotation (ex: "10 MB")
        retention_count : Nombre de fichiers conserves apres rotation
    """
    logger.remove()
    logger.add(sys.stderr, level=log_level.upper(), format=CONSOLE_FORMAT, colorize=True)

    if log_file is None:
        return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )
    logger.debug("Logging configure", log_file=str(log_file), rotation=rotation_size)
