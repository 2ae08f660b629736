"""
Journalisation de PlexFlix (loguru).

Deux destinations :
- stderr, en texte colore, pour suivre le scan section par section
- un fichier JSON tournant, qui garde aussi les appels uNoGS en DEBUG

Les champs structures passes en kwargs (title, section, error...) sont
conserves dans "extra". Les champs sensibles (cle RapidAPI, jeton Plex)
sont masques avant d'atteindre un sink.
"""

import sys
from typing import Optional

from loguru import logger

from plexflix.config import Settings

SENSITIVE_FIELDS = frozenset({"api_key", "token", "plex_token", "rapid_api_key"})
MASK = "***"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> "
    "<level>{level: <7}</level> "
    "<level>{message}</level> <dim>{extra}</dim>"
)


def _mask_secrets(record: dict) -> None:
    for key in SENSITIVE_FIELDS.intersection(record["extra"]):
        record["extra"][key] = MASK


def configure_logging(settings: Settings, console_level: Optional[str] = None) -> None:
    """
    Installe les sinks loguru de l'application.

    Args:
        settings: Parametres (niveau, fichier, rotation, retention)
        console_level: Niveau console impose par la ligne de commande
            (--verbose / --quiet), sinon settings.log_level
    """
    logger.remove()
    logger.configure(patcher=_mask_secrets)

    logger.add(
        sys.stderr,
        level=console_level or settings.log_level,
        format=CONSOLE_FORMAT,
        colorize=True,
    )

    log_file = settings.log_file
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        serialize=True,
        rotation=settings.log_rotation_size,
        retention=settings.log_retention_count,
        compression="zip",
        enqueue=True,
        filter="plexflix",
    )

    logger.debug("journalisation prete", log_file=str(log_file))
