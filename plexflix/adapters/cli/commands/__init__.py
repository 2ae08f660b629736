"""Sous-package CLI commands - re-exporte les commandes publiques."""

from plexflix.adapters.cli.commands.scan_command import scan

__all__ = [
    "scan",
]
