"""
PlexFlix - Verification de la disponibilite Netflix d'une videotheque Plex.

Ce package parcourt les bibliotheques d'un serveur Plex et interroge le
catalogue uNoGS pour savoir quels titres sont disponibles sur Netflix
dans une region donnee.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, erreurs)
- services/ : Couche application (normalisation, résolution, réconciliation)
- adapters/ : Couche infrastructure (CLI, client uNoGS, client Plex, secrets)
"""

__version__ = "0.1.0"
