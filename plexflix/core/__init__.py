"""
Couche domaine (core).

Contient les entités métier, les ports (interfaces abstraites) et la
hiérarchie d'exceptions. Cette couche n'a AUCUNE dépendance vers
l'infrastructure (httpx, Plex, ejson).

Sous-packages :
- entities/ : Entités métier (MediaItem, Library)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- errors.py : Exceptions partagées entre les couches
"""
