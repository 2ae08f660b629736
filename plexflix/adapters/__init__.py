"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- api/ : Client HTTP du catalogue uNoGS (RapidAPI)
- plex/ : Client HTTP du serveur Plex
- secrets/ : Déchiffrement des secrets via ejson
- cli/ : Interface ligne de commande (Typer)

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
"""
