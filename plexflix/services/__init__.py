"""
Couche services (cas d'utilisation).

- title_normalizer : nettoyage des titres avant recherche
- identifier_resolver : titre + annee -> identifiant Netflix
- availability_checker : identifiant -> disponible dans une region
- reconciliation : enchainement resolution -> verification, par titre
- library_scan : parcours complet des bibliotheques du serveur
"""
