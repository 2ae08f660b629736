"""
Normalisation des titres de la videotheque avant recherche dans le catalogue.

Les titres uNoGS ne contiennent ni apostrophes ni annee entre parentheses,
alors que les metadonnees Plex en portent parfois ("Heat (1995)").
"""

import re

# Un ou plusieurs "(YYYY)" en fin de titre, espaces compris, chiffres ASCII seulement
_TRAILING_YEARS = re.compile(r"(\s*\(\d{4}\))+\s*$", re.ASCII)


def normalize_title(raw_title: str) -> str:
    """
    Normalise un titre pour la comparaison avec le catalogue.

    - supprime toutes les apostrophes
    - retire le suffixe "(YYYY)" en fin de chaine
    - retire les espaces en debut et fin

    Les apostrophes sont retirees avant l'annee et tous les suffixes
    consecutifs sont retires d'un coup: normaliser deux fois donne le
    meme resultat.

    Examples:
        >>> normalize_title("Inception (2010)")
        'Inception'
        >>> normalize_title("Schindler's List")
        'Schindlers List'
    """
    title = raw_title.replace("'", "")
    title = _TRAILING_YEARS.sub("", title)
    return title.strip()
