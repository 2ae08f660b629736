"""
Interfaces ports pour le client du catalogue.

Le catalogue (uNoGS) est interrogé en deux temps : une recherche par titre
et année qui retourne l'identifiant Netflix, puis une requête de détail qui
liste les pays où le titre est disponible.

Les réponses sont validées par des modèles pydantic : toute réponse qui ne
respecte pas la forme attendue lève une pydantic.ValidationError que les
services convertissent en MalformedResponseError.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class SearchFilters:
    """
    Filtres fixes de la recherche avancée uNoGS.

    Attributs :
        rating_floor : Filtre de note IMDb (ex: "gt100")
        availability_flag : Drapeau de disponibilité (ex: "downloadable")
        order_by : Tri des résultats
        page : Page de résultats demandée
        semantics : Combinaison des critères ("and" / "or")
    """

    rating_floor: str = "gt100"
    availability_flag: str = "downloadable"
    order_by: str = "Relevance"
    page: int = 1
    semantics: str = "and"


class CatalogSearchResult(BaseModel):
    """
    Réponse de l'endpoint de recherche.

    Attributs :
        count : Nombre de résultats, tel que renvoyé (chaîne)
        items : Résultats ordonnés, chacun portant au moins "title" et "netflixid"
    """

    model_config = ConfigDict(populate_by_name=True)

    count: str = Field(default="", alias="COUNT")
    items: list[dict[str, str]] = Field(default_factory=list, alias="ITEMS")

    @field_validator("items", mode="before")
    @classmethod
    def null_items_as_empty(cls, v: Any) -> Any:
        """
        Le catalogue renvoie parfois ITEMS: null quand rien ne correspond.

        Un champ null dans un résultat vaut "" ; les autres types restent
        rejetés par la validation.
        """
        if v is None:
            return []
        if not isinstance(v, list):
            return v
        return [
            {key: "" if value is None else value for key, value in item.items()}
            if isinstance(item, dict) else item
            for item in v
        ]


class CountryEntry(BaseModel):
    """Pays dans lequel un titre est disponible."""

    ccode: str = ""

    @field_validator("ccode", mode="before")
    @classmethod
    def null_ccode_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class DetailResult(BaseModel):
    country: list[CountryEntry] = Field(default_factory=list)

    @field_validator("country", mode="before")
    @classmethod
    def null_country_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class CatalogDetail(BaseModel):
    """Réponse de l'endpoint de détail ("loadvideo")."""

    model_config = ConfigDict(populate_by_name=True)

    result: DetailResult = Field(default_factory=DetailResult, alias="RESULT")

    @property
    def country_codes(self) -> set[str]:
        """Ensemble des codes pays où le titre est disponible."""
        return {entry.ccode for entry in self.result.country}


class ICatalogLookupClient(ABC):
    """
    Interface du client HTTP du catalogue.

    Effectue un GET authentifié et retourne le corps brut, quel que soit
    le code HTTP. L'interprétation du contenu est laissée aux services.
    """

    @abstractmethod
    async def fetch(self, url: str, api_key: str) -> bytes:
        """
        Récupère le corps de la réponse à un GET sur l'URL.

        Args :
            url : URL complète (endpoint + query string)
            api_key : Clé RapidAPI envoyée en en-tête

        Retourne :
            Corps complet de la réponse

        Lève :
            RequestBuildError, TransportError, BodyReadError
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Libère les ressources réseau."""
        ...
