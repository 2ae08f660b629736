"""
Magasin de secrets chiffré par ejson.

Les identifiants (clé RapidAPI, jeton Plex) sont stockés dans un fichier
JSON chiffré au repos. Le déchiffrement est délégué au binaire ejson,
avec le répertoire de clés privées local :

    ejson --keydir /opt/ejson/keys decrypt secrets.json

Les valeurs déjà fournies par la configuration sont prioritaires : si
toutes les clés demandées sont présentes, le fichier n'est pas déchiffré.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

from loguru import logger

from plexflix.core.errors import SecretsError
from plexflix.core.ports.secrets import ISecretStore

RAPID_API_KEY = "RAPID_API_KEY"
PLEX_TOKEN = "PLEX_TOKEN"


class EjsonSecretStore(ISecretStore):
    """Déchiffre le fichier de secrets via le binaire ejson."""

    def __init__(
        self,
        secrets_file: Path,
        keydir: Path,
        binary: str = "ejson",
        overrides: Optional[dict[str, Optional[str]]] = None,
        required: tuple[str, ...] = (RAPID_API_KEY, PLEX_TOKEN),
    ) -> None:
        """
        Args:
            secrets_file: Fichier JSON chiffré
            keydir: Répertoire des clés privées ejson
            binary: Nom ou chemin du binaire ejson
            overrides: Valeurs fournies par la configuration (None = absente)
            required: Clés qui doivent être présentes dans le résultat
        """
        self._secrets_file = secrets_file
        self._keydir = keydir
        self._binary = binary
        self._overrides = {k: v for k, v in (overrides or {}).items() if v}
        self._required = required

    async def load(self) -> dict[str, str]:
        """
        Retourne les secrets en clair.

        Raises:
            SecretsError: Déchiffrement impossible, JSON invalide ou clé manquante
        """
        if all(key in self._overrides for key in self._required):
            logger.debug("Secrets fournis par la configuration, pas de déchiffrement")
            return dict(self._overrides)

        secrets = await self._decrypt()
        secrets.update(self._overrides)

        missing = [key for key in self._required if not secrets.get(key)]
        if missing:
            raise SecretsError(f"missing secrets: {', '.join(missing)}")
        return secrets

    async def _decrypt(self) -> dict[str, str]:
        """Exécute ejson et parse la sortie JSON."""
        command = [self._binary, "--keydir", str(self._keydir), "decrypt", str(self._secrets_file)]
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise SecretsError(f"ejson binary not found: {self._binary}") from e
        stdout, stderr = await process.communicate()

        if process.returncode != 0:
            detail = stderr.decode(errors="replace").strip() or f"exit status {process.returncode}"
            raise SecretsError(f"reading {self._secrets_file}: {detail}")

        try:
            data = json.loads(stdout.decode())
        except json.JSONDecodeError as e:
            raise SecretsError(f"unmarshaling secrets: {e}") from e
        if not isinstance(data, dict):
            raise SecretsError("unmarshaling secrets: expected a JSON object")

        # La clé publique ejson n'est pas un secret
        return {
            key: str(value)
            for key, value in data.items()
            if key != "_public_key"
        }
