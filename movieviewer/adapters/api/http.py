"""
Execution des requetes HTTP vers l'API distante.

Traduit les erreurs httpx vers la taxonomie du domaine :
- erreurs de transport (connexion, DNS, timeout) -> NetworkFailure
- statut non 2xx ou JSON illisible -> RemoteFailure

Aucun retry : un echec remonte immediatement a SyncRepository qui
decide du repli sur le cache.

Usage:
    data = await request_json(client, "GET", "/movie/popular", params={"page": 2})
"""

from typing import Any

import httpx
from loguru import logger

from movieviewer.core.errors import NetworkFailure, RemoteFailure


async def request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    **kwargs,
) -> Any:
    """
    Execute une requete HTTP et retourne le corps JSON decode.

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, POST, etc.)
        url: URL a appeler (relative a la base_url du client)
        **kwargs: Arguments supplementaires passes a client.request()

    Returns:
        Le payload JSON decode

    Raises:
        NetworkFailure: Pas de connectivite, echec DNS ou timeout
        RemoteFailure: Statut HTTP non 2xx ou corps non JSON
    """
    try:
        response = await client.request(method, url, **kwargs)
    except (httpx.TimeoutException, httpx.NetworkError) as e:
        logger.debug(f"Echec reseau sur {method} {url}: {e!r}")
        raise NetworkFailure(f"Network error during {method} {url}") from e
    except httpx.HTTPError as e:
        logger.debug(f"Echec protocole sur {method} {url}: {e!r}")
        raise RemoteFailure(f"Invalid response for {method} {url}") from e

    if response.is_error:
        logger.debug(f"{method} {url} -> HTTP {response.status_code}")
        raise RemoteFailure(
            f"{method} {url} returned HTTP {response.status_code}",
            status_code=response.status_code,
        )

    try:
        return response.json()
    except ValueError as e:
        raise RemoteFailure(
            f"Malformed JSON payload for {method} {url}",
            status_code=response.status_code,
        ) from e
