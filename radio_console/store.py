"""
Connexion au store distant / Remote store connection.
Client REST asynchrone (dialecte PostgREST) via httpx.
Async REST client (PostgREST dialect) built on httpx.
"""

import logging
from typing import Any

import httpx

from radio_console.config import settings

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Erreur HTTP ou reseau du store / Store HTTP or network failure.

    status_code vaut None pour les erreurs reseau et les timeouts.
    body conserve le texte brut de la reponse, jamais parse.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


def eq(value: Any) -> str:
    """Predicat d'egalite / Equality predicate."""
    return f"eq.{value}"


class RestStore:
    """Client du store distant / Remote store client.

    Chaque requete porte la meme cle statique dans deux en-tetes (apikey + Bearer).
    Every request carries the same static key in two headers (apikey + Bearer).
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        resource: str,
        params: dict[str, str] | None = None,
        payload: dict | None = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        headers = {"Prefer": prefer} if prefer else None
        try:
            response = await self._client.request(
                method, f"/{resource}", params=params, json=payload, headers=headers,
            )
        except httpx.TimeoutException as exc:
            logger.warning("Store timeout on %s %s", method, resource)
            raise TransportError(f"Request timed out: {method} {resource}") from exc
        except httpx.HTTPError as exc:
            logger.warning("Store unreachable on %s %s: %s", method, resource, exc)
            raise TransportError(f"Network error: {exc}") from exc

        if response.is_error:
            body = response.text
            logger.warning("Store error %s on %s %s: %s", response.status_code, method, resource, body)
            raise TransportError(
                f"HTTP error! status: {response.status_code} - {body}",
                status_code=response.status_code,
                body=body,
            )
        return response

    async def select(
        self,
        resource: str,
        filters: dict[str, Any] | None = None,
        order: str | None = None,
        limit: int | None = None,
        columns: str = "*",
    ) -> list[dict]:
        """Lecture filtree / Filtered read.

        Pas de pagination : le store renvoie tout en un seul appel.
        No pagination: the store returns the full result set in one call.
        """
        params = {"select": columns}
        for column, value in (filters or {}).items():
            params[column] = eq(value)
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = str(limit)
        response = await self._request("GET", resource, params=params)
        return response.json() or []

    async def count(self, resource: str) -> int:
        """Comptage via select=count / Row count via select=count."""
        response = await self._request("GET", resource, params={"select": "count"})
        data = response.json() or []
        if not data:
            return 0
        return int(data[0].get("count", 0))

    async def insert(self, resource: str, payload: dict) -> dict:
        response = await self._request("POST", resource, payload=payload, prefer="return=representation")
        rows = response.json() or []
        return rows[0]

    async def update(self, resource: str, key: str, value: Any, payload: dict) -> dict | None:
        """PATCH partiel, seuls les champs fournis sont envoyes / Partial PATCH, only supplied fields are sent."""
        response = await self._request(
            "PATCH", resource, params={key: eq(value)}, payload=payload, prefer="return=representation",
        )
        rows = response.json() or []
        return rows[0] if rows else None

    async def delete(self, resource: str, key: str, value: Any) -> None:
        await self._request("DELETE", resource, params={key: eq(value)})


def create_store(transport: httpx.AsyncBaseTransport | None = None) -> RestStore:
    """Construire le client depuis la configuration / Build the client from settings."""
    return RestStore(
        settings.STORE_URL,
        settings.STORE_API_KEY,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
        transport=transport,
    )
