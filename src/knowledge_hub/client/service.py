"""
Remote Persistence Service

The narrow contract the entity stores consume, and its HTTP
implementation against the knowledge hub REST API.

Contract (one instance per collection, ``notes`` or ``bookmarks``):
    list(owner)                -> entities, most recently updated first
    insert(owner, fields)      -> created entity (server-assigned id/timestamps)
    update(owner, id, fields)  -> full updated entity
    delete(owner, id)          -> None

Every failure surfaces as ``ServiceError``. Entities travel as plain
dicts; parsing into pydantic models is the store's concern.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from knowledge_hub.core.config import OWNER_HEADER, settings
from knowledge_hub.core.errors import ServiceError

logger = logging.getLogger(__name__)

EntityData = dict[str, Any]


class EntityService(Protocol):
    """Remote system of record for one collection."""

    collection: str

    async def list(self, owner: str) -> list[EntityData]: ...

    async def insert(self, owner: str, fields: dict[str, Any]) -> EntityData: ...

    async def update(
        self, owner: str, entity_id: str, fields: dict[str, Any]
    ) -> EntityData: ...

    async def delete(self, owner: str, entity_id: str) -> None: ...


class HttpEntityService:
    """
    ``EntityService`` over the REST API using ``httpx.AsyncClient``.

    The owner travels in the ``X-User-Id`` header of each request.
    Transport errors, timeouts, non-2xx responses and unreadable bodies
    are all raised as ``ServiceError``.

    Usage::

        async with httpx.AsyncClient(base_url=settings.API_URL) as client:
            notes = HttpEntityService("notes", client)
            items = await notes.list("user-1")
    """

    def __init__(self, collection: str, client: httpx.AsyncClient):
        self.collection = collection
        self._client = client
        self._base_path = f"/api/v1/{collection}"

    @classmethod
    def build_client(
        cls,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> httpx.AsyncClient:
        """Create an AsyncClient configured from settings."""
        return httpx.AsyncClient(
            base_url=base_url or settings.API_URL,
            timeout=timeout if timeout is not None else settings.HTTP_TIMEOUT,
            transport=transport,
        )

    # ------------------------------------------------------------------
    # Contract
    # ------------------------------------------------------------------

    async def list(self, owner: str) -> list[EntityData]:
        response = await self._request("list", owner, "GET", f"{self._base_path}/")
        data = self._json(response, "list")
        if not isinstance(data, list):
            raise ServiceError(
                f"list {self.collection} failed: expected a JSON array",
                operation="list",
            )
        return data

    async def insert(self, owner: str, fields: dict[str, Any]) -> EntityData:
        response = await self._request(
            "insert", owner, "POST", f"{self._base_path}/", json=fields
        )
        return self._json(response, "insert")

    async def update(
        self, owner: str, entity_id: str, fields: dict[str, Any]
    ) -> EntityData:
        response = await self._request(
            "update", owner, "PATCH", f"{self._base_path}/{entity_id}", json=fields
        )
        return self._json(response, "update")

    async def delete(self, owner: str, entity_id: str) -> None:
        await self._request(
            "delete", owner, "DELETE", f"{self._base_path}/{entity_id}"
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _request(
        self,
        operation: str,
        owner: str,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = await self._client.request(
                method, url, headers={OWNER_HEADER: owner}, **kwargs
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            raise ServiceError(
                f"{operation} {self.collection} failed: HTTP {status_code}",
                operation=operation,
                status_code=status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ServiceError(
                f"{operation} {self.collection} failed: {e!r}",
                operation=operation,
            ) from e
        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response

    def _json(self, response: httpx.Response, operation: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ServiceError(
                f"{operation} {self.collection} failed: response is not JSON",
                operation=operation,
                status_code=response.status_code,
            ) from e
