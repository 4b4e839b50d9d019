"""HTTP transport between the interactive client and a server."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from remotecontrol.errors import TransportError
from remotecontrol.logging import get_logger
from remotecontrol.types import (
    CommandInfo,
    CommandRequest,
    CommandResponse,
    NavigationRequest,
    NavigationResponse,
)

log = get_logger("client.transport")

TREE = "tree"
AMF = "amf"


def normalize_url(url: str) -> str:
    """Default a scheme-less address such as ``localhost:4000`` to http."""
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        url = "http://" + url
    return url.rstrip("/")


class RemoteClient:
    """Thin async wrapper over the server's JSON API.

    Stateless with respect to the server URL; every call names the server
    it talks to. ``transport`` lets tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport

    def _client(self, server_url: str) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=server_url.rstrip("/"),
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _request(
        self,
        server_url: str,
        method: str,
        path: str,
        body: BaseModel | None = None,
    ) -> httpx.Response:
        payload = body.model_dump(mode="json", by_alias=True) if body is not None else None
        try:
            async with self._client(server_url) as client:
                return await client.request(method, path, json=payload)
        except httpx.HTTPError as e:
            log.debug("%s %s%s failed: %s", method, server_url, path, e)
            raise TransportError(f"Cannot reach server at {server_url}: {e}") from e

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid response from server (HTTP {response.status_code}): {response.text[:200]}"
            ) from e

    @staticmethod
    def _error_text(response: httpx.Response, data: Any) -> str:
        if isinstance(data, dict) and "error" in data:
            return str(data["error"])
        return f"HTTP {response.status_code}"

    async def probe(self, server_url: str) -> str:
        """Identify the personality listening at ``server_url``.

        Returns ``"tree"`` or ``"amf"``.

        Raises:
            TransportError: nothing usable answers at that address.
        """
        response = await self._request(server_url, "GET", "/api/context")
        if response.status_code == 200:
            return TREE

        response = await self._request(server_url, "GET", "/api/status")
        if response.status_code == 200:
            data = self._json(response)
            if isinstance(data, dict) and data.get("service") == AMF:
                return AMF

        raise TransportError(f"No remote-control server at {server_url}")

    async def navigate(self, server_url: str, req: NavigationRequest) -> NavigationResponse:
        response = await self._request(server_url, "POST", "/api/context/navigate", req)
        data = self._json(response)
        try:
            return NavigationResponse.model_validate(data)
        except ValidationError as e:
            raise TransportError(f"Malformed navigation response: {e}") from e

    async def execute(self, server_url: str, req: CommandRequest) -> CommandResponse:
        response = await self._request(server_url, "POST", "/api/exec", req)
        data = self._json(response)
        if response.status_code >= 400:
            return CommandResponse.failure(self._error_text(response, data))
        try:
            return CommandResponse.model_validate(data)
        except ValidationError as e:
            raise TransportError(f"Malformed command response: {e}") from e

    async def list_nodes(self, server_url: str, node_type: str) -> list[str]:
        response = await self._request(server_url, "GET", f"/api/context/node/{node_type}")
        data = self._json(response)
        if response.status_code != 200:
            raise TransportError(self._error_text(response, data))
        if not isinstance(data, dict):
            raise TransportError(f"Malformed node listing: {data!r}")
        return list(data.get("objects", []))

    async def node_commands(
        self, server_url: str, node_type: str, node_name: str
    ) -> list[CommandInfo]:
        response = await self._request(
            server_url, "GET", f"/api/context/node/{node_type}/{node_name}/commands"
        )
        data = self._json(response)
        if response.status_code != 200:
            raise TransportError(self._error_text(response, data))
        try:
            return [CommandInfo.model_validate(item) for item in data]
        except ValidationError as e:
            raise TransportError(f"Malformed command list: {e}") from e
