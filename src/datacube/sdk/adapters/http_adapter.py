"""
HTTP transport for the DataCube API, built on httpx.

The transport is a thin pass-through: it sends JSON, decodes JSON, and turns
non-success responses into :class:`~datacube.sdk.errors.TransportError`.
There are no retries.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from datacube.sdk.config import USER_AGENT, ClientConfig
from datacube.sdk.errors import TransportError
from datacube.sdk.types import ExecutePayload, JSONValue

__all__ = ["AsyncHTTPTransport", "HTTPTransport"]

logger = logging.getLogger("datacube.sdk.adapters.http")


def _headers(config: ClientConfig) -> dict[str, str]:
    return {
        "X-Api-Key": config.api_key,
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }


def _decode(method: str, path: str, resp: httpx.Response) -> JSONValue:
    if not resp.is_success:
        logger.warning(f"{method} {path} failed with {resp.status_code}")
        raise TransportError(resp.status_code, resp.text)
    raw = resp.content
    return resp.json() if raw else None


# --- sync --------------------------------------------------------------------
class HTTPTransport:
    """
    Blocking transport on :class:`httpx.Client`.

    ``mount`` replaces the network layer of the underlying client (tests pass
    an ``httpx.MockTransport``).
    """

    def __init__(
        self, config: ClientConfig, mount: httpx.BaseTransport | None = None
    ):
        self.config = config
        self._http = httpx.Client(
            base_url=config.base_url,
            headers=_headers(config),
            timeout=config.timeout,
            transport=mount,
        )

    def request(
        self, path: str, method: str = "GET", body: Any | None = None
    ) -> JSONValue:
        logger.debug(f"{method} {path}")
        resp = self._http.request(method, path, json=body)
        return _decode(method, path, resp)

    def execute(self, payload: ExecutePayload) -> JSONValue:
        return self.request("execute", method="POST", body=payload)

    def execution_status(self, execution_id: str) -> JSONValue:
        return self.request(f"execute/{execution_id}")

    def status(self) -> JSONValue:
        return self.request("status")

    def usage(self) -> JSONValue:
        return self.request("usage")

    def me(self) -> JSONValue:
        return self.request("me")

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> HTTPTransport:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


# --- async -------------------------------------------------------------------
class AsyncHTTPTransport:
    """Same surface as :class:`HTTPTransport` on :class:`httpx.AsyncClient`."""

    def __init__(
        self, config: ClientConfig, mount: httpx.AsyncBaseTransport | None = None
    ):
        self.config = config
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            headers=_headers(config),
            timeout=config.timeout,
            transport=mount,
        )

    async def request(
        self, path: str, method: str = "GET", body: Any | None = None
    ) -> JSONValue:
        logger.debug(f"{method} {path}")
        resp = await self._http.request(method, path, json=body)
        return _decode(method, path, resp)

    async def execute(self, payload: ExecutePayload) -> JSONValue:
        return await self.request("execute", method="POST", body=payload)

    async def execution_status(self, execution_id: str) -> JSONValue:
        return await self.request(f"execute/{execution_id}")

    async def status(self) -> JSONValue:
        return await self.request("status")

    async def usage(self) -> JSONValue:
        return await self.request("usage")

    async def me(self) -> JSONValue:
        return await self.request("me")

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> AsyncHTTPTransport:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
