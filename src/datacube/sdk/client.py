"""
DataCube API clients.

Besides the native endpoint methods, a client exposes every catalog flow as a
callable reachable three ways::

    client["consulta-cnh-completa-1764938995458-45nr1u"](inputs)   # by id
    client.testeMeu(inputs)                                         # by label
    client.consultasdeveiculos.consultaCnhParanaCompleta(inputs)    # by path
    client.teams.teamfoiiii.teste(inputs)                           # team path

Built-in members always win over flow names. Each flow callable takes
``(inputs=None, version=None)`` and returns the transport's result: a decoded
JSON value for :class:`DataCubeClient`, an awaitable for
:class:`AsyncDataCubeClient`.
"""

from __future__ import annotations

import logging
from typing import Any

from datacube.sdk.adapters.http_adapter import AsyncHTTPTransport, HTTPTransport
from datacube.sdk.api import invoke
from datacube.sdk.config import ClientConfig
from datacube.sdk.demos.demo_catalog import demo_flows
from datacube.sdk.help_text import render_help
from datacube.sdk.registry import FlowCatalog
from datacube.sdk.resolver import Resolver
from datacube.sdk.router import (
    BoundFlow,
    FlowRouter,
    ProviderNamespace,
    TeamsNamespace,
)
from datacube.sdk.spec import Flow, ProviderScope, Resolution, Scope, TeamScope
from datacube.sdk.types import CatalogSource, ExecutePayload, JSONObj, Transport

__all__ = ["AsyncDataCubeClient", "DataCubeClient"]

logger = logging.getLogger("datacube.sdk.client")


class _BaseClient:
    def __init__(self, transport: Transport, catalog_source: CatalogSource | None):
        self._transport = transport
        self.catalog = FlowCatalog(catalog_source or demo_flows)
        self._router = FlowRouter(Resolver(self.catalog), self._invoke)

    # --- native endpoints ----------------------------------------------------

    def get_status(self) -> Any:
        return self._transport.status()

    def get_usage(self) -> Any:
        return self._transport.usage()

    def me(self) -> Any:
        return self._transport.me()

    def execute(self, body: ExecutePayload) -> Any:
        """Execute a flow from a hand-built payload (no resolution)."""
        return self._transport.execute(body)

    def execution_status(self, execution_id: str) -> Any:
        return self._transport.execution_status(execution_id)

    def help(self) -> str:
        """Print and return the listing of native methods and flow paths."""
        text = render_help(self.catalog)
        print(text)
        return text

    # --- resolution ----------------------------------------------------------

    def resolve(
        self,
        name: str,
        provider: str | None = None,
        team: str | None = None,
    ) -> Resolution:
        """
        Resolve ``name`` without invoking anything.

        At most one of ``provider`` / ``team`` may be given.
        """
        if provider and team:
            raise ValueError("Pass either provider or team, not both")
        scope: Scope = None
        if team:
            scope = TeamScope(team)
        elif provider:
            scope = ProviderScope(provider)
        return self._router.resolver.resolve(scope, name)

    def namespace(self, name: str) -> ProviderNamespace:
        return self._router.namespace(name)

    @property
    def teams(self) -> TeamsNamespace:
        return self._router.teams

    def _invoke(
        self, flow: Flow, inputs: JSONObj | None, version: str | None
    ) -> Any:
        logger.debug(f"invoke {flow.id} version={version!r}")
        return invoke(self._transport.execute, flow, inputs, version)

    # --- dynamic surface -----------------------------------------------------

    def __getattr__(self, name: str) -> BoundFlow | ProviderNamespace:
        # only called for names that are not regular members
        if name.startswith("_"):
            raise AttributeError(name)
        return self._router.route(name)

    def __getitem__(self, identifier: str) -> BoundFlow:
        return self._router.lookup(identifier)


class DataCubeClient(_BaseClient):
    """
    Blocking client.

    Parameters
    ----------
    api_key : str | None
        API key; defaults to ``DATACUBE_API_KEY``.
    base_url : str | None
        API base URL; defaults to ``DATACUBE_API_URL`` or the public endpoint.
    catalog_source : CatalogSource | None
        Zero-arg callable returning raw flow records; defaults to the demo
        catalog.
    transport : Transport | None
        Replaces the HTTP transport entirely (``api_key`` is then unused).
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        catalog_source: CatalogSource | None = None,
        transport: Transport | None = None,
    ) -> None:
        if transport is None:
            transport = HTTPTransport(ClientConfig.from_env(api_key, base_url))
        super().__init__(transport, catalog_source)

    def close(self) -> None:
        close = getattr(self._transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> DataCubeClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class AsyncDataCubeClient(_BaseClient):
    """Non-blocking client; every endpoint and flow call returns an awaitable."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        catalog_source: CatalogSource | None = None,
        transport: Transport | None = None,
    ) -> None:
        if transport is None:
            transport = AsyncHTTPTransport(ClientConfig.from_env(api_key, base_url))
        super().__init__(transport, catalog_source)

    async def aclose(self) -> None:
        aclose = getattr(self._transport, "aclose", None)
        if callable(aclose):
            await aclose()

    async def __aenter__(self) -> AsyncDataCubeClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
