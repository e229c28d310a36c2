"""
Lightweight types and protocols for datacube-sdk.

This module intentionally contains *only* typing constructs (aliases,
TypedDicts, Protocols) to avoid circular imports between the client, the
router and the transport adapters.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any, Literal, Protocol, TypedDict, runtime_checkable

JSONValue = Any
JSONObj = Mapping[str, JSONValue]
JSONMap = dict[str, JSONValue]

# Output formats understood by the CLI.
OutputFormat = Literal["plain", "rich", "json"]

# Classification of a flow inside the catalog. Derived, never stored.
FlowKindName = Literal["official", "provider", "team", "personal"]


__all__ = [
    "CatalogSource",
    "ExecuteFn",
    "ExecutePayload",
    "FlowKindName",
    "JSONMap",
    "JSONObj",
    "JSONValue",
    "OutputFormat",
    "RawFlowRecord",
    "Transport",
]


class RawFlowRecord(TypedDict, total=False):
    """
    One catalog entry as delivered by the flow directory.

    Attributes
    ----------
    id : str
        Stable backend identifier.
    name : str
        Human readable display name (free text, accents allowed).
    provider_name : str | None
        Owning third-party provider, if any.
    team_name : str | None
        Owning team namespace, if any.
    """

    id: str
    name: str
    provider_name: str | None
    team_name: str | None


class ExecutePayload(TypedDict, total=False):
    """
    Body of a POST to the ``execute`` endpoint.

    ``version`` is omitted entirely when the caller did not select one.
    """

    flow_id: str
    inputs: JSONObj
    version: str


# Zero-argument callable producing the raw catalog.
CatalogSource = Callable[[], Iterable[Mapping[str, Any]]]

# The transport's execute() as seen by the invocation wrapper. May return a
# plain value or an awaitable, depending on the transport.
ExecuteFn = Callable[[ExecutePayload], Any]


@runtime_checkable
class Transport(Protocol):
    """
    Outbound side of the client.

    Implementations hide the HTTP library and expose one method per remote
    endpoint. Sync transports return decoded JSON, async transports return
    awaitables resolving to decoded JSON.
    """

    def execute(self, payload: ExecutePayload) -> Any: ...

    def execution_status(self, execution_id: str) -> Any: ...

    def status(self) -> Any: ...

    def usage(self) -> Any: ...

    def me(self) -> Any: ...
