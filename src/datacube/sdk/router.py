"""
Navigable call surface over the flow catalog.

The router mirrors the catalog's grouping as a small object graph::

    root ── <label | id>              -> BoundFlow        (resolved, callable)
         ├─ <provider>                -> ProviderNamespace (callable, navigable)
         │     └─ <label | id>        -> FlowRef           (callable)
         └─ teams ── <team>           -> TeamNamespace     (navigable only)
                       └─ <label>     -> FlowRef           (callable)

Building a namespace or a :class:`FlowRef` never resolves anything and never
raises; resolution errors surface only when a terminal node is called.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from datacube.sdk.resolver import Resolver
from datacube.sdk.spec import Flow, Found, ProviderScope, Resolution, Scope, TeamScope
from datacube.sdk.types import JSONObj

__all__ = [
    "BoundFlow",
    "FlowRef",
    "FlowRouter",
    "Invoker",
    "ProviderNamespace",
    "TeamNamespace",
    "TeamsNamespace",
]

# (flow, inputs, version) -> transport result
Invoker = Callable[[Flow, JSONObj | None, str | None], Any]


def _routable(name: str) -> bool:
    # private and dunder lookups (copy, pickle, IPython, ...) are never routed
    return not name.startswith("_")


class BoundFlow:
    """A resolved flow, callable as ``(inputs=None, version=None)``."""

    def __init__(self, flow: Flow, invoker: Invoker) -> None:
        self.flow = flow
        self._invoker = invoker

    def __call__(
        self, inputs: JSONObj | None = None, version: str | None = None
    ) -> Any:
        return self._invoker(self.flow, inputs, version)

    def __repr__(self) -> str:
        return f"<BoundFlow {self.flow.id!r} ({self.flow.display_name})>"


class FlowRef:
    """A (scope, identifier) pair resolved only when called."""

    def __init__(
        self, resolver: Resolver, invoker: Invoker, scope: Scope, identifier: str
    ) -> None:
        self.scope = scope
        self.identifier = identifier
        self._resolver = resolver
        self._invoker = invoker

    def resolve(self) -> Resolution:
        return self._resolver.resolve(self.scope, self.identifier)

    def __call__(
        self, inputs: JSONObj | None = None, version: str | None = None
    ) -> Any:
        flow = self.resolve().unwrap()
        return self._invoker(flow, inputs, version)

    def __repr__(self) -> str:
        return f"<FlowRef scope={self.scope!r} name={self.identifier!r}>"


class ProviderNamespace:
    """
    Flows of one provider.

    Attribute access yields a :class:`FlowRef` scoped to the provider.
    Calling the namespace itself runs the provider's flow named like the
    provider (``client.cnh(...)`` for a provider ``cnh`` owning ``cnh``).
    """

    def __init__(self, name: str, resolver: Resolver, invoker: Invoker) -> None:
        self.name = name
        self._resolver = resolver
        self._invoker = invoker

    def flow(self, identifier: str) -> FlowRef:
        return FlowRef(
            self._resolver, self._invoker, ProviderScope(self.name), identifier
        )

    def __getattr__(self, name: str) -> FlowRef:
        if not _routable(name):
            raise AttributeError(name)
        return self.flow(name)

    def __getitem__(self, identifier: str) -> FlowRef:
        return self.flow(identifier)

    def __call__(
        self, inputs: JSONObj | None = None, version: str | None = None
    ) -> Any:
        return self.flow(self.name)(inputs, version)

    def __repr__(self) -> str:
        return f"<ProviderNamespace {self.name!r}>"


class TeamNamespace:
    """Flows of one team. Navigable, not callable."""

    def __init__(self, name: str, resolver: Resolver, invoker: Invoker) -> None:
        self.name = name
        self._resolver = resolver
        self._invoker = invoker

    def flow(self, label: str) -> FlowRef:
        return FlowRef(self._resolver, self._invoker, TeamScope(self.name), label)

    def __getattr__(self, name: str) -> FlowRef:
        if not _routable(name):
            raise AttributeError(name)
        return self.flow(name)

    def __getitem__(self, label: str) -> FlowRef:
        return self.flow(label)

    def __repr__(self) -> str:
        return f"<TeamNamespace {self.name!r}>"


class TeamsNamespace:
    """The reserved ``teams`` entry: team name -> :class:`TeamNamespace`."""

    def __init__(self, resolver: Resolver, invoker: Invoker) -> None:
        self._resolver = resolver
        self._invoker = invoker

    def team(self, name: str) -> TeamNamespace:
        return TeamNamespace(name, self._resolver, self._invoker)

    def __getattr__(self, name: str) -> TeamNamespace:
        if not _routable(name):
            raise AttributeError(name)
        return self.team(name)

    def __getitem__(self, name: str) -> TeamNamespace:
        return self.team(name)

    def __repr__(self) -> str:
        return "<TeamsNamespace>"


class FlowRouter:
    """
    Root of the call surface.

    ``route(name)`` is what ``client.<name>`` does: an unscoped match binds the
    flow, anything else becomes a provider namespace (possibly empty).
    """

    def __init__(self, resolver: Resolver, invoker: Invoker) -> None:
        self.resolver = resolver
        self._invoker = invoker
        self.teams = TeamsNamespace(resolver, invoker)

    def route(self, name: str) -> BoundFlow | ProviderNamespace:
        outcome = self.resolver.resolve(None, name)
        if isinstance(outcome, Found):
            return BoundFlow(outcome.flow, self._invoker)
        return self.namespace(name)

    def namespace(self, name: str) -> ProviderNamespace:
        return ProviderNamespace(name, self.resolver, self._invoker)

    def lookup(self, identifier: str) -> BoundFlow:
        """Key lookup (``client["<id>"]``); raises FlowNotFoundError on a miss."""
        return BoundFlow(self.resolver.lookup(None, identifier), self._invoker)
