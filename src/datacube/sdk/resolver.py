"""
Name resolution: (scope, identifier) -> flow.

Precedence
----------
1. ``TeamScope(t)``     : flows of team ``t``, matched by label only.
2. ``ProviderScope(p)`` : flows of provider ``p``, matched by label or id.
3. no scope             : personal flows by label or id (newest id wins),
                          then any flow by exact id, then not found.

Scoped branches are terminal: a miss inside an explicit scope never falls
back to another scope.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging

from datacube.sdk.normalize import fold_identifier, normalize_key
from datacube.sdk.registry import FlowCatalog
from datacube.sdk.spec import (
    Flow,
    Found,
    NotFound,
    NotFoundUnderScope,
    ProviderScope,
    Resolution,
    Scope,
    TeamScope,
)

__all__ = ["Resolver", "matches", "newest", "resolve"]

logger = logging.getLogger("datacube.sdk.resolver")


def matches(flow: Flow, target: str, *, by_id: bool = True) -> bool:
    """Label (and optionally id) match under identifier folding."""
    folded = fold_identifier(target)
    # an empty label (malformed name) is reachable by id only
    if flow.label and fold_identifier(flow.label) == folded:
        return True
    return by_id and fold_identifier(flow.id) == folded


def newest(candidates: Iterable[Flow]) -> Flow:
    """Tie-break: lexicographically greatest id wins."""
    return max(candidates, key=lambda f: f.id)


def resolve(flows: Iterable[Flow], scope: Scope, identifier: str) -> Resolution:
    """
    Resolve ``identifier`` under ``scope`` against ``flows``.

    Parameters
    ----------
    flows : Iterable[Flow]
        The catalog contents. Order does not affect the outcome.
    scope : ProviderScope | TeamScope | None
        Resolution context; ``None`` means global.
    identifier : str
        Label or backend id typed by the caller.

    Returns
    -------
    Found | NotFound | NotFoundUnderScope
        Tagged outcome; call ``unwrap()`` to get the flow or raise.
    """
    pool = tuple(flows)

    if isinstance(scope, TeamScope):
        team_key = normalize_key(scope.name)
        hits = [
            f
            for f in pool
            if f.team_key is not None
            and f.team_key == team_key
            and matches(f, identifier, by_id=False)
        ]
        if not hits:
            return NotFoundUnderScope(scope.name, identifier)
        return Found(newest(hits))

    if isinstance(scope, ProviderScope):
        provider_key = normalize_key(scope.name)
        hits = [
            f
            for f in pool
            if f.provider_key is not None
            and f.provider_key == provider_key
            and matches(f, identifier)
        ]
        if not hits:
            return NotFoundUnderScope(scope.name, identifier)
        return Found(newest(hits))

    direct = [f for f in pool if f.is_direct and matches(f, identifier)]
    if direct:
        return Found(newest(direct))

    folded = fold_identifier(identifier)
    for f in pool:
        if fold_identifier(f.id) == folded:
            return Found(f)

    return NotFound(identifier)


class Resolver:
    """Resolver bound to one client's catalog."""

    def __init__(self, catalog: FlowCatalog) -> None:
        self.catalog = catalog

    def resolve(self, scope: Scope, identifier: str) -> Resolution:
        outcome = resolve(self.catalog.all_flows(), scope, identifier)
        logger.debug(f"resolve scope={scope!r} name={identifier!r} -> {outcome!r}")
        return outcome

    def lookup(self, scope: Scope, identifier: str) -> Flow:
        """Resolve and unwrap; raises a ResolutionError subclass on a miss."""
        return self.resolve(scope, identifier).unwrap()
