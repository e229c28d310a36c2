"""
Invocation wrapper for resolved flows.

This module is the only place where a resolved :class:`Flow` meets the
transport. It builds the outbound payload and hands it to the transport's
``execute`` collaborator without touching the result or the error shape.

Layering:
- datacube.sdk.resolver  : (scope, identifier) -> Flow
- datacube.sdk.api       : Flow + inputs/version -> execute(payload) (this module)
- datacube.sdk.adapters.*: HTTP transport implementations
"""

from __future__ import annotations

from typing import Any

from datacube.sdk.spec import Flow, ResolvedCall
from datacube.sdk.types import ExecuteFn, JSONObj

__all__ = ["build_call", "invoke"]


def build_call(
    flow: Flow,
    inputs: JSONObj | None = None,
    version: str | None = None,
) -> ResolvedCall:
    """
    Compose the fully-determined call for ``flow``.

    ``None`` inputs are normalised to an empty mapping; an empty or ``None``
    version means "server default" and is left out of the payload.
    """
    return ResolvedCall(flow_id=flow.id, inputs=inputs or {}, version=version or None)


def invoke(
    execute: ExecuteFn,
    flow: Flow,
    inputs: JSONObj | None = None,
    version: str | None = None,
) -> Any:
    """
    Invoke ``flow`` through ``execute``.

    Parameters
    ----------
    execute : ExecuteFn
        Transport collaborator accepting the execute payload.
    flow : Flow
        Already-resolved flow.
    inputs : JSONObj | None
        Flow inputs (optional).
    version : str | None
        Flow version to run; ``None`` runs the default/latest version.

    Returns
    -------
    Any
        Whatever ``execute`` returns (an awaitable for async transports).
        Errors raised by ``execute`` propagate unchanged.
    """
    return execute(build_call(flow, inputs, version).to_payload())
