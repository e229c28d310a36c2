"""
Exception hierarchy for datacube-sdk.

Resolution errors are raised synchronously, before any request is sent.
Transport errors carry the HTTP status and body of the failed response.
"""

from __future__ import annotations

__all__ = [
    "CatalogError",
    "ConfigError",
    "DataCubeError",
    "FlowNotFoundError",
    "FlowNotFoundUnderScopeError",
    "ResolutionError",
    "TransportError",
]


class DataCubeError(Exception):
    """Base class for every error raised by the SDK."""


class ConfigError(DataCubeError):
    """Client configuration is incomplete (e.g. no API key)."""


class CatalogError(DataCubeError):
    """A catalog record cannot be turned into a flow."""


class ResolutionError(DataCubeError, LookupError):
    """An identifier did not resolve to a flow."""

    identifier: str


class FlowNotFoundError(ResolutionError):
    """No flow anywhere in the catalog matches the identifier."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Flow not found: name={identifier}")


class FlowNotFoundUnderScopeError(ResolutionError):
    """An explicit provider or team scope holds no matching flow."""

    def __init__(self, scope_name: str, identifier: str) -> None:
        self.scope_name = scope_name
        self.identifier = identifier
        super().__init__(
            f"Flow '{identifier}' not found under '{scope_name}'."
        )


class TransportError(DataCubeError):
    """The API answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Request failed {status_code} → {body}")
