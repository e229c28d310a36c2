"""
Public API for datacube-sdk.
"""

from .client import AsyncDataCubeClient, DataCubeClient
from .errors import (
    DataCubeError,
    FlowNotFoundError,
    FlowNotFoundUnderScopeError,
    ResolutionError,
    TransportError,
)
from .spec import Flow, ProviderScope, TeamScope

__all__ = [
    "AsyncDataCubeClient",
    "DataCubeClient",
    "DataCubeError",
    "Flow",
    "FlowNotFoundError",
    "FlowNotFoundUnderScopeError",
    "ProviderScope",
    "ResolutionError",
    "TeamScope",
    "TransportError",
]
