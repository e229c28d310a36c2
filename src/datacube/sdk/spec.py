from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from datacube.sdk.errors import (
    CatalogError,
    FlowNotFoundError,
    FlowNotFoundUnderScopeError,
)
from datacube.sdk.normalize import labelize, normalize_key
from datacube.sdk.types import ExecutePayload, JSONObj

__all__ = [
    "OFFICIAL_PROVIDER_KEYS",
    "Flow",
    "FlowKind",
    "Found",
    "NotFound",
    "NotFoundUnderScope",
    "ProviderScope",
    "Resolution",
    "ResolvedCall",
    "Scope",
    "TeamScope",
]

# Provider keys owned by the platform itself ("official" flows).
OFFICIAL_PROVIDER_KEYS: frozenset[str] = frozenset({"datacube"})


# --- typed default factories (avoid Unknown from dict) ----------------------
def _empty_inputs() -> JSONObj:
    return {}


def _pick(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in record:
            return record[key]
    return None


# --- flows ------------------------------------------------------------------
class FlowKind(str, Enum):
    OFFICIAL = "official"
    PROVIDER = "provider"
    TEAM = "team"
    PERSONAL = "personal"


@dataclass(frozen=True)
class Flow:
    id: str
    display_name: str
    provider_name: str | None = None
    team_name: str | None = None
    # derived once at load time
    provider_key: str | None = field(init=False)
    team_key: str | None = field(init=False)
    label: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "provider_key", normalize_key(self.provider_name) or None
        )
        object.__setattr__(self, "team_key", normalize_key(self.team_name) or None)
        object.__setattr__(self, "label", labelize(self.display_name or "") or "")

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Flow:
        """
        Build a Flow from a raw catalog record.

        Both the wire names (``name``, ``provider_name``, ``team_name``) and
        their camel-case spellings are accepted. A record without an ``id``
        cannot be invoked and is rejected.
        """
        flow_id = record.get("id")
        if not flow_id or not isinstance(flow_id, str):
            raise CatalogError(f"Catalog record without a usable id: {record!r}")
        return cls(
            id=flow_id,
            display_name=_pick(record, "name", "display_name", "displayName") or "",
            provider_name=_pick(record, "provider_name", "providerName"),
            team_name=_pick(record, "team_name", "teamName"),
        )

    @property
    def kind(self) -> FlowKind:
        if self.provider_key in OFFICIAL_PROVIDER_KEYS:
            return FlowKind.OFFICIAL
        if self.provider_key is not None:
            return FlowKind.PROVIDER
        if self.team_key is not None:
            return FlowKind.TEAM
        return FlowKind.PERSONAL

    @property
    def is_direct(self) -> bool:
        """True for personal flows (no provider, no team)."""
        return self.provider_key is None and self.team_key is None


# --- scopes -----------------------------------------------------------------
@dataclass(frozen=True)
class ProviderScope:
    name: str


@dataclass(frozen=True)
class TeamScope:
    name: str


Scope = ProviderScope | TeamScope | None


# --- resolution outcomes ----------------------------------------------------
@dataclass(frozen=True)
class Found:
    flow: Flow

    def unwrap(self) -> Flow:
        return self.flow


@dataclass(frozen=True)
class NotFound:
    identifier: str

    def error(self) -> FlowNotFoundError:
        return FlowNotFoundError(self.identifier)

    def unwrap(self) -> Flow:
        raise self.error()


@dataclass(frozen=True)
class NotFoundUnderScope:
    scope_name: str
    identifier: str

    def error(self) -> FlowNotFoundUnderScopeError:
        return FlowNotFoundUnderScopeError(self.scope_name, self.identifier)

    def unwrap(self) -> Flow:
        raise self.error()


Resolution = Found | NotFound | NotFoundUnderScope


# --- outbound call ----------------------------------------------------------
@dataclass(frozen=True)
class ResolvedCall:
    flow_id: str
    inputs: JSONObj = field(default_factory=_empty_inputs)
    version: str | None = None  # None -> server default / latest

    def to_payload(self) -> ExecutePayload:
        payload: ExecutePayload = {"flow_id": self.flow_id, "inputs": self.inputs}
        if self.version:
            payload["version"] = self.version
        return payload
