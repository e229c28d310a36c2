"""
Flow catalog for datacube-sdk.

A :class:`FlowCatalog` wraps a catalog source (a zero-argument callable
returning raw flow records) and turns it into an ordered, immutable tuple of
:class:`~datacube.sdk.spec.Flow` objects. The source is read lazily on first
use and cached for the lifetime of the catalog; one catalog belongs to one
client instance.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
import logging
import threading
from typing import Any

from datacube.sdk.errors import CatalogError
from datacube.sdk.spec import Flow, FlowKind
from datacube.sdk.types import CatalogSource

__all__ = ["FlowCatalog"]

logger = logging.getLogger("datacube.sdk.registry")


class FlowCatalog:
    """
    Lazily-loaded, memoized view over a catalog source.

    Lifecycle is ``unloaded -> loaded``. Loading happens at most once, under
    a lock, and the flow tuple is only published once fully built, so
    concurrent first access never observes a partial catalog.
    """

    def __init__(self, source: CatalogSource) -> None:
        self._source = source
        self._flows: tuple[Flow, ...] | None = None
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._flows is not None

    def all_flows(self) -> tuple[Flow, ...]:
        """
        Return every flow in catalog order.

        Returns
        -------
        tuple[Flow, ...]
            Flows with derived keys and labels, in the order the source
            listed them. Records without a usable id are skipped with a
            warning.
        """
        flows = self._flows
        if flows is not None:
            return flows
        with self._lock:
            if self._flows is None:
                loaded = tuple(self._build(self._source()))
                logger.info(f"Loaded flow catalog ({len(loaded)} flows)")
                self._flows = loaded
            return self._flows

    @staticmethod
    def _build(records: Iterable[Mapping[str, Any]]) -> Iterator[Flow]:
        for record in records:
            try:
                yield Flow.from_record(record)
            except CatalogError as exc:
                logger.warning(f"Skipping catalog record: {exc}")

    def __iter__(self) -> Iterator[Flow]:
        return iter(self.all_flows())

    def __len__(self) -> int:
        return len(self.all_flows())

    # --- derived groupings (order-preserving) --------------------------------

    def of_kind(self, kind: FlowKind) -> list[Flow]:
        return [f for f in self.all_flows() if f.kind is kind]

    def personal_flows(self) -> list[Flow]:
        return self.of_kind(FlowKind.PERSONAL)

    def official_flows(self) -> list[Flow]:
        return self.of_kind(FlowKind.OFFICIAL)

    def provider_groups(self) -> dict[str, list[Flow]]:
        """Third-party provider key -> flows (official flows excluded)."""
        groups: dict[str, list[Flow]] = {}
        for f in self.of_kind(FlowKind.PROVIDER):
            if f.provider_key is not None:
                groups.setdefault(f.provider_key, []).append(f)
        return groups

    def team_groups(self) -> dict[str, list[Flow]]:
        """Team key -> flows."""
        groups: dict[str, list[Flow]] = {}
        for f in self.of_kind(FlowKind.TEAM):
            if f.team_key is not None:
                groups.setdefault(f.team_key, []).append(f)
        return groups
