# pyright: reportUnusedFunction=false

from __future__ import annotations

from typing import Any

import pytest

from datacube.sdk.client import DataCubeClient
from datacube.sdk.registry import FlowCatalog
from datacube.sdk.types import ExecutePayload


class RecordingTransport:
    """Transport double: records every payload and answers with a canned result."""

    def __init__(self) -> None:
        self.payloads: list[ExecutePayload] = []
        self.calls: list[str] = []
        self.closed = False

    def execute(self, payload: ExecutePayload) -> dict[str, Any]:
        self.calls.append("execute")
        self.payloads.append(payload)
        return {"ok": True, "flow_id": payload["flow_id"]}

    def execution_status(self, execution_id: str) -> dict[str, Any]:
        self.calls.append(f"execution_status:{execution_id}")
        return {"id": execution_id, "status": "done"}

    def status(self) -> dict[str, Any]:
        self.calls.append("status")
        return {"status": "ok"}

    def usage(self) -> dict[str, Any]:
        self.calls.append("usage")
        return {"credits": 10}

    def me(self) -> dict[str, Any]:
        self.calls.append("me")
        return {"user": "tester"}

    def close(self) -> None:
        self.closed = True


SAMPLE_FLOWS: list[dict[str, Any]] = [
    {
        "id": "consulta-cnh-completa-1764938995458-45nr1u",
        "name": "Consulta Cnh Completa",
        "provider_name": "DataCube",
    },
    {
        "id": "consulta-cnh-paran-completa-1764938995458-45nr1u",
        "name": "Consulta Cnh Paraná Completa",
        "provider_name": "Consultas de Veículos",
    },
    {
        "id": "teste-meu-1765010906589-46sxz2",
        "name": "teste Meu",
        "provider_name": None,
    },
    {"id": "a-2024", "name": "Duplicado", "provider_name": None},
    {"id": "a-2025", "name": "Duplicado", "provider_name": None},
    {
        "id": "teste-1765010906589-46sxz2",
        "name": "Teste",
        "team_name": "Team Foiiii",
    },
]


@pytest.fixture
def sample_flows() -> list[dict[str, Any]]:
    return [dict(r) for r in SAMPLE_FLOWS]


@pytest.fixture
def catalog(sample_flows: list[dict[str, Any]]) -> FlowCatalog:
    return FlowCatalog(lambda: sample_flows)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def client(
    transport: RecordingTransport, sample_flows: list[dict[str, Any]]
) -> DataCubeClient:
    return DataCubeClient(transport=transport, catalog_source=lambda: sample_flows)
