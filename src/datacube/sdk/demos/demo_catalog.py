"""
Demo flow catalog for datacube-sdk.

A small static catalog with one flow of each kind (official, provider, team,
personal). It stands in for the remote flow directory in examples, the CLI
default, and smoke tests.
"""

from __future__ import annotations

from datacube.sdk.types import RawFlowRecord

__all__ = ["demo_flows"]

_DEMO_FLOWS: tuple[RawFlowRecord, ...] = (
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
        "id": "consulta-cnh-ceara-completa-1764938995458-45nr1u",
        "name": "Consulta Cnh Ceará Completa",
        "provider_name": "Consultas de Veículos",
    },
    {
        "id": "teste-meu-1765010906589-46sxz2",
        "name": "teste Meu",
        "provider_name": None,
    },
    {
        "id": "aaa-meu-1765010906589-46sxz2",
        "name": "teste AAA",
        "provider_name": None,
    },
    {
        "id": "teste-1765010906589-46sxz2",
        "name": "Teste",
        "team_name": "Team Foiiii",
    },
)


def demo_flows() -> list[RawFlowRecord]:
    """Return a fresh list of the demo records (catalog source)."""
    return [dict(r) for r in _DEMO_FLOWS]  # type: ignore[misc]
