from __future__ import annotations

import pytest

from datacube.sdk.errors import (
    CatalogError,
    FlowNotFoundError,
    FlowNotFoundUnderScopeError,
)
from datacube.sdk.spec import (
    Flow,
    FlowKind,
    Found,
    NotFound,
    NotFoundUnderScope,
    ResolvedCall,
)


def test_flow_derives_keys_and_label():
    flow = Flow(
        id="consulta-cnh-paran-completa-1",
        display_name="Consulta Cnh Paraná Completa",
        provider_name="Consultas de Veículos",
    )

    assert flow.provider_key == "consultasdeveiculos"
    assert flow.team_key is None
    assert flow.label == "consultaCnhParanaCompleta"
    assert flow.kind is FlowKind.PROVIDER
    assert not flow.is_direct


def test_flow_kind_classification():
    official = Flow(id="o", display_name="Oficial", provider_name="DataCube")
    team = Flow(id="t", display_name="Do Time", team_name="Team Foiiii")
    personal = Flow(id="p", display_name="Meu")

    assert official.kind is FlowKind.OFFICIAL
    assert team.kind is FlowKind.TEAM
    assert team.team_key == "teamfoiiii"
    assert personal.kind is FlowKind.PERSONAL
    assert personal.is_direct


def test_flow_is_read_only():
    flow = Flow(id="p", display_name="Meu")
    with pytest.raises(AttributeError):
        flow.label = "other"  # type: ignore[misc]


def test_from_record_accepts_wire_and_camel_case_names():
    wire = Flow.from_record(
        {"id": "x-1", "name": "Fluxo X", "provider_name": None, "team_name": "Ops"}
    )
    camel = Flow.from_record(
        {"id": "x-1", "displayName": "Fluxo X", "teamName": "Ops"}
    )

    assert wire == camel
    assert wire.label == "fluxoX"
    assert wire.kind is FlowKind.TEAM


def test_from_record_degrades_on_empty_name():
    flow = Flow.from_record({"id": "no-name-1", "name": ""})
    assert flow.label == ""
    assert flow.kind is FlowKind.PERSONAL


def test_from_record_treats_blank_provider_as_none():
    flow = Flow.from_record({"id": "p-1", "name": "Meu", "provider_name": ""})
    assert flow.provider_key is None
    assert flow.is_direct


@pytest.mark.parametrize("record", [{"name": "Sem id"}, {"id": "", "name": "x"}])
def test_from_record_requires_id(record: dict[str, str]):
    with pytest.raises(CatalogError):
        Flow.from_record(record)


def test_resolution_outcomes_unwrap():
    flow = Flow(id="p", display_name="Meu")

    assert Found(flow).unwrap() is flow

    with pytest.raises(FlowNotFoundError) as err:
        NotFound("meu").unwrap()
    assert err.value.identifier == "meu"

    with pytest.raises(FlowNotFoundUnderScopeError) as err2:
        NotFoundUnderScope("ghost", "meu").unwrap()
    assert err2.value.scope_name == "ghost"
    assert err2.value.identifier == "meu"
    assert isinstance(err2.value, LookupError)


def test_resolved_call_payload_omits_missing_version():
    call = ResolvedCall(flow_id="f-1")

    assert call.inputs == {}
    assert call.to_payload() == {"flow_id": "f-1", "inputs": {}}
    assert "version" not in call.to_payload()
    assert "version" not in ResolvedCall("f-1", {}, "").to_payload()


def test_resolved_call_payload_with_version():
    call = ResolvedCall(flow_id="f-1", inputs={"cpf": "123"}, version="3")
    assert call.to_payload() == {
        "flow_id": "f-1",
        "inputs": {"cpf": "123"},
        "version": "3",
    }
