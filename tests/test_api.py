from __future__ import annotations

import asyncio
from typing import Any

import pytest

from datacube.sdk.api import build_call, invoke
from datacube.sdk.errors import TransportError
from datacube.sdk.spec import Flow
from datacube.sdk.types import ExecutePayload


class FakeExecute:
    def __init__(self) -> None:
        self.payloads: list[ExecutePayload] = []

    def __call__(self, payload: ExecutePayload) -> dict[str, Any]:
        self.payloads.append(payload)
        return {"ok": True}


_FLOW = Flow(id="teste-meu-123", display_name="teste Meu")


def test_build_call_normalises_none_inputs() -> None:
    call = build_call(_FLOW)
    assert call.flow_id == "teste-meu-123"
    assert call.inputs == {}
    assert call.version is None


def test_invoke_without_version_omits_version_key() -> None:
    execute = FakeExecute()

    result = invoke(execute, _FLOW, inputs={}, version=None)

    assert result == {"ok": True}
    assert execute.payloads == [{"flow_id": "teste-meu-123", "inputs": {}}]
    assert "version" not in execute.payloads[0]


def test_invoke_forwards_inputs_and_version() -> None:
    execute = FakeExecute()

    invoke(execute, _FLOW, inputs={"cpf": "123"}, version="2")

    assert execute.payloads == [
        {"flow_id": "teste-meu-123", "inputs": {"cpf": "123"}, "version": "2"}
    ]


def test_invoke_propagates_transport_errors_unchanged() -> None:
    original = TransportError(500, "boom")

    def failing(payload: ExecutePayload) -> Any:
        raise original

    with pytest.raises(TransportError) as err:
        invoke(failing, _FLOW)
    assert err.value is original


def test_invoke_returns_awaitable_from_async_execute() -> None:
    seen: list[ExecutePayload] = []

    async def execute(payload: ExecutePayload) -> str:
        seen.append(payload)
        return "done"

    pending = invoke(execute, _FLOW, {"cpf": "1"})
    assert asyncio.run(pending) == "done"
    assert seen == [{"flow_id": "teste-meu-123", "inputs": {"cpf": "1"}}]
