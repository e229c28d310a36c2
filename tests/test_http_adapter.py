"""
HTTP transport tests against httpx.MockTransport (no network).
"""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from datacube.sdk.adapters.http_adapter import AsyncHTTPTransport, HTTPTransport
from datacube.sdk.client import DataCubeClient
from datacube.sdk.config import ClientConfig
from datacube.sdk.errors import TransportError

_CONFIG = ClientConfig(api_key="sdc_test", base_url="https://api.example.test/v1/")


def _recording_handler(
    seen: list[httpx.Request], status: int = 200, body: object = None
):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if body is None:
            return httpx.Response(status, json={"ok": True})
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    return handler


def test_execute_posts_payload_with_headers() -> None:
    seen: list[httpx.Request] = []
    mount = httpx.MockTransport(_recording_handler(seen))
    with HTTPTransport(_CONFIG, mount=mount) as t:
        result = t.execute({"flow_id": "f-1", "inputs": {"cpf": "1"}})

    assert result == {"ok": True}
    (req,) = seen
    assert req.method == "POST"
    assert str(req.url) == "https://api.example.test/v1/execute"
    assert req.headers["X-Api-Key"] == "sdc_test"
    assert req.headers["Content-Type"] == "application/json"
    assert req.headers["User-Agent"] == "DataCube-SDK (Python)"
    assert json.loads(req.content) == {"flow_id": "f-1", "inputs": {"cpf": "1"}}


@pytest.mark.parametrize(
    ("method", "args", "path"),
    [
        ("status", (), "/v1/status"),
        ("usage", (), "/v1/usage"),
        ("me", (), "/v1/me"),
        ("execution_status", ("ex-9",), "/v1/execute/ex-9"),
    ],
)
def test_native_endpoints_use_get(
    method: str, args: tuple[str, ...], path: str
) -> None:
    seen: list[httpx.Request] = []
    t = HTTPTransport(_CONFIG, mount=httpx.MockTransport(_recording_handler(seen)))

    assert getattr(t, method)(*args) == {"ok": True}
    assert seen[0].method == "GET"
    assert seen[0].url.path == path
    t.close()


def test_non_success_raises_transport_error_with_status_and_body() -> None:
    seen: list[httpx.Request] = []
    handler = _recording_handler(seen, status=422, body="invalid inputs")
    t = HTTPTransport(_CONFIG, mount=httpx.MockTransport(handler))

    with pytest.raises(TransportError) as err:
        t.execute({"flow_id": "f-1", "inputs": {}})

    assert err.value.status_code == 422
    assert err.value.body == "invalid inputs"
    assert len(seen) == 1  # no retry


def test_empty_body_decodes_to_none() -> None:
    t = HTTPTransport(
        _CONFIG, mount=httpx.MockTransport(lambda r: httpx.Response(204))
    )
    assert t.status() is None


def test_client_end_to_end_over_mock_transport() -> None:
    seen: list[httpx.Request] = []
    transport = HTTPTransport(
        _CONFIG, mount=httpx.MockTransport(_recording_handler(seen))
    )
    client = DataCubeClient(transport=transport)

    client.consultasdeveiculos.consultaCnhParanaCompleta({"cpf": "1"})

    body = json.loads(seen[0].content)
    assert body == {
        "flow_id": "consulta-cnh-paran-completa-1764938995458-45nr1u",
        "inputs": {"cpf": "1"},
    }
    client.close()


def test_async_transport_execute() -> None:
    seen: list[httpx.Request] = []

    async def scenario() -> object:
        async with AsyncHTTPTransport(
            _CONFIG, mount=httpx.MockTransport(_recording_handler(seen))
        ) as t:
            return await t.execute({"flow_id": "f-1", "inputs": {}})

    assert asyncio.run(scenario()) == {"ok": True}
    assert seen[0].url.path == "/v1/execute"


def test_async_transport_error() -> None:
    handler = _recording_handler([], status=500, body="boom")

    async def scenario() -> None:
        async with AsyncHTTPTransport(
            _CONFIG, mount=httpx.MockTransport(handler)
        ) as t:
            await t.me()

    with pytest.raises(TransportError) as err:
        asyncio.run(scenario())
    assert err.value.status_code == 500
