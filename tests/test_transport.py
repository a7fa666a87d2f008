"""
Tests for HttpxTransport using pytest-httpx.

Test plan:
- POSTs JSON body to the URL and returns the parsed response
- Non-2xx status raises httpx.HTTPStatusError
- Connection errors propagate
- A body that is not a JSON object raises ValueError
- End to end through JsonRpcClient
"""

import json

import httpx
import pytest
from pytest_httpx import HTTPXMock

from xapay.jsonrpc_client import JsonRpcClient
from xapay.transport import HttpxTransport, JsonRpcTransport

URL = "https://rpc.xahau.test/"


class TestHttpxTransport:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(HttpxTransport(), JsonRpcTransport)

    @pytest.mark.asyncio
    async def test_posts_json(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=URL, json={"result": {"status": "success"}})
        response = await HttpxTransport().post_json(URL, {"method": "server_info"})
        assert response == {"result": {"status": "success"}}

        request = httpx_mock.get_request()
        assert request is not None
        assert json.loads(request.content) == {"method": "server_info"}
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_http_error_raises(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=URL, status_code=503)
        with pytest.raises(httpx.HTTPStatusError):
            await HttpxTransport().post_json(URL, {"method": "server_info"})

    @pytest.mark.asyncio
    async def test_connect_error_raises(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))
        with pytest.raises(httpx.ConnectError):
            await HttpxTransport().post_json(URL, {"method": "server_info"})

    @pytest.mark.asyncio
    async def test_through_client(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            method="POST",
            url=URL,
            json={
                "result": {
                    "status": "success",
                    "engine_result": "tesSUCCESS",
                    "accepted": True,
                    "tx_json": {"hash": "F" * 64},
                }
            },
        )
        result = await JsonRpcClient(URL).submit("DEADBEEF")
        assert result.accepted is True
        assert result.tx_hash == "F" * 64

    @pytest.mark.asyncio
    async def test_non_object_body_raises(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=URL, json=["not", "an", "object"])
        with pytest.raises(ValueError, match="JSON object"):
            await HttpxTransport().post_json(URL, {"method": "server_info"})
