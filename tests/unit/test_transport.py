from __future__ import annotations

import asyncio
import logging
from unittest.mock import MagicMock, PropertyMock

import aiohttp
import pytest
import requests

from phant_sdk import AiohttpTransport, PhantIOError, PhantTransportError, RequestsTransport


def _response(status_code=200, content=b"ok"):
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


def test_requests_transport_sends_request():
    session = MagicMock()
    session.request.return_value = _response(content=b"1 success")
    transport = RequestsTransport(timeout=5, session=session)

    body = transport.send("POST", "https://data.com/input/pub", {"Phant-Private-Key": "priv"}, b"color=red")

    assert body == b"1 success"
    session.request.assert_called_once_with(
        "POST",
        "https://data.com/input/pub",
        headers={"Phant-Private-Key": "priv"},
        data=b"color=red",
        timeout=5,
        stream=True
    )


def test_requests_transport_wraps_connection_errors():
    session = MagicMock()
    cause = requests.ConnectionError("refused")
    session.request.side_effect = cause
    transport = RequestsTransport(session=session)

    with pytest.raises(PhantTransportError) as exc_info:
        transport.send("DELETE", "https://data.com/input/pub", {})

    assert exc_info.value.__cause__ is cause


def test_requests_transport_wraps_invalid_urls():
    transport = RequestsTransport()
    with pytest.raises(PhantTransportError):
        transport.send("POST", "data.com/input/pub", {}, b"")


def test_requests_transport_wraps_body_read_errors():
    session = MagicMock()
    response = _response()
    type(response).content = PropertyMock(side_effect=requests.exceptions.ChunkedEncodingError("truncated"))
    session.request.return_value = response
    transport = RequestsTransport(session=session)

    with pytest.raises(PhantIOError):
        transport.send("POST", "https://data.com/input/pub", {}, b"")


def test_requests_transport_returns_body_on_error_status(caplog):
    session = MagicMock()
    session.request.return_value = _response(status_code=400, content=b"0 no such field")
    transport = RequestsTransport(session=session)

    with caplog.at_level(logging.WARNING, logger="phant_sdk.transport"):
        body = transport.send("POST", "https://data.com/input/pub", {}, b"")

    assert body == b"0 no such field"
    assert "HTTP 400" in caplog.text


def test_requests_transport_closes_session():
    session = MagicMock()
    with RequestsTransport(session=session):
        pass
    session.close.assert_called_once()


def test_aiohttp_transport_requires_session():
    transport = AiohttpTransport()
    with pytest.raises(RuntimeError):
        asyncio.run(transport.send("POST", "https://data.com/input/pub", {}, b""))


def test_aiohttp_transport_connect_and_close():
    async def scenario():
        async with AiohttpTransport(timeout=2) as transport:
            assert transport._session is not None
            assert not transport._session.closed
        return transport

    transport = asyncio.run(scenario())
    assert transport._session is None


class _FakeAiohttpResponse:
    def __init__(self, status=200, body=b"ok", read_error=None):
        self.status = status
        self._body = body
        self._read_error = read_error

    async def read(self):
        if self._read_error is not None:
            raise self._read_error
        return self._body


class _FakeRequestContext:
    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error

    async def __aenter__(self):
        if self._error is not None:
            raise self._error
        return self._response

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class _FakeAiohttpSession:
    closed = False

    def __init__(self, context):
        self.context = context
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        return self.context

    async def close(self):
        self.closed = True


def _aiohttp_transport(context) -> AiohttpTransport:
    transport = AiohttpTransport()
    transport._session = _FakeAiohttpSession(context)
    return transport


def test_aiohttp_transport_sends_request():
    transport = _aiohttp_transport(_FakeRequestContext(_FakeAiohttpResponse(body=b"1 success")))

    body = asyncio.run(transport.send("POST", "https://data.com/input/pub", {"Phant-Private-Key": "priv"}, b"a=1"))

    assert body == b"1 success"
    assert transport._session.calls == [(
        "POST",
        "https://data.com/input/pub",
        {"headers": {"Phant-Private-Key": "priv"}, "data": b"a=1"},
    )]


@pytest.mark.parametrize("error", [
    aiohttp.ClientConnectionError("refused"),
    asyncio.TimeoutError(),
])
def test_aiohttp_transport_wraps_request_errors(error):
    transport = _aiohttp_transport(_FakeRequestContext(error=error))

    with pytest.raises(PhantTransportError) as exc_info:
        asyncio.run(transport.send("DELETE", "https://data.com/input/pub", {}))

    assert exc_info.value.__cause__ is error


def test_aiohttp_transport_wraps_body_read_errors():
    cause = aiohttp.ClientPayloadError("truncated body")
    transport = _aiohttp_transport(_FakeRequestContext(_FakeAiohttpResponse(read_error=cause)))

    with pytest.raises(PhantIOError) as exc_info:
        asyncio.run(transport.send("POST", "https://data.com/input/pub", {}, b""))

    assert exc_info.value.__cause__ is cause


def test_aiohttp_transport_returns_body_on_error_status(caplog):
    transport = _aiohttp_transport(_FakeRequestContext(_FakeAiohttpResponse(status=500, body=b"oops")))

    with caplog.at_level(logging.WARNING, logger="phant_sdk.transport"):
        body = asyncio.run(transport.send("POST", "https://data.com/input/pub", {}, b""))

    assert body == b"oops"
    assert "HTTP 500" in caplog.text


def test_aiohttp_transport_connection_refused():
    async def scenario():
        async with AiohttpTransport(timeout=2) as transport:
            await transport.send("POST", "http://127.0.0.1:1/input/pub", {}, b"a=1")

    with pytest.raises(PhantTransportError) as exc_info:
        asyncio.run(scenario())

    assert isinstance(exc_info.value.__cause__, aiohttp.ClientError)
