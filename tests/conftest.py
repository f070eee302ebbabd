# Shared pytest fixtures
from __future__ import annotations

import json

import pytest

from phant_sdk import Phant


class RecordingTransport:
    """Transport double that records every request and replays canned bodies."""

    def __init__(self, responses=None, error: Exception | None = None):
        self.calls = []
        self.responses = list(responses or [])
        self.error = error

    def send(self, method, url, headers, body=None):
        self.calls.append({"method": method, "url": url, "headers": headers, "body": body})
        if self.error is not None:
            raise self.error
        return self.responses.pop(0) if self.responses else b""


class RecordingAsyncTransport(RecordingTransport):
    async def send(self, method, url, headers, body=None):
        return RecordingTransport.send(self, method, url, headers, body)


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport(responses=[b"1 success\n"])


@pytest.fixture()
def basic_phant(transport: RecordingTransport) -> Phant:
    p = Phant("https://data.com", "pub", "priv", transport=transport)
    p.add("color", "red")
    return p


@pytest.fixture()
def created_body() -> bytes:
    return json.dumps({
        "success": True,
        "publicKey": "newpub",
        "privateKey": "newpriv",
        "deleteKey": "newdel",
    }).encode("utf-8")
