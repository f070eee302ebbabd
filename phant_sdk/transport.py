"""
HTTP transports for talking to the stream server.

A transport performs exactly one request per call and hands back the raw
response body. It never retries and never looks at the status code beyond
logging it; interpreting the body is the client's job.
"""

import asyncio
import logging
from typing import Dict, Optional, Protocol

import aiohttp
import requests

from .errors import PhantIOError, PhantTransportError

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Blocking transport used by Phant"""

    def send(self, method: str, url: str, headers: Dict[str, str], body: Optional[bytes] = None) -> bytes:
        ...


class AsyncTransport(Protocol):
    """Awaitable transport used by AsyncPhant"""

    async def send(self, method: str, url: str, headers: Dict[str, str], body: Optional[bytes] = None) -> bytes:
        ...


def _log_status(method: str, url: str, status: int):
    if 200 <= status < 300:
        logger.debug(f"{method} {url} -> HTTP {status}")
    else:
        logger.warning(f"{method} {url} returned HTTP {status}")


class RequestsTransport:
    """Transport backed by a requests.Session"""

    def __init__(self, timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        """
        Initialize the transport

        Args:
            timeout: Seconds to wait for the server, None to use the requests default
            session: Session to reuse, a new one is created when omitted
        """
        self.timeout = timeout
        self._session = session or requests.Session()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the underlying session"""
        self._session.close()

    def send(self, method: str, url: str, headers: Dict[str, str], body: Optional[bytes] = None) -> bytes:
        logger.debug(f"Sending {method} {url}")
        try:
            response = self._session.request(
                method,
                url,
                headers=headers,
                data=body,
                timeout=self.timeout,
                stream=True
            )
        except requests.RequestException as e:
            raise PhantTransportError(f"{method} {url} failed: {e}") from e

        with response:
            try:
                payload = response.content
            except requests.RequestException as e:
                raise PhantIOError(f"Failed to read response from {url}: {e}") from e

        _log_status(method, url, response.status_code)
        return payload


class AiohttpTransport:
    """Transport backed by an aiohttp.ClientSession"""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        """Support async context manager pattern"""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Clean up resources when used as context manager"""
        await self.close()

    async def connect(self):
        """Create the HTTP session"""
        if self._session is None or self._session.closed:
            if self.timeout is None:
                self._session = aiohttp.ClientSession()
            else:
                self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
            logger.debug("AiohttpTransport connected")

    async def close(self):
        """Close the HTTP session"""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    def _ensure_session(self):
        """Ensure we have an active session"""
        if self._session is None or self._session.closed:
            raise RuntimeError("No active session. Use 'async with AiohttpTransport()' or await connect()")

    async def send(self, method: str, url: str, headers: Dict[str, str], body: Optional[bytes] = None) -> bytes:
        self._ensure_session()
        logger.debug(f"Sending {method} {url}")
        try:
            async with self._session.request(method, url, headers=headers, data=body) as response:
                try:
                    payload = await response.read()
                except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                    raise PhantIOError(f"Failed to read response from {url}: {e}") from e
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise PhantTransportError(f"{method} {url} failed: {e}") from e

        _log_status(method, url, status)
        return payload
