"""
Asyncio flavour of the stream client.

Same row handling, requests and failures as Phant; each remote operation
is a single awaited exchange over an AsyncTransport.
"""

import logging
from typing import Optional

from . import endpoints
from .client import StreamClientBase
from .dto import StreamSpec
from .endpoints import PhantRequest
from .transport import AiohttpTransport, AsyncTransport

logger = logging.getLogger(__name__)

class AsyncPhant(StreamClientBase):
    """
    Asyncio client for a single stream

    Example:
        async with AsyncPhant("https://data.sparkfun.com", "public_key", "private_key") as phant:
            phant.add("brewTemp", 21.5)
            await phant.push()
    """

    def __init__(
        self,
        hostname: str,
        public_key: str,
        private_key: str,
        delete_key: Optional[str] = None,
        transport: Optional[AsyncTransport] = None
    ):
        super().__init__(hostname, public_key, private_key, delete_key)
        # A transport we created is opened on first use and closed by close()
        self._owns_transport = transport is None
        self._transport = transport or AiohttpTransport()

    async def __aenter__(self):
        """Support async context manager pattern"""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Close the session this client opened"""
        await self.close()

    async def connect(self):
        """Open the HTTP session when this client owns the transport"""
        if self._owns_transport:
            await self._transport.connect()

    async def close(self):
        """Close the HTTP session when this client owns the transport"""
        if self._owns_transport:
            await self._transport.close()

    @property
    def transport(self) -> AsyncTransport:
        return self._transport

    @classmethod
    async def create_stream(
        cls,
        hostname: str,
        spec: StreamSpec,
        transport: AsyncTransport
    ) -> 'AsyncPhant':
        """Create a new stream on the server and return a client holding its keys"""
        request = endpoints.create_stream_request(hostname, spec)
        body = await transport.send(request.method.value, request.url, dict(request.headers), request.body)
        created = endpoints.decode_stream_created(body)
        logger.info(f"Created stream {created.public_key} on {hostname}")
        return cls(hostname, created.public_key, created.private_key, created.delete_key, transport=transport)

    async def _send(self, request: PhantRequest) -> bytes:
        await self.connect()
        return await self._transport.send(request.method.value, request.url, dict(request.headers), request.body)

    async def push(self) -> str:
        """Push the current row, clearing it locally only once the server answered"""
        body = await self._send(self._push_request())
        response = endpoints.decode_text(body)
        self.clear_local()
        return response

    async def clear_server(self) -> str:
        """Delete all rows stored on the server for this stream"""
        return endpoints.decode_text(await self._send(self._clear_request()))

    async def delete_stream(self):
        """Delete the stream itself, requires a delete key"""
        await self._send(self._delete_stream_request())
        logger.info(f"Deleted stream {self._public_key}")
