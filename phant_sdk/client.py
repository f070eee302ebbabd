import logging
from typing import Any, Dict, Optional

from . import endpoints
from .constants import ErrorMessage
from .dto import StreamSpec
from .encoding import percent_encode
from .endpoints import PhantRequest
from .errors import PhantDomainError, PhantError
from .transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)

class StreamClientBase:
    """
    Identity of a stream plus the row of data waiting to be pushed.

    Holds everything the blocking and asyncio clients have in common: the
    keys, the local row and the requests built from them. Sending is left
    to the subclasses.
    """

    def __init__(self, hostname: str, public_key: str, private_key: str, delete_key: Optional[str] = None):
        """
        Args:
            hostname: Base URL of the server, scheme included (e.g. https://data.sparkfun.com)
            public_key: Public identifier of the stream
            private_key: Key authorizing pushes and clears
            delete_key: Key authorizing stream deletion, only known for streams we created
        """
        self._hostname = hostname
        self._public_key = public_key
        self._private_key = private_key
        self._delete_key = delete_key
        self._data: Dict[str, str] = {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(hostname={self._hostname!r}, public_key={self._public_key!r}, fields={len(self._data)})"

    @property
    def hostname(self) -> str:
        return self._hostname

    @property
    def public_key(self) -> str:
        return self._public_key

    @property
    def private_key(self) -> str:
        return self._private_key

    @property
    def delete_key(self) -> Optional[str]:
        return self._delete_key

    def add(self, key: str, value: Any):
        """
        Add a column value to the current row. Adding the same column twice
        keeps the latest value. Server data is not touched.
        """
        self._data[str(key)] = str(value)

    def row_data(self) -> Dict[str, str]:
        """Return a copy of the current row, changes to it do not affect the client"""
        return dict(self._data)

    def clear_local(self):
        """Drop every value added since creation or the last clear"""
        self._data.clear()

    def data_query_string(self) -> str:
        """Render the current row as an encoded key=value&key=value string"""
        return percent_encode('&'.join(f"{key}={value}" for key, value in self._data.items()))

    def get_url(self) -> str:
        """
        URL that adds the current row when opened in a browser.
        The local row is kept, unlike push().
        """
        return f"{self._hostname}/input/{self._public_key}?private_key={self._private_key}&{self.data_query_string()}"

    def _push_request(self) -> PhantRequest:
        return endpoints.push_request(self._hostname, self._public_key, self._private_key, self.data_query_string())

    def _clear_request(self) -> PhantRequest:
        return endpoints.clear_request(self._hostname, self._public_key, self._private_key)

    def _delete_stream_request(self) -> PhantRequest:
        if self._delete_key is None:
            raise PhantDomainError(ErrorMessage.DELETE_KEY_MISSING.value)
        return endpoints.delete_stream_request(self._hostname, self._public_key, self._delete_key)


class Phant(StreamClientBase):
    """
    Blocking client for a single stream on a phant server

    Example:
        phant = Phant("https://data.sparkfun.com", "public_key", "private_key")
        phant.add("brewTemp", 21.5)
        phant.push()
    """

    def __init__(
        self,
        hostname: str,
        public_key: str,
        private_key: str,
        delete_key: Optional[str] = None,
        transport: Optional[Transport] = None
    ):
        super().__init__(hostname, public_key, private_key, delete_key)
        # Only a transport we created ourselves is closed by close()
        self._owns_transport = transport is None
        self._transport = transport or RequestsTransport()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the HTTP session if this client opened it"""
        if self._owns_transport:
            self._transport.close()

    @classmethod
    def from_config(cls, config, transport: Optional[Transport] = None) -> 'Phant':
        """Build a client from a PhantConfig"""
        stream = config.stream
        client = cls(
            stream.hostname,
            stream.public_key,
            stream.private_key,
            stream.delete_key,
            transport=transport or RequestsTransport(timeout=config.transport.timeout)
        )
        client._owns_transport = transport is None
        return client

    @classmethod
    def create_stream(cls, hostname: str, spec: StreamSpec, transport: Optional[Transport] = None) -> 'Phant':
        """
        Create a brand new stream on the server

        Returns:
            Phant holding the issued public, private and delete keys

        Raises:
            PhantDomainError: the server refused to create the stream
            PhantDecodeError: the server answer could not be understood
        """
        owns_transport = transport is None
        transport = transport or RequestsTransport()
        try:
            body = cls._send_with(transport, endpoints.create_stream_request(hostname, spec))
            created = endpoints.decode_stream_created(body)
        except PhantError:
            if owns_transport:
                transport.close()
            raise
        logger.info(f"Created stream {created.public_key} on {hostname}")
        client = cls(hostname, created.public_key, created.private_key, created.delete_key, transport=transport)
        client._owns_transport = owns_transport
        return client

    @staticmethod
    def _send_with(transport: Transport, request: PhantRequest) -> bytes:
        return transport.send(request.method.value, request.url, dict(request.headers), request.body)

    def _send(self, request: PhantRequest) -> bytes:
        return self._send_with(self._transport, request)

    def push(self) -> str:
        """
        Push the current row to the server, then clear it locally so add()
        can start the next row. The row is kept if the push fails.

        Returns:
            The server response body
        """
        body = self._send(self._push_request())
        response = endpoints.decode_text(body)
        self.clear_local()
        return response

    def clear_server(self) -> str:
        """Delete all rows stored on the server for this stream"""
        return endpoints.decode_text(self._send(self._clear_request()))

    def delete_stream(self):
        """
        Delete the stream itself from the server

        Raises:
            PhantDomainError: if this client holds no delete key
        """
        self._send(self._delete_stream_request())
        logger.info(f"Deleted stream {self._public_key}")
