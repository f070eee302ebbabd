"""
Phant SDK for pushing rows of data to a phant stream server.
This package provides a clean interface for collecting a row locally,
pushing it, clearing server data and creating or deleting streams.
"""

from .async_client import AsyncPhant
from .client import Phant
from .config import PhantConfig
from .constants import ErrorKind
from .dto import StreamSpec
from .errors import PhantDecodeError, PhantDomainError, PhantError, PhantIOError, PhantTransportError
from .logger import configure_logging, reset_logging
from .transport import AiohttpTransport, AsyncTransport, RequestsTransport, Transport

__all__ = [
    'AiohttpTransport',
    'AsyncPhant',
    'AsyncTransport',
    'ErrorKind',
    'Phant',
    'PhantConfig',
    'PhantDecodeError',
    'PhantDomainError',
    'PhantError',
    'PhantIOError',
    'PhantTransportError',
    'RequestsTransport',
    'StreamSpec',
    'Transport',
    'configure_logging',
    'reset_logging',
]
