"""
Failure types raised by the phant SDK.

Every failure derives from PhantError, so callers can catch the whole family
at once, or match a single kind either by subclass or by the ``kind`` attribute.
The underlying library exception, where there is one, is chained as __cause__.
"""

from typing import Optional

from .constants import ErrorKind


class PhantError(Exception):
    """Base class for every failure surfaced by the SDK"""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PhantTransportError(PhantError):
    """Connection, TLS, timeout or request-construction failure"""

    kind = ErrorKind.TRANSPORT


class PhantIOError(PhantError):
    """Failure while reading a response body"""

    kind = ErrorKind.IO


class PhantDecodeError(PhantError):
    """Response body was not the text or JSON we expected"""

    kind = ErrorKind.DECODE


class PhantDomainError(PhantError):
    """Failure reported by the stream server or detected by the SDK itself"""

    kind = ErrorKind.DOMAIN
