"""
Request composition and response decoding for the stream server endpoints.

Both the blocking and the asyncio client build their requests here, so the
wire format lives in one place and the clients only differ in how they send.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from pydantic import ValidationError

from .constants import ContentType, ErrorMessage, Header, HTTPMethod
from .dto import StreamCreatedDTO, StreamRejectedDTO, StreamResultDTO, StreamSpec
from .errors import PhantDecodeError, PhantDomainError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhantRequest:
    """A single HTTP exchange to perform against the stream server"""
    method: HTTPMethod
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None


def input_url(hostname: str, public_key: str) -> str:
    return f"{hostname}/input/{public_key}"


def push_request(hostname: str, public_key: str, private_key: str, query_string: str) -> PhantRequest:
    return PhantRequest(
        method=HTTPMethod.POST,
        url=input_url(hostname, public_key),
        headers={
            Header.PRIVATE_KEY.value: private_key,
            Header.CONTENT_TYPE.value: ContentType.FORM.value,
        },
        body=query_string.encode('utf-8'),
    )


def clear_request(hostname: str, public_key: str, private_key: str) -> PhantRequest:
    return PhantRequest(
        method=HTTPMethod.DELETE,
        url=input_url(hostname, public_key),
        headers={Header.PRIVATE_KEY.value: private_key},
    )


def delete_stream_request(hostname: str, public_key: str, delete_key: str) -> PhantRequest:
    return PhantRequest(
        method=HTTPMethod.DELETE,
        url=input_url(hostname, public_key),
        headers={Header.DELETE_KEY.value: delete_key},
    )


def create_stream_request(hostname: str, spec: StreamSpec) -> PhantRequest:
    return PhantRequest(
        method=HTTPMethod.POST,
        url=f"{hostname}/streams",
        headers={
            Header.CONTENT_TYPE.value: ContentType.JSON.value,
            Header.ACCEPT.value: ContentType.JSON.value,
        },
        body=json.dumps(spec.to_payload()).encode('utf-8'),
    )


def decode_text(body: bytes) -> str:
    """Decode a response body as UTF-8 text"""
    try:
        return body.decode('utf-8')
    except UnicodeDecodeError as e:
        raise PhantDecodeError(f"Response body is not valid UTF-8: {e}") from e


def decode_stream_created(body: bytes) -> StreamCreatedDTO:
    """
    Decode the JSON answer of the /streams endpoint

    Returns:
        StreamCreatedDTO carrying the issued keys

    Raises:
        PhantDomainError: if the server reports success false
        PhantDecodeError: if the body is not JSON of the expected shape
    """
    text = decode_text(body)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PhantDecodeError(f"Response body is not valid JSON: {e}") from e

    try:
        if not StreamResultDTO.model_validate(data).success:
            rejected = StreamRejectedDTO.model_validate(data)
            logger.debug(f"Stream creation rejected: {rejected.message}")
            raise PhantDomainError(rejected.message)
        return StreamCreatedDTO.model_validate(data)
    except ValidationError as e:
        raise PhantDecodeError(f"{ErrorMessage.UNEXPECTED_RESPONSE.value}: {e}") from e
