from enum import Enum

DEFAULT_HOSTNAME = "https://data.sparkfun.com"

class HTTPMethod(str, Enum):
    POST = "POST"
    DELETE = "DELETE"

class Header(str, Enum):
    PRIVATE_KEY = "Phant-Private-Key"
    DELETE_KEY = "Phant-Delete-Key"
    CONTENT_TYPE = "Content-Type"
    ACCEPT = "Accept"

class ContentType(str, Enum):
    FORM = "application/x-www-form-urlencoded"
    JSON = "application/json"

class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    IO = "io"
    DECODE = "decode"
    DOMAIN = "domain"

class ErrorMessage(str, Enum):
    DELETE_KEY_MISSING = "Delete key not provided"
    UNEXPECTED_RESPONSE = "Unexpected response from stream server"
