from urllib.parse import quote

# Printable ASCII left as-is. Only controls, non-ASCII, space and " # < > ` ? { }
# are escaped, so the = and & separators of a row survive.
QUERY_SAFE_CHARS = "!$%&'()*+,-./:;=@[\\]^_|~"


def percent_encode(value: str) -> str:
    """Percent-encode a query string with uppercase hex escapes"""
    return quote(value, safe=QUERY_SAFE_CHARS, encoding="utf-8")
