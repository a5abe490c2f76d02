import re
from typing import Tuple

import httpx

from sqliprobe.core.errors import ConfigurationError
from sqliprobe.core.models import BodyType, Settings, Target

QUERY_METHODS = {"GET", "DELETE", "OPTIONS"}
BODY_METHODS = {"POST", "PUT", "PATCH"}

# RFC 7230 token
_HEADER_NAME_RX = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def parse_header(raw: str) -> Tuple[str, str]:
    """
    "X-Api-Key: abc" -> ("X-Api-Key", "abc")

    Splits on the first ": " and trims both sides.
    """
    key, sep, value = raw.partition(": ")
    key, value = key.strip(), value.strip()
    if not sep or not _HEADER_NAME_RX.match(key):
        raise ConfigurationError(f"Malformed header: {raw!r}")
    if "\r" in value or "\n" in value:
        raise ConfigurationError(f"Header value contains a line break: {raw!r}")
    if not value.isascii():
        raise ConfigurationError(f"Header value is not ASCII: {raw!r}")
    return key, value


def parse_static_param(raw: str) -> Tuple[str, str]:
    """ "page=1" -> ("page", "1"); the value may contain '='. """
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise ConfigurationError(f"Malformed static parameter: {raw!r}")
    return key, value


def parse_cookie(raw: str) -> str:
    cookie = raw.strip()
    if not cookie.isascii() or "\r" in cookie or "\n" in cookie:
        raise ConfigurationError(f"Malformed cookie: {raw!r}")
    return cookie


def parse_method(raw: str) -> str:
    method = (raw or "").strip().upper()
    if method not in QUERY_METHODS | BODY_METHODS:
        raise ConfigurationError(f"Unsupported method: {raw!r}")
    return method


def parse_url(raw: str) -> str:
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, TypeError) as exc:
        raise ConfigurationError(f"Invalid URL {raw!r}: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(f"Invalid URL {raw!r}: expected http(s)://host/...")
    return str(url)


def build_target(settings: Settings) -> Target:
    """Validate *settings* and freeze them into a Target."""
    if settings.workers < 1:
        raise ConfigurationError("workers must be a positive integer")
    if settings.offset_samples < 0:
        raise ConfigurationError("offset samples must be non-negative")
    if settings.offset < 0:
        raise ConfigurationError("offset must be non-negative")

    return Target(
        url=parse_url(settings.url),
        method=parse_method(settings.method),
        headers=tuple(parse_header(h) for h in settings.headers),
        cookies=tuple(parse_cookie(c) for c in settings.cookies if c.strip()),
        params=tuple(settings.params),
        data=tuple(parse_static_param(d) for d in settings.data),
        body_type=BodyType(settings.body_type),
    )
