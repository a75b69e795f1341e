"""Built-in header value extractors.

An extractor is a plain callable ``(value: str) -> T`` applied to a raw
header value by ``Headers.extract``. Extractors never raise on bad input;
they return an empty string, an empty list or None instead.

Scheme detection and the base64 alphabet check use ``google-re2`` for
guaranteed linear-time matching on untrusted header values.
"""

from __future__ import annotations

import base64
import binascii
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

import re2

if TYPE_CHECKING:
    from httpconv._types import Extractor

REPLACEMENT_CHARACTER = "\ufffd"


class TokenScheme(StrEnum):
    """Authorization schemes the token extractor recognizes."""

    BEARER = "Bearer"
    BASIC = "Basic"
    APIKEY = "APIKey"


_BASE64 = re2.compile(r"^[A-Za-z0-9+/=]+$")
_TOKEN = re2.compile(r"^(" + "|".join(s.value for s in TokenScheme) + r")\s+(.+)$")


def array(value: Any, by: str = ",") -> list[str]:
    """Split ``value`` on ``by``. A non-string yields an empty list.

    >>> array("gzip, deflate")
    ['gzip', ' deflate']
    """
    if not isinstance(value, str):
        return []
    return value.split(by)


def date(value: Any) -> datetime | None:
    """Parse an HTTP-date (RFC 9110 §5.6.7) or an ISO 8601 string.

    Values without a timezone are taken as UTC. Unparseable input or a
    non-string yields None.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        parsed = parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def b64(value: Any) -> str:
    """Decode a base64 string to UTF-8 text.

    Returns "" when ``value`` is not a string, is outside the base64
    alphabet, cannot be decoded, or decodes to bytes that are not valid
    UTF-8 (signalled by the replacement character).
    """
    if not isinstance(value, str) or _BASE64.match(value) is None:
        return ""
    padded = value + "=" * (-len(value) % 4)
    try:
        raw = base64.b64decode(padded)
    except (binascii.Error, ValueError):
        return ""
    decoded = raw.decode("utf-8", errors="replace")
    if REPLACEMENT_CHARACTER in decoded:
        return ""
    return decoded


def _basic(value: str) -> list[str]:
    return array(b64(value), ":")


def _identity(value: str) -> str:
    return value


# scheme → transform of the credentials that follow it
TOKEN_EXTRACTORS: dict[TokenScheme, Extractor[str | list[str]]] = {
    TokenScheme.BASIC: _basic,
    TokenScheme.BEARER: _identity,
    TokenScheme.APIKEY: _identity,
}


def token(value: Any) -> str | list[str]:
    """Extract the credentials of an Authorization header value.

    The scheme is detected from the leading token:
    - ``Basic <b64>`` → ``[login, password]``
    - ``Bearer <token>`` / ``APIKey <token>`` → ``<token>``
    - any other scheme → the value unchanged

    >>> token("Basic dXNlcm5hbWU6cGFzc3dvcmQ=")
    ['username', 'password']
    >>> token("Foo bar")
    'Foo bar'
    """
    if not isinstance(value, str):
        return value
    match = _TOKEN.match(value)
    if match is None:
        return value
    scheme = TokenScheme(match.group(1))
    return TOKEN_EXTRACTORS.get(scheme, _identity)(match.group(2))


# name → extractor, the set Headers registers by default
BUILTIN_EXTRACTORS: dict[str, Extractor[Any]] = {
    "array": array,
    "date": date,
    "b64": b64,
    "token": token,
}
