"""HTTP headers: known names and value extraction.

Header names are compared case-insensitively. ``extract`` finds a header
in a caller's headers mapping and runs its value through an extractor
(identity by default, a callable, or the name of a registered extractor).
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Mapping, Sequence
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from httpconv._errors import HTTPConvenienceError
from httpconv._extractors import BUILTIN_EXTRACTORS, TokenScheme
from httpconv._factory import Shape, build_table
from httpconv._query import QueryEngine
from httpconv._registry import CustomSource, LiteralRegistry
from httpconv._sources import HEADERS_SOURCE
from httpconv._types import Extractor

logger = logging.getLogger(__name__)


class Header(StrEnum):
    """Well-known header names in their canonical casing."""

    AUTHORIZATION = "Authorization"
    CONTENT_TYPE = "Content-Type"
    ACCEPT = "Accept"
    ACCEPT_ENCODING = "Accept-Encoding"
    ACCEPT_LANGUAGE = "Accept-Language"
    COOKIE = "Cookie"
    USER_AGENT = "User-Agent"
    X_REQUESTED_WITH = "X-Requested-With"
    CONTENT_LENGTH = "Content-Length"
    SET_COOKIE = "Set-Cookie"
    CACHE_CONTROL = "Cache-Control"
    ETAG = "ETag"
    LAST_MODIFIED = "Last-Modified"
    LOCATION = "Location"
    ACCESS_CONTROL_ALLOW_ORIGIN = "Access-Control-Allow-Origin"


HEADER_SHAPE = Shape(key="name")


def _fold_header(value: Any) -> str:
    if not isinstance(value, str):
        msg = f"header name must be a string, got {type(value).__name__}"
        raise TypeError(msg)
    return value.strip().lower()


def _identity(value: str) -> str:
    return value


class Headers:
    """Known header names plus the extraction pipeline.

    >>> headers = Headers()
    >>> headers.extract({"content-type": "application/json"}, "Content-Type")
    'application/json'
    >>> headers.extract({"Authorization": "Bearer abc"}, "authorization", "token")
    'abc'
    """

    def __init__(self) -> None:
        self.registry: LiteralRegistry[str] = LiteralRegistry(
            "headers", build_table(HEADERS_SOURCE, "headers"), HEADER_SHAPE
        )
        self.engine: QueryEngine[str] = QueryEngine(self.registry, _fold_header, "HTTP header name")
        self._extractors: dict[str, Extractor[Any]] = dict(BUILTIN_EXTRACTORS)

    # ── Registry state ─────────────────────────────────────────────────────

    @property
    def is_extended(self) -> bool:
        return self.registry.is_extended

    def extend(self, source: CustomSource[str]) -> None:
        """Install custom header names, replacing any previous ones.

        ``source`` is a list of ``(name,)`` rows or ``{name: {"name": name}}``.
        """
        self.registry.extend(source)

    def reset(self) -> None:
        self.registry.reset()

    def names(self) -> list[str]:
        return self.engine.keys()

    # ── Names ──────────────────────────────────────────────────────────────

    def is_valid(self, name: str) -> bool:
        """True when ``name`` is a known header, in any casing."""
        return self.engine.is_valid(name)

    def is_among(self, name: str | list[str], names: Sequence[str] | Mapping[Any, str] | None = None) -> bool:
        return self.engine.is_among(name, names)

    def canonical(self, name: Any) -> str:
        """Return the registered casing of ``name``.

        Raises:
            HTTPConvenienceError: not a string, or not a known header
        """
        return self.engine.normalize(name)

    def normalize(self, name: Any) -> str:
        """Lower-case ``name`` for comparison. Any header name is accepted.

        Raises:
            HTTPConvenienceError: ``name`` is not a string
        """
        try:
            return _fold_header(name)
        except TypeError as e:
            msg = "header name should be a valid string"
            raise HTTPConvenienceError(msg, e) from e

    # ── Extractors ─────────────────────────────────────────────────────────

    @property
    def extractors(self) -> Mapping[str, Extractor[Any]]:
        """Registered extractors by name (built-in and custom)."""
        return MappingProxyType(self._extractors)

    def register_extractor(self, name: str, extractor: Extractor[Any]) -> None:
        """Register a named extractor usable as ``extract(..., name)``.

        Re-registering a custom name replaces it; built-in names are
        reserved.

        Raises:
            HTTPConvenienceError: ``name`` is a built-in extractor, or
                ``extractor`` is not callable
        """
        if name in BUILTIN_EXTRACTORS:
            msg = f"extractor name {name!r} is reserved for a built-in extractor"
            raise HTTPConvenienceError(msg)
        if not callable(extractor):
            msg = f"extractor {name!r} must be callable, got {type(extractor).__name__}"
            raise HTTPConvenienceError(msg)
        self._extractors[name] = extractor
        logger.debug("registered header extractor %r", name)

    def _resolve(self, extractor: Extractor[Any] | str | None) -> Extractor[Any]:
        if extractor is None:
            return _identity
        if isinstance(extractor, str):
            found = self._extractors.get(extractor)
            if found is None:
                registered = ", ".join(sorted(self._extractors))
                msg = f"unknown extractor {extractor!r} (registered: {registered})"
                raise HTTPConvenienceError(msg)
            return found
        return extractor

    # ── Extraction ─────────────────────────────────────────────────────────

    def to_key_value(self, headers: Mapping[str, str], name: str) -> tuple[str, str] | None:
        """Return the ``(key, value)`` pair of ``name`` as it appears in ``headers``."""
        if not isinstance(name, str):
            return None
        target = name.strip().lower()
        for key, value in headers.items():
            if isinstance(key, str) and key.strip().lower() == target:
                return key, value
        return None

    def extract(
        self,
        headers: Mapping[str, str],
        name: str,
        extractor: Extractor[Any] | str | None = None,
    ) -> Any:
        """Return the value of ``name`` in ``headers`` run through ``extractor``.

        Returns None when the header is absent.

        Raises:
            HTTPConvenienceError: ``extractor`` names an unregistered extractor
        """
        transform = self._resolve(extractor)
        found = self.to_key_value(headers, name)
        if found is None:
            return None
        return transform(found[1])

    def has_value(
        self,
        headers: Mapping[str, str],
        name: str,
        expected: Any,
        extractor: Extractor[Any] | str | None = None,
    ) -> bool:
        """True when ``name`` is present and its extracted value equals ``expected``."""
        value = self.extract(headers, name, extractor)
        return value is not None and value == expected

    # ── Makers ─────────────────────────────────────────────────────────────

    def make(self, header: str, scheme: TokenScheme | str, value: str | Sequence[str]) -> dict[str, str]:
        """Build an Authorization header for one of the built-in schemes.

        ``Basic`` takes ``(login, password)`` (or ``"login:password"``) and
        base64-encodes it; ``Bearer`` and ``APIKey`` take the token as-is.

        >>> Headers().make("Authorization", "Bearer", "abc")
        {'Authorization': 'Bearer abc'}

        Raises:
            HTTPConvenienceError: unsupported header or scheme, or a value
                of the wrong shape
        """
        if self.normalize(header) != Header.AUTHORIZATION.lower():
            msg = f"only the {Header.AUTHORIZATION} header can be made, {header!r} given"
            raise HTTPConvenienceError(msg)

        try:
            token_scheme = TokenScheme(scheme)
        except ValueError as e:
            msg = f"token scheme {scheme!r} should be a valid built-in scheme"
            raise HTTPConvenienceError(msg, e) from e

        if token_scheme is TokenScheme.BASIC:
            if isinstance(value, str):
                credentials = value
            elif isinstance(value, Sequence) and len(value) == 2 and all(isinstance(v, str) for v in value):
                credentials = ":".join(value)
            else:
                msg = "Basic scheme expects (login, password) or 'login:password'"
                raise HTTPConvenienceError(msg)
            token = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        elif isinstance(value, str) and value:
            token = value
        else:
            msg = f"{token_scheme} scheme expects a non-empty token string"
            raise HTTPConvenienceError(msg)

        return {Header.AUTHORIZATION.value: f"{token_scheme} {token}"}
