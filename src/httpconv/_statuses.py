"""HTTP status codes: validity, groups (classes) and reason phrases.

The status registry is built-in only. Codes are accepted as int or as a
decimal string and normalized to int.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from httpconv._factory import Shape, build_table
from httpconv._query import QueryEngine
from httpconv._registry import LiteralRegistry
from httpconv._sources import STATUSES_SOURCE
from httpconv._types import Attribute


class StatusGroup(StrEnum):
    """Status code classes (RFC 9110 §15 calls them "classes")."""

    INFO = "info"
    SUCCESS = "success"
    REDIRECT = "redirect"
    CLIENTERR = "clienterr"
    SERVERERR = "servererr"


@dataclass(frozen=True, slots=True)
class HTTPStatus:
    """A status code with its reason phrase."""

    code: int
    message: str


def _grouped(source: Iterable[tuple[int, str, str]]) -> Mapping[str, tuple[int, ...]]:
    grouped: dict[str, list[int]] = {}
    for code, group, _ in source:
        grouped.setdefault(group, []).append(code)
    return MappingProxyType({g: tuple(codes) for g, codes in grouped.items()})


# group → registered codes
GROUPED_STATUS_CODES: Mapping[str, tuple[int, ...]] = _grouped(STATUSES_SOURCE)

# code → HTTPStatus
HTTP_STATUSES: Mapping[int, HTTPStatus] = MappingProxyType(
    {code: HTTPStatus(code, message) for code, _, message in STATUSES_SOURCE}
)

# Numeric ranges of each class, upper bound exclusive.
STATUS_RANGES: tuple[tuple[range, StatusGroup], ...] = (
    (range(100, 200), StatusGroup.INFO),
    (range(200, 300), StatusGroup.SUCCESS),
    (range(300, 400), StatusGroup.REDIRECT),
    (range(400, 500), StatusGroup.CLIENTERR),
    (range(500, 600), StatusGroup.SERVERERR),
)

STATUS_SHAPE = Shape(key="code", group="group", secondary="message")


def _fold_code(value: Any) -> int:
    if isinstance(value, bool):
        msg = "status code must be an int or a numeric string, got bool"
        raise TypeError(msg)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        digits = value.strip()
        if not (digits.isascii() and digits.isdigit()):
            msg = f"status code must be a decimal number, got {value!r}"
            raise ValueError(msg)
        return int(digits)
    msg = f"status code must be an int or a numeric string, got {type(value).__name__}"
    raise TypeError(msg)


class Statuses:
    """Registered HTTP status codes.

    >>> statuses = Statuses()
    >>> statuses.of_group(404)
    'clienterr'
    >>> statuses.message("201")
    'Created'
    """

    def __init__(self) -> None:
        self.registry: LiteralRegistry[int] = LiteralRegistry(
            "statuses",
            build_table(STATUSES_SOURCE, "statuses", unique_secondaries=True),
            STATUS_SHAPE,
            extensible=False,
        )
        self.engine: QueryEngine[int] = QueryEngine(self.registry, _fold_code, "HTTP status code")

    def codes(self) -> list[int]:
        return self.engine.keys()

    def is_valid(self, code: int | str) -> bool:
        return self.engine.is_valid(code)

    def is_among(self, code: int | str, codes: Iterable[int | str] | Mapping[Any, int]) -> bool:
        """True when ``code`` is one of ``codes`` (ints or numeric strings)."""
        return self.engine.is_among(code, codes)

    def in_group(self, code: int | str, group: str | Iterable[str], match_all: bool = False) -> bool:
        return self.engine.in_group(code, group, match_all)

    def of_group(self, code: int | str) -> str | None:
        """The class of a registered code, or None for an unregistered one."""
        return self.engine.of_group(code)

    def classify(self, code: int | str) -> StatusGroup | None:
        """Class of any code by numeric range (100-599), registered or not."""
        try:
            value = _fold_code(code)
        except (TypeError, ValueError):
            return None
        for codes, group in STATUS_RANGES:
            if value in codes:
                return group
        return None

    def message(self, code: int | str) -> str | None:
        """Reason phrase of a registered code."""
        entry = self.engine.lookup(code)
        return entry.secondary if entry is not None else None

    def status(self, code: int | str) -> HTTPStatus | None:
        entry = self.engine.lookup(code)
        return HTTP_STATUSES.get(entry.key) if entry is not None else None

    def by_message(self, message: str) -> int | None:
        """Code carrying the reason phrase ``message`` exactly."""
        entry = self.engine.pick_by(Attribute.SECONDARY, message)
        return entry.key if entry is not None else None

    def normalize(self, code: Any) -> int:
        """Coerce ``code`` to a registered int status code.

        Raises:
            HTTPConvenienceError: not an int/numeric string, or not registered
        """
        return self.engine.normalize(code)
