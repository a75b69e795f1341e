"""HTTP methods: validity, membership and semantic groups.

Verbs are compared case-insensitively and normalized to upper case.
Every verb belongs to one or more groups (GET is safe, idempotent and
cacheable at once), so group queries accept a list with any-of / all-of
semantics.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from httpconv._factory import Shape, build_table
from httpconv._query import QueryEngine
from httpconv._registry import CustomSource, LiteralRegistry
from httpconv._sources import METHODS_SOURCE


class Method(StrEnum):
    """Standard HTTP methods (RFC 9110, PATCH from RFC 5789)."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"


class MethodGroup(StrEnum):
    """Semantic method classes."""

    SAFE = "safe"
    IDEMPOTENT = "idempotent"
    NON_IDEMPOTENT = "non_idempotent"
    CACHEABLE = "cacheable"
    PREFLIGHT = "preflight"
    SPECIAL_PURPOSE = "special_purpose"


# verb → groups, as declared in the source table
METHOD_GROUPS: Mapping[str, tuple[str, ...]] = MappingProxyType(dict(METHODS_SOURCE))

METHOD_SHAPE = Shape(key="method", group="groups")


def _fold_method(value: Any) -> str:
    if not isinstance(value, str):
        msg = f"method must be a string, got {type(value).__name__}"
        raise TypeError(msg)
    return value.strip().upper()


class Methods:
    """Standard and custom HTTP methods.

    >>> methods = Methods()
    >>> methods.normalize("patch")
    'PATCH'
    >>> methods.in_group("POST", ["idempotent", "cacheable"], match_all=True)
    False
    """

    def __init__(self) -> None:
        self.registry: LiteralRegistry[str] = LiteralRegistry(
            "methods", build_table(METHODS_SOURCE, "methods"), METHOD_SHAPE
        )
        self.engine: QueryEngine[str] = QueryEngine(
            self.registry, _fold_method, "HTTP standard or custom method"
        )

    # ── Registry state ─────────────────────────────────────────────────────

    @property
    def methods(self) -> Mapping[str, str]:
        """Effective verb → verb mapping."""
        return MappingProxyType({k: k for k in self.registry.effective()})

    @property
    def is_extended(self) -> bool:
        return self.registry.is_extended

    def extend(self, source: CustomSource[str]) -> None:
        """Install custom methods, replacing any previous ones.

        ``source`` is a list of ``(verb, groups)`` rows or
        ``{verb: {"method": verb, "groups": [...]}}``.
        """
        self.registry.extend(source)

    def reset(self) -> None:
        self.registry.reset()

    # ── Queries ────────────────────────────────────────────────────────────

    def values(self) -> list[str]:
        """All effective verbs."""
        return self.engine.keys()

    def is_valid(self, method: str | list[str]) -> bool:
        """True when the method (or every method of a list) is registered."""
        return self.engine.is_among(method)

    def is_among(self, method: str | list[str], allowed: Iterable[str] | Mapping[str, str] | None = None) -> bool:
        """True when the method (or every method of a list) is in ``allowed``.

        ``allowed`` defaults to every registered method.
        """
        return self.engine.is_among(method, allowed)

    def in_group(self, method: str, group: str | Iterable[str], match_all: bool = False) -> bool:
        return self.engine.in_group(method, group, match_all)

    def of_groups(self, method: str) -> list[str] | None:
        """All groups of ``method``, or None when it is not registered."""
        groups = self.engine.of_groups(method)
        return list(groups) if groups is not None else None

    def of_group(self, method: str) -> str | None:
        """The first declared group of ``method``."""
        return self.engine.of_group(method)

    def groups(self) -> dict[str, list[str]]:
        """Group → verbs over the effective methods."""
        return {g: [e.key for e in entries] for g, entries in self.registry.groups().items()}

    def normalize(self, method: Any) -> str:
        """Return the registered verb matching ``method`` case-insensitively.

        Raises:
            HTTPConvenienceError: not a string, or not a registered method
        """
        return self.engine.normalize(method)
