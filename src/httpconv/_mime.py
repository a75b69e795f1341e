"""MIME types: validity by type or extension, groups, lookups.

The richest registry: every entry carries a type, a top-level group and a
file extension. Multipart types have no extension and carry INAPPLICABLE,
which never matches an extension query. Extensions are compared with a
leading dot, added when the caller omits it (``gz`` and ``.gz`` are the
same extension).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from httpconv._factory import Shape, Table, build_table
from httpconv._query import QueryEngine
from httpconv._registry import CustomSource, LiteralRegistry
from httpconv._sources import MIME_SOURCE
from httpconv._types import INAPPLICABLE, Attribute, Entry

EXTENSION_PREFIX = "."


class MIMEAttribute(StrEnum):
    """MIME type record fields addressable by queries."""

    TYPE = "type"
    GROUP = "group"
    EXTENSION = "extension"


class MIMEGroup(StrEnum):
    """Top-level groups of the built-in MIME types."""

    APPLICATION = "APPLICATION"
    AUDIO = "AUDIO"
    FONT = "FONT"
    IMAGE = "IMAGE"
    MULTIPART = "MULTIPART"
    TEXT = "TEXT"
    VIDEO = "VIDEO"


_ATTRIBUTES = {
    MIMEAttribute.TYPE: Attribute.KEY,
    MIMEAttribute.GROUP: Attribute.GROUP,
    MIMEAttribute.EXTENSION: Attribute.SECONDARY,
}

MIME_SHAPE = Shape(key="type", group="group", secondary="extension")


def _attribute(attribute: Any) -> Attribute | None:
    try:
        return _ATTRIBUTES[MIMEAttribute(attribute)]
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True, slots=True)
class MIMEType:
    """A MIME type as callers see it."""

    type: str
    group: str
    extension: str

    @classmethod
    def from_entry(cls, entry: Entry[str]) -> MIMEType:
        return cls(
            type=entry.key,
            group=entry.group or "",
            extension=entry.secondary if entry.secondary is not None else INAPPLICABLE,
        )

    def as_dict(self) -> dict[str, str]:
        return {"type": self.type, "group": self.group, "extension": self.extension}


def _fold_type(value: Any) -> str:
    if not isinstance(value, str):
        msg = f"MIME type must be a string, got {type(value).__name__}"
        raise TypeError(msg)
    return value.strip().lower()


def _dotted(extension: Any) -> Any:
    if isinstance(extension, str) and extension and extension != INAPPLICABLE:
        if not extension.startswith(EXTENSION_PREFIX):
            return EXTENSION_PREFIX + extension
    return extension


def _prepare(source: CustomSource[str]) -> CustomSource[str]:
    """Convert MIMEType values to dicts and dot-prefix custom extensions."""
    if isinstance(source, Table):
        return source
    if isinstance(source, Mapping):
        prepared: dict[str, Any] = {}
        for key, value in source.items():
            if isinstance(value, MIMEType):
                value = value.as_dict()
            if isinstance(value, Mapping) and "extension" in value:
                value = {**value, "extension": _dotted(value["extension"])}
            prepared[key] = value
        return prepared

    rows = []
    for row in source:
        if isinstance(row, MIMEType):
            row = (row.type, row.group, row.extension)
        if isinstance(row, tuple | list) and len(row) >= 3:
            row = (row[0], row[1], _dotted(row[2]), *row[3:])
        rows.append(row)
    return rows


class MIMETypes:
    """Built-in and custom MIME types.

    >>> mime = MIMETypes()
    >>> mime.is_valid("gz", MIMEAttribute.EXTENSION)
    True
    >>> mime.of_group("application/gzip")
    'APPLICATION'
    """

    def __init__(self) -> None:
        self.registry: LiteralRegistry[str] = LiteralRegistry(
            "MIME types",
            build_table(MIME_SOURCE, "MIME types", unique_secondaries=True),
            MIME_SHAPE,
        )
        self.engine: QueryEngine[str] = QueryEngine(
            self.registry, _fold_type, "MIME type", secondary_prefix=EXTENSION_PREFIX
        )

    # ── Registry state ─────────────────────────────────────────────────────

    @property
    def types(self) -> Mapping[str, MIMEType]:
        """Effective type → MIMEType mapping."""
        return MappingProxyType(
            {key: MIMEType.from_entry(e) for key, e in self.registry.effective().items()}
        )

    @property
    def is_extended(self) -> bool:
        return self.registry.is_extended

    def extend(self, source: CustomSource[str]) -> None:
        """Install custom MIME types, replacing any previous ones.

        ``source`` is a list of ``(type, group, extension)`` rows or a
        ``{type: {"type": ..., "group": ..., "extension": ...}}`` mapping.
        Extensions without a leading dot get one.
        """
        self.registry.extend(_prepare(source))

    def reset(self) -> None:
        self.registry.reset()

    def groups(self) -> dict[str, list[MIMEType]]:
        """Group → MIME types over the effective entries."""
        return {
            group: [MIMEType.from_entry(e) for e in entries]
            for group, entries in self.registry.groups().items()
        }

    def extensions(self) -> Mapping[str, str]:
        """Every real extension of the effective entries, mapped to itself."""
        return self.registry.secondaries()

    # ── Queries ────────────────────────────────────────────────────────────

    def is_valid(self, value: str, attribute: MIMEAttribute = MIMEAttribute.TYPE) -> bool:
        """Check ``value`` as a type, a group, or an extension (dot optional)."""
        selected = _attribute(attribute)
        return selected is not None and self.engine.is_valid(value, selected)

    def is_among(
        self,
        mime_type: str | list[str],
        types: Iterable[str | MIMEType] | Mapping[Any, str | MIMEType] | None = None,
    ) -> bool:
        """True when the type (or every type of a list) is among ``types``.

        ``types`` defaults to every registered type.
        """
        if types is None:
            return self.engine.is_among(mime_type)
        pool = types.values() if isinstance(types, Mapping) else types
        if not isinstance(pool, Iterable):
            return False
        return self.engine.is_among(
            mime_type, [t.type if isinstance(t, MIMEType) else t for t in pool]
        )

    def in_group(self, mime_type: str, group: str | Iterable[str], match_all: bool = False) -> bool:
        return self.engine.in_group(mime_type, group, match_all)

    def of_group(self, mime_type: str) -> str | None:
        return self.engine.of_group(mime_type)

    def find_by(self, attribute: MIMEAttribute, value: str) -> list[MIMEType]:
        """Every MIME type whose ``attribute`` matches ``value``.

        More than one type can share an extension (``.xml``, ``.sql``).
        """
        selected = _attribute(attribute)
        if selected is None:
            return []
        found = self.engine.find_by(selected, value)
        return [MIMEType.from_entry(e) for e in found]

    def pick_by(self, attribute: MIMEAttribute, value: str) -> MIMEType | None:
        """The first MIME type find_by() would return, or None."""
        found = self.find_by(attribute, value)
        return found[0] if found else None

    def normalize(self, mime_type: Any) -> str:
        """Return the registered type matching ``mime_type`` case-insensitively.

        Raises:
            HTTPConvenienceError: not a string, or not a registered type
        """
        return self.engine.normalize(mime_type)
