"""Table construction from literal source rows.

A domain's built-in entries are written once as a list of tuples and turned
into an immutable Table here:

- TableBuilder → .build() → Table (immutable)
- build_table() is the one-shot path over a row list
- table_from_entries() accepts the ``{key: {field: value}}`` shape callers
  pass to ``extend``

Example::

    table = build_table([
        ("application/json", "APPLICATION", ".json"),
        ("multipart/mixed", "MULTIPART", INAPPLICABLE),
    ])
    table.entries["application/json"].secondary  # ".json"
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from httpconv._errors import (
    DuplicateKeyError,
    DuplicateSecondaryError,
    InvalidEntryError,
)
from httpconv._types import Entry, GroupSpec, Row

MAX_ROW_ARITY = 4

K = TypeVar("K")


# ═══════════════════════════════════════════════════════════════════════════════
# Table
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Table(Generic[K]):
    """Immutable entry table with its derived indices.

    ``entries`` maps key → Entry in source order, ``groups`` maps each group
    to the entries carrying it and ``secondaries`` maps each real secondary
    value to itself for existence checks.
    """

    entries: Mapping[K, Entry[K]] = field(default_factory=lambda: MappingProxyType({}))
    groups: Mapping[str, tuple[Entry[K], ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    secondaries: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True, slots=True)
class Shape:
    """Field names a domain uses for its entries in caller-facing dicts.

    MIME types use ``type``/``group``/``extension``; a domain without a
    secondary attribute leaves ``secondary`` as None.
    """

    key: str
    group: str | None = None
    secondary: str | None = None

    @property
    def fields(self) -> frozenset[str]:
        return frozenset(f for f in (self.key, self.group, self.secondary) if f is not None)

    @property
    def arity(self) -> int:
        """Number of fields in a row of this shape."""
        return len(self.fields)


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════


class TableBuilder(Generic[K]):
    """Builder for constructing a Table.

    Add entries in source order, then call build() to produce an immutable
    Table. Duplicate keys fail fast. With ``unique_secondaries`` a repeated
    (secondary, disambiguator) pair fails fast as well.
    """

    def __init__(self, name: str = "custom", *, unique_secondaries: bool = False) -> None:
        self.name = name
        self.unique_secondaries = unique_secondaries
        self._entries: dict[K, Entry[K]] = {}
        self._secondary_owners: dict[tuple[str, int | None], K] = {}

    def entry(
        self,
        key: K,
        groups: GroupSpec = None,
        secondary: str | None = None,
        disambiguator: int | None = None,
    ) -> TableBuilder[K]:
        """Add one entry."""
        if isinstance(key, bool) or not isinstance(key, str | int):
            msg = f"{self.name} key must be a string or an integer, got {key!r}"
            raise InvalidEntryError(msg)
        if secondary is not None and not isinstance(secondary, str):
            msg = f"secondary value of {key!r} must be a string, got {secondary!r}"
            raise InvalidEntryError(msg)
        if key in self._entries:
            raise DuplicateKeyError(key, self.name)

        entry = Entry(
            key=key,
            groups=_coerce_groups(key, groups),
            secondary=secondary,
            disambiguator=disambiguator,
        )
        if self.unique_secondaries and entry.has_secondary:
            slot = (entry.secondary, disambiguator)
            owner = self._secondary_owners.get(slot)
            if owner is not None:
                raise DuplicateSecondaryError(entry.secondary, (owner, key), self.name)
            self._secondary_owners[slot] = key

        self._entries[key] = entry
        return self

    def add(self, entry: Entry[K]) -> TableBuilder[K]:
        """Add a ready-made Entry."""
        return self.entry(entry.key, entry.groups, entry.secondary, entry.disambiguator)

    def build(self) -> Table[K]:
        """Freeze the table. The builder can be discarded afterwards."""
        entries = dict(self._entries)
        return Table(
            entries=MappingProxyType(entries),
            groups=group_index(entries.values()),
            secondaries=secondary_index(entries.values()),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Factories
# ═══════════════════════════════════════════════════════════════════════════════


def build_table(
    rows: Iterable[Row],
    name: str = "custom",
    *,
    unique_secondaries: bool = False,
    shape: Shape | None = None,
) -> Table[K]:
    """Build a Table from literal rows.

    Each row is ``(key,)``, ``(key, groups)``, ``(key, groups, secondary)``
    or ``(key, groups, secondary, disambiguator)``. With a ``shape`` every
    row must have exactly ``shape.arity`` fields.

    Raises:
        InvalidEntryError: a row is not a tuple of 1-4 fields, or does not
            match ``shape``
        DuplicateKeyError: a key repeats
        DuplicateSecondaryError: a secondary repeats (unique_secondaries only)
    """
    builder: TableBuilder[K] = TableBuilder(name, unique_secondaries=unique_secondaries)
    for row in rows:
        if isinstance(row, str) or not isinstance(row, Sequence):
            msg = f"{name} row must be a tuple, got {type(row).__name__}"
            raise InvalidEntryError(msg)
        if not 1 <= len(row) <= MAX_ROW_ARITY:
            msg = f"{name} row must have 1 to {MAX_ROW_ARITY} fields, got {len(row)}: {row!r}"
            raise InvalidEntryError(msg)
        if shape is not None and len(row) != shape.arity:
            msg = f"{name} row must have {shape.arity} fields, got {len(row)}: {row!r}"
            raise InvalidEntryError(msg)
        builder.entry(*row)
    return builder.build()


def table_from_entries(
    entries: Mapping[K, Entry[K] | Mapping[str, Any]],
    shape: Shape,
    name: str = "custom",
) -> Table[K]:
    """Build a Table from a ``{key: entry}`` mapping.

    Values may be Entry instances or dicts whose field set is exactly the
    domain's ``shape`` (structurally identical to the built-in entries).

    Raises:
        InvalidEntryError: a dict has missing/extra fields or a mismatched key
        DuplicateKeyError: a key repeats
    """
    builder: TableBuilder[K] = TableBuilder(name)
    for key, value in entries.items():
        if isinstance(value, Entry):
            if value.key != key:
                msg = f"{name} entry under {key!r} has key {value.key!r}"
                raise InvalidEntryError(msg)
            builder.add(value)
            continue

        if not isinstance(value, Mapping):
            msg = f"{name} entry {key!r} must be a mapping, got {type(value).__name__}"
            raise InvalidEntryError(msg)

        given = frozenset(value.keys())
        if given != shape.fields:
            msg = (
                f"{name} entry {key!r} must have fields {sorted(shape.fields)}, "
                f"got {sorted(given)}"
            )
            raise InvalidEntryError(msg)
        if value[shape.key] != key:
            msg = f"{name} entry under {key!r} has {shape.key} {value[shape.key]!r}"
            raise InvalidEntryError(msg)

        builder.entry(
            key,
            value[shape.group] if shape.group is not None else None,
            value[shape.secondary] if shape.secondary is not None else None,
        )
    return builder.build()


def group_index(entries: Iterable[Entry[K]]) -> Mapping[str, tuple[Entry[K], ...]]:
    """Map each group to its entries, in entry order."""
    index: dict[str, list[Entry[K]]] = {}
    for entry in entries:
        for group in entry.groups:
            index.setdefault(group, []).append(entry)
    return MappingProxyType({g: tuple(members) for g, members in index.items()})


def secondary_index(entries: Iterable[Entry[Any]]) -> Mapping[str, str]:
    """Map each real secondary value to itself. INAPPLICABLE is skipped."""
    return MappingProxyType(
        {e.secondary: e.secondary for e in entries if e.has_secondary}  # type: ignore[misc]
    )


def _coerce_groups(key: object, groups: GroupSpec) -> tuple[str, ...]:
    if groups is None:
        return ()
    if isinstance(groups, str):
        return (groups,)
    if isinstance(groups, Sequence) and all(isinstance(g, str) for g in groups):
        return tuple(groups)
    msg = f"groups of {key!r} must be a string or a sequence of strings, got {groups!r}"
    raise InvalidEntryError(msg)
