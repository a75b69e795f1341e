"""Extensible literal registry.

One LiteralRegistry per domain holds an immutable built-in Table and at
most one custom Table. The custom layer is replaced wholesale by every
``extend`` call (last write wins, never cumulative) and dropped by
``reset``. Reads always go through ``effective()``, which is recomputed on
every call so it reflects the latest extend/reset.

There is no internal locking. Swapping the custom table is a single
reference assignment, so a reader sees either the old or the new layer,
but a sequence of extend → query → reset must be serialized by the caller
when several threads share a registry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Generic, TypeAlias, TypeVar

from httpconv._errors import RegistryFrozenError
from httpconv._factory import (
    Shape,
    Table,
    build_table,
    group_index,
    secondary_index,
    table_from_entries,
)

from httpconv._types import Row

if TYPE_CHECKING:
    from httpconv._types import Entry

logger = logging.getLogger(__name__)

# What extend() accepts: literal rows, or {key: Entry | dict} in the domain shape.
K = TypeVar("K")

CustomSource: TypeAlias = Iterable[Row] | Mapping[K, Any]


class LiteralRegistry(Generic[K]):
    """Built-in entries plus an optional, swappable custom layer.

    Construct with the domain's built-in Table (usually from build_table()
    over a literal source list) and the Shape its caller-facing dicts use.
    """

    def __init__(
        self,
        name: str,
        builtin: Table[K],
        shape: Shape,
        *,
        extensible: bool = True,
    ) -> None:
        self.name = name
        self.shape = shape
        self.extensible = extensible
        self._builtin = builtin
        self._custom: Table[K] | None = None

    def __repr__(self) -> str:
        custom = len(self._custom) if self._custom is not None else 0
        return (
            f"{type(self).__name__}({self.name!r}, builtin={len(self._builtin)}, "
            f"custom={custom})"
        )

    @property
    def builtin(self) -> Table[K]:
        """The built-in table. Never mutated."""
        return self._builtin

    @property
    def custom(self) -> Table[K] | None:
        """The active custom table, or None when not extended."""
        return self._custom

    @property
    def is_extended(self) -> bool:
        return self._custom is not None

    def effective(self) -> Mapping[K, Entry[K]]:
        """Custom entries merged over the built-in ones.

        Custom entries shadow built-in entries with the same key; keys only
        present in the built-in table remain. Without a custom layer the
        built-in mapping is returned unchanged.
        """
        custom = self._custom
        if custom is None:
            return self._builtin.entries
        return MappingProxyType({**self._builtin.entries, **custom.entries})

    def groups(self) -> Mapping[str, tuple[Entry[K], ...]]:
        """Group index over the effective entries."""
        if self._custom is None:
            return self._builtin.groups
        return group_index(self.effective().values())

    def secondaries(self) -> Mapping[str, str]:
        """Secondary-value index over the effective entries."""
        if self._custom is None:
            return self._builtin.secondaries
        return secondary_index(self.effective().values())

    def extend(self, source: CustomSource[K]) -> None:
        """Replace the custom layer with a table built from ``source``.

        Any previous custom layer is discarded. Keys colliding with built-in
        keys override them; that is the intended override mechanism.

        Raises:
            RegistryFrozenError: the registry is built-in only
            InvalidEntryError: ``source`` is not in the domain's shape (a
                row with more or fewer fields than the Shape names, or a
                dict with other fields)
            DuplicateKeyError: ``source`` repeats a key
        """
        if not self.extensible:
            raise RegistryFrozenError(self.name)

        if isinstance(source, Table):
            table = source
        elif isinstance(source, Mapping):
            table = table_from_entries(source, self.shape, f"custom {self.name}")
        else:
            table = build_table(source, f"custom {self.name}", shape=self.shape)

        replaced = self._custom is not None
        self._custom = table
        logger.debug(
            "extended %s registry with %d custom entries%s",
            self.name,
            len(table),
            " (replacing previous custom layer)" if replaced else "",
        )

    def reset(self) -> None:
        """Drop the custom layer. Afterwards effective() is the built-in table."""
        if self._custom is not None:
            logger.debug("reset %s registry to built-in entries", self.name)
        self._custom = None
