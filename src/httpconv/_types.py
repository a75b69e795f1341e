"""Core record types and type aliases for httpconv.

Every domain registry is built from the same shapes:
- a source Row is a literal tuple (key, group(s), secondary, disambiguator),
  trailing fields optional
- an Entry is the structured, immutable form of one Row
- an Extractor turns a raw header value into something more useful
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeAlias, TypeVar

# Marks a secondary attribute that has no meaningful value for its key
# (multipart MIME types have no file extension). Never matches a lookup.
INAPPLICABLE = "inapplicable"

K = TypeVar("K")
T = TypeVar("T")

Key: TypeAlias = str | int
GroupSpec: TypeAlias = str | Sequence[str] | None
Row: TypeAlias = tuple[Any, ...]
Extractor: TypeAlias = Callable[[str], T]


class Attribute(StrEnum):
    """Entry field addressed by a query."""

    KEY = "key"
    GROUP = "group"
    SECONDARY = "secondary"


@dataclass(frozen=True, slots=True)
class Entry(Generic[K]):
    """One registered literal: key, its groups and an optional secondary value.

    ``disambiguator`` separates entries whose secondary values would
    otherwise collide (``application/sql`` and ``application/x-sql`` both
    use ``.sql``). It is internal to the source data and never compared
    against caller input.
    """

    key: K
    groups: tuple[str, ...] = ()
    secondary: str | None = None
    disambiguator: int | None = None

    @property
    def group(self) -> str | None:
        """The primary group, or None for group-less domains."""
        return self.groups[0] if self.groups else None

    @property
    def has_secondary(self) -> bool:
        """True when the secondary value is real (set and not INAPPLICABLE)."""
        return self.secondary is not None and self.secondary != INAPPLICABLE
