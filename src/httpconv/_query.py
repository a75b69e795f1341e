"""Query operations over a LiteralRegistry.

QueryEngine reads the registry's effective view on every call and applies
the domain's normalization:
- ``fold`` coerces caller input and registered keys to a comparable form
  (upper-casing verbs, lower-casing header names, int() for status codes)
- ``secondary_prefix`` is prepended to secondary values that lack it
  (``gz`` → ``.gz`` for MIME extensions)

Boolean probes never raise: input that cannot be folded is simply not
found. ``normalize`` is the one strict operation.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from httpconv._errors import HTTPConvenienceError
from httpconv._types import Attribute, Entry

if TYPE_CHECKING:
    from httpconv._registry import LiteralRegistry

K = TypeVar("K")

# Errors a fold function raises for input it cannot coerce.
_FOLD_ERRORS = (TypeError, ValueError, AttributeError)


@dataclass(frozen=True, slots=True)
class QueryEngine(Generic[K]):
    """Validity, membership, grouping and normalization queries.

    Stateless apart from the registry it reads; every operation sees the
    registry's latest extend/reset.
    """

    registry: LiteralRegistry[K]
    fold: Callable[[Any], K]
    noun: str
    secondary_prefix: str | None = None

    # ── Probes ─────────────────────────────────────────────────────────────

    def is_valid(self, value: Any, attribute: Attribute = Attribute.KEY) -> bool:
        """Check ``value`` against the given attribute of the effective entries."""
        match attribute:
            case Attribute.KEY:
                return self.lookup(value) is not None
            case Attribute.SECONDARY:
                secondary = self._secondary(value)
                return secondary is not None and secondary in self.registry.secondaries()
            case Attribute.GROUP:
                return isinstance(value, str) and value in self.registry.groups()
        return False  # pragma: no cover

    def is_among(self, key: Any, candidates: Iterable[Any] | Mapping[Any, Any] | None = None) -> bool:
        """Check that ``key`` (or every key of a list) is among ``candidates``.

        ``candidates`` defaults to every registered key. A mapping
        contributes its values; Entry candidates contribute their keys.
        """
        keys = list(key) if isinstance(key, list | tuple) else [key]
        if not keys:
            return False

        if candidates is None:
            pool: Iterable[Any] = self.registry.effective().keys()
        elif isinstance(candidates, Mapping):
            pool = candidates.values()
        elif isinstance(candidates, Iterable):
            pool = candidates
        else:
            return False

        allowed = set()
        for candidate in pool:
            folded = self._try_fold(candidate.key if isinstance(candidate, Entry) else candidate)
            if folded is not None:
                allowed.add(folded)

        for k in keys:
            folded = self._try_fold(k)
            if folded is None or folded not in allowed:
                return False
        return True

    def in_group(self, key: Any, group: str | Iterable[str], match_all: bool = False) -> bool:
        """Check group membership of ``key``.

        With a list of groups, any one suffices unless ``match_all`` is set,
        in which case ``key`` must belong to every listed group.
        """
        entry = self.lookup(key)
        if entry is None:
            return False
        if isinstance(group, str):
            wanted = [group]
        elif isinstance(group, Iterable):
            wanted = list(group)
        else:
            return False
        if not wanted:
            return False
        test = all if match_all else any
        return test(g in entry.groups for g in wanted)

    # ── Lookups ────────────────────────────────────────────────────────────

    def lookup(self, key: Any) -> Entry[K] | None:
        """Return the effective Entry for ``key``, or None."""
        folded = self._try_fold(key)
        if folded is None:
            return None
        entries = self.registry.effective()
        found = self._find_key(folded, entries)
        if found is None:
            return None
        return entries[found]

    def of_group(self, key: Any) -> str | None:
        entry = self.lookup(key)
        return entry.group if entry is not None else None

    def of_groups(self, key: Any) -> tuple[str, ...] | None:
        entry = self.lookup(key)
        return entry.groups if entry is not None else None

    def keys(self) -> list[K]:
        return list(self.registry.effective().keys())

    def find_by(self, attribute: Attribute, value: Any) -> list[Entry[K]]:
        """Return every effective entry whose ``attribute`` matches ``value``."""
        entries = self.registry.effective().values()
        match attribute:
            case Attribute.KEY:
                folded = self._try_fold(value)
                if folded is None:
                    return []
                return [e for e in entries if self._try_fold(e.key) == folded]
            case Attribute.SECONDARY:
                secondary = self._secondary(value)
                if secondary is None:
                    return []
                return [e for e in entries if e.has_secondary and e.secondary == secondary]
            case Attribute.GROUP:
                return [e for e in entries if value in e.groups]
        return []  # pragma: no cover

    def pick_by(self, attribute: Attribute, value: Any) -> Entry[K] | None:
        """Return the first entry find_by() would return, or None."""
        found = self.find_by(attribute, value)
        return found[0] if found else None

    # ── Strict ─────────────────────────────────────────────────────────────

    def normalize(self, value: Any) -> K:
        """Coerce ``value`` to its registered key.

        Raises:
            HTTPConvenienceError: ``value`` cannot be coerced, or the coerced
                value is not a registered key
        """
        try:
            folded = self.fold(value)
        except _FOLD_ERRORS as e:
            msg = f"{value!r} ({type(value).__name__}) cannot be coerced to a valid {self.noun}"
            raise HTTPConvenienceError(msg, e) from e

        found = self._find_key(folded, self.registry.effective())
        if found is None:
            msg = f"{value!r} should be a valid {self.noun} (normalized to {folded!r})"
            raise HTTPConvenienceError(msg)
        return found

    # ── Internals ──────────────────────────────────────────────────────────

    def _try_fold(self, value: Any) -> K | None:
        try:
            return self.fold(value)
        except _FOLD_ERRORS:
            return None

    def _find_key(self, folded: K, entries: Mapping[K, Entry[K]]) -> K | None:
        if folded in entries:
            return folded
        for key in entries:
            if self._try_fold(key) == folded:
                return key
        return None

    def _secondary(self, value: Any) -> str | None:
        if not isinstance(value, str) or not value:
            return None
        prefix = self.secondary_prefix
        if prefix and not value.startswith(prefix):
            return prefix + value
        return value
