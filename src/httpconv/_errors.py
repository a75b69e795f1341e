"""Error types for httpconv.

Boolean probes never raise and lookups return None on a miss; only the
strict operations (normalize, canonical, extend with malformed input)
raise, always with an HTTPConvenienceError subclass.
"""

from __future__ import annotations


class HTTPConvenienceError(Exception):
    """Invalid input to a strict httpconv operation.

    When an originating error is supplied its message is appended:
    ``"<message> (original message: <original>)"``. The original stays
    available on ``original`` for inspection.
    """

    def __init__(self, message: str, original: BaseException | None = None) -> None:
        self.message = message
        self.original = original
        if original is not None:
            message = f"{message} (original message: {original})"
        super().__init__(message)


class InvalidEntryError(HTTPConvenienceError):
    """A source row or custom entry does not have the registry's shape."""


class DuplicateKeyError(HTTPConvenienceError):
    """A key appears more than once in a single source table."""

    def __init__(self, key: object, table: str) -> None:
        self.key = key
        self.table = table
        super().__init__(f"duplicate key {key!r} in {table} table")


class DuplicateSecondaryError(HTTPConvenienceError):
    """Two keys share a secondary value without a disambiguator."""

    def __init__(self, value: str, keys: tuple[object, object], table: str) -> None:
        self.value = value
        self.keys = keys
        self.table = table
        first, second = keys
        super().__init__(
            f"secondary value {value!r} of {second!r} collides with {first!r} "
            f"in {table} table (set a disambiguator on one of them)"
        )


class RegistryFrozenError(HTTPConvenienceError):
    """extend() was called on a built-in-only registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"the {name} registry is built-in only and cannot be extended")
