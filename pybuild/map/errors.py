"""Exceptions raised while loading Build map files."""

from __future__ import annotations


class MapError(Exception):
    """Base class for every error that abandons a single map file."""


class TruncatedInput(MapError, ValueError):
    """Fewer bytes remain than a field or a declared record array needs."""

    def __init__(self, offset: int, requested: int, available: int, what: str | None = None) -> None:
        self.offset = offset
        self.requested = requested
        self.available = available
        self.what = what
        label = f" reading {what}" if what else ""
        super().__init__(
            f"Truncated input{label} at offset {offset:#x} "
            f"(needed {requested} bytes, {available} available)"
        )


class AllocationTooLarge(MapError, ValueError):
    """A declared record count is larger than any loadable level."""

    def __init__(self, kind: str, count: int, limit: int) -> None:
        self.kind = kind
        self.count = count
        self.limit = limit
        super().__init__(f"Declared {kind} count {count} exceeds the ceiling of {limit}")


class IOUnavailable(MapError, OSError):
    """The map file could not be opened or read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")
