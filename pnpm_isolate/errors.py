"""Error types raised at the I/O boundary.

Pruning itself never raises for a well-formed lockfile. Problems only surface
while reading the lockfile from disk, where a malformed file is reported with
``LockfileError`` so callers can tell it apart from a missing one.
"""

from __future__ import annotations

from collections.abc import Mapping


class PnpmIsolateError(Exception):
    """Base error carrying an optional hint and string context."""

    hint: str | None
    context: Mapping[str, str]

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        for key, value in self.context.items():
            if value:
                parts.append(f"  {key}: {value}")
        return "\n".join(parts)


class LockfileError(PnpmIsolateError):
    """The lockfile exists but could not be parsed into the expected shape."""
