from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class SourceError(Exception):
    """A script could not be read or decoded, or its page could not be written."""

    path: str
    message: str
    hint: str | None = None

    def __str__(self) -> str:
        base = f"{self.path}: {self.message}"
        if self.hint:
            return f"{base}\nhint: {self.hint}"
        return base
