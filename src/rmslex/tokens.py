from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .spans import Position


class UnitKind(str, Enum):
    LINE_BREAK = "LINE_BREAK"
    WHITESPACE = "WHITESPACE"
    TEXT = "TEXT"


@dataclass(frozen=True, slots=True)
class LexicalUnit:
    kind: UnitKind
    text: str
    position: Position

    def __repr__(self) -> str:
        return f"LexicalUnit({self.kind.value}, {self.text!r}, {self.position.format()})"


@dataclass(frozen=True, slots=True)
class TokenStream:
    """Every unit of one source file, in order.

    Concatenating the text of the units gives back the file exactly.
    """

    units: tuple[LexicalUnit, ...]

    def __len__(self) -> int:
        return len(self.units)

    def __iter__(self) -> Iterator[LexicalUnit]:
        return iter(self.units)

    def __getitem__(self, index: int) -> LexicalUnit:
        return self.units[index]

    def reconstruct(self) -> str:
        return "".join(u.text for u in self.units)

    def write_to_path(self, path: str | Path) -> None:
        """Write the reconstructed source to ``path``, overwriting any existing file.

        The file may already be truncated if writing fails part way.
        """
        # newline="" keeps "\r\n" breaks untranslated.
        with open(path, "w", encoding="utf-8", newline="") as f:
            for u in self.units:
                f.write(u.text)
