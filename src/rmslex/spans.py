from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """Where a lexical unit sits in its file.

    All fields are 1-based; the end column is inclusive and columns count
    characters within the line.
    """

    line: int
    start_column: int
    end_column: int

    def format(self) -> str:
        if self.start_column == self.end_column:
            return f"{self.line}:{self.start_column}"
        return f"{self.line}:{self.start_column}-{self.end_column}"
