from __future__ import annotations

import io
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .errors import SourceError
from .spans import Position
from .tokens import LexicalUnit, TokenStream, UnitKind


# Same set as the WHATWG definition: vertical tab and non-ASCII spaces are text.
_ASCII_WHITESPACE = frozenset(" \t\n\f\r")

_LINE_BREAKS = ("\r\n", "\n")


def is_whitespace(ch: str) -> bool:
    """Return True if ``ch`` counts as whitespace in a map script."""
    return ch in _ASCII_WHITESPACE


@dataclass(slots=True)
class _LineCursor:
    line: int
    text: str
    i: int = 0

    def eof(self) -> bool:
        return self.i >= len(self.text)

    def column(self) -> int:
        return self.i + 1


def _lex_one_unit(cur: _LineCursor) -> LexicalUnit | None:
    """Consume one whitespace or text unit from a line without its break.

    Returns None once the line is exhausted.
    """
    if cur.eof():
        return None
    start = cur.i
    whitespace = is_whitespace(cur.text[start])
    j = start + 1
    while j < len(cur.text) and is_whitespace(cur.text[j]) == whitespace:
        j += 1
    cur.i = j
    kind = UnitKind.WHITESPACE if whitespace else UnitKind.TEXT
    return LexicalUnit(
        kind,
        cur.text[start:j],
        Position(line=cur.line, start_column=start + 1, end_column=j),
    )


def _extract_line_break(line: str, line_number: int) -> tuple[str, LexicalUnit | None]:
    """Split ``line`` into its content and its trailing break unit, if any."""
    nl = line.find("\n")
    if nl != -1 and nl != len(line) - 1:
        raise ValueError(f"line {line_number} contains a line break before its end")
    for brk in _LINE_BREAKS:
        if line.endswith(brk):
            col = len(line) - len(brk)
            pos = Position(line=line_number, start_column=col + 1, end_column=len(line))
            return line[:col], LexicalUnit(UnitKind.LINE_BREAK, brk, pos)
    return line, None


def tokenize(lines: Iterable[str]) -> TokenStream:
    """Split a script, given one line at a time, into lexical units.

    Each item of ``lines`` is one line including its trailing ``"\\n"`` or
    ``"\\r\\n"``; only the last line may lack one. A lone ``"\\r"`` is not a
    break and stays in the line as whitespace.
    """
    if isinstance(lines, str):
        raise TypeError("tokenize() takes an iterable of lines; use tokenize_source() for a string")
    units: list[LexicalUnit] = []
    line_number = 1
    for line in lines:
        content, line_break = _extract_line_break(line, line_number)
        cur = _LineCursor(line=line_number, text=content)
        while True:
            unit = _lex_one_unit(cur)
            if unit is None:
                break
            units.append(unit)
        if line_break is not None:
            units.append(line_break)
        line_number += 1
    return TokenStream(units=tuple(units))


def tokenize_source(src: str) -> TokenStream:
    # newline="\n": split on "\n" only and never translate "\r\n" or "\r".
    return tokenize(io.StringIO(src, newline="\n"))


def tokenize_file(path: str | Path) -> TokenStream:
    p = Path(path)
    try:
        with open(p, encoding="utf-8", newline="\n") as f:
            return tokenize(f)
    except UnicodeDecodeError as e:
        raise SourceError(
            path=str(p),
            message=f"not valid UTF-8 (byte offset {e.start})",
            hint="re-save the script with UTF-8 encoding",
        ) from e
    except OSError as e:
        raise SourceError(path=str(p), message=e.strerror or str(e)) from e


def reconstruct(stream: TokenStream) -> str:
    """Concatenate every unit's text; equals the tokenized source exactly."""
    return stream.reconstruct()
