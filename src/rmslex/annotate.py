from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .tokens import LexicalUnit, TokenStream, UnitKind


COMMENT_OPEN = "/*"
COMMENT_CLOSE = "*/"
COMMENT_HIGHLIGHT = "comment"


@dataclass(frozen=True, slots=True)
class Annotation:
    highlight: str | None = None
    comment_id: int | None = None  # shared by both delimiters of a matched pair


@dataclass(frozen=True, slots=True)
class AnnotatedUnit:
    unit: LexicalUnit
    annotation: Annotation | None = None


@dataclass(frozen=True, slots=True)
class AnnotatedStream:
    """A token stream with comment annotations.

    ``matched_pairs`` counts closers that found an open comment. The index
    tuples point into ``units`` and only describe delimiters left without a
    partner; those units keep their normal annotations.
    """

    units: tuple[AnnotatedUnit, ...]
    matched_pairs: int
    unclosed_openers: tuple[int, ...] = ()
    unmatched_closers: tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.units)

    def __iter__(self) -> Iterator[AnnotatedUnit]:
        return iter(self.units)

    def __getitem__(self, index: int) -> AnnotatedUnit:
        return self.units[index]

    @property
    def balanced(self) -> bool:
        return not self.unclosed_openers and not self.unmatched_closers

    def comment_pairs(self) -> list[tuple[int, int, int]]:
        """Return ``(opener_index, closer_index, comment_id)`` for every matched pair.

        Pairs are listed in the order their closers appear.
        """
        openers: dict[int, int] = {}
        pairs: list[tuple[int, int, int]] = []
        for i, au in enumerate(self.units):
            ann = au.annotation
            if ann is None or ann.comment_id is None:
                continue
            if au.unit.text == COMMENT_OPEN:
                openers[ann.comment_id] = i
            else:
                pairs.append((openers[ann.comment_id], i, ann.comment_id))
        return pairs


_INSIDE = Annotation(highlight=COMMENT_HIGHLIGHT)


def annotate(stream: TokenStream) -> AnnotatedStream:
    """Mark comment delimiters and everything between them.

    A text unit that is exactly ``/*`` opens a comment and takes the next id.
    A text unit that is exactly ``*/`` closes the most recently opened comment
    and takes its id; with nothing open it is left unannotated. Every other
    unit inside at least one open comment is highlighted without an id.
    Comments still open at the end stay open.
    """
    # (unit index, comment id) of every comment still open.
    open_comments: list[tuple[int, int]] = []
    unmatched: list[int] = []
    out: list[AnnotatedUnit] = []
    next_id = 0
    matched = 0

    for i, unit in enumerate(stream.units):
        annotation: Annotation | None = None
        is_text = unit.kind is UnitKind.TEXT

        if is_text and unit.text == COMMENT_OPEN:
            annotation = Annotation(highlight=COMMENT_HIGHLIGHT, comment_id=next_id)
            open_comments.append((i, next_id))
            next_id += 1
        elif is_text and unit.text == COMMENT_CLOSE:
            if open_comments:
                _, cid = open_comments.pop()
                annotation = Annotation(highlight=COMMENT_HIGHLIGHT, comment_id=cid)
                matched += 1
            else:
                unmatched.append(i)
        elif open_comments:
            annotation = _INSIDE

        out.append(AnnotatedUnit(unit=unit, annotation=annotation))

    return AnnotatedStream(
        units=tuple(out),
        matched_pairs=matched,
        unclosed_openers=tuple(i for i, _ in open_comments),
        unmatched_closers=tuple(unmatched),
    )
