from __future__ import annotations

from .annotate import AnnotatedStream, AnnotatedUnit, Annotation, annotate
from .api import BatchResult, FileReport, discover_scripts, process_file, process_files
from .config import DebugConfig
from .errors import SourceError
from .lexer import reconstruct, tokenize, tokenize_file, tokenize_source
from .render import render_html, write_debug_file
from .spans import Position
from .tokens import LexicalUnit, TokenStream, UnitKind

__all__ = [
    "AnnotatedStream",
    "AnnotatedUnit",
    "Annotation",
    "BatchResult",
    "DebugConfig",
    "FileReport",
    "LexicalUnit",
    "Position",
    "SourceError",
    "TokenStream",
    "UnitKind",
    "annotate",
    "discover_scripts",
    "process_file",
    "process_files",
    "reconstruct",
    "render_html",
    "tokenize",
    "tokenize_file",
    "tokenize_source",
    "write_debug_file",
]
