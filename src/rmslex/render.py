"""HTML debug page for an annotated script.

Each source line becomes one ``<li>`` of an ordered list, so the browser
numbers the lines. Text units become spans whose classes are the base class,
then the highlight class, then ``comment-<id>`` for comment delimiters; the
stylesheet uses the shared ``comment-<id>`` class to light up both delimiters
of a pair together.
"""

from __future__ import annotations

import html
import logging
from pathlib import Path

from .annotate import AnnotatedStream, AnnotatedUnit
from .config import DebugConfig, resolve_config
from .tokens import UnitKind

logger = logging.getLogger(__name__)


DEFAULT_STYLESHEET = """\
body {
  font-family: sans-serif;
  background: #fdfdfd;
}

ol {
  font-family: monospace;
}

li pre {
  margin: 0;
}

.code-item {
  position: relative;
}

.code-item:hover {
  background: #e8eef8;
}

.comment {
  color: #6a8759;
  font-style: italic;
}

.code-item .card {
  display: none;
  position: absolute;
  left: 0;
  top: 1.4em;
  z-index: 1;
  padding: 2px 6px;
  border: 1px solid #aaa;
  background: #fff;
  color: #222;
  font-style: normal;
  white-space: nowrap;
}

.code-item:hover .card {
  display: block;
}
"""


def escape_text(s: str) -> str:
    """Escape ``&``, ``<`` and ``>`` so ``s`` shows up as written."""
    return html.escape(s, quote=False)


def unit_classes(au: AnnotatedUnit, base_class: str = "code-item") -> list[str]:
    """Class list of a rendered text unit: base, highlight, then comment id."""
    classes = [base_class]
    ann = au.annotation
    if ann is not None:
        if ann.highlight:
            classes.append(ann.highlight)
        if ann.comment_id is not None:
            classes.append(f"comment-{ann.comment_id}")
    return classes


def _column_card(au: AnnotatedUnit) -> str:
    pos = au.unit.position
    if pos.start_column == pos.end_column:
        rng = f"{pos.start_column}"
    else:
        rng = f"{pos.start_column}&ndash;{pos.end_column}"
    return f'<span class="card">{rng}</span>'


def _head(config: DebugConfig) -> list[str]:
    out = [
        "  <head>",
        '    <meta charset="UTF-8" />',
        '    <meta name="viewport" content="width=device-width, initial-scale=1.0" />',
    ]
    if config.stylesheet is not None:
        out.append(f'    <link rel="stylesheet" href="{html.escape(config.stylesheet)}" />')
    title = "Code" if config.title is None else config.title
    out.append(f"    <title>{escape_text(title)}</title>")
    out.append("  </head>")
    return out


def render_html(stream: AnnotatedStream, config: DebugConfig | None = None) -> str:
    cfg = resolve_config(config)
    out: list[str] = ["<!DOCTYPE html>", '<html lang="en">']
    out.extend(_head(cfg))
    out.append("  <body>")
    out.append("    <ol>")

    line: list[str] | None = None

    def close_line() -> None:
        out.append("      <li>")
        out.append("        <pre><code>" + "".join(line or []) + "</code></pre>")
        out.append("      </li>")

    for au in stream.units:
        if line is None:
            line = []
        unit = au.unit
        if unit.kind is UnitKind.LINE_BREAK:
            close_line()
            line = None
        elif unit.kind is UnitKind.WHITESPACE:
            line.append(escape_text(unit.text))
        else:
            cls = " ".join(unit_classes(au, cfg.base_class))
            card = _column_card(au) if cfg.show_columns else ""
            line.append(f'<span class="{cls}">{escape_text(unit.text)}{card}</span>')

    # The last line has no break when the file does not end with one.
    if line is not None:
        close_line()

    out.append("    </ol>")
    out.append("  </body>")
    out.append("</html>")
    return "\n".join(out) + "\n"


def write_debug_file(
    stream: AnnotatedStream,
    path: str | Path,
    config: DebugConfig | None = None,
) -> Path:
    p = Path(path)
    p.write_text(render_html(stream, config), encoding="utf-8")
    logger.debug("wrote %s (%d units)", p, len(stream))
    return p


def write_stylesheet(out_dir: str | Path, name: str = "style.css") -> Path:
    p = Path(out_dir) / name
    p.write_text(DEFAULT_STYLESHEET, encoding="utf-8")
    return p
