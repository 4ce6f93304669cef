from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from .annotate import annotate
from .config import DebugConfig, resolve_config
from .errors import SourceError
from .lexer import tokenize_file
from .render import write_debug_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileReport:
    source: str
    output: str
    units: int
    matched_pairs: int
    unclosed_openers: int
    unmatched_closers: int


@dataclass(frozen=True, slots=True)
class BatchResult:
    reports: tuple[FileReport, ...]
    failures: dict[str, str] = field(default_factory=dict)  # source path -> message

    @property
    def ok(self) -> bool:
        return not self.failures


def discover_scripts(directory: str | Path) -> list[Path]:
    """Regular files directly inside ``directory``, sorted by name.

    Subdirectories are not searched.
    """
    d = Path(directory)
    try:
        entries = list(d.iterdir())
    except OSError as e:
        raise SourceError(path=str(d), message=e.strerror or str(e)) from e
    return sorted(p for p in entries if p.is_file())


def process_file(
    path: str | Path,
    out_dir: str | Path,
    config: DebugConfig | None = None,
) -> FileReport:
    cfg = resolve_config(config)
    src = Path(path)
    tokens = tokenize_file(src)
    annotated = annotate(tokens)

    for i in annotated.unmatched_closers:
        pos = annotated[i].unit.position
        logger.warning("%s:%s: comment closer without an opener", src, pos.format())
    for i in annotated.unclosed_openers:
        pos = annotated[i].unit.position
        logger.warning("%s:%s: comment is never closed", src, pos.format())

    if cfg.title is None:
        cfg = replace(cfg, title=src.name)
    out = Path(out_dir) / (src.stem + cfg.output_suffix)
    try:
        write_debug_file(annotated, out, cfg)
    except OSError as e:
        raise SourceError(path=str(out), message=e.strerror or str(e)) from e
    logger.info("%s -> %s (%d comments)", src, out, annotated.matched_pairs)

    return FileReport(
        source=str(src),
        output=str(out),
        units=len(tokens),
        matched_pairs=annotated.matched_pairs,
        unclosed_openers=len(annotated.unclosed_openers),
        unmatched_closers=len(annotated.unmatched_closers),
    )


def process_files(
    paths: list[str | Path],
    out_dir: str | Path,
    config: DebugConfig | None = None,
) -> BatchResult:
    """Render every script in ``paths`` into ``out_dir``.

    A script that cannot be read, or whose page cannot be written, is
    logged, recorded in ``BatchResult.failures`` and skipped; the rest are
    still processed. Pages are titled after their script unless
    ``config.title`` is set.
    """
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    reports: list[FileReport] = []
    failures: dict[str, str] = {}
    for p in paths:
        try:
            reports.append(process_file(p, out, config))
        except SourceError as e:
            logger.error("skipping %s", e)
            failures[str(p)] = e.message
    return BatchResult(reports=tuple(reports), failures=failures)
