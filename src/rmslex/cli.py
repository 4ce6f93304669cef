from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path

from .api import discover_scripts, process_files
from .config import DebugConfig
from .errors import SourceError
from .render import write_stylesheet

logger = logging.getLogger(__name__)


def _expand_inputs(inputs: list[str]) -> list[Path]:
    paths: list[Path] = []
    for raw in inputs:
        p = Path(raw)
        if p.is_dir():
            paths.extend(discover_scripts(p))
        else:
            paths.append(p)
    return paths


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="rmslex",
        description="Render random map scripts as HTML pages that highlight comments",
    )
    ap.add_argument("inputs", nargs="+", help="Script files, or directories of scripts")
    ap.add_argument("-o", "--out", default="out", help="Output directory (default: out)")
    ap.add_argument("--title", default=None, help="Page title (default: the script's file name)")
    ap.add_argument("--stylesheet", default="style.css", help="Stylesheet file name to link and write")
    ap.add_argument(
        "--no-stylesheet",
        action="store_true",
        help="Do not write the default stylesheet into the output directory",
    )
    ap.add_argument("--no-columns", action="store_true", help="Omit the column hover cards")
    ap.add_argument("--json", action="store_true", help="Print a JSON report of the run")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="More logging (repeatable)")
    args = ap.parse_args(argv)

    _configure_logging(args.verbose)

    try:
        paths = _expand_inputs(args.inputs)
    except SourceError as e:
        logger.error("%s", e)
        return 1

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    if not args.no_stylesheet:
        write_stylesheet(out_dir, args.stylesheet)

    config = DebugConfig(
        stylesheet=args.stylesheet,
        title=args.title,
        show_columns=not args.no_columns,
    )
    res = process_files(paths, out_dir, config)
    reports = res.reports
    failures = res.failures

    if args.json:
        payload = {
            "reports": [asdict(r) for r in reports],
            "failures": failures,
        }
        print(json.dumps(payload, indent=2, sort_keys=True))
    else:
        for r in reports:
            print(r.output)
    return 1 if failures else 0
