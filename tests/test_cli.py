from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from rmslex import DebugConfig, SourceError, discover_scripts, process_file, process_files
from rmslex.cli import main


def _write(p: Path, src: str) -> Path:
    p.write_bytes(src.encode("utf-8"))
    return p


def test_process_file_report(tmp_path: Path) -> None:
    src = _write(tmp_path / "arabia.rms", "/* a /* b */ c */\n*/ /* open\n")
    out = tmp_path / "out"
    out.mkdir()

    report = process_file(src, out)
    assert report.output == str(out / "arabia.html")
    assert report.matched_pairs == 2
    assert report.unclosed_openers == 1
    assert report.unmatched_closers == 1
    assert "comment-1" in Path(report.output).read_text(encoding="utf-8")


def test_process_file_logs_unbalanced_comments(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    src = _write(tmp_path / "bad.rms", "GRASS */\n/* x\n")
    with caplog.at_level(logging.WARNING, logger="rmslex"):
        process_file(src, tmp_path)
    msgs = [r.getMessage() for r in caplog.records]
    assert any("1:7-8: comment closer without an opener" in m for m in msgs)
    assert any("2:1-2: comment is never closed" in m for m in msgs)


def test_batch_skips_unreadable_files(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    good = _write(tmp_path / "good.rms", "/* ok */\n")
    missing = tmp_path / "missing.rms"
    bad = tmp_path / "bad.rms"
    bad.write_bytes(b"\xff\xfe")
    later = _write(tmp_path / "later.rms", "GRASS\n")

    with caplog.at_level(logging.ERROR, logger="rmslex"):
        res = process_files([good, missing, bad, later], tmp_path / "out")

    assert not res.ok
    assert set(res.failures) == {str(missing), str(bad)}
    assert [Path(r.source).name for r in res.reports] == ["good.rms", "later.rms"]
    assert any("skipping" in r.getMessage() for r in caplog.records)


def test_discover_scripts_is_flat_and_sorted(tmp_path: Path) -> None:
    _write(tmp_path / "b.rms", "")
    _write(tmp_path / "a.rms", "")
    (tmp_path / "nested").mkdir()
    _write(tmp_path / "nested" / "c.rms", "")
    assert [p.name for p in discover_scripts(tmp_path)] == ["a.rms", "b.rms"]


def test_discover_scripts_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(SourceError):
        discover_scripts(tmp_path / "nope")


def test_cli_renders_directory(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    maps = tmp_path / "maps"
    maps.mkdir()
    _write(maps / "arabia.rms", "<PLAYER_SETUP>\n/* teams */ random_placement\n")
    _write(maps / "islands.rms", "base_terrain WATER")
    out = tmp_path / "out"

    rc = main([str(maps), "-o", str(out)])
    assert rc == 0
    assert (out / "style.css").is_file()
    page = (out / "arabia.html").read_text(encoding="utf-8")
    assert "<title>arabia.rms</title>" in page
    assert "comment-0" in page
    printed = capsys.readouterr().out.splitlines()
    assert printed == [str(out / "arabia.html"), str(out / "islands.html")]


def test_cli_json_report_and_failure_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    good = _write(tmp_path / "good.rms", "/* x */ */")
    missing = tmp_path / "missing.rms"
    out = tmp_path / "out"

    rc = main([str(good), str(missing), "-o", str(out), "--json", "--no-stylesheet", "--title", "Debug"])
    assert rc == 1
    assert not (out / "style.css").exists()
    payload = json.loads(capsys.readouterr().out)
    assert list(payload["failures"]) == [str(missing)]
    (report,) = payload["reports"]
    assert report["matched_pairs"] == 1
    assert report["unmatched_closers"] == 1
    assert "<title>Debug</title>" in (out / "good.html").read_text(encoding="utf-8")


def test_batch_skips_file_whose_page_cannot_be_written(tmp_path: Path) -> None:
    a = _write(tmp_path / "a.rms", "/* a */\n")
    b = _write(tmp_path / "b.rms", "GRASS\n")
    out = tmp_path / "out"
    (out / "a.html").mkdir(parents=True)

    res = process_files([a, b], out)

    assert list(res.failures) == [str(a)]
    assert [Path(r.source).name for r in res.reports] == ["b.rms"]
    assert (out / "b.html").is_file()


def test_process_file_wraps_write_error(tmp_path: Path) -> None:
    a = _write(tmp_path / "a.rms", "GRASS\n")
    (tmp_path / "a.html").mkdir()
    with pytest.raises(SourceError) as e:
        process_file(a, tmp_path)
    assert e.value.path == str(tmp_path / "a.html")
    assert isinstance(e.value.__cause__, OSError)


def test_pages_are_titled_after_their_script(tmp_path: Path) -> None:
    a = _write(tmp_path / "arabia.rms", "GRASS\n")
    out = tmp_path / "out"

    res = process_files([a], out)
    assert "<title>arabia.rms</title>" in Path(res.reports[0].output).read_text(encoding="utf-8")

    res = process_files([a], out, DebugConfig(title="Fixed"))
    assert "<title>Fixed</title>" in Path(res.reports[0].output).read_text(encoding="utf-8")
