from __future__ import annotations

import logging
from pathlib import Path

import pytest

from esa_trace.ingest.readers_esa import read_trace_file
from esa_trace.scripts.trace_summary import format_summary, main, setup_logging

DATA = Path(__file__).resolve().parent / "data"


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_format_summary_e4402b() -> None:
    text = format_summary(read_trace_file(DATA / "e4402b_trace924.csv"))
    assert "model:       E4402B" in text
    assert "serial:      MY45104598" in text
    assert "center_freq: 34000 Hz" in text
    assert "ref_level:   106.99 dBuV" in text
    assert "points:      401 declared, 401 decoded" in text
    assert "Trace 1 [dBuV]" in text
    assert "WARNING" not in text


def test_format_summary_head() -> None:
    text = format_summary(read_trace_file(DATA / "e4411b_trace080.csv"), head=2)
    assert "frequency" in text
    assert "3.7123" in text


def test_main_ok(capsys) -> None:
    rc = main([str(DATA / "e4402b_trace924.csv"), str(DATA / "e4411b_trace080.csv")])
    out = capsys.readouterr().out
    assert rc == 0
    assert "E4402B" in out and "E4411B" in out


def test_main_legacy_reads_header_only(capsys) -> None:
    rc = main(["--legacy", str(DATA / "e4402b_trace924.csv")])
    out = capsys.readouterr().out
    assert rc == 0
    assert "401 declared, 0 decoded" in out


def test_main_reports_failure_and_continues(tmp_path: Path, capsys) -> None:
    bad = tmp_path / "bad.csv"
    bad.write_text("only one line\n", encoding="latin-1")
    rc = main([str(bad), str(DATA / "e4402b_trace924.csv")])
    captured = capsys.readouterr()
    assert rc == 1
    assert "E4402B" in captured.out
    assert "bad.csv" in captured.err
    assert "ERROR" in captured.err


def test_setup_logging_does_not_duplicate_handlers() -> None:
    setup_logging("DEBUG")
    setup_logging("INFO")
    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.INFO
