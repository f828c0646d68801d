"""Print a summary of one or more ESA trace files.

Usage::

    python -m esa_trace.scripts.trace_summary TRACE924.CSV [--head 5]
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from esa_trace.ingest.errors import TraceFileError
from esa_trace.ingest.readers_esa import EsaCsvReader, EsaReaderConfig
from esa_trace.models.trace import Trace

log = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "WARNING") -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    ch = logging.StreamHandler()
    ch.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATEFMT))
    ch.setLevel(root.level)

    # avoid duplicate output on repeated calls
    root.handlers.clear()
    root.addHandler(ch)


def format_summary(trace: Trace, head: int = 0) -> str:
    lines: List[str] = [
        f"file:        {trace.source_path}",
        f"original:    {trace.original_filename}",
        f"title:       {trace.title}",
        f"model:       {trace.model}",
        f"serial:      {trace.serial_num}",
    ]
    for name, (value, units) in trace.sweep_parameters().items():
        lines.append(f"{name + ':':<13}{value:.10g} {units}".rstrip())
    lines.append(f"points:      {trace.num_points} declared, {trace.n_points} decoded")
    if any(trace.labels) or any(trace.units):
        cols = [f"{lbl or '-'} [{u}]" if u else (lbl or "-") for lbl, u in zip(trace.labels, trace.units)]
        lines.append("columns:     " + ", ".join(cols))
    for w in trace.warnings:
        lines.append(f"WARNING:     {w}")
    if head > 0 and trace.n_points:
        lines.append(trace.to_frame().head(head).to_string())
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse

    p = argparse.ArgumentParser(
        prog="python -m esa_trace.scripts.trace_summary",
        description="Summarize Keysight/Agilent ESA trace exports (*.csv).",
    )
    p.add_argument("files", nargs="+", help="ESA trace files")
    p.add_argument("--legacy", action="store_true", help="Old layout without label/unit rows; header only")
    p.add_argument("--strict-count", action="store_true", help="Fail when fewer data rows than declared points")
    p.add_argument("--encoding", default="latin-1", help="File text encoding (default: latin-1)")
    p.add_argument("--head", type=int, default=0, help="Also print the first N data rows")
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = p.parse_args(argv)

    setup_logging(args.log_level)

    cfg = EsaReaderConfig(
        column_headers=not args.legacy,
        decode_data=not args.legacy,
        encoding=args.encoding,
        strict_point_count=args.strict_count,
    )
    reader = EsaCsvReader(cfg)

    n_failed = 0
    for i, f in enumerate(args.files):
        try:
            trace = reader.read(f)
        except TraceFileError as e:
            n_failed += 1
            log.error("%s: %s", f, e)
            continue
        if i:
            print()
        print(format_summary(trace, head=args.head))

    if n_failed:
        log.warning("%d of %d files failed", n_failed, len(args.files))
    return 1 if n_failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
