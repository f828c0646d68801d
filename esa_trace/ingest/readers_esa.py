from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from esa_trace.ingest.errors import TraceFileError, TraceFormatError, TraceIOError, TraceValueError
from esa_trace.ingest.lines import LineScanner, split_fields
from esa_trace.models.trace import SAMPLE_COLUMNS, Trace, frozen_array

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class EsaReaderConfig:
    """
    Reader configuration for Keysight/Agilent ESA trace exports (*.csv).

    column_headers:
      - True: lines 14 and 15 hold the column labels and column units.
      - False: older exports without these two rows; data (if any) starts at line 14.
    decode_data:
      - True: decode every remaining line into the four sample arrays.
      - False: header only; the remaining lines are read and discarded and the
               sample arrays stay empty.
    encoding:
      Text encoding of the file. Decoding failures are reported as TraceIOError.
    strict_point_count:
      - False: a data section shorter than the declared point count leaves the
               tail at 0.0 and adds a warning to the Trace.
      - True: the same situation is a TraceFormatError.
    """
    column_headers: bool = True
    decode_data: bool = True
    encoding: str = "latin-1"
    strict_point_count: bool = False


def _text(s: str) -> str:
    return s


def _serial(s: str) -> str:
    return s.removesuffix("\x00")


# (logical line name, expected field count, Trace attribute, converter)
# Three-field lines carry a unit string in field 2, stored as <attribute>_units.
_HEADER_LINES: Tuple[Tuple[str, int, str, Callable[[str], Any]], ...] = (
    ("original filename", 2, "original_filename", _text),
    ("title", 2, "title", _text),
    ("model", 2, "model", _text),
    ("serial number", 2, "serial_num", _serial),
    ("center frequency", 3, "center_freq", float),
    ("span", 3, "span", float),
    ("rbw", 3, "rbw", float),
    ("vbw", 3, "vbw", float),
    ("ref level", 3, "ref_level", float),
    ("sweep time", 3, "sweep_time", float),
    ("num of points", 2, "num_points", int),
)

# Line holding the declared point count.
_N_HEADER_LINES = len(_HEADER_LINES)

# Blank separator lines between the header and the column rows.
_N_SEPARATOR_LINES = 2


@dataclass
class _TraceState:
    """Mutable accumulator turned into an immutable Trace on success or failure."""
    path: Path
    values: Dict[str, Any] = field(default_factory=dict)
    samples: Optional[np.ndarray] = None
    warnings: List[str] = field(default_factory=list)

    def build(self) -> Trace:
        kwargs: Dict[str, Any] = dict(self.values)
        if self.samples is not None:
            for row, name in enumerate(SAMPLE_COLUMNS):
                kwargs[name] = frozen_array(self.samples[row])
        return Trace(source_path=self.path, warnings=tuple(self.warnings), **kwargs)


class EsaCsvReader:
    """
    Reads trace data saved by Keysight/Agilent ESA spectrum analyzers (E44xxB family).

    The export looks like CSV but does not follow RFC 4180: the first lines are a
    positional header where each line must have an exact number of comma-separated
    fields, followed by one row per trace point (frequency, trace 1, trace 2, trace 3).

    Contract:
      - Any line with the wrong field count, or a numeric field that does not
        parse, aborts the read. Nothing is skipped or repaired.
      - More data rows than the declared point count is an error.
      - Every raised TraceFileError carries the partially built Trace in ``partial``.
      - The file handle is closed on every exit path.
    """

    def __init__(self, config: Optional[EsaReaderConfig] = None):
        self.config = config or EsaReaderConfig()

    def read(self, path: str | Path) -> Trace:
        p = Path(path).expanduser().resolve()
        state = _TraceState(path=p)
        try:
            with p.open("r", encoding=self.config.encoding, newline="\n") as fh:
                log.debug("reading ESA trace file %s", p)
                scanner = LineScanner(fh)
                self._read_header(scanner, state)
                if self.config.decode_data:
                    self._read_data(scanner, state)
                else:
                    n_skipped = sum(1 for _ in scanner)
                    log.debug("header-only read; discarded %d remaining lines", n_skipped)
        except TraceFileError as e:
            e.path = p
            e.partial = state.build()
            raise
        except (OSError, UnicodeDecodeError) as e:
            raise TraceIOError(f"cannot read {p}: {e}", path=p, partial=state.build()) from e

        trace = state.build()
        log.debug("decoded %s s/n %s: %d points", trace.model, trace.serial_num, trace.n_points)
        return trace

    def _read_header(self, scanner: LineScanner, state: _TraceState) -> None:
        for what, n_fields, attr, convert in _HEADER_LINES:
            fields = scanner.expect(n_fields, what)
            if attr == "original_filename":
                state.values["timestamp_text"] = fields[0]
            state.values[attr] = self._convert(convert, fields[1], what, scanner.line_number)
            if n_fields == 3:
                state.values[f"{attr}_units"] = fields[2].strip()

        n = state.values["num_points"]
        if n < 0:
            raise TraceFormatError(
                f"error in num of points line {scanner.line_number}: negative point count {n}",
                what="num of points",
                line_number=scanner.line_number,
                line=None,
            )

        scanner.skip(_N_SEPARATOR_LINES)

        if self.config.column_headers:
            labels = scanner.expect(len(SAMPLE_COLUMNS), "column labels")
            units = scanner.expect(len(SAMPLE_COLUMNS), "column units")
            for name, label, unit in zip(("freq", "trace1", "trace2", "trace3"), labels, units):
                state.values[f"{name}_label"] = label
                state.values[f"{name}_units"] = unit.strip()

        log.debug("header ok: model=%s num_points=%d", state.values["model"], n)

    def _read_data(self, scanner: LineScanner, state: _TraceState) -> None:
        n = int(state.values["num_points"])
        try:
            state.samples = np.zeros((len(SAMPLE_COLUMNS), n), dtype=np.float64)
        except (MemoryError, ValueError) as e:
            raise TraceFormatError(
                f"error in num of points: cannot hold {n} points ({type(e).__name__}: {e})",
                what="num of points",
                line_number=_N_HEADER_LINES,
                line=None,
            ) from e

        idx = 0
        for line in scanner:
            if idx >= n:
                raise TraceFormatError(
                    f"error in data point {idx} (line {scanner.line_number}): "
                    f"more data rows than the declared {n} points: {line!r}",
                    what=f"data point {idx}",
                    line_number=scanner.line_number,
                    line=line,
                )
            fields = split_fields(line, len(SAMPLE_COLUMNS), f"data point {idx}", scanner.line_number)
            for row, (name, text) in enumerate(zip(SAMPLE_COLUMNS, fields)):
                state.samples[row, idx] = self._convert(
                    float, text.strip(), name, scanner.line_number, point_index=idx
                )
            idx += 1

        if idx < n:
            msg = f"data section holds {idx} points, header declares {n}; remaining points left at 0.0"
            if self.config.strict_point_count:
                raise TraceFormatError(
                    f"error in data section: {msg}",
                    what="data section",
                    line_number=scanner.line_number + 1,
                    line=None,
                )
            state.warnings.append(msg)
            log.debug(msg)

    @staticmethod
    def _convert(
        convert: Callable[[str], Any],
        text: str,
        field_name: str,
        line_number: int,
        point_index: Optional[int] = None,
    ) -> Any:
        try:
            # no digit separators ("1_000")
            if "_" in text:
                raise ValueError(text)
            return convert(text)
        except ValueError:
            where = f"line {line_number}" if point_index is None else f"data point {point_index} (line {line_number})"
            raise TraceValueError(
                f"error parsing {field_name} at {where}: {text!r}",
                field=field_name,
                text=text,
                line_number=line_number,
                point_index=point_index,
            ) from None


def read_trace_file(path: str | Path, config: Optional[EsaReaderConfig] = None) -> Trace:
    """Read one ESA trace file; raise a TraceFileError subclass on failure."""
    return EsaCsvReader(config).read(path)


def parse_trace_file(
    path: str | Path,
    config: Optional[EsaReaderConfig] = None,
) -> Tuple[Trace, Optional[TraceFileError]]:
    """
    Read one ESA trace file without raising for file-level problems.

    Returns ``(trace, None)`` on success and ``(partial_trace, error)`` otherwise,
    where ``partial_trace`` holds whatever was decoded before the failure.
    """
    try:
        return read_trace_file(path, config), None
    except TraceFileError as e:
        partial = e.partial if e.partial is not None else Trace(source_path=e.path)
        return partial, e
