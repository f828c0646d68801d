"""ESA Trace -- Python reader for Keysight/Agilent ESA spectrum-analyzer trace exports.

This package provides tools for:
- Reading trace files saved by E44xxB analyzers (pseudo-CSV, not RFC 4180)
- Extracting instrument identity and sweep setup (center frequency, span,
  RBW, VBW, reference level, sweep time) with their raw unit strings
- Decoding the frequency axis and up to three trace columns into numpy arrays
- Viewing decoded samples as a pandas DataFrame

Key principles:
- Strict structure: every line must have the field count its position requires
- No repair: the first malformed line aborts the read
- No unit conversion: units are kept as written by the instrument

Main subpackages:
- ingest: EsaCsvReader and the error hierarchy
- models: Trace record and unit tags
- scripts: command-line summary tool
"""
from esa_trace.ingest import (
    EsaCsvReader,
    EsaReaderConfig,
    TraceFileError,
    TraceFormatError,
    TraceIOError,
    TraceValueError,
    parse_trace_file,
    read_trace_file,
)
from esa_trace.models import Trace

__all__ = [
    "EsaCsvReader",
    "EsaReaderConfig",
    "Trace",
    "TraceFileError",
    "TraceFormatError",
    "TraceIOError",
    "TraceValueError",
    "parse_trace_file",
    "read_trace_file",
]
