"""Ingest package - ESA trace-file reading.

This package handles:
- Line-level access to the ESA pseudo-CSV export (fixed field counts per line)
- Decoding the positional header (instrument identity, sweep setup, point count)
- Decoding the data section into frequency and trace arrays

Key classes:
- EsaCsvReader: reads one export file into a Trace
- EsaReaderConfig: header layout and strictness options

Design principle:
- A line that breaks its structural contract aborts the read
- Errors carry the partially decoded Trace for diagnostics
"""
from .errors import TraceFileError, TraceFormatError, TraceIOError, TraceValueError
from .readers_esa import EsaCsvReader, EsaReaderConfig, parse_trace_file, read_trace_file

__all__ = [
    "EsaCsvReader",
    "EsaReaderConfig",
    "TraceFileError",
    "TraceFormatError",
    "TraceIOError",
    "TraceValueError",
    "parse_trace_file",
    "read_trace_file",
]
