from __future__ import annotations

from pathlib import Path
from typing import Optional

from esa_trace.models.trace import Trace


class TraceFileError(Exception):
    """
    Base class for every failure while reading an ESA trace file.

    path:
      File being read.
    partial:
      Trace record holding everything decoded before the failure. Callers may
      inspect it for diagnostics; it is never a complete capture.
    """

    def __init__(self, message: str, *, path: Optional[Path] = None, partial: Optional[Trace] = None):
        super().__init__(message)
        self.path = path
        self.partial = partial


class TraceIOError(TraceFileError):
    """The file could not be opened, read or decoded as text."""


class TraceFormatError(TraceFileError, ValueError):
    """A line does not have the structure expected at its position."""

    def __init__(
        self,
        message: str,
        *,
        what: str,
        line_number: int,
        line: Optional[str],
        path: Optional[Path] = None,
        partial: Optional[Trace] = None,
    ):
        super().__init__(message, path=path, partial=partial)
        self.what = what
        self.line_number = line_number
        self.line = line


class TraceValueError(TraceFileError, ValueError):
    """A field expected to be numeric could not be converted."""

    def __init__(
        self,
        message: str,
        *,
        field: str,
        text: str,
        line_number: int,
        point_index: Optional[int] = None,
        path: Optional[Path] = None,
        partial: Optional[Trace] = None,
    ):
        super().__init__(message, path=path, partial=partial)
        self.field = field
        self.text = text
        self.line_number = line_number
        self.point_index = point_index
