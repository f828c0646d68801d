"""Line access for the ESA pseudo-CSV format.

The ESA export is not RFC 4180 CSV: fields are separated by bare commas, there
is no quoting and no escaping. Every structural check in the reader reduces to
"take the next line, split on commas, require exactly N fields", which lives
here.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from esa_trace.ingest.errors import TraceFormatError


DELIMITER = ","


def split_fields(line: str, expected: int, what: str, line_number: int) -> List[str]:
    """
    Split ``line`` on commas and require exactly ``expected`` fields.

    Raises TraceFormatError naming ``what`` and quoting the line otherwise.
    Fields are returned untouched (no whitespace stripping).
    """
    fields = line.split(DELIMITER)
    if len(fields) != expected:
        raise TraceFormatError(
            f"error in {what} line {line_number}: expected {expected} fields, got {len(fields)}: {line!r}",
            what=what,
            line_number=line_number,
            line=line,
        )
    return fields


class LineScanner:
    """
    Sequential reader over text lines with 1-based line numbering.

    Line terminators (``\\n`` and ``\\r\\n``) are removed. The scanner only moves
    forward; ``line_number`` is the number of the line most recently returned.
    """

    def __init__(self, lines: Iterable[str]):
        self._it: Iterator[str] = iter(lines)
        self.line_number = 0

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.next_line()
            if line is None:
                return
            yield line

    def next_line(self) -> Optional[str]:
        """Next line without its terminator, or None at end of input."""
        raw = next(self._it, None)
        if raw is None:
            return None
        self.line_number += 1
        return raw.rstrip("\r\n")

    def skip(self, n: int) -> int:
        """Skip up to ``n`` lines without looking at them; return how many were skipped."""
        done = 0
        for _ in range(n):
            if self.next_line() is None:
                break
            done += 1
        return done

    def expect(self, expected: int, what: str) -> List[str]:
        """
        Read the next line and split it into exactly ``expected`` fields.

        Running out of input is reported like a malformed line, with ``line=None``.
        """
        line = self.next_line()
        if line is None:
            n = self.line_number + 1
            raise TraceFormatError(
                f"error in {what} line {n}: unexpected end of file",
                what=what,
                line_number=n,
                line=None,
            )
        return split_fields(line, expected, what, self.line_number)
