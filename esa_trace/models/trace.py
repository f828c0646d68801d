from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from pathlib import Path
from typing import Dict, NewType, Optional, Tuple

import numpy as np
import pandas as pd


FreqUnits = NewType("FreqUnits", str)
AmplitudeUnits = NewType("AmplitudeUnits", str)
TimeUnits = NewType("TimeUnits", str)

# Sample columns, in file order.
SAMPLE_COLUMNS: Tuple[str, ...] = ("frequency", "trace1", "trace2", "trace3")


def _empty() -> np.ndarray:
    return frozen_array(np.zeros(0, dtype=np.float64))


def frozen_array(values: np.ndarray) -> np.ndarray:
    """Return a read-only float64 copy of ``values``."""
    arr = np.array(values, dtype=np.float64, copy=True)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Trace:
    """
    One ESA capture: instrument metadata, sweep setup and the sample arrays.

    Notes
    - Sweep values are kept exactly as written by the analyzer; units are the raw
      strings from the header (no conversion).
    - frequency/trace1/trace2/trace3 are read-only float64 arrays of length
      num_points when the data section was decoded, empty otherwise.
    - timestamp is never parsed from the file; the raw first field of line 1 is
      kept in timestamp_text.
    """
    timestamp: Optional[datetime] = None
    timestamp_text: str = ""
    original_filename: str = ""
    title: str = ""
    model: str = ""
    serial_num: str = ""

    center_freq: float = 0.0
    center_freq_units: FreqUnits = FreqUnits("")
    span: float = 0.0
    span_units: FreqUnits = FreqUnits("")
    rbw: float = 0.0
    rbw_units: FreqUnits = FreqUnits("")
    vbw: float = 0.0
    vbw_units: FreqUnits = FreqUnits("")
    ref_level: float = 0.0
    ref_level_units: AmplitudeUnits = AmplitudeUnits("")
    sweep_time: float = 0.0
    sweep_time_units: TimeUnits = TimeUnits("")

    num_points: int = 0

    freq_label: str = ""
    trace1_label: str = ""
    trace2_label: str = ""
    trace3_label: str = ""

    freq_units: str = ""
    trace1_units: str = ""
    trace2_units: str = ""
    trace3_units: str = ""

    frequency: np.ndarray = field(default_factory=_empty)
    trace1: np.ndarray = field(default_factory=_empty)
    trace2: np.ndarray = field(default_factory=_empty)
    trace3: np.ndarray = field(default_factory=_empty)

    source_path: Optional[Path] = None
    warnings: Tuple[str, ...] = ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trace):
            return NotImplemented
        for f in fields(self):
            a = getattr(self, f.name)
            b = getattr(other, f.name)
            if f.name in SAMPLE_COLUMNS:
                if not np.array_equal(a, b, equal_nan=True):
                    return False
            elif a != b:
                return False
        return True

    @property
    def n_points(self) -> int:
        """Number of decoded samples (0 when the data section was not decoded)."""
        return int(self.frequency.size)

    @property
    def labels(self) -> Tuple[str, str, str, str]:
        return (self.freq_label, self.trace1_label, self.trace2_label, self.trace3_label)

    @property
    def units(self) -> Tuple[str, str, str, str]:
        return (self.freq_units, self.trace1_units, self.trace2_units, self.trace3_units)

    def sweep_parameters(self) -> Dict[str, Tuple[float, str]]:
        """Sweep setup as ``name -> (value, units)`` in header order."""
        return {
            "center_freq": (self.center_freq, self.center_freq_units),
            "span": (self.span, self.span_units),
            "rbw": (self.rbw, self.rbw_units),
            "vbw": (self.vbw, self.vbw_units),
            "ref_level": (self.ref_level, self.ref_level_units),
            "sweep_time": (self.sweep_time, self.sweep_time_units),
        }

    def to_frame(self) -> pd.DataFrame:
        """
        Sample arrays as a DataFrame (columns: frequency, trace1, trace2, trace3).

        Column labels and units from the file are stored in ``df.attrs``.
        """
        df = pd.DataFrame({name: np.array(getattr(self, name)) for name in SAMPLE_COLUMNS}).astype(np.float64)
        df.attrs["labels"] = dict(zip(SAMPLE_COLUMNS, self.labels))
        df.attrs["units"] = dict(zip(SAMPLE_COLUMNS, self.units))
        return df
