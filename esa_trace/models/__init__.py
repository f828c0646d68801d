from .trace import AmplitudeUnits, FreqUnits, SAMPLE_COLUMNS, TimeUnits, Trace

__all__ = [
    "AmplitudeUnits",
    "FreqUnits",
    "SAMPLE_COLUMNS",
    "TimeUnits",
    "Trace",
]
