from __future__ import annotations

import numpy as np
import pytest

from esa_trace.models.trace import SAMPLE_COLUMNS, Trace, frozen_array


def _trace(**kw) -> Trace:
    base = dict(
        model="E4402B",
        center_freq=34000.0,
        center_freq_units="Hz",
        ref_level=106.99,
        ref_level_units="dBuV",
        num_points=3,
        trace1_label="Trace 1",
        freq_units="Hz",
        trace1_units="dBuV",
        frequency=frozen_array(np.array([1.0, 2.0, 3.0])),
        trace1=frozen_array(np.array([4.0, np.nan, 6.0])),
        trace2=frozen_array(np.zeros(3)),
        trace3=frozen_array(np.zeros(3)),
    )
    base.update(kw)
    return Trace(**base)


def test_default_trace_is_empty() -> None:
    t = Trace()
    assert t.n_points == 0
    assert t.timestamp is None
    for name in SAMPLE_COLUMNS:
        assert getattr(t, name).dtype == np.float64
        assert not getattr(t, name).flags.writeable


def test_frozen_array_copies() -> None:
    src = np.array([1, 2, 3])
    arr = frozen_array(src)
    src[0] = 99
    assert arr.dtype == np.float64
    assert arr[0] == 1.0
    with pytest.raises(ValueError):
        arr[0] = 5.0


def test_equality_compares_arrays_with_nan() -> None:
    assert _trace() == _trace()
    assert _trace() != _trace(trace1=frozen_array(np.array([4.0, 5.0, 6.0])))
    assert _trace() != _trace(model="E4411B")
    assert _trace() != "E4402B"


def test_trace_is_unhashable() -> None:
    with pytest.raises(TypeError):
        hash(_trace())


def test_sweep_parameters_order_and_units() -> None:
    params = _trace().sweep_parameters()
    assert list(params) == ["center_freq", "span", "rbw", "vbw", "ref_level", "sweep_time"]
    assert params["center_freq"] == (34000.0, "Hz")
    assert params["ref_level"] == (106.99, "dBuV")
    assert params["span"] == (0.0, "")


def test_to_frame() -> None:
    df = _trace().to_frame()
    assert list(df.columns) == list(SAMPLE_COLUMNS)
    assert df.shape == (3, 4)
    assert (df.dtypes == np.float64).all()
    assert df["frequency"].tolist() == [1.0, 2.0, 3.0]
    assert df.attrs["labels"]["trace1"] == "Trace 1"
    assert df.attrs["units"] == {"frequency": "Hz", "trace1": "dBuV", "trace2": "", "trace3": ""}
    # the frame owns its data
    df.loc[0, "trace2"] = 1.0
    assert df.loc[0, "trace2"] == 1.0
