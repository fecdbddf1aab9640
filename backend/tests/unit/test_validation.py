import numpy as np

from radixfft.validation import (
    validate_band,
    validate_finite_array,
    validate_length,
    validate_positive,
    validate_sample_buffer,
)


def test_validate_length_accepts_numpy_integers() -> None:
    assert validate_length(np.int64(12)) == (True, "")


def test_validate_length_rejects_invalid() -> None:
    ok, reason = validate_length(0)
    assert not ok
    assert ">= 1" in reason

    ok, reason = validate_length(True)
    assert not ok
    assert "integer" in reason

    ok, reason = validate_length(12.0)
    assert not ok


def test_validate_length_upper_bound() -> None:
    ok, reason = validate_length(1 << 40)
    assert not ok
    assert "exceeds" in reason


def test_validate_sample_buffer() -> None:
    assert validate_sample_buffer(np.zeros(8), 8, "x_re") == (True, "")

    ok, reason = validate_sample_buffer(np.zeros((2, 4)), 8, "x_re")
    assert not ok
    assert "1-D" in reason

    ok, reason = validate_sample_buffer(np.zeros(7), 8, "x_im")
    assert not ok
    assert "x_im has 7 samples" in reason


def test_validate_finite_array() -> None:
    assert validate_finite_array(np.array([0.0, 1.0]))
    assert not validate_finite_array(np.array([0.0, np.inf]))


def test_validate_band() -> None:
    assert validate_band(0.0, 100.0) == (True, "")
    assert not validate_band(100.0, 10.0)[0]
    assert not validate_band(-1.0, 10.0)[0]
    assert not validate_band(0.0, float("nan"))[0]


def test_validate_positive() -> None:
    assert validate_positive(1.5, "sigma") == (True, "")
    ok, reason = validate_positive(0.0, "sigma")
    assert not ok
    assert "sigma" in reason
