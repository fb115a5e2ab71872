import intmat
from intmat import _settings

import pytest

import numpy as np


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", np.dtype(object)),
        ("object", np.dtype(object)),
        ("int64", np.dtype(np.int64)),
        ("int8", np.dtype(np.int8)),
    ],
)
def test_default_dtype(monkeypatch, value, expected):
    monkeypatch.setenv("INTMAT_DEFAULT_DTYPE", value)
    assert _settings._default_dtype() == expected


@pytest.mark.parametrize("value", ["float64", "uint32", "not-a-dtype"])
def test_default_dtype_invalid(monkeypatch, value):
    monkeypatch.setenv("INTMAT_DEFAULT_DTYPE", value)
    with pytest.warns(UserWarning, match="Invalid element type"):
        assert _settings._default_dtype() == np.dtype(object)


def test_default_dtype_used_by_constructors(monkeypatch):
    monkeypatch.setattr(_settings, "DEFAULT_DTYPE", np.dtype(np.int32))
    assert intmat.Matrix(2, 2).dtype == np.dtype(np.int32)
    assert intmat.identity(2).dtype == np.dtype(np.int32)
    assert intmat.Vector(2).dtype == np.dtype(np.int32)


def test_warn_on_too_dense(monkeypatch):
    monkeypatch.setattr(_settings, "WARN_ON_TOO_DENSE", True)
    monkeypatch.setattr(_settings, "DENSE_WARN_THRESHOLD", 0.5)

    with pytest.warns(RuntimeWarning, match="more than 50%"):
        intmat.Matrix(2, 2, [1, 1, 1, 0])

    with pytest.warns(RuntimeWarning):
        intmat.Matrix.from_numpy(np.ones((2, 2), dtype=np.int64))


def test_no_warning_when_sparse_enough(monkeypatch, recwarn):
    monkeypatch.setattr(_settings, "WARN_ON_TOO_DENSE", True)
    monkeypatch.setattr(_settings, "DENSE_WARN_THRESHOLD", 0.5)
    intmat.Matrix(2, 2, [1, 0, 0, 0])
    assert not [w for w in recwarn if issubclass(w.category, RuntimeWarning)]


def test_no_warning_by_default(monkeypatch, recwarn):
    monkeypatch.setattr(_settings, "WARN_ON_TOO_DENSE", False)
    intmat.Matrix(2, 2, [1, 1, 1, 1])
    assert not [w for w in recwarn if issubclass(w.category, RuntimeWarning)]
