import intmat
from intmat import Matrix, TransposedVector, Vector, identity

import pytest

import numpy as np


@pytest.mark.parametrize("cls", [Vector, TransposedVector])
@pytest.mark.parametrize(
    "length, values, expected",
    [
        (3, None, [0, 0, 0]),
        (3, [], [0, 0, 0]),
        (4, [0, 2, 0, -1], [0, 2, 0, -1]),
    ],
)
def test_construct(cls, length, values, expected):
    v = cls(length, values)
    assert len(v) == length
    assert v.shape == (length,)
    assert list(v) == expected
    assert v.todense().tolist() == expected


@pytest.mark.parametrize("cls", [Vector, TransposedVector])
def test_construct_length_mismatch(cls):
    with pytest.raises(intmat.InvalidArgumentError):
        cls(3, [1, 2])


def test_matrix_shapes():
    assert Vector(4).matrix.shape == (1, 4)
    assert TransposedVector(4).matrix.shape == (4, 1)


def test_from_matrix():
    assert Vector.from_matrix(Matrix(1, 3)).shape == (3,)
    assert TransposedVector.from_matrix(Matrix(3, 1)).shape == (3,)
    with pytest.raises(intmat.ShapeMismatchError):
        Vector.from_matrix(Matrix(3, 1))
    with pytest.raises(intmat.ShapeMismatchError):
        TransposedVector.from_matrix(Matrix(1, 3))
    with pytest.raises(intmat.NilOperandError):
        Vector.from_matrix(None)


@pytest.mark.parametrize("cls", [Vector, TransposedVector])
def test_at_set(cls):
    v = cls(3)
    v.set(1, 4)
    assert v.at(1) == 4
    assert v.at(0) == 0
    v.set(1, 0)
    assert v.matrix.nnz == 0

    with pytest.raises(intmat.OutOfBoundsError):
        v.at(3)
    with pytest.raises(intmat.OutOfBoundsError):
        v.set(-1, 1)


def test_getitem_setitem():
    v = Vector(5, [1, 2, 3, 4, 5])
    assert v[0] == 1
    assert v[-1] == 5
    assert list(v[1:4]) == [2, 3, 4]
    v[-2] = 0
    assert list(v) == [1, 2, 3, 0, 5]
    with pytest.raises(IndexError):
        v[::2]


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (Vector(3, [0, 1, 0]), Vector(3, [1, 0, 0]), [1, 1, 0]),
        (Vector(3, [1, 1, 1]), Vector(3, [-1, 0, 1]), [0, 1, 2]),
        (Vector(2), Vector(2), [0, 0]),
    ],
)
def test_add(a, b, expected):
    out = Vector(len(a))
    out.add(a, b)
    assert list(out) == expected


def test_add_transposed():
    out = TransposedVector(3)
    out.add(TransposedVector(3, [0, 1, 0]), TransposedVector(3, [1, 0, 0]))
    assert out.equals(TransposedVector(3, [1, 1, 0]))


def test_add_mixed_orientation():
    out = Vector(3)
    out.add(Vector(3, [1, 0, 0]), TransposedVector(3, [0, 0, 2]))
    assert list(out) == [1, 0, 2]


def test_add_errors():
    v = Vector(3)
    with pytest.raises(intmat.NilOperandError):
        v.add(None, Vector(3))
    with pytest.raises(intmat.SelfAliasingError):
        v.add(v, Vector(3))
    with pytest.raises(intmat.ShapeMismatchError):
        v.add(Vector(3), Vector(2))
    with pytest.raises(intmat.ShapeMismatchError):
        v.add(Vector(2), Vector(2))


def test_add_into_slice():
    original = Vector(5, [1, 0, 1, 0, 1])
    s = original.slice(1, 3)
    s.add(s.copy(), Vector(3, [1, 1, 1]))

    assert list(s) == [1, 2, 1]
    assert list(original) == [1, 1, 2, 1, 1]


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (Vector(3, [1, 1, 1]), Vector(3, [1, 1, 1]), 3),
        (Vector(3, [1, 0, 1]), Vector(3, [1, 1, 1]), 2),
        (Vector(3, [1, 2, 3]), TransposedVector(3, [4, 5, 6]), 32),
        (TransposedVector(2, [2**64, 1]), TransposedVector(2, [2, 0]), 2**65),
        (Vector(3), Vector(3, [1, 1, 1]), 0),
    ],
)
def test_dot(a, b, expected):
    assert a.dot(b) == expected


def test_dot_errors():
    with pytest.raises(intmat.ShapeMismatchError):
        Vector(3).dot(Vector(2))
    with pytest.raises(intmat.NilOperandError):
        Vector(3).dot(None)


def test_dot_of_views():
    m = Matrix(3, 3, [1, 2, 3, 4, 5, 6, 7, 8, 9])
    assert m.row(1).dot(m.column(2)) == 4 * 3 + 5 * 6 + 6 * 9


@pytest.mark.parametrize(
    "vec, mat, expected",
    [
        (Vector(3, [1, 0, 1]), identity(3), [1, 0, 1]),
        (Vector(3, [1, 0, 2]), Matrix(3, 2, [1, 1, 0, 1, 1, 0]), [3, 1]),
        (TransposedVector(2, [1, 1]), Matrix(2, 2, [1, 2, 3, 4]), [4, 6]),
    ],
)
def test_vector_matrix_mul(vec, mat, expected):
    out = Vector(mat.shape[1])
    out.mul(vec, mat)
    assert list(out) == expected


def test_vector_matrix_mul_errors():
    out = Vector(2)
    with pytest.raises(intmat.ShapeMismatchError):
        out.mul(Vector(2), Matrix(3, 2))
    with pytest.raises(intmat.ShapeMismatchError):
        out.mul(Vector(3), Matrix(3, 3))
    with pytest.raises(intmat.SelfAliasingError):
        out.mul(out, Matrix(2, 2))
    with pytest.raises(intmat.NilOperandError):
        out.mul(None, Matrix(2, 2))


@pytest.mark.parametrize(
    "mat, vec, expected",
    [
        (identity(3), TransposedVector(3, [1, 0, 1]), [1, 0, 1]),
        (Matrix(2, 2, [1, 2, 3, 4]), TransposedVector(2, [1, 1]), [3, 7]),
        (Matrix(2, 3, [1, 0, 0, 0, 0, 5]), Vector(3, [2, 9, 1]), [2, 5]),
    ],
)
def test_matrix_vector_mul(mat, vec, expected):
    out = TransposedVector(mat.shape[0])
    out.mul_vec(mat, vec)
    assert list(out) == expected


def test_matrix_vector_mul_errors():
    out = TransposedVector(2)
    with pytest.raises(intmat.ShapeMismatchError):
        out.mul_vec(Matrix(2, 3), TransposedVector(2))
    with pytest.raises(intmat.ShapeMismatchError):
        out.mul_vec(Matrix(3, 2), TransposedVector(2))
    with pytest.raises(intmat.SelfAliasingError):
        out.mul_vec(Matrix(2, 2), out)


def test_matrix_vector_mul_into_column():
    m = Matrix(3, 3)
    m.column(1).mul_vec(Matrix(3, 2, [1, 0, 0, 1, 1, 1]), TransposedVector(2, [2, 3]))
    assert m.equals(Matrix(3, 3, [0, 2, 0, 0, 3, 0, 0, 5, 0]))


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (Vector(3, [0, 1, 0]), Vector(3, [0, 1, 0]), True),
        (Vector(3, [0, 1, 0]), Vector(3, [1, 0, 0]), False),
        (Vector(3, [0, 1, 0]), Vector(4, [0, 1, 0, 0]), False),
        (Vector(3, [0, 1, 0]), None, False),
        (Vector(3, [0, 1, 0]), TransposedVector(3, [0, 1, 0]), False),
        (identity(3).row(1), Vector(3, [0, 1, 0]), True),
        (TransposedVector(3, [0, 1, 0]), identity(3).column(1), True),
        (TransposedVector(3, [1, 1, 1]), identity(3).column(1), False),
    ],
)
def test_equals(a, b, expected):
    assert a.equals(b) is expected


def test_eq_operator():
    assert Vector(2, [1, 0]) == Vector(2, [1, 0])
    assert Vector(2, [1, 0]) != Vector(2, [0, 1])
    assert (Vector(2) == 3) is False


def test_set_copies_row():
    src = identity(5).row(2)
    v = Vector(5)
    for i in range(len(v)):
        v.set(i, src.at(i))
    assert v.equals(src)


def test_set_through_rows():
    m = Matrix(5, 5)
    for i in range(5):
        m.row(i).set(i, 1)
    assert m.equals(identity(5))


@pytest.mark.parametrize("cls", [Vector, TransposedVector])
def test_set_vec(cls):
    v = cls(5, [1, 1, 1, 1, 1])
    v.set_vec(cls(3, [0, 1, 0]), 1)
    assert list(v) == [1, 0, 1, 0, 1]


def test_set_vec_other_orientation():
    v = Vector(4)
    v.set_vec(TransposedVector(2, [3, 4]), 2)
    assert list(v) == [0, 0, 3, 4]


@pytest.mark.parametrize("i", [-1, 3, 4])
def test_set_vec_out_of_bounds(i):
    with pytest.raises(intmat.OutOfBoundsError):
        Vector(5).set_vec(Vector(3), i)


def test_set_vec_nil():
    with pytest.raises(intmat.NilOperandError):
        Vector(5).set_vec(None, 0)


@pytest.mark.parametrize(
    "vec, expected",
    [
        (identity(4).row(2), {2: 1}),
        (Matrix(4, 6, [1, 1, 0, 1, 0, 0] + [0] * 18).row(0), {0: 1, 1: 1, 3: 1}),
        (identity(4).column(3), {3: 1}),
        (Vector(3), {}),
    ],
)
def test_nonzero_values(vec, expected):
    assert vec.nonzero_values() == expected


def test_slice():
    original = Vector(7, [0, 0, 1, 0, 1, 0, 0])
    s = original.slice(1, 5).slice(1, 3)
    assert list(s) == [1, 0, 1]
    s.set(1, 7)
    assert original.at(3) == 7


@pytest.mark.parametrize("cls", [Vector, TransposedVector])
@pytest.mark.parametrize(
    "i, length, error",
    [
        (0, 0, intmat.InvalidArgumentError),
        (5, 1, intmat.OutOfBoundsError),
        (3, 3, intmat.OutOfBoundsError),
    ],
)
def test_slice_errors(cls, i, length, error):
    with pytest.raises(error):
        cls(5).slice(i, length)


def test_transpose_is_connected():
    v = Vector(3, [1, 0, 2])
    t = v.T
    assert isinstance(t, TransposedVector)
    assert list(t) == [1, 0, 2]
    t.set(1, 5)
    assert v.at(1) == 5
    assert isinstance(t.T, Vector)
    assert t.T.equals(v)


@pytest.mark.parametrize(
    "vec, expected",
    [
        (Vector(3, [1, 0, -2]), [-1, 0, 2]),
        (TransposedVector(3, [0, 0, 1]), [0, 0, -1]),
        (Vector(2), [0, 0]),
    ],
)
def test_negate(vec, expected):
    vec.negate()
    assert list(vec) == expected


def test_copy_is_independent():
    m = identity(3)
    v = m.row(0).copy()
    v.set(0, 9)
    assert m.at(0, 0) == 1
    assert v.matrix.is_root


def test_dtype():
    v = Vector(3, [1, 2, 3], dtype="int16")
    assert v.dtype == np.dtype("int16")
    assert v.todense().dtype == np.dtype("int16")


def test_str():
    assert str(Vector(3, [1, 0, 2])) == "<Vector: length=3, dtype=object, nnz=2>"
    assert repr(TransposedVector(2)) == "<TransposedVector: length=2, dtype=object, nnz=0>"


def test_unhashable():
    with pytest.raises(TypeError):
        hash(Vector(2))
