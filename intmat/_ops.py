"""
Arithmetic on :obj:`Matrix` views.

Every function that writes takes its destination first and fills it in
place. Destinations may be slices or transposes of larger matrices, but
must not overlap the storage of their inputs.
"""
from numbers import Integral

from ._errors import (
    InvalidArgumentError,
    NilOperandError,
    SelfAliasingError,
    ShapeMismatchError,
)
from ._matrix import Matrix, identity
from ._utils import _zero_of_dtype


def _check_operands(operation, out, *inputs):
    if out is None or any(x is None for x in inputs):
        raise NilOperandError(operation)

    for x in inputs:
        if out is x or out._overlaps(x):
            raise SelfAliasingError(operation)


def _check_same_shape(operation, out, a, b):
    if a.shape != b.shape:
        raise ShapeMismatchError(
            f"{operation} input mat shapes do not match a=({a._rows},{a._cols}) b=({b._rows},{b._cols})"
        )
    if out.shape != a.shape:
        raise ShapeMismatchError(
            f"mat shape ({out._rows},{out._cols}) does not match expected ({a._rows},{a._cols})"
        )


def add(out, a, b):
    """
    Store the sum of ``a`` and ``b`` in ``out``.

    Parameters
    ----------
    out : Matrix
        The destination. Must not be, or overlap the storage of, ``a`` or ``b``.
    a, b : Matrix
        The operands. All three matrices must have the same shape.

    Raises
    ------
    NilOperandError
        If any operand is ``None``.
    SelfAliasingError
        If ``out`` aliases ``a`` or ``b``.
    ShapeMismatchError
        If the shapes differ.

    Examples
    --------
    >>> out = Matrix(3, 3)
    >>> add(out, identity(3), identity(3))
    >>> out.todense()  # doctest: +NORMALIZE_WHITESPACE
    array([[2, 0, 0],
           [0, 2, 0],
           [0, 0, 2]], dtype=object)
    """
    _check_operands("addition", out, a, b)
    _check_same_shape("addition", out, a, b)

    r0, c0 = out._row_start, out._col_start
    out._set_matrix(a, r0, c0)

    for i, j, v in b._cells():
        current = out._at(i + r0, j + c0)
        out._set(i + r0, j + c0, v if current is None else current + v)


def matmul(out, a, b):
    """
    Store the matrix product of ``a`` and ``b`` in ``out``.

    Only rows populated in ``a`` and columns populated in ``b`` are visited,
    and each dot product only touches the inner indices present in both.

    Raises
    ------
    NilOperandError
        If any operand is ``None``.
    SelfAliasingError
        If ``out`` aliases ``a`` or ``b``.
    ShapeMismatchError
        If ``a.cols != b.rows`` or ``out`` is not ``(a.rows, b.cols)``.

    Examples
    --------
    >>> out = Matrix(1, 1)
    >>> matmul(out, Matrix(1, 4, [1, 0, 1, 0]), Matrix(4, 1, [1, 0, 1, 0]))
    >>> out.at(0, 0)
    2
    """
    _check_operands("multiply", out, a, b)

    if a._cols != b._rows:
        raise ShapeMismatchError(
            f"multiply shape misalignment can't multiply ({a._rows},{a._cols})x({b._rows},{b._cols})"
        )
    if out.shape != (a._rows, b._cols):
        raise ShapeMismatchError(
            f"mat shape ({out._rows},{out._cols}) does not match expected ({a._rows},{b._cols})"
        )

    out.zeroize()

    a_rows = _restrict(a._row_values, a._row_start, a._rows)
    b_cols = _restrict(b._col_values, b._col_start, b._cols)
    if not a_rows or not b_cols:
        return

    # accumulate in the operands' element type, coerce once on write
    zero = _zero_of_dtype(a.dtype)
    inner_start = a._col_start
    inner_end = a._col_start + a._cols
    # a's column c lines up with b's row c - shift
    shift = a._col_start - b._row_start

    r0, c0 = out._row_start, out._col_start
    for r, cs in a_rows.items():
        i = r - a._row_start
        for c, rs in b_cols.items():
            j = c - b._col_start

            if len(cs) <= len(rs):
                pairs = (
                    (v1, rs.get(ic - shift))
                    for ic, v1 in cs.items()
                    if inner_start <= ic < inner_end
                )
            else:
                pairs = (
                    (cs.get(ir + shift), v2)
                    for ir, v2 in rs.items()
                    if inner_start <= ir + shift < inner_end
                )

            value = zero
            for v1, v2 in pairs:
                if v1 is not None and v2 is not None:
                    value = value + v1 * v2

            if value != 0:
                out._set(i + r0, j + c0, value)


def _restrict(index, start, extent):
    """Entries of a row/column index whose key falls in ``[start, start + extent)``."""
    if extent < len(index):
        return {k: index[k] for k in range(start, start + extent) if k in index}
    return {k: v for k, v in index.items() if start <= k < start + extent}


def matrix_power(m, k):
    """
    Raise the square matrix ``m`` to the non-negative integer power ``k``.

    Uses exponentiation by squaring on copies, so ``m`` is never modified.
    The result is a new matrix independent of ``m``.

    Raises
    ------
    InvalidArgumentError
        If ``m`` is not square or ``k`` is negative.

    Examples
    --------
    >>> m = Matrix(2, 2, [1, 2, 3, 4])
    >>> matrix_power(m, 3).todense().tolist()
    [[37, 54], [81, 118]]
    >>> matrix_power(m, 0).equals(identity(2))
    True
    """
    if m is None:
        raise NilOperandError("power")

    rows, cols = m.shape
    if rows != cols:
        raise InvalidArgumentError(
            f"matrix must be square to raise to a power, got {rows}x{cols}"
        )
    if not isinstance(k, Integral) or k < 0:
        raise InvalidArgumentError(f"power k must be a non-negative integer, got {k!r}")

    result = identity(rows, dtype=m.dtype)
    if k == 0:
        return result

    base = m.copy()
    while k > 0:
        if k & 1:
            temp = Matrix(rows, cols, dtype=m.dtype)
            matmul(temp, result, base)
            result = temp
        k >>= 1
        if k > 0:
            temp = Matrix(rows, cols, dtype=m.dtype)
            matmul(temp, base, base)
            base = temp
    return result


def negate(m):
    """
    Replace every value inside the view ``m`` with its additive inverse.

    Examples
    --------
    >>> m = identity(2)
    >>> negate(m)
    >>> m.todense().tolist()
    [[-1, 0], [0, -1]]
    """
    if m is None:
        raise NilOperandError("negate")

    for r, c, v in list(m._iter_cells()):
        m._set(r, c, -v)


def _logical(operation, out, x, y, func):
    _check_operands(operation, out, x, y)
    _check_same_shape(operation, out, x, y)

    left = {(i, j) for i, j, _ in x._cells()}
    right = {(i, j) for i, j, _ in y._cells()}

    out.zeroize()
    r0, c0 = out._row_start, out._col_start
    for i, j in func(left, right):
        out._set(i + r0, j + c0, 1)


def logical_and(out, x, y):
    """
    Store the elementwise logical AND of ``x`` and ``y`` in ``out``.

    Nonzero elements are true; the result holds ``1`` where true.

    Examples
    --------
    >>> out = Matrix(2, 2)
    >>> logical_and(out, Matrix(2, 2, [0, 1, 0, 1]), Matrix(2, 2, [0, 0, 1, 1]))
    >>> list(out.nonzero())
    [(1, 1, 1)]
    """
    _logical("and", out, x, y, lambda left, right: left & right)


def logical_or(out, x, y):
    """
    Store the elementwise logical OR of ``x`` and ``y`` in ``out``.
    """
    _logical("or", out, x, y, lambda left, right: left | right)


def logical_xor(out, x, y):
    """
    Store the elementwise logical XOR of ``x`` and ``y`` in ``out``.
    """
    _logical("xor", out, x, y, lambda left, right: left ^ right)
