import operator
import warnings
from numbers import Integral

import numpy as np
import scipy.sparse

from ._errors import (
    InvalidArgumentError,
    NilOperandError,
    OutOfBoundsError,
    ShapeMismatchError,
)
from ._store import SparseStore
from ._utils import (
    _one_of_dtype,
    check_dtype,
    check_same_dtype,
    html_table,
    warn_if_too_dense,
)


class Matrix:
    """
    A sparse integer matrix backed by a dual-indexed store.

    Every :obj:`Matrix` is a *view*: a shape and an offset into a
    :obj:`SparseStore`. Slices, transposes, rows and columns share the store
    of the matrix they were taken from, so changes made through one view are
    visible through every overlapping view. Use :meth:`copy` to get an
    independent matrix.

    Parameters
    ----------
    rows, cols : int
        The shape of the matrix.
    values : iterable, optional
        Row-major values of length ``rows * cols``. Zeros and ``None`` are not
        stored. Empty or missing values produce an all-zero matrix.
    dtype : numpy.dtype, optional
        Element type: a signed integer dtype or ``object`` for
        arbitrary-precision Python integers. Defaults to
        :obj:`intmat._settings.DEFAULT_DTYPE`.

    Attributes
    ----------
    dtype : numpy.dtype
        The element type of this matrix.
    shape : tuple[int, int]
        The shape of this matrix.

    See Also
    --------
    identity : Identity matrix constructor.
    Vector : A ``1 x n`` view with vector operations.

    Examples
    --------
    >>> m = Matrix(2, 3, [1, 0, 2, 0, 0, 3])
    >>> m
    <Matrix: shape=(2, 3), dtype=object, nnz=3>
    >>> m.at(1, 2)
    3

    Slices are connected to the matrix they come from.

    >>> s = m.slice(0, 1, 2, 2)
    >>> s.set(0, 0, 7)
    >>> m.at(0, 1)
    7
    >>> m.T.at(1, 0)
    7
    """

    def __init__(self, rows, cols, values=None, dtype=None):
        for extent in (rows, cols):
            if not isinstance(extent, Integral) or extent < 0:
                raise InvalidArgumentError(
                    f"matrix shape must be non-negative integers, got ({rows!r}, {cols!r})"
                )

        self._store = SparseStore(check_dtype(dtype))
        self._rows = int(rows)
        self._cols = int(cols)
        self._row_start = 0
        self._col_start = 0
        self._transposed = False
        self._root = True

        if values is None:
            return

        if isinstance(values, np.ndarray):
            values = values.ravel().tolist()
        else:
            values = list(values)

        if len(values) == 0:
            return

        if len(values) != self._rows * self._cols:
            raise InvalidArgumentError(
                f"matrix data length ({len(values)}) to size mismatch expected {self._rows * self._cols}"
            )

        for index, value in enumerate(values):
            if value is not None and value != 0:
                i, j = divmod(index, self._cols)
                self._store.set(i, j, value)

        warn_if_too_dense(len(self._store), self.size)

    @classmethod
    def _view(cls, store, rows, cols, row_start, col_start, transposed):
        view = cls.__new__(cls)
        view._store = store
        view._rows = rows
        view._cols = cols
        view._row_start = row_start
        view._col_start = col_start
        view._transposed = transposed
        view._root = False
        return view

    @classmethod
    def identity(cls, size, dtype=None):
        """
        Create a ``size x size`` matrix with ones on the diagonal.

        Examples
        --------
        >>> Matrix.identity(3).todense()  # doctest: +NORMALIZE_WHITESPACE
        array([[1, 0, 0],
               [0, 1, 0],
               [0, 0, 1]], dtype=object)
        """
        mat = cls(size, size, dtype=dtype)
        one = _one_of_dtype(mat.dtype)
        for i in range(size):
            mat._store.set(i, i, one)
        return mat

    @classmethod
    def from_numpy(cls, x, dtype=None):
        """
        Get a :obj:`Matrix` from a two-dimensional Numpy array.

        Parameters
        ----------
        x : np.ndarray
            The array to convert.
        dtype : numpy.dtype, optional
            Element type of the result; defaults to ``x.dtype``.

        Returns
        -------
        Matrix
            The equivalent sparse matrix.

        Examples
        --------
        >>> s = Matrix.from_numpy(np.eye(4, dtype=np.int64))
        >>> s
        <Matrix: shape=(4, 4), dtype=int64, nnz=4>
        """
        x = np.asarray(x)
        if x.ndim != 2:
            raise ShapeMismatchError(f"expected a two-dimensional array, got {x.ndim} dimensions")

        ar = cls(*x.shape, dtype=check_dtype(x.dtype if dtype is None else dtype))
        for i, j in zip(*np.nonzero(x)):
            ar._store.set(int(i), int(j), x[i, j])

        warn_if_too_dense(len(ar._store), ar.size)
        return ar

    @classmethod
    def from_scipy_sparse(cls, x, dtype=None):
        """
        Create a :obj:`Matrix` from a :obj:`scipy.sparse` matrix or array.

        Examples
        --------
        >>> x = scipy.sparse.identity(3, dtype=np.int32, format="csr")
        >>> Matrix.from_scipy_sparse(x)
        <Matrix: shape=(3, 3), dtype=int32, nnz=3>
        """
        coo = x.tocoo()
        ar = cls(*coo.shape, dtype=check_dtype(coo.dtype if dtype is None else dtype))
        for i, j, v in zip(coo.row, coo.col, coo.data):
            # coo may carry duplicates
            current = ar._store.get(int(i), int(j))
            ar._store.set(int(i), int(j), v if current is None else current + v)
        return ar

    @property
    def dtype(self):
        return self._store.dtype

    @property
    def shape(self):
        return (self._rows, self._cols)

    @property
    def ndim(self):
        return 2

    @property
    def size(self):
        """
        The number of all elements (including zeros) in this matrix.
        """
        return self._rows * self._cols

    @property
    def nnz(self):
        """
        The number of nonzero elements inside this view.

        Cells of the shared store that lie outside the view are not counted.

        Examples
        --------
        >>> m = Matrix.identity(5)
        >>> m.nnz, m.slice(0, 0, 2, 5).nnz
        (5, 2)
        """
        return sum(1 for _ in self._iter_cells())

    @property
    def density(self):
        """
        The ratio of nonzero to all elements in this matrix.

        Zero-size matrices have a density of ``nan``.

        Examples
        --------
        >>> Matrix.identity(4).density
        0.25
        """
        with warnings.catch_warnings():
            warnings.filterwarnings("ignore", category=RuntimeWarning)
            return float(np.float64(self.nnz) / np.float64(self.size))

    @property
    def nbytes(self):
        """
        The approximate number of bytes taken up by the values in this view.
        """
        return self.nnz * self.dtype.itemsize

    @property
    def format(self):
        return "dual"

    @property
    def is_root(self):
        """Whether this matrix owns its store rather than viewing another matrix."""
        return self._root

    def dims(self):
        """Return ``(rows, cols)``."""
        return self._rows, self._cols

    def shares_memory(self, other):
        """Whether ``other`` is backed by the same store as this matrix."""
        return self._store is other._store

    def _store_region(self):
        """This view's rectangle in store coordinates, as half-open ranges."""
        rows = (self._row_start, self._row_start + self._rows)
        cols = (self._col_start, self._col_start + self._cols)
        if self._transposed:
            return cols, rows
        return rows, cols

    def _overlaps(self, other):
        if not self.shares_memory(other):
            return False
        (ar0, ar1), (ac0, ac1) = self._store_region()
        (br0, br1), (bc0, bc1) = other._store_region()
        return ar0 < br1 and br0 < ar1 and ac0 < bc1 and bc0 < ac1

    @property
    def _row_values(self):
        return self._store.by_col if self._transposed else self._store.by_row

    @property
    def _col_values(self):
        return self._store.by_row if self._transposed else self._store.by_col

    def _at(self, r, c):
        if self._transposed:
            return self._store.get(c, r)
        return self._store.get(r, c)

    def _set(self, r, c, value):
        if self._transposed:
            self._store.set(c, r, value)
        else:
            self._store.set(r, c, value)

    def _iter_cells(self, r0=None, c0=None, rows=None, cols=None):
        """
        Yield ``(r, c, value)`` in view-absolute coordinates for every stored
        cell inside the given region (the whole view by default).
        """
        r0 = self._row_start if r0 is None else r0
        c0 = self._col_start if c0 is None else c0
        rows = self._rows if rows is None else rows
        cols = self._cols if cols is None else cols

        row_values = self._row_values
        if rows < len(row_values):
            candidates = (r for r in range(r0, r0 + rows) if r in row_values)
        else:
            candidates = (r for r in row_values if r0 <= r < r0 + rows)

        for r in candidates:
            cs = row_values[r]
            if cols < len(cs):
                for c in range(c0, c0 + cols):
                    if c in cs:
                        yield r, c, cs[c]
            else:
                for c, v in cs.items():
                    if c0 <= c < c0 + cols:
                        yield r, c, v

    def _cells(self):
        """Snapshot of ``(i, j, value)`` in logical coordinates."""
        return [
            (r - self._row_start, c - self._col_start, v)
            for r, c, v in self._iter_cells()
        ]

    def _zeroize(self, r0, c0, rows, cols):
        for r, c, _ in list(self._iter_cells(r0, c0, rows, cols)):
            self._set(r, c, None)

    def _check_row(self, i):
        i = operator.index(i)
        if i < 0 or i >= self._rows:
            raise OutOfBoundsError(i, self._rows, "row")
        return i

    def _check_col(self, j):
        j = operator.index(j)
        if j < 0 or j >= self._cols:
            raise OutOfBoundsError(j, self._cols, "column")
        return j

    def at(self, i, j):
        """
        Return the value at row ``i`` and column ``j``.

        Absent cells read as the zero element of :attr:`dtype`.

        Raises
        ------
        OutOfBoundsError
            If ``(i, j)`` lies outside the matrix.
        """
        i = self._check_row(i)
        j = self._check_col(j)

        ret = self._at(i + self._row_start, j + self._col_start)
        if ret is None:
            return self._store.zero()
        return ret

    def set(self, i, j, value):
        """
        Set the value at row ``i`` and column ``j``. Setting zero or ``None``
        removes the cell from the store.
        """
        i = self._check_row(i)
        j = self._check_col(j)

        self._set(i + self._row_start, j + self._col_start, value)

    def nonzero(self):
        """
        Iterate over ``(i, j, value)`` for every nonzero cell, row-major.

        Examples
        --------
        >>> list(Matrix(2, 2, [0, 5, 6, 0]).nonzero())
        [(0, 1, 5), (1, 0, 6)]
        """
        return iter(sorted(self._cells(), key=lambda cell: cell[:2]))

    def slice(self, i, j, rows, cols):
        """
        Create a view of the ``rows x cols`` block starting at ``(i, j)``.

        The slice is connected to this matrix: changes to one are visible in
        the other.

        Raises
        ------
        InvalidArgumentError
            If ``rows`` or ``cols`` is not positive.
        OutOfBoundsError
            If the block does not fit inside this matrix.

        Examples
        --------
        >>> s = Matrix.identity(8).slice(3, 0, 4, 4)
        >>> s.todense()  # doctest: +NORMALIZE_WHITESPACE
        array([[0, 0, 0, 1],
               [0, 0, 0, 0],
               [0, 0, 0, 0],
               [0, 0, 0, 0]], dtype=object)
        """
        if rows <= 0 or cols <= 0:
            raise InvalidArgumentError("slice rows and cols must >= 1")

        i = self._check_row(i)
        j = self._check_col(j)
        self._check_row(i + rows - 1)
        self._check_col(j + cols - 1)

        return self._view(
            self._store,
            rows,
            cols,
            self._row_start + i,
            self._col_start + j,
            self._transposed,
        )

    @property
    def T(self):
        """
        The transpose of this matrix, connected to it.

        Examples
        --------
        >>> m = Matrix(2, 3, [1, 2, 3, 4, 5, 6])
        >>> m.T.shape
        (3, 2)
        >>> m.T.at(2, 1)
        6
        """
        return self._view(
            self._store,
            self._cols,
            self._rows,
            self._col_start,
            self._row_start,
            not self._transposed,
        )

    def transpose(self):
        return self.T

    def row(self, i):
        """Return row ``i`` as a :obj:`Vector` connected to this matrix."""
        from ._vector import Vector

        self._check_row(i)
        return Vector.from_matrix(self.slice(i, 0, 1, self._cols))

    def column(self, j):
        """Return column ``j`` as a :obj:`TransposedVector` connected to this matrix."""
        from ._vector import TransposedVector

        self._check_col(j)
        return TransposedVector.from_matrix(self.slice(0, j, self._rows, 1))

    def set_row(self, i, vec):
        """Replace the values of row ``i`` with the values of ``vec``."""
        self._check_row(i)
        if self._cols != len(vec):
            raise ShapeMismatchError(
                f"matrix number of columns ({self._cols}) must equal length of vector ({len(vec)})"
            )
        self.set_matrix(vec.matrix, i, 0)

    def set_column(self, j, vec):
        """Replace the values of column ``j`` with the values of ``vec``."""
        self._check_col(j)
        if self._rows != len(vec):
            raise ShapeMismatchError(
                f"matrix number of rows ({self._rows}) must equal length of vector ({len(vec)})"
            )
        self.set_matrix(vec.matrix, 0, j)

    def zeroize(self):
        """Remove every stored value inside this view."""
        self._zeroize(self._row_start, self._col_start, self._rows, self._cols)

    def zeroize_range(self, i, j, rows, cols):
        """
        Remove the stored values inside the ``rows x cols`` block at ``(i, j)``.

        Examples
        --------
        >>> m = Matrix(4, 4, [1] * 16)
        >>> m.zeroize_range(1, 1, 2, 2)
        >>> m.todense()  # doctest: +NORMALIZE_WHITESPACE
        array([[1, 1, 1, 1],
               [1, 0, 0, 1],
               [1, 0, 0, 1],
               [1, 1, 1, 1]], dtype=object)
        """
        if i < 0 or j < 0 or rows < 0 or cols < 0:
            raise InvalidArgumentError("zeroize must have positive values")
        if self._rows < i + rows or self._cols < j + cols:
            raise ShapeMismatchError(
                f"zeroize bounds check failed can't zeroize shape ({i + rows},{j + cols}) "
                f"on a ({self._rows},{self._cols}) matrix"
            )

        self._zeroize(i + self._row_start, j + self._col_start, rows, cols)

    def set_matrix(self, source, i_offset=0, j_offset=0):
        """
        Replace the block of this matrix at ``(i_offset, j_offset)`` with the
        values of ``source``.

        The destination block is zeroized first, so zeros in ``source``
        overwrite values in this matrix.

        Examples
        --------
        >>> m = Matrix(4, 4)
        >>> m.set_matrix(Matrix(2, 2, [1, 1, 1, 1]), 1, 1)
        >>> m.todense()  # doctest: +NORMALIZE_WHITESPACE
        array([[0, 0, 0, 0],
               [0, 1, 1, 0],
               [0, 1, 1, 0],
               [0, 0, 0, 0]], dtype=object)
        """
        if source is None:
            raise NilOperandError("set matrix")
        if i_offset < 0 or j_offset < 0:
            raise InvalidArgumentError("offsets must be positive values [0,+)")
        if self._rows < i_offset + source._rows or self._cols < j_offset + source._cols:
            raise ShapeMismatchError(
                f"set matrix have equal or smaller shape ({self._rows},{self._cols}), "
                f"found a=({i_offset + source._rows},{j_offset + source._cols})"
            )

        self._set_matrix(source, i_offset + self._row_start, j_offset + self._col_start)

    def _set_matrix(self, source, r_offset, c_offset):
        cells = source._cells()
        self._zeroize(r_offset, c_offset, source._rows, source._cols)
        for i, j, v in cells:
            self._set(i + r_offset, j + c_offset, v)

    def equals(self, other):
        """
        Whether ``other`` has the same shape and values as this matrix.

        Examples
        --------
        >>> Matrix(2, 2, [1, 0, 0, 1]).equals(Matrix.identity(2))
        True
        >>> Matrix(3, 3, [0, 1, 1, 0, 1, 1, 0, 0, 0]).T.equals(
        ...     Matrix(3, 3, [0, 1, 1, 0, 1, 1, 0, 0, 0]))
        False
        """
        if self is other:
            return True

        if other is None or not isinstance(other, Matrix):
            return False

        if self.shape != other.shape:
            return False

        ours = {(i, j): v for i, j, v in self._cells()}
        theirs = other._cells()
        if len(ours) != len(theirs):
            return False

        for i, j, v in theirs:
            mine = ours.get((i, j))
            if mine is None or mine != v:
                return False
        return True

    def __eq__(self, other):
        if isinstance(other, Matrix):
            return self.equals(other)
        return NotImplemented

    def __ne__(self, other):
        if isinstance(other, Matrix):
            return not self.equals(other)
        return NotImplemented

    __hash__ = None

    def copy(self):
        """
        Create a new matrix with the same values, independent of this one.
        """
        return self.astype(self.dtype)

    def astype(self, dtype):
        """
        Copy this matrix into a fresh store with element type ``dtype``.
        """
        mat = Matrix(self._rows, self._cols, dtype=dtype)
        for i, j, v in self._cells():
            mat._store.set(i, j, v)
        return mat

    def todense(self):
        """
        Convert this matrix into a Numpy array of :attr:`dtype`.

        Examples
        --------
        >>> Matrix(2, 2, [1, 2, 0, 4], dtype=np.int64).todense()  # doctest: +NORMALIZE_WHITESPACE
        array([[1, 2],
               [0, 4]])
        """
        result = np.zeros(self.shape, dtype=self.dtype)
        for i, j, v in self._cells():
            result[i, j] = v
        return result

    def to_scipy_sparse(self, format="csr"):
        """
        Convert this matrix to a :obj:`scipy.sparse` matrix.

        Only machine integer element types can be converted; scipy has no
        arbitrary-precision storage.

        Raises
        ------
        InvalidArgumentError
            If :attr:`dtype` is ``object``.
        """
        if self.dtype.kind == "O":
            raise InvalidArgumentError(
                "arbitrary-precision matrices can't be converted to scipy.sparse, use astype first"
            )

        cells = self._cells()
        data = np.array([v for _, _, v in cells], dtype=self.dtype)
        row = np.array([i for i, _, _ in cells], dtype=np.intp)
        col = np.array([j for _, j, _ in cells], dtype=np.intp)
        return scipy.sparse.coo_matrix((data, (row, col)), shape=self.shape).asformat(format)

    def __getitem__(self, key):
        from ._vector import TransposedVector, Vector

        if not isinstance(key, tuple) or len(key) != 2:
            raise IndexError("Matrix indices must be a tuple of length 2")

        i, j = key
        if isinstance(i, Integral) and isinstance(j, Integral):
            return self.at(*self._normalize(i, j))

        (i0, rows), (j0, cols) = self._to_block(i, self._rows), self._to_block(j, self._cols)
        view = self.slice(i0, j0, rows, cols)
        if isinstance(i, Integral):
            return Vector.from_matrix(view)
        if isinstance(j, Integral):
            return TransposedVector.from_matrix(view)
        return view

    def __setitem__(self, key, value):
        if not isinstance(key, tuple) or len(key) != 2:
            raise IndexError("Matrix indices must be a tuple of length 2")

        i, j = key
        if not (isinstance(i, Integral) and isinstance(j, Integral)):
            raise IndexError("All indices must be integers when setting an item.")
        self.set(*self._normalize(i, j), value)

    def _normalize(self, i, j):
        if i < 0:
            i += self._rows
        if j < 0:
            j += self._cols
        return i, j

    @staticmethod
    def _to_block(ind, size):
        if isinstance(ind, Integral):
            if ind < 0:
                ind += size
            return ind, 1

        if isinstance(ind, slice):
            start, stop, step = ind.indices(size)
            if step != 1:
                raise IndexError("Matrix slices must have a step of 1")
            return start, stop - start

        raise IndexError(f"Matrix indices must be integers or slices, got {type(ind).__name__}")

    def add(self, a, b):
        """Store ``a + b`` in this matrix. See :obj:`intmat.add`."""
        from ._ops import add

        add(self, a, b)

    def mul(self, a, b):
        """Store ``a @ b`` in this matrix. See :obj:`intmat.matmul`."""
        from ._ops import matmul

        matmul(self, a, b)

    def pow(self, k):
        """Return this matrix raised to ``k``. See :obj:`intmat.matrix_power`."""
        from ._ops import matrix_power

        return matrix_power(self, k)

    def negate(self):
        """Negate every value of this view in place."""
        from ._ops import negate

        negate(self)

    def logical_and(self, x, y):
        from ._ops import logical_and

        logical_and(self, x, y)

    def logical_or(self, x, y):
        from ._ops import logical_or

        logical_or(self, x, y)

    def logical_xor(self, x, y):
        from ._ops import logical_xor

        logical_xor(self, x, y)

    def _binary(self, other, func, shape):
        if not isinstance(other, Matrix):
            return NotImplemented
        check_same_dtype(self, other)
        out = Matrix(*shape(other), dtype=self.dtype)
        func(out, self, other)
        return out

    def __add__(self, other):
        from ._ops import add

        return self._binary(other, add, lambda o: self.shape)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self + (-other)

    def __matmul__(self, other):
        from ._ops import matmul

        return self._binary(other, matmul, lambda o: (self._rows, o._cols))

    def __and__(self, other):
        from ._ops import logical_and

        return self._binary(other, logical_and, lambda o: self.shape)

    def __or__(self, other):
        from ._ops import logical_or

        return self._binary(other, logical_or, lambda o: self.shape)

    def __xor__(self, other):
        from ._ops import logical_xor

        return self._binary(other, logical_xor, lambda o: self.shape)

    def __neg__(self):
        ret = self.copy()
        ret.negate()
        return ret

    def __pow__(self, k):
        if not isinstance(k, Integral):
            return NotImplemented
        return self.pow(k)

    def __str__(self):
        return "<Matrix: shape={!s}, dtype={!s}, nnz={:d}>".format(self.shape, self.dtype, self.nnz)

    __repr__ = __str__

    def _repr_html_(self):
        """
        Diagnostic report about this matrix.
        Renders in Jupyter.
        """
        return html_table(self)


def identity(size, dtype=None):
    """
    Create a ``size x size`` identity matrix.

    See Also
    --------
    Matrix.identity : Equivalent classmethod.
    """
    return Matrix.identity(size, dtype=dtype)


def copy(m):
    """
    Create a new matrix with the same values as ``m``, independent of it.

    Examples
    --------
    >>> a = identity(2)
    >>> b = copy(a)
    >>> b.set(0, 1, 5)
    >>> a.at(0, 1)
    0
    """
    return m.copy()
