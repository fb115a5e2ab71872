import operator

from ._errors import (
    InvalidArgumentError,
    NilOperandError,
    OutOfBoundsError,
    SelfAliasingError,
    ShapeMismatchError,
)
from ._matrix import Matrix
from ._ops import add, matmul


class _BaseVector:
    """
    Shared behaviour of :obj:`Vector` and :obj:`TransposedVector`.

    A vector wraps a single-row or single-column :obj:`Matrix` view; it has no
    storage of its own. Subclasses define ``_axis`` (``0`` when the vector runs
    along the columns of a ``1 x n`` view, ``1`` when it runs along the rows
    of an ``n x 1`` view).
    """

    _axis = None
    _kind = None

    def __init__(self, length, values=None, dtype=None):
        if values is not None:
            values = list(values)
            if len(values) != 0 and len(values) != length:
                raise InvalidArgumentError(
                    f"length ({length}) and number of values ({len(values)}) must be equal"
                )
        shape = (1, length) if self._axis == 0 else (length, 1)
        self._mat = Matrix(*shape, values, dtype=dtype)

    @classmethod
    def from_matrix(cls, mat):
        """
        Wrap an existing matrix view without copying it.

        Raises
        ------
        ShapeMismatchError
            If ``mat`` does not have the vector's shape.
        """
        if mat is None:
            raise NilOperandError("vector wrap")

        expected = 0 if cls._axis == 0 else 1
        if mat.shape[expected] != 1:
            raise ShapeMismatchError(f"{cls.__name__} needs a {cls._kind} view, got shape {mat.shape}")

        vec = cls.__new__(cls)
        vec._mat = mat
        return vec

    @property
    def matrix(self):
        """The :obj:`Matrix` view behind this vector."""
        return self._mat

    @property
    def dtype(self):
        return self._mat.dtype

    @property
    def shape(self):
        return (len(self),)

    def __len__(self):
        return self._mat.shape[1 - self._axis]

    def _check_bounds(self, i):
        i = operator.index(i)
        if i < 0 or i >= len(self):
            raise OutOfBoundsError(i, len(self))
        return i

    def _cell(self, i):
        return (0, i) if self._axis == 0 else (i, 0)

    def at(self, i):
        """Return the value at index ``i``; absent cells read as zero."""
        i = self._check_bounds(i)
        return self._mat.at(*self._cell(i))

    def set(self, i, value):
        """Set the value at index ``i``; zero or ``None`` removes it."""
        i = self._check_bounds(i)
        self._mat.set(*self._cell(i), value)

    def __getitem__(self, key):
        if isinstance(key, slice):
            start, stop, step = key.indices(len(self))
            if step != 1:
                raise IndexError("Vector slices must have a step of 1")
            return self.slice(start, stop - start)
        if key < 0:
            key += len(self)
        return self.at(key)

    def __setitem__(self, key, value):
        if key < 0:
            key += len(self)
        self.set(key, value)

    def __iter__(self):
        for i in range(len(self)):
            yield self.at(i)

    def slice(self, i, length):
        """
        Create a sub-vector of ``length`` elements starting at ``i``, connected
        to this vector.
        """
        if length <= 0:
            raise InvalidArgumentError("slice length must be > 0")
        i = self._check_bounds(i)
        if i + length > len(self):
            raise OutOfBoundsError(i + length - 1, len(self))

        if self._axis == 0:
            return type(self).from_matrix(self._mat.slice(0, i, 1, length))
        return type(self).from_matrix(self._mat.slice(i, 0, length, 1))

    def set_vec(self, source, i):
        """
        Overwrite ``len(source)`` elements of this vector, starting at ``i``,
        with the values of ``source``.
        """
        if source is None:
            raise NilOperandError("set vector")
        if i < 0 or i + len(source) > len(self):
            raise OutOfBoundsError(i + len(source) - 1, len(self))

        if self._axis == 0:
            self._mat.set_matrix(source._as(type(self))._mat, 0, i)
        else:
            self._mat.set_matrix(source._as(type(self))._mat, i, 0)

    def _as(self, cls):
        return self if isinstance(self, cls) else self.T

    def nonzero_values(self):
        """
        Map each index holding a nonzero value to that value.

        Examples
        --------
        >>> Vector(5, [0, 3, 0, 0, -1]).nonzero_values()
        {1: 3, 4: -1}
        """
        return {(i if self._axis == 1 else j): v for i, j, v in self._mat.nonzero()}

    def dot(self, other):
        """
        The dot product of this vector and ``other``.

        Examples
        --------
        >>> Vector(3, [1, 2, 3]).dot(Vector(3, [4, 5, 6]))
        32
        """
        if other is None:
            raise NilOperandError("dot product")
        if len(self) != len(other):
            raise ShapeMismatchError(
                f"Dot product vectors must have the same length: {len(self)} != {len(other)}"
            )

        m = Matrix(1, 1, dtype=self.dtype)
        matmul(m, self._as(Vector)._mat, other._as(TransposedVector)._mat)
        return m.at(0, 0)

    def add(self, a, b):
        """Store ``a + b`` in this vector."""
        if a is None or b is None:
            raise NilOperandError("addition")
        if self is a or self is b:
            raise SelfAliasingError("addition")
        if len(a) != len(b):
            raise ShapeMismatchError("adding vectors must have the same length")
        if len(self) != len(a):
            raise ShapeMismatchError("adding vectors, destination must have the same length")

        cls = type(self)
        add(self._mat, a._as(cls)._mat, b._as(cls)._mat)

    def negate(self):
        self._mat.negate()

    def equals(self, other):
        if self is other:
            return True
        if other is None or type(other) is not type(self):
            return False
        return self._mat.equals(other._mat)

    def __eq__(self, other):
        if isinstance(other, _BaseVector):
            return self.equals(other)
        return NotImplemented

    __hash__ = None

    def copy(self):
        """Create an independent vector with the same values."""
        return type(self).from_matrix(self._mat.copy())

    def todense(self):
        """Return the values as a one-dimensional Numpy array."""
        return self._mat.todense().ravel()

    def __str__(self):
        return "<{}: length={:d}, dtype={!s}, nnz={:d}>".format(
            type(self).__name__, len(self), self.dtype, self._mat.nnz
        )

    __repr__ = __str__


class Vector(_BaseVector):
    """
    A row vector: a ``1 x n`` view onto a sparse store.

    Parameters
    ----------
    length : int
        The number of elements.
    values : iterable, optional
        ``length`` values. Zeros are not stored.
    dtype : numpy.dtype, optional
        Element type, see :obj:`Matrix`.

    Examples
    --------
    Rows of a matrix are vectors connected to it.

    >>> m = intmat.identity(3)
    >>> r = m.row(1)
    >>> r.set(2, 4)
    >>> m.at(1, 2)
    4
    >>> r.T
    <TransposedVector: length=3, dtype=object, nnz=2>
    """

    _axis = 0
    _kind = "1 x n"

    @property
    def T(self):
        """The column-vector transpose, connected to this vector."""
        return TransposedVector.from_matrix(self._mat.T)

    def mul(self, vec, mat):
        """
        Store the row-vector by matrix product ``vec @ mat`` in this vector.

        Examples
        --------
        >>> out = Vector(2)
        >>> out.mul(Vector(3, [1, 0, 2]), Matrix(3, 2, [1, 1, 0, 1, 1, 0]))
        >>> list(out)
        [3, 1]
        """
        if vec is None or mat is None:
            raise NilOperandError("vector multiply")
        if self is vec:
            raise SelfAliasingError("vector multiply")
        if len(vec) != mat.shape[0]:
            raise ShapeMismatchError(
                f"multiply shape misalignment: can't vector-matrix multiply dims ({len(vec)})x{mat.shape}"
            )
        if len(self) != mat.shape[1]:
            raise ShapeMismatchError(
                f"vector (receiver) not long enough to hold result, actual length:{len(self)} "
                f"required:{mat.shape[1]}"
            )

        matmul(self._mat, vec._as(Vector)._mat, mat)


class TransposedVector(_BaseVector):
    """
    A column vector: an ``n x 1`` view onto a sparse store.

    See Also
    --------
    Vector : The row vector counterpart.
    """

    _axis = 1
    _kind = "n x 1"

    @property
    def T(self):
        """The row-vector transpose, connected to this vector."""
        return Vector.from_matrix(self._mat.T)

    def mul_vec(self, mat, vec):
        """
        Store the matrix by column-vector product ``mat @ vec`` in this vector.
        """
        if mat is None or vec is None:
            raise NilOperandError("multiply")
        if self is vec:
            raise SelfAliasingError("multiply")
        if mat.shape[1] != len(vec):
            raise ShapeMismatchError(
                f"multiply shape misalignment: can't matrix-vector multiply {mat.shape}x({len(vec)},1)"
            )
        if len(self) != mat.shape[0]:
            raise ShapeMismatchError(
                f"transposed vector (receiver) length ({len(self)}) does not match expected "
                f"matrix rows ({mat.shape[0]})"
            )

        matmul(self._mat, mat, vec._as(TransposedVector)._mat)
