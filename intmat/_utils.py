import operator
import warnings
from numbers import Integral

import numpy as np

from ._errors import InvalidArgumentError

default_rng = np.random.default_rng()


def assert_eq(x, y, compare_dtype=True):
    """
    Assert two matrices, vectors or arrays hold the same logical values.

    Matrices are compared through :obj:`Matrix.todense`, so slices,
    transposes and roots of different stores compare on content only.
    """
    from ._matrix import Matrix

    assert x.shape == y.shape

    if compare_dtype:
        assert x.dtype == y.dtype

    if isinstance(x, Matrix) and isinstance(y, Matrix):
        assert x.equals(y)

    xx = x.todense() if hasattr(x, "todense") else np.asarray(x)
    yy = y.todense() if hasattr(y, "todense") else np.asarray(y)
    assert np.array_equal(xx, yy)


def check_dtype(dtype):
    """
    Resolve ``dtype`` to an element type honouring the element contract.

    Parameters
    ----------
    dtype : numpy.dtype or str or type or None
        The requested element type. ``None`` selects
        :obj:`intmat._settings.DEFAULT_DTYPE`.

    Returns
    -------
    numpy.dtype
        A signed integer dtype (machine integers) or ``object``
        (arbitrary-precision Python integers).

    Raises
    ------
    InvalidArgumentError
        If the dtype is not a signed integer or ``object`` dtype.

    Examples
    --------
    >>> check_dtype("int32")
    dtype('int32')
    >>> check_dtype(object)
    dtype('O')
    >>> check_dtype(np.float64)
    Traceback (most recent call last):
        ...
    intmat._errors.InvalidArgumentError: unsupported element type float64, expected a signed integer or object dtype
    """
    from ._settings import DEFAULT_DTYPE

    if dtype is None:
        return DEFAULT_DTYPE

    if dtype is int:
        return np.dtype(object)

    dtype = np.dtype(dtype)
    if dtype.kind not in {"i", "O"}:
        raise InvalidArgumentError(
            f"unsupported element type {dtype}, expected a signed integer or object dtype"
        )
    return dtype


def _zero_of_dtype(dtype):
    """
    Creates a zero scalar of a given element type.

    Parameters
    ----------
    dtype : numpy.dtype
        The dtype for the scalar.

    Returns
    -------
    scalar
        ``0`` as a numpy scalar, or a Python ``int`` for ``object``.
    """
    return np.zeros((), dtype=dtype)[()]


def _one_of_dtype(dtype):
    return np.ones((), dtype=dtype)[()]


def _coerce(value, dtype):
    """Convert ``value`` to an element of ``dtype``; ``None`` stays ``None``."""
    if value is None:
        return None

    try:
        value = operator.index(value)
    except TypeError:
        raise InvalidArgumentError(
            f"matrix elements must be integers, got {type(value).__name__}"
        ) from None

    if dtype.kind == "O":
        return value

    info = np.iinfo(dtype)
    if not info.min <= value <= info.max:
        raise InvalidArgumentError(
            f"value {value} does not fit in {dtype}: [{info.min}, {info.max}]"
        )
    return dtype.type(value)


def check_same_dtype(*matrices):
    dtypes = {m.dtype for m in matrices}
    if len(dtypes) > 1:
        raise InvalidArgumentError(f"operands have mixed element types: {sorted(map(str, dtypes))}")


def warn_if_too_dense(nnz, size):
    from ._settings import DENSE_WARN_THRESHOLD, WARN_ON_TOO_DENSE

    if WARN_ON_TOO_DENSE and size and nnz / size > DENSE_WARN_THRESHOLD:
        warnings.warn(
            "Attempting to create a sparse matrix that stores more than "
            f"{DENSE_WARN_THRESHOLD:.0%} of its cells. You may want to use a "
            "dense array here instead.",
            RuntimeWarning,
            stacklevel=3,
        )


def random(
    rows,
    cols,
    density=None,
    nnz=None,
    random_state=None,
    data_rvs=None,
    dtype=None,
):
    """Generate a random sparse integer matrix.

    Parameters
    ----------
    rows, cols : int
        Shape of the matrix.
    density : float, optional
        Density of the generated matrix; default is 0.01.
        Mutually exclusive with `nnz`.
    nnz : int, optional
        Number of nonzero elements in the generated matrix.
        Mutually exclusive with `density`.
    random_state : Union[`numpy.random.Generator, int`], optional
        Random number generator or random seed. If not given, the
        module-level generator will be used.
    data_rvs : Callable
        Data generation callback. Must accept one single parameter: number of
        `nnz` elements, and return a sequence of exactly that many nonzero
        integers. Defaults to integers drawn uniformly from ``[-9, -1]`` and
        ``[1, 9]``.
    dtype : numpy.dtype, optional
        Element type of the result.

    Returns
    -------
    Matrix
        The generated random matrix.

    See Also
    --------
    scipy.sparse.random : Equivalent Scipy function.

    Examples
    --------
    >>> s = intmat.random(4, 5, nnz=6, random_state=42)
    >>> s.shape, s.nnz
    ((4, 5), 6)
    """
    from ._matrix import Matrix

    if density is not None and nnz is not None:
        raise InvalidArgumentError("'density' and 'nnz' are mutually exclusive")

    if density is None:
        density = 0.01
    if not (0 <= density <= 1):
        raise InvalidArgumentError(f"density {density} is not in the unit interval")

    elements = rows * cols

    if nnz is None:
        nnz = int(elements * density)
    if not (0 <= nnz <= elements):
        raise InvalidArgumentError(
            f"cannot generate {nnz} nonzero elements for a matrix with {elements} total elements"
        )

    if random_state is None:
        random_state = default_rng
    elif isinstance(random_state, Integral):
        random_state = np.random.default_rng(random_state)

    if data_rvs is None:

        def data_rvs(n):
            magnitude = random_state.integers(1, 10, size=n)
            sign = random_state.choice(np.array([-1, 1]), size=n)
            return magnitude * sign

    ind = random_state.choice(elements, nnz, replace=False) if nnz else []
    data = data_rvs(nnz)

    ar = Matrix(rows, cols, dtype=dtype)
    for flat, value in zip(ind, data):
        i, j = divmod(int(flat), cols)
        ar.set(i, j, value)

    return ar


# copied from zarr
# See https://github.com/zarr-developers/zarr-python/blob/main/zarr/util.py
def human_readable_size(size):
    if size < 2**10:
        return str(size)
    if size < 2**20:
        return f"{size / 2**10:.1f}K"
    if size < 2**30:
        return f"{size / 2**20:.1f}M"
    if size < 2**40:
        return f"{size / 2**30:.1f}G"
    if size < 2**50:
        return f"{size / 2**40:.1f}T"

    return f"{size / 2**50:.1f}P"


def html_table(arr):
    table = ["<table><tbody>"]
    headings = ["Format", "Data Type", "Shape", "nnz", "Density", "Size"]

    info = [
        arr.format,
        str(arr.dtype),
        str(arr.shape),
        str(arr.nnz),
        str(arr.density),
        human_readable_size(arr.nbytes),
    ]

    headings.append("View")
    info.append(str(not arr.is_root))

    for h, i in zip(headings, info):
        table.append(f'<tr><th style="text-align: left">{h}</th><td style="text-align: left">{i}</td></tr>')
    table.append("</tbody></table>")
    return "".join(table)
