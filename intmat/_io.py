import json

import numpy as np

from ._errors import InvalidArgumentError
from ._matrix import Matrix
from ._store import SparseStore
from ._utils import _coerce, check_dtype
from ._vector import TransposedVector, Vector


def to_dict(matrix):
    """
    Encode a matrix as a JSON-ready record.

    The record holds the raw row- and column-keyed maps of the matrix's
    store together with the view's shape and offsets::

        {"rowValues": ..., "colValues": ..., "rows": ..., "rowStart": ...,
         "cols": ..., "colStart": ..., "dtype": ...}

    Map keys are written as strings and values as Python integers.

    Notes
    -----
    The maps are those of the whole shared store. Encoding a slice or a
    transpose therefore also encodes cells outside of the view, and
    :obj:`from_dict` rebuilds them into a new, independent store.

    Examples
    --------
    >>> record = to_dict(Matrix(2, 2, [0, 3, 0, 0]))
    >>> record["rowValues"], record["colValues"]
    ({'0': {'1': 3}}, {'1': {'0': 3}})
    >>> record["rows"], record["rowStart"], record["cols"], record["colStart"]
    (2, 0, 2, 0)
    """

    def encode(index):
        return {str(k): {str(kk): int(v) for kk, v in inner.items()} for k, inner in index.items()}

    return {
        "rowValues": encode(matrix._row_values),
        "colValues": encode(matrix._col_values),
        "rows": matrix._rows,
        "rowStart": matrix._row_start,
        "cols": matrix._cols,
        "colStart": matrix._col_start,
        "dtype": str(matrix.dtype),
    }


def from_dict(record, dtype=None):
    """
    Rebuild a matrix from a record produced by :obj:`to_dict`.

    The maps are adopted as given; they are only checked to mirror each
    other when ``INTMAT_CHECK_MIRROR_ON_LOAD`` is set.

    Parameters
    ----------
    record : dict
        The encoded matrix.
    dtype : numpy.dtype, optional
        Element type of the result. Defaults to the record's ``dtype`` entry,
        then to :obj:`intmat._settings.DEFAULT_DTYPE`.

    Returns
    -------
    Matrix
        A view over a new store, independent of the encoded matrix.

    Raises
    ------
    InvalidArgumentError
        If a required field is missing, or the maps do not mirror each other
        while the mirror check is enabled.
    """
    from ._settings import CHECK_MIRROR_ON_LOAD

    try:
        rows = int(record["rows"])
        cols = int(record["cols"])
        row_start = int(record.get("rowStart", 0))
        col_start = int(record.get("colStart", 0))
    except KeyError as e:
        raise InvalidArgumentError(f"matrix record is missing the {e.args[0]!r} field") from None

    dtype = check_dtype(dtype if dtype is not None else record.get("dtype"))

    def decode(index):
        return {
            int(k): {int(kk): _coerce(v, dtype) for kk, v in inner.items()}
            for k, inner in (index or {}).items()
        }

    store = SparseStore(dtype, decode(record.get("rowValues")), decode(record.get("colValues")))
    if CHECK_MIRROR_ON_LOAD and not store.is_mirrored():
        raise InvalidArgumentError("rowValues and colValues of the matrix record do not mirror each other")

    mat = Matrix._view(store, rows, cols, row_start, col_start, False)
    mat._root = True
    return mat


def vector_to_dict(vec):
    """
    Encode a :obj:`Vector` or :obj:`TransposedVector` as ``{"mat": ..., "kind": ...}``.
    """
    kind = "vector" if isinstance(vec, Vector) else "transposed"
    return {"mat": to_dict(vec.matrix), "kind": kind}


def vector_from_dict(record, dtype=None):
    """
    Rebuild a vector from a record produced by :obj:`vector_to_dict`.

    When the record carries no ``kind`` a single-row matrix becomes a
    :obj:`Vector` and anything else a :obj:`TransposedVector`.
    """
    mat = from_dict(record["mat"], dtype=dtype)
    kind = record.get("kind")
    if kind is None:
        kind = "vector" if mat.shape[0] == 1 else "transposed"

    if kind == "vector":
        return Vector.from_matrix(mat)
    if kind == "transposed":
        return TransposedVector.from_matrix(mat)
    raise InvalidArgumentError(f"unknown vector kind {kind!r}")


def dumps(obj, **kwargs):
    """
    Serialize a :obj:`Matrix`, :obj:`Vector` or :obj:`TransposedVector` to
    JSON text. Extra keyword arguments go to :obj:`json.dumps`.

    Examples
    --------
    >>> m = loads(dumps(intmat.identity(3)))
    >>> m.equals(intmat.identity(3))
    True
    """
    if isinstance(obj, (Vector, TransposedVector)):
        return json.dumps(vector_to_dict(obj), **kwargs)
    return json.dumps(to_dict(obj), **kwargs)


def loads(text, dtype=None):
    """
    Deserialize JSON text produced by :obj:`dumps`.
    """
    record = json.loads(text)
    if "mat" in record:
        return vector_from_dict(record, dtype=dtype)
    return from_dict(record, dtype=dtype)


def save_npz(filename, matrix, compressed=True):
    """Save a sparse matrix to disk in numpy's ``.npz`` format.

    Only the cells inside the matrix's view are written, so a slice is saved
    as a matrix of its own shape. Arbitrary-precision values are stored as
    decimal strings.

    Parameters
    ----------
    filename : string or file
        Either the file name (string) or an open file (file-like object)
        where the data will be saved. If file is a string or a Path, the
        ``.npz`` extension will be appended to the file name if it is not
        already there
    matrix : Matrix
        The matrix to save to disk
    compressed : bool
        Whether to save in compressed or uncompressed mode

    Examples
    --------
    Store sparse matrix to disk, and load it again:

    >>> import os
    >>> mat = intmat.Matrix(2, 3, [0, 2**70, 0, 1, 0, 0])
    >>> intmat.save_npz('mat.npz', mat)
    >>> loaded_mat = intmat.load_npz('mat.npz')
    >>> loaded_mat.at(0, 1) == 2**70
    True
    >>> os.remove('mat.npz')

    See Also
    --------
    load_npz
    numpy.savez
    numpy.load
    """
    cells = list(matrix.nonzero())
    coords = np.array([[i for i, _, _ in cells], [j for _, j, _ in cells]], dtype=np.intp)

    if matrix.dtype.kind == "O":
        data = np.array([str(v) for _, _, v in cells], dtype=str)
    else:
        data = np.array([v for _, _, v in cells], dtype=matrix.dtype)

    nodes = {
        "coords": coords,
        "data": data,
        "shape": np.array(matrix.shape, dtype=np.intp),
        "dtype": np.array(str(matrix.dtype)),
    }

    if compressed:
        np.savez_compressed(filename, **nodes)
    else:
        np.savez(filename, **nodes)


def load_npz(filename):
    """Load a sparse matrix in numpy's ``.npz`` format from disk.

    Will only load files saved by :obj:`save_npz`.

    Parameters
    ----------
    filename : file-like object, string, or pathlib.Path
        The file to read. File-like objects must support the
        ``seek()`` and ``read()`` methods.

    Returns
    -------
    Matrix
        The sparse matrix at path ``filename``.

    Raises
    ------
    RuntimeError
        If the file does not hold a matrix written by :obj:`save_npz`.

    See Also
    --------
    save_npz
    numpy.load
    """
    with np.load(filename) as fp:
        try:
            coords = fp["coords"]
            data = fp["data"]
            shape = tuple(int(s) for s in fp["shape"])
            dtype = check_dtype(str(fp["dtype"][()]))
        except KeyError:
            raise RuntimeError(f"The file {filename!s} does not contain a valid sparse matrix") from None

    mat = Matrix(*shape, dtype=dtype)
    for i, j, v in zip(coords[0], coords[1], data):
        mat.set(int(i), int(j), int(v) if dtype.kind == "O" else v)
    return mat
