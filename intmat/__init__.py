from ._version import __version__, __version_tuple__  # noqa: F401

from ._errors import (
    IntmatError,
    InvalidArgumentError,
    NilOperandError,
    OutOfBoundsError,
    SelfAliasingError,
    ShapeMismatchError,
)
from ._io import dumps, from_dict, load_npz, loads, save_npz, to_dict, vector_from_dict, vector_to_dict
from ._matrix import Matrix, copy, identity
from ._ops import add, logical_and, logical_or, logical_xor, matmul, matrix_power, negate
from ._store import SparseStore
from ._utils import random
from ._vector import TransposedVector, Vector

__all__ = [
    "IntmatError",
    "InvalidArgumentError",
    "Matrix",
    "NilOperandError",
    "OutOfBoundsError",
    "SelfAliasingError",
    "ShapeMismatchError",
    "SparseStore",
    "TransposedVector",
    "Vector",
    "add",
    "copy",
    "dumps",
    "from_dict",
    "identity",
    "load_npz",
    "loads",
    "logical_and",
    "logical_or",
    "logical_xor",
    "matmul",
    "matrix_power",
    "negate",
    "random",
    "save_npz",
    "to_dict",
    "vector_from_dict",
    "vector_to_dict",
]
