import os
import warnings

import numpy as np

_SUPPORTED_KINDS = {"i", "O"}

WARN_ON_TOO_DENSE = bool(int(os.environ.get("INTMAT_WARN_ON_TOO_DENSE", "0")))
DENSE_WARN_THRESHOLD = float(os.environ.get("INTMAT_DENSE_WARN_THRESHOLD", "0.5"))
CHECK_MIRROR_ON_LOAD = bool(int(os.environ.get("INTMAT_CHECK_MIRROR_ON_LOAD", "0")))


def _default_dtype():
    name = os.environ.get("INTMAT_DEFAULT_DTYPE", "") or "object"
    try:
        dtype = np.dtype(name)
    except TypeError:
        dtype = None

    if dtype is None or dtype.kind not in _SUPPORTED_KINDS:
        warnings.warn(
            f"Invalid element type: {name}. Selecting arbitrary-precision (object) elements.",
            UserWarning,
            stacklevel=1,
        )
        return np.dtype(object)
    return dtype


DEFAULT_DTYPE = _default_dtype()
