import pytest

import numpy as np


@pytest.fixture(params=[np.dtype(object), np.dtype(np.int64), np.dtype(np.int32)], ids=str)
def dtype(request):
    return request.param
