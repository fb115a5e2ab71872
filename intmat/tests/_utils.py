from hypothesis import strategies as st
from hypothesis.strategies import composite

import intmat


@composite
def gen_shape(draw, min_side=1, max_side=6):
    rows = draw(st.integers(min_value=min_side, max_value=max_side))
    cols = draw(st.integers(min_value=min_side, max_value=max_side))
    return rows, cols


@composite
def gen_sparse_random(draw, shape, density=0.3, dtype=None):
    seed = draw(st.integers(min_value=0, max_value=100))
    rows, cols = shape
    return intmat.random(rows, cols, density=density, random_state=seed, dtype=dtype)


@composite
def gen_matmul_operands(draw):
    rows, inner = draw(gen_shape())
    cols = draw(st.integers(min_value=1, max_value=6))
    density = draw(st.sampled_from([0.0, 0.2, 0.5, 1.0]))
    a = draw(gen_sparse_random((rows, inner), density=density, dtype="int64"))
    b = draw(gen_sparse_random((inner, cols), density=density, dtype="int64"))
    return a, b


@composite
def gen_block(draw, shape):
    """A sub-rectangle ``(i, j, rows, cols)`` inside ``shape``."""
    rows, cols = shape
    i = draw(st.integers(min_value=0, max_value=rows - 1))
    j = draw(st.integers(min_value=0, max_value=cols - 1))
    r = draw(st.integers(min_value=1, max_value=rows - i))
    c = draw(st.integers(min_value=1, max_value=cols - j))
    return i, j, r, c
