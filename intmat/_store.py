from ._utils import _coerce, _zero_of_dtype


class SparseStore:
    """
    Dual-indexed backing storage shared by every view of one matrix lineage.

    Parameters
    ----------
    dtype : numpy.dtype
        The element type of the stored values.
    by_row : dict, optional
        ``row -> (col -> value)`` mapping to adopt as-is.
    by_col : dict, optional
        ``col -> (row -> value)`` mapping to adopt as-is. Must mirror
        ``by_row``; it is not re-validated.

    Attributes
    ----------
    by_row : dict[int, dict[int, scalar]]
        Row-keyed index.
    by_col : dict[int, dict[int, scalar]]
        Column-keyed index, the mirror image of :attr:`by_row`.

    Notes
    -----
    The zero element is never stored. :meth:`set` is the only method that
    mutates the two indices and it always updates both.
    """

    __slots__ = ("dtype", "by_row", "by_col")

    def __init__(self, dtype, by_row=None, by_col=None):
        self.dtype = dtype
        self.by_row = {} if by_row is None else by_row
        self.by_col = {} if by_col is None else by_col

    def __len__(self):
        return sum(len(cs) for cs in self.by_row.values())

    def get(self, r, c):
        """Return the stored value at ``(r, c)`` or ``None`` when absent."""
        cs = self.by_row.get(r)
        if cs is None:
            return None
        return cs.get(c)

    def set(self, r, c, value):
        value = _coerce(value, self.dtype)

        if value is None or value == 0:
            cs = self.by_row.get(r)
            if cs is None or c not in cs:
                return

            del cs[c]
            if not cs:
                del self.by_row[r]

            rs = self.by_col[c]
            del rs[r]
            if not rs:
                del self.by_col[c]
            return

        self.by_row.setdefault(r, {})[c] = value
        self.by_col.setdefault(c, {})[r] = value

    def zero(self):
        return _zero_of_dtype(self.dtype)

    def is_mirrored(self):
        """Check that :attr:`by_row` and :attr:`by_col` hold the same cells."""
        for r, cs in self.by_row.items():
            if not cs:
                return False
            for c, v in cs.items():
                rs = self.by_col.get(c)
                if rs is None or r not in rs or rs[r] != v:
                    return False
        for rs in self.by_col.values():
            if not rs:
                return False
        return len(self) == sum(len(rs) for rs in self.by_col.values())
