"""Digital curve helpers: reversed views and digital line generation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Tuple

import numpy as np
import numpy.typing as npt

from _dss_common import as_point, reduce_vector

_IntArray = npt.NDArray[np.int64]


class ReversedCurve(Sequence):
    """Read-only view of *curve* traversed from its last point to its first.

    ``ReversedCurve(c)[i]`` is ``c[len(c) - 1 - i]``; the underlying curve
    is never copied.
    """

    def __init__(self, curve: Sequence) -> None:
        self.curve = curve

    def __len__(self) -> int:
        return len(self.curve)

    def __getitem__(self, index):
        n = len(self.curve)
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(n))]
        if index < 0:
            index += n
        if not 0 <= index < n:
            raise IndexError("ReversedCurve index out of range")
        return self.curve[n - 1 - index]

    def original_index(self, index: int) -> int:
        """Index in the underlying curve of the view position *index*."""
        return len(self.curve) - 1 - index

    def __repr__(self) -> str:
        return f"ReversedCurve(len={len(self)})"


def digital_line_3d(
    direction: Tuple[int, int, int],
    n: int,
    start: Tuple[int, int, int] = (0, 0, 0),
) -> _IntArray:
    """Sample *n* points of the 26-connected digital line of *direction*.

    The main axis is the one with the largest absolute component ``m``;
    point ``k`` is ``start + floor((k * d + m // 2) / m)`` component-wise
    (rounded digitisation, exact integer arithmetic).

    Returns
    -------
    numpy.ndarray
        Shape ``(n, 3)`` int64 array.
    """
    d = reduce_vector(as_point(direction, 3))
    m = max(abs(c) for c in d)
    if m == 0:
        raise ValueError("direction must be non-zero")
    s = np.asarray(as_point(start, 3), dtype=np.int64)
    k = np.arange(n, dtype=np.int64)[:, None]
    dv = np.asarray(d, dtype=np.int64)[None, :]
    return s + np.floor_divide(k * dv + m // 2, m)
