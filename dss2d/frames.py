"""Octant frames for the 2D arithmetical DSS recognizer.

The recognition itself runs in a canonical frame where every step of the
digital path is one of two fixed elementary steps:

* naive (8-adjacency):    ``(1, 0)`` and ``(1, 1)``  (first octant)
* standard (4-adjacency): ``(1, 0)`` and ``(0, 1)``  (first quadrant)

A frame is one of the eight signed permutation matrices of the plane,
stored row-major as ``(m00, m01, m10, m11)``.  Frames are orthogonal, so
the inverse is the transpose.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from _dss_common import NAIVE, STANDARD, Point2

Frame = Tuple[int, int, int, int]

# Identity first: it is the frame of every single-point segment
FRAMES: Tuple[Frame, ...] = (
    (1, 0, 0, 1),
    (1, 0, 0, -1),
    (-1, 0, 0, 1),
    (-1, 0, 0, -1),
    (0, 1, 1, 0),
    (0, 1, -1, 0),
    (0, -1, 1, 0),
    (0, -1, -1, 0),
)
IDENTITY: Frame = FRAMES[0]

CANONICAL_STEPS = {
    NAIVE: ((1, 0), (1, 1)),
    STANDARD: ((1, 0), (0, 1)),
}


def apply(frame: Frame, v: Point2) -> Point2:
    """Map *v* from the original frame to *frame*."""
    m00, m01, m10, m11 = frame
    return (m00 * v[0] + m01 * v[1], m10 * v[0] + m11 * v[1])


def apply_inverse(frame: Frame, v: Point2) -> Point2:
    """Map *v* from *frame* back to the original frame."""
    m00, m01, m10, m11 = frame
    return (m00 * v[0] + m10 * v[1], m01 * v[0] + m11 * v[1])


def determinant(frame: Frame) -> int:
    m00, m01, m10, m11 = frame
    return m00 * m11 - m01 * m10


def is_elementary_step(step: Point2, adjacency: int) -> bool:
    """True if *step* joins two adjacent points under *adjacency*."""
    dx, dy = abs(step[0]), abs(step[1])
    if adjacency == NAIVE:
        return max(dx, dy) == 1
    return dx + dy == 1


def find_frame(steps: Iterable[Point2], adjacency: int) -> Optional[Frame]:
    """Return the first frame mapping every step of *steps* to a canonical step.

    ``None`` when no frame does, i.e. the steps cannot belong to the same
    digital straight segment.
    """
    steps = tuple(steps)
    canonical = CANONICAL_STEPS[adjacency]
    for frame in FRAMES:
        if all(apply(frame, s) in canonical for s in steps):
            return frame
    return None
