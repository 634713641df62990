"""Projections of 3D digital points onto the three coordinate planes."""

from __future__ import annotations

from enum import IntEnum
from typing import Tuple

import numpy as np
import numpy.typing as npt

from _dss_common import Point2, Point3, as_point


class Axis(IntEnum):
    """Coordinate plane, named by its two kept axes.

    The value is the index of the dropped coordinate, i.e. of the axis
    orthogonal to the plane.
    """

    YZ = 0
    XZ = 1
    XY = 2


_KEPT = {
    Axis.YZ: (1, 2),
    Axis.XZ: (0, 2),
    Axis.XY: (0, 1),
}


def kept_coordinates(axis: Axis) -> Tuple[int, int]:
    """Indices of the two coordinates kept by the projection along *axis*."""
    return _KEPT[Axis(axis)]


def project(axis: Axis, p: Point3) -> Point2:
    """Drop the coordinate orthogonal to *axis*, keeping the others in order.

    Used for points and direction vectors alike.
    """
    i, j = kept_coordinates(axis)
    p = as_point(p, 3)
    return (p[i], p[j])


def project_array(axis: Axis, points: npt.ArrayLike) -> npt.NDArray[np.int64]:
    """Vectorised :func:`project` over a ``(..., 3)`` array."""
    pts = np.asarray(points, dtype=np.int64)
    if pts.shape[-1] != 3:
        raise ValueError(f"expected (..., 3) points, got shape {pts.shape}")
    return pts[..., list(kept_coordinates(axis))]


class Projector2D:
    """Callable functor projecting 3D points onto the plane of *axis*."""

    def __init__(self, axis: Axis) -> None:
        self.axis = Axis(axis)

    def __call__(self, p: Point3) -> Point2:
        return project(self.axis, p)

    def __repr__(self) -> str:
        return f"Projector2D({self.axis.name})"
