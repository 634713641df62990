"""Incremental recognition of 3D digital straight segments.

A 3D digital curve is a DSS as long as at least two of its three
orthogonal projections are 2D DSS.  :class:`Naive3DDSSComputer` projects
every point onto the XY, XZ and YZ planes and feeds each projection to
its own :class:`~dss2d.ArithmeticalDSSComputer2D`.

A plane is *blocked* for the rest of the recognizer's life when

* two consecutive accepted points share the same projection on it (the
  projection is no longer injective), or
* its 2D recognizer rejects a point that the 3D segment accepts.

An extension is accepted while at least two planes stay unblocked.  A
rejected extension restores every plane (2D state and blocked flag) to its
state before the attempt, so a blocked plane is frozen at its last
successful 2D segment and the 3D recognizer never holds fewer than two
live planes.

With 8-adjacency on every plane the recognized curves are 26-connected;
with 4-adjacency they are 6-connected.
"""

from __future__ import annotations

import copy as _copy
import logging
from collections.abc import Sequence
from typing import Iterator, List, Optional, Tuple

import numpy as np
import numpy.typing as npt

from _dss_common import (
    DEFAULT_ADJACENCY,
    DSSPreconditionError,
    Point3,
    as_point,
    check_adjacency,
    reduce_vector,
)
from dss2d import ArithmeticalDSSComputer2D, DSSState

from .curve import ReversedCurve
from .projector import Axis, Projector2D, kept_coordinates, project_array

logger = logging.getLogger(__name__)

_FloatArray = npt.NDArray[np.float64]
_IntArray = npt.NDArray[np.int64]

# Candidate plane pairs for parameter reconstruction, in order of preference
_PLANE_PAIRS: Tuple[Tuple[Axis, Axis], ...] = (
    (Axis.XY, Axis.XZ),
    (Axis.XY, Axis.YZ),
    (Axis.XZ, Axis.YZ),
)


def _shared_coordinate(first: Axis, second: Axis) -> int:
    (shared,) = set(kept_coordinates(first)) & set(kept_coordinates(second))
    return shared


class Naive3DDSSComputer:
    """Incremental recognizer of a 3D digital straight segment.

    Parameters
    ----------
    curve:
        Optional sequence of integer 3D points (list of tuples, ``(N, 3)``
        numpy array, ...).  Without it the recognizer is uninitialised
        until :meth:`init` is called.
    start:
        Index in *curve* of the first point of the segment.
    adjacency:
        ``8`` (26-connected curves) or ``4`` (6-connected curves); used by
        the three 2D recognizers.
    reverse:
        Traverse *curve* from *start* towards its first point.

    Implemented operations
    ----------------------
    :meth:`init`, :meth:`extend_front`, :meth:`is_extendable_front`,
    :meth:`is_in_dss`, :meth:`is_in_dss_at`, :meth:`points_in_dss`,
    :meth:`get_parameters`, :meth:`arithmetical_dss2d`,
    :meth:`valid_arithmetical_dss2d`, :meth:`get_self`,
    :meth:`get_reverse`, :meth:`copy`
    """

    __hash__ = None  # mutable

    def __init__(
        self,
        curve: Optional[Sequence] = None,
        start: int = 0,
        adjacency: int = DEFAULT_ADJACENCY,
        reverse: bool = False,
    ) -> None:
        self._adjacency = check_adjacency(adjacency)
        self._reverse = bool(reverse)
        self._projectors = [Projector2D(axis) for axis in Axis]
        self._dss = [ArithmeticalDSSComputer2D(self._adjacency) for _ in Axis]
        self._blocked = [False, False, False]
        self._curve: Optional[Sequence] = None
        self._begin = 0
        self._end = 0
        if curve is not None:
            self.init(curve, start)

    # ------------------------------------------------------------------
    # Initialisation / factories
    # ------------------------------------------------------------------

    def init(self, curve: Sequence, start: int = 0) -> None:
        """Reset to the single-point segment at ``curve[start]``."""
        n = len(curve)
        if not -n <= start < n:
            raise IndexError(f"start {start} out of range for a curve of {n} points")
        if start < 0:
            start += n
        if self._reverse:
            curve = ReversedCurve(curve)
            start = n - 1 - start

        self._curve = curve
        self._begin = start
        self._end = start + 1
        p = self._point(start)
        for axis in Axis:
            self._dss[axis].init(self._projectors[axis](p))
            self._blocked[axis] = False

    def get_self(self) -> "Naive3DDSSComputer":
        """A fresh uninitialised recognizer of the same kind."""
        return Naive3DDSSComputer(adjacency=self._adjacency, reverse=self._reverse)

    def get_reverse(self) -> "Naive3DDSSComputer":
        """A fresh uninitialised recognizer traversing curves the other way."""
        return Naive3DDSSComputer(adjacency=self._adjacency, reverse=not self._reverse)

    def copy(self) -> "Naive3DDSSComputer":
        other = _copy.copy(self)
        other._dss = [dss.copy() for dss in self._dss]
        other._blocked = list(self._blocked)
        return other

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _check(self) -> None:
        if self._curve is None:
            raise DSSPreconditionError("Naive3DDSSComputer is not initialised")

    def _point(self, position: int) -> Point3:
        return as_point(self._curve[position], 3)

    def _snapshot(self) -> List[Tuple[DSSState, bool]]:
        return [(dss.state, blocked) for dss, blocked in zip(self._dss, self._blocked)]

    def _restore(self, snapshot: List[Tuple[DSSState, bool]]) -> None:
        for axis, (state, blocked) in zip(Axis, snapshot):
            self._dss[axis].restore(state)
            self._blocked[axis] = blocked

    def _live_count(self) -> int:
        return self._blocked.count(False)

    def _extend_planes(self, p: Point3) -> List[Tuple[Axis, str]]:
        """Push *p* to every unblocked plane, blocking the planes that fail.

        Mutates the planes in place; callers snapshot beforehand.  Returns
        the blocking events as ``(axis, reason)`` pairs.
        """
        last = self._point(self._end - 1)
        events = []
        for axis in Axis:
            if self._blocked[axis]:
                continue
            proj = self._projectors[axis]
            q = proj(p)
            if q == proj(last):
                self._blocked[axis] = True
                events.append((axis, "duplicate projection"))
            elif not self._dss[axis].extend_front(q):
                self._blocked[axis] = True
                events.append((axis, "not a 2D DSS"))
        return events

    # ------------------------------------------------------------------
    # Growth
    # ------------------------------------------------------------------

    def extend_front(self) -> bool:
        """Add the next curve point to the segment if it stays a 3D DSS.

        Returns ``False`` when the curve is exhausted or when fewer than two
        planes would remain valid; the recognizer is then unchanged.
        """
        self._check()
        if self._end >= len(self._curve):
            return False

        snapshot = self._snapshot()
        events = self._extend_planes(self._point(self._end))
        if self._live_count() < 2:
            self._restore(snapshot)
            logger.debug("extension rejected at position %d", self._end)
            return False

        for axis, reason in events:
            logger.debug("plane %s blocked at position %d (%s)", axis.name, self._end, reason)
        self._end += 1
        return True

    def is_extendable_front(self) -> bool:
        """Whether :meth:`extend_front` would succeed; never mutates."""
        self._check()
        if self._end >= len(self._curve):
            return False

        snapshot = self._snapshot()
        self._extend_planes(self._point(self._end))
        extendable = self._live_count() >= 2
        self._restore(snapshot)
        return extendable

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def is_in_dss(self, point: Point3) -> bool:
        """Whether every unblocked plane's DSL contains the projection of *point*."""
        self._check()
        p = as_point(point, 3)
        return all(
            self._dss[axis].is_in_dsl(self._projectors[axis](p))
            for axis in Axis
            if not self._blocked[axis]
        )

    def is_in_dss_at(self, position: int) -> bool:
        """:meth:`is_in_dss` for the curve point at *position*."""
        self._check()
        return self.is_in_dss(self._curve[position])

    def points_in_dss(self, points: npt.ArrayLike) -> npt.NDArray[np.bool_]:
        """Vectorised :meth:`is_in_dss` over a ``(..., 3)`` integer array."""
        self._check()
        pts = np.asarray(points, dtype=np.int64)
        mask = np.ones(pts.shape[:-1], dtype=bool)
        for axis in Axis:
            if not self._blocked[axis]:
                mask &= self._dss[axis].dsl_mask(project_array(axis, pts))
        return mask

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def _select_planes(self) -> Tuple[Axis, Axis]:
        live = [
            pair for pair in _PLANE_PAIRS
            if not self._blocked[pair[0]] and not self._blocked[pair[1]]
        ]
        for first, second in live:
            c = _shared_coordinate(first, second)
            c1 = self._dss[first].direction[kept_coordinates(first).index(c)]
            c2 = self._dss[second].direction[kept_coordinates(second).index(c)]
            if c1 != 0 and c2 != 0:
                return first, second
        return live[0]

    def _direction(self, first: Axis, second: Axis) -> Point3:
        c = _shared_coordinate(first, second)
        kept1, kept2 = kept_coordinates(first), kept_coordinates(second)
        d1, d2 = self._dss[first].direction, self._dss[second].direction
        p = kept1[1 - kept1.index(c)]
        q = kept2[1 - kept2.index(c)]
        c1, p1 = d1[kept1.index(c)], d1[kept1.index(p)]
        c2, q2 = d2[kept2.index(c)], d2[kept2.index(q)]

        v = [0, 0, 0]
        if c1 == 0 or c2 == 0:
            # shared coordinate constant along the segment
            v[p], v[q] = p1, q2
        else:
            # 2D directions are oriented along the curve, so sign(c1) == sign(c2)
            v[c] = c1 * abs(c2)
            v[p] = p1 * abs(c2)
            v[q] = q2 * abs(c1)
        return reduce_vector(tuple(v))

    def get_parameters(self) -> Tuple[_IntArray, _FloatArray, _FloatArray]:
        """Return ``(direction, intercept, thickness)`` of the 3D segment.

        Returns
        -------
        tuple
            ``direction``: int64 3-vector, the 3D direction rebuilt from two
            unblocked planes (see :meth:`planes_for_parameters`);
            ``intercept``, ``thickness``: float64 3-vectors indexed by
            :class:`Axis`: for each of the two selected planes, its ``mu``
            and ``omega`` rescaled to the projection of ``direction`` and
            divided by the largest component of ``direction``.  The
            component of the third plane is ``0.0``.
        """
        self._check()
        first, second = self._select_planes()
        v = self._direction(first, second)
        norm = max(abs(c) for c in v)

        intercept = np.zeros(3, dtype=np.float64)
        thickness = np.zeros(3, dtype=np.float64)
        for axis in (first, second):
            d, mu, omega = self._dss[axis].parameters()
            i, j = kept_coordinates(axis)
            scale = max(abs(v[i]), abs(v[j])) / max(abs(d[0]), abs(d[1]))
            intercept[int(axis)] = mu * scale / norm
            thickness[int(axis)] = omega * scale / norm
        return np.asarray(v, dtype=np.int64), intercept, thickness

    def planes_for_parameters(self) -> Tuple[Axis, Axis]:
        """The two planes :meth:`get_parameters` reads.

        Pairs are tried in the order ``(XY, XZ)``, ``(XY, YZ)``,
        ``(XZ, YZ)``; the first unblocked pair whose shared coordinate
        varies in both 2D directions wins, otherwise the first unblocked
        pair.
        """
        self._check()
        return self._select_planes()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def is_valid(self) -> bool:
        return self._curve is not None and self._live_count() >= 2

    @property
    def adjacency(self) -> int:
        return self._adjacency

    @property
    def reverse(self) -> bool:
        return self._reverse

    @property
    def curve(self) -> Optional[Sequence]:
        """The traversed curve (a :class:`ReversedCurve` view when reversed)."""
        return self._curve

    @property
    def begin(self) -> int:
        """Position of the first point of the segment in :attr:`curve`."""
        self._check()
        return self._begin

    @property
    def end(self) -> int:
        """Position one past the last point of the segment in :attr:`curve`."""
        self._check()
        return self._end

    @property
    def back(self) -> Point3:
        self._check()
        return self._point(self._begin)

    @property
    def front(self) -> Point3:
        self._check()
        return self._point(self._end - 1)

    def __len__(self) -> int:
        self._check()
        return self._end - self._begin

    def __iter__(self) -> Iterator[Point3]:
        self._check()
        for position in range(self._begin, self._end):
            yield self._point(position)

    @property
    def live_axes(self) -> Tuple[Axis, ...]:
        return tuple(axis for axis in Axis if not self._blocked[axis])

    def arithmetical_dss2d(self, axis: Axis) -> ArithmeticalDSSComputer2D:
        """The 2D recognizer of the plane orthogonal to *axis*."""
        return self._dss[Axis(axis)]

    def valid_arithmetical_dss2d(self, axis: Axis) -> bool:
        """Whether the plane orthogonal to *axis* is still unblocked."""
        return not self._blocked[Axis(axis)]

    @property
    def arithmetical_dss2d_xy(self) -> ArithmeticalDSSComputer2D:
        return self._dss[Axis.XY]

    @property
    def arithmetical_dss2d_xz(self) -> ArithmeticalDSSComputer2D:
        return self._dss[Axis.XZ]

    @property
    def arithmetical_dss2d_yz(self) -> ArithmeticalDSSComputer2D:
        return self._dss[Axis.YZ]

    # ------------------------------------------------------------------
    # Comparison / display
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        """Same segment, recognized in the same or in the reverse order.

        Only planes unblocked in both recognizers are compared.
        """
        if not isinstance(other, Naive3DDSSComputer):
            return NotImplemented
        if self._curve is None or other._curve is None:
            return self._curve is None and other._curve is None
        if self._adjacency != other._adjacency:
            return False
        ends, other_ends = (self.back, self.front), (other.back, other.front)
        if ends != other_ends and ends != other_ends[::-1]:
            return False
        return all(
            self._dss[axis] == other._dss[axis]
            for axis in Axis
            if not self._blocked[axis] and not other._blocked[axis]
        )

    def __ne__(self, other: object) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def __repr__(self) -> str:
        if self._curve is None:
            return f"Naive3DDSSComputer(adjacency={self._adjacency}, uninitialised)"
        live = ",".join(axis.name for axis in self.live_axes)
        return (
            f"Naive3DDSSComputer(adjacency={self._adjacency}, reverse={self._reverse}, "
            f"range=[{self._begin}, {self._end}), back={self.back}, front={self.front}, "
            f"live={live})"
        )
