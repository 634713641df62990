"""Online recognition of 2D arithmetical digital straight segments.

A digital straight line (DSL) of direction ``(b, a)`` is the set of
integer points ``(x, y)`` whose remainder ``r = a*x - b*y`` satisfies
``mu <= r < mu + omega``, with ``omega = max(|a|, |b|)`` for naive
(8-connected) lines and ``omega = |a| + |b|`` for standard (4-connected)
lines.  Points with ``r == mu`` are *upper* leaning points, points with
``r == mu + omega - 1`` are *lower* leaning points.

Algorithm
---------
Debled-Rennesson's incremental recognition.  A new point ``M`` joined to
the front by an elementary step is classified by its remainder:

* ``mu <= r < mu + omega``: interior, leaning points updated if ``M`` is
  on a leaning line;
* ``r == mu - 1``: the slope grows, the new upper leaning line goes through
  the first upper leaning point and ``M``;
* ``r == mu + omega``: the slope shrinks, the new lower leaning line goes
  through the first lower leaning point and ``M``;
* anything else: ``M`` is rejected.

The update rules hold in the first octant (naive) or quadrant (standard),
so each recognizer maps its points through an octant frame
(:mod:`dss2d.frames`).  The frame is known once two distinct steps have
been seen; before that the segment is a straight run and is replayed when
the frame changes.  Every public value is expressed in the original frame.
"""

from __future__ import annotations

import copy as _copy
import logging
from typing import NamedTuple, Optional, Tuple

import numpy as np
import numpy.typing as npt

from _dss_common import (
    DEFAULT_ADJACENCY,
    NAIVE,
    DSSPreconditionError,
    Point2,
    add,
    as_point,
    check_adjacency,
    cross2,
    dot,
    reduce_vector,
    sub,
)

from .frames import (
    CANONICAL_STEPS,
    IDENTITY,
    Frame,
    apply,
    apply_inverse,
    determinant,
    find_frame,
    is_elementary_step,
)

logger = logging.getLogger(__name__)


class DSSState(NamedTuple):
    """Immutable snapshot of a 2D recognizer.

    ``a``, ``b``, ``mu`` and the leaning points are expressed in ``frame``;
    ``back``, ``front`` and ``step`` in the original frame.
    """

    a: int
    b: int
    mu: int
    uf: Point2
    ul: Point2
    lf: Point2
    ll: Point2
    frame: Frame
    back: Point2
    front: Point2
    size: int
    step: Optional[Point2]
    fixed: bool


def _omega(a: int, b: int, adjacency: int) -> int:
    # canonical frame: 0 <= a <= b (naive), a, b >= 0 (standard)
    return b if adjacency == NAIVE else a + b


def _initial_state(point: Point2, frame: Frame = IDENTITY) -> DSSState:
    q = apply(frame, point)
    return DSSState(0, 1, -q[1], q, q, q, q, frame, point, point, 1, None, False)


def _add_canonical(state: DSSState, q: Point2, adjacency: int) -> Optional[DSSState]:
    """Debled-Rennesson update with *q* already mapped to the canonical frame."""
    a, b, mu = state.a, state.b, state.mu
    uf, ul, lf, ll = state.uf, state.ul, state.lf, state.ll
    omega = _omega(a, b, adjacency)
    r = a * q[0] - b * q[1]

    if mu <= r < mu + omega:
        pass
    elif r == mu - 1:
        lf = ll
        ul = q
        b, a = reduce_vector(sub(q, uf))
        mu = a * q[0] - b * q[1]
    elif r == mu + omega:
        uf = ul
        ll = q
        b, a = reduce_vector(sub(q, lf))
        mu = a * ul[0] - b * ul[1]
    else:
        return None

    # With omega == 1 both leaning lines coincide
    omega = _omega(a, b, adjacency)
    r = a * q[0] - b * q[1]
    if r == mu:
        ul = q
    if r == mu + omega - 1:
        ll = q
    return state._replace(a=a, b=b, mu=mu, uf=uf, ul=ul, lf=lf, ll=ll)


def _replay(state: DSSState, frame: Frame, adjacency: int) -> DSSState:
    """Rebuild the straight run held by *state* in *frame*."""
    point = state.back
    replayed = _initial_state(point, frame)
    for _ in range(state.size - 1):
        point = add(point, state.step)
        replayed = _add_canonical(replayed, apply(frame, point), adjacency)
    return replayed


def extended_state(state: DSSState, point: Point2, adjacency: int) -> Optional[DSSState]:
    """Return the state after appending *point*, or ``None`` if it is rejected."""
    step = sub(point, state.front)
    if not is_elementary_step(step, adjacency):
        return None

    frame, fixed = state.frame, state.fixed
    if state.step is None:
        frame = find_frame((step,), adjacency)
        base = _initial_state(state.back, frame)
    elif fixed:
        if apply(frame, step) not in CANONICAL_STEPS[adjacency]:
            return None
        base = state
    elif step == state.step:
        base = state
    else:
        frame = find_frame((state.step, step), adjacency)
        if frame is None:
            return None
        fixed = True
        base = state if frame == state.frame else _replay(state, frame, adjacency)

    new = _add_canonical(base, apply(frame, point), adjacency)
    if new is None:
        return None
    return new._replace(
        frame=frame,
        back=state.back,
        front=point,
        size=state.size + 1,
        step=step if state.step is None else state.step,
        fixed=fixed,
    )


# ===========================================================================
# Public class
# ===========================================================================

class ArithmeticalDSSComputer2D:
    """Incremental recognizer of a 2D digital straight segment.

    Parameters
    ----------
    adjacency:
        ``8`` for naive (8-connected) segments, ``4`` for standard
        (4-connected) segments.
    start:
        Optional first point; without it the recognizer must be
        initialised with :meth:`init` before use.

    Implemented operations
    ----------------------
    :meth:`init`, :meth:`extend_front`, :meth:`is_extendable_front`,
    :meth:`parameters`, :meth:`remainder`, :meth:`is_in_dsl`,
    :meth:`is_in_dss`, :meth:`dsl_mask`, :meth:`copy`
    """

    __hash__ = None  # mutable

    def __init__(self, adjacency: int = DEFAULT_ADJACENCY, start: Optional[Point2] = None) -> None:
        self._adjacency = check_adjacency(adjacency)
        self._state: Optional[DSSState] = None
        if start is not None:
            self.init(start)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def adjacency(self) -> int:
        return self._adjacency

    @property
    def state(self) -> DSSState:
        """Current immutable snapshot (see :meth:`restore`)."""
        return self._checked()

    def restore(self, state: DSSState) -> None:
        """Reset the recognizer to a snapshot previously read from :attr:`state`."""
        self._state = state

    def is_valid(self) -> bool:
        return self._state is not None

    def init(self, point: Point2) -> None:
        """Reset to the single-point segment at *point*."""
        self._state = _initial_state(as_point(point, 2))

    def copy(self) -> "ArithmeticalDSSComputer2D":
        return _copy.copy(self)

    def _checked(self) -> DSSState:
        if self._state is None:
            raise DSSPreconditionError("ArithmeticalDSSComputer2D is not initialised")
        return self._state

    # ------------------------------------------------------------------
    # Growth
    # ------------------------------------------------------------------

    def extend_front(self, point: Point2) -> bool:
        """Append *point* if the result is still a DSS.

        Returns ``False`` and leaves the recognizer unchanged otherwise.
        """
        state = self._checked()
        new = extended_state(state, as_point(point, 2), self._adjacency)
        if new is None:
            return False
        if new.frame != state.frame:
            logger.debug("DSS from %s switched to frame %s", new.back, new.frame)
        self._state = new
        return True

    def is_extendable_front(self, point: Point2) -> bool:
        """Whether :meth:`extend_front` would accept *point*; never mutates."""
        state = self._checked()
        return extended_state(state, as_point(point, 2), self._adjacency) is not None

    # ------------------------------------------------------------------
    # Parameters (original frame)
    # ------------------------------------------------------------------

    def _original(self) -> Tuple[int, int, int, int, Point2, Point2, Point2, Point2]:
        st = self._checked()
        b, a = apply_inverse(st.frame, (st.b, st.a))
        omega = _omega(st.a, st.b, self._adjacency)
        uf, ul, lf, ll = (apply_inverse(st.frame, p) for p in (st.uf, st.ul, st.lf, st.ll))
        if determinant(st.frame) > 0:
            return a, b, st.mu, omega, uf, ul, lf, ll
        # reflections swap the sides of the band
        return a, b, -(st.mu + omega - 1), omega, lf, ll, uf, ul

    @property
    def a(self) -> int:
        return self._original()[0]

    @property
    def b(self) -> int:
        return self._original()[1]

    @property
    def mu(self) -> int:
        return self._original()[2]

    @property
    def omega(self) -> int:
        return self._original()[3]

    @property
    def direction(self) -> Point2:
        """Direction vector ``(b, a)``, oriented from :attr:`back` to :attr:`front`."""
        a, b = self._original()[:2]
        return (b, a)

    def parameters(self) -> Tuple[Point2, int, int]:
        """Return ``(direction, mu, omega)``."""
        a, b, mu, omega = self._original()[:4]
        return (b, a), mu, omega

    @property
    def uf(self) -> Point2:
        """First upper leaning point."""
        return self._original()[4]

    @property
    def ul(self) -> Point2:
        """Last upper leaning point."""
        return self._original()[5]

    @property
    def lf(self) -> Point2:
        """First lower leaning point."""
        return self._original()[6]

    @property
    def ll(self) -> Point2:
        """Last lower leaning point."""
        return self._original()[7]

    @property
    def back(self) -> Point2:
        """First point of the segment."""
        return self._checked().back

    @property
    def front(self) -> Point2:
        """Last point of the segment."""
        return self._checked().front

    def __len__(self) -> int:
        return self._checked().size

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def remainder(self, point: Point2) -> int:
        a, b = self._original()[:2]
        return cross2(as_point(point, 2), (b, a))

    def is_in_dsl(self, point: Point2) -> bool:
        """Whether *point* lies in the band ``mu <= r < mu + omega``."""
        a, b, mu, omega = self._original()[:4]
        r = cross2(as_point(point, 2), (b, a))
        return mu <= r < mu + omega

    def is_in_dss(self, point: Point2) -> bool:
        """Whether *point* lies in the band and between :attr:`back` and :attr:`front`."""
        point = as_point(point, 2)
        if not self.is_in_dsl(point):
            return False
        st = self._checked()
        d = self.direction
        t = dot(sub(point, st.back), d)
        return 0 <= t <= dot(sub(st.front, st.back), d)

    def dsl_mask(self, points: npt.ArrayLike) -> npt.NDArray[np.bool_]:
        """Vectorised :meth:`is_in_dsl` over a ``(..., 2)`` integer array."""
        pts = np.asarray(points, dtype=np.int64)
        a, b, mu, omega = self._original()[:4]
        r = a * pts[..., 0] - b * pts[..., 1]
        return (r >= mu) & (r < mu + omega)

    # ------------------------------------------------------------------
    # Comparison / display
    # ------------------------------------------------------------------

    def _signature(self) -> tuple:
        a, b, mu, omega, uf, ul, lf, ll = self._original()
        st = self._checked()
        return (a, b, mu, omega, st.back, st.front, uf, ul, lf, ll)

    def _reversed_signature(self) -> tuple:
        a, b, mu, omega, uf, ul, lf, ll = self._original()
        st = self._checked()
        return (-a, -b, -(mu + omega - 1), omega, st.front, st.back, ll, lf, ul, uf)

    def __eq__(self, other: object) -> bool:
        """Same segment, scanned in the same or in the reverse order."""
        if not isinstance(other, ArithmeticalDSSComputer2D):
            return NotImplemented
        if self._state is None or other._state is None:
            return self._state is None and other._state is None
        if self._adjacency != other._adjacency:
            return False
        if len(self) == 1 or len(other) == 1:
            return len(self) == len(other) and self.back == other.back
        mine = self._signature()
        return mine == other._signature() or mine == other._reversed_signature()

    def __ne__(self, other: object) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def __repr__(self) -> str:
        if self._state is None:
            return f"ArithmeticalDSSComputer2D(adjacency={self._adjacency}, uninitialised)"
        a, b, mu, omega = self._original()[:4]
        return (
            f"ArithmeticalDSSComputer2D(adjacency={self._adjacency}, a={a}, b={b}, "
            f"mu={mu}, omega={omega}, back={self.back}, front={self.front})"
        )
