"""
dss2d — 2D Arithmetical Digital Straight Segment Recognition
=============================================================

Online recognition of naive (8-connected) and standard (4-connected)
digital straight segments, following Debled-Rennesson's arithmetical
algorithm.

Implemented features
--------------------
- Incremental growth: :meth:`ArithmeticalDSSComputer2D.extend_front`,
  look-ahead with :meth:`~ArithmeticalDSSComputer2D.is_extendable_front`
- Parameters ``(a, b, mu, omega)`` and leaning points in any octant
- Membership: band test, segment test, vectorised numpy mask
- Immutable snapshots (:class:`DSSState`) for cheap save/restore

Quick start
-----------

::

    from dss2d import ArithmeticalDSSComputer2D

    dss = ArithmeticalDSSComputer2D(adjacency=8, start=(0, 0))
    for p in [(1, 0), (2, 1), (3, 1), (4, 2)]:
        assert dss.extend_front(p)

    direction, mu, omega = dss.parameters()   # ((2, 1), 0, 2)
"""

from _dss_common import NAIVE, STANDARD, DSSPreconditionError

from .arithmetical import ArithmeticalDSSComputer2D, DSSState
from .frames import FRAMES, CANONICAL_STEPS, find_frame, is_elementary_step

__version__ = "0.1.0"

__all__ = [
    "ArithmeticalDSSComputer2D",
    "DSSState",

    # Frames
    "FRAMES",
    "CANONICAL_STEPS",
    "find_frame",
    "is_elementary_step",

    # Configuration / errors
    "NAIVE",
    "STANDARD",
    "DSSPreconditionError",
]
