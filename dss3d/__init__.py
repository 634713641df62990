"""
dss3d — 3D Digital Straight Segment Recognition
================================================

Online recognition of 3D digital straight segments (DSS) along 26- or
6-connected digital curves, by tracking the curve's projections on the
three coordinate planes with 2D arithmetical DSS recognizers
(:mod:`dss2d`).

Implemented features
--------------------
- Axis projector: :class:`Axis`, :func:`project`, :class:`Projector2D`
- Incremental recognizer: :class:`Naive3DDSSComputer` (forward and reverse
  traversal, look-ahead, membership, parameters)
- Curve helpers: :class:`ReversedCurve`, :func:`digital_line_3d`
- Opt-in logging: :func:`setup_logging`

Quick start
-----------

::

    from dss3d import Naive3DDSSComputer, digital_line_3d

    curve = digital_line_3d((6, 3, 2), 12)
    dss = Naive3DDSSComputer(curve, start=0, adjacency=8)
    while dss.extend_front():
        pass

    direction, intercept, thickness = dss.get_parameters()

The recognizer only grows one segment; splitting a whole curve into
maximal segments is left to the caller (see
``examples/greedy_segmentation_example.py``).
"""

from _dss_common import NAIVE, STANDARD, DSSPreconditionError, setup_logging

from .projector import Axis, Projector2D, project, project_array, kept_coordinates
from .curve import ReversedCurve, digital_line_3d
from .naive3d import Naive3DDSSComputer

__version__ = "0.1.0"

__all__ = [
    # Projection
    "Axis",
    "Projector2D",
    "project",
    "project_array",
    "kept_coordinates",

    # Curves
    "ReversedCurve",
    "digital_line_3d",

    # Recognition
    "Naive3DDSSComputer",

    # Configuration / errors / logging
    "NAIVE",
    "STANDARD",
    "DSSPreconditionError",
    "setup_logging",
]
