"""Shared DSS helpers used by both dss2d and dss3d.

This module provides:

* **Configuration**: :data:`NAIVE`, :data:`STANDARD`,
  :data:`DEFAULT_ADJACENCY`, :func:`check_adjacency`
* **Point constructors**: :func:`as_point`
* **Exact integer helpers**: :func:`add`, :func:`sub`, :func:`dot`,
  :func:`cross2`, :func:`reduce_vector`
* **Errors**: :class:`DSSPreconditionError`
* **Logging**: :func:`setup_logging`

Not meant to be imported directly by end users — import from
``dss2d`` or ``dss3d`` instead.
"""

from __future__ import annotations

import logging
import sys
from math import gcd
from typing import Iterable, Optional, Tuple

__all__ = [
    "Point", "Point2", "Point3",
    "NAIVE", "STANDARD", "DEFAULT_ADJACENCY", "check_adjacency",
    "as_point",
    "add", "sub", "dot", "cross2", "reduce_vector",
    "DSSPreconditionError",
    "setup_logging",
]

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
Point = Tuple[int, ...]
Point2 = Tuple[int, int]
Point3 = Tuple[int, int, int]

# ---------------------------------------------------------------------------
# Adjacency configuration
# ---------------------------------------------------------------------------
NAIVE = 8
STANDARD = 4
DEFAULT_ADJACENCY = NAIVE


def check_adjacency(adjacency: int) -> int:
    """Return *adjacency* if it is 4 or 8, raise ``ValueError`` otherwise."""
    if adjacency not in (NAIVE, STANDARD):
        raise ValueError(f"adjacency must be 4 or 8, got {adjacency!r}")
    return adjacency


# ===========================================================================
# Errors
# ===========================================================================

class DSSPreconditionError(RuntimeError):
    """A recognizer was used before it was initialised."""


# ===========================================================================
# Point constructors
# ===========================================================================

def as_point(p: Iterable, dim: int) -> Point:
    """Normalise *p* to a tuple of *dim* Python ints.

    Accepts tuples, lists and numpy rows.  Floats are accepted only when
    they hold an integral value.
    """
    coords = tuple(p)
    if len(coords) != dim:
        raise ValueError(f"expected a {dim}-D point, got {coords!r}")
    out = []
    for c in coords:
        i = int(c)
        if i != c:
            raise ValueError(f"non-integral coordinate {c!r} in {coords!r}")
        out.append(i)
    return tuple(out)


# ===========================================================================
# Exact integer helpers
# ===========================================================================

def add(u: Point, v: Point) -> Point:
    return tuple(a + b for a, b in zip(u, v))


def sub(u: Point, v: Point) -> Point:
    return tuple(a - b for a, b in zip(u, v))


def dot(u: Point, v: Point) -> int:
    return sum(a * b for a, b in zip(u, v))


def cross2(u: Point2, v: Point2) -> int:
    """Determinant ``u.x * v.y - u.y * v.x``."""
    return u[0] * v[1] - u[1] * v[0]


def reduce_vector(v: Point) -> Point:
    """Divide *v* by the gcd of its components (zero vector unchanged)."""
    g = 0
    for c in v:
        g = gcd(g, c)
    if g <= 1:
        return tuple(v)
    return tuple(c // g for c in v)


# ===========================================================================
# Logging
# ===========================================================================

def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """Configure the ``dss2d`` and ``dss3d`` loggers.

    Parameters
    ----------
    level:
        Logging level (e.g. ``logging.DEBUG`` to trace blocking events).
    log_file:
        Optional path to also write the log to.
    """
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in ("dss2d", "dss3d"):
        logger = logging.getLogger(name)
        logger.setLevel(level)

        # Avoid duplicate output when called more than once
        for old in logger.handlers[:]:
            logger.removeHandler(old)
            old.close()

        for handler in handlers:
            logger.addHandler(handler)

    logging.getLogger("dss3d").info("Logging initialized.")
