"""Tests for dss2d — 2D arithmetical DSS recognition."""

import numpy as np
import numpy.testing as npt
import pytest

from dss2d import (
    ArithmeticalDSSComputer2D,
    DSSPreconditionError,
    find_frame,
    is_elementary_step,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _grow(points, adjacency: int = 8) -> ArithmeticalDSSComputer2D:
    """Recognizer over *points*, asserting every extension succeeds."""
    dss = ArithmeticalDSSComputer2D(adjacency, start=points[0])
    for p in points[1:]:
        assert dss.extend_front(p), p
    return dss


_SLOPE_HALF = [(0, 0), (1, 0), (2, 1), (3, 1), (4, 2)]


# ===========================================================================
# Frames
# ===========================================================================

class TestFrames:
    def test_elementary_steps(self):
        assert is_elementary_step((1, 1), 8)
        assert not is_elementary_step((1, 1), 4)
        assert is_elementary_step((0, -1), 4)
        assert not is_elementary_step((2, 0), 8)
        assert not is_elementary_step((0, 0), 8)

    def test_compatible_naive_steps(self):
        assert find_frame([(1, 0), (1, -1)], 8) is not None
        assert find_frame([(0, 1), (-1, 1)], 8) is not None

    def test_incompatible_naive_steps(self):
        assert find_frame([(1, 0), (0, 1)], 8) is None
        assert find_frame([(1, 1), (1, -1)], 8) is None

    def test_standard_steps(self):
        assert find_frame([(1, 0), (0, -1)], 4) is not None
        assert find_frame([(1, 0), (-1, 0)], 4) is None


# ===========================================================================
# Initialisation
# ===========================================================================

class TestInit:
    def test_single_point(self):
        dss = ArithmeticalDSSComputer2D(8, start=(3, 5))
        assert len(dss) == 1
        assert dss.parameters() == ((1, 0), -5, 1)
        assert dss.back == dss.front == (3, 5)
        assert dss.uf == dss.ul == dss.lf == dss.ll == (3, 5)

    def test_single_point_membership(self):
        dss = ArithmeticalDSSComputer2D(8, start=(3, 5))
        assert dss.is_in_dss((3, 5))
        assert dss.is_in_dsl((4, 5))
        assert not dss.is_in_dss((4, 5))

    def test_uninitialised_raises(self):
        dss = ArithmeticalDSSComputer2D()
        assert not dss.is_valid()
        with pytest.raises(DSSPreconditionError):
            dss.extend_front((0, 0))
        with pytest.raises(DSSPreconditionError):
            dss.parameters()

    def test_bad_adjacency(self):
        with pytest.raises(ValueError):
            ArithmeticalDSSComputer2D(6)


# ===========================================================================
# Naive recognition
# ===========================================================================

class TestNaive:
    def test_slope_one_half(self):
        dss = _grow(_SLOPE_HALF)
        assert dss.parameters() == ((2, 1), 0, 2)
        assert (dss.a, dss.b, dss.mu, dss.omega) == (1, 2, 0, 2)
        assert dss.uf == (0, 0)
        assert dss.ul == (4, 2)
        assert dss.lf == (1, 0)
        assert dss.ll == (3, 1)

    def test_horizontal_run(self):
        dss = _grow([(x, 0) for x in range(6)])
        assert dss.parameters() == ((1, 0), 0, 1)

    def test_non_adjacent_point_rejected(self):
        dss = ArithmeticalDSSComputer2D(8, start=(0, 0))
        assert not dss.extend_front((2, 0))
        assert len(dss) == 1

    def test_incompatible_steps_rejected(self):
        dss = _grow([(0, 0), (1, 0)])
        assert not dss.extend_front((1, 1))

    def test_backtracking_rejected(self):
        dss = _grow([(0, 0), (1, 1)])
        assert not dss.extend_front((2, 0))

    def test_slope_update_then_remainder_rejection(self):
        points = [(0, 0), (1, 0), (2, 1), (3, 1), (4, 2), (5, 2), (6, 3)]
        dss = _grow(points)
        assert dss.parameters() == ((2, 1), 0, 2)

        # still a DSS, slope grows to 4/7
        assert dss.extend_front((7, 4))
        assert dss.parameters() == ((7, 4), 0, 7)

        before = dss.state
        assert not dss.extend_front((8, 5))
        assert dss.state == before
        assert len(dss) == 8

    def test_reflected_octant(self):
        dss = _grow([(0, 0), (1, -1), (2, -1)])
        assert dss.parameters() == ((2, -1), 0, 2)
        assert dss.uf == (0, 0)
        assert dss.ul == (2, -1)
        assert dss.lf == dss.ll == (1, -1)

    def test_run_replayed_when_octant_is_fixed(self):
        dss = _grow([(0, 0), (1, 0), (2, 0), (3, 0), (4, -1)])
        assert dss.parameters() == ((4, -1), -3, 4)
        assert dss.uf == dss.ul == (3, 0)
        assert dss.lf == (0, 0)
        assert dss.ll == (4, -1)

    def test_y_major_line(self):
        dss = _grow([(0, 0), (1, 1), (1, 2), (2, 3), (2, 4), (3, 5)])
        assert dss.direction == (1, 2)
        for p in [(0, 0), (1, 1), (1, 2), (2, 3), (2, 4), (3, 5)]:
            assert dss.is_in_dss(p)


# ===========================================================================
# Standard recognition
# ===========================================================================

class TestStandard:
    def test_staircase(self):
        dss = _grow([(0, 0), (1, 0), (1, 1), (2, 1), (2, 2), (3, 2), (4, 2)], adjacency=4)
        assert dss.parameters() == ((3, 2), -2, 5)
        assert dss.uf == dss.ul == (2, 2)
        assert dss.lf == (1, 0)
        assert dss.ll == (4, 2)

    def test_diagonal_step_rejected(self):
        dss = ArithmeticalDSSComputer2D(4, start=(0, 0))
        assert not dss.extend_front((1, 1))


# ===========================================================================
# Look-ahead, copies, snapshots
# ===========================================================================

class TestState:
    def test_is_extendable_front_does_not_mutate(self):
        dss = _grow(_SLOPE_HALF)
        before = dss.state
        assert dss.is_extendable_front((5, 2))
        assert not dss.is_extendable_front((5, 4))
        assert dss.state == before

    def test_copy_is_independent(self):
        dss = _grow(_SLOPE_HALF)
        other = dss.copy()
        assert other.extend_front((5, 2))
        assert len(dss) == 5
        assert len(other) == 6

    def test_restore(self):
        dss = _grow(_SLOPE_HALF)
        snapshot = dss.state
        dss.extend_front((5, 2))
        dss.restore(snapshot)
        assert len(dss) == 5
        assert dss.front == (4, 2)


# ===========================================================================
# Membership
# ===========================================================================

class TestMembership:
    def test_every_point_in_dss(self):
        dss = _grow(_SLOPE_HALF)
        for p in _SLOPE_HALF:
            assert dss.is_in_dss(p)

    def test_dsl_contains_points_beyond_the_segment(self):
        dss = _grow(_SLOPE_HALF)
        assert dss.is_in_dsl((6, 3))
        assert not dss.is_in_dss((6, 3))
        assert not dss.is_in_dsl((2, 0))

    def test_remainder(self):
        dss = _grow(_SLOPE_HALF)
        assert dss.remainder((3, 1)) == 1

    def test_dsl_mask_matches_scalar_test(self):
        dss = _grow(_SLOPE_HALF)
        ys, xs = np.meshgrid(np.arange(-2, 5), np.arange(-2, 8), indexing="ij")
        grid = np.stack([xs, ys], axis=-1)
        mask = dss.dsl_mask(grid)
        assert mask.shape == grid.shape[:-1]
        expected = np.array(
            [[dss.is_in_dsl(tuple(p)) for p in row] for row in grid.tolist()]
        )
        npt.assert_array_equal(mask, expected)


# ===========================================================================
# Equality
# ===========================================================================

class TestEquality:
    def test_same_scan(self):
        assert _grow(_SLOPE_HALF) == _grow(_SLOPE_HALF)

    def test_reverse_scan(self):
        forward = _grow(_SLOPE_HALF)
        backward = _grow(_SLOPE_HALF[::-1])
        assert backward.direction == (-2, -1)
        assert forward == backward
        assert backward == forward

    def test_reverse_scan_standard(self):
        staircase = [(0, 0), (1, 0), (1, 1), (2, 1), (2, 2), (3, 2), (4, 2)]
        forward = _grow(staircase, adjacency=4)
        backward = _grow(staircase[::-1], adjacency=4)
        assert backward.direction == (-3, -2)
        assert backward.omega == 5
        assert forward == backward
        assert backward == forward

    def test_different_segments(self):
        assert _grow(_SLOPE_HALF) != _grow(_SLOPE_HALF[:-1])

    def test_adjacency_matters(self):
        a = _grow([(0, 0), (1, 0)], adjacency=8)
        b = _grow([(0, 0), (1, 0)], adjacency=4)
        assert a != b

    def test_uninitialised(self):
        assert ArithmeticalDSSComputer2D() == ArithmeticalDSSComputer2D()
        assert ArithmeticalDSSComputer2D() != _grow(_SLOPE_HALF)

    def test_repr(self):
        assert "a=1, b=2" in repr(_grow(_SLOPE_HALF))
        assert "uninitialised" in repr(ArithmeticalDSSComputer2D())
