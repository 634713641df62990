"""Tests for dss3d/projector.py — projections onto the coordinate planes."""

import numpy as np
import numpy.testing as npt
import pytest

from dss3d import Axis, Projector2D, kept_coordinates, project, project_array


class TestAxis:
    def test_values_are_dropped_coordinates(self):
        assert int(Axis.YZ) == 0
        assert int(Axis.XZ) == 1
        assert int(Axis.XY) == 2

    def test_kept_coordinates(self):
        assert kept_coordinates(Axis.XY) == (0, 1)
        assert kept_coordinates(Axis.XZ) == (0, 2)
        assert kept_coordinates(Axis.YZ) == (1, 2)

    def test_kept_coordinates_accepts_ints(self):
        assert kept_coordinates(2) == (0, 1)


class TestProject:
    def test_point(self):
        p = (1, 2, 3)
        assert project(Axis.XY, p) == (1, 2)
        assert project(Axis.XZ, p) == (1, 3)
        assert project(Axis.YZ, p) == (2, 3)

    def test_direction_vector(self):
        assert project(Axis.XZ, (6, -3, 2)) == (6, 2)

    def test_wrong_dimension(self):
        with pytest.raises(ValueError):
            project(Axis.XY, (1, 2))

    def test_functor(self):
        proj = Projector2D(Axis.YZ)
        assert proj((4, 5, 6)) == (5, 6)
        assert repr(proj) == "Projector2D(YZ)"


class TestProjectArray:
    def test_matches_scalar_projection(self):
        pts = np.array([[0, 0, 0], [1, 1, 0], [2, 1, 1], [3, 2, 1]])
        for axis in Axis:
            out = project_array(axis, pts)
            assert out.shape == (4, 2)
            npt.assert_array_equal(out, [project(axis, p) for p in pts.tolist()])

    def test_batch_dimensions_kept(self):
        pts = np.zeros((2, 5, 3), dtype=np.int64)
        assert project_array(Axis.XZ, pts).shape == (2, 5, 2)

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            project_array(Axis.XY, np.zeros((4, 2)))
