"""Test module for relief.points

The tests are run using pytest.
"""

import numpy as np
import pytest

from relief.bezier import BezierCurve
from relief.common import Dimension
from relief.errors import BadInputError, GeometryError
from relief.points import CompositeSpline

LINE_2SEG_3D = [(i / 3.0, 0.0, 0.0) for i in range(7)]

###############################################################################
# Construction Tests
###############################################################################


class TestCompositeSplineConstruction:
    """Test class for CompositeSpline validation."""

    def test_dimension_tag(self):
        """Test that the dimension is derived from the points."""
        assert CompositeSpline(LINE_2SEG_3D).dimension is Dimension.THREE
        assert CompositeSpline([(0, 0), (1, 0), (2, 0), (3, 0)]).dimension is Dimension.TWO

    def test_segment_count(self):
        """Test the number of cubic segments."""
        spline = CompositeSpline(LINE_2SEG_3D)
        assert spline.segment_count == 2
        assert len(spline) == 7

    @pytest.mark.parametrize(
        "points",
        [
            [],
            [(0.0, 0.0)],
            [(0.0, 0.0)] * 5,
            [(0.0, 0.0, 0.0, 0.0)] * 4,
            [0.0, 1.0, 2.0, 3.0],
        ],
    )
    def test_malformed_points(self, points):
        """Test that malformed point sequences raise GeometryError."""
        with pytest.raises(GeometryError):
            CompositeSpline(points)

    def test_dimension_mismatch(self):
        """Test that an expected dimension is enforced."""
        with pytest.raises(GeometryError):
            CompositeSpline(LINE_2SEG_3D, Dimension.TWO)

    def test_points_are_read_only_copies(self):
        """Test that the spline copies its input and cannot be modified."""
        source = np.array(LINE_2SEG_3D)
        spline = CompositeSpline(source)
        source[0, 0] = 42.0

        assert spline.points[0, 0] == 0.0
        with pytest.raises(ValueError):
            spline.points[0, 0] = 1.0


###############################################################################
# Lookup and Evaluation Tests
###############################################################################


class TestCompositeSplineLookup:
    """Test class for segment lookup and evaluation."""

    @pytest.mark.parametrize(
        "t,expected",
        [
            (0.0, (0, 0.0)),
            (0.5, (0, 0.5)),
            (1.0, (0, 1.0)),
            (1.5, (1, 0.5)),
            (2.0, (1, 1.0)),
            (3.5, (1, 2.5)),
            (-0.5, (0, -0.5)),
        ],
    )
    def test_locate(self, t, expected):
        """Test mapping of global parameters to segments, including clamping."""
        index, frac = CompositeSpline(LINE_2SEG_3D).locate(t)
        assert index == expected[0]
        assert frac == pytest.approx(expected[1])

    def test_locate_biases_toward_preceding_segment(self):
        """Test that parameters just above a breakpoint stay on the preceding segment."""
        spline = CompositeSpline(LINE_2SEG_3D)
        assert spline.locate(1.0 + 5e-6)[0] == 0
        assert spline.locate(1.0 + 1e-3)[0] == 1

    def test_segment(self):
        """Test access to the control points of one segment."""
        spline = CompositeSpline(LINE_2SEG_3D)
        assert np.array_equal(spline.segment(1), np.array(LINE_2SEG_3D[3:7]))
        with pytest.raises(BadInputError):
            spline.segment(2)

    def test_evaluate_and_derivative(self):
        """Test evaluation on a straight line with unit speed per segment."""
        spline = CompositeSpline(LINE_2SEG_3D)
        assert np.allclose(spline.evaluate(1.5), (1.5, 0.0, 0.0))
        assert np.allclose(spline.derivative(1.5), (1.0, 0.0, 0.0))
        assert np.allclose(spline.evaluate_segment(0, 0.25), (0.25, 0.0, 0.0))

    def test_polygon_lengths(self):
        """Test per-segment control polygon lengths."""
        spline = CompositeSpline(LINE_2SEG_3D)
        assert np.allclose(spline.polygon_lengths(), (1.0, 1.0))

    def test_polygonize(self):
        """Test polygonization of all segments with shared end points."""
        points = np.array([[0.0, 0.0], [5.0, 20.0], [15.0, 20.0], [20.0, 0.0], [25.0, -20.0], [35.0, 0.0], [40.0, 5.0]])
        spline = CompositeSpline(points)
        result = spline.polygonize(4)

        assert result.shape == (9, 2)
        assert np.array_equal(result[0], points[0])
        assert np.array_equal(result[4], points[3])
        assert np.array_equal(result[-1], points[6])
        assert np.allclose(result[6], BezierCurve.evaluate(0.5, *points[3:7]))
