"""Cubic Bezier evaluation and subdivision for 2D and 3D control points."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from relief.common import PointLike, distance, lerp
from relief.errors import BadInputError

SegmentLike = Union[Sequence[PointLike], NDArray[np.float64]]


class BezierCurve:
    """Class to handle cubic Bezier segment operations.

    All methods work on points of any dimension: the result has the same number
    of coordinates as the control points. The parameter ``t`` is never clamped,
    values outside [0, 1] extrapolate the cubic.
    """

    @staticmethod
    def _control_points(points: SegmentLike) -> NDArray[np.float64]:
        points_array = np.asarray(points, dtype=np.float64)
        if points_array.ndim != 2 or points_array.shape[0] != 4:
            raise BadInputError(f"A cubic segment needs 4 control points, got shape {points_array.shape}")
        return points_array

    @staticmethod
    def evaluate(t: float, p0: PointLike, p1: PointLike, p2: PointLike, p3: PointLike) -> NDArray[np.float64]:
        """
        Evaluate the cubic Bezier curve at parameter t.

        B(t) = (1-t)^3*P0 + 3*(1-t)^2*t*P1 + 3*(1-t)*t^2*P2 + t^3*P3

        Args:
            t: Curve parameter, 0 at p0 and 1 at p3.
            p0: Start point.
            p1: First control point.
            p2: Second control point.
            p3: End point.

        Returns:
            NDArray[np.float64] with the dimension of the control points.
        """
        omt = 1.0 - t
        m0 = omt * omt * omt
        m1 = 3.0 * t * omt * omt
        m2 = 3.0 * t * t * omt
        m3 = t * t * t
        return (
            m0 * np.asarray(p0, dtype=np.float64)
            + m1 * np.asarray(p1, dtype=np.float64)
            + m2 * np.asarray(p2, dtype=np.float64)
            + m3 * np.asarray(p3, dtype=np.float64)
        )

    @staticmethod
    def derivative(t: float, p0: PointLike, p1: PointLike, p2: PointLike, p3: PointLike) -> NDArray[np.float64]:
        """
        Evaluate the first derivative dB/dt of the cubic Bezier curve at parameter t.

        Args:
            t: Curve parameter.
            p0: Start point.
            p1: First control point.
            p2: Second control point.
            p3: End point.

        Returns:
            NDArray[np.float64] with the dimension of the control points.
        """
        t2 = t * t
        m0 = -3.0 + 6.0 * t - 3.0 * t2
        m1 = 3.0 - 12.0 * t + 9.0 * t2
        m2 = 6.0 * t - 9.0 * t2
        m3 = 3.0 * t2
        return (
            m0 * np.asarray(p0, dtype=np.float64)
            + m1 * np.asarray(p1, dtype=np.float64)
            + m2 * np.asarray(p2, dtype=np.float64)
            + m3 * np.asarray(p3, dtype=np.float64)
        )

    @classmethod
    def split_segment(cls, points: SegmentLike, t: float) -> NDArray[np.float64]:
        """
        Split one cubic segment at parameter t using de Casteljau's algorithm.

        Args:
            points: The 4 control points A, B, C, D of the segment.
            t: Split parameter. Not clamped, values outside [0, 1] extrapolate.

        Returns:
            NDArray[np.float64] of shape (7, dim) holding [A, E, H, K, J, G, D]:
            the segments [A, E, H, K] and [K, J, G, D] trace the input curve,
            meeting at K = B(t).
        """
        pt_a, pt_b, pt_c, pt_d = cls._control_points(points)
        pt_e = lerp(pt_a, pt_b, t)
        pt_f = lerp(pt_b, pt_c, t)
        pt_g = lerp(pt_c, pt_d, t)
        pt_h = lerp(pt_e, pt_f, t)
        pt_j = lerp(pt_f, pt_g, t)
        pt_k = lerp(pt_h, pt_j, t)
        return np.array([pt_a, pt_e, pt_h, pt_k, pt_j, pt_g, pt_d], dtype=np.float64)

    @classmethod
    def polygonize_cubic_curve(cls, points: SegmentLike, steps: int) -> NDArray[np.float64]:
        """
        Polygonize a cubic Bezier curve into line segments.
        Uses direct evaluation with vectorized operations.

        Args:
            points: Control points, exactly 4: start, control1, control2, end
            steps: Number of segments to divide the curve into

        Returns:
            NDArray[np.float64] of shape (steps+1, dim) containing the polygonized points
        """
        if steps < 1:
            raise BadInputError(f"steps must be at least 1, got {steps}")
        points_array = cls._control_points(points)

        t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)[:, np.newaxis]

        # Cubic Bezier basis functions
        omt = 1.0 - t
        omt2 = omt * omt
        t2 = t * t

        result = (
            omt2 * omt * points_array[0]
            + 3.0 * omt2 * t * points_array[1]
            + 3.0 * omt * t2 * points_array[2]
            + t2 * t * points_array[3]
        )
        # Pin the end points to the control points
        result[0] = points_array[0]
        result[-1] = points_array[3]
        return result

    @staticmethod
    def control_polygon_length(points: SegmentLike) -> float:
        """Length of the control polygon |P0P1| + |P1P2| + |P2P3|, an upper bound of the arc length."""
        pt0, pt1, pt2, pt3 = points
        return distance(pt0, pt1) + distance(pt1, pt2) + distance(pt2, pt3)
