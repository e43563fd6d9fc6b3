"""Dimension-tagged point sequences forming composite cubic splines."""

from __future__ import annotations

import math
from typing import Iterator, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from relief.bezier import BezierCurve
from relief.common import Dimension, PointsLike
from relief.errors import BadInputError, GeometryError

###############################################################################
# CompositeSpline
###############################################################################


class CompositeSpline:
    """
    A sequence of cubic Bezier segments sharing their end points.

    The points are stored as 3N+1 rows, point 3k ends segment k-1 and starts
    segment k. The dimension (2D or 3D) is fixed for the whole spline.
    Instances are immutable: the underlying array is a read-only copy.
    """

    _points: NDArray[np.float64]
    _dimension: Dimension

    def __init__(self, points: PointsLike, dimension: Optional[Dimension] = None):
        """Initialize the spline.

        Args:
            points: 3N+1 points of shape (n, 2) or (n, 3).
            dimension: Expected dimension. If given, the points must match it.

        Raises:
            GeometryError: If the points are empty, have an unsupported shape
                or do not form whole cubic segments.
        """
        points_array = np.array(points, dtype=np.float64)
        if points_array.size == 0:
            raise GeometryError("Composite spline needs at least one cubic segment, got no points")
        if points_array.ndim != 2 or points_array.shape[1] not in (2, 3):
            raise GeometryError(f"points must have shape (n, 2) or (n, 3), got {points_array.shape}")
        num_points = points_array.shape[0]
        if num_points < 4 or (num_points - 1) % 3 != 0:
            raise GeometryError(f"Composite spline needs 3N+1 points with N >= 1, got {num_points}")

        actual = Dimension.of(points_array.shape[1])
        if dimension is not None and dimension is not actual:
            raise GeometryError(f"Expected {dimension.value}D points, got {actual.value}D")

        points_array.flags.writeable = False
        self._points = points_array
        self._dimension = actual

    @property
    def points(self) -> NDArray[np.float64]:
        """The read-only (3N+1, dim) point array."""
        return self._points

    @property
    def dimension(self) -> Dimension:
        """The dimension tag shared by all points."""
        return self._dimension

    @property
    def segment_count(self) -> int:
        """Number N of cubic segments."""
        return (self._points.shape[0] - 1) // 3

    def __len__(self) -> int:
        return self._points.shape[0]

    def __iter__(self) -> Iterator[NDArray[np.float64]]:
        return iter(self._points)

    def __getitem__(self, index):
        return self._points[index]

    def __repr__(self) -> str:
        return f"CompositeSpline(segments={self.segment_count}, dimension={self._dimension.value}D)"

    def segment(self, index: int) -> NDArray[np.float64]:
        """
        Return the 4 control points of segment `index`.

        Raises:
            BadInputError: If the index is outside [0, segment_count).
        """
        if not 0 <= index < self.segment_count:
            raise BadInputError(f"Segment index {index} out of range [0, {self.segment_count})")
        return self._points[3 * index : 3 * index + 4]

    def segments(self) -> Iterator[NDArray[np.float64]]:
        """Iterate over the (4, dim) control point blocks of all segments."""
        for index in range(self.segment_count):
            yield self._points[3 * index : 3 * index + 4]

    def locate(self, t: float, epsilon: float = 1e-5) -> Tuple[int, float]:
        """
        Map a global parameter to (segment index, local parameter).

        Segment k covers [k, k+1]. Parameters within `epsilon` above an integer
        breakpoint resolve to the preceding segment. The index is clamped to the
        valid range, so parameters outside [0, N] extrapolate the first or last segment.
        """
        index = max(math.floor(t - epsilon), 0)
        index = min(index, self.segment_count - 1)
        return index, t - index

    def evaluate(self, t: float, epsilon: float = 1e-5) -> NDArray[np.float64]:
        """Point at global parameter t."""
        index, frac = self.locate(t, epsilon)
        return BezierCurve.evaluate(frac, *self._points[3 * index : 3 * index + 4])

    def derivative(self, t: float, epsilon: float = 1e-5) -> NDArray[np.float64]:
        """Derivative with respect to the global parameter t."""
        index, frac = self.locate(t, epsilon)
        return BezierCurve.derivative(frac, *self._points[3 * index : 3 * index + 4])

    def evaluate_segment(self, index: int, t: float) -> NDArray[np.float64]:
        """Point at local parameter t of segment `index`."""
        return BezierCurve.evaluate(t, *self.segment(index))

    def polygon_lengths(self) -> NDArray[np.float64]:
        """Control-polygon length of each segment."""
        return np.array([BezierCurve.control_polygon_length(seg) for seg in self.segments()], dtype=np.float64)

    def polygonize(self, steps: int) -> NDArray[np.float64]:
        """
        Polygonize all segments with `steps` line segments each.

        Returns:
            NDArray[np.float64] of shape (N*steps+1, dim); shared end points appear once.
        """
        result = np.empty((self.segment_count * steps + 1, self._points.shape[1]), dtype=np.float64)
        for index, seg in enumerate(self.segments()):
            polyline = BezierCurve.polygonize_cubic_curve(seg, steps)
            result[index * steps : (index + 1) * steps + 1] = polyline
        return result
