"""Insertion of breakpoints into composite splines without changing their shape."""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np
from numpy.typing import NDArray

from relief.bezier import BezierCurve, SegmentLike
from relief.common import PointsLike
from relief.errors import BadInputError
from relief.points import CompositeSpline

logger = logging.getLogger(__name__)


class Subdivider:
    """Exact subdivision of cubic segments and composite splines."""

    @staticmethod
    def split_segment(points: SegmentLike, t: float) -> NDArray[np.float64]:
        """Split one cubic segment at t, see BezierCurve.split_segment()."""
        return BezierCurve.split_segment(points, t)

    @staticmethod
    def _validate(segment_count: int, ts: Sequence[float], indices: Sequence[int]) -> None:
        if len(ts) != len(indices):
            raise BadInputError(f"ts and indices must have equal length, got {len(ts)} and {len(indices)}")
        previous_index = None
        previous_t = 0.0
        for position, (t, index) in enumerate(zip(ts, indices)):
            if not 0 <= index < segment_count:
                raise BadInputError(f"Segment index {index} at position {position} out of range [0, {segment_count})")
            if previous_index is not None and index < previous_index:
                raise BadInputError(f"indices must be non-decreasing, got {previous_index} before {index}")
            if index == previous_index and not t > previous_t:
                raise BadInputError(
                    f"Splits of segment {index} must have increasing parameters, got {previous_t} before {t}"
                )
            if index == previous_index and previous_t >= 1.0:
                raise BadInputError(f"Segment {index} was already split at its end, cannot split it again")
            previous_index = index
            previous_t = t

    @classmethod
    def split(cls, points: PointsLike, ts: Sequence[float], indices: Sequence[int]) -> NDArray[np.float64]:
        """
        Split a composite spline at several parameters.

        Args:
            points: 3N+1 control points of the spline. Not modified.
            ts: Local split parameters, aligned by position with `indices`.
            indices: Non-decreasing segment indices to split. A segment may be named
                several times, with increasing parameters.

        Returns:
            NDArray[np.float64] of shape (3(N+len(ts))+1, dim) tracing the same curve.

        Raises:
            BadInputError: If ts and indices are misaligned, indices are out of range
                or decreasing, or the parameters of one segment do not increase.
            GeometryError: If the points do not form a composite spline.
        """
        spline = CompositeSpline(points)
        ts = [float(t) for t in ts]
        indices = [int(index) for index in indices]
        cls._validate(spline.segment_count, ts, indices)

        new_points: List[NDArray[np.float64]] = []
        cur_split = 0
        for index, segment in enumerate(spline.segments()):
            if cur_split >= len(indices) or index < indices[cur_split]:
                new_points.extend(segment[:3])
                continue

            # Each split consumes the front of the remaining piece, so later
            # parameters are rescaled onto [last_t, 1].
            remainder = segment
            last_t = 0.0
            while cur_split < len(indices) and indices[cur_split] == index:
                t = ts[cur_split]
                pieces = cls.split_segment(remainder, (t - last_t) / (1.0 - last_t))
                new_points.extend(pieces[:3])
                remainder = pieces[3:]
                last_t = t
                cur_split += 1
            new_points.extend(remainder[:3])

        new_points.append(spline.points[-1])
        logger.debug("Split %d segments into %d", spline.segment_count, spline.segment_count + len(ts))
        return np.array(new_points, dtype=np.float64)
