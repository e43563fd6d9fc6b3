"""Profile curves combining a ground path with a synthesized height profile."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from relief.arc_length import ArcLengthTable
from relief.common import Dimension, Label, LabelLike, PointsLike, component, distance
from relief.config import DEFAULT_SETTINGS, ProfileSettings
from relief.errors import BadInputError, GeometryError
from relief.height_profile import HeightProfileBuilder
from relief.points import CompositeSpline
from relief.subdivide import Subdivider

logger = logging.getLogger(__name__)


class ProfileCurve:
    """
    3D curve following a ground path at an elevation given by a height profile.

    The height profile is a 2D spline of (x, h) pairs. Sampling at u in [0, 1]
    first locates u on the height profile through the arc length table, then
    evaluates the ground path at path parameter x and sets the elevation to h.
    The height profile thus both lifts and re-parameterizes the ground path.

    All derived data is computed at construction, instances are read-only.
    Splitting returns new control points; wrap them in a new ProfileCurve
    with from_height_profile() to use the result.
    """

    def __init__(
        self,
        ground_points: PointsLike,
        labels: Iterable[LabelLike] = (),
        settings: Optional[ProfileSettings] = None,
        *,
        height_points: Optional[PointsLike] = None,
    ):
        """Initialize the curve.

        Args:
            ground_points: 3N+1 ground path control points, all 2D or all 3D.
            labels: One label per ground path breakpoint, none or at least 2.
            settings: Reconstruction settings, DEFAULT_SETTINGS if None.
            height_points: Explicit height profile control points, replacing the
                profile synthesized from labels.

        Raises:
            GeometryError: For an empty or malformed ground path, a single label,
                or a height profile of zero length.
            BadInputError: If both labels and height_points are given.
        """
        self._settings = settings or DEFAULT_SETTINGS
        self._labels: Tuple[Label, ...] = tuple(Label.coerce_all(labels))
        self._ground = CompositeSpline(ground_points)

        if height_points is None:
            self._height_profile = HeightProfileBuilder.build(self._labels, self._settings)
        elif self._labels:
            raise BadInputError("Pass either labels or height_points, not both")
        else:
            self._height_profile = CompositeSpline(height_points, Dimension.TWO)
        self._arc_lengths = ArcLengthTable.build(self._height_profile)

        self._check_coverage()
        logger.debug(
            "ProfileCurve: %d ground segments (%dD), %d height segments",
            self._ground.segment_count,
            self._ground.dimension.value,
            self._height_profile.segment_count,
        )

    @classmethod
    def from_height_profile(
        cls, ground_points: PointsLike, height_points: PointsLike, settings: Optional[ProfileSettings] = None
    ) -> ProfileCurve:
        """Create a curve from an explicit height profile, e.g. the result of split()."""
        return cls(ground_points, settings=settings, height_points=height_points)

    def _check_coverage(self) -> None:
        segments = self._ground.segment_count
        if self._labels and len(self._labels) != segments + 1:
            logger.warning(
                "%d labels given for a ground path with %d breakpoints", len(self._labels), segments + 1
            )
        x_end = component(self._height_profile.points[-1], 0)
        if x_end > segments + self._settings.boundary_epsilon:
            logger.warning(
                "Height profile ends at path parameter %g beyond the ground path end %d, samples will extrapolate",
                x_end,
                segments,
            )

    ###########################################################################
    # Properties
    ###########################################################################

    @property
    def ground(self) -> CompositeSpline:
        """The ground path."""
        return self._ground

    @property
    def height_profile(self) -> CompositeSpline:
        """The 2D (path parameter, height) profile spline."""
        return self._height_profile

    @property
    def arc_lengths(self) -> ArcLengthTable:
        """Normalized cumulative length table of the height profile."""
        return self._arc_lengths

    @property
    def labels(self) -> Tuple[Label, ...]:
        """Labels the profile was built from, empty for an explicit or default profile."""
        return self._labels

    @property
    def settings(self) -> ProfileSettings:
        """Settings used for reconstruction and sampling."""
        return self._settings

    def __repr__(self) -> str:
        return (
            f"ProfileCurve(ground_segments={self._ground.segment_count}, "
            f"height_segments={self._height_profile.segment_count}, "
            f"dimension={self._ground.dimension.value}D)"
        )

    ###########################################################################
    # Ground path sampling
    ###########################################################################

    def ground_point(self, t: float) -> NDArray[np.float64]:
        """Ground path point at path parameter t, in the ground path's dimension."""
        return self._ground.evaluate(t, self._settings.boundary_epsilon)

    def ground_tangent(self, t: float) -> NDArray[np.float64]:
        """Unnormalized ground path derivative at path parameter t."""
        return self._ground.derivative(t, self._settings.boundary_epsilon)

    ###########################################################################
    # Curve sampling
    ###########################################################################

    def height_point(self, u: float) -> NDArray[np.float64]:
        """(path parameter, height) of the height profile at normalized parameter u."""
        index, local_t = self._arc_lengths.locate(u)
        return self._height_profile.evaluate_segment(index, local_t)

    def _lift(self, ground: NDArray[np.float64], height: float) -> NDArray[np.float64]:
        up_axis = self._settings.up_axis
        result = np.empty(3, dtype=np.float64)
        if self._ground.dimension is Dimension.THREE:
            result[:] = ground
        else:
            result[[axis for axis in range(3) if axis != up_axis]] = ground
        result[up_axis] = height
        return result

    def get_point(self, u: float) -> NDArray[np.float64]:
        """
        Point of the profile curve at normalized parameter u in [0, 1].

        Returns:
            NDArray[np.float64] of shape (3,): the ground path position at the
            profile's path parameter, with axis settings.up_axis set to the elevation.
        """
        height_point = self.height_point(u)
        ground = self.ground_point(component(height_point, 0))
        return self._lift(ground, component(height_point, 1))

    def get_tangent(self, u: float) -> NDArray[np.float64]:
        """
        Unit tangent at u, by central difference over [u - delta, u + delta] clamped to [0, 1].

        Raises:
            GeometryError: If the curve does not move around u.
        """
        delta = self._settings.tangent_delta
        u_start = max(u - delta, 0.0)
        u_end = min(u + delta, 1.0)
        direction = self.get_point(u_end) - self.get_point(u_start)
        length = float(np.linalg.norm(direction))
        if length == 0.0:
            raise GeometryError(f"Tangent is undefined at u={u}: curve is stationary")
        return direction / length

    def get_points(self, divisions: int = 5) -> NDArray[np.float64]:
        """
        Sample the curve at divisions+1 uniformly spaced parameters.

        Returns:
            NDArray[np.float64] of shape (divisions+1, 3)
        """
        if divisions < 1:
            raise BadInputError(f"divisions must be at least 1, got {divisions}")
        return np.array([self.get_point(i / divisions) for i in range(divisions + 1)], dtype=np.float64)

    def get_length(self, divisions: int = 200) -> float:
        """Length of the polyline through get_points(divisions)."""
        samples = self.get_points(divisions)
        return sum(distance(start, end) for start, end in zip(samples[:-1], samples[1:]))

    ###########################################################################
    # Editing
    ###########################################################################

    def split(self, ts: Sequence[float], indices: Sequence[int]) -> NDArray[np.float64]:
        """
        Split the height profile, see Subdivider.split().

        Returns:
            New height profile control points; this curve is unchanged.
        """
        return Subdivider.split(self._height_profile.points, ts, indices)
