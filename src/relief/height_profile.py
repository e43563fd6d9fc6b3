"""Synthesis of the height profile spline from breakpoint labels.

The height profile is a 2D composite spline in (path parameter, height) space.
Breakpoint i of the ground path sits at path parameter i; its label decides the
height of the profile there and the shape of the tangent handles around it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np
from numpy.typing import NDArray

from relief.common import Dimension, Label, LabelLike
from relief.config import DEFAULT_SETTINGS, ProfileSettings
from relief.errors import GeometryError
from relief.points import CompositeSpline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabelKnot:
    """Breakpoint of the height profile derived from one label.

    Attributes:
        point: (path parameter, height) of the breakpoint.
        backward: Handle approaching the breakpoint from the preceding segment.
        forward: Handle leaving the breakpoint toward the next segment.
    """

    point: tuple
    backward: tuple
    forward: tuple


class HeightProfileBuilder:
    """Builds height profile control points from a label sequence."""

    @staticmethod
    def default_points() -> NDArray[np.float64]:
        """Profile used without labels: a smooth ramp from ground (0) to roof (1) level."""
        return np.array([[0.0, 0.0], [0.0, 0.3], [1.0, 0.7], [1.0, 1.0]], dtype=np.float64)

    @staticmethod
    def knot(label: Label, position: float, settings: ProfileSettings = DEFAULT_SETTINGS) -> LabelKnot:
        """Return breakpoint and handles for `label` at path parameter `position`."""
        if label is Label.GROUND:
            handle = (position, settings.ground_handle)
            return LabelKnot((position, 0.0), handle, handle)
        if label is Label.ROOF:
            handle = (position, settings.roof_handle)
            return LabelKnot((position, 1.0), handle, handle)
        height = settings.mid_height
        offset = settings.mid_handle_offset
        return LabelKnot((position, height), (position - offset, height), (position + offset, height))

    @classmethod
    def build_points(
        cls, labels: Iterable[LabelLike], settings: Optional[ProfileSettings] = None
    ) -> NDArray[np.float64]:
        """
        Assemble the control points of the height profile.

        The first label contributes its point and forward handle. Every later label
        contributes its backward handle and point, preceded by its own forward handle
        once the sequence holds more than two points. The forward handle placed
        before a breakpoint therefore belongs to that breakpoint, not to its
        predecessor.

        Args:
            labels: Ordered labels, one per ground path breakpoint.
            settings: Handle and height constants, DEFAULT_SETTINGS if None.

        Returns:
            NDArray[np.float64] of shape (3M+1, 2), M = len(labels) - 1,
            or the default profile if there are no labels.

        Raises:
            GeometryError: If exactly one label is given.
            BadInputError: If a label is not recognized.
        """
        settings = settings or DEFAULT_SETTINGS
        label_list = Label.coerce_all(labels)
        if not label_list:
            return cls.default_points()
        if len(label_list) == 1:
            raise GeometryError("A height profile needs no labels or at least 2 labels, got 1")

        points: List[tuple] = []
        pending_forward: Optional[tuple] = None
        for position, label in enumerate(label_list):
            knot = cls.knot(label, float(position), settings)
            pending_forward = knot.forward
            if not points:
                points.append(knot.point)
                points.append(pending_forward)
                continue
            if len(points) > 2:
                points.append(pending_forward)
            points.append(knot.backward)
            points.append(knot.point)

        return np.array(points, dtype=np.float64)

    @classmethod
    def build(cls, labels: Iterable[LabelLike], settings: Optional[ProfileSettings] = None) -> CompositeSpline:
        """Build the height profile spline for `labels`, see build_points()."""
        points = cls.build_points(labels, settings)
        profile = CompositeSpline(points, Dimension.TWO)
        logger.debug("Built height profile with %d segments", profile.segment_count)
        return profile
