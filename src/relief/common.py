"""Central module containing enums and type definitions for profile reconstruction."""

from __future__ import annotations

import math
from enum import Enum, IntEnum
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from relief.errors import BadInputError

###############################################################################
# Types
###############################################################################

PointLike = Union[Sequence[float], NDArray[np.float64]]
PointsLike = Union[Sequence[Sequence[float]], Sequence[Tuple[float, ...]], NDArray[np.float64]]
LabelLike = Union["Label", int, str]


###############################################################################
# Enums
###############################################################################


class Dimension(Enum):
    """Dimensionality of all points within one composite spline."""

    TWO = 2
    THREE = 3

    @classmethod
    def of(cls, columns: int) -> Dimension:
        """Return the dimension for the given number of coordinate columns."""
        return cls(columns)


class Label(IntEnum):
    """Semantic height label attached to a breakpoint of the ground path.

    The integer values are the codes stored in persisted documents.
    """

    GROUND = 0
    ROOF = 1
    MID = 2

    @classmethod
    def coerce(cls, value: LabelLike) -> Label:
        """Convert a label, its integer code or its (case-insensitive) name to a Label.

        Raises:
            BadInputError: If the value does not name a label.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError as err:
                raise BadInputError(f"Unknown label name '{value}'") from err
        if isinstance(value, (bool, float)):
            raise BadInputError(f"Label must be a Label, int or str, got {type(value).__name__}")
        try:
            return cls(int(value))
        except (TypeError, ValueError) as err:
            raise BadInputError(f"Unknown label code {value!r}") from err

    @classmethod
    def coerce_all(cls, values: Iterable[LabelLike]) -> List[Label]:
        """Coerce every entry of a label sequence."""
        return [cls.coerce(value) for value in values]


###############################################################################
# Point capabilities
###############################################################################


def component(point: PointLike, axis: int) -> float:
    """Return coordinate `axis` of a point."""
    return float(point[axis])


def lerp(start: PointLike, end: PointLike, t: float) -> NDArray[np.float64]:
    """Linear interpolation start + (end - start) * t, unclamped."""
    start_array = np.asarray(start, dtype=np.float64)
    return start_array + (np.asarray(end, dtype=np.float64) - start_array) * t


def distance(start: PointLike, end: PointLike) -> float:
    """Euclidean distance between two points of equal dimension."""
    delta = np.asarray(end, dtype=np.float64) - np.asarray(start, dtype=np.float64)
    return math.sqrt(float(np.dot(delta, delta)))
