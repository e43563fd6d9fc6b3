"""Reconstruction of 3D profile curves from a ground path and height labels."""

from relief.arc_length import ArcLengthTable
from relief.bezier import BezierCurve
from relief.common import Dimension, Label
from relief.config import DEFAULT_SETTINGS, ProfileSettings
from relief.errors import BadInput, BadInputError, GeometryError, ReliefError
from relief.height_profile import HeightProfileBuilder
from relief.points import CompositeSpline
from relief.profile_curve import ProfileCurve
from relief.subdivide import Subdivider

__all__ = [
    "ArcLengthTable",
    "BadInput",
    "BadInputError",
    "BezierCurve",
    "CompositeSpline",
    "DEFAULT_SETTINGS",
    "Dimension",
    "GeometryError",
    "HeightProfileBuilder",
    "Label",
    "ProfileCurve",
    "ProfileSettings",
    "ReliefError",
    "Subdivider",
]
