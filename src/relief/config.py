"""Tunable constants of the profile reconstruction."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields

from relief.errors import BadInputError


@dataclass(frozen=True)
class ProfileSettings:
    """Settings shared by height profile synthesis and curve sampling.

    Attributes:
        boundary_epsilon: Parameters within this distance above an integer breakpoint
            are evaluated on the preceding segment.
        ground_handle: Height of the tangent handles of a GROUND label.
        roof_handle: Height of the tangent handles of a ROOF label.
        mid_height: Height of a MID label.
        mid_handle_offset: Horizontal distance of the MID tangent handles from the breakpoint.
        up_axis: Output axis (0, 1 or 2) receiving the elevation.
        tangent_delta: Parameter step used for finite-difference tangents.
    """

    boundary_epsilon: float = 1e-5
    ground_handle: float = 0.3
    roof_handle: float = 0.7
    mid_height: float = 0.5
    mid_handle_offset: float = 0.3
    up_axis: int = 2
    tangent_delta: float = 1e-4

    def __post_init__(self):
        if self.up_axis not in (0, 1, 2):
            raise BadInputError(f"up_axis must be 0, 1 or 2, got {self.up_axis}")
        if self.boundary_epsilon < 0.0:
            raise BadInputError(f"boundary_epsilon must be non-negative, got {self.boundary_epsilon}")
        if self.tangent_delta <= 0.0:
            raise BadInputError(f"tangent_delta must be positive, got {self.tangent_delta}")

    def to_dict(self) -> dict:
        """Convert settings to a dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> ProfileSettings:
        """Create settings from a dictionary, ignoring unknown keys."""
        names = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in names})


DEFAULT_SETTINGS = ProfileSettings()
