"""Test module for relief.common, relief.config and relief.errors

The tests are run using pytest.
"""

import numpy as np
import pytest

from relief.common import Dimension, Label, component, distance, lerp
from relief.config import DEFAULT_SETTINGS, ProfileSettings
from relief.errors import BadInput, BadInputError, GeometryError, ReliefError

###############################################################################
# Label Tests
###############################################################################


class TestLabel:
    """Test class for Label coercion."""

    def test_codes(self):
        """Test the persisted integer codes."""
        assert Label.GROUND == 0
        assert Label.ROOF == 1
        assert Label.MID == 2

    @pytest.mark.parametrize(
        "value,expected",
        [
            (Label.ROOF, Label.ROOF),
            (0, Label.GROUND),
            (np.int64(2), Label.MID),
            ("roof", Label.ROOF),
            (" Mid ", Label.MID),
            ("GROUND", Label.GROUND),
        ],
    )
    def test_coerce(self, value, expected):
        """Test coercion of labels, codes and names."""
        assert Label.coerce(value) is expected

    @pytest.mark.parametrize("value", [3, -1, "sky", 1.0, True, None])
    def test_coerce_rejects_unknown(self, value):
        """Test that unknown values raise BadInputError."""
        with pytest.raises(BadInputError):
            Label.coerce(value)

    def test_coerce_all(self):
        """Test coercion of a whole sequence."""
        assert Label.coerce_all([0, "mid", Label.ROOF]) == [Label.GROUND, Label.MID, Label.ROOF]


###############################################################################
# Dimension and Point Capability Tests
###############################################################################


class TestPointCapabilities:
    """Test class for Dimension and the point helper functions."""

    def test_dimension_of(self):
        """Test dimension lookup by column count."""
        assert Dimension.of(2) is Dimension.TWO
        assert Dimension.of(3) is Dimension.THREE
        with pytest.raises(ValueError):
            Dimension.of(4)

    def test_component(self):
        """Test coordinate access."""
        assert component((1.0, 2.0, 3.0), 2) == 3.0
        assert isinstance(component(np.array([1, 2]), 0), float)

    def test_lerp(self):
        """Test unclamped linear interpolation in 2D and 3D."""
        assert np.allclose(lerp((0.0, 0.0), (2.0, 4.0), 0.25), (0.5, 1.0))
        assert np.allclose(lerp((1.0, 1.0, 1.0), (2.0, 2.0, 2.0), 2.0), (3.0, 3.0, 3.0))

    def test_distance(self):
        """Test Euclidean distance."""
        assert distance((0.0, 0.0), (3.0, 4.0)) == pytest.approx(5.0)
        assert distance((1.0, 2.0, 2.0), (1.0, 2.0, 2.0)) == 0.0


###############################################################################
# Settings Tests
###############################################################################


class TestProfileSettings:
    """Test class for ProfileSettings."""

    def test_defaults(self):
        """Test the default constants."""
        assert DEFAULT_SETTINGS.boundary_epsilon == 1e-5
        assert DEFAULT_SETTINGS.ground_handle == 0.3
        assert DEFAULT_SETTINGS.roof_handle == 0.7
        assert DEFAULT_SETTINGS.mid_height == 0.5
        assert DEFAULT_SETTINGS.mid_handle_offset == 0.3
        assert DEFAULT_SETTINGS.up_axis == 2

    def test_dict_round_trip(self):
        """Test serialization to and from a dictionary."""
        settings = ProfileSettings(up_axis=1, tangent_delta=1e-3)
        data = settings.to_dict()
        assert data["up_axis"] == 1
        assert ProfileSettings.from_dict(data) == settings

    def test_from_dict_ignores_unknown_keys(self):
        """Test that unknown keys are dropped."""
        assert ProfileSettings.from_dict({"up_axis": 0, "color": "red"}).up_axis == 0

    @pytest.mark.parametrize(
        "kwargs", [{"up_axis": 3}, {"boundary_epsilon": -1.0}, {"tangent_delta": 0.0}]
    )
    def test_invalid_settings(self, kwargs):
        """Test validation of settings."""
        with pytest.raises(BadInputError):
            ProfileSettings(**kwargs)

    def test_settings_are_frozen(self):
        """Test that settings cannot be changed."""
        with pytest.raises(AttributeError):
            DEFAULT_SETTINGS.up_axis = 1  # type: ignore[misc]


###############################################################################
# Error Hierarchy Tests
###############################################################################


class TestErrors:
    """Test class for the exception hierarchy."""

    def test_hierarchy(self):
        """Test that all errors derive from ReliefError and ValueError."""
        assert issubclass(GeometryError, ReliefError)
        assert issubclass(BadInputError, ReliefError)
        assert issubclass(GeometryError, ValueError)
        assert issubclass(BadInputError, ValueError)
        assert BadInput is BadInputError
