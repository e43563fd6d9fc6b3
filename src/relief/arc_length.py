"""Normalized cumulative length table over a composite spline."""

from __future__ import annotations

from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from relief.errors import GeometryError
from relief.points import CompositeSpline


class ArcLengthTable:
    """
    Maps a normalized parameter u in [0, 1] to a segment and local parameter.

    Entry k is the normalized length of segments 0..k-1, so the table holds
    N+1 non-decreasing values from 0 to exactly 1. Segment lengths are approximated
    by their control-polygon length.
    """

    _values: NDArray[np.float64]

    def __init__(self, values: NDArray[np.float64]):
        values_array = np.array(values, dtype=np.float64)
        if values_array.ndim != 1 or values_array.shape[0] < 2:
            raise GeometryError(f"Arc length table needs at least 2 entries, got shape {values_array.shape}")
        values_array.flags.writeable = False
        self._values = values_array

    @classmethod
    def build(cls, profile: CompositeSpline) -> ArcLengthTable:
        """
        Build the table for `profile`.

        Raises:
            GeometryError: If the total control-polygon length is zero.
        """
        lengths = profile.polygon_lengths()
        accumulated = np.zeros(lengths.shape[0] + 1, dtype=np.float64)
        np.cumsum(lengths, out=accumulated[1:])
        total = accumulated[-1]
        if not total > 0.0:
            raise GeometryError("Cannot build arc length table: total control polygon length is zero")
        accumulated /= total
        accumulated[-1] = 1.0
        return cls(accumulated)

    @property
    def values(self) -> NDArray[np.float64]:
        """The read-only table entries."""
        return self._values

    def __len__(self) -> int:
        return self._values.shape[0]

    def __getitem__(self, index):
        return self._values[index]

    def locate(self, u: float) -> Tuple[int, float]:
        """
        Return (segment index, local parameter) for the normalized parameter u.

        Scans for the first boundary b >= 1 with u <= table[b] and maps u linearly
        into segment b-1. Values above 1 resolve to the last segment and values
        below 0 to the first, extrapolating the local parameter.
        """
        values = self._values
        last = values.shape[0] - 1
        boundary = 1
        while boundary < last and u > values[boundary]:
            boundary += 1

        start = values[boundary - 1]
        span = values[boundary] - start
        if span <= 0.0:
            return boundary - 1, 0.0
        return boundary - 1, float((u - start) / span)
