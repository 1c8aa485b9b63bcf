import math
from typing import Iterable

import numpy as np


class MathTools:
    """Provides the core formulas for strength calculations."""

    E1RM_DIVISOR: int = 30

    @staticmethod
    def round_half_up(value: float) -> int:
        """Round to the nearest integer, halves going up."""
        return int(math.floor(value + 0.5))

    @classmethod
    def estimated_one_rep_max(cls, weight: float, reps: int) -> float:
        """Return the estimated one-rep max for ``weight`` lifted ``reps`` times.

        Negative inputs count as 0. A single rep (or none) is taken at face
        value; anything higher uses ``weight * (1 + reps / 30)`` rounded to
        the nearest whole number.
        """
        weight = max(weight, 0)
        reps = max(reps, 0)
        if reps <= 1:
            return weight
        return cls.round_half_up(weight * (1 + reps / cls.E1RM_DIVISOR))

    @classmethod
    def estimated_one_rep_max_array(
        cls, weights: np.ndarray, reps: np.ndarray
    ) -> np.ndarray:
        """Vectorised :meth:`estimated_one_rep_max`."""
        weights = np.maximum(np.asarray(weights, dtype=float), 0.0)
        reps = np.maximum(np.asarray(reps), 0)
        scaled = np.floor(weights * (1 + reps / cls.E1RM_DIVISOR) + 0.5)
        return np.where(reps <= 1, weights, scaled)

    @staticmethod
    def volume(sets: Iterable) -> float:
        """Compute training volume as the sum of weight times reps."""
        vol = 0
        for s in sets:
            vol += s.weight * s.reps
        return vol
