from __future__ import annotations
import datetime
import logging
from typing import Dict, Iterable, Optional

import numpy as np
import pandas as pd

from algorithms.math_tools import MathTools
from models import Workout, as_utc
from settings_schema import AnalyticsSettings

logger = logging.getLogger(__name__)


class RecommendationService:
    """Suggest e1RM targets and the sets needed to beat them."""

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self.settings = settings or AnalyticsSettings()

    def find_set_to_pr(self, target_e1rm: float) -> Optional[Dict[str, float]]:
        """Return the set that beats ``target_e1rm`` by the smallest margin.

        Every rep count in the configured range gets the lightest weight (a
        multiple of ``weight_increment``) whose e1RM is above the target; the
        closest of those wins, fewest reps on ties.
        """
        step = self.settings.weight_increment
        target = max(float(target_e1rm), 0.0)
        reps = np.arange(self.settings.min_reps, self.settings.max_reps + 1)

        weights = np.ceil(target / (1 + reps / MathTools.E1RM_DIVISOR))
        weights = np.ceil(weights / step) * step
        estimates = MathTools.estimated_one_rep_max_array(weights, reps)
        short = estimates <= target
        weights = np.where(short, weights + step, weights)
        estimates = MathTools.estimated_one_rep_max_array(weights, reps)

        diffs = estimates - target
        diffs = np.where(diffs > 0, diffs, np.inf)
        if not np.isfinite(diffs).any():
            logger.debug("no set beats e1RM %s", target_e1rm)
            return None
        idx = int(np.argmin(diffs))
        return {"weight": float(weights[idx]), "reps": int(reps[idx])}

    def e1rm_suggestions(
        self,
        all_workouts: Iterable[Workout],
        current_workout: Workout,
        now: datetime.datetime | None = None,
    ) -> Dict[str, float]:
        """Return the best recent e1RM for each exercise in ``current_workout``."""
        now = as_utc(now) if now is not None else datetime.datetime.now(
            datetime.timezone.utc
        )
        cutoff = (
            pd.Timestamp(now) - pd.DateOffset(months=self.settings.suggestion_window_months)
        ).to_pydatetime()
        recent = [w for w in all_workouts if w.date >= cutoff]

        suggestions: Dict[str, float] = {}
        for exercise in current_workout.exercises:
            best = 0
            for past in recent:
                match = past.exercise(exercise.name)
                if match is None:
                    continue
                for s in match.sets:
                    est = MathTools.estimated_one_rep_max(s.weight, s.reps)
                    if est > best:
                        best = est
            if best > 0:
                suggestions[exercise.name] = best
        logger.debug(
            "e1RM suggestions from %d recent workouts: %s", len(recent), suggestions
        )
        return suggestions


def find_set_to_pr(target_e1rm: float) -> Optional[Dict[str, float]]:
    return RecommendationService().find_set_to_pr(target_e1rm)


def get_e1rm_suggestions(
    all_workouts: Iterable[Workout],
    current_workout: Workout,
    now: datetime.datetime | None = None,
) -> Dict[str, float]:
    return RecommendationService().e1rm_suggestions(all_workouts, current_workout, now)
