from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional

from algorithms.math_tools import MathTools
from models import Workout
from settings_schema import AnalyticsSettings

logger = logging.getLogger(__name__)

E1RM = "E1RM"
MAX_WEIGHT = "Max Weight"


class StatisticsService:
    """Compute personal records and per-exercise metrics from workout history."""

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self.settings = settings or AnalyticsSettings()

    @staticmethod
    def _chronological(workouts: Iterable[Workout]) -> List[Workout]:
        return sorted(workouts, key=lambda w: w.date)

    def personal_records(
        self, workouts: Iterable[Workout], include_debuts: bool = False
    ) -> List[Dict]:
        """Return every PR event in chronological order.

        Each workout contributes at most one ``Max Weight`` and one ``E1RM``
        event per exercise, the best value of that session, and only when it
        beats the running maximum. The first value ever seen for an exercise
        is a debut (``old_value`` is ``None``) and is dropped unless
        ``include_debuts`` is set.
        """
        running: Dict[str, Dict[str, float]] = {}
        records: List[Dict] = []
        for workout in self._chronological(workouts):
            for exercise in workout.exercises:
                current = running.setdefault(
                    exercise.name, {"max_weight": 0, "max_e1rm": 0}
                )
                best_weight = 0
                best_e1rm = 0
                for s in exercise.sets:
                    if s.weight > best_weight:
                        best_weight = s.weight
                    est = MathTools.estimated_one_rep_max(s.weight, s.reps)
                    if est > best_e1rm:
                        best_e1rm = est

                for pr_type, key, value in (
                    (MAX_WEIGHT, "max_weight", best_weight),
                    (E1RM, "max_e1rm", best_e1rm),
                ):
                    previous = current[key]
                    if value <= previous:
                        continue
                    records.append(
                        {
                            "exercise_name": exercise.name,
                            "date": workout.date,
                            "type": pr_type,
                            "value": value,
                            "old_value": previous if previous != 0 else None,
                        }
                    )
                    current[key] = value

        if not include_debuts:
            records = [r for r in records if r["old_value"] is not None]
        logger.debug("found %d personal records", len(records))
        return records

    def recent_personal_records(
        self, workouts: Iterable[Workout], limit: Optional[int] = None
    ) -> List[Dict]:
        """Return the latest improvement PRs, newest first."""
        limit = self.settings.recent_pr_limit if limit is None else limit
        prs = self.personal_records(workouts)
        prs.sort(key=lambda r: r["date"], reverse=True)
        return prs[:limit]

    def latest_personal_records(
        self, workouts: Iterable[Workout], exercise_name: str
    ) -> Dict[str, Dict]:
        """Return the most recent ``e1rm`` and ``max_weight`` PR of an exercise.

        Keys are left out when the exercise has no PR of that type.
        """
        prs = [
            r
            for r in self.personal_records(workouts)
            if r["exercise_name"] == exercise_name
        ]
        latest: Dict[str, Dict] = {}
        for pr in reversed(prs):
            key = "e1rm" if pr["type"] == E1RM else "max_weight"
            if key not in latest:
                latest[key] = {"value": pr["value"], "date": pr["date"]}
            if len(latest) == 2:
                break
        return latest

    def exercise_metrics(
        self, workouts: Iterable[Workout], exercise_name: str
    ) -> List[Dict]:
        """Return volume and e1RM per workout containing ``exercise_name``."""
        data: List[Dict] = []
        for workout in workouts:
            exercise = workout.exercise(exercise_name)
            if exercise is None:
                continue
            heaviest = None
            for s in exercise.sets:
                if heaviest is None or s.weight > heaviest.weight:
                    heaviest = s
            est = (
                MathTools.estimated_one_rep_max(heaviest.weight, heaviest.reps)
                if heaviest is not None
                else 0
            )
            data.append(
                {
                    "date": workout.date,
                    "volume": MathTools.volume(exercise.sets),
                    "estimated_one_rep_max": est,
                }
            )
        return sorted(data, key=lambda d: d["date"])

    def exercise_history(
        self, workouts: Iterable[Workout], exercise_name: str
    ) -> List[Dict]:
        """Return ``{"workout", "exercise"}`` pairs for an exercise, newest first."""
        history = []
        for workout in workouts:
            exercise = workout.exercise(exercise_name)
            if exercise is not None:
                history.append({"workout": workout, "exercise": exercise})
        history.sort(key=lambda h: h["workout"].date, reverse=True)
        return history

    @staticmethod
    def exercise_names(workouts: Iterable[Workout]) -> List[str]:
        names: Dict[str, None] = {}
        for workout in workouts:
            for exercise in workout.exercises:
                names.setdefault(exercise.name, None)
        return list(names)

    def exercise_frequency(self, workouts: Iterable[Workout]) -> Dict[str, int]:
        """Return how many workouts each exercise appears in."""
        freq: Dict[str, int] = {}
        for workout in self._chronological(workouts):
            for name in dict.fromkeys(e.name for e in workout.exercises):
                freq[name] = freq.get(name, 0) + 1
        return freq

    def workouts_by_month(self, workouts: Iterable[Workout]) -> List[Dict]:
        """Group workouts newest first under ``"<Month> <YYYY>"`` headings."""
        groups: List[Dict] = []
        for workout in sorted(workouts, key=lambda w: w.date, reverse=True):
            label = f"{workout.date.strftime('%B')} {workout.date.year}"
            if not groups or groups[-1]["month"] != label:
                groups.append({"month": label, "workouts": []})
            groups[-1]["workouts"].append(workout)
        return groups


def calculate_all_prs(
    workouts: Iterable[Workout], include_debuts: bool = False
) -> List[Dict]:
    return StatisticsService().personal_records(workouts, include_debuts)


def calculate_exercise_metrics(
    workouts: Iterable[Workout], exercise_name: str
) -> List[Dict]:
    return StatisticsService().exercise_metrics(workouts, exercise_name)


def get_latest_exercise_prs(
    workouts: Iterable[Workout], exercise_name: str
) -> Dict[str, Dict]:
    return StatisticsService().latest_personal_records(workouts, exercise_name)
