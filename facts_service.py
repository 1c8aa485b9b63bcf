from __future__ import annotations
import datetime
import logging
import random
from typing import Iterable, List

from export_service import format_date, format_number
from models import Workout, as_utc
from settings_schema import AnalyticsSettings
from stats_service import StatisticsService

logger = logging.getLogger(__name__)


class FactsService:
    """Build the rotating dashboard facts from recent training."""

    def __init__(
        self,
        stats: StatisticsService | None = None,
        settings: AnalyticsSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or (stats.settings if stats else AnalyticsSettings())
        self.stats = stats or StatisticsService(self.settings)
        self.rng = rng or random.Random()

    def fallback_fact(self) -> str:
        return (
            f"No workouts logged in the last {self.settings.facts_window_days} days."
            " Time to get back under the bar!"
        )

    def generate_facts(
        self, workouts: Iterable[Workout], now: datetime.datetime | None = None
    ) -> List[str]:
        """Return facts about the last ``facts_window_days`` in random order."""
        workouts = list(workouts)
        now = as_utc(now) if now is not None else datetime.datetime.now(
            datetime.timezone.utc
        )
        days = self.settings.facts_window_days
        cutoff = now - datetime.timedelta(days=days)
        recent = [w for w in workouts if w.date >= cutoff]
        if not recent:
            return [self.fallback_fact()]

        count = len(recent)
        facts = [
            f"You have completed {count} workout{'s' if count != 1 else ''}"
            f" in the last {days} days."
        ]
        for name, times in self.stats.exercise_frequency(recent).items():
            if times > 1:
                facts.append(f"You trained {name} {times} times in the last {days} days.")
        for pr in self.stats.personal_records(workouts):
            if pr["date"] < cutoff:
                continue
            facts.append(
                f"New {pr['type']} PR on {pr['exercise_name']}: "
                f"{format_number(pr['value'])} on {format_date(pr['date'])}."
            )
        logger.debug("generated %d facts from %d recent workouts", len(facts), count)
        self.rng.shuffle(facts)
        return facts


def generate_facts(
    workouts: Iterable[Workout],
    now: datetime.datetime | None = None,
    rng: random.Random | None = None,
) -> List[str]:
    return FactsService(rng=rng).generate_facts(workouts, now)
