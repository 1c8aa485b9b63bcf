from __future__ import annotations
import datetime

from models import Template, Workout, as_utc


class PlannerService:
    """Turns templates and past sessions into new workouts."""

    @staticmethod
    def create_workout_from_template(
        template: Template, date: datetime.datetime | None = None
    ) -> Workout:
        if date is None:
            date = datetime.datetime.now(datetime.timezone.utc)
        return Workout(date=as_utc(date), exercises=template.exercises)

    @staticmethod
    def duplicate_workout(workout: Workout, date: datetime.datetime) -> Workout:
        return Workout(date=as_utc(date), exercises=workout.exercises, name=workout.name)

    @staticmethod
    def template_from_workout(workout: Workout, name: str) -> Template:
        return Template(name=name.strip(), exercises=workout.exercises)
