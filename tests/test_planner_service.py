import datetime
import os
import sys
import unittest

from pydantic import ValidationError

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from models import Exercise, Template, Workout, WorkoutSet
from planner_service import PlannerService

UTC = datetime.timezone.utc


class PlannerServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.template = Template(
            name="Push",
            exercises=[Exercise(name="Bench Press", sets=[WorkoutSet(weight=100, reps=5)])],
        )

    def test_workout_from_template(self) -> None:
        date = datetime.datetime(2024, 5, 1, 9, 30, tzinfo=UTC)
        workout = PlannerService.create_workout_from_template(self.template, date)
        self.assertEqual(workout.date, date)
        self.assertIsNone(workout.id)
        self.assertEqual(workout.exercises, self.template.exercises)

    def test_workout_from_template_defaults_to_now(self) -> None:
        before = datetime.datetime.now(UTC)
        workout = PlannerService.create_workout_from_template(self.template)
        self.assertGreaterEqual(workout.date, before)

    def test_duplicate_workout(self) -> None:
        original = Workout(id="x", date=datetime.datetime(2024, 1, 1), exercises=self.template.exercises)
        copy = PlannerService.duplicate_workout(original, datetime.datetime(2024, 1, 8))
        self.assertIsNone(copy.id)
        self.assertEqual(copy.date, datetime.datetime(2024, 1, 8, tzinfo=UTC))
        self.assertEqual(copy.exercises, original.exercises)
        self.assertEqual(original.id, "x")

    def test_template_from_workout(self) -> None:
        workout = Workout(date=datetime.datetime(2024, 1, 1), exercises=self.template.exercises)
        template = PlannerService.template_from_workout(workout, "  Push day ")
        self.assertEqual(template.name, "Push day")
        with self.assertRaises(ValidationError):
            PlannerService.template_from_workout(workout, "   ")


if __name__ == "__main__":
    unittest.main()
