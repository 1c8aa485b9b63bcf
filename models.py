from __future__ import annotations
import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WorkoutSet(BaseModel):
    """A single set of one exercise."""

    model_config = ConfigDict(frozen=True)

    weight: float = Field(ge=0)
    reps: int = Field(ge=0)
    id: Optional[str] = None


class Exercise(BaseModel):
    """A named exercise and the sets performed for it."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    sets: tuple[WorkoutSet, ...] = ()
    id: Optional[str] = None


def as_utc(value: datetime.datetime) -> datetime.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value


class Workout(BaseModel):
    """A dated training session."""

    model_config = ConfigDict(frozen=True)

    date: datetime.datetime
    exercises: tuple[Exercise, ...] = ()
    id: Optional[str] = None
    name: Optional[str] = None

    @field_validator("date")
    @classmethod
    def _aware_date(cls, value: datetime.datetime) -> datetime.datetime:
        return as_utc(value)

    def exercise(self, name: str) -> Exercise | None:
        """Return the first exercise called ``name``."""
        for ex in self.exercises:
            if ex.name == name:
                return ex
        return None


class Template(BaseModel):
    """A reusable list of exercises to start new workouts from."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    exercises: tuple[Exercise, ...] = ()


def load_workouts(data: list[dict]) -> list[Workout]:
    """Validate raw workout dicts (e.g. parsed JSON) into models."""
    return [Workout.model_validate(item) for item in data]
