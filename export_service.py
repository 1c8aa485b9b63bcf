from __future__ import annotations
import datetime

from models import Workout

FORMATS = ("txt", "phpbb")


def format_number(value: float) -> str:
    """Render whole numbers without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_date(date: datetime.datetime) -> str:
    """Return ``date`` as ``Month D, YYYY``."""
    return f"{date.strftime('%B')} {date.day}, {date.year}"


class ExportService:
    """Render workouts as shareable text."""

    @staticmethod
    def title(workout: Workout, fmt: str = "txt") -> str:
        text = f"Workout on {format_date(workout.date)}"
        if fmt == "phpbb":
            return f"[u][size=200]{text}[/size][/u]"
        return text

    @staticmethod
    def exercise_heading(name: str, fmt: str = "txt") -> str:
        if fmt == "phpbb":
            return f"[b][size=125]{name}[/size][/b]"
        return name

    @classmethod
    def workout_to_text(cls, workout: Workout, fmt: str = "txt") -> str:
        if fmt not in FORMATS:
            raise ValueError(f"unsupported format: {fmt}")
        lines = [cls.title(workout, fmt)]
        for exercise in workout.exercises:
            lines.append("")
            lines.append(cls.exercise_heading(exercise.name, fmt))
            for s in exercise.sets:
                lines.append(f"  - {format_number(s.weight)} x {s.reps}")
        return "\n".join(lines)


def workout_to_text(workout: Workout, fmt: str = "txt") -> str:
    return ExportService.workout_to_text(workout, fmt)
