import argparse
import datetime
import json
import logging
from typing import Optional

from config import YamlConfig
from exercise_search import create_filter_options
from export_service import workout_to_text
from facts_service import FactsService
from models import Workout, load_workouts
from recommendation_service import RecommendationService
from settings_schema import AnalyticsSettings
from stats_service import StatisticsService


def read_workouts(path: str) -> list[Workout]:
    with open(path, "r", encoding="utf-8") as f:
        return load_workouts(json.load(f))


def _dump(data) -> str:
    return json.dumps(data, indent=2, default=_json_default)


def _json_default(value):
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json")
    raise TypeError(f"cannot serialise {type(value).__name__}")


def _find_workout(workouts: list[Workout], workout_id: Optional[str]) -> Workout:
    if workout_id is None:
        if not workouts:
            raise SystemExit("no workouts in file")
        return max(workouts, key=lambda w: w.date)
    for w in workouts:
        if w.id == workout_id:
            return w
    raise SystemExit(f"workout {workout_id} not found")


def run(args: argparse.Namespace, settings: AnalyticsSettings) -> str:
    stats = StatisticsService(settings)
    if args.cmd == "find-set":
        return _dump(RecommendationService(settings).find_set_to_pr(args.target))

    workouts = read_workouts(args.workouts)
    if args.cmd == "prs":
        return _dump(stats.personal_records(workouts, include_debuts=args.debuts))
    if args.cmd == "metrics":
        return _dump(stats.exercise_metrics(workouts, args.exercise))
    if args.cmd == "latest":
        return _dump(stats.latest_personal_records(workouts, args.exercise))
    if args.cmd == "facts":
        return "\n".join(FactsService(stats, settings).generate_facts(workouts))
    if args.cmd == "suggest":
        current = _find_workout(workouts, args.id)
        return _dump(RecommendationService(settings).e1rm_suggestions(workouts, current))
    if args.cmd == "search":
        names = stats.exercise_names(workouts)
        return "\n".join(create_filter_options(names, settings)(names, args.query))
    if args.cmd == "export":
        return workout_to_text(_find_workout(workouts, args.id), args.fmt)
    raise ValueError(f"unknown command: {args.cmd}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Workout analytics commands")
    parser.add_argument("--settings", default="settings.yaml")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    prs = sub.add_parser("prs")
    prs.add_argument("workouts")
    prs.add_argument("--debuts", action="store_true")

    for name in ("metrics", "latest"):
        p = sub.add_parser(name)
        p.add_argument("workouts")
        p.add_argument("--exercise", required=True)

    facts = sub.add_parser("facts")
    facts.add_argument("workouts")

    sug = sub.add_parser("suggest")
    sug.add_argument("workouts")
    sug.add_argument("--id")

    find = sub.add_parser("find-set")
    find.add_argument("--target", type=float, required=True)

    search = sub.add_parser("search")
    search.add_argument("workouts")
    search.add_argument("query")

    exp = sub.add_parser("export")
    exp.add_argument("workouts")
    exp.add_argument("--id")
    exp.add_argument("--fmt", choices=["txt", "phpbb"], default="txt")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    settings = YamlConfig(args.settings).load_settings()
    print(run(args, settings))


if __name__ == "__main__":
    main()
