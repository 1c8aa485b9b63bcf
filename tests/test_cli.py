import io
import json
import os
import shutil
import sys
import tempfile
import unittest
from contextlib import redirect_stdout

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from cli import main

WORKOUTS = [
    {
        "id": "1",
        "date": "2023-01-01T00:00:00Z",
        "exercises": [{"name": "Bench Press", "sets": [{"weight": 100, "reps": 5}, {"weight": 105, "reps": 3}]}],
    },
    {
        "id": "2",
        "date": "2023-01-05T00:00:00Z",
        "exercises": [{"name": "Bench Press", "sets": [{"weight": 110, "reps": 3}]}],
    },
]


class CLITestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.mkdtemp()
        self.data = os.path.join(self.tmp, "workouts.json")
        self.settings = os.path.join(self.tmp, "settings.yaml")
        with open(self.data, "w", encoding="utf-8") as f:
            json.dump(WORKOUTS, f)

    def tearDown(self) -> None:
        shutil.rmtree(self.tmp)

    def _run(self, *argv: str) -> str:
        out = io.StringIO()
        with redirect_stdout(out):
            main(["--settings", self.settings, *argv])
        return out.getvalue()

    def test_prs(self) -> None:
        prs = json.loads(self._run("prs", self.data))
        self.assertEqual([(p["type"], p["value"], p["old_value"]) for p in prs], [("Max Weight", 110, 105), ("E1RM", 121, 117)])
        self.assertEqual(prs[0]["date"], "2023-01-05T00:00:00+00:00")
        with_debuts = json.loads(self._run("prs", self.data, "--debuts"))
        self.assertEqual(len(with_debuts), 4)

    def test_metrics_and_latest(self) -> None:
        metrics = json.loads(self._run("metrics", self.data, "--exercise", "Bench Press"))
        self.assertEqual([m["volume"] for m in metrics], [815, 330])
        latest = json.loads(self._run("latest", self.data, "--exercise", "Bench Press"))
        self.assertEqual(latest["e1rm"]["value"], 121)

    def test_find_set(self) -> None:
        result = json.loads(self._run("find-set", "--target", "100"))
        self.assertEqual(result, {"weight": 80, "reps": 8})

    def test_export(self) -> None:
        text = self._run("export", self.data, "--id", "2", "--fmt", "txt")
        self.assertEqual(text, "Workout on January 5, 2023\n\nBench Press\n  - 110 x 3\n")

    def test_export_defaults_to_latest(self) -> None:
        text = self._run("export", self.data)
        self.assertTrue(text.startswith("Workout on January 5, 2023"))

    def test_export_unknown_id(self) -> None:
        with self.assertRaises(SystemExit):
            self._run("export", self.data, "--id", "missing")

    def test_search(self) -> None:
        self.assertEqual(self._run("search", self.data, "bnch").strip(), "Bench Press")

    def test_facts(self) -> None:
        lines = self._run("facts", self.data).strip().splitlines()
        self.assertEqual(len(lines), 1)


if __name__ == "__main__":
    unittest.main()
