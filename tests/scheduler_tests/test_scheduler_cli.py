"""End-to-end tests for the schedule-grid CLI."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from core.cli_errors import ExitCode
from scheduler import __version__
from scheduler.__main__ import app, main
from tests.fixtures import capture_output, record, temp_yaml_file

SCHEDULES = {
    "schedules": [
        record(id=1, name="Tue ten", schedule_type="weekly", time_of_day="10:00:00", days_of_week=[2]),
        record(id=2, name="Month end", schedule_type="monthly", time_of_day="23:00", day_of_month=31),
        record(id=3, name="Half past", schedule_type="daily", time_of_day="09:30:00"),
    ]
}


class TestWeekCommand(unittest.TestCase):

    def test_json_grid(self):
        with temp_yaml_file(SCHEDULES) as path, capture_output() as (out, err):
            rc = main(["--output", "json", "week", "--schedules", path, "--date", "2024-01-09"])
        self.assertEqual(rc, 0, err.getvalue())
        doc = json.loads(out.getvalue())
        occupied = {(d["index"], slot) for d in doc["days"] for slot in d["slots"]}
        self.assertEqual(occupied, {(2, "10:00")})

    def test_text_grid(self):
        with temp_yaml_file(SCHEDULES) as path, capture_output() as (out, _):
            rc = main(["week", "--schedules", path, "--date", "2024-01-12"])
        self.assertEqual(rc, 0)
        text = out.getvalue()
        self.assertIn("Week of 2024-01-07 (3 schedules)", text)
        self.assertIn("*Fri 12", text)
        self.assertIn("Tue ten", text)
        self.assertNotIn("Half past", text)

    def test_monthly_31_shows_in_long_month_only(self):
        with temp_yaml_file(SCHEDULES) as path:
            with capture_output() as (out, _):
                main(["-o", "json", "week", "--schedules", path, "--date", "2024-01-31"])
            jan = json.loads(out.getvalue())
            with capture_output() as (out, _):
                main(["-o", "json", "week", "--schedules", path, "--date", "2024-04-17"])
            apr = json.loads(out.getvalue())
        jan_slots = {(d["date"], s) for d in jan["days"] for s in d["slots"]}
        self.assertIn(("2024-01-31", "23:00"), jan_slots)
        self.assertFalse(any("23:00" in d["slots"] for d in apr["days"]))

    def test_out_writes_yaml(self):
        import yaml

        with temp_yaml_file(SCHEDULES) as path, tempfile.TemporaryDirectory() as td:
            out_path = Path(td) / "week.yaml"
            with capture_output():
                rc = main(["week", "--schedules", path, "--date", "2024-01-09", "--out", str(out_path)])
            doc = yaml.safe_load(out_path.read_text(encoding="utf-8"))
        self.assertEqual(rc, 0)
        self.assertEqual(doc["days"][0]["date"], "2024-01-07")

    def test_missing_file_exit_code(self):
        with capture_output() as (_, err):
            rc = main(["week", "--schedules", "/nonexistent/schedules.yaml", "--date", "2024-01-09"])
        self.assertEqual(rc, int(ExitCode.NOT_FOUND))
        self.assertIn("Schedules file not found", err.getvalue())

    def test_bad_date_is_usage_error(self):
        with temp_yaml_file(SCHEDULES) as path, capture_output() as (_, err):
            rc = main(["week", "--schedules", path, "--date", "09/01/2024"])
        self.assertEqual(rc, int(ExitCode.USAGE))
        self.assertIn("Invalid --date", err.getvalue())


class TestDescribeCommand(unittest.TestCase):

    def test_lists_descriptions(self):
        with temp_yaml_file(SCHEDULES) as path, capture_output() as (out, _):
            rc = main(["describe", "--schedules", path])
        self.assertEqual(rc, 0)
        text = out.getvalue()
        self.assertIn("Tue ten: Weekly on Tue at 10:00", text)
        self.assertIn("Month end: Monthly on day 31 at 23:00", text)

    def test_quiet_suppresses_output(self):
        with temp_yaml_file(SCHEDULES) as path, capture_output() as (out, _):
            rc = main(["--quiet", "describe", "--schedules", path])
        self.assertEqual(rc, 0)
        self.assertEqual(out.getvalue(), "")


class TestParser(unittest.TestCase):

    def test_commands_registered(self):
        parser = app.build_parser()
        args = parser.parse_args(["week", "--date", "2024-01-09"])
        self.assertEqual(args.command, "week")
        self.assertEqual(args.date, "2024-01-09")
        self.assertEqual(args.output, "text")

    def test_version_flag(self):
        with capture_output() as (out, _):
            with self.assertRaises(SystemExit) as ctx:
                main(["--version"])
        self.assertEqual(ctx.exception.code, 0)
        self.assertEqual(out.getvalue().strip(), f"schedule-grid {__version__}")

    def test_no_command_prints_help(self):
        with capture_output() as (out, _):
            rc = main([])
        self.assertEqual(rc, int(ExitCode.USAGE))
        self.assertIn("schedule-grid", out.getvalue())


if __name__ == "__main__":
    unittest.main()
