"""Tests for scheduler/store.py."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from core.cli_errors import ConfigError, ExitCode, NotFoundError
from scheduler.store import load_schedule_records
from tests.fixtures import record, temp_yaml_file


class TestLoadScheduleRecords(unittest.TestCase):

    def test_mapping_with_schedules_key(self):
        data = {"schedules": [record(id=1), record(id=2)]}
        with temp_yaml_file(data) as path:
            out = load_schedule_records(path)
        self.assertEqual([r["id"] for r in out], [1, 2])

    def test_top_level_list(self):
        with temp_yaml_file([record(id="a")]) as path:
            out = load_schedule_records(path)
        self.assertEqual(out[0]["time_of_day"], "09:00:00")

    def test_json_file(self):
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "schedules.json"
            p.write_text('[{"id": 5, "schedule_type": "weekly", "days_of_week": [1, 2]}]', encoding="utf-8")
            out = load_schedule_records(p)
        self.assertEqual(out, [{"id": 5, "schedule_type": "weekly", "days_of_week": [1, 2]}])

    def test_empty_file_and_missing_key(self):
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "empty.yaml"
            p.write_text("", encoding="utf-8")
            self.assertEqual(load_schedule_records(p), [])
        with temp_yaml_file({"other": 1}) as path:
            self.assertEqual(load_schedule_records(path), [])

    def test_missing_file(self):
        with self.assertRaises(NotFoundError) as ctx:
            load_schedule_records("/nonexistent/schedules.yaml")
        self.assertEqual(ctx.exception.code, ExitCode.NOT_FOUND)

    def test_wrong_shape(self):
        with temp_yaml_file({"schedules": "daily"}) as path:
            with self.assertRaises(ConfigError):
                load_schedule_records(path)
        with temp_yaml_file([record(), "not a record"]) as path:
            with self.assertRaises(ConfigError) as ctx:
                load_schedule_records(path)
        self.assertIn("entry 1", str(ctx.exception))

    def test_invalid_yaml(self):
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "bad.yaml"
            p.write_text("schedules: [unclosed", encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_schedule_records(p)

    @patch("scheduler.store.load_yaml", side_effect=RuntimeError("PyYAML is required"))
    def test_missing_yaml_library_is_not_a_config_error(self, _mock_load):
        with temp_yaml_file([record()]) as path:
            with self.assertRaises(RuntimeError) as ctx:
                load_schedule_records(path)
        self.assertNotIsInstance(ctx.exception, ConfigError)


if __name__ == "__main__":
    unittest.main()
