from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from app.config import BulkImportSettings, get_bulk_import_settings
from app.services.backoff import backoff_schedule, compute_backoff_delay, worst_case_wait_seconds


class TestBackoffSchedule(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = BulkImportSettings(
            max_attempts=10,
            initial_delay_seconds=2.0,
            backoff_multiplier=2.0,
            max_delay_seconds=30.0,
        )

    def test_first_attempt_waits_the_base_delay(self) -> None:
        self.assertEqual(compute_backoff_delay(1, self.settings), 2.0)

    def test_delay_doubles_until_the_cap(self) -> None:
        self.assertEqual(
            backoff_schedule(self.settings),
            [2.0, 4.0, 8.0, 16.0, 30.0, 30.0, 30.0, 30.0, 30.0, 30.0],
        )

    def test_worst_case_wait_is_bounded_geometric_sum(self) -> None:
        self.assertEqual(worst_case_wait_seconds(self.settings), 210.0)

    def test_schedule_length_matches_attempt_budget(self) -> None:
        settings = BulkImportSettings(max_attempts=3, initial_delay_seconds=1.0, max_delay_seconds=60.0)

        self.assertEqual(backoff_schedule(settings), [1.0, 2.0, 4.0])

    def test_zero_base_delay_never_waits(self) -> None:
        settings = BulkImportSettings(initial_delay_seconds=0.0)

        self.assertEqual(set(backoff_schedule(settings)), {0.0})

    def test_rejects_attempt_numbers_below_one(self) -> None:
        with self.assertRaises(ValueError):
            compute_backoff_delay(0, self.settings)



class TestBulkImportSettingsFromEnvironment(unittest.TestCase):
    def setUp(self) -> None:
        get_bulk_import_settings.cache_clear()
        self.addCleanup(get_bulk_import_settings.cache_clear)

    def test_out_of_range_values_are_clamped(self) -> None:
        env = {
            "BULK_IMPORT_MAX_DELAY_SECONDS": "120",
            "BULK_IMPORT_MAX_ATTEMPTS": "0",
            "BULK_IMPORT_BACKOFF_MULTIPLIER": "0.5",
            "BULK_IMPORT_INITIAL_DELAY_SECONDS": "-3",
        }
        with patch.dict(os.environ, env):
            settings = get_bulk_import_settings()

        self.assertEqual(settings.max_delay_seconds, 60.0)
        self.assertEqual(settings.max_attempts, 1)
        self.assertEqual(settings.backoff_multiplier, 1.0)
        self.assertEqual(settings.initial_delay_seconds, 0.0)

    def test_delay_cap_never_drops_below_base_delay(self) -> None:
        env = {
            "BULK_IMPORT_INITIAL_DELAY_SECONDS": "5",
            "BULK_IMPORT_MAX_DELAY_SECONDS": "1",
        }
        with patch.dict(os.environ, env):
            settings = get_bulk_import_settings()

        self.assertEqual(settings.max_delay_seconds, 5.0)

    def test_unparseable_values_fall_back_to_defaults(self) -> None:
        env = {
            "BULK_IMPORT_MAX_ATTEMPTS": "ten",
            "BULK_IMPORT_MAX_DELAY_SECONDS": "soon",
        }
        with patch.dict(os.environ, env):
            settings = get_bulk_import_settings()

        self.assertEqual(settings.max_attempts, 10)
        self.assertEqual(settings.max_delay_seconds, 30.0)


if __name__ == "__main__":
    unittest.main()
