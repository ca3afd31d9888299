"""Tests for the analysis layer: stats, batches, CSV export and configuration."""

import csv
import json
import os
from pathlib import Path
import sys
import tempfile
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config_manager import ConfigManager
from minqueens.analysis import plots, settings
from minqueens.analysis.cli import apply_configuration, parse_n_values
from minqueens.analysis.experiments import derive_seed, run_experiments, run_single_search
from minqueens.analysis.reporting import save_raw_data_to_csv, save_results_to_csv
from minqueens.analysis.stats import compute_detailed_statistics, summarize_runs


class SettingsSnapshot(unittest.TestCase):
    """Restore module-level settings mutated by a test."""

    NAMES = ("N_VALUES", "RUNS_PER_N", "MAX_ATTEMPTS", "PARALLEL_RECOUNT", "BASE_SEED", "OUT_DIR", "RUN_TAG")

    def setUp(self):
        self._saved = {name: getattr(settings, name) for name in self.NAMES}

    def tearDown(self):
        for name, value in self._saved.items():
            setattr(settings, name, value)


class StatsTests(unittest.TestCase):

    def test_detailed_statistics(self):
        stats = compute_detailed_statistics([4.0, 1.0, 3.0, 2.0])
        self.assertEqual(stats["count"], 4)
        self.assertEqual(stats["mean"], 2.5)
        self.assertEqual(stats["median"], 2.5)
        self.assertEqual((stats["min"], stats["max"], stats["range"]), (1.0, 4.0, 3.0))
        self.assertEqual((stats["q25"], stats["q75"]), (2.0, 4.0))

    def test_empty_statistics(self):
        stats = compute_detailed_statistics([])
        self.assertEqual(stats["count"], 0)
        self.assertIsNone(stats["mean"])

    def test_summarize_runs_uses_successes_only(self):
        records = [
            {"success": True, "restarts": 2, "moves": 10, "time": 0.5, "violations": 0, "seed": 1},
            {"success": True, "restarts": 4, "moves": 20, "time": 1.5, "violations": 0, "seed": 2},
            {"success": False, "restarts": 99, "moves": 99, "time": 9.0, "violations": 0, "seed": 3},
        ]
        entry = summarize_runs(records)
        self.assertEqual((entry["total_runs"], entry["successes"]), (3, 2))
        self.assertAlmostEqual(entry["success_rate"], 2 / 3)
        self.assertEqual(entry["restarts"]["mean"], 3)
        self.assertEqual(entry["moves"]["max"], 20)
        self.assertEqual(len(entry["raw_runs"]), 3)


class ExperimentTests(SettingsSnapshot):

    def test_derive_seed(self):
        self.assertIsNone(derive_seed(None, 8, 0))
        self.assertNotEqual(derive_seed(1, 8, 0), derive_seed(1, 8, 1))
        self.assertNotEqual(derive_seed(1, 8, 0), derive_seed(1, 16, 0))

    def test_single_search_record(self):
        record = run_single_search((10, 2000, 42, False, True))
        self.assertTrue(record["success"])
        self.assertEqual(record["violations"], 0)
        self.assertEqual(record["seed"], 42)
        repeat = run_single_search((10, 2000, 42, False, True))
        self.assertEqual((repeat["restarts"], repeat["moves"]), (record["restarts"], record["moves"]))

    def test_sequential_batch(self):
        settings.BASE_SEED = 17
        settings.PARALLEL_RECOUNT = False
        results = run_experiments([4, 8, 12], runs=3, validate=True)
        self.assertEqual(sorted(results), [4, 8, 12])
        for entry in results.values():
            self.assertEqual(entry["successes"], 3)
            self.assertEqual(entry["success_rate"], 1.0)
        again = run_experiments([8], runs=3, validate=True)
        self.assertEqual(
            [r["restarts"] for r in again[8]["raw_runs"]],
            [r["restarts"] for r in results[8]["raw_runs"]],
        )

    def test_rejects_unsolvable_sizes(self):
        with self.assertRaises(ValueError):
            run_experiments([4, 3], runs=1)


class ReportingTests(SettingsSnapshot):

    def test_csv_exports(self):
        settings.BASE_SEED = 3
        settings.RUN_TAG = "unit"
        results = run_experiments([6, 8], runs=2)
        with tempfile.TemporaryDirectory() as tmpdir:
            summary_path = save_results_to_csv(results, [6, 8], tmpdir)
            raw_path = save_raw_data_to_csv(results, [6, 8], tmpdir)
            self.assertIn("_unit", os.path.basename(summary_path))

            with open(summary_path, newline="") as f:
                rows = list(csv.DictReader(f))
            self.assertEqual([row["n"] for row in rows], ["6", "8"])
            self.assertEqual(rows[0]["successes"], "2")
            self.assertIn("restarts_mean", rows[0])

            with open(raw_path, newline="") as f:
                raw_rows = list(csv.DictReader(f))
            self.assertEqual(len(raw_rows), 4)
            self.assertEqual({row["violations"] for row in raw_rows}, {"0"})


class ConfigurationTests(SettingsSnapshot):

    def write_config(self, tmpdir, payload):
        path = os.path.join(tmpdir, "config.json")
        with open(path, "w") as f:
            json.dump(payload, f)
        return path

    def test_apply_configuration(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = self.write_config(tmpdir, {
                "experiment_settings": {"N_values": ["10", 20], "runs_per_n": 4, "base_seed": 9, "output_dir": "out"},
                "search_settings": {"max_attempts": 500, "parallel_recount": False},
            })
            apply_configuration(path)
        self.assertEqual(settings.N_VALUES, [10, 20])
        self.assertEqual(settings.RUNS_PER_N, 4)
        self.assertEqual(settings.BASE_SEED, 9)
        self.assertEqual(settings.OUT_DIR, "out")
        self.assertEqual(settings.MAX_ATTEMPTS, 500)
        self.assertFalse(settings.PARALLEL_RECOUNT)

    def test_invalid_values_are_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = self.write_config(tmpdir, {"search_settings": {"max_attempts": 0}})
            with self.assertRaises(ValueError):
                apply_configuration(path)

    def test_missing_and_malformed_files(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(FileNotFoundError):
                ConfigManager(os.path.join(tmpdir, "missing.json"))
            path = os.path.join(tmpdir, "broken.json")
            with open(path, "w") as f:
                f.write("{not json")
            with self.assertRaises(ValueError):
                ConfigManager(path)

    def test_update_setting_persists(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = self.write_config(tmpdir, {})
            ConfigManager(path).update_setting("search_settings", "max_attempts", 100)
            self.assertEqual(ConfigManager(path).get_search_settings(), {"max_attempts": 100})

    def test_shipped_config_loads(self):
        config = ConfigManager(ROOT / "config.json")
        self.assertIn("N_values", config.get_experiment_settings())
        self.assertIn("max_attempts", config.get_search_settings())

    def test_parse_n_values(self):
        self.assertIsNone(parse_n_values(None))
        self.assertEqual(parse_n_values(["16,8", "8", " 32 "]), [8, 16, 32])
        with self.assertRaises(ValueError):
            parse_n_values(["eight"])


class PlotTests(SettingsSnapshot):

    @unittest.skipUnless(plots._PLOTS_AVAILABLE, "matplotlib not installed")
    def test_charts_are_written(self):
        settings.BASE_SEED = 5
        results = run_experiments([6, 8], runs=3)
        with tempfile.TemporaryDirectory() as tmpdir:
            paths = plots.plot_and_save(results, [6, 8], tmpdir)
            self.assertGreaterEqual(len(paths), 3)
            for path in paths:
                self.assertTrue(os.path.getsize(path) > 0, path)

    def test_no_results_writes_nothing(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            self.assertEqual(plots.plot_and_save({}, [8], tmpdir), [])


if __name__ == "__main__":
    unittest.main()
