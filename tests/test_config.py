import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from hanziquiz.config import load_config, validate_config


class ConfigTests(unittest.TestCase):
    def test_packaged_defaults(self) -> None:
        cfg = validate_config(load_config())
        self.assertEqual(cfg["quiz"]["leniency"], 1.2)
        self.assertEqual(cfg["quiz"]["show_hint_after_misses"], 3)
        self.assertFalse(cfg["quiz"]["accept_backwards_strokes"])
        self.assertEqual(cfg["positioner"], {"width": 300, "height": 300, "padding": 0})
        self.assertEqual(cfg["matching"]["frechet"], 0.4)
        self.assertEqual(cfg["matching"]["avg_dist"], 350)
        self.assertFalse(cfg["explain"])

    def test_empty_config_gets_defaults(self) -> None:
        cfg = validate_config({})
        self.assertEqual(cfg["quiz"]["simplify_tolerance"], 1)
        self.assertEqual(cfg["stats"]["output_path"], "./quiz_stats.json")
        self.assertIsNone(cfg["stats"]["store_dir"])
        self.assertEqual(cfg["matching"]["min_len"], 0.35)

    def test_invalid_values_fall_back(self) -> None:
        raw = {
            "quiz": {"leniency": -1, "show_hint_after_misses": 0, "simplify_tolerance": "x"},
            "positioner": {"width": 0, "height": 200, "padding": 150},
            "matching": {"frechet": -0.5},
        }
        out = io.StringIO()
        with redirect_stdout(out):
            cfg = validate_config(raw)
        self.assertEqual(cfg["quiz"]["leniency"], 1.2)
        self.assertEqual(cfg["quiz"]["show_hint_after_misses"], 3)
        self.assertEqual(cfg["quiz"]["simplify_tolerance"], 1)
        self.assertEqual(cfg["positioner"]["width"], 300)
        self.assertEqual(cfg["positioner"]["padding"], 0)
        self.assertEqual(cfg["matching"]["frechet"], 0.4)
        self.assertIn("WARNING", out.getvalue())

    def test_hints_can_be_disabled(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            cfg = validate_config({"quiz": {"show_hint_after_misses": False}})
        self.assertIs(cfg["quiz"]["show_hint_after_misses"], False)
        self.assertEqual(out.getvalue(), "")

    def test_load_yaml_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "cfg.yml"
            path.write_text("quiz:\n  leniency: 0.8\nmatching:\n  avg_dist: 300\n", encoding="utf-8")
            cfg = validate_config(load_config(str(path)))
        self.assertEqual(cfg["quiz"]["leniency"], 0.8)
        self.assertEqual(cfg["matching"]["avg_dist"], 300)
        self.assertEqual(cfg["matching"]["start_and_end_dist"], 250)

    def test_missing_file_exits(self) -> None:
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
            load_config("/nonexistent/hanziquiz.yml")


if __name__ == "__main__":
    unittest.main()
