import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import run
from config import Config


class TestRunEntryPoint(unittest.TestCase):
    def test_overrides_apply_onto_loaded_config(self):
        args = run.build_parser().parse_args(
            ["--segments", "12", "--width", "300", "--capacity", "99", "--standard-quadrants"]
        )
        cfg = run.apply_overrides(Config(), args)

        self.assertEqual(cfg.symmetry.segments, 12)
        self.assertEqual(cfg.canvas.width, 300)
        self.assertEqual(cfg.canvas.height, 800)
        self.assertEqual(cfg.buffer.capacity, 99)
        self.assertTrue(cfg.geometry.standard_quadrant_angles)

    def _write_inputs(self, tmpdir: Path, segments: int = 4):
        cfg_file = tmpdir / "config.json"
        with open(cfg_file, "w", encoding="utf-8") as f:
            json.dump({
                "version": 1,
                "canvas": {"width": 120, "height": 120},
                "symmetry": {"segments": segments},
                "render": {"frame_interval_ms": 1, "input_interval_ms": 1},
                "export": {"output_dir": str(tmpdir)},
            }, f)
        samples_file = tmpdir / "stroke.json"
        samples_file.write_text(json.dumps([[60, 60, True], [70, 65, True], [80, 70, False]]),
                                encoding="utf-8")
        return cfg_file, samples_file

    def test_replay_saves_bitmap_and_exits_zero(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            cfg_file, samples_file = self._write_inputs(tmp)
            argv = ["run.py", "--config", str(cfg_file), "--replay", str(samples_file), "--save", "Stroke"]

            with mock.patch("sys.argv", argv):
                with self.assertRaises(SystemExit) as ctx:
                    run.main()

            self.assertEqual(ctx.exception.code, 0)
            self.assertTrue((tmp / "Stroke.bmp").exists())

    def test_missing_samples_file_exits_one(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            cfg_file, _ = self._write_inputs(tmp)
            argv = ["run.py", "--config", str(cfg_file), "--replay", str(tmp / "absent.json")]

            with mock.patch("sys.argv", argv):
                with self.assertRaises(SystemExit) as ctx:
                    run.main()

            self.assertEqual(ctx.exception.code, 1)

    def test_invalid_engine_settings_exit_two(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            cfg_file, samples_file = self._write_inputs(tmp)
            argv = ["run.py", "--config", str(cfg_file), "--replay", str(samples_file), "--segments", "0"]

            with mock.patch("sys.argv", argv):
                with self.assertRaises(SystemExit) as ctx:
                    run.main()

            self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
