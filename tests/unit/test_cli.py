import argparse
import contextlib
import io
import json
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "cli"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from txt2png_app import cli
from txt2png_app.cli import build_parser, parse_color, parse_margins


class ParserTests(unittest.TestCase):
    def test_render_command(self):
        args = build_parser().parse_args(["render", "--text", "hi", "--out", "a.png", "--scaling", "3"])
        self.assertEqual(args.command, "render")
        self.assertEqual(args.text, "hi")
        self.assertEqual(args.scaling, 3)
        self.assertIsNone(args.column_width)

    def test_color_and_margin_flags(self):
        args = build_parser().parse_args(
            ["render", "--out", "a.png", "--fg", "1, 2, 3, 4", "--margins", "1,2,3,4"]
        )
        self.assertEqual(args.fg, [1, 2, 3, 4])
        self.assertEqual(args.margins, {"top": 1, "right": 2, "bottom": 3, "left": 4})

    def test_config_set_command(self):
        args = build_parser().parse_args(["--config-file", "c.json", "config", "set", '{"scaling": 2}'])
        self.assertEqual(args.command, "config")
        self.assertEqual(args.config_cmd, "set")
        self.assertEqual(args.config_file, "c.json")

    def test_parse_color_rejects_bad_values(self):
        for value in ("1,2,3", "1,2,3,256", "a,b,c,d", "-1,0,0,0"):
            with self.subTest(value=value):
                with self.assertRaises(argparse.ArgumentTypeError):
                    parse_color(value)

    def test_parse_margins_rejects_negative(self):
        with self.assertRaises(argparse.ArgumentTypeError):
            parse_margins("0,0,-1,0")


class MainTests(unittest.TestCase):
    def setUp(self):
        patches = [
            mock.patch.object(cli, "configure_logging"),
            mock.patch.object(cli, "install_crash_hooks"),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.config_file = str(Path(self.tmp.name) / "config.json")

    def _run(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            rc = cli.main(["--config-file", self.config_file] + argv)
        return rc, out.getvalue(), err.getvalue()

    def test_render_writes_png_and_report(self):
        target = Path(self.tmp.name) / "out" / "hi.png"
        rc, out, _ = self._run(["render", "--text", "hi", "--out", str(target), "--scaling", "2"])
        self.assertEqual(rc, 0)
        report = json.loads(out)
        self.assertEqual((report["width"], report["height"]), (22, 10))
        self.assertEqual(report["bytes"], target.stat().st_size)
        with Image.open(target) as img:
            self.assertEqual(img.size, (22, 10))

    def test_render_reads_input_file(self):
        source = Path(self.tmp.name) / "text.txt"
        source.write_bytes(b"HELLO WORLD")
        target = Path(self.tmp.name) / "hw.png"
        rc, out, _ = self._run(["render", "--input", str(source), "--out", str(target), "--column-width", "5"])
        self.assertEqual(rc, 0)
        self.assertEqual(json.loads(out)["width"], 29)

    def test_render_invalid_config_returns_error(self):
        target = Path(self.tmp.name) / "x.png"
        rc, _, err = self._run(["render", "--text", "x", "--out", str(target), "--config", '{"colour": 1}'])
        self.assertEqual(rc, 2)
        self.assertIn("colour", err)
        self.assertFalse(target.exists())

    def test_render_oversized_canvas_returns_error(self):
        target = Path(self.tmp.name) / "big.png"
        rc, _, err = self._run(
            ["render", "--text", "a\nb", "--out", str(target), "--column-width", str(2**31)]
        )
        self.assertEqual(rc, 2)
        self.assertIn("pixel limit", err)
        self.assertFalse(target.exists())

    def test_render_save_config(self):
        target = Path(self.tmp.name) / "x.png"
        rc, _, _ = self._run(["render", "--text", "x", "--out", str(target), "--scaling", "3", "--save-config"])
        self.assertEqual(rc, 0)
        self.assertEqual(json.loads(Path(self.config_file).read_text(encoding="utf-8"))["scaling"], 3)

    def test_config_set_show_reset(self):
        rc, _, _ = self._run(["config", "set", '{"column_count": 3, "margins": {"left": 2}}'])
        self.assertEqual(rc, 0)
        rc, out, _ = self._run(["config", "show"])
        shown = json.loads(out)
        self.assertEqual(shown["column_count"], 3)
        self.assertEqual(shown["margins"]["left"], 2)
        rc, out, _ = self._run(["config", "reset"])
        self.assertEqual(json.loads(out)["column_count"], 1)

    def test_config_set_rejects_bad_json(self):
        rc, _, err = self._run(["config", "set", "{"])
        self.assertEqual(rc, 2)
        self.assertIn("Failed to parse config", err)
        self.assertFalse(Path(self.config_file).exists())

    def test_glyphs(self):
        rc, out, _ = self._run(["glyphs"])
        self.assertEqual(rc, 0)
        self.assertIn("ABC", out)

    def test_doctor(self):
        rc, out, _ = self._run(["doctor"])
        self.assertEqual(rc, 0)
        payload = json.loads(out)
        self.assertEqual(payload["config"]["column_width"], 80)


if __name__ == "__main__":
    unittest.main()
