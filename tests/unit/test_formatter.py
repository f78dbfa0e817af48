import random
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from txt2png_renderer.formatter import format_text


class FormatterTests(unittest.TestCase):
    def test_word_wrap(self):
        out = format_text(b"HELLO WORLD", 5)
        self.assertEqual(out.text, b"HELLO\nWORLD")
        self.assertEqual(out.line_count, 2)

    def test_uppercases(self):
        out = format_text(b"hello world", 80)
        self.assertEqual(out.text, b"HELLO WORLD")
        self.assertEqual(out.line_count, 1)

    def test_non_letters_pass_through(self):
        self.assertEqual(format_text(b"a1-b\x01", 80).text, b"A1-B\x01")

    def test_forced_mid_word_split(self):
        out = format_text(b"ABCDEFGH", 3)
        self.assertEqual(out.text, b"AB\nCD\nEF\nGH")
        self.assertEqual(out.line_count, 4)

    def test_split_after_partial_line(self):
        out = format_text(b"A BCDEFG", 4)
        self.assertEqual(out.text, b"A B\nCDE\nFG")
        self.assertEqual(out.line_count, 3)

    def test_exact_fit_does_not_wrap(self):
        out = format_text(b"ABC DEF", 3)
        self.assertEqual(out.text, b"ABC\nDEF")
        self.assertEqual(out.line_count, 2)

    def test_single_slot_left_wraps_whole_word(self):
        out = format_text(b"AB CDEF", 4)
        self.assertEqual(out.text, b"AB \nCDEF")
        self.assertEqual(out.line_count, 2)

    def test_overflowing_spaces_are_dropped(self):
        out = format_text(b"AB     CD", 4)
        self.assertEqual(out.text, b"AB  \nCD")
        self.assertEqual(out.line_count, 2)

    def test_newlines_pass_through(self):
        out = format_text(b"a\nb", 80)
        self.assertEqual(out.text, b"A\nB")
        self.assertEqual(out.line_count, 2)

    def test_leading_newline_is_kept(self):
        out = format_text(b"\nA", 80)
        self.assertEqual(out.text, b"\nA")
        self.assertEqual(out.line_count, 2)

    def test_trailing_whitespace_trimmed(self):
        out = format_text(b"HI \n\n  ", 80)
        self.assertEqual(out.text, b"HI")
        self.assertEqual(out.line_count, 1)

    def test_trailing_spaces_do_not_reduce_line_count(self):
        out = format_text(b"A\nB   ", 80)
        self.assertEqual(out.text, b"A\nB")
        self.assertEqual(out.line_count, 2)

    def test_crlf_line_endings_trimmed(self):
        out = format_text(b"HELLO\r\n", 80)
        self.assertEqual(out.text, b"HELLO")
        self.assertEqual(out.line_count, 1)

    def test_trailing_ascii_whitespace_only_newlines_count(self):
        out = format_text(b"A\r\nB\t\x0c\r \n", 80)
        self.assertEqual(out.text, b"A\r\nB")
        self.assertEqual(out.line_count, 2)

    def test_empty_input(self):
        out = format_text(b"", 80)
        self.assertEqual(out.text, b"")
        self.assertEqual(out.line_count, 1)

    def test_whitespace_only_input(self):
        out = format_text(b" \n \n", 10)
        self.assertEqual(out.text, b"")
        self.assertEqual(out.line_count, 1)

    def test_rejects_narrow_width(self):
        with self.assertRaises(ValueError):
            format_text(b"ABC", 1)
        with self.assertRaises(ValueError):
            format_text(b"ABC", 0)

    def test_properties_over_random_inputs(self):
        rng = random.Random(1234)
        alphabet = b"abcXYZ12 .\n    "
        for _ in range(500):
            width = rng.randint(2, 12)
            raw = bytes(rng.choice(alphabet) for _ in range(rng.randint(0, 60)))
            out = format_text(raw, width)
            lines = out.text.split(b"\n")
            with self.subTest(raw=raw, width=width):
                self.assertTrue(all(len(line) <= width for line in lines))
                self.assertFalse(out.text.endswith((b" ", b"\n")))
                self.assertEqual(out.line_count, len(lines))
                self.assertEqual(out.text, out.text.upper())
                self.assertEqual(format_text(out.text, width), out)


if __name__ == "__main__":
    unittest.main()
