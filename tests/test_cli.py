# tests/test_cli.py

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import io
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr
from unittest import mock

import main


def run(argv):
    """Запускает main() и возвращает (код возврата, stdout, stderr)."""
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main.main(argv)
    return code, out.getvalue(), err.getvalue()


class TestCommands(unittest.TestCase):

    def test_no_command_prints_help(self):
        code, out, _ = run([])
        self.assertEqual(code, 0)
        self.assertIn("usage", out)

    def test_codes(self):
        code, out, _ = run(["codes", "-t", "aabbc"])
        self.assertEqual(code, 0)
        rows = [line.split() for line in out.splitlines()]
        self.assertIn(["'a'", "2", "11"], rows)
        self.assertIn(["'b'", "2", "0"], rows)
        self.assertIn(["'c'", "1", "10"], rows)

    def test_codes_empty(self):
        code, out, _ = run(["codes", "-t", ""])
        self.assertEqual(code, 0)
        self.assertIn("Empty input", out)

    def test_stats(self):
        code, out, _ = run(["stats", "-t", "aabbc"])
        self.assertEqual(code, 0)
        rows = [line.split() for line in out.splitlines()]
        self.assertIn(["Encoded", "bits:", "8"], rows)
        self.assertIn(["Distinct:", "3"], rows)

    def test_encode(self):
        code, out, _ = run(["encode", "-t", "aabbc"])
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "11110010")

    def test_encode_hex(self):
        code, out, _ = run(["encode", "-t", "aabbc", "--hex"])
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines(), ["f2", "padding: 0"])

    def test_verify_verbose(self):
        code, out, _ = run(["verify", "-t", "abracadabra", "--verbose"])
        self.assertEqual(code, 0)
        self.assertIn("[verify]", out)
        self.assertIn("Round-trip ok: True", out)

    def test_binary_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "data.bin")
            with open(path, "wb") as f:
                f.write(b"\x00\x00\xff")

            code, out, _ = run(["codes", "-i", path, "--binary"])
            self.assertEqual(code, 0)
            self.assertIn("0x00", out)
            self.assertIn("0xff", out)

            code, out, _ = run(["verify", "-i", path, "--binary"])
            self.assertEqual(code, 0)

    def test_text_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "msg.txt")
            with open(path, "w", encoding="utf-8") as f:
                f.write("привет мир")

            code, out, _ = run(["verify", "-i", path])
            self.assertEqual(code, 0)
            self.assertIn("Round-trip ok: True", out)

    def test_missing_file(self):
        code, _, err = run(["codes", "-i", "/nonexistent/file.txt"])
        self.assertEqual(code, 2)
        self.assertIn("[ERROR]", err)

    def test_input_required(self):
        with self.assertRaises(SystemExit) as ctx:
            run(["codes"])
        self.assertEqual(ctx.exception.code, 2)

    def test_unknown_encoding(self):
        with self.assertRaises(SystemExit) as ctx:
            run(["codes", "-t", "ab", "--encoding", "bogus", "--binary"])
        self.assertEqual(ctx.exception.code, 2)

    def test_unencodable_text(self):
        code, _, err = run(["codes", "-t", "привет", "--encoding", "ascii", "--binary"])
        self.assertEqual(code, 2)
        self.assertIn("[ERROR]", err)

    def test_undecodable_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "data.bin")
            with open(path, "wb") as f:
                f.write(b"\xff\xfe\x00\x80")

            code, _, err = run(["codes", "-i", path])
            self.assertEqual(code, 2)
            self.assertIn("[ERROR]", err)

    def test_interactive(self):
        with mock.patch("builtins.input", return_value="aabbc"):
            code, out, _ = run(["cli"])
        self.assertEqual(code, 0)
        self.assertIn("Encoded: 11110010", out)

    def test_interactive_closed_stdin(self):
        with mock.patch("builtins.input", side_effect=EOFError):
            code, out, _ = run(["cli"])
        self.assertEqual(code, 0)
        self.assertIn("No input", out)


if __name__ == "__main__":
    unittest.main()
