"""Tests for the `cbor` command line.

main() is driven in-process with stdin, stdout and stderr swapped for
in-memory streams.  stdout is a text wrapper over a byte buffer so that
both the help text and the binary output land in one place.
"""

from __future__ import annotations

import errno
import io
import os
import sys
import tempfile
import unittest
from typing import Optional, Tuple
from unittest import mock

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from cborseq import __version__
from cborseq._cli import main


def _run(argv, stdin_bytes: bytes = b"",
         stdin_raw: Optional[io.RawIOBase] = None) -> Tuple[Optional[int], bytes, str]:
    """Run main(argv); return (exit code or None, stdout bytes, stderr text)."""
    stdout = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
    stderr = io.StringIO()
    if stdin_raw is None:
        stdin_raw = io.BytesIO(stdin_bytes)
    stdin = io.TextIOWrapper(io.BufferedReader(stdin_raw))
    code = None
    with mock.patch.object(sys, "stdout", stdout), \
            mock.patch.object(sys, "stderr", stderr), \
            mock.patch.object(sys, "stdin", stdin):
        try:
            main(argv)
        except SystemExit as e:
            code = e.code
    stdout.flush()
    return code, stdout.buffer.getvalue(), stderr.getvalue()


class _BrokenStdin(io.RawIOBase):
    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        raise OSError(errno.EIO, "Input/output error")


class _TempDirCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)

    def write(self, name: str, data: bytes) -> str:
        path = os.path.join(self._tmp.name, name)
        with open(path, "wb") as f:
            f.write(data)
        return path


# ── Dispatch ──────────────────────────────────────────────────

class TestDispatch(unittest.TestCase):
    def test_no_command_prints_help(self):
        code, out, err = _run([])
        self.assertIsNone(code)
        self.assertIn(b"usage: cbor", out)
        self.assertIn(b"dump", out)
        self.assertIn(b"head", out)

    def test_unknown_command_prints_help(self):
        code, out, _err = _run(["frobnicate"])
        self.assertIsNone(code)
        self.assertIn(b"usage: cbor", out)

    def test_version_command(self):
        code, out, _err = _run(["version"])
        self.assertIsNone(code)
        self.assertEqual(out, "cbor {}\n".format(__version__).encode())

    def test_version_flag(self):
        code, out, _err = _run(["--version"])
        self.assertEqual(code, 0)
        self.assertIn(__version__.encode(), out)


# ── dump ──────────────────────────────────────────────────────

class TestDumpCommand(_TempDirCase):
    def test_dump_file(self):
        path = self.write("in.cbor", bytes.fromhex("a26161016162820203"))
        code, out, err = _run(["dump", path])
        self.assertIsNone(code)
        self.assertEqual(out, b'{\n  "a": 1,\n  "b": [\n    2,\n    3\n  ]\n}')
        self.assertEqual(err, "")

    def test_dump_sequence_no_delimiter(self):
        path = self.write("in.cbor", b"\x01\x02")
        _code, out, _err = _run(["dump", path])
        self.assertEqual(out, b"12")

    def test_dump_stdin(self):
        code, out, err = _run(["dump"], stdin_bytes=b"\x63\xe6\xb0\xb4")
        self.assertIsNone(code)
        self.assertEqual(out, '"水"'.encode("utf-8"))
        self.assertIn("FILE not provided, reading from STDIN", err)

    def test_dump_decode_error_is_fatal(self):
        path = self.write("in.cbor", b"\x01\x02\x82\x01")
        code, out, err = _run(["dump", path])
        self.assertEqual(code, 2)
        self.assertEqual(out, b"12")
        self.assertIn("ERR_DECODE", err)

    def test_dump_read_error(self):
        code, out, err = _run(["dump"], stdin_raw=_BrokenStdin())
        self.assertEqual(code, 2)
        self.assertEqual(out, b"")
        self.assertIn("error [ERR_IO]", err)

    def test_dump_missing_file(self):
        code, out, err = _run(["dump", os.path.join(self._tmp.name, "nope.cbor")])
        self.assertEqual(code, 2)
        self.assertEqual(out, b"")
        self.assertIn("ERR_IO", err)


# ── head ──────────────────────────────────────────────────────

class TestHeadCommand(_TempDirCase):
    def test_head_file(self):
        path = self.write("in.cbor", b"\x18\x64\x02\x03")
        code, out, err = _run(["head", path])
        self.assertIsNone(code)
        self.assertEqual(out, b"\x18\x64")
        self.assertEqual(err, "")

    def test_head_skips_malformed_silently(self):
        path = self.write("in.cbor", b"\x1c\x61\x78")
        code, out, err = _run(["head", path])
        self.assertIsNone(code)
        self.assertEqual(out, b"\x61\x78")
        self.assertNotIn("ERR_DECODE", err)

    def test_head_empty_input(self):
        path = self.write("in.cbor", b"")
        code, out, _err = _run(["head", path])
        self.assertIsNone(code)
        self.assertEqual(out, b"")

    def test_head_stdin(self):
        code, out, err = _run(["head"], stdin_bytes=b"\x82\x01\x02\x03")
        self.assertIsNone(code)
        self.assertEqual(out, b"\x82\x01\x02")
        self.assertIn("reading from STDIN", err)

    def test_head_read_error(self):
        code, out, err = _run(["head"], stdin_raw=_BrokenStdin())
        self.assertEqual(code, 2)
        self.assertEqual(out, b"")
        self.assertIn("error [ERR_IO]", err)

    def test_head_value_sharing_tags(self):
        path = self.write("in.cbor", bytes.fromhex("d81c81d81d00"))
        code, out, _err = _run(["head", path])
        self.assertIsNone(code)
        self.assertEqual(out, bytes.fromhex("d81c81d81d00"))

    def test_head_missing_file(self):
        code, _out, err = _run(["head", os.path.join(self._tmp.name, "nope.cbor")])
        self.assertEqual(code, 2)
        self.assertIn("ERR_IO", err)


if __name__ == "__main__":
    unittest.main()
