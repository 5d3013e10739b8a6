"""Byte sources: a named file or the console, behind one buffered reader.

Both kinds are io.BufferedReader objects, so the decoder's many small
reads are served from memory and `peek()` can look for end-of-stream
without consuming anything.
"""

from __future__ import annotations

import contextlib
import sys
from typing import BinaryIO, Iterator, Optional

from ._constants import PROG, STDIN_NOTE
from ._errors import ERR_IO, CborSeqError


def open_file(path: str) -> BinaryIO:
    """Open `path` for buffered binary reading.

    Raises CborSeqError(ERR_IO) if the file cannot be opened.
    """
    try:
        return open(path, "rb")
    except FileNotFoundError as e:
        raise CborSeqError(ERR_IO, "cannot open {}: not found".format(path)) from e
    except PermissionError as e:
        raise CborSeqError(ERR_IO, "cannot open {}: permission denied".format(path)) from e
    except OSError as e:
        raise CborSeqError(ERR_IO, "cannot open {}: {}".format(path, e.strerror or e)) from e


def from_console_input() -> BinaryIO:
    """Return the process's standard input as a buffered binary reader."""
    return sys.stdin.buffer


@contextlib.contextmanager
def open_input(path: Optional[str]) -> Iterator[BinaryIO]:
    """Scope a byte source for one pass.

    A named file is closed when the block exits, normally or not.  The
    console is left open; it belongs to the process.
    """
    if path is None:
        print("{}: {}".format(PROG, STDIN_NOTE), file=sys.stderr)
        yield from_console_input()
        return

    fp = open_file(path)
    try:
        yield fp
    finally:
        fp.close()


def at_end(fp: BinaryIO) -> bool:
    """True when no byte remains at the current position of `fp`."""
    peek = getattr(fp, "peek", None)
    if peek is not None:
        return not peek(1)
    # Unbuffered but seekable (e.g. io.BytesIO): look and step back.
    if fp.seekable():
        pos = fp.tell()
        eof = not fp.read(1)
        fp.seek(pos)
        return eof
    raise TypeError(
        "byte source must support peek() or seek(): {}".format(type(fp).__name__))
