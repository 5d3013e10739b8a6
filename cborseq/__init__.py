"""cborseq — inspect CBOR sequences.

Read concatenated CBOR items from a byte stream and either print each
one as pretty JSON text (dump) or re-emit the first good one as raw
CBOR (head).

Quick start:
    >>> from cborseq import dump_bytes, head_bytes
    >>> print(dump_bytes(bytes.fromhex("a20161616162626869")))
    {
      "1": "a",
      "b": "hi"
    }
    >>> head_bytes(b"\\x1c" + b"\\x05" + b"\\x06")
    b'\\x05'

The two stages treat bad items differently, on purpose.  dump stops at
the first malformed item and raises; head skips malformed items and
keeps looking for a good one.
"""

from __future__ import annotations

import io
from typing import BinaryIO

import cbor2

from ._constants import MAJOR_MAP
from ._decoder import decode_item
from ._display import DisplayTree, display_key, render, to_display_tree
from ._errors import ERR_DECODE, ERR_IO, CborSeqError, InternalError
from ._model import CborMap, kind_of
from ._source import at_end, from_console_input, open_file, open_input
from ._stream import DecodeResult, iter_items

__version__ = "0.1.0"

__all__ = [
    # Terminal stages
    "dump_sequence",
    "head_sequence",
    "dump_bytes",
    "head_bytes",
    # Building blocks
    "iter_items",
    "decode_item",
    "DecodeResult",
    "to_display_tree",
    "display_key",
    "render",
    "kind_of",
    "CborMap",
    "DisplayTree",
    # Byte sources
    "open_file",
    "from_console_input",
    "open_input",
    "at_end",
    # Exceptions
    "CborSeqError",
    "InternalError",
    # Error codes
    "ERR_IO",
    "ERR_DECODE",
]


# ── Terminal stages ───────────────────────────────────────────

def dump_sequence(fp: BinaryIO, out: BinaryIO) -> int:
    """Write every item of `fp` to `out` as pretty JSON text (UTF-8).

    Items are written back to back with nothing in between.  The first
    decode failure is raised as CborSeqError(ERR_DECODE); whatever was
    written before it stays written.  Returns the number of items.
    """
    count = 0
    for item in iter_items(fp):
        if not item.ok:
            raise item.error
        out.write(render(to_display_tree(item.value)).encode("utf-8"))
        out.flush()
        count += 1
    return count


def head_sequence(fp: BinaryIO, out: BinaryIO) -> bool:
    """Re-encode the first decodable item of `fp` onto `out`.

    Malformed items are skipped silently.  Nothing past the first good
    item is read.  Returns False, having written nothing, when the
    stream holds no decodable item.
    """
    first = next((item for item in iter_items(fp) if item.ok), None)
    if first is None:
        return False
    cbor2.dump(first.value, out, default=_encode_map)
    out.flush()
    return True


def _encode_map(encoder: cbor2.CBOREncoder, value: object) -> None:
    """Encode a CborMap pair by pair, duplicates and all."""
    if not isinstance(value, CborMap):
        raise InternalError(
            "cannot re-encode {}".format(type(value).__name__))
    encoder.encode_length(MAJOR_MAP, len(value))
    for k, v in value.items():
        encoder.encode(k)
        encoder.encode(v)


# ── In-memory convenience ─────────────────────────────────────

def dump_bytes(data: bytes) -> str:
    """dump_sequence() over an in-memory CBOR sequence; returns the text."""
    out = io.BytesIO()
    dump_sequence(io.BufferedReader(io.BytesIO(data)), out)
    return out.getvalue().decode("utf-8")


def head_bytes(data: bytes) -> bytes:
    """head_sequence() over an in-memory CBOR sequence; returns the bytes."""
    out = io.BytesIO()
    head_sequence(io.BufferedReader(io.BytesIO(data)), out)
    return out.getvalue()
