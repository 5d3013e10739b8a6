"""cborseq constants — program identity, display format, decoder tuning.

Nothing here is configurable at run time.  The CLI takes no config files
or environment variables; every knob below is fixed so that output is
reproducible across machines.
"""

from __future__ import annotations

PROG: str = "cbor"

# Advisory note written to stderr when no FILE argument is given.
STDIN_NOTE: str = "FILE not provided, reading from STDIN"

# ── Display (JSON) output ────────────────────────────────────
DISPLAY_INDENT: int = 2

# Non-string map keys are rendered as compact JSON text: 1 -> "1",
# [1, 2] -> "[1,2]".
KEY_SEPARATORS = (",", ":")

# ── CBOR major types (RFC 8949 §3.1) ─────────────────────────
MAJOR_UNSIGNED: int = 0
MAJOR_NEGATIVE: int = 1
MAJOR_BYTES: int = 2
MAJOR_TEXT: int = 3
MAJOR_ARRAY: int = 4
MAJOR_MAP: int = 5
MAJOR_TAG: int = 6
MAJOR_SIMPLE: int = 7

# Additional-information values with a fixed meaning.
INFO_UINT8: int = 24
INFO_UINT16: int = 25
INFO_UINT32: int = 26
INFO_UINT64: int = 27
INFO_INDEFINITE: int = 31

# Major type 7: values 20-23 are named, 25-27 are floats.
SIMPLE_FALSE: int = 20
SIMPLE_TRUE: int = 21
SIMPLE_NULL: int = 22
SIMPLE_UNDEFINED: int = 23

# ── Decoder limits ───────────────────────────────────────────
# Containers and tags nest at most this deep.  Deeper items are
# rejected as decode failures rather than exhausting the Python stack
# in the decoder, the converter or the encoder.
MAX_DEPTH: int = 200

# Byte and text strings are read in chunks of at most this size, so a
# bogus 2**64 length fails on end-of-stream instead of on allocation.
READ_CHUNK: int = 65_536
