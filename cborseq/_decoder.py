"""Decode one CBOR data item from a byte stream (RFC 8949 §3).

Only well-formedness is checked.  Tags are never interpreted: every tag
comes back as CBORTag(number, value), so a tag whose content a tag
registry would reject (tag 1 around text, tag 37 around three bytes)
still decodes, and the value-sharing tags 28/29 build no references.

Reads are exact.  decode_item() consumes the bytes of one item and
nothing more, so the stream position afterwards is the start of the
next item.
"""

from __future__ import annotations

import struct
from typing import Any, BinaryIO, List, Tuple

from cbor2 import CBORSimpleValue, CBORTag, undefined

from ._constants import (
    INFO_INDEFINITE,
    INFO_UINT8,
    INFO_UINT16,
    INFO_UINT32,
    INFO_UINT64,
    MAJOR_ARRAY,
    MAJOR_BYTES,
    MAJOR_MAP,
    MAJOR_NEGATIVE,
    MAJOR_SIMPLE,
    MAJOR_TAG,
    MAJOR_TEXT,
    MAJOR_UNSIGNED,
    MAX_DEPTH,
    READ_CHUNK,
    SIMPLE_FALSE,
    SIMPLE_NULL,
    SIMPLE_TRUE,
    SIMPLE_UNDEFINED,
)
from ._errors import ERR_DECODE, CborSeqError
from ._model import CborMap

_ARG_FORMATS = {
    INFO_UINT8: ">B",
    INFO_UINT16: ">H",
    INFO_UINT32: ">I",
    INFO_UINT64: ">Q",
}

_FLOAT_FORMATS = {
    INFO_UINT16: ">e",
    INFO_UINT32: ">f",
    INFO_UINT64: ">d",
}

_SIMPLE_CONSTANTS = {
    SIMPLE_FALSE: False,
    SIMPLE_TRUE: True,
    SIMPLE_NULL: None,
    SIMPLE_UNDEFINED: undefined,
}


class _Break:
    """The 0xff stop code; only meaningful inside an indefinite container."""

    def __repr__(self) -> str:
        return "<break>"


_BREAK = _Break()


# ── Raw reads ─────────────────────────────────────────────────

def _read(fp: BinaryIO, n: int) -> bytes:
    """Read exactly n bytes or fail with ERR_DECODE."""
    if n <= READ_CHUNK:
        data = fp.read(n)
        if len(data) != n:
            raise CborSeqError(ERR_DECODE, "truncated item")
        return data
    parts: List[bytes] = []
    remaining = n
    while remaining:
        chunk = fp.read(min(remaining, READ_CHUNK))
        if not chunk:
            raise CborSeqError(ERR_DECODE, "truncated item")
        parts.append(chunk)
        remaining -= len(chunk)
    return b"".join(parts)


def _read_head(fp: BinaryIO) -> Tuple[int, int, int]:
    """Read an initial byte and its argument.

    Returns (major, info, arg).  For info 31 the arg is meaningless and
    the caller decides what indefinite length means for its major type.
    """
    initial = _read(fp, 1)[0]
    major = initial >> 5
    info = initial & 0x1F
    if info < INFO_UINT8:
        return major, info, info
    if info in _ARG_FORMATS:
        fmt = _ARG_FORMATS[info]
        (arg,) = struct.unpack(fmt, _read(fp, struct.calcsize(fmt)))
        return major, info, arg
    if info == INFO_INDEFINITE:
        return major, info, 0
    raise CborSeqError(ERR_DECODE, "reserved additional information {}".format(info))


# ── Items ─────────────────────────────────────────────────────

def decode_item(fp: BinaryIO) -> Any:
    """Decode the next item from fp.

    Raises CborSeqError(ERR_DECODE) when the bytes are not a well-formed
    item, including a lone break byte and nesting deeper than MAX_DEPTH.
    """
    value = _decode_one(fp, 0)
    if value is _BREAK:
        raise CborSeqError(ERR_DECODE, "unexpected break marker")
    return value


def _decode_one(fp: BinaryIO, depth: int) -> Any:
    major, info, arg = _read_head(fp)

    if major == MAJOR_UNSIGNED:
        _definite_only(major, info)
        return arg

    if major == MAJOR_NEGATIVE:
        _definite_only(major, info)
        return -1 - arg

    if major == MAJOR_BYTES:
        if info == INFO_INDEFINITE:
            return _read_chunks(fp, major)
        return _read(fp, arg)

    if major == MAJOR_TEXT:
        if info == INFO_INDEFINITE:
            raw = _read_chunks(fp, major)
        else:
            raw = _read(fp, arg)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CborSeqError(ERR_DECODE, "invalid UTF-8 in text string") from e

    if major == MAJOR_ARRAY:
        _check_depth(depth)
        items: List[Any] = []
        if info == INFO_INDEFINITE:
            while True:
                item = _decode_one(fp, depth + 1)
                if item is _BREAK:
                    return items
                items.append(item)
        for _ in range(arg):
            items.append(_decode_nested(fp, depth + 1))
        return items

    if major == MAJOR_MAP:
        _check_depth(depth)
        pairs: List[Tuple[Any, Any]] = []
        if info == INFO_INDEFINITE:
            while True:
                key = _decode_one(fp, depth + 1)
                if key is _BREAK:
                    return CborMap(pairs)
                pairs.append((key, _decode_nested(fp, depth + 1)))
        for _ in range(arg):
            key = _decode_nested(fp, depth + 1)
            pairs.append((key, _decode_nested(fp, depth + 1)))
        return CborMap(pairs)

    if major == MAJOR_TAG:
        _definite_only(major, info)
        _check_depth(depth)
        return CBORTag(arg, _decode_nested(fp, depth + 1))

    # MAJOR_SIMPLE
    if info < INFO_UINT8:
        if arg in _SIMPLE_CONSTANTS:
            return _SIMPLE_CONSTANTS[arg]
        return CBORSimpleValue(arg)
    if info == INFO_UINT8:
        # Simple values below 32 have a one-byte encoding and nothing else.
        if arg < 32:
            raise CborSeqError(ERR_DECODE, "invalid two-byte simple value {}".format(arg))
        return CBORSimpleValue(arg)
    if info in _FLOAT_FORMATS:
        fmt = _FLOAT_FORMATS[info]
        # The head read consumed the payload as an integer; repack it.
        (value,) = struct.unpack(fmt, struct.pack(_ARG_FORMATS[info], arg))
        return value
    return _BREAK


def _decode_nested(fp: BinaryIO, depth: int) -> Any:
    """Decode an item where a break is not allowed."""
    value = _decode_one(fp, depth)
    if value is _BREAK:
        raise CborSeqError(ERR_DECODE, "unexpected break marker")
    return value


def _read_chunks(fp: BinaryIO, major: int) -> bytes:
    """Concatenate the definite chunks of an indefinite byte/text string."""
    parts: List[bytes] = []
    while True:
        chunk_major, info, arg = _read_head(fp)
        if chunk_major == MAJOR_SIMPLE and info == INFO_INDEFINITE:
            return b"".join(parts)
        if chunk_major != major or info == INFO_INDEFINITE:
            raise CborSeqError(
                ERR_DECODE, "indefinite-length string chunk of wrong type")
        parts.append(_read(fp, arg))


def _definite_only(major: int, info: int) -> None:
    if info == INFO_INDEFINITE:
        raise CborSeqError(
            ERR_DECODE, "indefinite length not allowed for major type {}".format(major))


def _check_depth(depth: int) -> None:
    if depth >= MAX_DEPTH:
        raise CborSeqError(ERR_DECODE, "nesting exceeds {} levels".format(MAX_DEPTH))
