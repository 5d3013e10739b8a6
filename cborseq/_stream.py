"""Streaming item decoder over a CBOR sequence.

A CBOR sequence is concatenated, self-delimiting items with no outer
array.  iter_items() pulls them one at a time from a byte source and
yields a DecodeResult per pull.  It is a plain generator: lazy,
forward-only, and single-pass, because the byte source can't rewind.

End of stream is only clean at an item boundary.  Running out of bytes
in the middle of an item is a decode failure like any other.  A failing
read is not: the OS error is raised as CborSeqError(ERR_IO) and ends
the pass.
"""

from __future__ import annotations

from typing import Any, BinaryIO, Iterator, NamedTuple, Optional

from ._decoder import decode_item
from ._errors import ERR_DECODE, ERR_IO, CborSeqError
from ._source import at_end


class DecodeResult(NamedTuple):
    """One pull from the sequence: a value, or the error that replaced it."""

    value: Any
    error: Optional[CborSeqError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _failure(index: int, reason: Any) -> DecodeResult:
    return DecodeResult(None, CborSeqError(ERR_DECODE, "item {}: {}".format(index, reason)))


def iter_items(fp: BinaryIO) -> Iterator[DecodeResult]:
    """Yield a DecodeResult for each top-level item in `fp`.

    The decoder reads no further than the item it is decoding, so the
    position after a success is exactly the start of the next item.
    """
    index = 0
    while True:
        try:
            if at_end(fp):
                return
            value = decode_item(fp)
        except CborSeqError as e:
            yield _failure(index, e)
        except OSError as e:
            raise CborSeqError(
                ERR_IO, "read failed at item {}: {}".format(index, e.strerror or e)) from e
        else:
            yield DecodeResult(value)
        index += 1
