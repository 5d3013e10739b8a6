"""cborseq error codes and exception classes.

Two failure families reach the caller:

    ERR_IO      the byte source could not be opened or read
    ERR_DECODE  a malformed or truncated CBOR item

Both travel as CborSeqError with a `.code` attribute, which is what the
CLI prints and what tests compare against.  A value outside the known
model is a different animal: InternalError means the decoder and the
converter disagree about the supported types, and nothing catches it.
"""

from __future__ import annotations

ERR_IO: str = "ERR_IO"            # file not found, permission denied, read error
ERR_DECODE: str = "ERR_DECODE"    # malformed bytes or truncated item


class CborSeqError(Exception):
    """Exception for recoverable cborseq failures.

    The `.code` attribute is one of the ERR_* strings above.
    """

    def __init__(self, code: str, msg: str = "") -> None:
        super().__init__(msg or code)
        self.code = code


class InternalError(RuntimeError):
    """A decoded value fell outside the CBOR value model."""
