"""CBOR value → display tree (the JSON model), and its text rendering.

Type mapping:
    Bool         → boolean
    Unsigned     → number (exact, arbitrary size)
    Signed       → number (exact, arbitrary size)
    Float        → number; NaN and ±Infinity → null
    Null         → null
    Undefined    → null     (the null/undefined distinction is lost)
    Unicode      → string, verbatim
    Bytes        → string, standard base64 with padding
    Array        → array, order preserved
    Map          → object, keys stringified, insertion order preserved
    Tag          → the tagged value; the tag number is dropped, whatever
                   the number (tag 1 epoch stays a number, tag 2
                   bignum stays base64 bytes)
    Simple       → number

Every ambiguous case has exactly one answer.  Bytes in particular are
not recoverable from the output without knowing they were bytes: "aGk="
could be the text "aGk=" or the two bytes 0x68 0x69.

The display tree is plain Python data — bool, int, float, None, str,
list, and dict with str keys — so json.dumps() renders it directly.
"""

from __future__ import annotations

import base64
import json
import math
from typing import Any, Dict, List, Union

from ._constants import DISPLAY_INDENT, KEY_SEPARATORS
from ._errors import InternalError
from ._model import (
    KIND_ARRAY,
    KIND_BOOL,
    KIND_BYTES,
    KIND_FLOAT,
    KIND_MAP,
    KIND_NULL,
    KIND_SIGNED,
    KIND_SIMPLE,
    KIND_TAG,
    KIND_TEXT,
    KIND_UNDEFINED,
    KIND_UNSIGNED,
    kind_of,
)

DisplayTree = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]


def to_display_tree(value: Any) -> DisplayTree:
    """Convert one decoded CBOR value into the display model.

    Pure and total over the CBOR model: no I/O, no error return.  A value
    outside the model raises InternalError from kind_of().
    """
    kind = kind_of(value)

    if kind == KIND_BOOL:
        return value

    # int() strips any int subclass so the tree holds plain numbers.
    if kind in (KIND_UNSIGNED, KIND_SIGNED):
        return int(value)

    if kind == KIND_FLOAT:
        # JSON text has no spelling for NaN or infinities.
        return value if math.isfinite(value) else None

    if kind in (KIND_NULL, KIND_UNDEFINED):
        return None

    if kind == KIND_TEXT:
        return value

    if kind == KIND_BYTES:
        return base64.b64encode(bytes(value)).decode("ascii")

    if kind == KIND_ARRAY:
        return [to_display_tree(item) for item in value]

    if kind == KIND_MAP:
        out: Dict[str, Any] = {}
        for k, v in value.items():
            # Colliding keys: last write wins, first position is kept.
            out[display_key(k)] = to_display_tree(v)
        return out

    if kind == KIND_TAG:
        return to_display_tree(value.value)

    if kind == KIND_SIMPLE:
        return int(value.value)

    raise InternalError("no display rule for kind {!r}".format(kind))


def display_key(key: Any) -> str:
    """Stringify a CBOR map key for use as a display-object key.

    Keys are converted like any other value first.  A result that is
    already a string (text, bytes, a tagged string) is used as is;
    anything else becomes its compact JSON text: 1 → "1", True → "true",
    None → "null", [1, 2] → "[1,2]".
    """
    tree = to_display_tree(key)
    if isinstance(tree, str):
        return tree
    return json.dumps(tree, separators=KEY_SEPARATORS, ensure_ascii=False)


def render(tree: DisplayTree, indent: int = DISPLAY_INDENT) -> str:
    """Pretty-print a display tree.  No trailing newline."""
    return json.dumps(tree, indent=indent, ensure_ascii=False)
