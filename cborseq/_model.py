"""The CBOR value model.

Decoded items are plain Python objects plus the cbor2 types for what
Python has no native spelling of:

    bool            Bool
    int  >= 0       Unsigned
    int  <  0       Signed
    float           Float
    None            Null
    undefined       Undefined  (the cbor2 singleton)
    str             Unicode
    bytes           Bytes
    list            Array
    CborMap         Map        (ordered pairs, keys of any kind)
    CBORTag         Tag        (tag number + inner value, never resolved)
    CBORSimpleValue unassigned simple values

Tags always stay CBORTag, whatever their number.  That keeps every
item a finite tree: value-sharing tags (28/29) are just tags here, not
back-references.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Iterator, List, Tuple

from cbor2 import CBORSimpleValue, CBORTag, undefined

from ._errors import InternalError

KIND_BOOL = "bool"
KIND_UNSIGNED = "unsigned"
KIND_SIGNED = "signed"
KIND_FLOAT = "float"
KIND_NULL = "null"
KIND_UNDEFINED = "undefined"
KIND_TEXT = "text"
KIND_BYTES = "bytes"
KIND_ARRAY = "array"
KIND_MAP = "map"
KIND_TAG = "tag"
KIND_SIMPLE = "simple"


class CborMap:
    """A CBOR map as it appeared on the wire.

    Keys may be any model value, including arrays and other maps, and
    duplicate keys are kept.  None of that fits a dict, so the map is an
    ordered list of (key, value) pairs.
    """

    __slots__ = ("pairs",)

    def __init__(self, pairs: Iterable[Tuple[Any, Any]] = ()) -> None:
        self.pairs: List[Tuple[Any, Any]] = list(pairs)

    def items(self) -> Iterator[Tuple[Any, Any]]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CborMap):
            return self.pairs == other.pairs
        return NotImplemented

    def __repr__(self) -> str:
        return "CborMap({!r})".format(self.pairs)


def kind_of(value: Any) -> str:
    """Name the model variant of a decoded value.

    Raises InternalError for anything outside the model.
    """
    # bool before int: isinstance(True, int) is True.
    if isinstance(value, bool):
        return KIND_BOOL

    # Simple values are namedtuples in cbor2, so check before tuple.
    if isinstance(value, CBORSimpleValue):
        return KIND_SIMPLE

    if isinstance(value, int):
        return KIND_UNSIGNED if value >= 0 else KIND_SIGNED

    if isinstance(value, float):
        return KIND_FLOAT

    if value is None:
        return KIND_NULL

    if value is undefined:
        return KIND_UNDEFINED

    if isinstance(value, str):
        return KIND_TEXT

    if isinstance(value, (bytes, bytearray)):
        return KIND_BYTES

    if isinstance(value, (list, tuple)):
        return KIND_ARRAY

    # Plain mappings are accepted too, for callers building values by hand.
    if isinstance(value, (CborMap, Mapping)):
        return KIND_MAP

    if isinstance(value, CBORTag):
        return KIND_TAG

    raise InternalError(
        "value outside the CBOR model: {}".format(type(value).__name__))
