"""
Python representation of decoded bencode values.

    string      -> bytes
    integer     -> int
    list        -> list
    dictionary  -> BencodeDict (keys are bytes, parse order preserved)
"""
from collections import OrderedDict
from typing import List, Union

BencodeValue = Union[bytes, int, List["BencodeValue"], "BencodeDict"]

BYTES = "bytes"
INTEGER = "integer"
LIST = "list"
DICT = "dict"


class BencodeDict(OrderedDict):
    """
    An ordered bencode dictionary.
    Iteration follows the order the keys were inserted (the source order for
    decoded data); only the Encoder sorts.
    """

    def __setitem__(self, key, value):
        if not isinstance(key, bytes):
            raise TypeError(f"Dictionary keys must be bytes, not {type(key).__name__}")
        super().__setitem__(key, value)

    def __repr__(self):
        return f"BencodeDict({list(self.items())!r})"


def kind_of(value) -> str:
    """Returns the bencode variant of value, or raises TypeError."""
    # bool is an int subclass but has no bencode form
    if isinstance(value, bool):
        raise TypeError("bool is not a bencode value")
    if isinstance(value, bytes):
        return BYTES
    if isinstance(value, int):
        return INTEGER
    if isinstance(value, list):
        return LIST
    if isinstance(value, dict):
        return DICT
    raise TypeError(f"{type(value).__name__} is not a bencode value")


def values_equal(a, b) -> bool:
    """Structural equality that ignores dictionary key order."""
    kind = kind_of(a)
    if kind != kind_of(b):
        return False

    if kind == LIST:
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    if kind == DICT:
        if set(a) != set(b):
            return False
        return all(values_equal(a[k], b[k]) for k in a)
    return a == b
