import re
from typing import List, Tuple

from errors import DuplicateKey, LimitExceeded, MalformedInput, UnsupportedTag
from values import BencodeDict, DICT, INTEGER, LIST, kind_of

REJECT = "reject"
KEEP_FIRST = "keep-first"
KEEP_LAST = "keep-last"
DUPLICATE_POLICIES = (REJECT, KEEP_FIRST, KEEP_LAST)

DEFAULT_MAX_DEPTH = 256

_INT = ord('i')
_LIST = ord('l')
_DICT = ord('d')
_END = ord('e')

_LENIENT_INT = re.compile(rb"[+-]?[0-9]+")
_STRICT_INT = re.compile(rb"0|-?[1-9][0-9]*")


def pair_entries(flat, duplicate_keys=REJECT, offset=None) -> BencodeDict:
    """
    Second phase of dictionary decoding: turns the flat
    key, value, key, value ... sequence into a BencodeDict.
    """
    if len(flat) % 2 != 0:
        raise MalformedInput("Dictionary has a key without a value", offset)

    result = BencodeDict()
    for position in range(0, len(flat), 2):
        key = flat[position]
        if not isinstance(key, bytes):
            raise MalformedInput(
                f"Dictionary key #{position // 2} is {kind_of(key)}, expected a string", offset
            )
        if key in result:
            if duplicate_keys == REJECT:
                raise DuplicateKey(key, offset)
            if duplicate_keys == KEEP_FIRST:
                continue
        result[key] = flat[position + 1]
    return result


class Decoder:
    """
    Decodes Bencoded data (d, l, i, s) used in torrent files.
    Uses a recursive descent parser: lists and dictionaries re-enter the
    same sequence routine, which stops at the first 'e' on its own level.

    String payloads are copied out of the input, so the decoded tree does
    not keep the input buffer alive.
    """
    def __init__(self, data, duplicate_keys=REJECT, max_depth=DEFAULT_MAX_DEPTH,
                 max_size=None, strict=False):
        if duplicate_keys not in DUPLICATE_POLICIES:
            raise ValueError(
                f"duplicate_keys must be one of {', '.join(DUPLICATE_POLICIES)}, not {duplicate_keys!r}"
            )
        if isinstance(data, str):
            data = data.encode('utf-8')
        self._data = bytes(data)
        self._duplicate_keys = duplicate_keys
        self._max_depth = max_depth
        self._max_size = max_size
        self._strict = strict
        self._int_pattern = _STRICT_INT if strict else _LENIENT_INT

    def decode(self) -> Tuple[List, int]:
        """
        Main entry point for decoding.
        Returns every top-level value and the number of bytes consumed.
        """
        values, consumed, _ = self._decode_top()
        return values, consumed

    def decode_one(self):
        """Decodes input that must hold exactly one value and nothing else."""
        values, consumed, terminated = self._decode_top()
        if not values:
            raise MalformedInput("No value in input", 0)
        if len(values) > 1:
            raise MalformedInput(f"Expected one value, found {len(values)}")
        if terminated:
            raise MalformedInput("Unexpected 'e' outside a list or dictionary", consumed - 1)
        if consumed != len(self._data):
            raise MalformedInput("Trailing data after the value", consumed)
        return values[0]

    def _decode_top(self):
        if self._max_size is not None and len(self._data) > self._max_size:
            raise LimitExceeded(
                f"Input is {len(self._data)} bytes, limit is {self._max_size}"
            )
        try:
            return self._decode_sequence(0, depth=0)
        except RecursionError:
            raise LimitExceeded("Input is nested too deeply for the interpreter") from None

    def _decode_sequence(self, start, depth):
        """Returns (values, bytes consumed, whether an 'e' ended the run)."""
        data = self._data
        index = start
        values = []

        while index < len(data):
            tag = data[index]

            if tag == _END:
                return values, index + 1 - start, True
            elif 0x30 <= tag <= 0x39:
                value, index = self._decode_string(index)
            elif tag == _INT:
                value, index = self._decode_int(index)
            elif tag == _LIST:
                value, consumed = self._decode_nested(index, depth, "list")
                index += consumed + 1
            elif tag == _DICT:
                flat, consumed = self._decode_nested(index, depth, "dictionary")
                value = pair_entries(flat, self._duplicate_keys, index)
                index += consumed + 1
            else:
                raise UnsupportedTag(tag, index)

            values.append(value)

        return values, index - start, False

    def _decode_nested(self, index, depth, what):
        if self._max_depth is not None and depth >= self._max_depth:
            raise LimitExceeded(f"Nesting deeper than {self._max_depth} levels", index)

        items, consumed, terminated = self._decode_sequence(index + 1, depth + 1)
        if not terminated:
            raise MalformedInput(f"Unterminated {what}: closing 'e' not found", index)
        return items, consumed

    def _decode_int(self, index):
        end = self._data.find(b'e', index + 1)
        if end == -1:
            raise MalformedInput("Invalid integer format: closing 'e' not found", index)

        digits = self._data[index + 1:end]
        if not self._int_pattern.fullmatch(digits):
            raise MalformedInput(f"Invalid integer {digits!r}", index)
        return int(digits), end + 1

    def _decode_string(self, index):
        colon = self._data.find(b':', index)
        if colon == -1:
            raise MalformedInput("Invalid string format: missing ':'", index)

        length_bytes = self._data[index:colon]
        if not length_bytes.isdigit():
            raise MalformedInput(f"Invalid string length {length_bytes!r}", index)
        if self._strict and len(length_bytes) > 1 and length_bytes.startswith(b'0'):
            raise MalformedInput(f"String length {length_bytes!r} has leading zeros", index)

        start = colon + 1
        end = start + int(length_bytes)
        if end > len(self._data):
            raise MalformedInput("String length exceeds remaining data", index)
        return self._data[start:end], end


class Encoder:
    """Encodes Python objects back into canonical Bencoded bytes."""
    @staticmethod
    def encode(data) -> bytes:
        chunks = []
        Encoder._encode_into(data, chunks)
        return b"".join(chunks)

    @staticmethod
    def encode_many(values) -> bytes:
        chunks = []
        for value in values:
            Encoder._encode_into(value, chunks)
        return b"".join(chunks)

    @staticmethod
    def _encode_into(data, chunks):
        kind = kind_of(data)

        if kind == INTEGER:
            chunks.append(f"i{data}e".encode())
        elif kind == LIST:
            chunks.append(b"l")
            for item in data:
                Encoder._encode_into(item, chunks)
            chunks.append(b"e")
        elif kind == DICT:
            for key in data:
                if not isinstance(key, bytes):
                    raise TypeError(f"Dictionary keys must be bytes, not {type(key).__name__}")
            chunks.append(b"d")
            # Bencoding requires dict keys to be sorted lexicographically
            for key, value in sorted(data.items(), key=lambda item: item[0]):
                chunks.append(f"{len(key)}:".encode() + key)
                Encoder._encode_into(value, chunks)
            chunks.append(b"e")
        else:
            chunks.append(f"{len(data)}:".encode() + data)


def decode(data, **options) -> Tuple[List, int]:
    return Decoder(data, **options).decode()


def decode_one(data, **options):
    return Decoder(data, **options).decode_one()


def encode(value) -> bytes:
    return Encoder.encode(value)
