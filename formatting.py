"""
Renders decoded values as JSON-compatible text.

Strings that are valid UTF-8 are written as JSON text; anything else is
escaped one byte at a time (each non-ASCII byte becomes a \\u00XX escape),
so binary payloads such as piece hashes never make the formatter fail.
The choice is made per string: a single invalid byte sends the whole string
down the byte path, so UTF-8 text around it shows up as one escape per
byte ("é" becomes \\u00c3\\u00a9).
Dictionaries keep their stored order.
"""
import io
import json

from values import BYTES, DICT, INTEGER, LIST, kind_of


def format_bytes(data: bytes) -> str:
    try:
        return json.dumps(data.decode('utf-8'), ensure_ascii=False)
    except UnicodeDecodeError:
        # latin-1 maps every byte to the code point of the same value
        return json.dumps(data.decode('latin-1'), ensure_ascii=True)


def _write_value(value, out):
    kind = kind_of(value)

    if kind == BYTES:
        out.write(format_bytes(value))
    elif kind == INTEGER:
        out.write(str(value))
    elif kind == LIST:
        out.write("[")
        for position, item in enumerate(value):
            if position:
                out.write(",")
            _write_value(item, out)
        out.write("]")
    elif kind == DICT:
        out.write("{")
        for position, (key, item) in enumerate(value.items()):
            if position:
                out.write(",")
            out.write(format_bytes(key))
            out.write(":")
            _write_value(item, out)
        out.write("}")


def format_value(value) -> str:
    out = io.StringIO()
    _write_value(value, out)
    return out.getvalue()


def format_values(values, out=None):
    """
    Formats a sequence of top-level values, back to back with no separator.
    Writes into out when given, otherwise returns the text.
    """
    if out is not None:
        for value in values:
            _write_value(value, out)
        return None

    buffer = io.StringIO()
    format_values(values, buffer)
    return buffer.getvalue()
