import io
import json

from bencoding import decode
from formatting import format_bytes, format_value, format_values
from values import BencodeDict


def _format(data: bytes) -> str:
    values, _ = decode(data)
    return format_values(values)


def test_format_scalars():
    assert _format(b"5:mango") == '"mango"'
    assert _format(b"i52e") == "52"
    assert _format(b"i-52e") == "-52"


def test_format_lists():
    assert _format(b"le") == "[]"
    assert _format(b"l5:grapei935ee") == '["grape",935]'
    assert _format(b"lli972e9:blueberryee") == '[[972,"blueberry"]]'


def test_format_dicts():
    assert _format(b"de") == "{}"
    assert _format(b"d5:grapei935ee") == '{"grape":935}'
    nested = b"d10:inner_dictd4:key16:value14:key2i42e8:list_keyl5:item15:item2i3eeee"
    assert _format(nested) == (
        '{"inner_dict":{"key1":"value1","key2":42,"list_key":["item1","item2",3]}}'
    )


def test_format_keeps_source_order():
    assert _format(b"d1:bi1e1:ai2ee") == '{"b":1,"a":2}'


def test_format_concatenates_top_level_values():
    assert _format(b"i1e3:abc") == '1"abc"'


def test_format_escapes_json_specials():
    assert format_bytes(b'say "hi"\n') == '"say \\"hi\\"\\n"'
    assert format_bytes(b"\x00") == '"\\u0000"'


def test_format_keeps_utf8_text():
    assert format_bytes("café".encode("utf-8")) == '"café"'


def test_format_escapes_binary_bytes():
    assert format_bytes(b"\xff\x00a") == '"\\u00ff\\u0000a"'


def test_formatted_output_is_json():
    value = BencodeDict([(b"pieces", b"\x01\xfe"), (b"list", [1, b"two"])])
    assert json.loads(format_value(value)) == {"pieces": "\x01\xfe", "list": [1, "two"]}


def test_format_values_writes_to_sink():
    out = io.StringIO()
    assert format_values([[b"grape", 935]], out) is None
    assert out.getvalue() == '["grape",935]'


def test_format_one_bad_byte_escapes_whole_string():
    assert format_bytes("é".encode("utf-8") + b"\xff") == '"\\u00c3\\u00a9\\u00ff"'
