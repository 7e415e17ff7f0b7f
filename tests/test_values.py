import pytest

from values import BencodeDict, kind_of, values_equal


def test_kind_of():
    assert kind_of(b"abc") == "bytes"
    assert kind_of(-3) == "integer"
    assert kind_of([]) == "list"
    assert kind_of(BencodeDict()) == "dict"
    assert kind_of({}) == "dict"


@pytest.mark.parametrize("value", ["abc", True, None, 2.5, (1,)])
def test_kind_of_rejects_other_types(value):
    with pytest.raises(TypeError):
        kind_of(value)


def test_dict_keys_must_be_bytes():
    d = BencodeDict()
    with pytest.raises(TypeError):
        d["name"] = b"x"
    with pytest.raises(TypeError):
        BencodeDict([(1, b"x")])


def test_dict_keeps_insertion_order():
    d = BencodeDict([(b"z", 1), (b"a", 2)])
    assert list(d) == [b"z", b"a"]


def test_values_equal_ignores_key_order():
    a = BencodeDict([(b"x", [1, b"y"]), (b"z", BencodeDict())])
    b = BencodeDict([(b"z", BencodeDict()), (b"x", [1, b"y"])])
    assert values_equal(a, b)


def test_values_equal_compares_structure():
    assert not values_equal([1, 2], [2, 1])
    assert not values_equal([1], [1, 1])
    assert not values_equal(b"1", 1)
    assert not values_equal({b"a": 1}, {b"b": 1})
    assert not values_equal({b"a": 1}, {b"a": 2})
